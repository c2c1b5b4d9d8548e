from __future__ import annotations

from typing import Any

import pytest

from chapterkit.infra.sessions import BACKENDS, create_session
from chapterkit.infra.sessions.base import BaseSession
from chapterkit.schemas import SessionConfig

SUPPORTED_BACKENDS: set[str] = set(BACKENDS)


def safe_create(backend: str, cfg: SessionConfig | None, **kw: Any) -> BaseSession:
    """Create a session, skipping the test when its library is missing."""
    try:
        return create_session(backend, cfg, **kw)
    except ImportError as e:
        pytest.skip(f"backend {backend!r} not installed: {e}")
