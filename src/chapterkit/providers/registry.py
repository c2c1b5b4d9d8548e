"""
Registration and lookup of provider client classes.
"""

from __future__ import annotations

from collections.abc import Callable
from importlib import import_module
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from chapterkit.infra.sessions import BaseSession
    from chapterkit.providers.base import BaseMetadataClient
    from chapterkit.schemas import ProviderConfig

    C = TypeVar("C", bound=BaseMetadataClient)

_PROVIDERS_PKG = "chapterkit.providers"


class ProviderHub:
    """Central registry of provider client classes.

    Clients register themselves with :meth:`register_client`. A provider
    that has not been imported yet is loaded on first lookup from:

        chapterkit.providers.<provider_key>.client
    """

    def __init__(self) -> None:
        self._clients: dict[str, type[BaseMetadataClient]] = {}

    def register_client(
        self,
        provider_key: str | None = None,
    ) -> Callable[[type[C]], type[C]]:
        """Decorator for registering a client class."""

        def deco(cls: type[C]) -> type[C]:
            key = (provider_key or cls.__module__.split(".")[-2]).lower()
            self._clients[key] = cls
            return cls

        return deco

    def build_client(
        self,
        provider: str,
        config: ProviderConfig | None = None,
        session: BaseSession | None = None,
        **kwargs: Any,
    ) -> BaseMetadataClient:
        """Instantiate the client registered for ``provider``.

        Raises:
            ValueError: If no client exists for ``provider``.
        """
        cls = self._get_client_cls(provider)
        return cls(config, session=session, **kwargs)

    def providers(self) -> list[str]:
        return sorted(self._clients)

    def _get_client_cls(self, provider: str) -> type[BaseMetadataClient]:
        key = provider.lower()
        if key not in self._clients:
            try:
                import_module(f"{_PROVIDERS_PKG}.{key}.client")
            except ModuleNotFoundError as e:
                raise ValueError(f"Unsupported provider: {provider!r}") from e
        try:
            return self._clients[key]
        except KeyError as e:
            raise ValueError(f"Unsupported provider: {provider!r}") from e


hub = ProviderHub()
