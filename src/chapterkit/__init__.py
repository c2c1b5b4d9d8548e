from .version import __version__ as __version__

__title__ = "chapterkit"
__description__ = "Book metadata lookup, caching and search ranking."
__license__ = "Apache-2.0"
