from .version import __version__ as __version__

__title__ = "StoreSearch"
__description__ = "Search the store catalog and rank the results."
__license__ = "Apache-2.0"
