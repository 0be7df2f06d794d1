"""
Provides default HTTP headers and user-agent settings used by the
networking layer of StoreSearch.

The catalog API answers with JSON; artwork requests accept any image type.
"""

from storesearch.version import __version__

# -----------------------------------------------------------------------------
# Default preferences & headers
# -----------------------------------------------------------------------------

DEFAULT_USER_AGENT = f"StoreSearch/{__version__}"

ACCEPT_JSON = "application/json, text/javascript;q=0.9, */*;q=0.5"

ACCEPT_IMAGE = "image/avif,image/webp,image/png,image/jpeg,image/*,*/*;q=0.8"

DEFAULT_USER_HEADERS = {
    "Accept": ACCEPT_JSON,
    "Accept-Encoding": "gzip, deflate",
    "Accept-Language": "en;q=0.9",
    "User-Agent": DEFAULT_USER_AGENT,
}
