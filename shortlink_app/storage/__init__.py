"""
Persistence for URL records.
"""

from .url_store import UrlStore, utcnow

__all__ = [
    "UrlStore",
    "utcnow",
]
