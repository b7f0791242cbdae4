"""
Database models for the URL shortener.

A single transactional table; the access counter lives on the row itself.
"""

from .url import URL

__all__ = ["URL"]
