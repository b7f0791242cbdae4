"""
Shortlink: map long URLs to collision-free short codes and redirect back.
"""

__version__ = "1.0.0"
