"""
Fixed values shared by code generation and request validation.
"""

# 54 symbols: no 0/O/o, 1/l/I/i
ALPHABET = "abcdefghjkmnpqrstuvwxyzABCDEFGHJKMNPQRSTUVWXYZ23456789"

MIN_SHORT_CODE_LENGTH = 6
# Width of the short_code column
MAX_SHORT_CODE_LENGTH = 32
DEFAULT_MAX_ATTEMPTS = 50
MAX_URL_LENGTH = 2048
