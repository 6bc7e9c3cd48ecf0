"""
app/mappers package marker.
"""

from app.mappers.header_mapper import COLUMN_KEYS, HeaderMapper, HeaderResolution, normalize_header

__all__ = [
    "COLUMN_KEYS",
    "HeaderMapper",
    "HeaderResolution",
    "normalize_header",
]
