"""
Codec - CSV and JSON encoding for catalog entities.

One ``Codec`` per entity kind, looked up with ``get_codec``.
"""

from .kinds import CODECS, Codec, get_codec

__all__ = [
    "CODECS",
    "Codec",
    "get_codec",
]
