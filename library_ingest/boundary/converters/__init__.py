"""
Document converters: raw upload to normalized plain text.

Exports: Converter, ConverterResolver, LoaderConverterResolver,
PassthroughConverterResolver, file_extension
"""

from .base import Converter, ConverterResolver, file_extension
from .loader_converter import LoaderConverterResolver
from .passthrough import PassthroughConverterResolver

__all__ = [
    "Converter",
    "ConverterResolver",
    "LoaderConverterResolver",
    "PassthroughConverterResolver",
    "file_extension",
]
