"""Text sample parsing."""

from .sample_loader import (
    SampleFormatError,
    DEFAULT_SAMPLE,
    parse_tile,
    parse_direction,
    parse_sample,
    load_sample,
)

__all__ = [
    'SampleFormatError',
    'DEFAULT_SAMPLE',
    'parse_tile',
    'parse_direction',
    'parse_sample',
    'load_sample',
]
