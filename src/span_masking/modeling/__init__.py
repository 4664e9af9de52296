from .configuration import SpanMaskingConfig
from .model import SpanMasking

__all__ = [
    "SpanMaskingConfig",
    "SpanMasking",
]
