from .builder import build_mask, clamp_span_indices, span_indices
from .config import InvalidConfigError, MaskConfig, ShapeMismatchError
from .sampler import num_masked_spans, sample_span_starts
from .strategies import (
    AllMask,
    InverseSpanMask,
    MaskingStrategy,
    NoneMask,
    RandomMask,
    SpanMask,
    apply_mask,
    compute_mask,
    get_strategy,
)

__all__ = [
    "MaskConfig",
    "InvalidConfigError",
    "ShapeMismatchError",
    "num_masked_spans",
    "sample_span_starts",
    "span_indices",
    "clamp_span_indices",
    "build_mask",
    "MaskingStrategy",
    "NoneMask",
    "AllMask",
    "SpanMask",
    "InverseSpanMask",
    "RandomMask",
    "get_strategy",
    "compute_mask",
    "apply_mask",
]
