"""
Span Masking

PyTorch span (block) masking of padded hidden-state batches for
self-supervised sequence pretraining.

Example usage:

    # Functional API
    import torch
    from span_masking import MaskConfig, SpanMask, apply_mask, compute_mask

    hidden = torch.randn(2, 50, 256)
    generator = torch.Generator().manual_seed(0)
    strategy = SpanMask(MaskConfig(mask_prob=0.65, span_len=10, min_spans=2))

    mask = compute_mask(strategy, (2, 50), [50, 32], generator=generator)
    masked = apply_mask(hidden, mask, torch.zeros(256))

    # As a layer with a learned mask embedding
    from span_masking import SpanMasking, SpanMaskingConfig

    layer = SpanMasking(SpanMaskingConfig(hidden_size=256))
    output = layer(hidden, seq_lens=[50, 32])
"""

__version__ = "0.1.0"

# Masking core
from .masking import (
    AllMask,
    InvalidConfigError,
    InverseSpanMask,
    MaskConfig,
    NoneMask,
    RandomMask,
    ShapeMismatchError,
    SpanMask,
    apply_mask,
    build_mask,
    compute_mask,
    get_strategy,
    num_masked_spans,
    sample_span_starts,
)

# Layer
from .modeling import SpanMasking, SpanMaskingConfig

# Data
from .data import MappedDataset, map_dataset, pad_collate

# Training utilities
from .training import PolynomialDecay, cosine_similarity, l2_norm, scale_gradients

__all__ = [
    # Version
    "__version__",
    # Masking
    "MaskConfig",
    "InvalidConfigError",
    "ShapeMismatchError",
    "NoneMask",
    "AllMask",
    "SpanMask",
    "InverseSpanMask",
    "RandomMask",
    "get_strategy",
    "compute_mask",
    "apply_mask",
    "build_mask",
    "num_masked_spans",
    "sample_span_starts",
    # Layer
    "SpanMasking",
    "SpanMaskingConfig",
    # Data
    "MappedDataset",
    "map_dataset",
    "pad_collate",
    # Training
    "PolynomialDecay",
    "l2_norm",
    "cosine_similarity",
    "scale_gradients",
]
