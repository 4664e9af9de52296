"""Configuration and errors for span masking."""

from dataclasses import dataclass


class InvalidConfigError(ValueError):
    """Raised when a masking configuration cannot be used for the given batch."""


class ShapeMismatchError(ValueError):
    """Raised when tensors or lengths disagree on batch/sequence extents."""


@dataclass(frozen=True)
class MaskConfig:
    """
    Span-masking policy.

    Args:
        mask_prob: Target fraction of frames covered by spans, in (0, 1]
        span_len: Number of contiguous frames in each span
        min_spans: Lower bound on the span count of every example
    """

    mask_prob: float = 0.65
    span_len: int = 10
    min_spans: int = 2

    def __post_init__(self):
        if not 0.0 < self.mask_prob <= 1.0:
            raise InvalidConfigError(f"mask_prob must be in (0, 1], got {self.mask_prob}")
        if self.span_len < 1:
            raise InvalidConfigError(f"span_len must be a positive integer, got {self.span_len}")
        if self.min_spans < 0:
            raise InvalidConfigError(f"min_spans must be non-negative, got {self.min_spans}")
