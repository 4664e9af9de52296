"""Configuration class for the span masking module."""

from transformers import PretrainedConfig

from ..masking.config import MaskConfig


class SpanMaskingConfig(PretrainedConfig):
    """
    Configuration class for the SpanMasking module.

    Args:
        hidden_size: Feature dimension of the hidden states (size of the mask embedding)
        mask_strategy: One of "none", "all", "span"
        mask_prob: Target fraction of frames to mask with span masking
        span_len: Number of frames in each span
        min_spans: Minimum number of spans per example
    """

    model_type = "span_masking"

    def __init__(
        self,
        hidden_size: int = 768,
        mask_strategy: str = "span",
        mask_prob: float = 0.65,
        span_len: int = 10,
        min_spans: int = 2,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.hidden_size = hidden_size
        self.mask_strategy = mask_strategy
        self.mask_prob = mask_prob
        self.span_len = span_len
        self.min_spans = min_spans

    def mask_config(self) -> MaskConfig:
        """Span policy described by this config."""
        return MaskConfig(
            mask_prob=self.mask_prob,
            span_len=self.span_len,
            min_spans=self.min_spans,
        )
