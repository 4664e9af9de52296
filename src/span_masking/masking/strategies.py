"""Masking strategies and the shared mask application step."""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

import torch

from .builder import build_mask
from .config import MaskConfig, ShapeMismatchError
from .sampler import Lengths, check_lengths, sample_span_starts


@dataclass(frozen=True)
class NoneMask:
    """Mask nothing."""


@dataclass(frozen=True)
class AllMask:
    """Mask every frame, padding included."""


@dataclass(frozen=True)
class SpanMask:
    """Contiguous block masking driven by a `MaskConfig`."""

    config: MaskConfig = field(default_factory=MaskConfig)


@dataclass(frozen=True)
class InverseSpanMask:
    """Keep sampled spans and mask everything else. Not implemented yet."""

    config: MaskConfig = field(default_factory=MaskConfig)

    def __post_init__(self):
        raise NotImplementedError("InverseSpanMask is not implemented")


@dataclass(frozen=True)
class RandomMask:
    """Mask independent frames. Not implemented yet."""

    mask_prob: float = 0.15

    def __post_init__(self):
        raise NotImplementedError("RandomMask is not implemented")


MaskingStrategy = Union[NoneMask, AllMask, SpanMask, InverseSpanMask, RandomMask]

STRATEGY_NAMES = ("none", "all", "span")


def get_strategy(name: str, config: Optional[MaskConfig] = None) -> MaskingStrategy:
    """
    Build a strategy from its name.

    Args:
        name: One of "none", "all", "span"
        config: Span policy, used by "span" only

    Returns:
        Masking strategy instance
    """
    if name == "none":
        return NoneMask()
    elif name == "all":
        return AllMask()
    elif name == "span":
        return SpanMask(config if config is not None else MaskConfig())
    elif name == "inverse_span":
        return InverseSpanMask(config if config is not None else MaskConfig())
    elif name == "random":
        return RandomMask()
    else:
        raise ValueError(f"Unknown mask strategy: {name}. Expected one of {STRATEGY_NAMES}")


def compute_mask(
    strategy: MaskingStrategy,
    batch_shape: Tuple[int, int],
    seq_lens: Lengths,
    device: Optional[torch.device] = None,
    generator: Optional[torch.Generator] = None,
) -> torch.Tensor:
    """
    Compute a [batch, seq_len] boolean mask for a padded batch.

    Args:
        strategy: Which frames to mask
        batch_shape: (batch, seq_len) of the padded batch
        seq_lens: Valid length of each example
        device: Device of the returned mask
        generator: Random source for sampling strategies

    Returns:
        Boolean tensor [batch, seq_len] where True = masked
    """
    if isinstance(strategy, NoneMask):
        check_lengths(batch_shape, seq_lens)
        return torch.zeros(batch_shape, dtype=torch.bool, device=device)
    elif isinstance(strategy, AllMask):
        check_lengths(batch_shape, seq_lens)
        return torch.ones(batch_shape, dtype=torch.bool, device=device)
    elif isinstance(strategy, SpanMask):
        starts = sample_span_starts(batch_shape, seq_lens, strategy.config, generator=generator)
        return build_mask(starts, batch_shape[1], strategy.config.span_len, device=device)
    elif isinstance(strategy, (InverseSpanMask, RandomMask)):
        raise NotImplementedError(f"{type(strategy).__name__} is not implemented")
    else:
        raise TypeError(f"Unsupported mask strategy: {strategy!r}")


def apply_mask(hidden: torch.Tensor, mask: torch.Tensor, fill: torch.Tensor) -> torch.Tensor:
    """
    Replace masked frames of `hidden` with `fill`.

    Gradients reach `fill` through masked frames and `hidden` through the
    others, so a learned mask embedding can be passed as `fill`.

    Args:
        hidden: Hidden states [B, T, D]
        mask: Boolean mask [B, T] where True = replace
        fill: Replacement [D] (or anything broadcastable to [B, T, D])

    Returns:
        Masked hidden states [B, T, D]
    """
    if hidden.dim() != 3 or tuple(hidden.shape[:2]) != tuple(mask.shape):
        raise ShapeMismatchError(
            f"Hidden states of shape {tuple(hidden.shape)} do not match mask of shape {tuple(mask.shape)}"
        )

    try:
        fill = fill.to(dtype=hidden.dtype, device=hidden.device).expand(hidden.shape)
    except RuntimeError as e:
        raise ShapeMismatchError(
            f"Fill of shape {tuple(fill.shape)} cannot broadcast to {tuple(hidden.shape)}"
        ) from e

    mask = mask.to(hidden.device).bool()[..., None].expand(hidden.shape)

    return torch.where(mask, fill, hidden)
