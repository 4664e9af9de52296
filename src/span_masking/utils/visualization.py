"""Visualization utilities for span masks."""

import os
import time
from typing import Dict, Optional, Sequence, Union

import torch

from ..masking.config import MaskConfig
from ..masking.strategies import SpanMask, compute_mask

MASKED = "█"
UNMASKED = "░"
PADDING = "·"


def clear_terminal():
    """Clear the terminal screen."""
    os.system("cls" if os.name == "nt" else "clear")


def render_mask(
    mask: torch.Tensor,
    seq_lens: Optional[Union[Sequence[int], torch.Tensor]] = None,
) -> str:
    """
    Render a [B, T] mask as text, one line per example.

    Masked frames are drawn as full blocks, valid unmasked frames as light
    shade and padding frames as dots.
    """
    B, T = mask.shape
    if seq_lens is None:
        seq_lens = [T] * B
    seq_lens = [int(length) for length in seq_lens]

    lines = []
    for b in range(B):
        row = mask[b].tolist()
        chars = []
        for t in range(T):
            if row[t]:
                chars.append(MASKED)
            elif t < seq_lens[b]:
                chars.append(UNMASKED)
            else:
                chars.append(PADDING)
        lines.append("".join(chars))
    return "\n".join(lines)


def mask_statistics(
    mask: torch.Tensor,
    seq_lens: Optional[Union[Sequence[int], torch.Tensor]] = None,
) -> Dict[str, float]:
    """
    Summarize a [B, T] mask.

    Returns:
        Dict with the overall masked fraction, the masked fraction of valid
        frames, the number of masked padding frames and the mean number of
        masked frames per example
    """
    B, T = mask.shape
    if seq_lens is None:
        seq_lens = [T] * B
    lengths = torch.as_tensor(seq_lens, dtype=torch.long, device=mask.device)

    valid = torch.arange(T, device=mask.device)[None, :] < lengths[:, None]
    num_valid = valid.sum().item()

    return {
        "masked_fraction": mask.float().mean().item() if mask.numel() > 0 else 0.0,
        "masked_fraction_valid": (mask & valid).sum().item() / num_valid if num_valid > 0 else 0.0,
        "masked_padding": (mask & ~valid).sum().item(),
        "masked_per_example": mask.sum(dim=-1).float().mean().item() if B > 0 else 0.0,
    }


def animate_mask_prob(
    seq_lens: Sequence[int],
    seq_len: int,
    span_len: int = 10,
    min_spans: int = 2,
    num_steps: int = 20,
    delay: float = 0.2,
    seed: int = 0,
):
    """
    Animate span masks in the terminal while mask_prob sweeps from 0 to 1.

    The same seed is reused at every step. Each example keeps its earlier
    spans and only gains new ones as mask_prob grows.

    Args:
        seq_lens: Valid length of each example
        seq_len: Padded sequence length
        span_len: Frames per span
        min_spans: Minimum spans per example
        num_steps: Number of animation frames
        delay: Delay between frames (seconds)
        seed: Seed for the random generator
    """
    batch_shape = (len(seq_lens), seq_len)

    for step in range(1, num_steps + 1):
        mask_prob = step / num_steps
        generator = torch.Generator().manual_seed(seed)
        strategy = SpanMask(MaskConfig(mask_prob=mask_prob, span_len=span_len, min_spans=min_spans))
        mask = compute_mask(strategy, batch_shape, seq_lens, generator=generator)
        stats = mask_statistics(mask, seq_lens)

        clear_terminal()
        print(f"mask_prob = {mask_prob:.2f}, span_len = {span_len}, min_spans = {min_spans}")
        print("=" * 80)
        print(render_mask(mask, seq_lens))
        print("=" * 80)
        print(f"Masked (valid frames): {stats['masked_fraction_valid']*100:.1f}%")
        print(f"Masked padding frames: {stats['masked_padding']}")

        time.sleep(delay)

    print("\nMasking animation complete!")
