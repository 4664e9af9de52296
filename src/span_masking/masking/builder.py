"""Dense mask construction from span start positions."""

from typing import Optional

import torch


def span_indices(starts: torch.Tensor, span_len: int) -> torch.Tensor:
    """
    Expand span starts into the frame indices they cover.

    Args:
        starts: LongTensor [B, S] of start positions
        span_len: Frames per span

    Returns:
        LongTensor [B, S * span_len] with index[b, s * span_len + k] = starts[b, s] + k
    """
    B, S = starts.shape
    offsets = torch.arange(span_len, dtype=torch.long, device=starts.device)  # [span_len]
    indices = starts[:, :, None] + offsets[None, None, :]  # [B, S, span_len]
    return indices.reshape(B, S * span_len)


def clamp_span_indices(indices: torch.Tensor, seq_len: int) -> torch.Tensor:
    """Clamp frame indices into [0, seq_len - 1]."""
    return indices.clamp(min=0, max=seq_len - 1)


def build_mask(
    starts: torch.Tensor,
    seq_len: int,
    span_len: int,
    device: Optional[torch.device] = None,
) -> torch.Tensor:
    """
    Scatter spans into a dense boolean mask.

    Padding spans and overlapping spans write the same frames again, which
    leaves the mask unchanged.

    Args:
        starts: LongTensor [B, S] of start positions
        seq_len: Padded sequence length
        span_len: Frames per span
        device: Device of the returned mask (defaults to that of `starts`)

    Returns:
        Boolean tensor [B, seq_len] where True = masked
    """
    device = device if device is not None else starts.device
    B, S = starts.shape

    mask = torch.zeros(B, seq_len, dtype=torch.long, device=device)
    if S == 0:
        return mask.bool()

    indices = clamp_span_indices(span_indices(starts.to(device), span_len), seq_len)
    mask = mask.scatter(1, indices, torch.ones_like(indices))

    return mask.bool()
