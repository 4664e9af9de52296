"""Span count and start placement for block masking."""

from typing import List, Optional, Sequence, Tuple, Union

import torch

from .config import InvalidConfigError, MaskConfig, ShapeMismatchError

Lengths = Union[Sequence[int], torch.Tensor]


def num_masked_spans(input_len: int, seq_len: int, config: MaskConfig, eps: float) -> int:
    """
    Number of spans to place in a sequence of `input_len` valid frames.

    The overflow cap uses the padded batch width `seq_len`, while the
    availability cap uses `input_len`. A short sequence in a batch with long ones
    can therefore be given more span frames than it has, with overlapping spans.

    Args:
        input_len: Valid length of this example
        seq_len: Padded length of the batch
        config: Masking policy
        eps: Rounding jitter in [0, 1), shared across the batch

    Returns:
        Non-negative span count
    """
    num_spans = int(config.mask_prob * input_len / config.span_len + eps)
    num_spans = max(num_spans, config.min_spans)

    if num_spans * config.span_len > seq_len:
        num_spans = seq_len // config.span_len

    available = input_len - (config.span_len - 1)
    if available < num_spans:
        num_spans = max(available, 0)

    return num_spans


def check_lengths(batch_shape: Tuple[int, int], seq_lens: Lengths) -> List[int]:
    """Validate per-example lengths against the batch shape and return them as ints."""
    batch, seq_len = batch_shape
    if isinstance(seq_lens, torch.Tensor):
        seq_lens = seq_lens.tolist()

    if len(seq_lens) != batch:
        raise ShapeMismatchError(f"Got {len(seq_lens)} sequence lengths for a batch of {batch}")

    checked = []
    for length in seq_lens:
        if int(length) != length:
            raise ShapeMismatchError(f"Sequence length {length} is not a whole number")
        length = int(length)
        if length < 0 or length > seq_len:
            raise ShapeMismatchError(f"Sequence length {length} is outside [0, {seq_len}]")
        checked.append(length)
    return checked


def sample_span_starts(
    batch_shape: Tuple[int, int],
    seq_lens: Lengths,
    config: MaskConfig,
    generator: Optional[torch.Generator] = None,
    eps: Optional[float] = None,
) -> torch.Tensor:
    """
    Sample span start positions for every example of a padded batch.

    Every row holds exactly `num_masked_spans(seq_len)` entries. Examples that
    drew fewer spans are padded with their first start, or with `seq_len - 1`
    when they drew none.

    Args:
        batch_shape: (batch, seq_len) of the padded batch
        seq_lens: Valid length of each example
        config: Masking policy
        generator: Random source; torch's default generator if None
        eps: Rounding jitter; drawn once from `generator` if None

    Returns:
        LongTensor [batch, max_spans] of start positions
    """
    batch, seq_len = batch_shape
    if config.span_len >= seq_len:
        raise InvalidConfigError(
            f"span_len ({config.span_len}) must be smaller than the sequence length ({seq_len})"
        )
    seq_lens = check_lengths(batch_shape, seq_lens)

    device = generator.device if generator is not None else torch.device("cpu")

    # One draw for the whole batch
    if eps is None:
        eps = torch.rand((), generator=generator, device=device).item()

    max_spans = num_masked_spans(seq_len, seq_len, config, eps)

    # No example can hold more than seq_len // span_len spans, so the draw shape
    # does not depend on mask_prob and a row's first n draws stay fixed as n grows
    uniform = torch.rand(batch, seq_len // config.span_len, generator=generator, device=device)

    rows = []
    for b, input_len in enumerate(seq_lens):
        num_spans = num_masked_spans(input_len, seq_len, config, eps)

        # Uniform over [0, input_len - span_len - 1), truncated toward zero
        high = max(input_len - config.span_len - 1, 0)
        starts = (uniform[b, :num_spans] * high).long()

        dummy_idx = starts[0].item() if num_spans > 0 else seq_len - 1
        padding = torch.full((max(max_spans - num_spans, 0),), dummy_idx, dtype=torch.long, device=device)

        rows.append(torch.cat([starts, padding])[:max_spans])

    if not rows:
        return torch.zeros(0, max_spans, dtype=torch.long, device=device)
    return torch.stack(rows)
