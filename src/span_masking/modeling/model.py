"""Masking layer with a learned mask embedding."""

from typing import Dict, List, Optional, Union

import torch
import torch.nn as nn

from ..data.dataset import attention_mask_to_lengths
from ..masking.strategies import apply_mask, compute_mask, get_strategy
from .configuration import SpanMaskingConfig


class SpanMasking(nn.Module):
    """
    Replaces masked frames of a hidden-state batch with a learned embedding.

    Sits between a feature encoder and a context network during
    self-supervised pretraining.
    """

    def __init__(self, config: SpanMaskingConfig):
        super().__init__()
        self.config = config
        self.strategy = get_strategy(config.mask_strategy, config.mask_config())

        # Learned replacement vector
        self.mask_emb = nn.Parameter(torch.empty(config.hidden_size).uniform_())

    def forward(
        self,
        hidden_states: torch.Tensor,
        seq_lens: Optional[Union[List[int], torch.Tensor]] = None,
        attention_mask: Optional[torch.Tensor] = None,
        mask_time_indices: Optional[torch.Tensor] = None,
        generator: Optional[torch.Generator] = None,
    ) -> Dict[str, torch.Tensor]:
        """
        Mask a batch of hidden states.

        Args:
            hidden_states: Hidden states [B, T, D]
            seq_lens: Valid length of each example
            attention_mask: [B, T] with True/1 on valid frames, used if seq_lens is None
            mask_time_indices: Precomputed boolean mask [B, T]; skips sampling
            generator: Random source for sampling

        Returns:
            Dict with masked "hidden_states" [B, T, D] and "mask_time_indices" [B, T]
        """
        B, T, _ = hidden_states.shape

        if mask_time_indices is None:
            if seq_lens is None:
                if attention_mask is not None:
                    seq_lens = attention_mask_to_lengths(attention_mask)
                else:
                    seq_lens = [T] * B

            mask_time_indices = compute_mask(
                self.strategy,
                (B, T),
                seq_lens,
                device=hidden_states.device,
                generator=generator,
            )

        hidden_states = apply_mask(hidden_states, mask_time_indices, self.mask_emb)

        return {"hidden_states": hidden_states, "mask_time_indices": mask_time_indices}
