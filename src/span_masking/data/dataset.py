"""Dataset utilities for padded hidden-state batches."""

from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import torch
from torch.nn.utils.rnn import pad_sequence
from torch.utils.data import Dataset


class MappedDataset(Dataset):
    """
    Dataset that applies `mapper` to each item of `dataset` on access.

    Args:
        dataset: Any indexable dataset with a length
        mapper: Function applied to every item
    """

    def __init__(self, dataset: Dataset, mapper: Callable[[Any], Any]):
        self.dataset = dataset
        self.mapper = mapper

    def __len__(self) -> int:
        return len(self.dataset)

    def __getitem__(self, index: int) -> Any:
        return self.mapper(self.dataset[index])


def map_dataset(dataset: Dataset, mapper: Callable[[Any], Any]) -> MappedDataset:
    """Wrap `dataset` so every item goes through `mapper`."""
    return MappedDataset(dataset, mapper)


def lengths_to_attention_mask(
    lengths: Union[Sequence[int], torch.Tensor],
    max_len: Optional[int] = None,
) -> torch.Tensor:
    """
    Build a padding mask from valid lengths.

    Args:
        lengths: Valid length of each example [B]
        max_len: Padded length (defaults to the longest length)

    Returns:
        Boolean tensor [B, max_len] where True = valid frame
    """
    lengths = torch.as_tensor(lengths, dtype=torch.long)
    if max_len is None:
        max_len = int(lengths.max().item()) if lengths.numel() > 0 else 0

    positions = torch.arange(max_len, device=lengths.device)  # [T]
    return positions[None, :] < lengths[:, None]


def attention_mask_to_lengths(attention_mask: torch.Tensor) -> List[int]:
    """Count valid frames per row of a [B, T] padding mask."""
    return attention_mask.long().sum(dim=-1).tolist()


def pad_collate(batch: List[Dict[str, torch.Tensor]]) -> Dict[str, torch.Tensor]:
    """
    Collate variable-length items into a padded batch.

    Args:
        batch: Items with "hidden_states" of shape [T_i, D]

    Returns:
        Dictionary with "hidden_states" [B, T, D], "seq_lens" [B] and
        "attention_mask" [B, T]
    """
    sequences = [item["hidden_states"] for item in batch]
    seq_lens = torch.tensor([seq.shape[0] for seq in sequences], dtype=torch.long)

    hidden_states = pad_sequence(sequences, batch_first=True)

    return {
        "hidden_states": hidden_states,
        "seq_lens": seq_lens,
        "attention_mask": lengths_to_attention_mask(seq_lens, hidden_states.shape[1]),
    }
