from .dataset import (
    MappedDataset,
    attention_mask_to_lengths,
    lengths_to_attention_mask,
    map_dataset,
    pad_collate,
)

__all__ = [
    "MappedDataset",
    "map_dataset",
    "lengths_to_attention_mask",
    "attention_mask_to_lengths",
    "pad_collate",
]
