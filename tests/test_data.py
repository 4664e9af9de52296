"""Tests for dataset mapping and padding helpers."""

import torch
from torch.utils.data import DataLoader

from span_masking import MappedDataset, map_dataset, pad_collate
from span_masking.data import attention_mask_to_lengths, lengths_to_attention_mask


class TestMappedDataset:
    def test_length_preserved(self):
        dataset = map_dataset(list(range(7)), lambda x: x * 2)

        assert isinstance(dataset, MappedDataset)
        assert len(dataset) == 7

    def test_mapper_applied_on_access(self):
        calls = []

        def mapper(x):
            calls.append(x)
            return x + 1

        dataset = map_dataset([10, 20, 30], mapper)
        assert calls == []

        assert dataset[1] == 21
        assert calls == [20]

    def test_chained_maps(self):
        dataset = map_dataset(map_dataset([1, 2, 3], lambda x: x * 10), str)

        assert [dataset[i] for i in range(len(dataset))] == ["10", "20", "30"]


class TestPaddingHelpers:
    def test_lengths_to_attention_mask(self):
        mask = lengths_to_attention_mask([3, 1, 0], max_len=4)

        assert mask.dtype == torch.bool
        assert mask.tolist() == [
            [True, True, True, False],
            [True, False, False, False],
            [False, False, False, False],
        ]

    def test_default_max_len(self):
        mask = lengths_to_attention_mask(torch.tensor([2, 5]))

        assert mask.shape == (2, 5)

    def test_attention_mask_to_lengths(self):
        attention_mask = torch.tensor([[1, 1, 1, 0], [1, 0, 0, 0]])

        assert attention_mask_to_lengths(attention_mask) == [3, 1]

    def test_pad_collate(self):
        batch = [
            {"hidden_states": torch.ones(5, 3)},
            {"hidden_states": torch.ones(2, 3)},
        ]

        collated = pad_collate(batch)

        assert collated["hidden_states"].shape == (2, 5, 3)
        assert collated["seq_lens"].tolist() == [5, 2]
        assert collated["attention_mask"].sum().item() == 7
        assert (collated["hidden_states"][1, 2:] == 0).all()

    def test_dataloader_integration(self):
        sequences = [torch.randn(n, 4) for n in [6, 3, 8, 5]]
        dataset = map_dataset(sequences, lambda x: {"hidden_states": x})

        loader = DataLoader(dataset, batch_size=2, shuffle=False, collate_fn=pad_collate)
        batches = list(loader)

        assert len(batches) == 2
        assert batches[0]["hidden_states"].shape == (2, 6, 4)
        assert batches[1]["seq_lens"].tolist() == [8, 5]
