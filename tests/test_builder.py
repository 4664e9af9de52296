"""Tests for dense mask construction."""

import torch

from span_masking.masking import build_mask, clamp_span_indices, span_indices


class TestSpanIndices:
    def test_expands_offsets(self):
        starts = torch.tensor([[1, 5], [0, 0]])

        indices = span_indices(starts, span_len=3)

        assert indices.tolist() == [[1, 2, 3, 5, 6, 7], [0, 1, 2, 0, 1, 2]]

    def test_empty_spans(self):
        starts = torch.zeros(2, 0, dtype=torch.long)

        assert span_indices(starts, span_len=4).shape == (2, 0)


class TestClampSpanIndices:
    def test_clamps_both_ends(self):
        indices = torch.tensor([[-1, 5, 9, 12]])

        assert clamp_span_indices(indices, seq_len=10).tolist() == [[0, 5, 9, 9]]

    def test_in_range_unchanged(self):
        indices = torch.tensor([[0, 3, 7]])

        assert torch.equal(clamp_span_indices(indices, seq_len=8), indices)


class TestBuildMask:
    def test_marks_span_frames(self):
        starts = torch.tensor([[0, 4]])

        mask = build_mask(starts, seq_len=8, span_len=2)

        assert mask.dtype == torch.bool
        assert mask.tolist() == [[True, True, False, False, True, True, False, False]]

    def test_duplicate_starts_are_idempotent(self):
        starts = torch.tensor([[2, 2, 2]])

        mask = build_mask(starts, seq_len=8, span_len=2)

        assert mask.sum().item() == 2
        assert mask[0, 2] and mask[0, 3]

    def test_overlapping_spans_merge(self):
        starts = torch.tensor([[1, 2]])

        mask = build_mask(starts, seq_len=8, span_len=3)

        assert mask[0].nonzero().flatten().tolist() == [1, 2, 3, 4]

    def test_trailing_dummy_is_clamped(self):
        # Padding start of seq_len - 1 would run past the end without clamping
        starts = torch.tensor([[9, 9]])

        mask = build_mask(starts, seq_len=10, span_len=3)

        assert mask.shape == (1, 10)
        assert mask[0].nonzero().flatten().tolist() == [9]

    def test_no_spans(self):
        starts = torch.zeros(3, 0, dtype=torch.long)

        mask = build_mask(starts, seq_len=6, span_len=2)

        assert mask.shape == (3, 6)
        assert not mask.any()

    def test_count_bounded_by_span_budget(self):
        starts = torch.randint(0, 20, (4, 3))

        mask = build_mask(starts, seq_len=24, span_len=4)

        assert (mask.sum(dim=-1) <= 3 * 4).all()
