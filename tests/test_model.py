"""Tests for the span masking layer."""

import pytest
import torch

from span_masking import AllMask, MaskConfig, NoneMask, SpanMask, SpanMasking, SpanMaskingConfig


@pytest.fixture
def small_config():
    """Small layer config for testing."""
    return SpanMaskingConfig(
        hidden_size=16,
        mask_strategy="span",
        mask_prob=0.5,
        span_len=3,
        min_spans=1,
    )


@pytest.fixture
def layer(small_config):
    return SpanMasking(small_config)


class TestSpanMaskingConfig:
    def test_default_config(self):
        config = SpanMaskingConfig()
        assert config.hidden_size == 768
        assert config.mask_strategy == "span"
        assert config.span_len == 10

    def test_mask_config(self, small_config):
        assert small_config.mask_config() == MaskConfig(mask_prob=0.5, span_len=3, min_spans=1)

    def test_save_and_load(self, small_config, tmp_path):
        small_config.save_pretrained(tmp_path)
        loaded = SpanMaskingConfig.from_pretrained(tmp_path)

        assert loaded.hidden_size == 16
        assert loaded.mask_prob == pytest.approx(0.5)
        assert loaded.mask_config() == small_config.mask_config()


class TestSpanMasking:
    def test_layer_creation(self, layer, small_config):
        assert isinstance(layer.strategy, SpanMask)
        assert layer.mask_emb.shape == (small_config.hidden_size,)

    def test_strategy_from_config(self):
        assert isinstance(SpanMasking(SpanMaskingConfig(hidden_size=4, mask_strategy="none")).strategy, NoneMask)
        assert isinstance(SpanMasking(SpanMaskingConfig(hidden_size=4, mask_strategy="all")).strategy, AllMask)

    def test_forward_pass(self, layer):
        hidden = torch.randn(2, 20, 16)

        output = layer(hidden, seq_lens=[20, 12], generator=torch.Generator().manual_seed(0))

        assert "hidden_states" in output
        assert "mask_time_indices" in output
        assert output["hidden_states"].shape == (2, 20, 16)
        assert output["mask_time_indices"].shape == (2, 20)

    def test_masked_frames_use_embedding(self, layer):
        hidden = torch.randn(2, 20, 16)

        output = layer(hidden, generator=torch.Generator().manual_seed(0))
        mask = output["mask_time_indices"]
        masked = output["hidden_states"]

        assert mask.any()
        num_masked = int(mask.sum().item())
        assert torch.allclose(masked[mask], layer.mask_emb.detach().expand(num_masked, 16))
        assert torch.equal(masked[~mask], hidden[~mask])

    def test_lengths_from_attention_mask(self, layer):
        hidden = torch.randn(2, 20, 16)
        attention_mask = torch.zeros(2, 20, dtype=torch.bool)
        attention_mask[0, :20] = True
        attention_mask[1, :9] = True

        output = layer(hidden, attention_mask=attention_mask, generator=torch.Generator().manual_seed(0))

        assert not output["mask_time_indices"][1, 9:].any()

    def test_precomputed_mask(self, layer):
        hidden = torch.randn(1, 6, 16)
        mask = torch.tensor([[True, False, False, False, False, True]])

        output = layer(hidden, mask_time_indices=mask)

        assert torch.equal(output["mask_time_indices"], mask)
        assert torch.equal(output["hidden_states"][0, 1:5], hidden[0, 1:5])

    def test_none_strategy_is_identity(self):
        layer = SpanMasking(SpanMaskingConfig(hidden_size=8, mask_strategy="none"))
        hidden = torch.randn(3, 10, 8)

        output = layer(hidden)

        assert torch.equal(output["hidden_states"], hidden)

    def test_mask_embedding_receives_gradient(self, layer):
        hidden = torch.randn(2, 20, 16)

        output = layer(hidden, generator=torch.Generator().manual_seed(1))
        output["hidden_states"].sum().backward()

        assert layer.mask_emb.grad is not None
        assert layer.mask_emb.grad.abs().sum() > 0

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            SpanMasking(SpanMaskingConfig(hidden_size=8, mask_strategy="invalid"))
