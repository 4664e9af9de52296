#!/usr/bin/env python
"""Preview span masks for a random padded batch."""

import sys
from pathlib import Path

import hydra
import torch
from omegaconf import DictConfig, OmegaConf

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from span_masking import MaskConfig, compute_mask, get_strategy
from span_masking.utils import animate_mask_prob, mask_statistics, render_mask

# Get absolute path to configs directory
SCRIPT_DIR = Path(__file__).parent.resolve()
CONFIG_PATH = str(SCRIPT_DIR.parent / "configs")


@hydra.main(version_base=None, config_path=CONFIG_PATH, config_name="masking/default")
def main(cfg: DictConfig) -> None:
    """
    Draw random sequence lengths, compute masks and print them.

    Usage:
        python scripts/visualize_masks.py
        python scripts/visualize_masks.py mask_prob=0.3 span_len=4
        python scripts/visualize_masks.py animate=true
    """
    print("Configuration:")
    print(OmegaConf.to_yaml(cfg))

    generator = torch.Generator().manual_seed(cfg.seed)
    seq_lens = torch.randint(cfg.min_len, cfg.seq_len + 1, (cfg.batch_size,), generator=generator).tolist()
    print(f"Sequence lengths: {seq_lens}")

    if cfg.animate:
        animate_mask_prob(
            seq_lens,
            cfg.seq_len,
            span_len=cfg.span_len,
            min_spans=cfg.min_spans,
            num_steps=cfg.animation_steps,
            delay=cfg.animation_delay,
            seed=cfg.seed,
        )
        return

    config = MaskConfig(mask_prob=cfg.mask_prob, span_len=cfg.span_len, min_spans=cfg.min_spans)
    strategy = get_strategy(cfg.mask_strategy, config)
    mask = compute_mask(strategy, (cfg.batch_size, cfg.seq_len), seq_lens, generator=generator)
    stats = mask_statistics(mask, seq_lens)

    print("=" * 80)
    print(render_mask(mask, seq_lens))
    print("=" * 80)
    print(f"Masked fraction (all frames):   {stats['masked_fraction']*100:.1f}%")
    print(f"Masked fraction (valid frames): {stats['masked_fraction_valid']*100:.1f}%")
    print(f"Masked padding frames:          {stats['masked_padding']}")
    print(f"Masked frames per example:      {stats['masked_per_example']:.1f}")


if __name__ == "__main__":
    main()
