from .visualization import animate_mask_prob, mask_statistics, render_mask

__all__ = [
    "render_mask",
    "mask_statistics",
    "animate_mask_prob",
]
