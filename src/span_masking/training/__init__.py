from .gradients import cosine_similarity, l2_norm, scale_gradients
from .lr_scheduler import PolynomialDecay

__all__ = [
    "PolynomialDecay",
    "l2_norm",
    "cosine_similarity",
    "scale_gradients",
]
