"""Tensor ops and gradient manipulation used during pretraining."""

import torch
import torch.nn as nn


def l2_norm(tensor: torch.Tensor) -> torch.Tensor:
    """Euclidean norm of the flattened tensor, as a tensor of shape [1]."""
    return tensor.flatten().pow(2).sum().sqrt().reshape(1)


def cosine_similarity(a: torch.Tensor, b: torch.Tensor, dim: int, eps: float = 1e-8) -> torch.Tensor:
    """
    Dot product along `dim` scaled by the norms of the whole tensors.

    Unlike torch.nn.functional.cosine_similarity, the norms are taken over all
    elements of `a` and `b` and treated as constants, so the result keeps a
    size-1 `dim`.

    Args:
        a: First tensor
        b: Second tensor, same shape as `a`
        dim: Dimension to reduce
        eps: Floor applied to each norm

    Returns:
        Similarity tensor with `dim` kept as size 1
    """
    dot = (a * b).sum(dim=dim, keepdim=True)

    norm_a = max(l2_norm(a).item(), eps)
    norm_b = max(l2_norm(b).item(), eps)

    return dot / (norm_a * norm_b)


@torch.no_grad()
def scale_gradients(module: nn.Module, multiplier: float) -> None:
    """
    Multiply the gradient of every parameter of `module` in place.

    Parameters without a gradient are left alone. Call between backward() and
    the optimizer step, e.g. to slow down a feature encoder.
    """
    for param in module.parameters():
        if param.grad is not None:
            param.grad.mul_(multiplier)
