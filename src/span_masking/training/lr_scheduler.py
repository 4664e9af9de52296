"""Learning-rate schedules for pretraining."""

from typing import Any, Dict, Optional

import torch


class PolynomialDecay:
    """
    Linear warmup followed by polynomial decay to `end_lr`.

    The step counter starts at 1. During warmup the rate grows linearly to
    `start_lr`, then decays as (1 - progress)^power until `total_steps`, after
    which it stays at `end_lr`.

    Args:
        start_lr: Peak learning rate reached at the end of warmup
        end_lr: Final learning rate
        power: Exponent of the decay
        total_steps: Step at which the rate reaches `end_lr`
        num_warmup_steps: Number of warmup steps
    """

    def __init__(
        self,
        start_lr: float,
        end_lr: float,
        power: float,
        total_steps: int,
        num_warmup_steps: int,
    ):
        self.start_lr = start_lr
        self.end_lr = end_lr
        self.power = power
        self.warmup_factor = 1.0 / num_warmup_steps if num_warmup_steps > 0 else 1.0
        self.total_steps = total_steps
        self.num_warmup_steps = num_warmup_steps
        self.current_step = 1

    def step(self, optimizer: Optional[torch.optim.Optimizer] = None) -> float:
        """
        Advance the schedule by one step.

        Args:
            optimizer: If given, every param group gets the new rate

        Returns:
            Learning rate for this step
        """
        lr = self._next_lr()
        if optimizer is not None:
            for group in optimizer.param_groups:
                group["lr"] = lr
        return lr

    def _next_lr(self) -> float:
        if self.current_step >= self.total_steps:
            return self.end_lr

        if self.current_step <= self.num_warmup_steps:
            self.warmup_factor = self.current_step / self.num_warmup_steps
            self.current_step += 1
            return self.warmup_factor * self.start_lr

        progress = (self.current_step - self.num_warmup_steps) / (self.total_steps - self.num_warmup_steps)
        decay = (1.0 - progress) ** self.power
        lr = (self.start_lr - self.end_lr) * decay + self.end_lr

        self.current_step += 1
        return lr

    def state_dict(self) -> Dict[str, Any]:
        return {
            "start_lr": self.start_lr,
            "end_lr": self.end_lr,
            "power": self.power,
            "warmup_factor": self.warmup_factor,
            "num_warmup_steps": self.num_warmup_steps,
            "total_steps": self.total_steps,
            "current_step": self.current_step,
        }

    def load_state_dict(self, state_dict: Dict[str, Any]) -> None:
        self.start_lr = state_dict["start_lr"]
        self.end_lr = state_dict["end_lr"]
        self.power = state_dict["power"]
        self.warmup_factor = state_dict["warmup_factor"]
        self.num_warmup_steps = state_dict["num_warmup_steps"]
        self.total_steps = state_dict["total_steps"]
        self.current_step = state_dict["current_step"]
