"""
Training configuration.

Structure, activation and gradient-descent settings for the perceptron
training loop. No hardcoded values in train.py.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class TrainConfig:
    """Configuration for training an MLP by gradient descent."""

    # Network: neurons per layer, last entry is the output width
    structure: List[int] = field(default_factory=lambda: [4, 4, 1])
    activation: str = "tanh"

    # Gradient descent
    step_size: float = 0.1
    iterations: int = 999

    # Progress logging (INFO every `log_every` iterations)
    log_every: int = 100

    # Seed for parameter initialisation; None draws fresh entropy
    seed: Optional[int] = None

    def __post_init__(self):
        from backprop.perceptron import ACTIVATIONS

        if self.step_size <= 0:
            raise ValueError(f"step_size must be positive, got {self.step_size}")
        if self.iterations < 0:
            raise ValueError(f"iterations must be non-negative, got {self.iterations}")
        if self.log_every <= 0:
            raise ValueError(f"log_every must be positive, got {self.log_every}")
        if not self.structure or any(int(n) <= 0 for n in self.structure):
            raise ValueError(f"structure must be non-empty positive layer sizes, got {self.structure}")
        if self.activation not in ACTIVATIONS:
            raise ValueError(
                f"Unknown activation {self.activation!r}. "
                f"Available: {', '.join(sorted(ACTIVATIONS))}"
            )
