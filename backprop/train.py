"""
Gradient-descent training loop for MLPs.

Each iteration:
    1. apply inputs to the net to yield predictions
    2. calculate the loss
    3. propagate the gradients backwards
    4. move every weight and bias against its gradient

The graph for each iteration is recorded on a throwaway tape, so the arena
does not grow with the number of iterations; parameters outlive it.
"""

import logging
import numpy as np
from typing import Sequence, Union

from .config import TrainConfig
from .core.engine import backward
from .core.tape import use_tape
from .core.var import Value
from .perceptron import MLP, mean_squared_error

logger = logging.getLogger(__name__)


def build_model(input_count: int, config: TrainConfig) -> MLP:
    """MLP shaped by `config.structure`, initialised from `config.seed`."""
    rng = np.random.default_rng(config.seed)
    return MLP(input_count, config.structure, activation=config.activation, rng=rng)


def train(
    model: MLP,
    inputs: Sequence[Sequence[float]],
    targets: Sequence[Union[float, Value]],
    config: TrainConfig,
) -> np.ndarray:
    """
    Fit `model` to (inputs, targets) by plain gradient descent.

    Args:
        model: network whose first output is compared against each target
        inputs: one input row per example
        targets: one target per example (numbers or leaf Values)
        config: step size, iteration count and logging cadence

    Returns:
        Loss value of every iteration, measured before its update step.
    """
    if len(inputs) != len(targets):
        raise ValueError(
            f"inputs and targets differ in length: {len(inputs)} vs {len(targets)}"
        )

    history = np.empty(config.iterations, dtype=np.float64)
    for i in range(config.iterations):
        with use_tape():
            predictions = [model.apply(x)[0] for x in inputs]
            loss = mean_squared_error(targets, predictions)
            backward(loss)
        model.descend(config.step_size)
        history[i] = loss.value

        if i % config.log_every == 0:
            logger.info("iteration %d: loss=%.6f", i, loss.value)

    if config.iterations:
        logger.info("trained %d iterations, final loss=%.6f", config.iterations, history[-1])
    return history
