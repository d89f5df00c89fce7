import logging
from dataclasses import dataclass

from scalargrad.engine import Scalar, backward, zero_grad

logger = logging.getLogger(__name__)


@dataclass
class TrainConfig:
    lr: float = 0.05
    steps: int = 100
    log_every: int = 10

    def __post_init__(self):
        if self.lr <= 0:
            raise ValueError(f"lr must be positive, got {self.lr}")
        if self.steps < 0:
            raise ValueError(f"steps must be non-negative, got {self.steps}")
        if self.log_every < 1:
            raise ValueError(f"log_every must be at least 1, got {self.log_every}")


def _as_scalar(v):
    return v if isinstance(v, Scalar) else Scalar(v)


def mse_loss(ys, preds):
    """Sum of squared errors between targets and predictions."""
    if len(ys) != len(preds):
        raise ValueError(f"got {len(ys)} targets for {len(preds)} predictions")
    if len(ys) == 0:
        raise ValueError("cannot compute a loss over zero samples")
    loss = None
    for y, y_hat in zip(ys, preds):
        term = (_as_scalar(y) - y_hat) ** 2
        loss = term if loss is None else loss + term
    return loss


def sgd_step(params, lr):
    for p in params:
        p.data -= lr * p.grad


def fit(model, xs, ys, config=None):
    """Train a single-output `model` on (xs, ys) with plain gradient descent.

    Returns the loss recorded at every step, measured before that step's update.
    """
    config = config or TrainConfig()
    params = model.parameters()
    history = []

    for step in range(config.steps):
        zero_grad(params)
        preds = [model(x)[0] for x in xs]
        loss = mse_loss(ys, preds)
        backward(loss)
        sgd_step(params, config.lr)

        history.append(float(loss.data))
        if step % config.log_every == 0 or step == config.steps - 1:
            logger.info("step %d loss %.6f", step, loss.data)

    return history
