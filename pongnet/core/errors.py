"""Error taxonomy shared by the network, trainer and model store."""

from __future__ import annotations


class DimensionMismatch(ValueError):
    """An input or target vector disagrees with the configured topology."""

    def __init__(self, what: str, expected: object, actual: object) -> None:
        super().__init__(f"{what}: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class EmptyDataset(ValueError):
    """Training was requested without any samples."""


class ModelLoadFailure(Exception):
    """A stored model is unreadable, corrupt or built for another topology.

    Raised inside :mod:`pongnet.storage.model_store` only; ``load`` turns it
    into ``False`` so callers fall back to training.
    """


class NonConvergence(RuntimeWarning):
    """Training exhausted its epoch cap without fitting every sample."""


__all__ = ["DimensionMismatch", "EmptyDataset", "ModelLoadFailure", "NonConvergence"]
