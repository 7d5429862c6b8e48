"""Persist trained networks as ``.npz`` archives keyed by topology."""

from __future__ import annotations

import logging
import os
import tempfile
import zipfile
import zlib
from pathlib import Path
from typing import Dict, Sequence

import numpy as np

from ..core.errors import DimensionMismatch, ModelLoadFailure
from ..core.network import Network
from ..core.types import Array

logger = logging.getLogger(__name__)

_READ_ERRORS = (
    OSError,
    ValueError,
    TypeError,
    KeyError,
    EOFError,
    zipfile.BadZipFile,
    zlib.error,
)


class ModelStore:
    """Save and restore :class:`Network` parameters under ``directory``.

    A model trained for one topology lives in its own file, so it is never
    offered to a network of another shape. The stored topology is checked
    again on load in case files were renamed.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, layer_sizes: Sequence[int]) -> Path:
        key = "x".join(str(int(size)) for size in layer_sizes)
        return self.directory / f"model-{key}.npz"

    def exists(self, network: Network) -> bool:
        return self.path_for(network.layer_sizes).exists()

    def save(self, network: Network) -> Path:
        path = self.path_for(network.layer_sizes)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload: Dict[str, Array] = {
            "layer_sizes": np.asarray(network.layer_sizes, dtype=np.int64),
            "activation": np.asarray(network.activation),
        }
        payload.update(network.state_dict())
        fd, tmp_name = tempfile.mkstemp(prefix=path.stem, suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as handle:
                np.savez_compressed(handle, **payload)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.info("Saved %s to %s", network, path)
        return path

    def load(self, network: Network, path: str | Path | None = None) -> bool:
        """Overwrite ``network`` from storage; ``False`` leaves it untouched."""

        path = Path(path) if path is not None else self.path_for(network.layer_sizes)
        if not path.exists():
            logger.info("No stored model at %s", path)
            return False
        try:
            state = self._read(path, network)
            network.load_state_dict(state)
        except (ModelLoadFailure, DimensionMismatch, KeyError) as exc:
            logger.warning("Ignoring stored model %s: %s", path, exc)
            return False
        logger.info("Loaded %s from %s", network, path)
        return True

    # ------------------------------------------------------------------
    # Internal helpers

    @staticmethod
    def _read(path: Path, network: Network) -> Dict[str, Array]:
        try:
            with np.load(path, allow_pickle=False) as archive:
                stored_sizes = tuple(int(s) for s in archive["layer_sizes"])
                stored_activation = str(archive["activation"])
                state = {
                    name: archive[name]
                    for name in archive.files
                    if name not in {"layer_sizes", "activation"}
                }
        except _READ_ERRORS as exc:
            raise ModelLoadFailure(f"unreadable model file: {exc!r}") from exc
        if stored_sizes != network.layer_sizes:
            raise ModelLoadFailure(
                f"stored topology {list(stored_sizes)} != {list(network.layer_sizes)}"
            )
        if stored_activation != network.activation:
            raise ModelLoadFailure(
                f"stored activation {stored_activation!r} != {network.activation!r}"
            )
        for name, value in state.items():
            if not np.issubdtype(value.dtype, np.number) or np.issubdtype(
                value.dtype, np.complexfloating
            ):
                raise ModelLoadFailure(f"{name} holds non-real values of dtype {value.dtype}")
        return state


__all__ = ["ModelStore"]
