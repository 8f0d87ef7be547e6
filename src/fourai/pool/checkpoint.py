"""
Checkpoint Module

This module persists the survivors of a generation so that training can be
resumed later. A checkpoint is a pickled list of agents stored in a file named
'<prefix>_<generation>', e.g. 'saves/gen_250' for the prefix 'saves/gen'.

Classes:
    CheckpointStore: Index of the checkpoints sharing one prefix, with save/load
"""

import logging
import os
import pickle
import re
from pathlib import Path

from fourai.errors     import CheckpointError
from fourai.pool.agent import Agent

logger = logging.getLogger(__name__)

class CheckpointStore:
    """
    The checkpoints written under one path prefix.

    The directory holding the checkpoints is scanned once, when the store is
    created, to build an index 'generation => file'; the index is then kept
    up to date by save(). Only files named '<prefix name>_<digits>' are
    indexed.

    Files are written to a temporary name first and moved into place, so an
    interrupted write never leaves a truncated file under a checkpoint name.

    Public Attributes:
        prefix: Path prefix of the checkpoint files

    Public Methods:
        refresh():                 Rebuild the index from the directory content
        generations():             Sorted list of the saved generations
        latest():                  (generation, path) of the newest checkpoint, or None
        path_for(generation):      File name of the checkpoint of a generation
        save(generation, agents):  Write a checkpoint
        load(generation):          Read a checkpoint (the newest if generation is None)
    """

    def __init__(self, prefix: str | Path):
        self.prefix: Path = Path(prefix)
        self._pattern     = re.compile(rf"^{re.escape(self.prefix.name)}_(\d+)$")
        self._index: dict[int, Path] = {}
        self.refresh()

    @property
    def directory(self) -> Path:
        return self.prefix.parent

    def refresh(self) -> None:
        """
        Rebuild the index. A directory that does not exist yet holds no checkpoints.
        """
        self._index = {}
        if not self.directory.is_dir():
            return

        for entry in self.directory.iterdir():
            match = self._pattern.match(entry.name)
            if match and entry.is_file():
                self._index[int(match.group(1))] = entry

    def generations(self) -> list[int]:
        return sorted(self._index)

    def latest(self) -> tuple[int, Path] | None:
        if not self._index:
            return None
        generation = max(self._index)
        return generation, self._index[generation]

    def path_for(self, generation: int) -> Path:
        return self.directory / f"{self.prefix.name}_{generation}"

    def save(self, generation: int, agents: list[Agent]) -> Path:
        """
        Write the given agents as the checkpoint of 'generation'.

        Returns:
            The path of the checkpoint file
        """
        path = self.path_for(generation)
        tmp  = path.with_name(path.name + '.tmp')

        logger.info("Writing generation %d to %s", generation, path)
        self.directory.mkdir(parents=True, exist_ok=True)
        with open(tmp, 'wb') as f:
            pickle.dump(list(agents), f, protocol=pickle.HIGHEST_PROTOCOL)
        os.replace(tmp, path)

        self._index[generation] = path
        return path

    def load(self, generation: int | None = None) -> tuple[int, list[Agent]]:
        """
        Read a checkpoint.

        Parameters:
            generation: the generation to load; None loads the newest checkpoint

        Returns:
            (generation, agents)

        Raises:
            CheckpointError: if there is no such checkpoint or its content is not a list of agents
        """
        if generation is None:
            latest = self.latest()
            if latest is None:
                raise CheckpointError(f"no checkpoint found for prefix '{self.prefix}'")
            generation, path = latest
        elif generation in self._index:
            path = self._index[generation]
        else:
            raise CheckpointError(f"no checkpoint for generation {generation} with prefix '{self.prefix}'")

        try:
            with open(path, 'rb') as f:
                agents = pickle.load(f)
        except (pickle.UnpicklingError, EOFError, AttributeError, ImportError, IndexError,
                ValueError, TypeError) as e:
            raise CheckpointError(f"checkpoint '{path}' is corrupted: {e}") from e

        if not isinstance(agents, list) or not agents or not all(isinstance(a, Agent) for a in agents):
            raise CheckpointError(f"checkpoint '{path}' does not hold a list of agents")

        logger.info("Loaded generation %d (%d agents) from %s", generation, len(agents), path)
        return generation, agents
