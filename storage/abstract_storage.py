"""Storage abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO


class AbstractStorage(ABC):
    """Interface for storage backends."""

    @abstractmethod
    def save(self, file_obj: IO[bytes], filename: str) -> Path:
        """Persist a file and return its absolute path."""

    @abstractmethod
    def move_in(self, source: str | Path, filename: str) -> Path:
        """Move an existing file into storage under ``filename``."""

    @abstractmethod
    def remove(self, path: str | Path) -> None:
        """Delete a stored file if it is present."""
