"""Local filesystem storage implementation."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import IO

from werkzeug.utils import secure_filename

from .abstract_storage import AbstractStorage


class LocalStorage(AbstractStorage):
    """Persist files to the local filesystem under a base directory."""

    def __init__(self, base_directory: str | Path):
        self.base_directory = Path(base_directory)
        os.makedirs(self.base_directory, exist_ok=True)

    def _destination(self, filename: str) -> Path:
        safe_name = secure_filename(filename)
        if not safe_name:
            raise ValueError("Filename must contain at least one valid character.")
        return self.base_directory / safe_name

    def save(self, file_obj: IO[bytes], filename: str) -> Path:
        """Save a file object and return its absolute path."""

        destination = self._destination(filename)
        if hasattr(file_obj, "save"):
            file_obj.save(destination)  # type: ignore[arg-type]
        else:
            with open(destination, "wb") as output:
                output.write(file_obj.read())

        return destination

    def move_in(self, source: str | Path, filename: str) -> Path:
        """Move ``source`` into the base directory, replacing any existing file."""

        destination = self._destination(filename)
        shutil.move(str(source), str(destination))
        return destination

    def remove(self, path: str | Path) -> None:
        target = Path(path)
        if not target.is_absolute():
            target = self.base_directory / target
        target.unlink(missing_ok=True)
