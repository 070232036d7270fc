"""Staging of multipart uploads into the temporary directory."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from pathlib import Path

from flask import Request, current_app
from werkzeug.datastructures import FileStorage

from errors import ValidationError
from storage.local_storage import LocalStorage


@dataclass(frozen=True)
class UploadedFile:
    """A file received from the client and written to the temp directory."""

    path: Path
    original_name: str

    @property
    def extension(self) -> str:
        return self.original_name.rsplit(".", 1)[-1]


def temp_storage() -> LocalStorage:
    return LocalStorage(current_app.config["TEMP_DIR"])


def stage_upload(req: Request, field: str) -> UploadedFile:
    """Save the ``field`` file part under a unique temp name."""

    file = req.files.get(field)
    if not isinstance(file, FileStorage) or not (file.filename or "").strip():
        raise ValidationError(f"A file is required in the '{field}' field.")

    original_name = file.filename.strip()
    head, _, extension = original_name.rpartition(".")
    if not head or not extension:
        raise ValidationError("Uploaded filename must include an extension.")
    if not (extension.isascii() and extension.isalnum()):
        raise ValidationError("Uploaded file extension must be alphanumeric ASCII.")

    staged_name = f"{uuid.uuid4().hex}.{extension}"
    path = temp_storage().save(file, staged_name)
    return UploadedFile(path=path, original_name=original_name)
