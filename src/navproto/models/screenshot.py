"""Screenshot record and captured file-name parsing."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from navproto.exceptions import InvalidFileNameError, InvalidScreenshotError


class Screenshot(BaseModel):
    """A persisted screenshot: logical name plus file location.

    Build instances with :meth:`create` to get navproto errors instead of
    pydantic ``ValidationError``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        """Trim the name and reject blank values."""
        v = v.strip()
        if not v:
            raise ValueError("Invalid screenshot name provided")
        return v

    @classmethod
    def create(cls, name: str | None, path: Path | str | None) -> "Screenshot":
        """Validate and build a screenshot record.

        Raises:
            InvalidScreenshotError: If *name* is blank or *path* is ``None``.
        """
        if name is None or not name.strip():
            raise InvalidScreenshotError("Invalid screenshot name provided")
        if path is None:
            raise InvalidScreenshotError("None is not a valid file path")
        try:
            return cls(name=name, path=Path(path))
        except ValidationError as exc:
            raise InvalidScreenshotError(str(exc)) from exc


@dataclass(frozen=True)
class FileName:
    """A file name split at its rightmost dot."""

    name: str
    extension: str

    @classmethod
    def parse(cls, raw: str | None) -> "FileName":
        """Split *raw* into name and extension.

        The extension is whatever follows the rightmost ``.``.  Input is
        trimmed first.

        Raises:
            InvalidFileNameError: If *raw* is blank, has no dot, starts with
                the dot, or ends with it.
        """
        value = raw.strip() if raw is not None else ""
        if not value:
            raise InvalidFileNameError(raw)
        last_dot = value.rfind(".")
        if last_dot <= 0 or last_dot == len(value) - 1:
            raise InvalidFileNameError(raw)
        return cls(name=value[:last_dot], extension=value[last_dot + 1 :])

    def __str__(self) -> str:
        return f"{self.name}.{self.extension}"
