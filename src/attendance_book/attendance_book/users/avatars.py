from __future__ import annotations

from pathlib import Path
from typing import Protocol

from werkzeug.utils import secure_filename

from ..core.constants import AVATAR_EXTENSIONS
from ..core.exceptions import BackendError, ValidationError


def avatar_extension(filename: str) -> str:
    name = secure_filename(filename or "")
    ext = name.rsplit(".", 1)[-1].lower() if "." in name else ""
    if ext not in AVATAR_EXTENSIONS:
        raise ValidationError("Avatar must be an image (" + ", ".join(sorted(AVATAR_EXTENSIONS)) + ")")
    return ext


class AvatarStorage(Protocol):
    def save(self, name: str, content: bytes) -> str:
        """Store `content` under `name` (overwriting) and return its public URL."""

        raise NotImplementedError


class LocalAvatarStorage(AvatarStorage):
    """Avatars kept in a local directory and served by the app under `url_prefix`."""

    def __init__(self, directory: str | Path, *, url_prefix: str = "/avatars"):
        self._directory = Path(directory)
        self._url_prefix = url_prefix.rstrip("/")

    @property
    def directory(self) -> Path:
        return self._directory

    def save(self, name: str, content: bytes) -> str:
        name = secure_filename(name)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            (self._directory / name).write_bytes(content)
        except OSError as e:
            raise BackendError("Avatar upload failed") from e
        return f"{self._url_prefix}/{name}"
