import mimetypes
from pathlib import Path
from typing import ClassVar

from lexigem.documents.exceptions import (
    EmptyFileError,
    FileTooLargeError,
    UnsupportedFileTypeError,
)
from lexigem.documents.models import UploadedFile


class FileLoader:
    """Reads a user-supplied document from disk and checks it can be analyzed."""

    ALLOWED_MIME_TYPES: ClassVar[frozenset[str]] = frozenset({
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "image/png",
        "image/jpeg",
        "image/webp",
    })
    EXTENSION_MIME_TYPES: ClassVar[dict[str, str]] = {
        ".pdf": "application/pdf",
        ".doc": "application/msword",
        ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        ".png": "image/png",
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
        ".webp": "image/webp",
    }
    DEFAULT_MAX_BYTES = 12 * 1024 * 1024

    def __init__(self, max_bytes: int | None = None) -> None:
        self._max_bytes = max_bytes if max_bytes is not None else self.DEFAULT_MAX_BYTES

    def load(self, path: Path) -> UploadedFile:
        """Read the file at ``path`` into an UploadedFile.

        Raises:
            FileNotFoundError: if the file does not exist.
            UnsupportedFileTypeError: if the MIME type is not accepted.
            FileTooLargeError: if the file exceeds the size limit.
            EmptyFileError: if the file has no content.
        """
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        mime_type = self.guess_mime_type(path.name)
        if mime_type not in self.ALLOWED_MIME_TYPES:
            raise UnsupportedFileTypeError(
                f"Unsupported file type '{mime_type}' for {path.name}"
            )
        size = path.stat().st_size
        if size > self._max_bytes:
            raise FileTooLargeError(
                f"{path.name} is {size} bytes, limit is {self._max_bytes}"
            )
        if size == 0:
            raise EmptyFileError(f"{path.name} is empty")
        return UploadedFile(content=path.read_bytes(), mime_type=mime_type, name=path.name)

    @classmethod
    def guess_mime_type(cls, file_name: str) -> str:
        known = cls.EXTENSION_MIME_TYPES.get(Path(file_name).suffix.lower())
        if known is not None:
            return known
        mime_type, _ = mimetypes.guess_type(file_name)
        return mime_type or "application/octet-stream"
