from dataclasses import dataclass

from lexigem.documents.models import UploadedFile


@dataclass(frozen=True)
class RasterPage:
    """One rendered PDF page. ``page_number`` is 1-based."""

    page_number: int
    content: bytes
    mime_type: str = "image/png"

    @property
    def name(self) -> str:
        return f"page-{self.page_number}.png"

    def to_uploaded_file(self) -> UploadedFile:
        return UploadedFile(content=self.content, mime_type=self.mime_type, name=self.name)
