from dataclasses import dataclass

PDF_MIME_TYPE = "application/pdf"


@dataclass(frozen=True)
class UploadedFile:
    """A user-supplied document held in memory for one analysis request."""

    content: bytes
    mime_type: str
    name: str

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == PDF_MIME_TYPE or self.name.lower().endswith(".pdf")

    @property
    def extension(self) -> str:
        """File extension without the dot, or 'bin' when the name has none."""
        _, dot, ext = self.name.rpartition(".")
        return ext.lower() if dot and ext else "bin"
