from dataclasses import dataclass

from lexigem.analysis.models import AnalysisResult
from lexigem.documents.models import UploadedFile
from lexigem.persistence.models import DocumentRecord


@dataclass
class ProcessedDocument:
    """Outcome of processing one uploaded file.

    ``pages_analyzed`` is 0 when the original file was sent as-is.
    ``record`` is set only when the analysis was saved for an owner.
    """

    file: UploadedFile
    analysis: AnalysisResult
    pages_analyzed: int = 0
    record: DocumentRecord | None = None
