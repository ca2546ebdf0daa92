from collections.abc import Callable

from lexigem.analysis.analyzer import DocumentAnalyzer
from lexigem.analysis.factory import AnalyzerFactory
from lexigem.config.settings import Settings
from lexigem.documents.models import UploadedFile
from lexigem.logging.logger import Log
from lexigem.pdf.base import BasePdfEngine
from lexigem.pdf.exceptions import InvalidPasswordError, PasswordRequiredError
from lexigem.pdf.factory import PdfEngineFactory
from lexigem.pdf.models import RasterPage
from lexigem.persistence.models import DocumentRecord, NewDocument
from lexigem.persistence.repositories.documents_repository import DocumentsRepository
from lexigem.processor.models import ProcessedDocument

# Called with the 1-based attempt number; returns None or "" to cancel.
PasswordProvider = Callable[[int], str | None]


class DocumentProcessor:
    """Runs one uploaded file through analysis.

    Pipeline: detect protection -> unlock and rasterize -> analyze -> persist.
    """

    def __init__(
        self,
        pdf_engine: BasePdfEngine,
        analyzer: DocumentAnalyzer,
        documents_repo: DocumentsRepository | None = None,
        max_password_attempts: int = 3,
    ) -> None:
        if max_password_attempts < 1:
            raise ValueError("max_password_attempts must be at least 1")
        self._pdf_engine = pdf_engine
        self._analyzer = analyzer
        self._documents_repo = documents_repo
        self._max_password_attempts = max_password_attempts

    def process(
        self,
        file: UploadedFile,
        *,
        response_language: str = "English",
        owner_id: str | None = None,
        password_provider: PasswordProvider | None = None,
    ) -> ProcessedDocument:
        """Analyze a file, unlocking a protected PDF first.

        Raises:
            PasswordRequiredError: protected PDF and no password was given.
            InvalidPasswordError: every allowed password attempt failed.
            PdfRasterizationError: the unlocked PDF rendered no pages.
            AnalysisError: the analysis itself failed.
        """
        Log.info(f"Processing {file.name} ({file.mime_type}, {file.size} bytes)")

        if file.is_pdf and self._pdf_engine.is_password_protected(file.content):
            Log.info(f"{file.name} is password-protected")
            pages = self._unlock(file, password_provider)
            analysis = self._analyzer.analyze_document(
                [page.to_uploaded_file() for page in pages],
                response_language=response_language,
            )
            result = ProcessedDocument(file=file, analysis=analysis, pages_analyzed=len(pages))
        else:
            analysis = self._analyzer.analyze_document(file, response_language=response_language)
            result = ProcessedDocument(file=file, analysis=analysis)

        if owner_id is not None and self._documents_repo is not None:
            result.record = self._persist(file, owner_id, result)
        return result

    def _unlock(
        self, file: UploadedFile, password_provider: PasswordProvider | None
    ) -> list[RasterPage]:
        if password_provider is None:
            raise PasswordRequiredError(f"{file.name} requires a password")

        attempt = 0
        while True:
            attempt += 1
            password = password_provider(attempt)
            if not password:
                raise PasswordRequiredError(f"Password entry for {file.name} was cancelled")
            try:
                pages = self._pdf_engine.convert_to_images(file.content, password)
            except InvalidPasswordError:
                Log.warning(
                    f"Invalid password for {file.name} "
                    f"(attempt {attempt}/{self._max_password_attempts})"
                )
                if attempt >= self._max_password_attempts:
                    raise
                continue
            Log.info(f"Rendered {len(pages)} page(s) of {file.name}")
            return pages

    def _persist(
        self, file: UploadedFile, owner_id: str, result: ProcessedDocument
    ) -> DocumentRecord:
        # the original upload is stored, never the decrypted page images
        file_url = self._documents_repo.upload_file(file, owner_id)
        analysis = result.analysis
        record = self._documents_repo.save_document(
            NewDocument(
                owner_id=owner_id,
                file_name=file.name,
                file_type=file.mime_type,
                file_size=file.size,
                file_url=file_url,
                summary=analysis.summary,
                pros=analysis.pros,
                cons=analysis.cons,
                potential_loopholes=analysis.potential_loopholes,
                potential_challenges=analysis.potential_challenges,
            )
        )
        Log.info(f"Saved analysis of {file.name} as document {record.id}")
        return record


def build_processor(settings: Settings, with_persistence: bool = False) -> DocumentProcessor:
    """Build a DocumentProcessor with all required adapters.

    ``with_persistence`` expects ``init_client`` to have been called.
    """
    documents_repo = (
        DocumentsRepository(bucket=settings.supabase_storage_bucket) if with_persistence else None
    )
    return DocumentProcessor(
        pdf_engine=PdfEngineFactory.create(settings),
        analyzer=AnalyzerFactory.create(settings),
        documents_repo=documents_repo,
        max_password_attempts=settings.max_password_attempts,
    )
