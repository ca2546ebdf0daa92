import time

from lexigem.documents.models import UploadedFile
from lexigem.logging.logger import Log
from lexigem.persistence.connection import get_client
from lexigem.persistence.exceptions import RecordNotFoundError
from lexigem.persistence.models import DocumentRecord, NewDocument


class DocumentsRepository:
    """Storage and table operations for analyzed documents."""

    TABLE = "documents"

    def __init__(self, bucket: str = "documents") -> None:
        self._bucket = bucket

    def upload_file(self, file: UploadedFile, owner_id: str) -> str:
        """Upload the original file and return its public URL."""
        path = f"{owner_id}/{int(time.time() * 1000)}.{file.extension}"
        storage = get_client().storage.from_(self._bucket)
        storage.upload(
            path,
            file.content,
            file_options={
                "content-type": file.mime_type,
                "cache-control": "3600",
                "upsert": "false",
            },
        )
        Log.info(f"Uploaded {file.size} bytes to {self._bucket}/{path}")
        return storage.get_public_url(path)

    def save_document(self, document: NewDocument) -> DocumentRecord:
        """Insert a documents row and return it as stored.

        Raises:
            RecordNotFoundError: if the insert returned no row.
        """
        response = get_client().table(self.TABLE).insert(document.to_row()).execute()
        if not response.data:
            raise RecordNotFoundError(f"Insert into {self.TABLE} returned no row")
        return DocumentRecord.from_row(response.data[0])

    def get_user_documents(self, owner_id: str) -> list[DocumentRecord]:
        """Return the owner's documents, newest first."""
        response = (
            get_client()
            .table(self.TABLE)
            .select("*")
            .eq("user_id", owner_id)
            .order("created_at", desc=True)
            .execute()
        )
        return [DocumentRecord.from_row(row) for row in response.data or []]

    def delete_document(self, document_id: str, owner_id: str) -> None:
        """Delete the row, then the stored file.

        A storage failure is logged only; the object may already be gone.

        Raises:
            RecordNotFoundError: if the owner has no document with this ID.
        """
        client = get_client()
        response = (
            client.table(self.TABLE)
            .delete()
            .eq("id", document_id)
            .eq("user_id", owner_id)
            .execute()
        )
        if not response.data:
            raise RecordNotFoundError(f"Document {document_id} not found")

        file_url = response.data[0].get("file_url")
        storage_path = self._storage_path(file_url)
        if storage_path is None:
            return
        try:
            client.storage.from_(self._bucket).remove([storage_path])
        except Exception as exc:
            Log.warning(f"Failed to delete stored file {storage_path}: {exc}")

    def _storage_path(self, file_url: str | None) -> str | None:
        # public URLs end in /<bucket>/<owner_id>/<epoch_ms>.<ext>
        if not file_url:
            return None
        marker = f"/{self._bucket}/"
        if marker not in file_url:
            return None
        return file_url.split(marker, 1)[1] or None
