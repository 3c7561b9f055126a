"""Ingestion orchestrator: file intake, decoding and policy dispatch."""
from typing import Dict, Optional, Type

import structlog

from dispatch_ingestion.config import UploadSettings, settings, upload_settings
from dispatch_ingestion.db.records_store import RecordsStore
from dispatch_ingestion.errors.exceptions import DataIngestionError, ValidationError
from dispatch_ingestion.models.ingestion import IngestionResult, UploadMode
from dispatch_ingestion.parsers.file_intake import UploadedFile, check_upload
from dispatch_ingestion.parsers.sheet_loader import load_sheets
from dispatch_ingestion.services.ingestion.policies import (
    AllOrNothingPolicy,
    BestEffortPolicy,
    IngestionOptions,
    IngestionPolicy,
)

logger = structlog.get_logger(__name__)


# Upload mode -> policy class
_policy_registry: Dict[UploadMode, Type[IngestionPolicy]] = {
    UploadMode.STRICT: AllOrNothingPolicy,
    UploadMode.SMART: BestEffortPolicy,
}


def get_policy(mode: UploadMode, options: IngestionOptions) -> IngestionPolicy:
    """Create the policy implementing an upload mode.

    Raises:
        ValidationError: If no policy is registered for the mode
    """
    policy_class = _policy_registry.get(mode)
    if policy_class is None:
        available = ", ".join(m.value for m in _policy_registry)
        raise ValidationError(
            f"Upload mode '{mode}' is not supported. Available modes: {available}"
        )
    return policy_class(options)


class IngestionOrchestrator:
    """Runs one bulk upload from raw bytes to an IngestionResult.

    Uploads are processed synchronously within the request, one row at a
    time. File-level problems (unknown extension, empty or oversized file,
    undecodable workbook, bad template header) raise a ParserError subclass
    and nothing is written.
    """

    def __init__(
        self,
        store: RecordsStore,
        options: Optional[IngestionOptions] = None,
        max_file_size_bytes: Optional[int] = None,
        config: UploadSettings = upload_settings,
    ):
        self.store = store
        self.options = options or IngestionOptions.from_settings(config)
        self.max_file_size_bytes = (
            max_file_size_bytes if max_file_size_bytes is not None else settings.max_file_size_bytes
        )

    async def ingest(self, upload: UploadedFile, actor_id: str, mode: UploadMode) -> IngestionResult:
        """Ingest an uploaded file under the given policy.

        Args:
            upload: Uploaded file bytes and name
            actor_id: Authenticated uploader, stored as created_by
            mode: STRICT (all-or-nothing) or SMART (best-effort)

        Returns:
            IngestionResult summarizing committed and failed rows

        Raises:
            ParserError: If the file cannot be ingested at all
        """
        log = logger.bind(filename=upload.filename, mode=mode.value, actor_id=actor_id)
        log.info("ingestion_started", size=upload.size)

        try:
            file_format = check_upload(upload, self.max_file_size_bytes)
            policy = get_policy(mode, self.options)
            sheets = load_sheets(upload, file_format, first_only=policy.first_sheet_only)
            result = await policy.run(sheets, actor_id, self.store)
        except DataIngestionError as e:
            log.warning("ingestion_aborted", error_type=type(e).__name__, error=e.message)
            raise

        log.info(
            "ingestion_completed",
            status=result.status.value,
            success=result.success,
            failed=result.failed,
            total=result.total_processed,
            error_count=len(result.errors),
            sheets_processed=result.sheets_processed,
        )
        return result
