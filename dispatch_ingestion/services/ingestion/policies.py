"""Transactional policies for bulk uploads.

Two policies share the same parsing, normalization and validation steps and
differ in what they commit:

- AllOrNothingPolicy (strict): validates every row of the first sheet before
  writing anything, then writes the whole batch with one insert_many. A single
  invalid row rejects the file.
- BestEffortPolicy (smart): walks every eligible sheet and commits each valid
  row on its own with insert_one. Invalid rows and per-row storage failures
  are reported and skipped.
"""
from abc import ABC, abstractmethod
from typing import List

import structlog
from pydantic import BaseModel, Field

from dispatch_ingestion.config import UploadSettings
from dispatch_ingestion.db.records_store import RecordsStore
from dispatch_ingestion.errors.exceptions import HeaderShapeError, ParserError
from dispatch_ingestion.models.column_mapping import (
    DEFAULT_COLUMN_MAPPING,
    DEFAULT_RECORD_DEFAULTS,
    DEFAULT_REQUIRED_ARCHETYPES,
    ColumnMapping,
    RecordDefaults,
    RequiredArchetypes,
)
from dispatch_ingestion.models.dispatch_record import DispatchRecordCandidate
from dispatch_ingestion.models.ingestion import (
    IngestionResult,
    IngestionStatus,
    RawSheet,
    UploadMode,
    is_blank_row,
    row_message,
)
from dispatch_ingestion.services.column_mapper import ColumnIndex, resolve_columns
from dispatch_ingestion.services.record_validator import ROW_NUMBER_OFFSET, RecordValidator
from dispatch_ingestion.services.row_normalizer import normalize_row, normalize_template_row
from dispatch_ingestion.services.sheet_gatekeeper import describe_ineligible_sheet, is_sheet_eligible

logger = structlog.get_logger(__name__)


class IngestionOptions(BaseModel):
    """Tunables shared by both policies."""

    expected_column_count: int = Field(default=20, ge=1)
    header_preview_count: int = Field(default=5, ge=1)
    strict_dates: bool = False
    mapping: ColumnMapping = DEFAULT_COLUMN_MAPPING
    archetypes: RequiredArchetypes = DEFAULT_REQUIRED_ARCHETYPES
    defaults: RecordDefaults = DEFAULT_RECORD_DEFAULTS

    @classmethod
    def from_settings(cls, config: UploadSettings) -> 'IngestionOptions':
        return cls(
            expected_column_count=config.expected_column_count,
            header_preview_count=config.header_preview_count,
            strict_dates=config.strict_dates,
        )


class IngestionPolicy(ABC):
    """Abstract base class for upload policies.

    Implementations must provide:
    - run(): Drive validation and commits over decoded sheets
    - mode: The UploadMode the policy implements
    - first_sheet_only: Whether only the first worksheet is decoded
    """

    mode: UploadMode
    first_sheet_only: bool = False

    def __init__(self, options: IngestionOptions):
        self.options = options
        self.validator = RecordValidator(self.mode, strict_dates=options.strict_dates)

    @abstractmethod
    async def run(self, sheets: List[RawSheet], actor_id: str, store: RecordsStore) -> IngestionResult:
        """Ingest decoded sheets and summarize the outcome.

        Raises:
            ParserError: If the sheets cannot be ingested at all
        """
        pass


class AllOrNothingPolicy(IngestionPolicy):
    """Strict template upload: every row valid, or nothing is written."""

    mode = UploadMode.STRICT
    first_sheet_only = True

    async def run(self, sheets: List[RawSheet], actor_id: str, store: RecordsStore) -> IngestionResult:
        sheet = sheets[0] if sheets else RawSheet(name="")
        log = logger.bind(sheet_name=sheet.name, mode=self.mode.value)

        if not sheet.has_data:
            raise ParserError(f'Sheet "{sheet.name}" must contain header and at least one data row')

        expected = self.options.expected_column_count
        headers = [h.strip() for h in sheet.header]
        if len(headers) < expected:
            raise HeaderShapeError(
                f"Invalid format. Expected {expected} columns, but found {len(headers)}. "
                f"Please use the template.",
                details={
                    "headers": headers,
                    "hint": "Make sure you're using the first sheet and haven't modified the column headers",
                },
            )

        accepted: List[DispatchRecordCandidate] = []
        errors: List[str] = []

        for row_index, raw_row in enumerate(sheet.data_rows):
            template_row = raw_row[:expected]
            if is_blank_row(template_row):
                continue
            try:
                candidate = normalize_template_row(template_row, actor_id, self.options.defaults)
                outcome = self.validator.validate(candidate, row_index, sheet.name)
            except Exception as e:
                log.warning("row_normalization_failed", row_number=row_index + ROW_NUMBER_OFFSET, error=str(e))
                errors.append(row_message(sheet.name, row_index + ROW_NUMBER_OFFSET, str(e)))
                continue

            if outcome.accepted:
                accepted.append(outcome.record)
            else:
                errors.append(outcome.message)

        if errors:
            log.info("batch_rejected", invalid_rows=len(errors), valid_rows=len(accepted))
            return IngestionResult(
                mode=self.mode,
                status=IngestionStatus.REJECTED,
                failed=len(errors),
                errors=errors,
            )

        try:
            written = await store.insert_many(accepted)
        except Exception as e:
            log.error("batch_insert_failed", record_count=len(accepted), error=str(e))
            return IngestionResult(
                mode=self.mode,
                status=IngestionStatus.STORAGE_FAILED,
                failed=len(accepted),
                errors=[f"Failed to save records: {getattr(e, 'message', str(e))}"],
            )

        return IngestionResult(mode=self.mode, success=written)


class BestEffortPolicy(IngestionPolicy):
    """Smart multi-sheet upload: commit every row that validates."""

    mode = UploadMode.SMART

    async def run(self, sheets: List[RawSheet], actor_id: str, store: RecordsStore) -> IngestionResult:
        result = IngestionResult(mode=self.mode, sheets_processed=[])

        for sheet in sheets:
            log = logger.bind(sheet_name=sheet.name, mode=self.mode.value)

            if not sheet.has_data:
                log.info("empty_sheet_skipped")
                continue

            if not is_sheet_eligible(sheet.header, self.options.archetypes):
                log.info("ineligible_sheet_skipped", headers=sheet.header)
                result.errors.append(
                    describe_ineligible_sheet(sheet.name, sheet.header, self.options.header_preview_count)
                )
                continue

            result.sheets_processed.append(sheet.name)
            column_index = resolve_columns(sheet.header, self.options.mapping)

            for row_index, raw_row in enumerate(sheet.data_rows):
                if is_blank_row(raw_row):
                    continue
                await self._ingest_row(result, sheet, row_index, raw_row, column_index, actor_id, store, log)

            log.info("sheet_processed", success=result.success, failed=result.failed)

        return result

    async def _ingest_row(
        self,
        result: IngestionResult,
        sheet: RawSheet,
        row_index: int,
        raw_row: List[str],
        column_index: ColumnIndex,
        actor_id: str,
        store: RecordsStore,
        log,
    ) -> None:
        """Normalize, validate and commit one row; failures stay in this row."""
        row_number = row_index + ROW_NUMBER_OFFSET
        try:
            candidate = normalize_row(raw_row, column_index, actor_id, self.options.defaults)
            outcome = self.validator.validate(candidate, row_index, sheet.name)
            if not outcome.accepted:
                result.failed += 1
                result.errors.append(outcome.message)
                return

            await store.insert_one(outcome.record)
            result.success += 1
        except Exception as e:
            log.warning("row_ingest_failed", row_number=row_number, error=str(e), error_type=type(e).__name__)
            result.failed += 1
            result.errors.append(row_message(sheet.name, row_number, getattr(e, 'message', str(e))))
