"""
Upload Routes
=============

Bulk upload endpoints for dispatch records.

Endpoints:
- POST /records/bulk-upload - Strict template upload (all-or-nothing)
- POST /records/bulk-upload-smart - Multi-sheet upload (best-effort)
- POST /records/analyze-file - Describe a file without importing it
- GET /records/bulk-upload/template - Download the strict upload template
"""

from typing import Annotated

import pandas as pd
from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse, Response

from dispatch_ingestion.api.dependencies import get_current_actor, get_orchestrator
from dispatch_ingestion.errors.exceptions import ParserError
from dispatch_ingestion.models.column_mapping import TEMPLATE_COLUMNS
from dispatch_ingestion.models.file_analysis import FileAnalysis
from dispatch_ingestion.models.ingestion import IngestionResult, IngestionStatus, UploadMode
from dispatch_ingestion.parsers.file_intake import UploadedFile
from dispatch_ingestion.services.file_analyzer import analyze_file
from dispatch_ingestion.services.ingestion import IngestionOrchestrator

router = APIRouter(prefix="/records", tags=["Records"])

_STATUS_CODES = {
    IngestionStatus.COMPLETED: status.HTTP_200_OK,
    IngestionStatus.REJECTED: status.HTTP_400_BAD_REQUEST,
    IngestionStatus.STORAGE_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

TEMPLATE_SAMPLE_ROWS = [
    [
        "Paras Polymers", "Mr. Neel", "+91 7201877472", "neel@paraspolymers.com",
        "By Phone", "India", "Gujarat", "Ahmedabad", "Ahmedabad", "INV-2025-001",
        "2025-01-15", "Plastics", "Granules", "150.50", "100", "15050",
        "DTDC Courier", "Paid", "Standard", "100% Advance Received",
    ],
    [
        "ABC Industries", "Ms. Priya", "+91 9876543210", "priya@abcindustries.com",
        "Email", "India", "Maharashtra", "Mumbai", "Mumbai", "INV-2025-002",
        "2025-01-16", "Steel", "Rods", "200.00", "50", "10000",
        "Blue Dart", "To Pay", "Express", "50% Advance 50% Against Delivery",
    ],
]


async def _read_upload(file: UploadFile | None) -> UploadedFile:
    if file is None:
        raise ParserError("No file provided")
    content = await file.read()
    return UploadedFile(filename=file.filename or "upload", content=content)


def _result_response(result: IngestionResult) -> JSONResponse:
    return JSONResponse(
        status_code=_STATUS_CODES[result.status],
        content=result.model_dump(mode="json", exclude_none=True),
    )


@router.post(
    "/bulk-upload",
    response_model=IngestionResult,
    summary="Strict template upload",
    description=(
        "Import the first sheet of a CSV or Excel file laid out as the upload "
        "template. Every row is validated first; if any row is invalid nothing "
        "is saved and all row errors are returned."
    ),
    responses={
        200: {"description": "All rows saved"},
        400: {"description": "File rejected; no rows saved"},
        401: {"description": "No authenticated user"},
        500: {"description": "Rows valid but could not be saved"},
    },
)
async def bulk_upload(
    actor_id: Annotated[str, Depends(get_current_actor)],
    orchestrator: Annotated[IngestionOrchestrator, Depends(get_orchestrator)],
    file: Annotated[UploadFile | None, File()] = None,
) -> JSONResponse:
    upload = await _read_upload(file)
    result = await orchestrator.ingest(upload, actor_id, UploadMode.STRICT)
    return _result_response(result)


@router.post(
    "/bulk-upload-smart",
    response_model=IngestionResult,
    summary="Smart multi-sheet upload",
    description=(
        "Import every sheet whose headers cover company, contact person, email "
        "and invoice columns. Headers are matched by synonym, valid rows are "
        "saved one by one and invalid rows are reported."
    ),
    responses={
        200: {"description": "Upload processed; see success and failed counts"},
        400: {"description": "File could not be read"},
        401: {"description": "No authenticated user"},
    },
)
async def bulk_upload_smart(
    actor_id: Annotated[str, Depends(get_current_actor)],
    orchestrator: Annotated[IngestionOrchestrator, Depends(get_orchestrator)],
    file: Annotated[UploadFile | None, File()] = None,
) -> JSONResponse:
    upload = await _read_upload(file)
    result = await orchestrator.ingest(upload, actor_id, UploadMode.SMART)
    return _result_response(result)


@router.post(
    "/analyze-file",
    response_model=FileAnalysis,
    response_model_exclude_none=True,
    summary="Analyze an upload file",
)
async def analyze_upload(
    actor_id: Annotated[str, Depends(get_current_actor)],
    file: Annotated[UploadFile | None, File()] = None,
) -> FileAnalysis:
    """Report sheets, row counts, previews and column matches without importing."""
    upload = await _read_upload(file)
    return analyze_file(upload)


@router.get(
    "/bulk-upload/template",
    summary="Download the strict upload template",
    response_class=Response,
)
async def download_template() -> Response:
    """CSV with the template headers and two sample rows."""
    frame = pd.DataFrame(TEMPLATE_SAMPLE_ROWS, columns=[label for _, label in TEMPLATE_COLUMNS])
    return Response(
        content=frame.to_csv(index=False),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="bulk-upload-template.csv"'},
    )
