import json
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from artifact_updater.agents.analysis.diagnostics import diagnose_html_update
from artifact_updater.agents.update.service import create_document, update_document
from artifact_updater.core.config import settings
from artifact_updater.core.exceptions import DocumentUpdateError
from artifact_updater.core.llm_service import get_generation_service
from artifact_updater.core.models import (
    CreateDocumentRequest,
    DiagnoseRequest,
    DiagnosticResult,
    Document,
    ErrorEvent,
    FinishEvent,
    UpdateDocumentRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents")


def _ndjson(event) -> str:
    return json.dumps(event.model_dump(), ensure_ascii=False) + "\n"


@router.post("/update")
async def update_document_endpoint(
        request: UpdateDocumentRequest,
        generator=Depends(get_generation_service),
):
    """Stream the update of an HTML document as newline-delimited JSON events"""
    document = Document(content=request.content, title=request.title, kind=request.kind)
    config_name = request.config or settings.update_config
    logger.info(f"[API] Updating '{request.title}' with config '{config_name}'")

    async def event_stream():
        try:
            async for event in update_document(document, request.description, config_name, generator):
                yield _ndjson(event)
        except DocumentUpdateError as e:
            cause = e.__cause__ or e
            logger.error(f"[API] ❌ Failed to update artifact: {cause}")
            yield _ndjson(ErrorEvent(content=f"Failed to update artifact: {e}"))
            yield _ndjson(FinishEvent())

    return StreamingResponse(event_stream(), media_type="application/x-ndjson")


@router.post("/diagnose", response_model=DiagnosticResult)
async def diagnose_endpoint(request: DiagnoseRequest):
    return diagnose_html_update(request.content, request.description)


@router.post("/create")
async def create_document_endpoint(
        request: CreateDocumentRequest,
        generator=Depends(get_generation_service),
):
    async def event_stream():
        async for event in create_document(request.title, generator):
            yield _ndjson(event)

    return StreamingResponse(event_stream(), media_type="application/x-ndjson")
