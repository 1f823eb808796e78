"""Import API routes."""

from fastapi import APIRouter, Depends, HTTPException, UploadFile

from chatarchive.importer.reader import MalformedExportError
from chatarchive.importer.schemas import ImportResponse
from chatarchive.importer.service import ImportService

router = APIRouter(prefix="/api/import", tags=["import"])


def get_import_service() -> ImportService:
    """Dependency placeholder, overridden at startup."""
    raise RuntimeError("ImportService not configured")


@router.post("")
async def import_conversations(
    file: UploadFile,
    service: ImportService = Depends(get_import_service),
) -> ImportResponse:
    """Import every conversation in an uploaded conversations.json."""
    content = await file.read()
    try:
        return await service.import_export(content)
    except MalformedExportError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
