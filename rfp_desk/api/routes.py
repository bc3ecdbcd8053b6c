"""API routes backing the upload and browse pages."""

from typing import Any

from fastapi import APIRouter, File, Form, Query, Response, UploadFile
from fastapi.responses import FileResponse, PlainTextResponse, RedirectResponse
from pydantic import BaseModel
from starlette.background import BackgroundTask

from rfp_desk import __version__
from rfp_desk.api.dependencies import QueryDep, ResolverDep, StoreDep, TransferDep
from rfp_desk.config import get_settings
from rfp_desk.models.records import RFPStatus
from rfp_desk.models.requests import RFPCreate, RFPPatch, UploadedFile
from rfp_desk.models.results import ImportMode, ImportReport, ShareLink
from rfp_desk.query.engine import Tab

router = APIRouter(prefix="/api/v1", tags=["RFPs"])


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str = __version__


class ShareLoadResponse(BaseModel):
    """Result of applying share data at page load."""
    loaded: bool
    count: int = 0
    reason: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy")


@router.get("/rfps")
async def browse_rfps(
    store: StoreDep,
    engine: QueryDep,
    tab: Tab = Query(default=Tab.RECENT),
    q: str | None = Query(default=None, description="Free-text search"),
) -> list[dict[str, Any]]:
    """Records for a tab, narrowed by an optional search term."""
    records = engine.view(store.list(), tab=tab, term=q)
    return [record.to_storage() for record in records]


@router.post("/rfps", status_code=201)
async def upload_rfp(
    store: StoreDep,
    project_name: str = Form("", alias="projectName"),
    product_summary: str = Form("", alias="productSummary"),
    deadline: str = Form(""),
    duration_days: int | None = Form(None, alias="durationDays", ge=0),
    status: RFPStatus = Form(RFPStatus.OPEN),
    file_url: str | None = Form(None, alias="fileUrl"),
    file: UploadFile | None = File(None),
) -> dict[str, Any]:
    """Create an RFP from the upload form, with an optional document."""
    upload = None
    if file is not None and file.filename:
        upload = UploadedFile(file_name=file.filename, content=await file.read())

    data = RFPCreate(
        project_name=project_name,
        product_summary=product_summary,
        deadline=deadline,
        duration_days=duration_days,
        status=status,
        file_url=file_url,
    )
    record = await store.create(data, upload=upload)
    return record.to_storage()


@router.patch("/rfps/{record_id}")
async def edit_rfp(record_id: str, patch: RFPPatch, store: StoreDep) -> dict[str, Any]:
    """Apply a partial edit."""
    return store.update(record_id, patch).to_storage()


@router.delete("/rfps/{record_id}", status_code=204)
async def delete_rfp(record_id: str, store: StoreDep) -> Response:
    """Delete an RFP."""
    store.delete(record_id)
    return Response(status_code=204)


@router.get("/rfps/{record_id}/document")
async def get_document(
    record_id: str,
    store: StoreDep,
    engine: QueryDep,
    resolver: ResolverDep,
    download: bool = Query(default=False),
) -> Response:
    """View or download an RFP's document.

    Seed records are looked up too, so their sample documents open while
    the store is empty.
    """
    records = {r.id: r for r in engine.view(store.list(), tab=Tab.RECENT)}
    record = records.get(record_id) or store.get(record_id)

    location = resolver.locate(record)
    if location is None:
        return PlainTextResponse("RFP has no document", status_code=404)
    if isinstance(location, str):
        return RedirectResponse(location)
    if not location.ok:
        return PlainTextResponse(
            location.fallback,
            headers={"X-Attachment-Fallback": location.reason or "decode failed"},
        )

    handle = location.value
    file_name = record.file_name or "document.pdf"
    return FileResponse(
        handle.path,
        media_type=handle.media_type,
        filename=file_name,
        content_disposition_type="attachment" if download else "inline",
        background=BackgroundTask(handle.release),
    )


@router.get("/export")
async def export_rfps(transfer: TransferDep) -> Response:
    """Download every stored RFP as a JSON document."""
    file_name = get_settings().export_file_name
    return Response(
        content=transfer.export_data(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )


@router.post("/import", response_model=ImportReport)
async def import_rfps(
    transfer: TransferDep,
    file: UploadFile = File(...),
    mode: ImportMode = Query(default=ImportMode.MERGE),
) -> ImportReport:
    """Import an export file, merging by id or replacing everything."""
    text = (await file.read()).decode("utf-8", errors="replace")
    return transfer.import_data(text, mode=mode)


@router.post("/share", response_model=ShareLink)
async def create_share_link(
    transfer: TransferDep,
    base_url: str | None = Query(default=None),
) -> ShareLink:
    """Build a link that carries the current collection."""
    return transfer.share_link(base_url)


@router.post("/share/load", response_model=ShareLoadResponse)
async def load_share(
    transfer: TransferDep,
    data: str | None = Query(default=None),
    shared: str | None = Query(default=None),
) -> ShareLoadResponse:
    """Apply share data from the page URL. Never fails the page load."""
    params = {k: v for k, v in {"data": data, "shared": shared}.items() if v}
    result = transfer.load_shared(params)
    if result.ok:
        return ShareLoadResponse(loaded=True, count=len(result.value))
    return ShareLoadResponse(loaded=False, reason=result.reason)
