"""Browse route — directory listings and file previews."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from nsbrowse.api.deps import get_browse_service
from nsbrowse.browse.service import BrowseRequest, BrowseService
from nsbrowse.schemas.browse import BrowseView

router = APIRouter()


@router.get("", response_model=BrowseView)
async def browse(
    path: str | None = None,
    offset: str | None = None,
    end: str | None = None,
    limit: str | None = None,
    service: BrowseService = Depends(get_browse_service),
):
    """Listing of a directory or preview of a file; errors are reported inline."""
    return await service.browse(BrowseRequest(path=path, offset=offset, end=end, limit=limit))
