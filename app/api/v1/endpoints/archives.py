from fastapi import APIRouter

from app.core.deps import Reference
from app.schemas.planning import ArchiveCreate, ArchiveDelete, SeasonArchive
from app.services.archives import build_season_archive, delete_archive, upsert_archive

router = APIRouter(prefix="/archives", tags=["archives"])


@router.post("", response_model=list[SeasonArchive])
async def archive_season(body: ArchiveCreate, reference: Reference):
    """Snapshot the garden for ``season_year`` and merge it into the supplied archives."""
    archive = build_season_archive(body.garden, body.season_year, reference)
    return upsert_archive(body.archives, archive)


@router.post("/delete", response_model=list[SeasonArchive])
async def remove_archive(body: ArchiveDelete):
    return delete_archive(body.archives, body.garden_id, body.season_year)
