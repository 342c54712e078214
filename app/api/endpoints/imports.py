"""
Import endpoint.

Merges an exported dataset into the store by player name.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_service
from app.schemas.dataset import ImportRequest, ImportResult
from app.services.tracker_service import TrackerService

router = APIRouter()


@router.post("", summary="Merge players and sessions from an exported dataset.", response_model=ImportResult)
def import_players(data: ImportRequest, service: TrackerService = Depends(get_service)):
    return service.import_players(data)
