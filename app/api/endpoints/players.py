"""
Player and session endpoints.
"""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_service
from app.schemas.dataset import SuccessResponse
from app.schemas.player import Player, PlayerCreate
from app.schemas.session import Session, SessionCreate
from app.services.tracker_service import TrackerService

router = APIRouter()


@router.post("", summary="Add a player.", response_model=Player, status_code=status.HTTP_201_CREATED)
def create_player(data: PlayerCreate, service: TrackerService = Depends(get_service)):
    """
    Add a player with no sessions.

    Raises:
        HTTPException 400: If the name is missing or blank
        HTTPException 409: If a player with the same name (any case) exists
    """
    return service.add_player(data)


@router.delete("/{player_id}", summary="Delete a player and all of its sessions.", response_model=SuccessResponse)
def delete_player(player_id: str, service: TrackerService = Depends(get_service)):
    service.delete_player(player_id)
    return SuccessResponse()


@router.post("/{player_id}/sessions", summary="Log a training session for a player.", response_model=Session,
             status_code=status.HTTP_201_CREATED, )
def create_session(player_id: str, data: SessionCreate, service: TrackerService = Depends(get_service)):
    return service.add_session(player_id, data)
