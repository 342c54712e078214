"""
Dataset endpoints.

Whole-store read, overwrite and clear.
"""

from fastapi import APIRouter, Depends

from app.api.dependencies import get_service
from app.schemas.dataset import Dataset, DatasetReplace, SuccessResponse
from app.services.tracker_service import TrackerService

router = APIRouter()


@router.get("", summary="Get every player with every session.", response_model=Dataset)
def get_data(service: TrackerService = Depends(get_service)):
    return service.get_dataset()


@router.put("", summary="Overwrite the entire dataset (use with care).", response_model=SuccessResponse)
def replace_data(payload: DatasetReplace, service: TrackerService = Depends(get_service)):
    service.replace_dataset(payload)
    return SuccessResponse()


@router.delete("", summary="Delete all players and sessions.", response_model=SuccessResponse)
def clear_data(service: TrackerService = Depends(get_service)):
    service.clear()
    return SuccessResponse()
