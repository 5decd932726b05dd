"""
Hashtree API Algorithms Route

Lists the hash algorithms the server accepts.
"""

from fastapi import APIRouter

from api.deps import get_tree_config
from api.models.responses import AlgorithmsResponse
from core.crypto import supported_algorithms


router = APIRouter(tags=["algorithms"])


@router.get("/algorithms", response_model=AlgorithmsResponse)
async def list_algorithms() -> AlgorithmsResponse:
    return AlgorithmsResponse(
        algorithms=supported_algorithms(),
        default=get_tree_config().algorithm.value,
    )
