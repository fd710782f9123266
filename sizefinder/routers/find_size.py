from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool

from ..security import verify_api_key
from ..errors import InvalidMeasurement, PageFetchError
from ..schemas.size import FindSizeMessage, FindSizeRequest, FindSizeResponse, MessageResponse
from ..services.finder import NOT_FOUND_MESSAGE, SizeFinder
from ..services.page_api import PageClient
from ..services.storage import MeasurementStore


router = APIRouter(prefix="/find-size", tags=["find-size"], dependencies=[Depends(verify_api_key)])

# Shared so the located-size-info cache survives across requests
finder = SizeFinder()


@router.post("")
async def find_size(request: FindSizeRequest) -> FindSizeResponse:
    # Keep the last measurements the shopper entered
    await run_in_threadpool(MeasurementStore().save, request.measurements)

    html = request.html or ""
    if request.url:
        try:
            html = await PageClient().fetch_html(request.url)
        except PageFetchError:
            raise HTTPException(status_code=502, detail=NOT_FOUND_MESSAGE)

    try:
        recommendation, size_info = await run_in_threadpool(finder.find_size, html, request.measurements)
    except InvalidMeasurement as e:
        raise HTTPException(status_code=422, detail=str(e))

    return FindSizeResponse(
        size=recommendation.size,
        explanation=recommendation.explanation,
        source=recommendation.source,
        size_info=size_info,
    )


@router.post("/message")
def find_size_message(message: FindSizeMessage) -> MessageResponse:
    """Message envelope: {"type": "FIND_SIZE", "measurements": {...}, "html": "..."}."""
    try:
        return finder.handle_message(message)
    except InvalidMeasurement as e:
        raise HTTPException(status_code=422, detail=str(e))
