from fastapi import APIRouter, Depends

from cardmatch.detection_engine import CardDetectionEngine, get_default_engine
from cardmatch.models.api import BatchDetectRequest, DetectRequest
from cardmatch.models.card import PipelineResult
from cardmatch.purchase_processor import BatchSummary, process_purchases_batch
from cardmatch.utils.logger import api_logger, log_api_request
from cardmatch.utils.safe_handler import safe_handler

router = APIRouter()


# Dependency injection
def get_detection_engine() -> CardDetectionEngine:
    """Dependency injection for the detection engine."""
    return get_default_engine()


# ===============================================================
# CARD DETECTION
# ===============================================================


@router.post(
    "/detect",
    summary="Detect and match a sports card listing",
    response_model=PipelineResult,
)
@safe_handler(default_detail="Card detection failed")
async def detect_card(
    payload: DetectRequest,
    engine: CardDetectionEngine = Depends(get_detection_engine),
):
    """Classify one listing title and match it against the card catalog."""
    log_api_request(api_logger, "POST", "/detect", {"title": payload.title})
    return await engine.detect_and_match_card(payload.title, payload.price)


@router.post(
    "/detect/batch",
    summary="Classify several listings",
    response_model=BatchSummary,
)
@safe_handler(default_detail="Batch detection failed")
async def detect_card_batch(
    payload: BatchDetectRequest,
    engine: CardDetectionEngine = Depends(get_detection_engine),
):
    """Run listings one after another; nothing is written anywhere."""
    log_api_request(api_logger, "POST", "/detect/batch", {"count": len(payload.listings)})
    return await process_purchases_batch(payload.listings, engine)
