from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
import structlog

from rxguard.api.deps import get_prescription_service
from rxguard.schemas.interaction import PrescriptionInteractionsResponse, PrescriptionRequest
from rxguard.services.prescription_service import PrescriptionService

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("/validate", response_class=PlainTextResponse)
async def validate_prescription(
    request: PrescriptionRequest,
    service: PrescriptionService = Depends(get_prescription_service),
):
    """
    校验处方 (Validate Prescription) - 仅计算相互作用摘要，不保存
    """
    return await service.summarize(request.items)


@router.post("/interactions", response_model=PrescriptionInteractionsResponse)
async def prescription_interactions(
    request: PrescriptionRequest,
    service: PrescriptionService = Depends(get_prescription_service),
):
    lines = await service.assess_items(request.items)
    logger.info("prescription_interactions_listed", pairs=len(lines))
    return PrescriptionInteractionsResponse(
        summary=service.render_summary(lines),
        pairs=lines,
    )
