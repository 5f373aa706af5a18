from fastapi import APIRouter, Depends, Query

from rxguard.api.deps import get_interaction_engine
from rxguard.schemas.interaction import PairVerdict
from rxguard.services.interaction_engine import InteractionEngine

router = APIRouter()

DRUG_ID_PATTERN = r"^[A-Za-z0-9_-]+$"


@router.get("/analyze", response_model=PairVerdict)
async def analyze_pair(
    drug_a: str = Query(..., alias="drugA", min_length=1, pattern=DRUG_ID_PATTERN),
    drug_b: str = Query(..., alias="drugB", min_length=1, pattern=DRUG_ID_PATTERN),
    engine: InteractionEngine = Depends(get_interaction_engine),
):
    """
    药物对相互作用分析 (Pair Interaction Analysis)

    Example: GET /interactions/analyze?drugA=1&drugB=2
    药物数据不可用时返回降级结论 (MODERATE / 10)，不返回错误码。
    """
    return await engine.assess(drug_a, drug_b)
