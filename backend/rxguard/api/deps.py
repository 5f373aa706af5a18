from fastapi import Depends

from rxguard.core.config import settings
from rxguard.core.infra import InfrastructureManager
from rxguard.services.drug_client import DrugLookup, HttpDrugClient, MockDrugStore
from rxguard.services.interaction_client import InteractionClient
from rxguard.services.interaction_engine import InteractionEngine, PairAnalyzer
from rxguard.services.prescription_service import PrescriptionService

# 只读示例目录，可在请求间共享
mock_drug_store = MockDrugStore()


def get_drug_lookup() -> DrugLookup:
    if settings.DRUG_SOURCE == "http":
        return HttpDrugClient(
            InfrastructureManager.get_http_client(),
            settings.DRUG_SERVICE_URL,
            timeout=settings.EXTERNAL_CALL_TIMEOUT_SECONDS,
        )
    return mock_drug_store


def get_interaction_engine(drug_lookup: DrugLookup = Depends(get_drug_lookup)) -> InteractionEngine:
    return InteractionEngine(drug_lookup, timeout=settings.EXTERNAL_CALL_TIMEOUT_SECONDS)


def get_pair_analyzer(engine: InteractionEngine = Depends(get_interaction_engine)) -> PairAnalyzer:
    if settings.INTERACTION_MODE == "remote":
        return InteractionClient(
            InfrastructureManager.get_http_client(),
            settings.INTERACTION_SERVICE_URL,
            timeout=settings.EXTERNAL_CALL_TIMEOUT_SECONDS,
        )
    return engine


def get_prescription_service(
    analyzer: PairAnalyzer = Depends(get_pair_analyzer),
    drug_lookup: DrugLookup = Depends(get_drug_lookup),
) -> PrescriptionService:
    return PrescriptionService(
        analyzer,
        drug_lookup=drug_lookup,
        concurrency=settings.PAIR_CONCURRENCY,
        timeout=settings.EXTERNAL_CALL_TIMEOUT_SECONDS,
    )
