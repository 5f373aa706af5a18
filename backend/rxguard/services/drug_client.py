"""
药物查询客户端 (Drug Lookup Clients)

所有查询都返回 DrugLookupResult (FOUND / NOT_FOUND / UNREACHABLE)，
调用方显式分支处理，异常不会越过 lookup() 边界。
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Protocol
from urllib.parse import quote

import httpx
import structlog

from rxguard.core.exceptions import ResourceNotFoundException, UpstreamUnavailableException
from rxguard.schemas.drug import Drug, DrugId

logger = structlog.get_logger(__name__)


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class DrugLookupResult:
    status: LookupStatus
    drug: Optional[Drug] = None

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.FOUND and self.drug is not None

    @classmethod
    def found(cls, drug: Drug) -> "DrugLookupResult":
        return cls(LookupStatus.FOUND, drug)

    @classmethod
    def not_found(cls) -> "DrugLookupResult":
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def unreachable(cls) -> "DrugLookupResult":
        return cls(LookupStatus.UNREACHABLE)


class DrugLookup(Protocol):
    async def lookup(self, drug_id: DrugId) -> DrugLookupResult:
        ...


class HttpDrugClient:
    """
    Drug Database Service REST 客户端

    GET {base_url}/drugs/{id}
    - 200 -> FOUND
    - 404 -> NOT_FOUND
    - 超时 / 连接失败 / 5xx / 非法响应体 -> UNREACHABLE
    单次请求即为结论，不重试。
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str, timeout: float = 5.0):
        self._client = client
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def drug_url(self, drug_id: DrugId) -> str:
        """id 只能占据 /drugs/ 下的单个路径段，'/', '?', '#' 等全部转义。"""
        segment = quote(str(drug_id), safe="")
        if segment in ("", ".", ".."):
            raise ResourceNotFoundException(f"Drug not found with id: {drug_id}", details={"drug_id": drug_id})
        return f"{self.base_url}/drugs/{segment}"

    async def _fetch(self, drug_id: DrugId) -> Drug:
        url = self.drug_url(drug_id)
        try:
            response = await self._client.get(url, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise UpstreamUnavailableException("Drug lookup timed out", details={"drug_id": drug_id}) from e
        except httpx.HTTPError as e:
            raise UpstreamUnavailableException(
                "Drug Database Service unreachable",
                details={"drug_id": drug_id, "error": str(e)},
            ) from e

        if response.status_code == 404:
            raise ResourceNotFoundException(f"Drug not found with id: {drug_id}", details={"drug_id": drug_id})
        if response.status_code >= 400:
            raise UpstreamUnavailableException(
                "Drug Database Service returned an error",
                details={"drug_id": drug_id, "status_code": response.status_code},
            )

        try:
            return Drug.model_validate(response.json())
        except ValueError as e:
            raise UpstreamUnavailableException(
                "Drug Database Service returned an invalid payload",
                details={"drug_id": drug_id, "error": str(e)},
            ) from e

    async def lookup(self, drug_id: DrugId) -> DrugLookupResult:
        try:
            drug = await asyncio.wait_for(self._fetch(drug_id), timeout=self.timeout)
        except ResourceNotFoundException:
            logger.info("drug_lookup_not_found", drug_id=drug_id)
            return DrugLookupResult.not_found()
        except UpstreamUnavailableException as e:
            logger.warning("drug_lookup_failed", drug_id=drug_id, error=e.msg, details=e.details)
            return DrugLookupResult.unreachable()
        except asyncio.TimeoutError:
            logger.warning("drug_lookup_failed", drug_id=drug_id, error="timeout")
            return DrugLookupResult.unreachable()

        return DrugLookupResult.found(drug)


class MockDrugStore:
    """
    模拟药物数据库 (Mock Drug Database)
    本地运行与测试用的内存药品目录，默认载入 10 种示例药物 (id 1-10)。
    """

    def __init__(self, drugs: Optional[Iterable[Drug]] = None):
        self._drugs: Dict[str, Drug] = {}
        self._init_db(drugs)

    def _init_db(self, drugs: Optional[Iterable[Drug]]):
        if drugs is None:
            drugs = _sample_drugs()
        for drug in drugs:
            self._drugs[str(drug.id)] = drug

    async def lookup(self, drug_id: DrugId) -> DrugLookupResult:
        drug = self._drugs.get(str(drug_id))
        if drug is None:
            logger.info("drug_lookup_not_found", drug_id=drug_id, source="mock")
            return DrugLookupResult.not_found()
        return DrugLookupResult.found(drug)


def _sample_drugs():
    samples = [
        ("Paracetamol", "Analgesic", 500, ["Nausea", "Rash"]),
        ("Ibuprofen", "NSAID", 400, ["Stomach pain", "Headache"]),
        ("Amoxicillin", "Antibiotic", 250, ["Diarrhea", "Allergic reaction"]),
        ("Cetirizine", "Antihistamine", 10, ["Drowsiness", "Dry mouth"]),
        ("Metformin", "Anti-diabetic", 500, ["Vomiting", "Weakness"]),
        ("Atorvastatin", "Cholesterol", 20, ["Muscle pain", "Liver issues"]),
        ("Azithromycin", "Antibiotic", 500, ["Nausea", "Stomach upset"]),
        ("Aspirin", "Painkiller", 300, ["Bleeding", "Upset stomach"]),
        ("Ciprofloxacin", "Antibiotic", 500, ["Dizziness", "Joint pain"]),
        ("Omeprazole", "Antacid", 20, ["Constipation", "Gas"]),
    ]
    return [
        Drug(id=idx, name=name, category=category, dosage_mg=dosage, side_effects=effects)
        for idx, (name, category, dosage, effects) in enumerate(samples, start=1)
    ]
