from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from rxguard.schemas.drug import PrescriptionItem


class ConflictType(str, Enum):
    CATEGORY_CONFLICT = "CATEGORY_CONFLICT"
    SIDE_EFFECT_OVERLAP = "SIDE_EFFECT_OVERLAP"
    HIGH_DOSAGE_COMBINATION = "HIGH_DOSAGE_COMBINATION"


class RiskLevel(str, Enum):
    """Ordered risk tiers: SAFE < MODERATE < HIGH < CRITICAL"""
    SAFE = "SAFE"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    def __lt__(self, other):
        if isinstance(other, RiskLevel):
            return self.rank < other.rank
        return NotImplemented

    def __le__(self, other):
        if isinstance(other, RiskLevel):
            return self.rank <= other.rank
        return NotImplemented

    def __gt__(self, other):
        if isinstance(other, RiskLevel):
            return self.rank > other.rank
        return NotImplemented

    def __ge__(self, other):
        if isinstance(other, RiskLevel):
            return self.rank >= other.rank
        return NotImplemented


class InteractionRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ConflictType
    severity: int = Field(..., description="Severity contribution, 0-100 by convention")
    description: str


class PairVerdict(BaseModel):
    """
    药物对判定结果 (Pair Verdict)
    字段别名与 interaction-service 的 JSON 结构保持一致 (drugA / riskLevel ...)。
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    drug_a: str = Field(..., alias="drugA")
    drug_b: str = Field(..., alias="drugB")
    risk_level: RiskLevel = Field(..., alias="riskLevel")
    severity_score: int = Field(..., alias="severityScore")
    message: str = ""

    @field_validator("message", mode="before")
    @classmethod
    def _null_message_as_empty(cls, value):
        return "" if value is None else value


class PairLine(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name_a: str = Field(..., alias="drugA")
    name_b: str = Field(..., alias="drugB")
    verdict: PairVerdict

    def render(self) -> str:
        return (
            f"{self.name_a} <-> {self.name_b} => risk={self.verdict.risk_level.value}"
            f" score={self.verdict.severity_score} message={self.verdict.message}"
        )


class PrescriptionRequest(BaseModel):
    items: Optional[List[PrescriptionItem]] = Field(None, description="Prescribed drugs, in order")


class PrescriptionInteractionsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str
    pairs: List[PairLine] = []
