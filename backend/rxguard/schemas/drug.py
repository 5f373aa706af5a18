from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

DrugId = Union[int, str]


class Drug(BaseModel):
    """
    药物快照 (Drug Snapshot)
    由外部 Drug Database Service 提供，核心逻辑只读。
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: Optional[DrugId] = Field(None, description="Opaque drug key")
    name: str = Field(..., description="Drug name")
    category: Optional[str] = Field(None, description="Therapeutic category, e.g. 'NSAID'")
    dosage_mg: Optional[int] = Field(None, alias="dosageMg", ge=0, description="Dosage in mg; unknown counts as 0")
    side_effects: Optional[List[str]] = Field(None, alias="sideEffects", description="Ordered side-effect list")

    @property
    def dosage_or_zero(self) -> int:
        return self.dosage_mg if self.dosage_mg is not None else 0


class PrescriptionItem(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    drug_id: DrugId = Field(..., alias="drugId", description="Drug identifier in the drug store")
    dose_mg: Optional[int] = Field(None, alias="doseMg", description="Prescribed dose (mg)")
