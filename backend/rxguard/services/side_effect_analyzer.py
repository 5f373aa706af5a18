from typing import Optional

from rxguard.schemas.drug import Drug
from rxguard.services.rule_engine import overlapping_side_effects


class SideEffectAnalyzer:
    """副作用重叠描述 (Side-Effect Overlap Description)"""

    def describe(self, drug_a: Optional[Drug], drug_b: Optional[Drug]) -> str:
        if drug_a is None or drug_b is None:
            return "One or both drugs not found."

        if drug_a.side_effects is None or drug_b.side_effects is None:
            return "No side-effect data available for one or both drugs."

        common = overlapping_side_effects(drug_a, drug_b)

        if not common:
            return "No overlapping side effects detected."
        if len(common) == 1:
            return f"Single overlapping side effect: {common[0]}"
        return f"Multiple overlapping side effects ({len(common)}): {', '.join(common)}"
