"""
药物相互作用规则引擎 (Interaction Rule Engine)

对两种药物的元数据执行确定性规则检查:
1. 同类药物 (category conflict)
2. 副作用重叠 (side-effect overlap)
3. 合并剂量过高 (high combined dosage)
"""

from typing import List, Optional

from rxguard.schemas.drug import Drug
from rxguard.schemas.interaction import ConflictType, InteractionRule

CATEGORY_CONFLICT_SEVERITY = 70
MULTI_OVERLAP_SEVERITY = 40
SINGLE_OVERLAP_SEVERITY = 15
VERY_HIGH_DOSAGE_SEVERITY = 90
HIGH_DOSAGE_SEVERITY = 45

VERY_HIGH_DOSAGE_MG = 1500
HIGH_DOSAGE_MG = 1000


def overlapping_side_effects(drug_a: Optional[Drug], drug_b: Optional[Drug]) -> List[str]:
    """
    A 的副作用中出现在 B 里的条目，保持 A 的顺序且不去重。

    Both the rule engine and the side-effect analyzer count overlap through
    this function, so their numbers always match.
    """
    if drug_a is None or drug_b is None:
        return []
    if drug_a.side_effects is None or drug_b.side_effects is None:
        return []
    other = set(drug_b.side_effects)
    return [effect for effect in drug_a.side_effects if effect in other]


def combined_dosage(drug_a: Drug, drug_b: Drug) -> int:
    return drug_a.dosage_or_zero + drug_b.dosage_or_zero


class RuleEngine:
    """
    规则引擎 (Rule Engine)

    evaluate() 按固定顺序返回触发的规则列表，无外部 I/O，无随机性。
    """

    def evaluate(self, drug_a: Optional[Drug], drug_b: Optional[Drug]) -> List[InteractionRule]:
        rules: List[InteractionRule] = []

        if drug_a is None or drug_b is None:
            return rules

        # 1. 同类药物
        if (
            drug_a.category is not None
            and drug_b.category is not None
            and drug_a.category.lower() == drug_b.category.lower()
        ):
            rules.append(InteractionRule(
                type=ConflictType.CATEGORY_CONFLICT,
                severity=CATEGORY_CONFLICT_SEVERITY,
                description=f"Both drugs are in same category: {drug_a.category}",
            ))

        # 2. 副作用重叠
        overlap = len(overlapping_side_effects(drug_a, drug_b))
        if overlap >= 2:
            rules.append(InteractionRule(
                type=ConflictType.SIDE_EFFECT_OVERLAP,
                severity=MULTI_OVERLAP_SEVERITY,
                description=f"Multiple overlapping side effects: {overlap}",
            ))
        elif overlap == 1:
            rules.append(InteractionRule(
                type=ConflictType.SIDE_EFFECT_OVERLAP,
                severity=SINGLE_OVERLAP_SEVERITY,
                description="Single overlapping side effect",
            ))

        # 3. 合并剂量 (>1500 must be checked before >1000)
        total = combined_dosage(drug_a, drug_b)
        if total > VERY_HIGH_DOSAGE_MG:
            rules.append(InteractionRule(
                type=ConflictType.HIGH_DOSAGE_COMBINATION,
                severity=VERY_HIGH_DOSAGE_SEVERITY,
                description=f"Combined dosage is greater than {VERY_HIGH_DOSAGE_MG} mg",
            ))
        elif total > HIGH_DOSAGE_MG:
            rules.append(InteractionRule(
                type=ConflictType.HIGH_DOSAGE_COMBINATION,
                severity=HIGH_DOSAGE_SEVERITY,
                description=f"Combined dosage is between {HIGH_DOSAGE_MG} and {VERY_HIGH_DOSAGE_MG} mg",
            ))

        return rules
