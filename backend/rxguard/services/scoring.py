from typing import Iterable, Optional

from rxguard.schemas.interaction import InteractionRule, RiskLevel
from rxguard.services.rule_engine import HIGH_DOSAGE_MG, VERY_HIGH_DOSAGE_MG

SAFE_BELOW = 30
MODERATE_BELOW = 60
HIGH_BELOW = 90


def score(rules: Optional[Iterable[InteractionRule]]) -> int:
    """Sum of rule severities, unclamped."""
    if not rules:
        return 0
    return sum(rule.severity for rule in rules)


def classify_risk(severity_score: int) -> RiskLevel:
    # each threshold is an exclusive upper bound of its tier
    if severity_score < SAFE_BELOW:
        return RiskLevel.SAFE
    if severity_score < MODERATE_BELOW:
        return RiskLevel.MODERATE
    if severity_score < HIGH_BELOW:
        return RiskLevel.HIGH
    return RiskLevel.CRITICAL


def dosage_tag(total_mg: int) -> str:
    if total_mg > VERY_HIGH_DOSAGE_MG:
        return "Very High"
    elif total_mg > HIGH_DOSAGE_MG:
        return "High"
    return "Acceptable"
