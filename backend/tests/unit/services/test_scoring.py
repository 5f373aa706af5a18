import pytest

from rxguard.schemas.interaction import ConflictType, InteractionRule, RiskLevel
from rxguard.services.scoring import classify_risk, dosage_tag, score


def _rule(severity):
    return InteractionRule(type=ConflictType.CATEGORY_CONFLICT, severity=severity, description="x")


def test_score_sums_severities_without_clamping():
    assert score([_rule(70), _rule(40), _rule(90)]) == 200


@pytest.mark.parametrize("rules", [[], None])
def test_empty_score_is_zero_and_safe(rules):
    assert score(rules) == 0
    assert classify_risk(score(rules)) is RiskLevel.SAFE


@pytest.mark.parametrize("value, expected", [
    (0, RiskLevel.SAFE),
    (29, RiskLevel.SAFE),
    (30, RiskLevel.MODERATE),
    (59, RiskLevel.MODERATE),
    (60, RiskLevel.HIGH),
    (85, RiskLevel.HIGH),
    (89, RiskLevel.HIGH),
    (90, RiskLevel.CRITICAL),
    (250, RiskLevel.CRITICAL),
])
def test_classification_boundaries(value, expected):
    assert classify_risk(value) is expected


def test_risk_levels_are_ordered():
    assert RiskLevel.SAFE < RiskLevel.MODERATE < RiskLevel.HIGH < RiskLevel.CRITICAL
    assert max([RiskLevel.HIGH, RiskLevel.SAFE, RiskLevel.CRITICAL]) is RiskLevel.CRITICAL
    assert RiskLevel.MODERATE >= RiskLevel.MODERATE


@pytest.mark.parametrize("total, expected", [
    (0, "Acceptable"),
    (1000, "Acceptable"),
    (1001, "High"),
    (1500, "High"),
    (1501, "Very High"),
])
def test_dosage_tag(total, expected):
    assert dosage_tag(total) == expected
