import pytest

from rxguard.schemas.drug import Drug
from rxguard.services.rule_engine import RuleEngine
from rxguard.services.side_effect_analyzer import SideEffectAnalyzer

analyzer = SideEffectAnalyzer()


def _drug(name, effects):
    return Drug(id=name, name=name, side_effects=effects)


def test_missing_drug():
    assert analyzer.describe(None, _drug("B", ["Rash"])) == "One or both drugs not found."


def test_missing_side_effect_data():
    assert analyzer.describe(_drug("A", None), _drug("B", ["Rash"])) == \
        "No side-effect data available for one or both drugs."


def test_no_overlap():
    assert analyzer.describe(_drug("A", ["Rash"]), _drug("B", ["Gas"])) == "No overlapping side effects detected."


def test_single_overlap_names_the_effect():
    text = analyzer.describe(_drug("A", ["Nausea", "Headache"]), _drug("B", ["Nausea", "Rash"]))

    assert text == "Single overlapping side effect: Nausea"


def test_multiple_overlap_lists_every_value_with_count():
    text = analyzer.describe(
        _drug("A", ["Nausea", "Rash", "Nausea", "Gas"]),
        _drug("B", ["Rash", "Nausea"]),
    )

    assert text == "Multiple overlapping side effects (3): Nausea, Rash, Nausea"


@pytest.mark.parametrize("effects_a, effects_b, expected_severity", [
    (["Gas"], ["Rash"], None),
    (["Gas", "Rash"], ["Rash"], 15),
    (["Gas", "Rash"], ["Rash", "Gas"], 40),
])
def test_analyzer_agrees_with_rule_engine(effects_a, effects_b, expected_severity):
    a, b = _drug("A", effects_a), _drug("B", effects_b)

    rules = RuleEngine().evaluate(a, b)
    text = analyzer.describe(a, b)

    if expected_severity is None:
        assert rules == []
        assert text.startswith("No overlapping")
    elif expected_severity == 15:
        assert [r.severity for r in rules] == [15]
        assert text.startswith("Single overlapping side effect")
    else:
        assert [r.severity for r in rules] == [40]
        assert text.startswith("Multiple overlapping side effects (2)")
