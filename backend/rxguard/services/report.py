"""
分析结果渲染 (Analysis Rendering)

决策逻辑先产出 PairAnalysis，再由 render_analysis_message() 统一格式化为文本。
"""

from dataclasses import dataclass, field
from typing import List

from rxguard.schemas.drug import Drug
from rxguard.schemas.interaction import InteractionRule, RiskLevel

RECOMMENDATION = "Recommendation: Consult with a healthcare professional before combining these medications."


@dataclass(frozen=True)
class PairAnalysis:
    drug_a: Drug
    drug_b: Drug
    rules: List[InteractionRule] = field(default_factory=list)
    severity_score: int = 0
    risk_level: RiskLevel = RiskLevel.SAFE
    combined_dosage_mg: int = 0
    dosage_tag: str = "Acceptable"
    side_effect_summary: str = ""


def _drug_line(label: str, drug: Drug) -> str:
    line = f"• {label}: {drug.name}"
    if drug.category is not None:
        line += f" ({drug.category})"
    if drug.dosage_mg is not None:
        line += f" - {drug.dosage_mg}mg"
    return line


def _dosage_marker(tag: str) -> str:
    return f"✓ {tag}" if tag == "Acceptable" else f"⚠️ {tag}"


def render_analysis_message(analysis: PairAnalysis) -> str:
    lines = [
        "Analysis Summary:",
        _drug_line("Drug A", analysis.drug_a),
        _drug_line("Drug B", analysis.drug_b),
        "",
        f"Combined Dosage: {analysis.combined_dosage_mg}mg ({_dosage_marker(analysis.dosage_tag)})",
        "",
        f"Side Effects: {analysis.side_effect_summary}",
        "",
    ]

    if not analysis.rules:
        lines.extend([
            "✓ No significant interaction risks detected.",
            "✓ Category check: Passed (different categories)",
            "✓ Dosage check: Passed (within safe limits)",
            "✓ Side effects: No significant overlap",
            "",
            "Overall Assessment: These drugs can be safely used together.",
        ])
    else:
        lines.append("⚠️ Interaction Risks Detected:")
        lines.extend(f"• {rule.description}" for rule in analysis.rules)
        lines.extend(["", RECOMMENDATION])

    return "\n".join(lines)
