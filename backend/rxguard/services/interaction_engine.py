"""
药物对相互作用评估 (Pair Interaction Assessor)

流程:
1. 分别查询两种药物 (任何失败都视为缺失，不向上抛出)
2. 任一缺失 -> 固定降级结论 (MODERATE / 10)，不重试
3. 规则引擎 + 评分 -> 风险等级
4. 生成结构化分析，再统一渲染说明文本
"""

import asyncio
from typing import Optional, Protocol

import structlog

from rxguard.core.monitoring.metrics import DRUG_LOOKUP_FAILURES, PAIR_ASSESSMENTS
from rxguard.schemas.drug import Drug, DrugId
from rxguard.schemas.interaction import PairVerdict, RiskLevel
from rxguard.services.drug_client import DrugLookup
from rxguard.services.report import PairAnalysis, render_analysis_message
from rxguard.services.rule_engine import RuleEngine, combined_dosage
from rxguard.services.scoring import classify_risk, dosage_tag, score
from rxguard.services.side_effect_analyzer import SideEffectAnalyzer

logger = structlog.get_logger(__name__)

UNKNOWN_DRUG = "UNKNOWN"
DEGRADED_RISK_LEVEL = RiskLevel.MODERATE
DEGRADED_SEVERITY_SCORE = 10
DRUG_DATA_UNAVAILABLE_MESSAGE = "One or both drugs could not be fetched from Drug Database Service."


def degraded_verdict(
    drug_a: str = UNKNOWN_DRUG,
    drug_b: str = UNKNOWN_DRUG,
    message: str = DRUG_DATA_UNAVAILABLE_MESSAGE,
) -> PairVerdict:
    """固定降级结论，分数为哨兵值而非规则推导"""
    return PairVerdict(
        drug_a=drug_a,
        drug_b=drug_b,
        risk_level=DEGRADED_RISK_LEVEL,
        severity_score=DEGRADED_SEVERITY_SCORE,
        message=message,
    )


class PairAnalyzer(Protocol):
    async def analyze(self, drug_a_id: DrugId, drug_b_id: DrugId) -> PairVerdict:
        ...


class InteractionEngine:
    """
    本地相互作用评估引擎 (Local Interaction Engine)

    assess() 永不抛出异常：所有依赖失败都降级为固定结论。
    """

    def __init__(
        self,
        drug_lookup: DrugLookup,
        rule_engine: Optional[RuleEngine] = None,
        side_effect_analyzer: Optional[SideEffectAnalyzer] = None,
        timeout: Optional[float] = None,
    ):
        self.drug_lookup = drug_lookup
        self.rule_engine = rule_engine or RuleEngine()
        self.side_effect_analyzer = side_effect_analyzer or SideEffectAnalyzer()
        self.timeout = timeout

    async def _lookup(self, drug_id: DrugId) -> Optional[Drug]:
        try:
            result = await asyncio.wait_for(self.drug_lookup.lookup(drug_id), timeout=self.timeout)
        except asyncio.TimeoutError:
            DRUG_LOOKUP_FAILURES.labels(reason="timeout").inc()
            logger.warning("drug_lookup_timeout", drug_id=drug_id, timeout_s=self.timeout)
            return None
        except Exception as e:
            DRUG_LOOKUP_FAILURES.labels(reason="error").inc()
            logger.error("drug_lookup_error", drug_id=drug_id, error=str(e), error_type=type(e).__name__)
            return None

        if not result.ok:
            DRUG_LOOKUP_FAILURES.labels(reason=result.status.value).inc()
            return None
        return result.drug

    def analyze_drugs(self, drug_a: Drug, drug_b: Drug) -> PairAnalysis:
        rules = self.rule_engine.evaluate(drug_a, drug_b)
        severity_score = score(rules)
        total = combined_dosage(drug_a, drug_b)
        return PairAnalysis(
            drug_a=drug_a,
            drug_b=drug_b,
            rules=rules,
            severity_score=severity_score,
            risk_level=classify_risk(severity_score),
            combined_dosage_mg=total,
            dosage_tag=dosage_tag(total),
            side_effect_summary=self.side_effect_analyzer.describe(drug_a, drug_b),
        )

    async def assess(self, drug_a_id: DrugId, drug_b_id: DrugId) -> PairVerdict:
        drug_a, drug_b = await asyncio.gather(self._lookup(drug_a_id), self._lookup(drug_b_id))

        if drug_a is None or drug_b is None:
            logger.warning(
                "pair_assessment_degraded",
                drug_a_id=drug_a_id,
                drug_b_id=drug_b_id,
                drug_a_found=drug_a is not None,
                drug_b_found=drug_b is not None,
            )
            PAIR_ASSESSMENTS.labels(outcome="degraded").inc()
            return degraded_verdict(
                drug_a=drug_a.name if drug_a is not None else UNKNOWN_DRUG,
                drug_b=drug_b.name if drug_b is not None else UNKNOWN_DRUG,
            )

        analysis = self.analyze_drugs(drug_a, drug_b)
        PAIR_ASSESSMENTS.labels(outcome="assessed").inc()
        logger.info(
            "pair_assessed",
            drug_a=drug_a.name,
            drug_b=drug_b.name,
            rules=[rule.type.value for rule in analysis.rules],
            severity_score=analysis.severity_score,
            risk_level=analysis.risk_level.value,
        )
        return PairVerdict(
            drug_a=drug_a.name,
            drug_b=drug_b.name,
            risk_level=analysis.risk_level,
            severity_score=analysis.severity_score,
            message=render_analysis_message(analysis),
        )

    async def analyze(self, drug_a_id: DrugId, drug_b_id: DrugId) -> PairVerdict:
        """PairAnalyzer 接口，与远程 InteractionClient 可互换"""
        return await self.assess(drug_a_id, drug_b_id)
