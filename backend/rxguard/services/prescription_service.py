"""
处方相互作用汇总 (Prescription Interaction Aggregator)

对处方中所有 i<j 的药物对逐一评估，按原始顺序拼接为多行摘要。
单个药物对的失败不会中断其余药物对。
"""

import asyncio
from typing import List, Optional, Sequence

import structlog

from rxguard.schemas.drug import PrescriptionItem
from rxguard.schemas.interaction import PairLine, PairVerdict
from rxguard.services.drug_client import DrugLookup
from rxguard.services.interaction_engine import PairAnalyzer, degraded_verdict

logger = structlog.get_logger(__name__)

NO_INTERACTIONS_SUMMARY = "no interactions (fewer than two drugs)"


class PrescriptionService:
    """
    处方服务 (Prescription Service)

    Args:
        analyzer: 本地 InteractionEngine 或远程 InteractionClient
        drug_lookup: 用于解析展示名称 (best-effort)，缺省时直接使用药物 ID
        concurrency: 同时评估的药物对上限
        timeout: 单次名称查询的超时秒数
    """

    def __init__(
        self,
        analyzer: PairAnalyzer,
        drug_lookup: Optional[DrugLookup] = None,
        concurrency: int = 4,
        timeout: Optional[float] = None,
    ):
        self.analyzer = analyzer
        self.drug_lookup = drug_lookup
        self.concurrency = max(1, concurrency)
        self.timeout = timeout

    async def _resolve_name(self, item: PrescriptionItem) -> str:
        fallback = str(item.drug_id)
        if self.drug_lookup is None:
            return fallback
        try:
            result = await asyncio.wait_for(self.drug_lookup.lookup(item.drug_id), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("drug_name_lookup_timeout", drug_id=item.drug_id)
            return fallback
        except Exception as e:
            logger.error("drug_name_lookup_error", drug_id=item.drug_id, error=str(e))
            return fallback

        if result.ok and result.drug.name:
            return result.drug.name
        return fallback

    async def _analyze(self, item_a: PrescriptionItem, item_b: PrescriptionItem) -> PairVerdict:
        try:
            return await self.analyzer.analyze(item_a.drug_id, item_b.drug_id)
        except Exception as e:
            logger.error(
                "pair_analysis_error",
                drug_a_id=item_a.drug_id,
                drug_b_id=item_b.drug_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return degraded_verdict()

    async def _assess_pair(
        self,
        item_a: PrescriptionItem,
        item_b: PrescriptionItem,
        semaphore: asyncio.Semaphore,
    ) -> PairLine:
        async with semaphore:
            name_a, name_b, verdict = await asyncio.gather(
                self._resolve_name(item_a),
                self._resolve_name(item_b),
                self._analyze(item_a, item_b),
            )
        return PairLine(name_a=name_a, name_b=name_b, verdict=verdict)

    async def assess_items(self, items: Optional[Sequence[PrescriptionItem]]) -> List[PairLine]:
        """每个无序药物对 (i<j) 一条结果，顺序与输入一致；重复的药物 ID 同样配对"""
        if not items or len(items) < 2:
            return []

        pairs = [
            (items[i], items[j])
            for i in range(len(items))
            for j in range(i + 1, len(items))
        ]
        semaphore = asyncio.Semaphore(self.concurrency)
        # gather 保持参数顺序
        lines = await asyncio.gather(*(self._assess_pair(a, b, semaphore) for a, b in pairs))
        return list(lines)

    @staticmethod
    def render_summary(lines: Sequence[PairLine]) -> str:
        if not lines:
            return NO_INTERACTIONS_SUMMARY
        return "\n".join(line.render() for line in lines)

    async def summarize(self, items: Optional[Sequence[PrescriptionItem]]) -> str:
        if not items or len(items) < 2:
            return NO_INTERACTIONS_SUMMARY

        lines = await self.assess_items(items)
        logger.info(
            "prescription_summary_built",
            items=len(items),
            pairs=len(lines),
            max_score=max(line.verdict.severity_score for line in lines),
        )
        return self.render_summary(lines)
