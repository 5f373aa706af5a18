"""
Services Package

- RuleEngine / SideEffectAnalyzer / scoring: 规则评估与评分
- InteractionEngine: 本地药物对评估
- InteractionClient: 远程药物对评估
- PrescriptionService: 处方汇总
"""

from rxguard.services.rule_engine import RuleEngine, overlapping_side_effects
from rxguard.services.side_effect_analyzer import SideEffectAnalyzer
from rxguard.services.drug_client import DrugLookupResult, HttpDrugClient, MockDrugStore
from rxguard.services.interaction_engine import InteractionEngine
from rxguard.services.interaction_client import InteractionClient
from rxguard.services.prescription_service import PrescriptionService

__all__ = [
    'RuleEngine',
    'SideEffectAnalyzer',
    'DrugLookupResult',
    'HttpDrugClient',
    'MockDrugStore',
    'InteractionEngine',
    'InteractionClient',
    'PrescriptionService',
    'overlapping_side_effects',
]
