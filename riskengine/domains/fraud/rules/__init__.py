"""Risk assessors.

Exports the assessor classes and `default_assessors()`, which returns one
instance of each in the fixed evaluation order used for scores and reasons.
"""

from .account import ACCOUNT_NOT_FOUND_REASON, AccountRiskAssessor
from .amount import AmountRiskAssessor
from .base import Assessor, RiskRule, evaluate_rules
from .behavioral import BehavioralRiskAssessor
from .blacklist import BlacklistChecker
from .device import DeviceRiskAssessor
from .heuristic import HeuristicScorer
from .location import LocationRiskAssessor
from .velocity import VelocityRiskAssessor


def default_assessors(risk_model: Assessor | None = None) -> list[Assessor]:
    """Assessors in evaluation order; `risk_model` replaces the heuristic scorer."""
    return [
        AmountRiskAssessor(),
        VelocityRiskAssessor(),
        LocationRiskAssessor(),
        DeviceRiskAssessor(),
        BehavioralRiskAssessor(),
        AccountRiskAssessor(),
        BlacklistChecker(),
        risk_model or HeuristicScorer(),
    ]


__all__ = [
    "ACCOUNT_NOT_FOUND_REASON",
    "Assessor",
    "RiskRule",
    "default_assessors",
    "evaluate_rules",
    "AmountRiskAssessor",
    "VelocityRiskAssessor",
    "LocationRiskAssessor",
    "DeviceRiskAssessor",
    "BehavioralRiskAssessor",
    "AccountRiskAssessor",
    "BlacklistChecker",
    "HeuristicScorer",
]
