"""Blacklist hits, looked up before assessment and carried in the snapshot."""

from ..config import FraudConfig
from ..models import AssessorResult, BlacklistStatus, HistorySnapshot, TransactionContext
from .base import Assessor, RiskRule, evaluate_rules

BLACKLIST_RULES = [
    RiskRule(
        reason="Transfer to blacklisted account",
        weight=80,
        predicate=lambda s: s.recipient_blacklisted,
    ),
    RiskRule(
        reason="Transaction from blacklisted IP",
        weight=60,
        predicate=lambda s: s.ip_blacklisted,
    ),
]


class BlacklistChecker(Assessor):
    name = "blacklist"

    def assess(
        self,
        context: TransactionContext,
        snapshot: HistorySnapshot,
        config: FraudConfig,
    ) -> AssessorResult:
        status: BlacklistStatus = snapshot.blacklist
        score, reasons = evaluate_rules(BLACKLIST_RULES, status)
        return self._result(score, reasons)
