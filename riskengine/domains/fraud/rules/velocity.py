"""Velocity-based risk assessment over the fetched history window."""

from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal

from ..config import FraudConfig
from ..models import AssessorResult, HistorySnapshot, TransactionContext
from .base import Assessor, RiskRule, evaluate_rules


@dataclass(frozen=True)
class VelocityFacts:
    count_1h: int
    count_24h: int
    amount_1h: Decimal


def velocity_rules(config: FraudConfig) -> list[RiskRule]:
    cfg = config.velocity
    return [
        RiskRule(
            reason="Excessive transactions in last hour",
            weight=40,
            predicate=lambda f: f.count_1h > cfg.count_1h_excessive,
            exclusive=True,
            group="hourly_count",
        ),
        RiskRule(
            reason="High transaction frequency",
            weight=20,
            predicate=lambda f: f.count_1h > cfg.count_1h_high,
            exclusive=True,
            group="hourly_count",
        ),
        RiskRule(
            reason="Excessive daily transaction volume",
            weight=30,
            predicate=lambda f: f.count_24h > cfg.count_24h_excessive,
        ),
        RiskRule(
            reason="High monetary velocity",
            weight=35,
            predicate=lambda f: f.amount_1h > cfg.amount_1h_max,
        ),
    ]


class VelocityRiskAssessor(Assessor):
    """Counts and sums the user's transactions in the trailing 1h and 24h."""

    name = "velocity"

    def assess(
        self,
        context: TransactionContext,
        snapshot: HistorySnapshot,
        config: FraudConfig,
    ) -> AssessorResult:
        now = context.timestamp
        one_hour_ago = now - timedelta(hours=1)
        one_day_ago = now - timedelta(hours=24)

        last_hour = [t for t in snapshot.transactions if t.created_at > one_hour_ago]
        last_day = [t for t in snapshot.transactions if t.created_at > one_day_ago]

        facts = VelocityFacts(
            count_1h=len(last_hour),
            count_24h=len(last_day),
            amount_1h=sum((t.amount for t in last_hour), Decimal(0)),
        )
        score, reasons = evaluate_rules(velocity_rules(config), facts)
        return self._result(score, reasons)
