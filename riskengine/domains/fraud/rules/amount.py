"""Amount-based risk assessment."""

from dataclasses import dataclass
from decimal import Decimal

from ..config import FraudConfig
from ..models import AssessorResult, HistorySnapshot, TransactionContext
from .base import Assessor, RiskRule, evaluate_rules


@dataclass(frozen=True)
class AmountFacts:
    amount: Decimal
    average: Decimal
    maximum: Decimal


def amount_rules(config: FraudConfig) -> list[RiskRule]:
    cfg = config.amount
    return [
        RiskRule(
            reason="Very large transaction amount",
            weight=30,
            predicate=lambda f: f.amount > cfg.very_large_amount,
            exclusive=True,
            group="size",
        ),
        RiskRule(
            reason="Amount significantly higher than user average",
            weight=20,
            predicate=lambda f: f.amount > f.average * cfg.average_multiplier,
            exclusive=True,
            group="size",
        ),
        RiskRule(
            reason="Amount exceeds typical maximum",
            weight=15,
            predicate=lambda f: f.amount > f.maximum * cfg.max_multiplier,
            exclusive=True,
            group="size",
        ),
        RiskRule(
            reason="Round number transaction",
            weight=5,
            predicate=lambda f: f.amount % cfg.round_unit == 0 and f.amount >= cfg.round_min,
        ),
    ]


class AmountRiskAssessor(Assessor):
    """Compares the amount against fixed limits and the user's own history.

    With no history the average and maximum are both zero, so any positive
    amount counts as well above the user's average.
    """

    name = "amount"

    def assess(
        self,
        context: TransactionContext,
        snapshot: HistorySnapshot,
        config: FraudConfig,
    ) -> AssessorResult:
        amounts = [t.amount for t in snapshot.transactions]
        facts = AmountFacts(
            amount=context.amount,
            average=sum(amounts, Decimal(0)) / len(amounts) if amounts else Decimal(0),
            maximum=max(amounts, default=Decimal(0)),
        )
        score, reasons = evaluate_rules(amount_rules(config), facts)
        return self._result(score, reasons)
