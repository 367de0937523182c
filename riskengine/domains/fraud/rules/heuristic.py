"""Deterministic feature-threshold scorer standing in for a trained model.

Any `Assessor` can take its slot in the orchestrator, so a real model only
has to implement `assess` and return an `AssessorResult`.
"""

from dataclasses import dataclass

from riskengine.shared.clock import hour_in

from ..config import FraudConfig
from ..models import AssessorResult, HistorySnapshot, TransactionContext
from .base import Assessor, RiskRule, evaluate_rules


@dataclass(frozen=True)
class HeuristicFeatures:
    amount_percentile: float
    hour_of_day: int
    # None when there is no history to compare against
    type_frequency: float | None


def amount_percentile(value: float, history: list[float]) -> float:
    """Share of history strictly below `value`, as 0-100; 100 when value beats all of it."""
    if not history:
        return 0.0
    ordered = sorted(history)
    for index, amount in enumerate(ordered):
        if amount >= value:
            return index / len(ordered) * 100
    return 100.0


def heuristic_rules(config: FraudConfig) -> list[RiskRule]:
    cfg = config.heuristic
    return [
        RiskRule(
            reason="Amount in top 5% of user transactions",
            weight=20,
            predicate=lambda f: f.amount_percentile > cfg.top_percentile,
        ),
        RiskRule(
            reason="Transaction during unusual hours",
            weight=10,
            predicate=lambda f: f.hour_of_day < cfg.quiet_hour_start
            or f.hour_of_day > cfg.quiet_hour_end,
        ),
        RiskRule(
            reason="Unusual transaction type for user",
            weight=15,
            predicate=lambda f: f.type_frequency is not None
            and f.type_frequency < cfg.rare_type_frequency,
        ),
    ]


class HeuristicScorer(Assessor):
    name = "heuristic"

    def extract_features(
        self,
        context: TransactionContext,
        snapshot: HistorySnapshot,
        config: FraudConfig,
    ) -> HeuristicFeatures:
        history = snapshot.transactions
        type_frequency = None
        if history:
            same_type = sum(1 for t in history if t.transaction_type == context.transaction_type)
            type_frequency = same_type / len(history)

        return HeuristicFeatures(
            amount_percentile=amount_percentile(
                context.amount_float, [t.amount_float for t in history]
            ),
            hour_of_day=hour_in(context.timestamp, config.engine.reference_timezone),
            type_frequency=type_frequency,
        )

    def assess(
        self,
        context: TransactionContext,
        snapshot: HistorySnapshot,
        config: FraudConfig,
    ) -> AssessorResult:
        features = self.extract_features(context, snapshot, config)
        score, reasons = evaluate_rules(heuristic_rules(config), features)
        return self._result(score, reasons)
