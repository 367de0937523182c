"""Base class for assessors and the rule-table evaluator they share."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from ..config import FraudConfig
from ..models import AssessorResult, HistorySnapshot, TransactionContext


@dataclass(frozen=True)
class RiskRule:
    """One row of an assessor's rule table.

    Exclusive rules sharing a `group` form an else-if ladder: only the first
    match in the group scores. Non-exclusive rules always accumulate.
    """

    reason: str
    weight: int
    predicate: Callable[[Any], bool]
    exclusive: bool = False
    group: str = ""


def evaluate_rules(rules: Iterable[RiskRule], facts: Any) -> tuple[int, list[str]]:
    """Walk the table in order, returning the summed weight and matched reasons."""
    score = 0
    reasons: list[str] = []
    matched_groups: set[str] = set()

    for rule in rules:
        if rule.exclusive and rule.group in matched_groups:
            continue
        if not rule.predicate(facts):
            continue
        score += rule.weight
        reasons.append(rule.reason)
        if rule.exclusive:
            matched_groups.add(rule.group)

    return score, reasons


class Assessor(ABC):
    """A pure function of (context, snapshot, config) yielding a partial score.

    Assessors never perform I/O; everything they read is in the snapshot.
    """

    name: str

    @abstractmethod
    def assess(
        self,
        context: TransactionContext,
        snapshot: HistorySnapshot,
        config: FraudConfig,
    ) -> AssessorResult:
        """Score this factor and return an AssessorResult."""
        ...

    def _result(self, score: int, reasons: list[str]) -> AssessorResult:
        return AssessorResult(assessor=self.name, score=score, reasons=reasons)

    def _empty(self) -> AssessorResult:
        return AssessorResult(assessor=self.name)
