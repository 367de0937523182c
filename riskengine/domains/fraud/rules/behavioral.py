"""Behavioral risk assessment: time of day, channel, recipient."""

from dataclasses import dataclass

from riskengine.shared.clock import hour_in

from ..config import FraudConfig
from ..models import AssessorResult, HistorySnapshot, TransactionContext
from .base import Assessor, RiskRule, evaluate_rules


@dataclass(frozen=True)
class BehavioralFacts:
    unusual_hour: bool
    unusual_channel: bool
    new_recipient: bool


def behavioral_rules(config: FraudConfig) -> list[RiskRule]:
    return [
        RiskRule(
            reason="Transaction at unusual time",
            weight=15,
            predicate=lambda f: f.unusual_hour,
        ),
        RiskRule(
            reason="Transaction via unusual channel",
            weight=10,
            predicate=lambda f: f.unusual_channel,
        ),
        RiskRule(
            reason="Transfer to new recipient",
            weight=15,
            predicate=lambda f: f.new_recipient,
        ),
    ]


def _is_unusual_hour(hour: int, history_hours: list[int], max_deviation: float) -> bool:
    if not history_hours or hour in set(history_hours):
        return False
    mean_hour = sum(history_hours) / len(history_hours)
    return abs(hour - mean_hour) > max_deviation


class BehavioralRiskAssessor(Assessor):
    name = "behavioral"

    def assess(
        self,
        context: TransactionContext,
        snapshot: HistorySnapshot,
        config: FraudConfig,
    ) -> AssessorResult:
        history = snapshot.transactions
        zone = config.engine.reference_timezone
        hours = [hour_in(t.created_at, zone) for t in history]
        channels = {t.channel for t in history if t.channel}

        new_recipient = False
        if context.recipient_account:
            new_recipient = not any(
                t.recipient_account == context.recipient_account for t in history
            )

        facts = BehavioralFacts(
            unusual_hour=_is_unusual_hour(
                hour_in(context.timestamp, zone), hours, config.behavioral.hour_deviation
            ),
            unusual_channel=bool(channels) and context.channel not in channels,
            new_recipient=new_recipient,
        )
        score, reasons = evaluate_rules(behavioral_rules(config), facts)
        return self._result(score, reasons)
