"""Device and user-agent risk assessment."""

import re
from dataclasses import dataclass
from datetime import timedelta

from ..config import FraudConfig
from ..models import AssessorResult, HistorySnapshot, TransactionContext
from .base import Assessor, RiskRule, evaluate_rules


@dataclass(frozen=True)
class DeviceFacts:
    new_device: bool
    new_user_agent: bool
    suspicious_agent: bool


def device_rules(config: FraudConfig) -> list[RiskRule]:
    return [
        RiskRule(
            reason="Transaction from new device",
            weight=20,
            predicate=lambda f: f.new_device,
        ),
        RiskRule(
            reason="Transaction from new browser/app",
            weight=15,
            predicate=lambda f: f.new_user_agent,
        ),
        RiskRule(
            reason="Suspicious browser/device characteristics",
            weight=25,
            predicate=lambda f: f.suspicious_agent,
        ),
    ]


def is_suspicious_user_agent(user_agent: str, patterns: tuple[str, ...]) -> bool:
    return any(re.search(p, user_agent, re.IGNORECASE) for p in patterns)


class DeviceRiskAssessor(Assessor):
    """Compares the device fingerprint and user agent against the device look-back window."""

    name = "device"

    def assess(
        self,
        context: TransactionContext,
        snapshot: HistorySnapshot,
        config: FraudConfig,
    ) -> AssessorResult:
        cfg = config.device
        cutoff = context.timestamp - timedelta(days=cfg.lookback_days)

        # Only rows that carry a fingerprint count as device history
        seen = [
            t
            for t in snapshot.device_transactions
            if t.device_fingerprint and t.created_at > cutoff
        ]
        known_devices = {t.device_fingerprint for t in seen}
        known_agents = {t.user_agent for t in seen if t.user_agent}

        fingerprint = context.device_fingerprint
        user_agent = context.user_agent
        facts = DeviceFacts(
            new_device=bool(fingerprint) and fingerprint not in known_devices,
            new_user_agent=bool(user_agent) and user_agent not in known_agents,
            suspicious_agent=bool(user_agent)
            and is_suspicious_user_agent(user_agent, cfg.suspicious_agent_patterns),
        )
        score, reasons = evaluate_rules(device_rules(config), facts)
        return self._result(score, reasons)
