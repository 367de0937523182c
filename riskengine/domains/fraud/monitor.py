"""Continuous per-account check for bursts and outlier amounts."""

import asyncio
import statistics
from datetime import UTC, datetime, timedelta

import structlog

from .collaborators import call_collaborator, fetch_profile
from .config import FraudConfig, default_config
from .models import AlertLevel, PatternAlert, TransactionRecord
from .repositories import HistoryRepository, ProfileRepository

logger = structlog.get_logger()

BURST_ALERT = "Multiple transactions in short time period"
LARGE_AMOUNT_ALERT = "Unusually large transaction amounts detected"
FAILED_LOGIN_ALERT = "Multiple failed login attempts"
MONITOR_ERROR_ALERT = "Monitoring system error"

_LEVEL_ORDER = {AlertLevel.LOW: 0, AlertLevel.MEDIUM: 1, AlertLevel.HIGH: 2}


def _raise_level(current: AlertLevel, new: AlertLevel) -> AlertLevel:
    return new if _LEVEL_ORDER[new] > _LEVEL_ORDER[current] else current


def outlier_threshold(amounts: list[float], stddev_multiplier: float) -> float:
    """Mean plus `stddev_multiplier` sample standard deviations (0 spread below two points)."""
    if not amounts:
        return 0.0
    mean = statistics.fmean(amounts)
    stddev = statistics.stdev(amounts) if len(amounts) > 1 else 0.0
    return mean + stddev_multiplier * stddev


class RealTimePatternMonitor:
    """Polled per account, independent of any single transaction."""

    def __init__(
        self,
        history: HistoryRepository,
        profiles: ProfileRepository,
        config: FraudConfig | None = None,
    ) -> None:
        self._history = history
        self._profiles = profiles
        self._config = config or default_config

    async def monitor_real_time_patterns(
        self, user_id: str, now: datetime | None = None
    ) -> PatternAlert:
        now = now or datetime.now(UTC)
        cfg = self._config.monitor
        timeout = self._config.engine.collaborator_timeout_seconds

        try:
            records, profile = await asyncio.gather(
                call_collaborator(
                    "history",
                    self._history.fetch_recent(user_id, cfg.baseline_days, now),
                    timeout,
                ),
                fetch_profile(self._profiles, user_id, timeout),
            )
            result = self.evaluate(records, profile.failed_login_attempts if profile else 0, now)
        except Exception:
            logger.exception("pattern_monitor_failed", user_id=user_id)
            return PatternAlert(alerts=[MONITOR_ERROR_ALERT], risk_level=AlertLevel.MEDIUM)

        if result.alerts:
            logger.warning(
                "pattern_alert_raised",
                user_id=user_id,
                alerts=result.alerts,
                risk_level=result.risk_level.value,
            )
        return result

    def evaluate(
        self,
        records: list[TransactionRecord],
        failed_login_attempts: int,
        now: datetime,
    ) -> PatternAlert:
        cfg = self._config.monitor
        alerts: list[str] = []
        level = AlertLevel.LOW

        baseline_start = now - timedelta(days=cfg.baseline_days)
        baseline = [t for t in records if t.created_at > baseline_start]

        burst_start = now - timedelta(minutes=cfg.burst_window_minutes)
        if sum(1 for t in baseline if t.created_at > burst_start) > cfg.burst_count:
            alerts.append(BURST_ALERT)
            level = _raise_level(level, AlertLevel.HIGH)

        threshold = outlier_threshold([t.amount_float for t in baseline], cfg.stddev_multiplier)
        recent_start = now - timedelta(hours=cfg.large_window_hours)
        if any(t.amount_float > threshold for t in baseline if t.created_at > recent_start):
            alerts.append(LARGE_AMOUNT_ALERT)
            level = _raise_level(level, AlertLevel.MEDIUM)

        if failed_login_attempts > cfg.failed_login_max:
            alerts.append(FAILED_LOGIN_ALERT)
            level = _raise_level(level, AlertLevel.HIGH)

        return PatternAlert(alerts=alerts, risk_level=level)
