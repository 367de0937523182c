"""Fraud decision configuration with sensible defaults."""

import os
from decimal import Decimal
from dataclasses import dataclass, field


@dataclass
class AmountThresholds:
    very_large_amount: Decimal = Decimal("1000000")
    average_multiplier: Decimal = Decimal("5")
    max_multiplier: Decimal = Decimal("1.5")
    round_unit: Decimal = Decimal("1000")
    round_min: Decimal = Decimal("10000")


@dataclass
class VelocityThresholds:
    count_1h_excessive: int = 10
    count_1h_high: int = 5
    count_24h_excessive: int = 50
    amount_1h_max: Decimal = Decimal("5000000")


@dataclass
class LocationSettings:
    similarity_degrees: float = 0.1
    max_known_locations: int = 20
    high_risk_countries: tuple[str, ...] = ()


@dataclass
class DeviceSettings:
    lookback_days: int = 60
    suspicious_agent_patterns: tuple[str, ...] = (
        "bot",
        "crawler",
        "spider",
        "curl",
        "wget",
        "python",
    )


@dataclass
class BehavioralSettings:
    hour_deviation: float = 6.0


@dataclass
class AccountSettings:
    new_account_days: int = 7
    recent_account_days: int = 30
    failed_login_max: int = 3


@dataclass
class HeuristicSettings:
    top_percentile: float = 95.0
    quiet_hour_start: int = 6
    quiet_hour_end: int = 23
    rare_type_frequency: float = 0.1


@dataclass
class ClassificationThresholds:
    critical: int = 80
    high: int = 60
    medium: int = 30
    decline_score: int = 90
    review_score: int = 70
    otp_score: int = 40
    score_cap: int = 100


@dataclass
class TakeoverSettings:
    history_days: int = 30
    history_limit: int = 10
    inactivity_hours: float = 24 * 7
    max_travel_speed_kmh: float = 1000.0
    suspicious_score: int = 40
    block_score: int = 70
    two_factor_score: int = 50
    email_score: int = 30


@dataclass
class MonitorSettings:
    burst_window_minutes: int = 5
    burst_count: int = 5
    baseline_days: int = 30
    large_window_hours: int = 1
    stddev_multiplier: float = 3.0
    failed_login_max: int = 3


@dataclass
class EngineSettings:
    history_window_days: int = 30
    collaborator_timeout_seconds: float = 5.0
    audit_timeout_seconds: float = 10.0
    # IANA zone in which hour-of-day rules read timestamps
    reference_timezone: str = "UTC"


@dataclass
class FraudConfig:
    amount: AmountThresholds = field(default_factory=AmountThresholds)
    velocity: VelocityThresholds = field(default_factory=VelocityThresholds)
    location: LocationSettings = field(default_factory=LocationSettings)
    device: DeviceSettings = field(default_factory=DeviceSettings)
    behavioral: BehavioralSettings = field(default_factory=BehavioralSettings)
    account: AccountSettings = field(default_factory=AccountSettings)
    heuristic: HeuristicSettings = field(default_factory=HeuristicSettings)
    classification: ClassificationThresholds = field(default_factory=ClassificationThresholds)
    takeover: TakeoverSettings = field(default_factory=TakeoverSettings)
    monitor: MonitorSettings = field(default_factory=MonitorSettings)
    engine: EngineSettings = field(default_factory=EngineSettings)

    @classmethod
    def from_env(cls) -> "FraudConfig":
        """Load config with env var overrides. Env vars use FRAUD_ prefix."""
        config = cls()

        # Amount overrides
        if v := os.getenv("FRAUD_VERY_LARGE_AMOUNT"):
            config.amount.very_large_amount = Decimal(v)

        # Velocity overrides
        if v := os.getenv("FRAUD_TXN_COUNT_1H_MAX"):
            config.velocity.count_1h_excessive = int(v)
        if v := os.getenv("FRAUD_TXN_COUNT_24H_MAX"):
            config.velocity.count_24h_excessive = int(v)
        if v := os.getenv("FRAUD_TXN_AMOUNT_1H_MAX"):
            config.velocity.amount_1h_max = Decimal(v)

        # Location overrides
        if v := os.getenv("FRAUD_HIGH_RISK_COUNTRIES"):
            config.location.high_risk_countries = tuple(
                c.strip().upper() for c in v.split(",") if c.strip()
            )

        # Takeover overrides
        if v := os.getenv("FRAUD_MAX_TRAVEL_SPEED_KMH"):
            config.takeover.max_travel_speed_kmh = float(v)

        # Engine overrides
        if v := os.getenv("FRAUD_HISTORY_WINDOW_DAYS"):
            config.engine.history_window_days = int(v)
        if v := os.getenv("FRAUD_COLLABORATOR_TIMEOUT_SECONDS"):
            config.engine.collaborator_timeout_seconds = float(v)
        if v := os.getenv("FRAUD_AUDIT_TIMEOUT_SECONDS"):
            config.engine.audit_timeout_seconds = float(v)
        if v := os.getenv("FRAUD_REFERENCE_TIMEZONE"):
            config.engine.reference_timezone = v.strip()

        return config


# Module-level default instance
default_config = FraudConfig()
