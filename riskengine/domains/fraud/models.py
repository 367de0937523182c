"""Pydantic models for the fraud decision domain."""

from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from riskengine.shared.geo import GeoPoint


class RiskLevel(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class RecommendedAction(StrEnum):
    APPROVE = "APPROVE"
    REQUIRE_OTP = "REQUIRE_OTP"
    REVIEW = "REVIEW"
    DECLINE = "DECLINE"


class VerificationStep(StrEnum):
    SMS_OTP = "SMS_OTP"
    DOCUMENT_VERIFICATION = "DOCUMENT_VERIFICATION"
    DEVICE_VERIFICATION = "DEVICE_VERIFICATION"
    LOCATION_CONFIRMATION = "LOCATION_CONFIRMATION"


class AlertLevel(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class TransactionContext(BaseModel):
    """A transaction submitted for assessment. `timestamp` anchors every time window."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    account_id: str
    amount: Decimal = Field(ge=0)
    transaction_type: str
    recipient_account: str | None = None
    recipient_bank: str | None = None
    location: GeoPoint | None = None
    device_fingerprint: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    channel: str
    timestamp: AwareDatetime

    @property
    def amount_float(self) -> float:
        return float(self.amount)


class TransactionRecord(BaseModel):
    """A past transaction as returned by the history collaborator."""

    model_config = ConfigDict(frozen=True)

    transaction_id: str
    user_id: str
    amount: Decimal
    transaction_type: str
    channel: str | None = None
    recipient_account: str | None = None
    location: GeoPoint | None = None
    device_fingerprint: str | None = None
    user_agent: str | None = None
    ip_address: str | None = None
    created_at: AwareDatetime

    @property
    def amount_float(self) -> float:
        return float(self.amount)


class AccountProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    kyc_status: str
    account_status: str
    account_created_at: AwareDatetime
    failed_login_attempts: int = 0
    last_login_at: AwareDatetime | None = None


class BlacklistStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    recipient_blacklisted: bool = False
    ip_blacklisted: bool = False


class HistorySnapshot(BaseModel):
    """Read-only data fetched once per assessment. Transaction lists are newest first."""

    model_config = ConfigDict(frozen=True)

    transactions: list[TransactionRecord] = []
    device_transactions: list[TransactionRecord] = []
    profile: AccountProfile | None = None
    blacklist: BlacklistStatus = Field(default_factory=BlacklistStatus)


class AssessorResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    assessor: str
    score: int = Field(default=0, ge=0)
    reasons: list[str] = []
    # A terminal result replaces the aggregate instead of adding to it.
    terminal: bool = False


class RiskAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    risk_score: int = Field(ge=0, le=100)
    risk_level: RiskLevel
    flagged_reasons: list[str] = []
    recommended_action: RecommendedAction
    additional_verification: list[VerificationStep] = []


class PatternAlert(BaseModel):
    model_config = ConfigDict(frozen=True)

    alerts: list[str] = []
    risk_level: AlertLevel = AlertLevel.LOW


class AssessmentRecord(BaseModel):
    """Audit row written once per completed assessment."""

    user_id: str
    account_id: str
    transaction_type: str
    amount: Decimal
    channel: str
    risk_score: int
    risk_level: RiskLevel
    flagged_reasons: list[str]
    recommended_action: RecommendedAction
    additional_verification: list[VerificationStep]
    assessed_at: AwareDatetime

    @classmethod
    def build(
        cls,
        assessment: RiskAssessment,
        context: TransactionContext,
        assessed_at: datetime,
    ) -> "AssessmentRecord":
        return cls(
            user_id=context.user_id,
            account_id=context.account_id,
            transaction_type=context.transaction_type,
            amount=context.amount,
            channel=context.channel,
            risk_score=assessment.risk_score,
            risk_level=assessment.risk_level,
            flagged_reasons=list(assessment.flagged_reasons),
            recommended_action=assessment.recommended_action,
            additional_verification=list(assessment.additional_verification),
            assessed_at=assessed_at,
        )
