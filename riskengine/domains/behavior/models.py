"""Pydantic models for login-time account takeover detection."""

from enum import StrEnum

from pydantic import AwareDatetime, BaseModel, ConfigDict

from riskengine.shared.geo import GeoPoint


class TakeoverAction(StrEnum):
    ALLOW = "ALLOW"
    REQUIRE_EMAIL_VERIFICATION = "REQUIRE_EMAIL_VERIFICATION"
    REQUIRE_2FA = "REQUIRE_2FA"
    BLOCK_ACCOUNT = "BLOCK_ACCOUNT"


class LoginContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    ip_address: str
    user_agent: str
    device_fingerprint: str | None = None
    location: GeoPoint | None = None


class LoginRecord(BaseModel):
    """A past login for the same account."""

    model_config = ConfigDict(frozen=True)

    ip_address: str | None = None
    user_agent: str | None = None
    location: GeoPoint | None = None
    created_at: AwareDatetime


class TakeoverAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Uncapped: factors accumulate past 100.
    risk_score: int = 0
    risk_factors: list[str] = []
    is_suspicious: bool = False
    recommended_action: TakeoverAction = TakeoverAction.ALLOW
