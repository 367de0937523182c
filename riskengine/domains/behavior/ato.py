"""Account takeover (ATO) detection at login time.

Compares a login against the account's recent logins: new IP, new user
agent, new location, long inactivity and impossible travel each add to an
uncapped risk score that maps onto a graduated response.
"""

import asyncio
from datetime import UTC, datetime

import structlog

from riskengine.domains.fraud.collaborators import call_collaborator, fetch_profile
from riskengine.domains.fraud.config import FraudConfig, default_config
from riskengine.domains.fraud.models import AccountProfile
from riskengine.domains.fraud.repositories import HistoryRepository, ProfileRepository
from riskengine.shared.geo import is_impossible_travel, is_location_similar

from .models import LoginContext, LoginRecord, TakeoverAction, TakeoverAssessment

logger = structlog.get_logger()

ANALYSIS_ERROR_FACTOR = "Error in security analysis"


class AccountTakeoverDetector:
    def __init__(
        self,
        history: HistoryRepository,
        profiles: ProfileRepository,
        config: FraudConfig | None = None,
    ) -> None:
        self._history = history
        self._profiles = profiles
        self._config = config or default_config

    async def detect_account_takeover(
        self,
        user_id: str,
        login: LoginContext,
        now: datetime | None = None,
    ) -> TakeoverAssessment:
        """Assess a login. Collaborator failures yield a suspicious REQUIRE_2FA result."""
        now = now or datetime.now(UTC)
        cfg = self._config.takeover
        timeout = self._config.engine.collaborator_timeout_seconds

        try:
            logins, profile = await asyncio.gather(
                call_collaborator(
                    "login_history",
                    self._history.fetch_recent_logins(
                        user_id, cfg.history_days, cfg.history_limit, now
                    ),
                    timeout,
                ),
                fetch_profile(self._profiles, user_id, timeout),
            )
            assessment = self.assess(login, logins, profile, now)
        except Exception:
            logger.exception("account_takeover_detection_failed", user_id=user_id)
            return TakeoverAssessment(
                risk_factors=[ANALYSIS_ERROR_FACTOR],
                is_suspicious=True,
                recommended_action=TakeoverAction.REQUIRE_2FA,
            )

        logger.info(
            "account_takeover_assessed",
            user_id=user_id,
            risk_score=assessment.risk_score,
            is_suspicious=assessment.is_suspicious,
            recommended_action=assessment.recommended_action.value,
            factor_count=len(assessment.risk_factors),
        )
        return assessment

    def assess(
        self,
        login: LoginContext,
        logins: list[LoginRecord],
        profile: AccountProfile | None,
        now: datetime,
    ) -> TakeoverAssessment:
        cfg = self._config.takeover
        similarity = self._config.location.similarity_degrees
        logins = sorted(logins, key=lambda r: r.created_at, reverse=True)[: cfg.history_limit]

        factors: list[str] = []
        score = 0

        known_ips = {r.ip_address for r in logins if r.ip_address}
        if known_ips and login.ip_address not in known_ips:
            factors.append("Login from new IP address")
            score += 30

        known_agents = {r.user_agent for r in logins if r.user_agent}
        if known_agents and login.user_agent not in known_agents:
            factors.append("Login from new device/browser")
            score += 25

        if login.location is not None:
            known_locations = [r.location for r in logins if r.location is not None]
            if known_locations and not any(
                is_location_similar(loc, login.location, similarity) for loc in known_locations
            ):
                factors.append("Login from unusual geographic location")
                score += 40

        last_login_at = profile.last_login_at if profile and profile.last_login_at else None
        if last_login_at is None and logins:
            last_login_at = logins[0].created_at
        if last_login_at is not None:
            hours_since = (now - last_login_at).total_seconds() / 3600
            if hours_since > cfg.inactivity_hours:
                factors.append("Login after extended period of inactivity")
                score += 15

        # A login where the last one happened is not travel, even with clock skew
        newest = logins[0] if logins else None
        if (
            newest is not None
            and not is_location_similar(newest.location, login.location, similarity)
            and is_impossible_travel(
                newest.location,
                login.location,
                newest.created_at,
                now,
                cfg.max_travel_speed_kmh,
            )
        ):
            factors.append("Impossible travel detected")
            score += 50

        return TakeoverAssessment(
            risk_score=score,
            risk_factors=factors,
            is_suspicious=score >= cfg.suspicious_score,
            recommended_action=self._recommend(score),
        )

    def _recommend(self, score: int) -> TakeoverAction:
        cfg = self._config.takeover
        if score >= cfg.block_score:
            return TakeoverAction.BLOCK_ACCOUNT
        if score >= cfg.two_factor_score:
            return TakeoverAction.REQUIRE_2FA
        if score >= cfg.email_score:
            return TakeoverAction.REQUIRE_EMAIL_VERIFICATION
        return TakeoverAction.ALLOW
