"""Unit tests for login-time account takeover detection."""

from datetime import timedelta

import pytest

from riskengine.domains.behavior.ato import ANALYSIS_ERROR_FACTOR, AccountTakeoverDetector
from riskengine.domains.behavior.models import TakeoverAction
from riskengine.domains.fraud.config import FraudConfig
from riskengine.shared.geo import GeoPoint
from tests.builders import (
    ABUJA,
    LAGOS,
    NOW,
    SYDNEY,
    USER_ID,
    make_login,
    make_login_record,
    make_profile,
)
from tests.fakes import BrokenHistory, InMemoryHistory, InMemoryProfiles

CONFIG = FraudConfig()


def _detector(logins, profile=None) -> AccountTakeoverDetector:
    history = InMemoryHistory(logins=logins)
    profiles = InMemoryProfiles({USER_ID: profile or make_profile()})
    return AccountTakeoverDetector(history, profiles, config=CONFIG)


@pytest.fixture
def lagos_logins():
    return [make_login_record(hours_ago=h) for h in (2, 26, 50)]


class TestAccountTakeoverDetector:
    @pytest.mark.asyncio
    async def test_familiar_login_is_allowed(self, lagos_logins):
        result = await _detector(lagos_logins).detect_account_takeover(
            USER_ID, make_login(), now=NOW
        )
        assert result.risk_score == 0
        assert result.risk_factors == []
        assert not result.is_suspicious
        assert result.recommended_action == TakeoverAction.ALLOW

    @pytest.mark.asyncio
    async def test_hijacked_session_from_another_continent(self, lagos_logins):
        login = make_login(
            ip_address="203.0.113.50",
            user_agent="Mozilla/5.0 (Windows NT 10.0; Win64; x64)",
            device_fingerprint="device-unknown",
            location=SYDNEY,
        )
        result = await _detector(lagos_logins).detect_account_takeover(USER_ID, login, now=NOW)

        assert result.risk_factors == [
            "Login from new IP address",
            "Login from new device/browser",
            "Login from unusual geographic location",
            "Impossible travel detected",
        ]
        assert result.risk_score == 145
        assert result.is_suspicious
        assert result.recommended_action == TakeoverAction.BLOCK_ACCOUNT

    @pytest.mark.asyncio
    async def test_new_ip_alone_needs_email(self, lagos_logins):
        result = await _detector(lagos_logins).detect_account_takeover(
            USER_ID, make_login(ip_address="41.58.0.1"), now=NOW
        )
        assert result.risk_score == 30
        assert not result.is_suspicious
        assert result.recommended_action == TakeoverAction.REQUIRE_EMAIL_VERIFICATION

    @pytest.mark.asyncio
    async def test_new_ip_and_agent_need_2fa(self, lagos_logins):
        result = await _detector(lagos_logins).detect_account_takeover(
            USER_ID, make_login(ip_address="41.58.0.1", user_agent="Opera/9.80"), now=NOW
        )
        assert result.risk_score == 55
        assert result.is_suspicious
        assert result.recommended_action == TakeoverAction.REQUIRE_2FA

    @pytest.mark.asyncio
    async def test_reachable_new_city(self):
        logins = [make_login_record(hours_ago=48)]
        result = await _detector(logins).detect_account_takeover(
            USER_ID, make_login(location=ABUJA), now=NOW
        )
        assert result.risk_factors == ["Login from unusual geographic location"]
        assert result.risk_score == 40
        assert result.is_suspicious
        assert result.recommended_action == TakeoverAction.REQUIRE_EMAIL_VERIFICATION

    @pytest.mark.asyncio
    async def test_inactivity_from_newest_login(self):
        logins = [make_login_record(hours_ago=200)]
        result = await _detector(logins).detect_account_takeover(USER_ID, make_login(), now=NOW)
        assert result.risk_factors == ["Login after extended period of inactivity"]
        assert result.risk_score == 15
        assert result.recommended_action == TakeoverAction.ALLOW

    @pytest.mark.asyncio
    async def test_profile_last_login_takes_precedence(self):
        logins = [make_login_record(hours_ago=200)]
        profile = make_profile(last_login_at=NOW - timedelta(hours=1))
        result = await _detector(logins, profile).detect_account_takeover(
            USER_ID, make_login(), now=NOW
        )
        assert result.risk_factors == []

    @pytest.mark.asyncio
    async def test_first_login_has_nothing_to_compare(self):
        result = await _detector([]).detect_account_takeover(
            USER_ID, make_login(location=SYDNEY), now=NOW
        )
        assert result.risk_score == 0
        assert result.recommended_action == TakeoverAction.ALLOW

    @pytest.mark.asyncio
    async def test_login_without_location(self, lagos_logins):
        result = await _detector(lagos_logins).detect_account_takeover(
            USER_ID, make_login(location=None), now=NOW
        )
        assert result.risk_factors == []

    @pytest.mark.asyncio
    async def test_last_login_slightly_ahead_of_now(self):
        # Database clock runs about a minute ahead of the app clock
        logins = [make_login_record(hours_ago=-0.02), make_login_record(hours_ago=26)]
        result = await _detector(logins).detect_account_takeover(
            USER_ID, make_login(), now=NOW
        )
        assert result.risk_factors == []
        assert result.recommended_action == TakeoverAction.ALLOW

    @pytest.mark.asyncio
    async def test_nearby_login_with_clock_skew(self):
        logins = [make_login_record(hours_ago=-0.02)]
        across_town = GeoPoint(latitude=6.55, longitude=3.40, country="NG")
        result = await _detector(logins).detect_account_takeover(
            USER_ID, make_login(location=across_town), now=NOW
        )
        assert "Impossible travel detected" not in result.risk_factors

    @pytest.mark.asyncio
    async def test_other_city_with_clock_skew_is_impossible(self):
        logins = [make_login_record(hours_ago=-0.02)]
        result = await _detector(logins).detect_account_takeover(
            USER_ID, make_login(location=ABUJA), now=NOW
        )
        assert result.risk_factors == [
            "Login from unusual geographic location",
            "Impossible travel detected",
        ]
        assert result.recommended_action == TakeoverAction.BLOCK_ACCOUNT

    @pytest.mark.asyncio
    async def test_reads_bounded_login_history(self):
        history = InMemoryHistory(logins=[make_login_record(hours_ago=h) for h in range(1, 15)])
        detector = AccountTakeoverDetector(history, InMemoryProfiles(), config=CONFIG)
        await detector.detect_account_takeover(USER_ID, make_login(), now=NOW)
        assert history.calls == [("fetch_recent_logins", USER_ID, 30, 10, NOW)]

    @pytest.mark.asyncio
    async def test_history_failure_requires_2fa(self):
        detector = AccountTakeoverDetector(BrokenHistory(), InMemoryProfiles(), config=CONFIG)
        result = await detector.detect_account_takeover(USER_ID, make_login(), now=NOW)
        assert result.risk_factors == [ANALYSIS_ERROR_FACTOR]
        assert result.is_suspicious
        assert result.recommended_action == TakeoverAction.REQUIRE_2FA


class TestAssess:
    def test_only_newest_logins_count(self):
        detector = AccountTakeoverDetector(InMemoryHistory(), InMemoryProfiles(), config=CONFIG)
        recent = [make_login_record(hours_ago=h, location=ABUJA) for h in range(1, 11)]
        stale = [make_login_record(hours_ago=100, location=LAGOS)]
        result = detector.assess(make_login(location=LAGOS), stale + recent, None, NOW)
        assert "Login from unusual geographic location" in result.risk_factors
