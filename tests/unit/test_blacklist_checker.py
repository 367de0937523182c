"""Unit tests for blacklist scoring."""

from riskengine.domains.fraud.config import FraudConfig
from riskengine.domains.fraud.models import BlacklistStatus, HistorySnapshot
from riskengine.domains.fraud.rules.blacklist import BlacklistChecker
from tests.builders import make_context

CONFIG = FraudConfig()
CHECKER = BlacklistChecker()


def _assess(**status):
    snapshot = HistorySnapshot(blacklist=BlacklistStatus(**status))
    return CHECKER.assess(make_context(), snapshot, CONFIG)


class TestBlacklistChecker:
    def test_clean(self):
        assert _assess().score == 0

    def test_blacklisted_recipient(self):
        result = _assess(recipient_blacklisted=True)
        assert result.score == 80
        assert result.reasons == ["Transfer to blacklisted account"]

    def test_blacklisted_ip(self):
        result = _assess(ip_blacklisted=True)
        assert result.score == 60
        assert result.reasons == ["Transaction from blacklisted IP"]

    def test_both(self):
        result = _assess(recipient_blacklisted=True, ip_blacklisted=True)
        assert result.score == 140
        assert result.reasons == [
            "Transfer to blacklisted account",
            "Transaction from blacklisted IP",
        ]
