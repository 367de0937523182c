"""Unit tests for device and user-agent risk assessment."""

from datetime import timedelta

from riskengine.domains.fraud.config import FraudConfig
from riskengine.domains.fraud.models import HistorySnapshot
from riskengine.domains.fraud.rules.device import DeviceRiskAssessor, is_suspicious_user_agent
from tests.builders import KNOWN_AGENT, NOW, daily_history, make_context, make_record

CONFIG = FraudConfig()
ASSESSOR = DeviceRiskAssessor()


class TestSuspiciousUserAgent:
    def test_patterns_are_case_insensitive(self):
        patterns = CONFIG.device.suspicious_agent_patterns
        assert is_suspicious_user_agent("python-requests/2.31", patterns)
        assert is_suspicious_user_agent("Googlebot/2.1", patterns)
        assert is_suspicious_user_agent("CURL/8.0", patterns)
        assert is_suspicious_user_agent("Wget/1.21", patterns)
        assert not is_suspicious_user_agent(KNOWN_AGENT, patterns)


class TestDeviceRiskAssessor:
    def test_known_device_and_agent(self, clean_snapshot):
        result = ASSESSOR.assess(make_context(), clean_snapshot, CONFIG)
        assert result.score == 0

    def test_new_device(self, clean_snapshot):
        result = ASSESSOR.assess(
            make_context(device_fingerprint="device-unknown"), clean_snapshot, CONFIG
        )
        assert result.score == 20
        assert result.reasons == ["Transaction from new device"]

    def test_new_user_agent(self, clean_snapshot):
        result = ASSESSOR.assess(
            make_context(user_agent="NairaPay/5.0 (iOS 18)"), clean_snapshot, CONFIG
        )
        assert result.score == 15
        assert result.reasons == ["Transaction from new browser/app"]

    def test_bot_agent_is_also_new(self, clean_snapshot):
        result = ASSESSOR.assess(
            make_context(user_agent="curl/8.4.0"), clean_snapshot, CONFIG
        )
        assert result.score == 40
        assert result.reasons == [
            "Transaction from new browser/app",
            "Suspicious browser/device characteristics",
        ]

    def test_missing_fields_are_not_scored(self, clean_snapshot):
        result = ASSESSOR.assess(
            make_context(device_fingerprint=None, user_agent=None), clean_snapshot, CONFIG
        )
        assert result.score == 0

    def test_first_transaction_ever(self):
        result = ASSESSOR.assess(make_context(), HistorySnapshot(), CONFIG)
        assert result.score == 35

    def test_device_history_uses_longer_window(self):
        # Seen 45 days ago: outside the 30-day window but inside the 60-day one
        old = [make_record(0, created_at=NOW - timedelta(days=45))]
        snapshot = HistorySnapshot(transactions=[], device_transactions=old)
        result = ASSESSOR.assess(make_context(), snapshot, CONFIG)
        assert result.score == 0

    def test_device_seen_too_long_ago(self):
        old = [make_record(0, created_at=NOW - timedelta(days=61))]
        snapshot = HistorySnapshot(transactions=[], device_transactions=old)
        result = ASSESSOR.assess(make_context(), snapshot, CONFIG)
        assert result.score == 35

    def test_agents_only_counted_from_fingerprinted_rows(self):
        records = [make_record(0, device_fingerprint=None)]
        snapshot = HistorySnapshot(transactions=records, device_transactions=records)
        result = ASSESSOR.assess(make_context(device_fingerprint=None), snapshot, CONFIG)
        assert result.reasons == ["Transaction from new browser/app"]

    def test_known_agent_from_other_device(self):
        records = daily_history(3)
        snapshot = HistorySnapshot(transactions=records, device_transactions=records)
        result = ASSESSOR.assess(
            make_context(device_fingerprint="device-tablet"), snapshot, CONFIG
        )
        assert result.reasons == ["Transaction from new device"]
