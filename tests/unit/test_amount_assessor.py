"""Unit tests for amount-based risk assessment."""

from decimal import Decimal

from riskengine.domains.fraud.config import FraudConfig
from riskengine.domains.fraud.models import HistorySnapshot
from riskengine.domains.fraud.rules.amount import AmountRiskAssessor
from tests.builders import daily_history, make_context, make_record

CONFIG = FraudConfig()
ASSESSOR = AmountRiskAssessor()


def _snapshot(amounts: list[str]) -> HistorySnapshot:
    records = [make_record(i, amount=Decimal(a)) for i, a in enumerate(amounts)]
    return HistorySnapshot(transactions=records, device_transactions=records)


class TestAmountRiskAssessor:
    def test_typical_amount_scores_nothing(self, clean_snapshot):
        result = ASSESSOR.assess(make_context(amount=Decimal("5000")), clean_snapshot, CONFIG)
        assert result.score == 0
        assert result.reasons == []

    def test_very_large_amount_wins_over_lower_bands(self):
        # Also far above 5x average and 1.5x max; only the first band scores
        result = ASSESSOR.assess(
            make_context(amount=Decimal("1500000.50")), _snapshot(["1000", "2000"]), CONFIG
        )
        assert result.score == 30
        assert result.reasons == ["Very large transaction amount"]

    def test_amount_far_above_average(self):
        result = ASSESSOR.assess(
            make_context(amount=Decimal("60001")), _snapshot(["10000", "10000"]), CONFIG
        )
        assert result.score == 20
        assert result.reasons == ["Amount significantly higher than user average"]

    def test_amount_above_typical_maximum(self):
        # avg 12000 (x5 = 60000), max 30000 (x1.5 = 45000)
        result = ASSESSOR.assess(
            make_context(amount=Decimal("45001")),
            _snapshot(["3000", "3000", "30000", "12000"]),
            CONFIG,
        )
        assert result.score == 15
        assert result.reasons == ["Amount exceeds typical maximum"]

    def test_round_number_adds_independently(self):
        result = ASSESSOR.assess(
            make_context(amount=Decimal("2000000")), _snapshot(["2000000"]), CONFIG
        )
        assert result.score == 35
        assert result.reasons == ["Very large transaction amount", "Round number transaction"]

    def test_round_number_below_minimum(self):
        result = ASSESSOR.assess(
            make_context(amount=Decimal("9000")), _snapshot(["9000"]), CONFIG
        )
        assert result.score == 0

    def test_round_number_alone(self):
        result = ASSESSOR.assess(
            make_context(amount=Decimal("10000")), _snapshot(["10000", "10000"]), CONFIG
        )
        assert result.score == 5
        assert result.reasons == ["Round number transaction"]

    def test_fractional_amount_is_not_round(self):
        result = ASSESSOR.assess(
            make_context(amount=Decimal("10000.50")), _snapshot(["10000", "10000"]), CONFIG
        )
        assert result.score == 0

    def test_tiny_fraction_is_not_round(self):
        # Collapses to 10000.0 as a float
        result = ASSESSOR.assess(
            make_context(amount=Decimal("10000.0000000000001")),
            _snapshot(["10000", "10000"]),
            CONFIG,
        )
        assert result.score == 0
        assert result.reasons == []

    def test_no_history_treats_any_amount_as_above_average(self):
        empty = HistorySnapshot()
        result = ASSESSOR.assess(make_context(amount=Decimal("500")), empty, CONFIG)
        assert result.score == 20
        assert result.reasons == ["Amount significantly higher than user average"]

    def test_custom_threshold(self):
        config = FraudConfig()
        config.amount.very_large_amount = Decimal("50000")
        result = ASSESSOR.assess(
            make_context(amount=Decimal("50001")), _snapshot(["50001"] * 3), config
        )
        assert result.reasons == ["Very large transaction amount"]

    def test_reads_only_snapshot_window(self):
        history = daily_history(5, amount=Decimal("100"))
        snapshot = HistorySnapshot(transactions=history, device_transactions=history)
        result = ASSESSOR.assess(make_context(amount=Decimal("100")), snapshot, CONFIG)
        assert result.score == 0
