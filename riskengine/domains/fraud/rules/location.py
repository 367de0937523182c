"""Location-based risk assessment."""

from dataclasses import dataclass

from riskengine.shared.geo import is_location_similar

from ..config import FraudConfig
from ..models import AssessorResult, HistorySnapshot, TransactionContext
from .base import Assessor, RiskRule, evaluate_rules


@dataclass(frozen=True)
class LocationFacts:
    unusual: bool
    high_risk_country: bool


def location_rules(config: FraudConfig) -> list[RiskRule]:
    return [
        RiskRule(
            reason="Transaction from unusual location",
            weight=25,
            predicate=lambda f: f.unusual,
        ),
        RiskRule(
            reason="Transaction from high-risk geographic area",
            weight=30,
            predicate=lambda f: f.unusual and f.high_risk_country,
        ),
    ]


class LocationRiskAssessor(Assessor):
    """Flags locations far from every recently seen one.

    Users without any located history are not scored.
    """

    name = "location"

    def assess(
        self,
        context: TransactionContext,
        snapshot: HistorySnapshot,
        config: FraudConfig,
    ) -> AssessorResult:
        location = context.location
        if location is None:
            return self._empty()

        cfg = config.location
        known = [t.location for t in snapshot.transactions if t.location is not None]
        known = known[: cfg.max_known_locations]
        if not known:
            return self._empty()

        typical = any(
            is_location_similar(loc, location, cfg.similarity_degrees) for loc in known
        )
        country = (location.country or "").upper()
        facts = LocationFacts(
            unusual=not typical,
            high_risk_country=bool(country) and country in cfg.high_risk_countries,
        )
        score, reasons = evaluate_rules(location_rules(config), facts)
        return self._result(score, reasons)
