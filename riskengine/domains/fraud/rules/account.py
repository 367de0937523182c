"""Account standing risk assessment."""

from dataclasses import dataclass

from ..config import FraudConfig
from ..models import AccountProfile, AssessorResult, HistorySnapshot, TransactionContext
from .base import Assessor, RiskRule, evaluate_rules

ACCOUNT_NOT_FOUND_REASON = "User account not found"
ACCOUNT_NOT_FOUND_SCORE = 100


@dataclass(frozen=True)
class AccountFacts:
    kyc_verified: bool
    age_days: float
    failed_login_attempts: int
    active: bool


def account_rules(config: FraudConfig) -> list[RiskRule]:
    cfg = config.account
    return [
        RiskRule(
            reason="Unverified KYC status",
            weight=25,
            predicate=lambda f: not f.kyc_verified,
        ),
        RiskRule(
            reason=f"New account (less than {cfg.new_account_days} days old)",
            weight=30,
            predicate=lambda f: f.age_days < cfg.new_account_days,
            exclusive=True,
            group="age",
        ),
        RiskRule(
            reason=f"Recent account (less than {cfg.recent_account_days} days old)",
            weight=15,
            predicate=lambda f: f.age_days < cfg.recent_account_days,
            exclusive=True,
            group="age",
        ),
        RiskRule(
            reason="Multiple failed login attempts",
            weight=20,
            predicate=lambda f: f.failed_login_attempts > cfg.failed_login_max,
        ),
        RiskRule(
            reason="Account not in active status",
            weight=50,
            predicate=lambda f: not f.active,
        ),
    ]


class AccountRiskAssessor(Assessor):
    """Scores KYC, account age, failed logins and status.

    A missing profile yields a terminal result that the orchestrator reports
    as-is instead of adding to the other factors.
    """

    name = "account"

    def assess(
        self,
        context: TransactionContext,
        snapshot: HistorySnapshot,
        config: FraudConfig,
    ) -> AssessorResult:
        profile: AccountProfile | None = snapshot.profile
        if profile is None:
            return AssessorResult(
                assessor=self.name,
                score=ACCOUNT_NOT_FOUND_SCORE,
                reasons=[ACCOUNT_NOT_FOUND_REASON],
                terminal=True,
            )

        age = context.timestamp - profile.account_created_at
        facts = AccountFacts(
            kyc_verified=profile.kyc_status.lower() == "verified",
            age_days=age.total_seconds() / 86400,
            failed_login_attempts=profile.failed_login_attempts,
            active=profile.account_status.lower() == "active",
        )
        score, reasons = evaluate_rules(account_rules(config), facts)
        return self._result(score, reasons)
