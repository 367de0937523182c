"""Transaction risk pipeline: fetch snapshot -> assessors -> classify -> record."""

import asyncio
from datetime import timedelta

import structlog

from .collaborators import call_collaborator, fetch_profile
from .config import FraudConfig, default_config
from .models import (
    AssessorResult,
    BlacklistStatus,
    HistorySnapshot,
    RecommendedAction,
    RiskAssessment,
    RiskLevel,
    TransactionContext,
    VerificationStep,
)
from .recorder import AssessmentRecorder
from .repositories import BlacklistRepository, HistoryRepository, ProfileRepository
from .rules import Assessor, default_assessors

logger = structlog.get_logger()

FAIL_SAFE_REASON = "System error during fraud analysis"
NEW_DEVICE_REASON = "Transaction from new device"
UNUSUAL_LOCATION_REASON = "Transaction from unusual location"


def fail_safe_assessment() -> RiskAssessment:
    return RiskAssessment(
        risk_score=75,
        risk_level=RiskLevel.HIGH,
        flagged_reasons=[FAIL_SAFE_REASON],
        recommended_action=RecommendedAction.REVIEW,
    )


def classify_risk_level(score: int, config: FraudConfig) -> RiskLevel:
    cfg = config.classification
    if score >= cfg.critical:
        return RiskLevel.CRITICAL
    if score >= cfg.high:
        return RiskLevel.HIGH
    if score >= cfg.medium:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def recommend_action(level: RiskLevel, raw_score: int, config: FraudConfig) -> RecommendedAction:
    """Pick the action from the level or the pre-clamp score, whichever is stricter."""
    cfg = config.classification
    if level == RiskLevel.CRITICAL or raw_score >= cfg.decline_score:
        return RecommendedAction.DECLINE
    if level == RiskLevel.HIGH or raw_score >= cfg.review_score:
        return RecommendedAction.REVIEW
    if level == RiskLevel.MEDIUM or raw_score >= cfg.otp_score:
        return RecommendedAction.REQUIRE_OTP
    return RecommendedAction.APPROVE


def additional_verification(level: RiskLevel, reasons: list[str]) -> list[VerificationStep]:
    steps: list[VerificationStep] = []
    if level in (RiskLevel.HIGH, RiskLevel.CRITICAL):
        steps += [VerificationStep.SMS_OTP, VerificationStep.DOCUMENT_VERIFICATION]
    if NEW_DEVICE_REASON in reasons:
        steps.append(VerificationStep.DEVICE_VERIFICATION)
    if UNUSUAL_LOCATION_REASON in reasons:
        steps.append(VerificationStep.LOCATION_CONFIRMATION)
    return steps


class RiskOrchestrator:
    """Runs every assessor over one history snapshot and turns the sum into a decision.

    Flow:
    1. Fetch history, profile and blacklist status concurrently, each under
       the collaborator timeout
    2. Run assessors in fixed order (amount, velocity, location, device,
       behavioral, account, blacklist, heuristic)
    3. Sum scores, clamp to 0-100, classify level, pick action from the
       level and the raw sum
    4. Hand the decision to the recorder without waiting for the write

    Any failure in steps 1-3 yields the fail-safe REVIEW decision.
    """

    def __init__(
        self,
        history: HistoryRepository,
        profiles: ProfileRepository,
        blacklist: BlacklistRepository,
        recorder: AssessmentRecorder | None = None,
        config: FraudConfig | None = None,
        risk_model: Assessor | None = None,
    ) -> None:
        self._history = history
        self._profiles = profiles
        self._blacklist = blacklist
        self._recorder = recorder
        self._config = config or default_config
        self._assessors = default_assessors(risk_model)
        logger.info(
            "risk_orchestrator_initialized",
            assessors=[a.name for a in self._assessors],
        )

    async def analyze_transaction(self, context: TransactionContext) -> RiskAssessment:
        try:
            snapshot = await self.fetch_snapshot(context)
            assessment = self.assess(context, snapshot)
        except Exception:
            logger.exception(
                "fraud_analysis_failed",
                user_id=context.user_id,
                account_id=context.account_id,
            )
            return fail_safe_assessment()

        if self._recorder is not None:
            self._recorder.record(assessment, context)

        logger.info(
            "transaction_analyzed",
            user_id=context.user_id,
            account_id=context.account_id,
            risk_score=assessment.risk_score,
            risk_level=assessment.risk_level.value,
            recommended_action=assessment.recommended_action.value,
            reason_count=len(assessment.flagged_reasons),
        )
        return assessment

    async def fetch_snapshot(self, context: TransactionContext) -> HistorySnapshot:
        """Read everything the assessors need in one concurrent round."""
        cfg = self._config
        timeout = cfg.engine.collaborator_timeout_seconds
        history_days = cfg.engine.history_window_days
        fetch_days = max(history_days, cfg.device.lookback_days)

        records, profile, blacklist = await asyncio.gather(
            call_collaborator(
                "history",
                self._history.fetch_recent(context.user_id, fetch_days, context.timestamp),
                timeout,
            ),
            fetch_profile(self._profiles, context.user_id, timeout),
            self._fetch_blacklist(context, timeout),
        )

        records = sorted(records, key=lambda t: t.created_at, reverse=True)
        history_cutoff = context.timestamp - timedelta(days=history_days)
        return HistorySnapshot(
            transactions=[t for t in records if t.created_at > history_cutoff],
            device_transactions=records,
            profile=profile,
            blacklist=blacklist,
        )

    async def _fetch_blacklist(self, context: TransactionContext, timeout: float) -> BlacklistStatus:
        async def _false() -> bool:
            return False

        recipient_check = (
            call_collaborator(
                "blacklist",
                self._blacklist.is_account_blacklisted(context.recipient_account),
                timeout,
            )
            if context.recipient_account
            else _false()
        )
        ip_check = (
            call_collaborator(
                "blacklist", self._blacklist.is_ip_blacklisted(context.ip_address), timeout
            )
            if context.ip_address
            else _false()
        )
        recipient_hit, ip_hit = await asyncio.gather(recipient_check, ip_check)
        return BlacklistStatus(recipient_blacklisted=recipient_hit, ip_blacklisted=ip_hit)

    def assess(self, context: TransactionContext, snapshot: HistorySnapshot) -> RiskAssessment:
        """Pure scoring step: identical inputs always give an identical assessment."""
        results: list[AssessorResult] = [
            assessor.assess(context, snapshot, self._config) for assessor in self._assessors
        ]

        terminal = next((r for r in results if r.terminal), None)
        if terminal is not None:
            return self._decide(terminal.score, list(terminal.reasons))

        raw_score = sum(r.score for r in results)
        reasons = [reason for r in results for reason in r.reasons]
        return self._decide(raw_score, reasons)

    def _decide(self, raw_score: int, reasons: list[str]) -> RiskAssessment:
        score = max(0, min(raw_score, self._config.classification.score_cap))
        level = classify_risk_level(score, self._config)
        return RiskAssessment(
            risk_score=score,
            risk_level=level,
            flagged_reasons=reasons,
            recommended_action=recommend_action(level, raw_score, self._config),
            additional_verification=additional_verification(level, reasons),
        )
