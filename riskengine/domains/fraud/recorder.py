"""Best-effort audit persistence that never blocks the caller."""

import asyncio

import structlog

from .models import RiskAssessment, TransactionContext
from .repositories import AssessmentStore

logger = structlog.get_logger()


class AssessmentRecorder:
    """Appends each decision to the audit store in a background task.

    Failures and timeouts are logged and dropped; the decision already
    returned to the caller is unaffected.
    """

    def __init__(self, store: AssessmentStore, timeout_seconds: float = 10.0) -> None:
        self._store = store
        self._timeout = timeout_seconds
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def record(self, assessment: RiskAssessment, context: TransactionContext) -> None:
        task = asyncio.create_task(self._append(assessment, context))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for every outstanding write to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _append(self, assessment: RiskAssessment, context: TransactionContext) -> None:
        try:
            await asyncio.wait_for(
                self._store.append(assessment, context), timeout=self._timeout
            )
        except Exception:
            logger.exception(
                "assessment_persist_failed",
                user_id=context.user_id,
                risk_score=assessment.risk_score,
                risk_level=assessment.risk_level.value,
            )
            return

        logger.debug(
            "assessment_persisted",
            user_id=context.user_id,
            risk_score=assessment.risk_score,
        )
