"""In-process entry point exposing the engine's three operations."""

from datetime import datetime

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from riskengine.domains.behavior.ato import AccountTakeoverDetector
from riskengine.domains.behavior.models import LoginContext, TakeoverAssessment
from riskengine.domains.fraud.config import FraudConfig, default_config
from riskengine.domains.fraud.models import PatternAlert, RiskAssessment, TransactionContext
from riskengine.domains.fraud.monitor import RealTimePatternMonitor
from riskengine.domains.fraud.orchestrator import RiskOrchestrator
from riskengine.domains.fraud.recorder import AssessmentRecorder
from riskengine.domains.fraud.repositories import (
    AssessmentStore,
    BlacklistRepository,
    HistoryRepository,
    ProfileRepository,
)
from riskengine.domains.fraud.rules import Assessor

logger = structlog.get_logger()


class FraudDecisionEngine:
    """Wires the collaborators into the orchestrator, takeover detector and monitor.

    Each operation is stateless with respect to the others, so one instance
    can serve concurrent callers.
    """

    def __init__(
        self,
        history: HistoryRepository,
        profiles: ProfileRepository,
        blacklist: BlacklistRepository,
        store: AssessmentStore,
        config: FraudConfig | None = None,
        risk_model: Assessor | None = None,
    ) -> None:
        self._config = config or default_config
        self._recorder = AssessmentRecorder(
            store, timeout_seconds=self._config.engine.audit_timeout_seconds
        )
        self._orchestrator = RiskOrchestrator(
            history,
            profiles,
            blacklist,
            recorder=self._recorder,
            config=self._config,
            risk_model=risk_model,
        )
        self._takeover = AccountTakeoverDetector(history, profiles, config=self._config)
        self._monitor = RealTimePatternMonitor(history, profiles, config=self._config)

    @classmethod
    def from_session_factory(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        config: FraudConfig | None = None,
    ) -> "FraudDecisionEngine":
        from riskengine.db.repositories import (
            SqlAssessmentStore,
            SqlBlacklistRepository,
            SqlHistoryRepository,
            SqlProfileRepository,
        )

        logger.info("fraud_engine_sql_wiring")
        return cls(
            history=SqlHistoryRepository(session_factory),
            profiles=SqlProfileRepository(session_factory),
            blacklist=SqlBlacklistRepository(session_factory),
            store=SqlAssessmentStore(session_factory),
            config=config,
        )

    async def analyze_transaction(self, context: TransactionContext) -> RiskAssessment:
        return await self._orchestrator.analyze_transaction(context)

    async def detect_account_takeover(
        self, user_id: str, login: LoginContext, now: datetime | None = None
    ) -> TakeoverAssessment:
        return await self._takeover.detect_account_takeover(user_id, login, now=now)

    async def monitor_real_time_patterns(
        self, user_id: str, now: datetime | None = None
    ) -> PatternAlert:
        return await self._monitor.monitor_real_time_patterns(user_id, now=now)

    async def drain(self) -> None:
        """Wait for outstanding audit writes, e.g. before shutdown."""
        await self._recorder.drain()
