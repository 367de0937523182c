"""SQL-backed implementations of the engine's collaborator interfaces."""

from datetime import UTC, datetime, timedelta

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from riskengine.db.models import (
    BlacklistedAccountDB,
    BlacklistedIPDB,
    FraudAssessmentDB,
    LoginEventDB,
    TransactionDB,
    UserAccountDB,
)
from riskengine.domains.behavior.models import LoginRecord
from riskengine.domains.fraud.models import (
    AccountProfile,
    AssessmentRecord,
    GeoPoint,
    RiskAssessment,
    TransactionContext,
    TransactionRecord,
)
from riskengine.domains.fraud.repositories import (
    AssessmentStore,
    BlacklistRepository,
    HistoryRepository,
    ProfileRepository,
)

logger = structlog.get_logger()


def _geo(latitude: float | None, longitude: float | None, country: str | None) -> GeoPoint | None:
    if latitude is None or longitude is None:
        return None
    return GeoPoint(latitude=latitude, longitude=longitude, country=country)


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def transaction_from_row(row: TransactionDB) -> TransactionRecord:
    return TransactionRecord(
        transaction_id=row.transaction_id,
        user_id=row.user_id,
        amount=row.amount,
        transaction_type=row.transaction_type,
        channel=row.channel,
        recipient_account=row.recipient_account,
        location=_geo(row.latitude, row.longitude, row.country),
        device_fingerprint=row.device_fingerprint,
        user_agent=row.user_agent,
        ip_address=row.ip_address,
        created_at=_aware(row.created_at),
    )


def login_from_row(row: LoginEventDB) -> LoginRecord:
    return LoginRecord(
        ip_address=row.ip_address,
        user_agent=row.user_agent,
        location=_geo(row.latitude, row.longitude, row.country),
        created_at=_aware(row.created_at),
    )


def profile_from_row(row: UserAccountDB) -> AccountProfile:
    return AccountProfile(
        user_id=row.user_id,
        kyc_status=row.kyc_status,
        account_status=row.status,
        account_created_at=_aware(row.created_at),
        failed_login_attempts=row.login_attempts or 0,
        last_login_at=_aware(row.last_login) if row.last_login else None,
    )


class SqlHistoryRepository(HistoryRepository):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def fetch_recent(
        self, user_id: str, window_days: int, now: datetime
    ) -> list[TransactionRecord]:
        cutoff = now - timedelta(days=window_days)
        stmt = (
            select(TransactionDB)
            .where(TransactionDB.user_id == user_id, TransactionDB.created_at > cutoff)
            .order_by(TransactionDB.created_at.desc())
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [transaction_from_row(row) for row in result.scalars().all()]

    async def fetch_recent_logins(
        self, user_id: str, window_days: int, limit: int, now: datetime
    ) -> list[LoginRecord]:
        cutoff = now - timedelta(days=window_days)
        stmt = (
            select(LoginEventDB)
            .where(LoginEventDB.user_id == user_id, LoginEventDB.created_at > cutoff)
            .order_by(LoginEventDB.created_at.desc())
            .limit(limit)
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return [login_from_row(row) for row in result.scalars().all()]


class SqlProfileRepository(ProfileRepository):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def fetch_account_profile(self, user_id: str) -> AccountProfile | None:
        stmt = select(UserAccountDB).where(UserAccountDB.user_id == user_id)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            row = result.scalar_one_or_none()
        return profile_from_row(row) if row is not None else None


class SqlBlacklistRepository(BlacklistRepository):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def is_account_blacklisted(self, account: str) -> bool:
        stmt = select(BlacklistedAccountDB.id).where(
            BlacklistedAccountDB.account_number == account
        )
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return result.first() is not None

    async def is_ip_blacklisted(self, ip_address: str) -> bool:
        stmt = select(BlacklistedIPDB.id).where(BlacklistedIPDB.ip_address == ip_address)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return result.first() is not None


class SqlAssessmentStore(AssessmentStore):
    """Appends one fraud_assessments row per decision; rows are never updated."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def append(self, assessment: RiskAssessment, context: TransactionContext) -> None:
        record = AssessmentRecord.build(assessment, context, assessed_at=datetime.now(UTC))
        row = FraudAssessmentDB(
            user_id=record.user_id,
            account_id=record.account_id,
            transaction_type=record.transaction_type,
            channel=record.channel,
            amount=record.amount,
            risk_score=record.risk_score,
            risk_level=record.risk_level.value,
            flagged_reasons=record.flagged_reasons,
            recommended_action=record.recommended_action.value,
            additional_verification=[v.value for v in record.additional_verification],
            created_at=record.assessed_at,
        )
        async with self._session_factory() as session:
            session.add(row)
            await session.commit()

        logger.debug(
            "fraud_assessment_stored",
            user_id=record.user_id,
            risk_score=record.risk_score,
            risk_level=record.risk_level.value,
        )
