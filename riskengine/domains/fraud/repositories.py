"""Collaborator interfaces the engine reads from and writes to.

Implementations are injected; `riskengine.db.repositories` provides the
SQL-backed ones.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from riskengine.domains.behavior.models import LoginRecord

from .models import AccountProfile, RiskAssessment, TransactionContext, TransactionRecord


class HistoryRepository(ABC):
    @abstractmethod
    async def fetch_recent(
        self, user_id: str, window_days: int, now: datetime
    ) -> list[TransactionRecord]:
        """Transactions created in the `window_days` days before `now`, newest first."""
        ...

    @abstractmethod
    async def fetch_recent_logins(
        self, user_id: str, window_days: int, limit: int, now: datetime
    ) -> list[LoginRecord]:
        """Up to `limit` logins from the `window_days` days before `now`, newest first."""
        ...


class ProfileRepository(ABC):
    @abstractmethod
    async def fetch_account_profile(self, user_id: str) -> AccountProfile | None:
        """Return the profile, or None (or raise AccountNotFoundError) when missing."""
        ...


class BlacklistRepository(ABC):
    @abstractmethod
    async def is_account_blacklisted(self, account: str) -> bool: ...

    @abstractmethod
    async def is_ip_blacklisted(self, ip_address: str) -> bool: ...


class AssessmentStore(ABC):
    @abstractmethod
    async def append(self, assessment: RiskAssessment, context: TransactionContext) -> None:
        """Append one audit record. Never called more than once per assessment."""
        ...
