"""Fraud decision domain."""

from .config import FraudConfig, default_config
from .errors import AccountNotFoundError, CollaboratorError, RiskEngineError
from .models import (
    AccountProfile,
    AlertLevel,
    AssessorResult,
    BlacklistStatus,
    GeoPoint,
    HistorySnapshot,
    PatternAlert,
    RecommendedAction,
    RiskAssessment,
    RiskLevel,
    TransactionContext,
    TransactionRecord,
    VerificationStep,
)
from .monitor import RealTimePatternMonitor
from .orchestrator import RiskOrchestrator
from .recorder import AssessmentRecorder
from .repositories import (
    AssessmentStore,
    BlacklistRepository,
    HistoryRepository,
    ProfileRepository,
)

__all__ = [
    "AccountNotFoundError",
    "AccountProfile",
    "AlertLevel",
    "AssessmentRecorder",
    "AssessmentStore",
    "AssessorResult",
    "BlacklistRepository",
    "BlacklistStatus",
    "CollaboratorError",
    "FraudConfig",
    "GeoPoint",
    "HistoryRepository",
    "HistorySnapshot",
    "PatternAlert",
    "ProfileRepository",
    "RealTimePatternMonitor",
    "RecommendedAction",
    "RiskAssessment",
    "RiskEngineError",
    "RiskLevel",
    "RiskOrchestrator",
    "TransactionContext",
    "TransactionRecord",
    "VerificationStep",
    "default_config",
]
