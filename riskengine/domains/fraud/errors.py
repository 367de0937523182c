"""Exceptions raised inside the fraud decision engine."""


class RiskEngineError(Exception):
    """Base class for engine errors."""


class CollaboratorError(RiskEngineError):
    """A data collaborator failed or timed out."""

    def __init__(self, collaborator: str, message: str = "") -> None:
        self.collaborator = collaborator
        super().__init__(f"{collaborator}: {message}" if message else collaborator)


class AccountNotFoundError(RiskEngineError):
    """Raised by profile repositories that signal a missing account instead of returning None."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"account not found: {user_id}")
