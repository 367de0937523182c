"""Bounded calls into external collaborators."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from .errors import AccountNotFoundError, CollaboratorError
from .models import AccountProfile
from .repositories import ProfileRepository

T = TypeVar("T")


async def call_collaborator(name: str, call: Awaitable[T], timeout: float) -> T:
    """Await `call` under `timeout`, converting any failure into CollaboratorError."""
    try:
        return await asyncio.wait_for(call, timeout=timeout)
    except TimeoutError as exc:
        raise CollaboratorError(name, f"timed out after {timeout}s") from exc
    except (CollaboratorError, AccountNotFoundError):
        raise
    except Exception as exc:
        raise CollaboratorError(name, str(exc) or type(exc).__name__) from exc


async def fetch_profile(
    profiles: ProfileRepository, user_id: str, timeout: float
) -> AccountProfile | None:
    """Profile lookup where a missing account comes back as None."""
    try:
        return await call_collaborator(
            "profile", profiles.fetch_account_profile(user_id), timeout
        )
    except AccountNotFoundError:
        return None
