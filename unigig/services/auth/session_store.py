"""
Client-side session holder.

An ``AuthSessionStore`` is the single source of truth for "who is signed in"
for one client (a script, a worker, a test harness). It is created explicitly
and handed to whatever needs it; there is no module-level current user.
"""
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from unigig.models.user import UserRole
from unigig.schemas.user_schema import AuthResponse, UnifiedUser
from unigig.services.auth.auth_service import AuthService

logger = logging.getLogger(__name__)


class SessionEventType(str, Enum):
    SIGNED_IN = "signed_in"
    SIGNED_OUT = "signed_out"


@dataclass(frozen=True)
class SessionEvent:
    type: SessionEventType
    user: Optional[UnifiedUser] = None


SessionListener = Callable[[SessionEvent], Awaitable[None]]


class AuthSessionStore:
    def __init__(self, session_factory, auth_service: Optional[AuthService] = None):
        self._session_factory = session_factory
        self._auth = auth_service or AuthService()
        self._user: Optional[UnifiedUser] = None
        self._token: Optional[str] = None
        self._listeners: List[SessionListener] = []

    @property
    def current_user(self) -> Optional[UnifiedUser]:
        return self._user

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register an async listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def sign_up(self, email: str, password: str, role: UserRole, display_name: str) -> UnifiedUser:
        async with self._session_factory() as db:
            result = await self._auth.sign_up(db, email, password, role, display_name)
        await self._apply(result)
        return result.user

    async def sign_in(self, email: str, password: str) -> UnifiedUser:
        async with self._session_factory() as db:
            result = await self._auth.sign_in(db, email, password)
        await self._apply(result)
        return result.user

    async def restore(self, token: str) -> UnifiedUser:
        """Adopt a previously issued token, e.g. one persisted between runs."""
        async with self._session_factory() as db:
            user = await self._auth.current_session(db, token)
        await self._apply(AuthResponse(token=token, user=user))
        return user

    async def sign_out(self) -> None:
        if self._token:
            async with self._session_factory() as db:
                await self._auth.sign_out(db, self._token)
        await self._transition(None, None)

    async def _apply(self, result: AuthResponse) -> None:
        await self._transition(result.user, result.token)

    async def _transition(self, user: Optional[UnifiedUser], token: Optional[str]) -> None:
        """Swap the session state and notify listeners of a real change.

        Switching straight from one user to another is a single SIGNED_IN for
        the new user; no SIGNED_OUT is emitted for the previous one.
        """
        previous = self._user
        self._user = user
        self._token = token

        if user is None and previous is None:
            return
        if user is not None and previous is not None and user.id == previous.id:
            # Same principal re-authenticated; the view may have been refreshed but no transition happened
            return

        if user is None:
            event = SessionEvent(SessionEventType.SIGNED_OUT)
        else:
            event = SessionEvent(SessionEventType.SIGNED_IN, user)
        await self._notify(event)

    async def _notify(self, event: SessionEvent) -> None:
        listeners = list(self._listeners)
        if not listeners:
            return
        results = await asyncio.gather(*(listener(event) for listener in listeners), return_exceptions=True)
        for listener, result in zip(listeners, results):
            if isinstance(result, Exception):
                logger.error(f"Session listener {listener!r} failed on {event.type.value}: {result}")
