"""One SessionManager per browser client, keyed by the session cookie."""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Awaitable, Callable

from petcare.application.session_manager import SessionManager
from petcare.infrastructure.database.repositories.household_repository import HouseholdRepository

logger = logging.getLogger(__name__)


@dataclass
class ClientSession:
    id: str
    manager: SessionManager
    households: HouseholdRepository


# builds the backend objects for a new client: its session manager and the
# household repository bound to the same backend client
ClientFactory = Callable[[], Awaitable[tuple[SessionManager, HouseholdRepository]]]


class SessionRegistry:
    def __init__(self, factory: ClientFactory) -> None:
        self._factory = factory
        self._sessions: dict[str, ClientSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    async def open(self) -> ClientSession:
        """Create and start a session manager for a new client."""
        manager, households = await self._factory()
        session = ClientSession(id=secrets.token_urlsafe(32), manager=manager, households=households)
        self._sessions[session.id] = session
        await manager.start()
        logger.debug("Opened client session (%d active)", len(self._sessions))
        return session

    def get(self, session_id: str | None) -> ClientSession | None:
        if not session_id:
            return None
        return self._sessions.get(session_id)

    async def discard(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is not None:
            await session.manager.close()
            logger.debug("Closed client session (%d active)", len(self._sessions))

    async def close_all(self) -> None:
        sessions = list(self._sessions.values())
        self._sessions.clear()
        for session in sessions:
            await session.manager.close()
