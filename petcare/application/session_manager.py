"""Owns the signed-in identity, its profile and the initial loading flag.

One instance per running client. It is built explicitly and handed to whoever needs it;
``start`` runs the initial session check and subscribes to auth changes, ``close``
tears the subscription down.
"""
from __future__ import annotations

import asyncio
import logging

from petcare.application.notifications import Channel
from petcare.application.use_cases.fetch_profile import FetchProfileUseCase
from petcare.application.use_cases.sign_in import SignInUseCase
from petcare.application.use_cases.sign_out import SignOutUseCase
from petcare.application.use_cases.sign_up import SignUpUseCase
from petcare.domain.entities.identity import AuthChange, AuthSession, IdentityEntity
from petcare.domain.entities.profile import ProfileEntity
from petcare.domain.entities.session_state import SessionState
from petcare.domain.ports import IdentityProvider, ProfileStore
from petcare.domain.results import Failure, FailureKind, Result
from petcare.domain.services.password_policy import MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)

# snapshots kept for a watcher that is not reading
WATCH_BUFFER = 16


class SessionManager:
    def __init__(
        self,
        identity_provider: IdentityProvider,
        profiles: ProfileStore,
        *,
        min_password_length: int = MIN_PASSWORD_LENGTH,
    ) -> None:
        self._provider = identity_provider
        self._sign_in = SignInUseCase(identity_provider)
        self._sign_up = SignUpUseCase(identity_provider, min_password_length=min_password_length)
        self._sign_out = SignOutUseCase(identity_provider)
        self._fetch = FetchProfileUseCase(profiles)

        self._state = SessionState.initial()
        self._started = False
        self._closed = False
        self._change_seen = False
        self._subscription: Channel[AuthChange] | None = None
        self._listener: asyncio.Task | None = None
        self._fetch_tasks: set[asyncio.Task] = set()
        self._watchers: list[Channel[SessionState]] = []
        self.last_profile_failure: Failure | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    # lifecycle

    async def start(self) -> SessionState:
        """Run the initial session check once and start listening for auth changes."""
        if self._started:
            return self._state
        self._started = True

        self._subscription = self._provider.subscribe_to_auth_changes()
        self._listener = asyncio.create_task(self._listen(self._subscription))

        result = await self._provider.get_current_session()
        if self._closed:
            return self._state
        if not result.ok:
            logger.warning("Initial session check failed: %s", result.failure.message)
            session = None
        else:
            session = result.value

        if self._change_seen:
            # a notification already wrote a newer session
            if self._state.loading:
                self._write(self._state.identity, self._state.profile, loading=False)
        else:
            self._apply_session(session)
        logger.debug("Initial session resolved, signed in: %s", self._state.identity is not None)
        return self._state

    async def close(self) -> None:
        """Stop reacting to the provider. No state is written after this returns."""
        if self._closed:
            return
        self._closed = True
        if self._subscription is not None:
            self._subscription.unsubscribe()
        tasks = [t for t in (self._listener, *self._fetch_tasks) if t is not None]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._fetch_tasks.clear()
        for watcher in list(self._watchers):
            watcher.close()
        self._watchers.clear()
        logger.debug("Session manager closed")

    # operations

    async def sign_in(self, email: str, password: str) -> Result[None]:
        return await self._sign_in.execute(email, password)

    async def sign_up(self, email: str, password: str, full_name: str) -> Result[None]:
        return await self._sign_up.execute(email, password, full_name)

    async def sign_out(self) -> Result[None]:
        return await self._sign_out.execute()

    async def refresh_profile(self) -> Result[ProfileEntity]:
        """Look the current identity's profile up again, e.g. after a failed first lookup."""
        identity = self._state.identity
        if identity is None:
            return Result.fail(FailureKind.PROFILE_LOOKUP_FAILED, "Not signed in")
        return await self._fetch_profile(identity.id)

    def watch(self) -> Channel[SessionState]:
        """Subscribe to state snapshots; ``unsubscribe()`` on the channel stops delivery."""
        channel: Channel[SessionState] = Channel(
            on_close=lambda: self._drop_watcher(channel), maxsize=WATCH_BUFFER
        )
        if self._closed:
            channel.close()
            return channel
        self._watchers.append(channel)
        return channel

    async def wait_until_settled(self, timeout: float | None = None) -> SessionState:
        """Wait until queued auth changes and in-flight profile fetches are done.

        Running out of time is not an error; the current snapshot is returned.
        """
        try:
            await asyncio.wait_for(self._settle(), timeout)
        except asyncio.TimeoutError:
            logger.debug("Session did not settle within %s seconds", timeout)
        return self._state

    # internals

    async def _settle(self) -> None:
        while not self._closed:
            if self._subscription is not None:
                await self._subscription.join()
            pending = [t for t in self._fetch_tasks if not t.done()]
            if not pending:
                return
            # asyncio.wait leaves the fetches running if this wait is cancelled
            await asyncio.wait(pending)

    async def _listen(self, subscription: Channel[AuthChange]) -> None:
        async for change in subscription:
            try:
                if not self._closed:
                    logger.debug("Auth state changed: %s", change.event)
                    self._change_seen = True
                    self._apply_session(change.session)
            finally:
                subscription.task_done()

    def _apply_session(self, session: AuthSession | None) -> None:
        identity: IdentityEntity | None = session.identity if session else None
        if identity is None:
            self._write(None, None, loading=False)
            return
        current = self._state
        same_identity = current.identity is not None and current.identity.id == identity.id
        self._write(identity, current.profile if same_identity else None, loading=False)
        self._schedule_profile_fetch(identity.id)

    def _schedule_profile_fetch(self, identity_id: str) -> None:
        task = asyncio.create_task(self._fetch_profile(identity_id))
        self._fetch_tasks.add(task)
        task.add_done_callback(self._fetch_tasks.discard)

    async def _fetch_profile(self, identity_id: str) -> Result[ProfileEntity]:
        result = await self._fetch.execute(identity_id)
        current = self._state
        if self._closed or current.identity is None or current.identity.id != identity_id:
            logger.debug("Dropping profile result for user %s, no longer current", identity_id)
            return result
        if result.ok:
            self.last_profile_failure = None
            self._write(current.identity, result.value, loading=current.loading)
        else:
            self.last_profile_failure = result.failure
            self._write(current.identity, None, loading=current.loading)
        return result

    def _write(
        self,
        identity: IdentityEntity | None,
        profile: ProfileEntity | None,
        *,
        loading: bool,
    ) -> None:
        if self._closed:
            return
        self._state = SessionState(identity=identity, profile=profile, loading=loading)
        for watcher in list(self._watchers):
            watcher.publish(self._state)

    def _drop_watcher(self, channel: Channel[SessionState]) -> None:
        if channel in self._watchers:
            self._watchers.remove(channel)
