"""Recognition session — owns the engine and fans its notifications out.

The SessionManager is the only code that touches the engine. It turns the
engine's callbacks into a small state machine (idle, listening, stopping)
and broadcasts listening, transcript, microphone and capability changes to
every subscriber in registration order.

Everything runs on one asyncio event loop. Engine notifications are
ordinary callbacks on that loop, so they are serialized with the public
coroutines. ``start_listening``, ``stop_listening`` and ``abort_listening``
return only once the engine has confirmed the transition.
"""

import asyncio
import inspect
import logging
import time
import uuid
from typing import Callable

from hearken.config import DEFAULT_LANGUAGE, FINAL_DEBOUNCE_WINDOW
from hearken.engine.base import EngineFactory, RecognitionEngine
from hearken.engine.types import (
    RecognitionErrorEvent,
    RecognitionErrorKind,
    RecognitionResultEvent,
)
from hearken.errors import EngineAlreadyStartedError, PermissionDeniedError, TransientStartError
from hearken.events.event_bus import EventBus
from hearken.events.types import SessionEvent, SessionEventType
from hearken.session.subscriber import SubscriberCallbacks, SubscriberId, Subscription
from hearken.session.types import Capabilities, DisconnectKind, SessionState
from hearken.transcript.coalescer import FinalTranscriptCoalescer
from hearken.transcript.reducer import concat_transcripts

logger = logging.getLogger(__name__)


class SessionManager:
    """Drives one recognition engine on behalf of many subscribers."""

    def __init__(
        self,
        engine_factory: EngineFactory | None = None,
        *,
        event_bus: EventBus[SessionEvent] | None = None,
        final_debounce_window: float = FINAL_DEBOUNCE_WINDOW,
        clock: Callable[[], float] = time.monotonic,
        low_confidence_final_as_interim: bool = True,
    ) -> None:
        self._default_factory = engine_factory
        self._event_bus = event_bus
        self._low_confidence_final_as_interim = low_confidence_final_as_interim
        self._coalescer = FinalTranscriptCoalescer(final_debounce_window, clock)

        self._engine: RecognitionEngine | None = None
        self._engine_disabled: bool = False
        self._state: SessionState = SessionState.IDLE
        self._pending_disconnect: DisconnectKind = DisconnectKind.NONE
        self._disconnect_waiter: asyncio.Future | None = None
        self._start_task: asyncio.Task | None = None
        self._start_args: tuple[bool, str | None] | None = None

        self._subscribers: dict[SubscriberId, SubscriberCallbacks] = {}
        self._announced_listening: bool = False
        self._microphone_available: bool = True
        self._capabilities = Capabilities()
        self._previous_final_only: str | None = None
        self.interim_transcript: str = ""

        self._install_engine(engine_factory)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def listening(self) -> bool:
        return self._state == SessionState.LISTENING

    @property
    def engine(self) -> RecognitionEngine | None:
        """The active engine, for inspection. Do not drive it directly."""
        return self._engine

    @property
    def continuous(self) -> bool:
        return bool(self._engine and self._engine.continuous)

    @property
    def language(self) -> str:
        return self._engine.lang if self._engine else ""

    @property
    def pending_disconnect(self) -> DisconnectKind:
        return self._pending_disconnect

    @property
    def microphone_available(self) -> bool:
        return self._microphone_available

    @property
    def capabilities(self) -> Capabilities:
        return self._capabilities

    @property
    def supports_recognition(self) -> bool:
        return self._capabilities.supports_recognition

    @property
    def supports_continuous(self) -> bool:
        return self._capabilities.supports_continuous

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def subscribe(
        self,
        callbacks: SubscriberCallbacks,
        subscriber_id: SubscriberId | None = None,
    ) -> Subscription:
        """Register *callbacks* and return the subscription that owns them."""
        if subscriber_id is None:
            subscriber_id = SubscriberId(uuid.uuid4().hex)
        self._subscribers[subscriber_id] = callbacks
        logger.debug("Subscriber %s added (total: %d)", subscriber_id, len(self._subscribers))
        return Subscription(self, subscriber_id)

    def unsubscribe(self, subscriber_id: SubscriberId) -> None:
        """Remove a subscriber.  No-op if it is not registered."""
        if self._subscribers.pop(subscriber_id, None) is not None:
            logger.debug(
                "Subscriber %s removed (remaining: %d)", subscriber_id, len(self._subscribers)
            )

    def is_subscribed(self, subscriber_id: SubscriberId) -> bool:
        return subscriber_id in self._subscribers

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def start_listening(self, continuous: bool = False, language: str | None = None) -> None:
        """Start capturing, reconfiguring the engine first if needed.

        Concurrent calls with the same arguments share the start already in
        flight. A call with different arguments waits for it, then applies
        its own configuration.
        """
        if self._engine is None:
            logger.debug("start_listening ignored — no recognition engine")
            return

        args = (continuous, language)
        task = self._start_task
        while task is not None and not task.done() and self._start_args != args:
            await asyncio.wait({task})
            task = self._start_task

        if task is None or task.done():
            task = self._track_start(self._start(continuous, language), args)
        await asyncio.shield(task)

    async def stop_listening(self) -> None:
        """Stop capturing, keeping results the engine still has to deliver."""
        await self._disconnect(DisconnectKind.STOP)

    async def abort_listening(self) -> None:
        """Stop capturing and discard the utterance in progress."""
        await self._disconnect(DisconnectKind.ABORT)

    def reset_transcript(self) -> None:
        """Discard the utterance in progress.

        Subscribers clear their own transcripts; this only makes the engine
        drop what it has heard so far. A continuous session keeps listening.
        Safe to call from synchronous code outside the event loop.
        """
        if self._engine is None or self._state != SessionState.LISTENING:
            return
        self._request_disconnect(DisconnectKind.RESET)

    def set_engine(self, engine_factory: EngineFactory | None) -> None:
        """Replace the engine. ``None`` reverts to the session's default.

        The old engine is silenced before anything else happens, so none of
        its notifications reach subscribers after this returns.
        An old engine whose start is still in flight is aborted as soon as
        that start completes.
        """
        factory = engine_factory if engine_factory is not None else self._default_factory
        self._install_engine(factory)

    async def close(self) -> None:
        """Abort any capture and release the engine."""
        await self.abort_listening()
        if self._engine is not None:
            self._engine.detach()
            self._engine = None
        self._subscribers.clear()

    # ------------------------------------------------------------------
    # Engine lifecycle
    # ------------------------------------------------------------------

    def _install_engine(self, factory: EngineFactory | None) -> None:
        old = self._engine
        self._engine = None
        if old is not None:
            old.detach()
            if self._state != SessionState.IDLE:
                self._force_stop(old)

        self._start_task = None
        self._start_args = None
        self._engine_disabled = False
        self._previous_final_only = None
        self._coalescer.reset()

        engine: RecognitionEngine | None = None
        if factory is not None:
            try:
                engine = factory()
            except Exception:
                logger.warning("Recognition engine could not be created", exc_info=True)

        if engine is not None:
            engine.continuous = False
            engine.interim_results = True
            if DEFAULT_LANGUAGE:
                engine.lang = DEFAULT_LANGUAGE
            self._attach(engine)
            self._engine = engine
            self._capabilities = Capabilities(
                supports_recognition=True,
                supports_continuous=engine.supports_continuous,
            )
            logger.info(
                "Recognition engine installed: %s (continuous=%s)",
                type(engine).__name__,
                engine.supports_continuous,
            )
        else:
            self._capabilities = Capabilities()
            logger.info("Speech recognition unsupported — no engine available")

        self._emit_capability_change()

    def _attach(self, engine: RecognitionEngine) -> None:
        engine.on_result = self._handle_result
        engine.on_end = self._handle_end
        engine.on_error = self._handle_error

    def _force_stop(self, engine: RecognitionEngine) -> None:
        """Stop a detached engine and settle whatever was waiting on it."""
        try:
            engine.abort()
        except Exception:
            logger.warning("Recognition engine failed to abort", exc_info=True)
        self._pending_disconnect = DisconnectKind.NONE
        self._settle_disconnect()
        self._state = SessionState.IDLE
        self._emit_listening_change(False)

    def _track_start(self, coro, args: tuple[bool, str | None]) -> asyncio.Task:
        self._start_task = asyncio.ensure_future(coro)
        self._start_args = args
        return self._start_task

    async def _start(self, continuous: bool, language: str | None) -> None:
        engine = self._engine
        if engine is None:
            return

        if self._engine_disabled:
            logger.info("Re-arming recognition engine after permission loss")
            self._attach(engine)
            self._engine_disabled = False

        continuous_changed = continuous != engine.continuous
        language_changed = bool(language) and language != engine.lang
        if continuous_changed or language_changed:
            if self._state != SessionState.IDLE:
                await self._disconnect(DisconnectKind.STOP)
            if engine is not self._engine:
                return
            if continuous_changed:
                engine.continuous = continuous
            if language_changed:
                engine.lang = language
            logger.info(
                "Session reconfigured (continuous=%s, language=%r)", engine.continuous, engine.lang
            )

        if self._state == SessionState.STOPPING_PENDING_IDLE:
            await self._wait_for_disconnect()
            if engine is not self._engine:
                return
        if self._state == SessionState.LISTENING:
            return

        if not engine.continuous:
            self._emit_clear_transcript()

        try:
            result = engine.start()
            if inspect.isawaitable(result):
                await result
        except EngineAlreadyStartedError:
            logger.debug("Redundant engine start ignored")
        except Exception:
            logger.warning("Recognition engine failed to start", exc_info=True)
            if engine is self._engine:
                self._state = SessionState.IDLE
                self._emit_listening_change(False)
                self._emit_microphone_availability_change(
                    False, error=TransientStartError.__name__
                )
            return

        if engine is not self._engine:
            logger.info("Engine replaced during start — aborting the replaced engine")
            try:
                engine.abort()
            except Exception:
                logger.warning("Replaced recognition engine failed to abort", exc_info=True)
            return
        self._state = SessionState.LISTENING
        self._previous_final_only = None
        logger.info("Listening (continuous=%s, language=%r)", engine.continuous, engine.lang)
        if not self._microphone_available:
            self._emit_microphone_availability_change(True)
        self._emit_listening_change(True)

    async def _disconnect(self, kind: DisconnectKind) -> None:
        if self._engine is None:
            return

        start_task = self._start_task
        if (
            start_task is not None
            and not start_task.done()
            and start_task is not asyncio.current_task()
        ):
            await asyncio.wait({start_task})

        if self._state == SessionState.IDLE:
            self._emit_listening_change(False)
            return

        self._request_disconnect(kind)
        self._emit_listening_change(False)
        await self._wait_for_disconnect()

    def _request_disconnect(self, kind: DisconnectKind) -> None:
        """Ask the engine to end. ``on_end`` moves the session back to idle.

        Needs no running event loop, so ``reset_transcript()`` works from
        plain synchronous code.
        """
        if self._state == SessionState.STOPPING_PENDING_IDLE:
            if kind != DisconnectKind.RESET:
                self._pending_disconnect = kind
            return

        engine = self._engine
        self._pending_disconnect = kind
        self._state = SessionState.STOPPING_PENDING_IDLE
        logger.info("Disconnecting engine (%s)", kind.value)

        try:
            if kind == DisconnectKind.STOP:
                engine.stop()
            else:
                engine.abort()
        except Exception:
            logger.warning("Recognition engine failed to %s", kind.value, exc_info=True)
            if self._state == SessionState.STOPPING_PENDING_IDLE:
                self._handle_end()

    async def _wait_for_disconnect(self) -> None:
        """Suspend until the pending disconnect is confirmed by ``on_end``."""
        if self._state != SessionState.STOPPING_PENDING_IDLE:
            return
        if self._disconnect_waiter is None:
            self._disconnect_waiter = asyncio.get_running_loop().create_future()
        await asyncio.shield(self._disconnect_waiter)

    def _settle_disconnect(self) -> None:
        waiter = self._disconnect_waiter
        self._disconnect_waiter = None
        if waiter is not None and not waiter.done():
            waiter.set_result(None)

    def _schedule_restart(self) -> None:
        if self._start_task is not None and not self._start_task.done():
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop — cannot resume continuous listening")
            self._emit_listening_change(False)
            return
        logger.debug("Resuming continuous listening")
        task = self._track_start(self._start(True, None), (True, None))
        task.add_done_callback(self._log_restart_failure)

    @staticmethod
    def _log_restart_failure(task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.error("Resuming continuous listening failed", exc_info=task.exception())

    # ------------------------------------------------------------------
    # Engine notifications
    # ------------------------------------------------------------------

    def _handle_end(self) -> None:
        engine = self._engine
        kind = self._pending_disconnect
        self._pending_disconnect = DisconnectKind.NONE
        self._state = SessionState.IDLE
        self._coalescer.reset()

        if kind != DisconnectKind.NONE:
            self._settle_disconnect()
            logger.debug("Engine ended after %s", kind.value)
            if kind == DisconnectKind.RESET and engine is not None and engine.continuous:
                self._schedule_restart()
            elif kind == DisconnectKind.RESET:
                self._emit_listening_change(False)
            return

        if engine is not None and engine.continuous:
            self._schedule_restart()
            return

        logger.info("Engine ended — session idle")
        self._emit_listening_change(False)

    def _handle_result(self, event: RecognitionResultEvent) -> None:
        results = event.results
        first = event.result_index if event.result_index is not None else len(results) - 1

        interim = ""
        final = ""
        dropped = False
        for result in results[max(first, 0):]:
            best = result.best
            is_final = result.is_final and not (
                self._low_confidence_final_as_interim and best.confidence <= 0
            )
            if is_final:
                if self._coalescer.accept(best.transcript):
                    final = concat_transcripts(final, best.transcript)
                else:
                    dropped = True
            else:
                interim = concat_transcripts(interim, best.transcript)

        if dropped and not interim and not final:
            return

        if not interim and final:
            if final == self._previous_final_only:
                logger.debug("Suppressing repeated final result: %r", final)
                return
            self._previous_final_only = final
        else:
            self._previous_final_only = None

        self.interim_transcript = interim
        self._emit_transcript_change(interim, final)

    def _handle_error(self, event: RecognitionErrorEvent) -> None:
        if event.error != RecognitionErrorKind.NOT_ALLOWED:
            logger.warning("Recognition engine error: %s %s", event.error, event.message)
            return

        logger.warning("Microphone permission denied — disabling recognition engine")
        engine = self._engine
        if engine is not None:
            engine.detach()
            self._engine_disabled = True
            if self._state != SessionState.IDLE:
                self._force_stop(engine)
        self._emit_microphone_availability_change(False, error=PermissionDeniedError.__name__)

    # ------------------------------------------------------------------
    # Broadcasts
    # ------------------------------------------------------------------

    def _callbacks(self) -> list[SubscriberCallbacks]:
        return list(self._subscribers.values())

    def _publish(self, event: SessionEvent) -> None:
        if self._event_bus is not None:
            self._event_bus.emit_nowait(event)

    def _emit_listening_change(self, listening: bool) -> None:
        if listening == self._announced_listening:
            return
        self._announced_listening = listening
        for callbacks in self._callbacks():
            callbacks.on_listening_change(listening)
        self._publish(SessionEvent(type=SessionEventType.LISTENING_CHANGED, listening=listening))

    def _emit_transcript_change(self, interim: str, final: str) -> None:
        logger.debug("Transcript changed: interim=%r, final=%r", interim, final)
        for callbacks in self._callbacks():
            callbacks.on_transcript_change(interim, final)
        self._publish(
            SessionEvent(
                type=SessionEventType.TRANSCRIPT_CHANGED,
                interim_transcript=interim,
                final_transcript=final,
            )
        )

    def _emit_clear_transcript(self) -> None:
        for callbacks in self._callbacks():
            callbacks.on_clear_transcript()
        self._publish(SessionEvent(type=SessionEventType.TRANSCRIPT_CLEARED))

    def _emit_microphone_availability_change(self, available: bool, error: str | None = None) -> None:
        self._microphone_available = available
        for callbacks in self._callbacks():
            callbacks.on_microphone_availability_change(available)
        self._publish(
            SessionEvent(
                type=SessionEventType.MICROPHONE_AVAILABILITY_CHANGED,
                microphone_available=available,
                error=error,
            )
        )

    def _emit_capability_change(self) -> None:
        supported = self._capabilities.supports_recognition
        continuous = self._capabilities.supports_continuous
        for callbacks in self._callbacks():
            callbacks.on_capability_change(supported, continuous)
        self._publish(
            SessionEvent(
                type=SessionEventType.CAPABILITY_CHANGED,
                supports_recognition=supported,
                supports_continuous=continuous,
            )
        )
