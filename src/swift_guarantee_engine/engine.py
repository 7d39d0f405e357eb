"""SwiftMessagingEngine — the async facade external callers use."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any

import pydantic

from .adapters.memory.store import InMemoryMessageStore
from .codec.codec import SwiftCodec
from .codec.tags import message_templates
from .correlation.engine import CorrelationEngine
from .cqrs.commands import (
    ClearMessages,
    ReceiveMessage,
    RunScenario,
    SubmitMessage,
    UpdateMessageStatus,
)
from .cqrs.dispatcher import CommandDispatcher
from .domain.enums import Direction, MessageStatus, MessageType
from .domain.queries import MessageFilter, MessageQuery, Timeframe
from .factory import MessageFactory
from .middleware.logging import LoggingMiddleware, StructuredLoggingMiddleware
from .notifications.hub import NotificationHub
from .primitives.exceptions import (
    ConfigurationError,
    MessageNotFoundError,
    UnsupportedMessageTypeError,
)
from .primitives.id_generator import ReferenceGenerator
from .responses.generator import ResponseGenerator
from .responses.scheduler import ResponseScheduler
from .scenarios.engine import ScenarioEngine
from .settings import EngineSettings
from .tracing import CorrelationIdMiddleware
from .validation.validator import SwiftValidator

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from datetime import datetime

    from .codec.tags import MessageTemplate
    from .correlation.thread import MessageThread
    from .domain.message import SwiftMessage
    from .domain.queries import (
        FlowAnalysis,
        MessagePage,
        MessageStatistics,
        SearchResults,
    )
    from .notifications.hub import Subscription
    from .ports.middleware import IMiddleware
    from .ports.store import IMessageStore
    from .scenarios.parameters import ScenarioParameters
    from .scenarios.results import ScenarioResult
    from .validation.result import ValidationReport

logger = logging.getLogger("swift_engine.engine")

_QUERY_OPTIONS = frozenset({"order_by", "descending", "limit", "offset"})


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of submitting or receiving a message.

    ``message`` is ``None`` when a submission was rejected by validation.
    """

    validation: ValidationReport
    message: SwiftMessage | None = None
    response_scheduled: bool = False

    @property
    def accepted(self) -> bool:
        return self.message is not None and self.validation.is_valid


class SwiftMessagingEngine:
    """Validates, encodes, stores and correlates guarantee messages.

    Write operations are dispatched as commands through a middleware
    pipeline; reads go straight to the store. Automatic responses and
    scenario steps run later on the :class:`ResponseScheduler`, so callers
    that need them settled should ``await engine.drain()``.

    Usage::

        async with SwiftMessagingEngine() as engine:
            result = await engine.submit("MT760", sender, receiver, content)
            await engine.drain()
            thread = await engine.thread(result.message.id)
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        *,
        store: IMessageStore | None = None,
        hub: NotificationHub | None = None,
        codec: SwiftCodec | None = None,
        validator: SwiftValidator | None = None,
        references: ReferenceGenerator | None = None,
        middlewares: list[IMiddleware] | None = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.hub = hub or NotificationHub(self.settings.subscriber_buffer_size)
        self.store: IMessageStore = store or InMemoryMessageStore(
            max_history_size=self.settings.max_history_size, publisher=self.hub
        )
        self.codec = codec or SwiftCodec()
        self.validator = validator or SwiftValidator()
        references = references or ReferenceGenerator()

        self.factory = MessageFactory(self.validator, self.codec)
        self.responses = ResponseGenerator(self.codec, references)
        self.scheduler = ResponseScheduler(self.settings.response_delay_scale)
        self.correlation = CorrelationEngine(self.store)
        self.scenarios = ScenarioEngine(self.factory, self.settings, references)

        if middlewares is None:
            middlewares = [
                CorrelationIdMiddleware(),
                StructuredLoggingMiddleware()
                if self.settings.structured_logging
                else LoggingMiddleware(),
            ]
        self._dispatcher = CommandDispatcher(middlewares)
        self._dispatcher.register(SubmitMessage, self._handle_submit)
        self._dispatcher.register(ReceiveMessage, self._handle_receive)
        self._dispatcher.register(UpdateMessageStatus, self._handle_update_status)
        self._dispatcher.register(RunScenario, self._handle_run_scenario)
        self._dispatcher.register(ClearMessages, self._handle_clear)

    # ── Lifecycle ────────────────────────────────────────────────

    async def start(self) -> None:
        await self.scheduler.start()

    async def stop(self) -> None:
        await self.scheduler.stop()

    async def drain(self) -> None:
        """Wait for every scheduled response and scenario step."""
        await self.scheduler.drain()

    async def __aenter__(self) -> SwiftMessagingEngine:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    # ── Commands ─────────────────────────────────────────────────

    async def submit(
        self,
        message_type: MessageType | str,
        sender_id: str,
        receiver_id: str,
        content: Mapping[str, Any],
    ) -> SubmissionResult:
        result: SubmissionResult = await self._dispatcher.send(
            SubmitMessage(
                message_type=str(getattr(message_type, "value", message_type)),
                sender_id=sender_id,
                receiver_id=receiver_id,
                content=dict(content),
            )
        )
        return result

    async def receive(
        self, raw_message: str, sender_id: str | None = None
    ) -> SubmissionResult:
        result: SubmissionResult = await self._dispatcher.send(
            ReceiveMessage(raw_message=raw_message, sender_id=sender_id)
        )
        return result

    async def update_status(
        self,
        message_id: str,
        status: MessageStatus | str,
        note: str | None = None,
    ) -> SwiftMessage:
        message: SwiftMessage = await self._dispatcher.send(
            UpdateMessageStatus(
                message_id=message_id, status=MessageStatus(status), note=note
            )
        )
        return message

    async def simulate_scenario(
        self,
        name: str,
        parameters: Mapping[str, Any] | ScenarioParameters | None = None,
    ) -> ScenarioResult:
        if parameters is not None and not isinstance(parameters, dict):
            parameters = (
                parameters.model_dump()
                if isinstance(parameters, pydantic.BaseModel)
                else dict(parameters)
            )
        result: ScenarioResult = await self._dispatcher.send(
            RunScenario(name=name, parameters=parameters or {})
        )
        return result

    async def clear(self) -> int:
        cleared: int = await self._dispatcher.send(ClearMessages())
        return cleared

    # ── Handlers ─────────────────────────────────────────────────

    async def _handle_submit(self, command: SubmitMessage) -> SubmissionResult:
        try:
            message_type = MessageType.parse(command.message_type)
        except UnsupportedMessageTypeError:
            return SubmissionResult(
                validation=self.validator.validate(
                    command.message_type, command.content
                )
            )

        built = self.factory.build(
            message_type,
            command.content,
            sender_id=command.sender_id,
            receiver_id=command.receiver_id,
            direction=Direction.OUTGOING,
        )
        if not built.is_valid:
            logger.info(
                "Rejected %s from %s: %s",
                message_type.value,
                command.sender_id,
                "; ".join(built.validation.errors),
            )
            return SubmissionResult(validation=built.validation)

        message = await self.store.store(built.message)
        scheduled = self._schedule_response(message)
        return SubmissionResult(
            validation=built.validation, message=message, response_scheduled=scheduled
        )

    async def _handle_receive(self, command: ReceiveMessage) -> SubmissionResult:
        decoded = self.codec.decode(command.raw_message)
        built = self.factory.build(
            decoded.message_type,
            decoded.content,
            sender_id=command.sender_id
            or decoded.sender_id
            or self.settings.counterparty_bic,
            receiver_id=decoded.receiver_id or self.settings.institution_bic,
            direction=Direction.INCOMING,
        )
        if decoded.unmapped_tags:
            logger.warning(
                "Received %s carries undeclared tags: %s",
                decoded.message_type.value,
                ", ".join(sorted(decoded.unmapped_tags)),
            )
        message = await self.store.store(built.message)
        return SubmissionResult(validation=built.validation, message=message)

    async def _handle_update_status(self, command: UpdateMessageStatus) -> SwiftMessage:
        return await self.store.update_status(
            command.message_id, command.status, command.note
        )

    async def _handle_run_scenario(self, command: RunScenario) -> ScenarioResult:
        result = self.scenarios.run(command.name, command.parameters)
        for message, entry in zip(result.messages, result.timeline):
            if entry.offset_ms == 0:
                await self.store.store(message)
            else:
                self.scheduler.schedule(
                    entry.offset_ms / 1000,
                    partial(self._store_step, message),
                    label=f"{command.name} step {entry.message_type.value}",
                )
        return result

    async def _store_step(self, message: SwiftMessage) -> None:
        await self.store.store(message)

    async def _handle_clear(self, command: ClearMessages) -> int:
        return await self.store.clear()

    # ── Automatic responses ──────────────────────────────────────

    def _schedule_response(self, original: SwiftMessage) -> bool:
        if not self.settings.auto_respond or original.is_response:
            return False
        delay_ms = self.responses.delay_for(original.type)
        if delay_ms is None:
            return False
        self.scheduler.schedule(
            delay_ms / 1000,
            partial(self._deliver_response, original),
            label=f"reply to {original.type.value} {original.id}",
        )
        return True

    async def _deliver_response(self, original: SwiftMessage) -> None:
        response = self.responses.generate_response(original)
        if response is None:
            return
        report = self.factory.revalidate(response)
        if not report.is_valid:
            response.status = MessageStatus.FAILED
            logger.warning(
                "Generated %s reply to %s failed validation: %s",
                response.type.value,
                original.id,
                "; ".join(report.errors),
            )
        await self.store.store(response)

    # ── Queries ──────────────────────────────────────────────────

    def validate(
        self,
        message_type: MessageType | str,
        content: Mapping[str, Any],
        *,
        sender_id: str | None = None,
        receiver_id: str | None = None,
    ) -> ValidationReport:
        return self.validator.validate(
            message_type, content, sender_id=sender_id, receiver_id=receiver_id
        )

    async def get_message(self, message_id: str) -> SwiftMessage:
        message = await self.store.get(message_id)
        if message is None:
            raise MessageNotFoundError(message_id)
        return message

    async def query(
        self, query: MessageQuery | None = None, **criteria: Any
    ) -> MessagePage:
        """Page through stored messages.

        Pass a :class:`MessageQuery`, or keyword criteria mixing filter
        fields (``type``, ``status``, ``direction``, ``text``, ...) with
        ``order_by``, ``descending``, ``limit`` and ``offset``.
        """
        if query is None:
            query = self._build_query(criteria)
        elif criteria:
            raise ConfigurationError("Pass either a MessageQuery or criteria")
        return await self.store.query(query)

    @staticmethod
    def _build_query(criteria: dict[str, Any]) -> MessageQuery:
        options = {k: v for k, v in criteria.items() if k in _QUERY_OPTIONS}
        filters = {k: v for k, v in criteria.items() if k not in _QUERY_OPTIONS}
        unknown = set(filters) - set(MessageFilter.model_fields)
        if unknown:
            raise ConfigurationError(
                f"Unknown query criteria: {', '.join(sorted(unknown))}"
            )
        try:
            return MessageQuery(filter=MessageFilter(**filters), **options)
        except pydantic.ValidationError as exc:
            raise ConfigurationError(f"Invalid query: {exc}") from exc

    async def search(
        self,
        text: str,
        message_filter: MessageFilter | None = None,
        limit: int | None = None,
    ) -> SearchResults:
        return await self.store.search(
            text, message_filter, limit or self.settings.default_search_limit
        )

    async def by_date_range(
        self,
        start: datetime,
        end: datetime,
        message_filter: MessageFilter | None = None,
    ) -> list[SwiftMessage]:
        return await self.store.by_date_range(start, end, message_filter)

    async def related_messages(self, message_id: str) -> list[SwiftMessage]:
        return await self.correlation.related_messages(message_id)

    async def thread(self, message_id: str) -> MessageThread:
        return await self.correlation.build_thread(message_id)

    async def history(self, limit: int | None = None) -> list[SwiftMessage]:
        return await self.store.history(limit)

    async def statistics(self) -> MessageStatistics:
        return await self.store.statistics()

    async def flow_analysis(
        self, timeframe: Timeframe | str = Timeframe.DAY
    ) -> FlowAnalysis:
        return await self.store.flow_analysis(timeframe)

    # ── Notifications & metadata ─────────────────────────────────

    def subscribe(
        self,
        event_types: Iterable[str] | None = None,
        buffer_size: int | None = None,
    ) -> Subscription:
        return self.hub.subscribe(event_types, buffer_size)

    @staticmethod
    def templates() -> dict[str, MessageTemplate]:
        return message_templates()

    @staticmethod
    def supported_types() -> list[str]:
        return [message_type.value for message_type in MessageType]

    def available_scenarios(self) -> list[str]:
        return self.scenarios.available()
