"""ScenarioEngine — builds scripted multi-message business flows."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import timedelta
from typing import TYPE_CHECKING, Any

import pydantic

from ..domain.enums import Direction
from ..primitives.clock import utc_now
from ..primitives.exceptions import ScenarioParameterError, UnknownScenarioError
from ..primitives.id_generator import ReferenceGenerator
from .parameters import ScenarioParameters
from .results import ScenarioResult, ScenarioSummary, TimelineEntry
from .templates import SCENARIOS, ScenarioDefinition, StepContext

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from ..domain.message import SwiftMessage
    from ..factory import MessageFactory
    from ..settings import EngineSettings

logger = logging.getLogger("swift_engine.scenarios")


def _error_details(exc: pydantic.ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(part) for part in error['loc']) or 'parameters'}: "
        f"{error['msg']}"
        for error in exc.errors()
    ]


class ScenarioEngine:
    """Runs a named scenario script through the :class:`MessageFactory`.

    Messages are built up front, each stamped at the scenario start plus its
    step offset; persisting them at those offsets is the caller's job.
    Nothing is built when the name is unknown or the parameters are invalid.
    """

    def __init__(
        self,
        factory: MessageFactory,
        settings: EngineSettings,
        references: ReferenceGenerator | None = None,
        scenarios: Mapping[str, ScenarioDefinition[Any]] | None = None,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        self._factory = factory
        self._settings = settings
        self._references = references or ReferenceGenerator()
        self._scenarios = dict(scenarios if scenarios is not None else SCENARIOS)
        self._now = now

    def available(self) -> list[str]:
        return list(self._scenarios)

    def definition(self, name: str) -> ScenarioDefinition[Any]:
        definition = self._scenarios.get(name)
        if definition is None:
            raise UnknownScenarioError(name, self.available())
        return definition

    def parse_parameters(
        self,
        definition: ScenarioDefinition[Any],
        parameters: Mapping[str, Any] | ScenarioParameters | None,
    ) -> ScenarioParameters:
        if isinstance(parameters, definition.parameters_model):
            return parameters
        if isinstance(parameters, ScenarioParameters):
            parameters = parameters.model_dump(exclude_unset=True)
        try:
            return definition.parameters_model.model_validate(dict(parameters or {}))
        except pydantic.ValidationError as exc:
            raise ScenarioParameterError(definition.name, _error_details(exc)) from exc

    def run(
        self,
        name: str,
        parameters: Mapping[str, Any] | ScenarioParameters | None = None,
    ) -> ScenarioResult:
        definition = self.definition(name)
        params = self.parse_parameters(definition, parameters)

        institution = self._settings.institution_bic
        counterparty = params.counterparty_bic or self._settings.counterparty_bic
        started_at = self._now()
        messages: list[SwiftMessage] = []
        timeline: list[TimelineEntry] = []

        for step in definition.steps:
            context = StepContext(
                parameters=params,
                references=self._references,
                today=started_at.date(),
                previous=messages,
            )
            outgoing = step.direction is Direction.OUTGOING
            related = messages[step.reply_to] if step.reply_to is not None else None
            built = self._factory.build(
                step.message_type,
                step.build_content(context),
                sender_id=institution if outgoing else counterparty,
                receiver_id=counterparty if outgoing else institution,
                direction=step.direction,
                related_message_id=related.id if related else None,
                is_response=related is not None,
                timestamp=started_at + timedelta(milliseconds=step.offset_ms),
            )
            if not built.is_valid:
                raise ScenarioParameterError(name, built.validation.errors)
            message = built.message
            # Simulated counterparties answer instantly at their offset.
            message.processed_at = message.timestamp
            messages.append(message)
            timeline.append(
                TimelineEntry(
                    offset_ms=step.offset_ms,
                    action=step.action,
                    message_id=message.id,
                    message_type=message.type,
                )
            )

        summary = ScenarioSummary(
            scenario=name,
            messages_exchanged=len(messages),
            reference=messages[0].primary_reference if messages else None,
            status=definition.final_status,
        )
        logger.info(
            "Scenario %s built %d message(s), reference=%s",
            name,
            len(messages),
            summary.reference,
        )
        return ScenarioResult(messages=messages, timeline=timeline, summary=summary)
