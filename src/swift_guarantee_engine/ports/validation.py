"""IMessageCheck — composable content-validation protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..validation.checks import ValidationContext
    from ..validation.result import ValidationReport


@runtime_checkable
class IMessageCheck(Protocol):
    """Protocol for one step of message validation.

    Checks are composed by
    :class:`~swift_guarantee_engine.validation.validator.SwiftValidator`,
    which merges every report without short-circuiting.
    """

    def check(self, context: ValidationContext) -> ValidationReport:
        """Inspect *context* and return errors and warnings as data.

        Must never raise for content problems.
        """
        ...
