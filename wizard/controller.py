"""Wizard controller owning step navigation, form values, and submission."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Protocol, Sequence

from config import WizardSettings
from models.intake import (
    ApplicationStatus,
    FieldValue,
    FormValues,
    GuidanceResult,
    StatusCode,
    StepSpec,
    ValidationErrors,
)
from utils.logging_context import set_wizard_step
from wizard.analyzer import DebouncedAnalyzer
from wizard.extraction import FIELD_KEYWORDS, extract_fields
from wizard.step_registry import CASE_DESCRIPTION_FIELD, WIZARD_STEPS, get_field_spec
from wizard.validation import validate_step

logger = logging.getLogger("legal_intake.wizard")

SUBMITTED_COMMENT = "Your application is under review."


class SpeechFlags(Protocol):
    @property
    def is_listening(self) -> bool: ...

    @property
    def is_translating(self) -> bool: ...


@dataclass
class WizardState:
    """Everything the views render; written only by :class:`WizardController`."""

    current_step: int = 0
    values: FormValues = field(default_factory=dict)
    errors: ValidationErrors = field(default_factory=dict)
    status: ApplicationStatus = field(default_factory=ApplicationStatus)
    guidance: GuidanceResult | None = None
    is_analyzing: bool = False
    is_translating: bool = False
    is_listening: bool = False


class WizardController:
    """Coordinate step transitions, validation, and async enrichment."""

    def __init__(
        self,
        *,
        steps: Sequence[StepSpec] = WIZARD_STEPS,
        analyzer: DebouncedAnalyzer | None = None,
        settings: WizardSettings | None = None,
        keyword_table: Mapping[str, Sequence[str]] = FIELD_KEYWORDS,
    ) -> None:
        if len(steps) < 2:
            raise ValueError("The wizard needs at least one data step and a terminal step")
        self._steps: tuple[StepSpec, ...] = tuple(steps)
        self._analyzer = analyzer
        self._settings = settings or WizardSettings()
        self._keyword_table = keyword_table
        self._speech: SpeechFlags | None = None
        self._state = WizardState()
        set_wizard_step(self.active_step.key)

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def steps(self) -> tuple[StepSpec, ...]:
        return self._steps

    @property
    def current_step(self) -> int:
        return self._state.current_step

    @property
    def active_step(self) -> StepSpec:
        return self._steps[self._state.current_step]

    @property
    def last_index(self) -> int:
        return len(self._steps) - 1

    @property
    def is_terminal(self) -> bool:
        return self._state.current_step == self.last_index

    @property
    def values(self) -> Mapping[str, FieldValue]:
        return MappingProxyType(self._state.values)

    @property
    def errors(self) -> Mapping[str, str]:
        return MappingProxyType(self._state.errors)

    @property
    def visible_guidance(self) -> GuidanceResult | None:
        """Guidance to display; hidden while the case description is blank."""

        description = self._state.values.get(CASE_DESCRIPTION_FIELD)
        if not isinstance(description, str) or not description.strip():
            return None
        return self._state.guidance

    def attach_speech(self, speech: SpeechFlags) -> None:
        """Mirror ``speech`` listening/translating flags into the wizard state."""

        self._speech = speech
        self._refresh_flags()

    def get_field(self, field_id: str) -> FieldValue | None:
        return self._state.values.get(field_id)

    def set_field(self, field_id: str, value: FieldValue) -> None:
        """Store ``value`` for ``field_id`` and clear that field's error.

        Raises:
            UnknownFieldError: If no data step defines ``field_id``.
        """

        get_field_spec(field_id)
        previous = self._state.values.get(field_id)
        self._state.values[field_id] = value
        self._state.errors.pop(field_id, None)
        if field_id == CASE_DESCRIPTION_FIELD and value != previous and self._analyzer is not None:
            self._analyzer.on_edit(value if isinstance(value, str) else "")
            self._refresh_flags()

    def apply_transcript(self, transcript: str) -> dict[str, str]:
        """Map a spoken transcript onto form fields."""

        return extract_fields(transcript, self.set_field, self._keyword_table)

    def validate_active_step(self) -> bool:
        """Validate the active step, replacing all current errors."""

        errors = validate_step(
            self.active_step,
            self._state.values,
            max_attachment_bytes=self._settings.max_attachment_bytes,
        )
        self._state.errors = errors
        return not errors

    def advance(self) -> bool:
        if not self.validate_active_step():
            return False
        self._go_to(min(self._state.current_step + 1, self.last_index))
        return True

    def retreat(self) -> None:
        self._go_to(max(self._state.current_step - 1, 0))

    def submit(self) -> bool:
        """Validate and hand the application over for review."""

        if not self.validate_active_step():
            logger.info("Submission blocked by validation errors")
            return False
        status = self._state.status
        if status.can_transition_to(StatusCode.REVIEWING):
            self._state.status = status.transition(StatusCode.REVIEWING, comment=SUBMITTED_COMMENT)
        logger.info(
            "Application %s submitted with fields: %s",
            self._state.status.id,
            ", ".join(sorted(self._state.values)),
        )
        self._go_to(self.last_index)
        return True

    def poll(self) -> bool:
        """Advance async enrichment and refresh transient flags.

        Returns:
            ``True`` when new guidance was stored.
        """

        changed = False
        if self._analyzer is not None and self._analyzer.poll():
            self._state.guidance = self._analyzer.result
            changed = True
        self._refresh_flags()
        return changed

    def close(self) -> None:
        if self._analyzer is not None:
            self._analyzer.close()
        self._refresh_flags()

    def _go_to(self, index: int) -> None:
        previous = self._state.current_step
        self._state.current_step = index
        self._state.errors = {}
        if index != previous:
            set_wizard_step(self.active_step.key)
            logger.info("Moved from step '%s' to '%s'", self._steps[previous].key, self.active_step.key)

    def _refresh_flags(self) -> None:
        self._state.is_analyzing = bool(self._analyzer and self._analyzer.is_analyzing)
        if self._speech is not None:
            self._state.is_listening = self._speech.is_listening
            self._state.is_translating = self._speech.is_translating


__all__ = ["SUBMITTED_COMMENT", "WizardController", "WizardState"]
