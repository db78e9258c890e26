"""Create-event wizard: event info, category, event type and thumbnail."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

import config
from constants.keys import EventKeys, FlowKeys, PreferenceKeys
from constants.skills import EVENT_CATEGORY_IDS
from core.dates import combine_iso_datetime, to_iso_date
from core.validators import (
    ValidationResult,
    validate_choice,
    validate_end_time,
    validate_event_date,
    validate_event_name,
    validate_host_name,
    validate_max_length,
    validate_start_time,
)
from models.payloads import CreateEventPayload
from wizard.fields import FieldSpec, SelectionSpec, field_rule
from wizard.navigation.controller import WizardController
from wizard.step_registry import FormStep, OptionalStep, SelectionStep, WizardFlow
from wizard.submission import Submitter, WizardSnapshot, build_payload
from wizard.types import FieldScope, FieldValue

EVENT_MODES: Final[tuple[str, ...]] = ("Online", "Offline")
EVENT_TYPES: Final[tuple[str, ...]] = ("Public", "Private")
PRIVATE_EVENT: Final[str] = "Private"


def _check_to_time(value: FieldValue, scope: FieldScope) -> ValidationResult:
    return validate_end_time(value, scope.get(EventKeys.FROM_TIME))


def _friend_ids(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(item) for item in value)


def is_invite_visible(values: Mapping[str, FieldValue]) -> bool:
    """The invited-friends picker is shown only for private events."""

    return values.get(EventKeys.EVENT_TYPE) == PRIVATE_EVENT


def _remote_thumbnail(value: Any) -> str | None:
    if isinstance(value, str) and value.startswith(("http://", "https://")):
        return value
    return None


def assemble_event(snapshot: WizardSnapshot) -> Mapping[str, Any]:
    """Build the create-event request body; times land on the event date."""

    event_date = snapshot.value(EventKeys.EVENT_DATE)
    event_type = snapshot.text(EventKeys.EVENT_TYPE)
    friends = list(_friend_ids(snapshot.value(EventKeys.INVITED_FRIENDS)))
    payload = build_payload(
        CreateEventPayload,
        event_name=snapshot.text(EventKeys.EVENT_NAME),
        host_by=snapshot.text(EventKeys.HOST_BY),
        event_date=to_iso_date(event_date),
        from_time=combine_iso_datetime(event_date, snapshot.value(EventKeys.FROM_TIME)),
        to_time=combine_iso_datetime(event_date, snapshot.value(EventKeys.TO_TIME)),
        description=snapshot.text(EventKeys.DESCRIPTION),
        event_mode=snapshot.text(EventKeys.EVENT_MODE),
        selected_category=snapshot.text(EventKeys.CATEGORY),
        event_type=event_type,
        selected_friends=friends if event_type == PRIVATE_EVENT else None,
        thumbnail_uri=_remote_thumbnail(snapshot.value(EventKeys.THUMBNAIL_URI)),
    )
    return payload.to_request()


def build_create_event_flow() -> WizardFlow:
    event_info = FormStep(
        key="event_info",
        label="Event Info",
        fields=(
            FieldSpec(
                EventKeys.EVENT_NAME,
                "Event name",
                validator=field_rule(
                    validate_event_name,
                    min_length=config.EVENT_NAME_MIN_LENGTH,
                    max_length=config.EVENT_NAME_MAX_LENGTH,
                ),
            ),
            FieldSpec(
                EventKeys.HOST_BY,
                "Hosted by",
                validator=field_rule(validate_host_name, min_length=config.HOST_NAME_MIN_LENGTH),
            ),
            FieldSpec(EventKeys.EVENT_DATE, "Event date", validator=field_rule(validate_event_date), default=None),
            FieldSpec(
                EventKeys.FROM_TIME,
                "From",
                validator=field_rule(validate_start_time),
                default=None,
                dependents=(EventKeys.TO_TIME,),
            ),
            FieldSpec(EventKeys.TO_TIME, "To", validator=_check_to_time, default=None),
            FieldSpec(
                EventKeys.DESCRIPTION,
                "Description",
                validator=field_rule(
                    validate_max_length,
                    max_length=config.DESCRIPTION_MAX_LENGTH,
                    label="Description",
                ),
                required=False,
            ),
            FieldSpec(
                EventKeys.EVENT_MODE,
                "Event mode",
                validator=field_rule(validate_choice, options=EVENT_MODES, label="event mode"),
                default="Online",
            ),
        ),
    )
    category = SelectionStep(
        key="category",
        label="Category",
        selection=SelectionSpec(
            EventKeys.CATEGORY,
            "Category",
            options=EVENT_CATEGORY_IDS,
            error_message="Please select a category",
        ),
    )
    event_type = SelectionStep(
        key="event_type",
        label="Event Type",
        selection=SelectionSpec(
            EventKeys.EVENT_TYPE,
            "Event type",
            options=EVENT_TYPES,
            error_message="Please select an event type",
            default="Public",
        ),
        fields=(
            FieldSpec(
                EventKeys.INVITED_FRIENDS,
                "Invited friends",
                required=False,
                cleaner=_friend_ids,
                default=(),
            ),
        ),
    )
    thumbnail = OptionalStep(
        key="thumbnail",
        label="Thumbnail",
        fields=(FieldSpec(EventKeys.THUMBNAIL_URI, "Thumbnail", required=False, default=None),),
    )
    return WizardFlow(
        key=FlowKeys.CREATE_EVENT,
        label="Create Event",
        steps=(event_info, category, event_type, thumbnail),
        assembler=assemble_event,
        preference_bindings=((EventKeys.INVITED_FRIENDS, PreferenceKeys.SELECTED_FRIENDS),),
    )


def create_event_wizard(*, submitter: Submitter, **kwargs: Any) -> WizardController:
    """Return a controller for the create-event flow."""

    return WizardController(build_create_event_flow(), submitter=submitter, **kwargs)


__all__ = [
    "EVENT_MODES",
    "EVENT_TYPES",
    "assemble_event",
    "build_create_event_flow",
    "create_event_wizard",
    "is_invite_visible",
]
