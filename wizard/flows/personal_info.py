"""Four-step onboarding that completes the profile started at signup.

Steps: personal info, education and roles, skills and interests, goals and
preferences. The signup password travels as a hidden field and is required
when the final payload is assembled.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Final

import config
from constants.keys import FlowKeys, ProfileKeys, SignupKeys
from constants.skills import GOAL_IDS, SKILL_IDS
from core.dates import to_iso_date
from core.errors import SubmissionError
from core.validators import (
    clean_mobile_number,
    validate_date_of_birth,
    validate_email,
    validate_max_length,
    validate_mobile_number,
    validate_name,
)
from models.payloads import SignupCredentials, SignupPayload
from wizard.fields import FieldSpec, SelectionSpec, choice_field, field_rule
from wizard.flows.sections import education_section, role_section, valid_educations, valid_roles
from wizard.navigation.controller import WizardController
from wizard.step_registry import FormStep, RepeatableStep, SelectionStep, WizardFlow
from wizard.submission import Submitter, WizardSnapshot, build_payload, optional_list

logger = logging.getLogger(__name__)

GENDER_OPTIONS: Final[tuple[str, ...]] = ("Male", "Female", "Other")
NETWORK_VISIBILITY_OPTIONS: Final[tuple[str, ...]] = ("public", "friends")
MISSING_SIGNUP_MESSAGE: Final[str] = "Missing required information. Please go back to signup."

# signup field -> personal-info field
_SIGNUP_CARRY_OVER: Final[tuple[tuple[str, str], ...]] = (
    (SignupKeys.NAME, ProfileKeys.FULL_NAME),
    (SignupKeys.EMAIL, ProfileKeys.EMAIL),
    (SignupKeys.MOBILE_NUMBER, ProfileKeys.MOBILE_NUMBER),
    (SignupKeys.COUNTRY_CODE, ProfileKeys.COUNTRY_CODE),
    (SignupKeys.PASSWORD, ProfileKeys.PASSWORD),
)


def assemble_personal_info(snapshot: WizardSnapshot) -> Mapping[str, Any]:
    """Build the signup request body from the finished onboarding."""

    email = snapshot.text(ProfileKeys.EMAIL)
    password = snapshot.value(ProfileKeys.PASSWORD)
    if not email or not password:
        raise SubmissionError(MISSING_SIGNUP_MESSAGE)

    payload = build_payload(
        SignupPayload,
        name=snapshot.text(ProfileKeys.FULL_NAME),
        email=email.lower(),
        mobile_number=snapshot.text(ProfileKeys.MOBILE_NUMBER),
        password=password,
        country_code=snapshot.text(ProfileKeys.COUNTRY_CODE),
        gender=snapshot.text(ProfileKeys.GENDER),
        date_of_birth=to_iso_date(snapshot.value(ProfileKeys.DATE_OF_BIRTH)),
        about_me=snapshot.text(ProfileKeys.ABOUT_ME),
        educations=valid_educations(snapshot),
        roles=valid_roles(snapshot),
        skills=optional_list(snapshot.value(ProfileKeys.SKILLS)),
        goals=optional_list(snapshot.value(ProfileKeys.GOALS)),
        network_visibility=snapshot.text(ProfileKeys.NETWORK_VISIBILITY),
    )
    return payload.to_request()


def build_personal_info_flow() -> WizardFlow:
    personal = FormStep(
        key="personal_info",
        label="Personal Info",
        fields=(
            FieldSpec(
                ProfileKeys.FULL_NAME,
                "Full name",
                validator=field_rule(
                    validate_name,
                    min_length=config.NAME_MIN_LENGTH,
                    max_length=config.NAME_MAX_LENGTH,
                ),
            ),
            FieldSpec(ProfileKeys.EMAIL, "Email", validator=field_rule(validate_email)),
            FieldSpec(
                ProfileKeys.MOBILE_NUMBER,
                "Mobile number",
                validator=field_rule(validate_mobile_number, digits=config.MOBILE_NUMBER_DIGITS),
                cleaner=clean_mobile_number,
            ),
            FieldSpec(ProfileKeys.COUNTRY_CODE, "Country code", default=config.DEFAULT_COUNTRY_CODE),
            choice_field(ProfileKeys.GENDER, "Gender", GENDER_OPTIONS, default="Male"),
            FieldSpec(
                ProfileKeys.DATE_OF_BIRTH,
                "Date of birth",
                validator=field_rule(
                    validate_date_of_birth,
                    min_age=config.DOB_MIN_AGE,
                    max_age=config.DOB_MAX_AGE,
                ),
                default=None,
            ),
            FieldSpec(
                ProfileKeys.ABOUT_ME,
                "About me",
                validator=field_rule(validate_max_length, max_length=config.ABOUT_ME_MAX_LENGTH, label="About me"),
                required=False,
            ),
        ),
    )
    education = RepeatableStep(
        key="education_role",
        label="Education & Role",
        sections=(education_section(), role_section()),
    )
    skills = SelectionStep(
        key="skills",
        label="Skills & Interests",
        selection=SelectionSpec(
            ProfileKeys.SKILLS,
            "Skills",
            options=SKILL_IDS,
            multiple=True,
            error_message="Please select at least one skill or interest",
        ),
    )
    goals = SelectionStep(
        key="goals",
        label="Goals & Preferences",
        selection=SelectionSpec(
            ProfileKeys.GOALS,
            "Goals",
            options=GOAL_IDS,
            multiple=True,
            error_message="Please select at least one goal",
        ),
        fields=(
            choice_field(
                ProfileKeys.NETWORK_VISIBILITY,
                "Network visibility",
                NETWORK_VISIBILITY_OPTIONS,
                default="public",
            ),
        ),
    )
    return WizardFlow(
        key=FlowKeys.PERSONAL_INFO,
        label="Personal Info",
        steps=(personal, education, skills, goals),
        assembler=assemble_personal_info,
        hidden_fields=(ProfileKeys.PASSWORD,),
    )


def carry_over_signup(signup: Mapping[str, Any] | SignupCredentials | None) -> dict[str, Any]:
    """Map signup values onto personal-info fields.

    Accepts the snake_case values of the signup wizard, a camelCase request
    body, or a :class:`SignupCredentials` model.
    """

    if signup is None:
        return {}
    source = signup.model_dump() if isinstance(signup, SignupCredentials) else _from_camel(signup)
    values: dict[str, Any] = {}
    for signup_key, profile_key in _SIGNUP_CARRY_OVER:
        value = source.get(signup_key)
        if value not in (None, ""):
            values[profile_key] = value
    return values


def _from_camel(body: Mapping[str, Any]) -> dict[str, Any]:
    """Rename camelCase request keys to field names; snake_case keys pass through."""

    by_alias = {info.alias or name: name for name, info in SignupCredentials.model_fields.items()}
    return {by_alias.get(key, key): value for key, value in body.items()}


def create_personal_info_wizard(
    *,
    submitter: Submitter,
    signup: Mapping[str, Any] | SignupCredentials | None = None,
    initial_values: Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> WizardController:
    """Return a controller pre-populated with the values carried from signup."""

    values = carry_over_signup(signup)
    values.update(initial_values or {})
    if ProfileKeys.PASSWORD not in values:
        logger.warning("Personal info wizard started without a signup password")
    return WizardController(
        build_personal_info_flow(),
        submitter=submitter,
        initial_values=values,
        **kwargs,
    )


__all__ = [
    "GENDER_OPTIONS",
    "MISSING_SIGNUP_MESSAGE",
    "NETWORK_VISIBILITY_OPTIONS",
    "assemble_personal_info",
    "build_personal_info_flow",
    "carry_over_signup",
    "create_personal_info_wizard",
]
