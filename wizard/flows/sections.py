"""Education and role sections shared by the onboarding and profile flows."""

from __future__ import annotations

from collections.abc import Mapping

from config import DESCRIPTION_MAX_LENGTH, YEAR_MIN
from constants.keys import EducationKeys, RoleKeys, SectionKeys
from core.dates import to_iso_date
from core.validators import (
    ValidationResult,
    validate_end_date,
    validate_end_year,
    validate_max_length,
    validate_past_date,
    validate_year,
)
from models.payloads import EducationPayload, RolePayload
from wizard.fields import FieldSpec, SectionSpec, field_rule, when_false
from wizard.submission import WizardSnapshot, build_payload, clean_text
from wizard.types import FieldScope, FieldValue


def _check_end_year(value: FieldValue, scope: FieldScope) -> ValidationResult:
    return validate_end_year(
        value,
        scope.get(EducationKeys.START_YEAR),
        currently=scope.get(EducationKeys.CURRENTLY_ENROLLED) is True,
        min_year=YEAR_MIN,
    )


def _check_end_date(value: FieldValue, scope: FieldScope) -> ValidationResult:
    return validate_end_date(
        value,
        scope.get(RoleKeys.START_DATE),
        currently=scope.get(RoleKeys.CURRENTLY_WORKING) is True,
    )


def education_section() -> SectionSpec:
    return SectionSpec(
        key=SectionKeys.EDUCATIONS,
        label="Education",
        fields=(
            FieldSpec(EducationKeys.SCHOOL_UNIVERSITY, "School/University"),
            FieldSpec(EducationKeys.DEGREE_PROGRAM, "Degree/Program"),
            FieldSpec(
                EducationKeys.START_YEAR,
                "Start year",
                validator=field_rule(validate_year, min_year=YEAR_MIN, label="Start year"),
                dependents=(EducationKeys.END_YEAR,),
            ),
            FieldSpec(
                EducationKeys.CURRENTLY_ENROLLED,
                "Currently enrolled",
                required=False,
                default=True,
                clears_when_true=(EducationKeys.END_YEAR,),
            ),
            FieldSpec(
                EducationKeys.END_YEAR,
                "End year",
                validator=_check_end_year,
                required_when=when_false(EducationKeys.CURRENTLY_ENROLLED),
            ),
            FieldSpec(EducationKeys.GRADE, "Grade", required=False),
        ),
    )


def role_section() -> SectionSpec:
    return SectionSpec(
        key=SectionKeys.ROLES,
        label="Role",
        fields=(
            FieldSpec(RoleKeys.CURRENT_ROLE, "Current role"),
            FieldSpec(RoleKeys.COMPANY_ORGANISATION, "Company/Organisation"),
            FieldSpec(
                RoleKeys.START_DATE,
                "Start date",
                validator=field_rule(validate_past_date, label="Start date"),
                default=None,
                dependents=(RoleKeys.END_DATE,),
            ),
            FieldSpec(
                RoleKeys.CURRENTLY_WORKING,
                "Currently working",
                required=False,
                default=True,
                clears_when_true=(RoleKeys.END_DATE,),
            ),
            FieldSpec(
                RoleKeys.END_DATE,
                "End date",
                validator=_check_end_date,
                required_when=when_false(RoleKeys.CURRENTLY_WORKING),
            ),
            FieldSpec(RoleKeys.LOCATION, "Location", required=False),
            FieldSpec(
                RoleKeys.DESCRIPTION,
                "Description",
                validator=field_rule(validate_max_length, max_length=DESCRIPTION_MAX_LENGTH, label="Description"),
                required=False,
            ),
        ),
    )


def education_payload(entry: Mapping[str, FieldValue]) -> EducationPayload:
    enrolled = entry.get(EducationKeys.CURRENTLY_ENROLLED) is True
    return build_payload(
        EducationPayload,
        school_university=clean_text(entry.get(EducationKeys.SCHOOL_UNIVERSITY)),
        degree_program=clean_text(entry.get(EducationKeys.DEGREE_PROGRAM)),
        start_year=clean_text(entry.get(EducationKeys.START_YEAR)),
        currently_enrolled=enrolled,
        end_year=None if enrolled else clean_text(entry.get(EducationKeys.END_YEAR)),
        grade=clean_text(entry.get(EducationKeys.GRADE)),
    )


def role_payload(entry: Mapping[str, FieldValue]) -> RolePayload:
    working = entry.get(RoleKeys.CURRENTLY_WORKING) is True
    return build_payload(
        RolePayload,
        current_role=clean_text(entry.get(RoleKeys.CURRENT_ROLE)),
        company_organisation=clean_text(entry.get(RoleKeys.COMPANY_ORGANISATION)),
        start_date=to_iso_date(entry.get(RoleKeys.START_DATE)),
        currently_working=working,
        end_date=None if working else to_iso_date(entry.get(RoleKeys.END_DATE)),
        location=clean_text(entry.get(RoleKeys.LOCATION)),
        description=clean_text(entry.get(RoleKeys.DESCRIPTION)),
    )


def valid_educations(snapshot: WizardSnapshot) -> list[EducationPayload] | None:
    """Every education entry that passes validation, or ``None`` when there is none."""

    return [education_payload(entry) for entry in snapshot.valid_entries(SectionKeys.EDUCATIONS)] or None


def valid_roles(snapshot: WizardSnapshot) -> list[RolePayload] | None:
    return [role_payload(entry) for entry in snapshot.valid_entries(SectionKeys.ROLES)] or None


__all__ = [
    "education_payload",
    "education_section",
    "role_payload",
    "role_section",
    "valid_educations",
    "valid_roles",
]
