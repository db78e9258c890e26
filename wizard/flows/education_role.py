"""Profile editor for education and role entries."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from constants.keys import FlowKeys, SectionKeys
from models.payloads import EducationPayload, EducationRoleUpdatePayload, RolePayload
from wizard.flows.sections import education_section, role_section, valid_educations, valid_roles
from wizard.navigation.controller import WizardController
from wizard.step_registry import RepeatableStep, WizardFlow
from wizard.submission import Submitter, WizardSnapshot, build_payload
from wizard.types import FieldValue


def assemble_education_role(snapshot: WizardSnapshot) -> Mapping[str, Any]:
    payload = build_payload(
        EducationRoleUpdatePayload,
        educations=valid_educations(snapshot),
        roles=valid_roles(snapshot),
    )
    return payload.to_request()


def build_education_role_flow() -> WizardFlow:
    return WizardFlow(
        key=FlowKeys.EDUCATION_ROLE,
        label="Education & Role",
        steps=(
            RepeatableStep(
                key="education_role",
                label="Education & Role",
                sections=(education_section(), role_section()),
            ),
        ),
        assembler=assemble_education_role,
    )


def _from_camel(
    rows: Sequence[Mapping[str, Any]],
    model: type[EducationPayload] | type[RolePayload],
) -> list[dict[str, Any]]:
    """Rename camelCase profile keys (as returned by the API) to entry field names."""

    by_alias = {info.alias or name: name for name, info in model.model_fields.items()}
    return [{by_alias.get(key, key): value for key, value in row.items()} for row in rows]


def create_education_role_wizard(
    *,
    submitter: Submitter,
    educations: Sequence[Mapping[str, FieldValue]] = (),
    roles: Sequence[Mapping[str, FieldValue]] = (),
    **kwargs: Any,
) -> WizardController:
    """Return an editor seeded with the profile's existing entries.

    Entries may use field names or the camelCase keys of the profile API; any
    other key raises :class:`~core.errors.UnknownFieldError`.
    """

    return WizardController(
        build_education_role_flow(),
        submitter=submitter,
        initial_entries={
            SectionKeys.EDUCATIONS: _from_camel(educations, EducationPayload),
            SectionKeys.ROLES: _from_camel(roles, RolePayload),
        },
        **kwargs,
    )


__all__ = ["assemble_education_role", "build_education_role_flow", "create_education_role_wizard"]
