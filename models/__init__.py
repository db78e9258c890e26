"""Pydantic models for the payloads the wizards submit."""

from .payloads import (
    CreateEventPayload,
    EducationPayload,
    EducationRoleUpdatePayload,
    RolePayload,
    SignupCredentials,
    SignupPayload,
)

__all__ = [
    "CreateEventPayload",
    "EducationPayload",
    "EducationRoleUpdatePayload",
    "RolePayload",
    "SignupCredentials",
    "SignupPayload",
]
