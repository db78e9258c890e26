"""Outbound request payloads produced by the wizard assemblers."""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class _Payload(BaseModel):
    """Base for request bodies: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, alias_generator=to_camel)

    def to_request(self) -> dict[str, Any]:
        """Return the JSON-ready body with empty optional values omitted."""

        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class EducationPayload(_Payload):
    """One education record."""

    school_university: str = Field(min_length=1)
    degree_program: str = Field(min_length=1)
    start_year: str
    currently_enrolled: bool = False
    end_year: Optional[str] = None
    grade: Optional[str] = None


class RolePayload(_Payload):
    """One work or volunteering role."""

    current_role: str = Field(min_length=1)
    company_organisation: str = Field(min_length=1)
    start_date: str
    currently_working: bool = False
    end_date: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None


class SignupCredentials(_Payload):
    """Credentials handed from the signup screen to the OTP screen."""

    name: str
    email: EmailStr
    country_code: str
    mobile_number: str
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def _normalise_email(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class SignupPayload(_Payload):
    """Body of the signup request sent after the personal-info wizard."""

    name: str
    email: EmailStr
    mobile_number: str
    password: str
    country_code: Optional[str] = None
    gender: Optional[str] = None
    date_of_birth: Optional[str] = None
    about_me: Optional[str] = None
    educations: Optional[List[EducationPayload]] = None
    roles: Optional[List[RolePayload]] = None
    skills: Optional[List[str]] = None
    goals: Optional[List[str]] = None
    network_visibility: Optional[Literal["public", "friends"]] = None

    @field_validator("email", mode="before")
    @classmethod
    def _normalise_email(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class CreateEventPayload(_Payload):
    """Body of the create-event request."""

    event_name: str
    host_by: str
    event_date: str
    from_time: str
    to_time: str
    description: Optional[str] = None
    event_mode: Literal["Online", "Offline"]
    selected_category: str
    event_type: Literal["Public", "Private"]
    selected_friends: Optional[List[str]] = None
    thumbnail_uri: Optional[str] = None

    @field_validator("thumbnail_uri")
    @classmethod
    def _remote_thumbnail_only(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.startswith(("http://", "https://")):
            raise ValueError("thumbnail must be an uploaded http(s) URL")
        return value


class EducationRoleUpdatePayload(_Payload):
    """Body of the profile update sent from the education and role editor."""

    educations: Optional[List[EducationPayload]] = None
    roles: Optional[List[RolePayload]] = None


__all__ = [
    "CreateEventPayload",
    "EducationPayload",
    "EducationRoleUpdatePayload",
    "RolePayload",
    "SignupCredentials",
    "SignupPayload",
]
