"""Concrete wizard flows built on the generic controller."""

from .create_event import build_create_event_flow, create_event_wizard, is_invite_visible
from .education_role import build_education_role_flow, create_education_role_wizard
from .personal_info import build_personal_info_flow, create_personal_info_wizard
from .signup import build_signup_flow, create_signup_wizard

__all__ = [
    "build_create_event_flow",
    "build_education_role_flow",
    "build_personal_info_flow",
    "build_signup_flow",
    "create_education_role_wizard",
    "create_event_wizard",
    "create_personal_info_wizard",
    "create_signup_wizard",
    "is_invite_visible",
]
