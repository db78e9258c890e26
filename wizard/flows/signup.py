"""Single-step signup form whose credentials continue to OTP verification."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import config
from constants.keys import FlowKeys, SignupKeys
from core.validators import (
    PasswordPolicy,
    clean_mobile_number,
    validate_email,
    validate_mobile_number,
    validate_name,
    validate_password,
)
from models.payloads import SignupCredentials
from wizard.fields import FieldSpec, field_rule
from wizard.navigation.controller import WizardController
from wizard.step_registry import FormStep, WizardFlow
from wizard.submission import Submitter, WizardSnapshot, build_payload


def password_policy() -> PasswordPolicy:
    """Return the signup password policy from configuration."""

    return PasswordPolicy(
        min_length=config.PASSWORD_MIN_LENGTH,
        require_uppercase=config.PASSWORD_REQUIRE_UPPERCASE,
        require_lowercase=config.PASSWORD_REQUIRE_LOWERCASE,
        require_number=config.PASSWORD_REQUIRE_NUMBER,
        require_special_char=config.PASSWORD_REQUIRE_SPECIAL_CHAR,
    )


def assemble_signup(snapshot: WizardSnapshot) -> Mapping[str, Any]:
    credentials = build_payload(
        SignupCredentials,
        name=snapshot.text(SignupKeys.NAME),
        email=snapshot.text(SignupKeys.EMAIL),
        country_code=snapshot.text(SignupKeys.COUNTRY_CODE),
        mobile_number=snapshot.text(SignupKeys.MOBILE_NUMBER),
        password=snapshot.value(SignupKeys.PASSWORD),
    )
    return credentials.to_request()


def build_signup_flow(policy: PasswordPolicy | None = None) -> WizardFlow:
    policy = policy or password_policy()
    return WizardFlow(
        key=FlowKeys.SIGNUP,
        label="Sign up",
        steps=(
            FormStep(
                key="signup",
                label="Create your account",
                fields=(
                    FieldSpec(
                        SignupKeys.NAME,
                        "Name",
                        validator=field_rule(
                            validate_name,
                            min_length=config.NAME_MIN_LENGTH,
                            max_length=config.NAME_MAX_LENGTH,
                        ),
                    ),
                    FieldSpec(SignupKeys.EMAIL, "Email", validator=field_rule(validate_email)),
                    FieldSpec(SignupKeys.COUNTRY_CODE, "Country code", default=config.DEFAULT_COUNTRY_CODE),
                    FieldSpec(
                        SignupKeys.MOBILE_NUMBER,
                        "Mobile number",
                        validator=field_rule(validate_mobile_number, digits=config.MOBILE_NUMBER_DIGITS),
                        cleaner=clean_mobile_number,
                    ),
                    FieldSpec(
                        SignupKeys.PASSWORD,
                        "Password",
                        validator=field_rule(validate_password, policy=policy),
                    ),
                ),
            ),
        ),
        assembler=assemble_signup,
    )


def create_signup_wizard(
    *,
    submitter: Submitter,
    policy: PasswordPolicy | None = None,
    **kwargs: Any,
) -> WizardController:
    """Return a controller for the signup form."""

    return WizardController(build_signup_flow(policy), submitter=submitter, **kwargs)


__all__ = ["assemble_signup", "build_signup_flow", "create_signup_wizard", "password_policy"]
