"""Navigation for step-gated wizards."""

from __future__ import annotations

from wizard.navigation.controller import StepTransition, TransitionKind, WizardController

__all__ = ["StepTransition", "TransitionKind", "WizardController"]
