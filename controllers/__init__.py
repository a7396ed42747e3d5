# -*- coding: utf-8 -*-
"""
Intake Controllers
==================
Controller layer between the wizard UI and the intake engine services.

Controllers provide:
- Qt signals for UI updates
- Validation-gated navigation
- Standardized error reporting via operation_error

Usage:
    from controllers import WizardController, create_session

    controller = WizardController(create_session("auto"))
    result = controller.advance()
    if not result.success:
        print(controller.field_error("personalInfo.firstName"))
"""

# Base controller
from controllers.base_controller import BaseController

from controllers.wizard_controller import (
    NavigationResult,
    WizardController,
    create_session,
)

# All public exports
__all__ = [
    # Base
    "BaseController",

    # Wizard
    "NavigationResult",
    "WizardController",
    "create_session",
]
