# -*- coding: utf-8 -*-
"""Shared fixtures for the intake engine tests."""

import os
import tempfile

# Must be set before app.config is imported
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("INTAKE_LOGS_DIR", os.path.join(tempfile.gettempdir(), "intake-test-logs"))
os.environ.setdefault("INTAKE_LOG_LEVEL", "WARNING")

import pytest
from PyQt5.QtCore import QCoreApplication

from controllers.wizard_controller import WizardController, create_session
from services.validation_service import ValidationService


@pytest.fixture(scope="session")
def qapp():
    """Core application instance for signal delivery."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture(scope="session")
def validation_service():
    return ValidationService()


@pytest.fixture
def auto_session():
    return create_session("auto", representative={"name": "Sipho Dlamini", "phone": "0215550000"})


@pytest.fixture
def auto_controller(qapp, auto_session, validation_service):
    return WizardController(auto_session, validation_service)


class SignalRecorder:
    """Collects the arguments of every emission of a connected signal."""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def recorder():
    return SignalRecorder
