# -*- coding: utf-8 -*-
"""
Tests for the wizard controller.

Tests cover:
- Validation-gated forward navigation
- Backward navigation and exit requests
- Scoped error clearing
- Path-checked edits and dependent-field pruning
- Terminal consent gate and submission
"""

import pytest

from controllers.wizard_controller import WizardController, create_session
from models.field_error import ErrorKind
from models.wizard_session import STATUS_SUBMITTED
from services.exceptions import (
    InvalidCategoryException,
    InvalidFieldPathException,
    ValidationException,
    WizardStateException,
)
from tests.helpers import AUTO_BEFORE_CONSENT, CURRENT_SITUATION, PERSONAL_INFO

CLAIMS = "needsAnalysis.currentSituation.claimsHistory"


def apply(controller, *groups):
    for group in groups:
        for path, value in group.items():
            controller.set_path(path, value)


def advance_to_consent(controller):
    apply(controller, *AUTO_BEFORE_CONSENT)
    while not controller.is_last_step:
        result = controller.advance()
        assert result.success, controller.current_step.id


class TestCreateSession:
    """Test session construction."""

    def test_builds_steps_and_state(self):
        session = create_session("e-hailing")

        assert session.step_ids[0] == "personal-info"
        assert "platform-details" in session.step_ids
        assert "platformName" in session.form_state["insuranceInfo"]

    def test_unknown_category(self):
        with pytest.raises(InvalidCategoryException):
            create_session("pet-insurance")


class TestQueries:
    """Test navigation state queries."""

    def test_initial_position(self, auto_controller):
        assert auto_controller.current_step.id == "personal-info"
        assert auto_controller.step_count == 11
        assert auto_controller.can_go_previous is False
        assert auto_controller.is_last_step is False
        assert auto_controller.progress_percentage == 0.0
        assert auto_controller.field_error("personalInfo.firstName") is None


class TestAdvance:
    """Test validation-gated forward navigation."""

    def test_invalid_step_blocks(self, auto_controller, recorder):
        failed = recorder()
        changed = recorder()
        auto_controller.validation_failed.connect(failed)
        auto_controller.step_changed.connect(changed)

        result = auto_controller.advance()

        assert result.success is False
        assert auto_controller.current_index == 0
        assert result.errors["personalInfo.firstName"].kind == ErrorKind.MISSING_REQUIRED
        assert auto_controller.field_error("personalInfo.firstName") == "First name is required"
        assert failed.count == 1
        assert failed.calls[0][0]["personalInfo.firstName"] == "First name is required"
        assert changed.count == 0

    def test_failed_advance_is_idempotent(self, auto_controller, recorder):
        first = auto_controller.advance()
        errors_after_first = dict(auto_controller.errors)
        changed = recorder()
        auto_controller.errors_changed.connect(changed)

        second = auto_controller.advance()

        assert first.errors == second.errors
        assert auto_controller.errors == errors_after_first
        assert auto_controller.current_index == 0
        assert changed.count == 0

    def test_valid_step_advances_and_clears(self, auto_controller, recorder):
        auto_controller.advance()
        changed = recorder()
        auto_controller.step_changed.connect(changed)
        apply(auto_controller, PERSONAL_INFO)

        result = auto_controller.advance()

        assert result.success and result.advanced
        assert auto_controller.current_step.id == "current-situation"
        assert changed.calls == [(0, 1)]
        assert auto_controller.errors == {}
        assert auto_controller.session.is_step_completed(0)

    def test_clearing_is_scoped_to_current_step(self, auto_controller):
        apply(auto_controller, PERSONAL_INFO)
        auto_controller.advance()
        auto_controller.advance()  # current-situation fails
        situation_errors = set(auto_controller.errors)
        auto_controller.retreat()

        auto_controller.advance()  # personal-info passes again

        assert auto_controller.current_step.id == "current-situation"
        assert set(auto_controller.errors) == situation_errors

    def test_error_for_edited_field_persists_until_advance(self, auto_controller):
        auto_controller.advance()
        auto_controller.set_path("personalInfo.firstName", "Thandi")

        assert auto_controller.has_error("personalInfo.firstName")


class TestRetreat:
    """Test backward navigation."""

    def test_retreat_from_first_step_requests_exit(self, auto_controller, recorder):
        exits = recorder()
        auto_controller.exit_requested.connect(exits)

        result = auto_controller.retreat()

        assert result.exit_requested is True
        assert exits.count == 1
        assert auto_controller.current_index == 0

    def test_retreat_skips_validation(self, auto_controller, recorder):
        apply(auto_controller, PERSONAL_INFO)
        auto_controller.advance()
        auto_controller.set_path("personalInfo.firstName", "")
        changed = recorder()
        auto_controller.step_changed.connect(changed)

        result = auto_controller.retreat()

        assert result.success is True
        assert result.exit_requested is False
        assert auto_controller.current_index == 0
        assert changed.calls == [(1, 0)]
        assert auto_controller.errors == {}


class TestEdits:
    """Test path-checked edits."""

    def test_set_section(self, auto_controller):
        before = auto_controller.form_state

        after = auto_controller.set_section("personalInfo", "firstName", "Thandi")

        assert after["personalInfo"]["firstName"] == "Thandi"
        assert before["personalInfo"]["firstName"] == ""
        assert auto_controller.get("personalInfo.firstName") == "Thandi"

    def test_unknown_path_for_category(self, auto_controller, recorder):
        errors = recorder()
        auto_controller.operation_error.connect(errors)

        with pytest.raises(InvalidFieldPathException):
            auto_controller.set_path("insuranceInfo.platformName", "Bolt")

        assert errors.count == 1
        assert errors.calls[0][0] == "set_path"

    def test_malformed_path(self, auto_controller):
        with pytest.raises(InvalidFieldPathException):
            auto_controller.set_path("personalInfo..firstName", "Thandi")

    def test_section_absent_for_category(self, auto_controller):
        with pytest.raises(InvalidFieldPathException):
            auto_controller.set_section("companyInfo", "companyName", "Acme")

    def test_bag_value_type_checked(self, auto_controller):
        with pytest.raises(ValidationException):
            auto_controller.set_path("insuranceInfo.vehicleFinanced", "yes")

        assert auto_controller.get("insuranceInfo.vehicleFinanced") is None

    def test_edit_prunes_inactive_dependents(self, auto_controller):
        apply(auto_controller, CURRENT_SITUATION, {
            f"{CLAIMS}.hasClaimsLastThreeYears": True,
            f"{CLAIMS}.damageType": "theft",
            f"{CLAIMS}.numberOfClaims": 2,
            f"{CLAIMS}.multipleClaimsExplanation": "Two separate thefts",
        })

        auto_controller.set_path(f"{CLAIMS}.numberOfClaims", 1)
        assert auto_controller.get(f"{CLAIMS}.multipleClaimsExplanation") == ""
        assert auto_controller.get(f"{CLAIMS}.damageType") == "theft"

        auto_controller.set_path(f"{CLAIMS}.hasClaimsLastThreeYears", False)
        assert auto_controller.get(f"{CLAIMS}.damageType") == ""
        assert auto_controller.get(f"{CLAIMS}.numberOfClaims") is None

    def test_details_entered_before_answer_survive(self, auto_controller):
        auto_controller.set_path(f"{CLAIMS}.numberOfClaims", 2)
        auto_controller.set_path(f"{CLAIMS}.damageType", "hail")
        auto_controller.set_path(f"{CLAIMS}.hasClaimsLastThreeYears", True)

        assert auto_controller.get(f"{CLAIMS}.numberOfClaims") == 2
        assert auto_controller.get(f"{CLAIMS}.damageType") == "hail"

    def test_ancestor_write_checks_nested_bag(self, auto_controller):
        needs = dict(auto_controller.get("needsAnalysis"))
        needs["riskFactors"] = {"bogus": object()}

        with pytest.raises(InvalidFieldPathException):
            auto_controller.set_path("needsAnalysis", needs)

        assert "bogus" not in auto_controller.get("needsAnalysis.riskFactors")

    def test_ancestor_write_checks_bag_value_types(self, auto_controller):
        needs = dict(auto_controller.get("needsAnalysis"))
        needs["riskFactors"] = {"trackingDevice": "yes"}

        with pytest.raises(ValidationException):
            auto_controller.set_path("needsAnalysis", needs)

    def test_ancestor_write_with_valid_bag(self, auto_controller):
        needs = dict(auto_controller.get("needsAnalysis"))
        needs["riskFactors"] = dict(needs["riskFactors"], annualMileage=15000)

        auto_controller.set_path("needsAnalysis", needs)

        assert auto_controller.get("needsAnalysis.riskFactors.annualMileage") == 15000


class TestSubmission:
    """Test the terminal consent gate and submission."""

    def test_reaches_consent(self, auto_controller):
        advance_to_consent(auto_controller)

        assert auto_controller.current_step.id == "consent"
        assert auto_controller.progress_percentage == 100.0

    def test_consent_flag_alone_is_not_enough(self, auto_controller):
        advance_to_consent(auto_controller)
        auto_controller.give_consent(True)

        result = auto_controller.advance()

        assert result.success is False
        assert result.submitted is False
        assert auto_controller.has_error("consent.digitalSignature")

    def test_submit_with_flag_and_signature_only(self, auto_controller):
        advance_to_consent(auto_controller)
        auto_controller.set_path("consent.consentGiven", True)
        auto_controller.set_path("consent.digitalSignature", "data:image/png;base64,AAAA")

        result = auto_controller.advance()

        assert result.success and result.submitted
        assert result.record["signatureType"] == "drawn"
        assert result.record["consentTimestamp"]

    def test_signature_without_consent(self, auto_controller):
        advance_to_consent(auto_controller)
        auto_controller.set_signature("data:image/png;base64,AAAA", "drawn")

        result = auto_controller.advance()

        assert result.success is False
        assert list(result.errors) == ["consent.consentGiven"]

    def test_invalid_signature_type(self, auto_controller):
        with pytest.raises(ValidationException):
            auto_controller.set_signature("data:image/png;base64,AAAA", "typed")

    def test_submit(self, auto_controller, recorder):
        submitted = recorder()
        auto_controller.wizard_submitted.connect(submitted)
        advance_to_consent(auto_controller)
        auto_controller.set_signature("data:image/png;base64,AAAA", "uploaded", file_name="signature.png")
        auto_controller.give_consent(True)

        result = auto_controller.advance()

        assert result.success and result.submitted
        assert auto_controller.session.status == STATUS_SUBMITTED
        assert submitted.count == 1
        record = submitted.calls[0][0]
        assert record is result.record
        assert record["consentGiven"] is True
        assert record["signatureType"] == "uploaded"
        assert record["signatureFileName"] == "signature.png"
        assert record["consentTimestamp"]
        assert record["category"] == "auto"
        assert record["referenceNumber"] == auto_controller.session.reference_number
        assert record["insuranceInfo"]["vehicleMake"] == "Toyota"

    def test_session_frozen_after_submission(self, auto_controller):
        advance_to_consent(auto_controller)
        auto_controller.set_signature("data:image/png;base64,AAAA", "drawn")
        auto_controller.give_consent(True)
        auto_controller.advance()

        with pytest.raises(WizardStateException):
            auto_controller.advance()
        with pytest.raises(WizardStateException):
            auto_controller.retreat()
        with pytest.raises(WizardStateException):
            auto_controller.set_path("personalInfo.firstName", "Changed")
        with pytest.raises(WizardStateException):
            auto_controller.give_consent(False)


class TestBusinessCategory:
    """Test a business category journey start."""

    def test_company_info_first(self, qapp, validation_service):
        controller = WizardController(create_session("small-business"), validation_service)

        result = controller.advance()

        assert controller.current_step.id == "company-info"
        assert "companyInfo.companyName" in result.errors
        assert not any(path.startswith("personalInfo") for path in result.errors)
