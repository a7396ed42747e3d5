# -*- coding: utf-8 -*-
"""
Tests for the form state store.

Tests cover:
- Path reads and the MISSING sentinel
- Copy-on-write updates
- Category-scoped initial state
"""

import pytest

from models.category import Category
from services.exceptions import InvalidFieldPathException
from services.wizard.form_state_store import MISSING, FormStateStore


@pytest.fixture
def state():
    return FormStateStore.initial_state("auto")


class TestGet:
    """Test path reads."""

    def test_reads_nested_value(self, state):
        assert FormStateStore.get(state, "personalInfo.country") == "south-africa"

    def test_missing_container(self, state):
        assert FormStateStore.get(state, "companyInfo.companyName") is MISSING
        assert FormStateStore.get(state, "companyInfo.companyName", None) is None

    def test_non_mapping_container(self, state):
        assert FormStateStore.get(state, "personalInfo.firstName.value") is MISSING

    def test_missing_is_falsy(self):
        assert not MISSING


class TestUpdates:
    """Test copy-on-write updates."""

    def test_set_section_preserves_other_fields(self, state):
        state = FormStateStore.set_section(state, "personalInfo", "lastName", "Mokoena")
        updated = FormStateStore.set_section(state, "personalInfo", "firstName", "Thandi")

        assert updated["personalInfo"]["firstName"] == "Thandi"
        assert updated["personalInfo"]["lastName"] == "Mokoena"
        assert updated["personalInfo"]["country"] == "south-africa"

    def test_set_section_does_not_mutate_input(self, state):
        updated = FormStateStore.set_section(state, "personalInfo", "firstName", "Thandi")

        assert state["personalInfo"]["firstName"] == ""
        assert updated is not state
        assert updated["needsAnalysis"] is state["needsAnalysis"]

    def test_set_section_on_non_dict_section(self):
        updated = FormStateStore.set_section({"consent": "yes"}, "consent", "consentGiven", True)

        assert updated["consent"] == {"consentGiven": True}

    def test_set_path_creates_intermediate_dicts(self):
        updated = FormStateStore.set_path({}, "coInsured.address.city", "Durban")

        assert updated == {"coInsured": {"address": {"city": "Durban"}}}

    def test_set_path_copies_only_along_path(self, state):
        path = "needsAnalysis.currentSituation.claimsHistory.numberOfClaims"
        updated = FormStateStore.set_path(state, path, 2)

        assert FormStateStore.get(updated, path) == 2
        assert FormStateStore.get(state, path) is None
        assert updated["needsAnalysis"] is not state["needsAnalysis"]
        assert updated["needsAnalysis"]["riskFactors"] is state["needsAnalysis"]["riskFactors"]
        assert updated["personalInfo"] is state["personalInfo"]

    def test_set_path_copies_stored_value(self, state):
        address = {"streetAddress": "1 Main Road", "city": "Durban", "postalCode": "4001"}
        updated = FormStateStore.set_path(state, "coInsured.address", address)
        address["city"] = "Changed"

        assert updated["coInsured"]["address"]["city"] == "Durban"

    def test_malformed_path(self, state):
        with pytest.raises(InvalidFieldPathException):
            FormStateStore.set_path(state, "personalInfo..email", "x")

    def test_set_many(self, state):
        updated = FormStateStore.set_many(state, {
            "personalInfo.firstName": "Thandi",
            "consent.consentGiven": True,
        })

        assert updated["personalInfo"]["firstName"] == "Thandi"
        assert updated["consent"]["consentGiven"] is True


class TestInitialState:
    """Test category-scoped defaults."""

    def test_vehicle_category_has_driver_details(self):
        state = FormStateStore.initial_state(Category.AUTO)

        assert "driverDetails" in state["needsAnalysis"]
        assert "companyInfo" not in state
        assert "optionalCovers" not in state["needsAnalysis"]["coveragePreferences"]

    def test_business_category_has_company_info(self):
        state = FormStateStore.initial_state("small-business")

        assert "companyInfo" in state
        assert "driverDetails" not in state["needsAnalysis"]
        assert "coInsured" not in state

    def test_property_category_has_optional_covers(self):
        state = FormStateStore.initial_state("buildings-insurance")
        covers = state["needsAnalysis"]["coveragePreferences"]["optionalCovers"]

        assert covers["powerSurge"] == {"selected": False, "amount": None}
        assert state["coInsured"]["sameAddress"] is True

    def test_engineering_scalars(self):
        state = FormStateStore.initial_state("engineering-construction")

        assert state["projectName"] == ""
        assert state["contractValue"] is None
        assert "projectName" not in FormStateStore.initial_state("auto")

    def test_open_bags_follow_schema(self):
        state = FormStateStore.initial_state("auto")

        assert state["needsAnalysis"]["riskFactors"]["trackingDevice"] is None
        assert state["insuranceInfo"]["vehicleMake"] == ""
        assert "platformName" not in state["insuranceInfo"]

    def test_initial_states_are_independent(self):
        first = FormStateStore.initial_state("auto")
        first["personalInfo"]["firstName"] = "Changed"

        assert FormStateStore.initial_state("auto")["personalInfo"]["firstName"] == ""

    def test_known_paths(self):
        assert FormStateStore.is_known_path("insuranceInfo.vehicleMake", "auto")
        assert not FormStateStore.is_known_path("insuranceInfo.platformName", "auto")
        assert FormStateStore.default_value("auto", "coInsured.sameAddress") is True
        assert FormStateStore.default_value("auto", "companyInfo.companyName") is None
