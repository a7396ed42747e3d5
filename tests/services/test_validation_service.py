# -*- coding: utf-8 -*-
"""
Tests for dependent-field pruning.
"""

from services.wizard.form_state_store import FormStateStore
from tests.helpers import CURRENT_SITUATION, fill

CLAIMS = "needsAnalysis.currentSituation.claimsHistory"


class TestPruneInactiveFields:
    """Dependents of answered conditions that no longer hold are reset."""

    def test_nothing_to_prune_returns_same_state(self, validation_service):
        state = FormStateStore.initial_state("auto")

        assert validation_service.prune_inactive_fields(state, "auto") is state

    def test_claims_details_cleared_when_answer_changes(self, validation_service):
        state = fill(FormStateStore.initial_state("auto"), CURRENT_SITUATION, {
            f"{CLAIMS}.hasClaimsLastThreeYears": True,
            f"{CLAIMS}.damageType": "theft",
            f"{CLAIMS}.numberOfClaims": 3,
            f"{CLAIMS}.multipleClaimsExplanation": "Two thefts and a hail claim",
        })
        state = FormStateStore.set_path(state, f"{CLAIMS}.hasClaimsLastThreeYears", False)

        pruned = validation_service.prune_inactive_fields(state, "auto")

        assert FormStateStore.get(pruned, f"{CLAIMS}.damageType") == ""
        assert FormStateStore.get(pruned, f"{CLAIMS}.numberOfClaims") is None
        assert FormStateStore.get(pruned, f"{CLAIMS}.multipleClaimsExplanation") == ""
        assert FormStateStore.get(state, f"{CLAIMS}.damageType") == "theft"

    def test_threshold_dependent_cleared_below_threshold(self, validation_service):
        state = fill(FormStateStore.initial_state("auto"), CURRENT_SITUATION, {
            f"{CLAIMS}.hasClaimsLastThreeYears": True,
            f"{CLAIMS}.numberOfClaims": 1,
            f"{CLAIMS}.multipleClaimsExplanation": "Left over",
        })

        pruned = validation_service.prune_inactive_fields(state, "auto")

        assert FormStateStore.get(pruned, f"{CLAIMS}.numberOfClaims") == 1
        assert FormStateStore.get(pruned, f"{CLAIMS}.multipleClaimsExplanation") == ""

    def test_other_country_cleared(self, validation_service):
        state = FormStateStore.set_path(
            FormStateStore.initial_state("life"), "personalInfo.otherCountry", "Lesotho"
        )

        pruned = validation_service.prune_inactive_fields(state, "life")

        assert pruned["personalInfo"]["otherCountry"] == ""

    def test_co_insured_address_restored_to_default(self, validation_service):
        state = FormStateStore.set_many(FormStateStore.initial_state("auto"), {
            "coInsured.hasCoInsured": True,
            "coInsured.sameAddress": True,
            "coInsured.address.city": "Durban",
        })

        pruned = validation_service.prune_inactive_fields(state, "auto")

        assert pruned["coInsured"]["address"]["city"] == ""

    def test_details_kept_while_question_unanswered(self, validation_service):
        state = FormStateStore.set_many(FormStateStore.initial_state("auto"), {
            f"{CLAIMS}.numberOfClaims": 2,
            f"{CLAIMS}.damageType": "hail",
        })

        assert validation_service.prune_inactive_fields(state, "auto") is state

    def test_details_cleared_once_answered_no(self, validation_service):
        state = FormStateStore.set_many(FormStateStore.initial_state("auto"), {
            f"{CLAIMS}.damageType": "hail",
            f"{CLAIMS}.hasClaimsLastThreeYears": False,
        })

        pruned = validation_service.prune_inactive_fields(state, "auto")

        assert FormStateStore.get(pruned, f"{CLAIMS}.damageType") == ""

    def test_active_dependents_kept(self, validation_service):
        state = FormStateStore.set_many(FormStateStore.initial_state("auto"), {
            "personalInfo.country": "other",
            "personalInfo.otherCountry": "Lesotho",
        })

        assert validation_service.prune_inactive_fields(state, "auto") is state

    def test_validate_all_covers_every_step(self, validation_service):
        errors = validation_service.validate_all(FormStateStore.initial_state("auto"), "auto")

        assert "personalInfo.firstName" in errors
        assert "consent.consentGiven" in errors
