# -*- coding: utf-8 -*-
"""
Form State Store - nested form record for an in-progress submission.

Every update returns a new state. Dicts along the updated path are copied,
untouched siblings are shared with the previous state, and nothing is ever
modified in place, so an older state stays valid after an edit.
"""

import copy
from typing import Any, Dict

from models.category import Category
from models.field_path import FieldPath
from services.wizard import step_catalog as catalog
from services.wizard.open_bag_schema import insurance_info_schema, risk_factor_schema


class _Missing:
    """Sentinel for paths whose container has not been initialized."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "MISSING"


MISSING = _Missing()

FormState = Dict[str, Any]


def _address() -> Dict[str, Any]:
    return {"streetAddress": "", "city": "", "postalCode": ""}


def _optional_cover() -> Dict[str, Any]:
    return {"selected": False, "amount": None}


class FormStateStore:
    """Path-based read/update primitives over the nested form state."""

    @staticmethod
    def get(state: FormState, path: str, default: Any = MISSING) -> Any:
        """
        Get the value at a dotted path.

        Returns default (the MISSING sentinel unless given) when any
        container on the path is absent or is not a mapping.
        """
        current: Any = state
        for segment in FieldPath(path).parts:
            if not isinstance(current, dict) or segment not in current:
                return default
            current = current[segment]
        return current

    @staticmethod
    def set_section(state: FormState, section: str, field_name: str, value: Any) -> FormState:
        """
        Replace one field inside a top-level section.

        Every other field of the section is preserved. If the section is not
        currently a dict, the result holds a fresh section with only field_name.
        """
        FieldPath(section)
        FieldPath(field_name)
        new_state = dict(state)
        current = state.get(section)
        new_section = dict(current) if isinstance(current, dict) else {}
        new_section[field_name] = copy.deepcopy(value)
        new_state[section] = new_section
        return new_state

    @staticmethod
    def set_path(state: FormState, path: str, value: Any) -> FormState:
        """
        Deep-set a value at an arbitrary dotted path.

        Missing or non-dict intermediate containers are replaced by new dicts.
        """
        parts = FieldPath(path).parts
        return FormStateStore._set_in(state, parts, copy.deepcopy(value))

    @staticmethod
    def _set_in(container: Any, parts, value: Any) -> Dict[str, Any]:
        node = dict(container) if isinstance(container, dict) else {}
        head = parts[0]
        if len(parts) == 1:
            node[head] = value
        else:
            node[head] = FormStateStore._set_in(node.get(head), parts[1:], value)
        return node

    @staticmethod
    def set_many(state: FormState, updates: Dict[str, Any]) -> FormState:
        """Apply several path updates in order."""
        for path, value in updates.items():
            state = FormStateStore.set_path(state, path, value)
        return state

    @staticmethod
    def initial_state(category) -> FormState:
        """
        Empty form state scoped to a category.

        Sections that only some categories use (company info, co-insured,
        driver details, optional covers, project fields) are allocated only
        when the category's step catalog contains the step that collects them.
        """
        category = Category.from_value(category)
        ids = catalog.step_ids(category)

        state: FormState = {
            "personalInfo": {
                "firstName": "",
                "lastName": "",
                "idNumber": "",
                "email": "",
                "phone": "",
                "dateOfBirth": "",
                "occupation": "",
                "streetAddress": "",
                "suburb": "",
                "city": "",
                "postalCode": "",
                "country": "south-africa",
                "otherCountry": "",
            },
            "needsAnalysis": {
                "currentSituation": {
                    "hasExistingInsurance": None,
                    "currentInsurer": "",
                    "currentPremium": None,
                    "previouslyDeclined": None,
                    "declineReason": "",
                    "claimsHistory": {
                        "hasClaimsLastThreeYears": None,
                        "damageType": "",
                        "incidentDescription": "",
                        "numberOfClaims": None,
                        "totalClaimAmount": None,
                        "multipleClaimsExplanation": "",
                    },
                },
                "coveragePreferences": {
                    "coverageType": "",
                    "sumInsured": None,
                    "excessPreference": "",
                },
                "riskFactors": risk_factor_schema(category).empty_bag(),
                "budgetPreferences": {
                    "maxMonthlyPremium": None,
                    "preferredExcess": None,
                    "paymentFrequency": "",
                    "preferredContactMethod": "",
                    "bestTimeToCall": "",
                },
            },
            "insuranceInfo": insurance_info_schema(category).empty_bag(),
            "declarations": {
                "disclosureAcknowledged": False,
                "informationAccurate": False,
            },
            "consent": {
                "consentGiven": False,
                "digitalSignature": "",
                "signatureType": "",
                "signatureFileName": "",
            },
        }

        if catalog.COMPANY_INFO in ids:
            state["companyInfo"] = {
                "companyName": "",
                "registrationNumber": "",
                "vatNumber": "",
                "industry": "",
                "contactPerson": "",
                "contactEmail": "",
                "contactPhone": "",
                "numberOfEmployees": None,
                "annualTurnover": None,
                "streetAddress": "",
                "city": "",
                "postalCode": "",
            }

        if catalog.CO_INSURED in ids:
            state["coInsured"] = {
                "hasCoInsured": None,
                "firstName": "",
                "lastName": "",
                "idNumber": "",
                "relationship": "",
                "relationshipOther": "",
                "sameAddress": True,
                "address": _address(),
            }

        if catalog.DRIVER_DETAILS in ids:
            state["needsAnalysis"]["driverDetails"] = {
                "isRegularDriverPolicyholder": None,
                "driverFirstName": "",
                "driverLastName": "",
                "driverIdNumber": "",
                "driverRelationship": "",
                "driverRelationshipOther": "",
                "licenceType": "",
                "yearsLicensed": None,
                "claimsHistory": "",
                "exactClaimsCount": None,
            }

        if catalog.OPTIONAL_COVERS in ids:
            coverage = state["needsAnalysis"]["coveragePreferences"]
            coverage["optionalCovers"] = {
                "accidentalDamage": _optional_cover(),
                "powerSurge": _optional_cover(),
                "subsidenceLandslip": _optional_cover(),
            }
            coverage["optionalCoverAgentComment"] = ""

        if catalog.PROJECT_DETAILS in ids:
            state.update({
                "projectName": "",
                "projectLocation": "",
                "principalContractor": "",
                "contractValue": None,
                "projectStartDate": "",
                "projectEndDate": "",
            })

        return state

    @staticmethod
    def default_value(category, path: str) -> Any:
        """Empty value of a path in the category's initial state (None if unknown)."""
        value = FormStateStore.get(FormStateStore.initial_state(category), path)
        return None if value is MISSING else value

    @staticmethod
    def is_known_path(path: str, category) -> bool:
        """True if path exists in the category's state shape."""
        return FormStateStore.get(FormStateStore.initial_state(category), path) is not MISSING


# Module-level aliases for call sites that prefer plain functions
get = FormStateStore.get
set_section = FormStateStore.set_section
set_path = FormStateStore.set_path
initial_state = FormStateStore.initial_state
