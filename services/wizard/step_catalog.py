# -*- coding: utf-8 -*-
"""
Step catalog for the intake wizard.

Maps each product category to its ordered sequence of steps, and each step
to the form-state paths it owns. Both tables are fixed; nothing here reads
session state.
"""

from typing import Dict, Tuple

from models.category import Category
from models.step import Step
from services.exceptions import InvalidCategoryException

# Step identifiers
PERSONAL_INFO = "personal-info"
COMPANY_INFO = "company-info"
CURRENT_SITUATION = "current-situation"
COVERAGE_NEEDS = "coverage-needs"
RISK_FACTORS = "risk-factors"
PREFERENCES = "preferences"
REVIEW = "review"
DISCLOSURE = "disclosure"
CONSENT = "consent"

VEHICLE_DETAILS = "vehicle-details"
DRIVER_DETAILS = "driver-details"
CO_INSURED = "co-insured"
PLATFORM_DETAILS = "platform-details"
PROPERTY_DETAILS = "property-details"
OPTIONAL_COVERS = "optional-covers"
CONTENTS_DETAILS = "contents-details"
LIFE_COVER_DETAILS = "life-cover-details"
MEDICAL_DETAILS = "medical-details"
BUSINESS_OPERATIONS = "business-operations"
LIABILITY_LIMITS = "liability-limits"
BUSINESS_ASSETS = "business-assets"
FLEET_DETAILS = "fleet-details"
CARGO_DETAILS = "cargo-details"
SCHEME_DETAILS = "scheme-details"
TRUSTEE_DETAILS = "trustee-details"
PROJECT_DETAILS = "project-details"
CONTRACT_WORKS = "contract-works"
CRAFT_DETAILS = "craft-details"
OPERATOR_EXPERIENCE = "operator-experience"
MINE_SITE_DETAILS = "mine-site-details"
REHABILITATION_GUARANTEE = "rehabilitation-guarantee"


# Step id -> (title, icon)
STEP_DEFINITIONS: Dict[str, Tuple[str, str]] = {
    PERSONAL_INFO: ("Personal Information", "user"),
    COMPANY_INFO: ("Company Information", "building-2"),
    CURRENT_SITUATION: ("Current Situation", "clipboard-list"),
    COVERAGE_NEEDS: ("Coverage Needs", "shield"),
    RISK_FACTORS: ("Risk Factors", "alert-triangle"),
    PREFERENCES: ("Preferences", "sliders"),
    VEHICLE_DETAILS: ("Vehicle Details", "car"),
    DRIVER_DETAILS: ("Driver Details", "id-card"),
    CO_INSURED: ("Co-Insured", "users"),
    PLATFORM_DETAILS: ("E-Hailing Platform", "smartphone"),
    PROPERTY_DETAILS: ("Property Details", "home"),
    OPTIONAL_COVERS: ("Optional Covers", "plus-circle"),
    CONTENTS_DETAILS: ("Contents Details", "package"),
    LIFE_COVER_DETAILS: ("Life Cover", "heart"),
    MEDICAL_DETAILS: ("Medical Details", "activity"),
    BUSINESS_OPERATIONS: ("Business Operations", "briefcase"),
    LIABILITY_LIMITS: ("Liability Limits", "scale"),
    BUSINESS_ASSETS: ("Business Assets", "archive"),
    FLEET_DETAILS: ("Fleet Details", "truck"),
    CARGO_DETAILS: ("Cargo Details", "boxes"),
    SCHEME_DETAILS: ("Scheme Details", "building"),
    TRUSTEE_DETAILS: ("Trustees", "users-round"),
    PROJECT_DETAILS: ("Project Details", "hard-hat"),
    CONTRACT_WORKS: ("Contract Works", "hammer"),
    CRAFT_DETAILS: ("Aircraft / Vessel", "plane"),
    OPERATOR_EXPERIENCE: ("Pilot / Skipper Experience", "compass"),
    MINE_SITE_DETAILS: ("Mine Site", "mountain"),
    REHABILITATION_GUARANTEE: ("Rehabilitation Guarantee", "leaf"),
    REVIEW: ("Review", "eye"),
    DISCLOSURE: ("Disclosure", "file-text"),
    CONSENT: ("Consent & Signature", "pen-tool"),
}

NEEDS_STEPS: Tuple[str, ...] = (CURRENT_SITUATION, COVERAGE_NEEDS, RISK_FACTORS, PREFERENCES)
TERMINAL_STEPS: Tuple[str, ...] = (REVIEW, DISCLOSURE, CONSENT)

# Steps inserted between the needs steps and the terminal steps
CATEGORY_STEPS: Dict[Category, Tuple[str, ...]] = {
    Category.AUTO: (VEHICLE_DETAILS, DRIVER_DETAILS, CO_INSURED),
    Category.E_HAILING: (VEHICLE_DETAILS, DRIVER_DETAILS, PLATFORM_DETAILS),
    Category.BUILDINGS: (PROPERTY_DETAILS, OPTIONAL_COVERS, CO_INSURED),
    Category.HOUSEHOLD_CONTENTS: (CONTENTS_DETAILS, OPTIONAL_COVERS, CO_INSURED),
    Category.LIFE: (LIFE_COVER_DETAILS,),
    Category.HEALTH: (MEDICAL_DETAILS,),
    Category.PUBLIC_LIABILITY: (BUSINESS_OPERATIONS, LIABILITY_LIMITS),
    Category.SMALL_BUSINESS: (BUSINESS_OPERATIONS, BUSINESS_ASSETS),
    Category.COMMERCIAL_PROPERTY: (PROPERTY_DETAILS, BUSINESS_OPERATIONS),
    Category.TRANSPORT: (FLEET_DETAILS, CARGO_DETAILS),
    Category.BODY_CORPORATES: (SCHEME_DETAILS, TRUSTEE_DETAILS),
    Category.ENGINEERING_CONSTRUCTION: (PROJECT_DETAILS, CONTRACT_WORKS),
    Category.AVIATION_MARINE: (CRAFT_DETAILS, OPERATOR_EXPERIENCE),
    Category.MINING_REHABILITATION: (MINE_SITE_DETAILS, REHABILITATION_GUARANTEE),
}


def _insurance_info(*keys: str) -> Tuple[str, ...]:
    return tuple(f"insuranceInfo.{key}" for key in keys)


# Step id -> path prefixes owned by that step. Open-bag steps own individual
# keys so that two steps sharing a bag never clear each other's errors.
STEP_OWNED_PATHS: Dict[str, Tuple[str, ...]] = {
    PERSONAL_INFO: ("personalInfo",),
    COMPANY_INFO: ("companyInfo",),
    CURRENT_SITUATION: ("needsAnalysis.currentSituation",),
    COVERAGE_NEEDS: (
        "needsAnalysis.coveragePreferences.coverageType",
        "needsAnalysis.coveragePreferences.sumInsured",
        "needsAnalysis.coveragePreferences.excessPreference",
    ),
    RISK_FACTORS: ("needsAnalysis.riskFactors",),
    PREFERENCES: ("needsAnalysis.budgetPreferences",),
    VEHICLE_DETAILS: _insurance_info(
        "vehicleYear", "vehicleMake", "vehicleModel", "vehicleValue",
        "registrationNumber", "vehicleFinanced", "financeHouse",
    ),
    DRIVER_DETAILS: ("needsAnalysis.driverDetails",),
    CO_INSURED: ("coInsured",),
    PLATFORM_DETAILS: _insurance_info(
        "platformName", "platformNameOther", "tripsPerWeek", "passengerLiabilityCover",
    ),
    PROPERTY_DETAILS: _insurance_info(
        "propertyType", "propertyValue", "yearBuilt", "floorArea",
        "riskAddressSameAsContact", "riskStreetAddress", "riskCity", "riskPostalCode",
    ),
    OPTIONAL_COVERS: (
        "needsAnalysis.coveragePreferences.optionalCovers",
        "needsAnalysis.coveragePreferences.optionalCoverAgentComment",
    ),
    CONTENTS_DETAILS: _insurance_info(
        "contentsValue", "hasSpecifiedItems", "specifiedItemsDescription", "specifiedItemsValue",
    ),
    LIFE_COVER_DETAILS: _insurance_info(
        "lifeCoverAmount", "beneficiaryName", "beneficiaryIdNumber",
        "beneficiaryRelationship", "beneficiaryRelationshipOther",
    ),
    MEDICAL_DETAILS: _insurance_info(
        "medicalSchemeMember", "currentMedicalScheme", "numberOfDependants",
        "dependantsDetails", "hospitalPlanPreference",
    ),
    BUSINESS_OPERATIONS: _insurance_info("businessActivities", "yearsInOperation", "numberOfPremises"),
    LIABILITY_LIMITS: _insurance_info(
        "liabilityLimit", "productLiability", "productsDescription", "contractualLiability",
    ),
    BUSINESS_ASSETS: _insurance_info(
        "equipmentValue", "buildingsOwned", "buildingsValue",
        "businessInterruptionCover", "indemnityPeriodMonths",
    ),
    FLEET_DETAILS: _insurance_info(
        "numberOfVehicles", "vehicleTypes", "averageVehicleValue", "fleetManagementSystem",
    ),
    CARGO_DETAILS: _insurance_info("cargoType", "maxLoadValue", "hazardousGoods", "hazchemCertification"),
    SCHEME_DETAILS: _insurance_info(
        "schemeName", "schemeRegistrationNumber", "numberOfUnits", "replacementValue", "managingAgent",
    ),
    TRUSTEE_DETAILS: _insurance_info("numberOfTrustees", "fidelityGuaranteeRequired", "fidelityCoverAmount"),
    PROJECT_DETAILS: (
        "projectName", "projectLocation", "principalContractor",
        "contractValue", "projectStartDate", "projectEndDate",
    ),
    CONTRACT_WORKS: _insurance_info(
        "plantAndMachineryValue", "thirdPartyLiabilityLimit", "hasSubcontractors", "subcontractorDetails",
    ),
    CRAFT_DETAILS: _insurance_info(
        "craftType", "craftRegistration", "craftValue", "yearManufactured",
        "maxTakeoffWeight", "hullLength",
    ),
    OPERATOR_EXPERIENCE: _insurance_info(
        "operatorLicenceNumber", "operatorHours", "supervisedOperationDetails",
    ),
    MINE_SITE_DETAILS: _insurance_info("mineName", "mineralType", "miningRightNumber", "siteAreaHectares"),
    REHABILITATION_GUARANTEE: _insurance_info(
        "rehabilitationLiability", "guaranteeAmount", "shortfallExplanation",
    ),
    REVIEW: (),
    DISCLOSURE: ("declarations",),
    CONSENT: ("consent",),
}


def _make_step(step_id: str) -> Step:
    title, icon = STEP_DEFINITIONS[step_id]
    return Step(id=step_id, title=title, icon_ref=icon)


def step_ids(category) -> Tuple[str, ...]:
    """Ordered step ids for a category."""
    category = Category.from_value(category)
    if category not in CATEGORY_STEPS:
        raise InvalidCategoryException(category)

    first = COMPANY_INFO if category.is_business else PERSONAL_INFO
    return (first,) + NEEDS_STEPS + CATEGORY_STEPS[category] + TERMINAL_STEPS


def steps(category) -> Tuple[Step, ...]:
    """
    Ordered steps for a category.

    Args:
        category: Category member or its string value

    Returns:
        Tuple of Step descriptors

    Raises:
        InvalidCategoryException: for unknown categories
    """
    return tuple(_make_step(step_id) for step_id in step_ids(category))


def step_index(category, step_id: str) -> int:
    """Zero-based position of step_id in the category's sequence, or -1."""
    ids = step_ids(category)
    return ids.index(step_id) if step_id in ids else -1


def owned_prefixes(step_id: str) -> Tuple[str, ...]:
    return STEP_OWNED_PATHS.get(step_id, ())


def step_owns_path(step_id: str, path: str) -> bool:
    """True if path equals or lies below one of the step's owned prefixes."""
    for prefix in owned_prefixes(step_id):
        if path == prefix or path.startswith(prefix + "."):
            return True
    return False


def owning_step(category, path: str):
    """The step of this category that owns path, or None."""
    for step_id in step_ids(category):
        if step_owns_path(step_id, path):
            return step_id
    return None
