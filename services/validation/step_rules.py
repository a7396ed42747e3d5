# -*- coding: utf-8 -*-
"""
Rule builders for every wizard step.

Each builder takes the session category and returns the ordered list of
strategies for the fields that step owns. Fields that do not apply to a
category are simply left out. When several rules report on one field, the
first in list order wins.
"""

from typing import Callable, Dict, List

from app.config import Config
from models.category import Category
from services.validation.validation_strategy import (
    ChoiceRule,
    ConditionalRequiredRule,
    CrossFieldThresholdRule,
    DateOrderRule,
    FormatRule,
    RangeRule,
    RequiredRule,
    ValidationStrategy,
    at_least,
    equals,
    is_false,
    is_true,
    less_than,
    less_than_field,
)
from services.wizard import step_catalog as catalog
from services.wizard.open_bag_schema import NUMBER, step_bag_fields

Rules = List[ValidationStrategy]
RuleBuilder = Callable[[Category], Rules]

PERSONAL = "personalInfo"
COMPANY = "companyInfo"
CO_INSURED = "coInsured"
SITUATION = "needsAnalysis.currentSituation"
CLAIMS = "needsAnalysis.currentSituation.claimsHistory"
COVERAGE = "needsAnalysis.coveragePreferences"
DRIVER = "needsAnalysis.driverDetails"
RISK = "needsAnalysis.riskFactors"
BUDGET = "needsAnalysis.budgetPreferences"
INFO = "insuranceInfo"

OPTIONAL_COVER_LABELS = {
    "accidentalDamage": "Accidental damage",
    "powerSurge": "Power surge",
    "subsidenceLandslip": "Subsidence and landslip",
}


def _required(path: str, label: str = None, **kwargs) -> RequiredRule:
    return RequiredRule(path, label=label, **kwargs)


def bag_rules(step_id: str, category: Category) -> Rules:
    """Base required / range / format rules generated from the open-bag schema."""
    rules: Rules = []
    for path, bag_field in step_bag_fields(step_id, category):
        label = bag_field.display_label
        if bag_field.required:
            rules.append(RequiredRule(path, label=label))
        if bag_field.kind == NUMBER:
            rules.append(RangeRule(
                path,
                minimum=bag_field.minimum,
                maximum=bag_field.maximum,
                exclusive_minimum=bag_field.exclusive_minimum,
                integer=bag_field.integer,
                label=label,
            ))
        if bag_field.fmt:
            rules.append(FormatRule(path, bag_field.fmt, label=label))
    return rules


# =========================================================================
# Baseline steps
# =========================================================================

def personal_info_rules(category: Category) -> Rules:
    return [
        _required(f"{PERSONAL}.firstName"),
        _required(f"{PERSONAL}.lastName"),
        _required(f"{PERSONAL}.idNumber"),
        FormatRule(f"{PERSONAL}.idNumber", "sa_id"),
        _required(f"{PERSONAL}.email"),
        FormatRule(f"{PERSONAL}.email", "email"),
        _required(f"{PERSONAL}.phone", "Phone number"),
        FormatRule(f"{PERSONAL}.phone", "phone"),
        FormatRule(f"{PERSONAL}.dateOfBirth", "date"),
        _required(f"{PERSONAL}.streetAddress"),
        _required(f"{PERSONAL}.city"),
        _required(f"{PERSONAL}.postalCode"),
        FormatRule(f"{PERSONAL}.postalCode", "postal_code"),
        _required(f"{PERSONAL}.country"),
        ConditionalRequiredRule(
            equals(f"{PERSONAL}.country", "other"),
            required=[(f"{PERSONAL}.otherCountry", "Country name")],
        ),
    ]


def company_info_rules(category: Category) -> Rules:
    return [
        _required(f"{COMPANY}.companyName"),
        _required(f"{COMPANY}.registrationNumber"),
        FormatRule(f"{COMPANY}.registrationNumber", "company_registration"),
        FormatRule(f"{COMPANY}.vatNumber", "vat_number"),
        _required(f"{COMPANY}.industry"),
        _required(f"{COMPANY}.contactPerson"),
        _required(f"{COMPANY}.contactEmail"),
        FormatRule(f"{COMPANY}.contactEmail", "email"),
        _required(f"{COMPANY}.contactPhone"),
        FormatRule(f"{COMPANY}.contactPhone", "phone"),
        _required(f"{COMPANY}.numberOfEmployees"),
        RangeRule(f"{COMPANY}.numberOfEmployees", minimum=1, integer=True),
        _required(f"{COMPANY}.annualTurnover"),
        RangeRule(f"{COMPANY}.annualTurnover", minimum=0),
        _required(f"{COMPANY}.streetAddress"),
        _required(f"{COMPANY}.city"),
        _required(f"{COMPANY}.postalCode"),
        FormatRule(f"{COMPANY}.postalCode", "postal_code"),
    ]


def current_situation_rules(category: Category) -> Rules:
    """
    Existing cover, declined cover and claims history.

    Claim details left blank once claims are declared are reported as
    CONDITIONAL_REQUIRED, not MISSING_REQUIRED. Callers asking whether a
    field is simply missing should use FieldError.is_missing.
    """
    return [
        _required(
            f"{SITUATION}.hasExistingInsurance",
            message="Please indicate whether you currently have insurance",
        ),
        ConditionalRequiredRule(
            is_true(f"{SITUATION}.hasExistingInsurance"),
            required=[
                (f"{SITUATION}.currentInsurer", "Current insurer"),
                (f"{SITUATION}.currentPremium", "Current monthly premium"),
            ],
            rules=[
                RangeRule(f"{SITUATION}.currentPremium", minimum=0, exclusive_minimum=True,
                          label="Current monthly premium"),
            ],
        ),
        _required(
            f"{SITUATION}.previouslyDeclined",
            message="Please indicate whether cover was ever declined or cancelled",
        ),
        ConditionalRequiredRule(
            is_true(f"{SITUATION}.previouslyDeclined"),
            required=[(f"{SITUATION}.declineReason", "Reason for decline or cancellation")],
        ),
        _required(
            f"{CLAIMS}.hasClaimsLastThreeYears",
            message="Please indicate whether you have claimed in the last 3 years",
        ),
        ConditionalRequiredRule(
            is_true(f"{CLAIMS}.hasClaimsLastThreeYears"),
            required=[
                (f"{CLAIMS}.damageType", "Type of damage"),
                (f"{CLAIMS}.incidentDescription", "Incident description"),
                (f"{CLAIMS}.numberOfClaims", "Number of claims"),
                (f"{CLAIMS}.totalClaimAmount", "Total claim amount"),
            ],
            rules=[
                RangeRule(f"{CLAIMS}.numberOfClaims", minimum=1, integer=True),
                RangeRule(f"{CLAIMS}.totalClaimAmount", minimum=0, exclusive_minimum=True),
                CrossFieldThresholdRule(
                    at_least(f"{CLAIMS}.numberOfClaims", 2),
                    required=[(f"{CLAIMS}.multipleClaimsExplanation", "Explanation for multiple claims")],
                ),
            ],
        ),
    ]


def coverage_needs_rules(category: Category) -> Rules:
    return [
        _required(f"{COVERAGE}.coverageType"),
        _required(f"{COVERAGE}.sumInsured"),
        RangeRule(f"{COVERAGE}.sumInsured", minimum=1),
    ]


# Category-specific conditional groups inside the risk-factor bag
_RISK_CONDITIONALS: Dict[Category, Callable[[], Rules]] = {
    Category.BUILDINGS: lambda: [
        ConditionalRequiredRule(
            equals(f"{RISK}.roofType", "thatch"),
            required=[(f"{RISK}.thatchDistanceMetres", "Distance to nearest thatched structure")],
        ),
    ],
    Category.HOUSEHOLD_CONTENTS: lambda: [
        ConditionalRequiredRule(
            is_true(f"{RISK}.alarmSystem"),
            required=[(f"{RISK}.alarmLinkedToResponse", "Armed response link")],
        ),
    ],
    Category.LIFE: lambda: [
        ConditionalRequiredRule(
            is_true(f"{RISK}.hazardousActivities"),
            required=[f"{RISK}.hazardousActivitiesDetails"],
        ),
    ],
    Category.HEALTH: lambda: [
        ConditionalRequiredRule(
            is_true(f"{RISK}.chronicConditions"),
            required=[f"{RISK}.chronicConditionsDetails"],
        ),
    ],
    Category.PUBLIC_LIABILITY: lambda: [
        ConditionalRequiredRule(
            is_true(f"{RISK}.hazardousActivities"),
            required=[f"{RISK}.hazardousActivitiesDetails"],
        ),
    ],
    Category.AVIATION_MARINE: lambda: [
        ConditionalRequiredRule(
            is_false(f"{RISK}.operatorCertified"),
            required=[f"{RISK}.certificationDetails"],
        ),
    ],
    Category.MINING_REHABILITATION: lambda: [
        ConditionalRequiredRule(
            is_true(f"{RISK}.priorEnvironmentalIncidents"),
            required=[f"{RISK}.incidentDetails"],
        ),
    ],
}


def risk_factors_rules(category: Category) -> Rules:
    rules = bag_rules(catalog.RISK_FACTORS, category)
    conditionals = _RISK_CONDITIONALS.get(category)
    if conditionals:
        rules.extend(conditionals())
    return rules


def preferences_rules(category: Category) -> Rules:
    return [
        _required(f"{BUDGET}.maxMonthlyPremium", "Maximum monthly premium"),
        RangeRule(f"{BUDGET}.maxMonthlyPremium", minimum=0, exclusive_minimum=True,
                  label="Maximum monthly premium"),
        RangeRule(f"{BUDGET}.preferredExcess", minimum=0),
        _required(f"{BUDGET}.paymentFrequency"),
        _required(f"{BUDGET}.preferredContactMethod"),
        ConditionalRequiredRule(
            equals(f"{BUDGET}.preferredContactMethod", "phone"),
            required=[f"{BUDGET}.bestTimeToCall"],
        ),
    ]


# =========================================================================
# Category steps
# =========================================================================

def vehicle_details_rules(category: Category) -> Rules:
    return bag_rules(catalog.VEHICLE_DETAILS, category) + [
        ConditionalRequiredRule(
            is_true(f"{INFO}.vehicleFinanced"),
            required=[f"{INFO}.financeHouse"],
        ),
    ]


def driver_details_rules(category: Category) -> Rules:
    return [
        _required(
            f"{DRIVER}.isRegularDriverPolicyholder",
            message="Please indicate whether you are the regular driver",
        ),
        ConditionalRequiredRule(
            is_false(f"{DRIVER}.isRegularDriverPolicyholder"),
            required=[
                (f"{DRIVER}.driverFirstName", "Driver first name"),
                (f"{DRIVER}.driverLastName", "Driver last name"),
                (f"{DRIVER}.driverIdNumber", "Driver ID number"),
                (f"{DRIVER}.driverRelationship", "Relationship to policyholder"),
            ],
            rules=[
                FormatRule(f"{DRIVER}.driverIdNumber", "sa_id"),
                ConditionalRequiredRule(
                    equals(f"{DRIVER}.driverRelationship", "other"),
                    required=[(f"{DRIVER}.driverRelationshipOther", "Relationship")],
                ),
            ],
        ),
        _required(f"{DRIVER}.licenceType"),
        _required(f"{DRIVER}.yearsLicensed"),
        RangeRule(f"{DRIVER}.yearsLicensed", minimum=0, integer=True),
        _required(f"{DRIVER}.claimsHistory", "Claims history"),
        CrossFieldThresholdRule(
            equals(f"{DRIVER}.claimsHistory", "more-than-two"),
            required=[(f"{DRIVER}.exactClaimsCount", "Exact number of claims")],
            rules=[
                RangeRule(f"{DRIVER}.exactClaimsCount", minimum=3, integer=True,
                          label="Exact number of claims",
                          kind=CrossFieldThresholdRule.kind),
            ],
        ),
    ]


def co_insured_rules(category: Category) -> Rules:
    return [
        _required(
            f"{CO_INSURED}.hasCoInsured",
            message="Please indicate whether there is a co-insured person",
        ),
        ConditionalRequiredRule(
            is_true(f"{CO_INSURED}.hasCoInsured"),
            required=[
                (f"{CO_INSURED}.firstName", "Co-insured first name"),
                (f"{CO_INSURED}.lastName", "Co-insured last name"),
                (f"{CO_INSURED}.idNumber", "Co-insured ID number"),
                (f"{CO_INSURED}.relationship", "Relationship to policyholder"),
            ],
            rules=[
                FormatRule(f"{CO_INSURED}.idNumber", "sa_id"),
                ConditionalRequiredRule(
                    equals(f"{CO_INSURED}.relationship", "other"),
                    required=[(f"{CO_INSURED}.relationshipOther", "Relationship")],
                ),
                ConditionalRequiredRule(
                    is_false(f"{CO_INSURED}.sameAddress"),
                    required=[
                        (f"{CO_INSURED}.address.streetAddress", "Co-insured street address"),
                        (f"{CO_INSURED}.address.city", "Co-insured city"),
                        (f"{CO_INSURED}.address.postalCode", "Co-insured postal code"),
                    ],
                    rules=[
                        FormatRule(f"{CO_INSURED}.address.postalCode", "postal_code",
                                   label="Co-insured postal code"),
                    ],
                ),
            ],
        ),
    ]


def platform_details_rules(category: Category) -> Rules:
    return bag_rules(catalog.PLATFORM_DETAILS, category) + [
        ConditionalRequiredRule(
            equals(f"{INFO}.platformName", "other"),
            required=[(f"{INFO}.platformNameOther", "Platform name")],
        ),
    ]


def property_details_rules(category: Category) -> Rules:
    return bag_rules(catalog.PROPERTY_DETAILS, category) + [
        ConditionalRequiredRule(
            is_false(f"{INFO}.riskAddressSameAsContact"),
            required=[
                (f"{INFO}.riskStreetAddress", "Risk street address"),
                (f"{INFO}.riskCity", "Risk city"),
                (f"{INFO}.riskPostalCode", "Risk postal code"),
            ],
        ),
    ]


def optional_covers_rules(category: Category) -> Rules:
    rules: Rules = []
    for key, label in OPTIONAL_COVER_LABELS.items():
        base = f"{COVERAGE}.optionalCovers.{key}"
        rules.append(ConditionalRequiredRule(
            is_true(f"{base}.selected"),
            required=[(f"{base}.amount", f"{label} amount")],
            rules=[
                RangeRule(f"{base}.amount",
                          minimum=Config.OPTIONAL_COVER_MIN,
                          maximum=Config.OPTIONAL_COVER_MAX,
                          label=f"{label} amount"),
            ],
        ))
    return rules


def contents_details_rules(category: Category) -> Rules:
    return bag_rules(catalog.CONTENTS_DETAILS, category) + [
        ConditionalRequiredRule(
            is_true(f"{INFO}.hasSpecifiedItems"),
            required=[f"{INFO}.specifiedItemsDescription", f"{INFO}.specifiedItemsValue"],
        ),
    ]


def life_cover_details_rules(category: Category) -> Rules:
    return bag_rules(catalog.LIFE_COVER_DETAILS, category) + [
        ConditionalRequiredRule(
            equals(f"{INFO}.beneficiaryRelationship", "other"),
            required=[(f"{INFO}.beneficiaryRelationshipOther", "Relationship")],
        ),
    ]


def medical_details_rules(category: Category) -> Rules:
    return bag_rules(catalog.MEDICAL_DETAILS, category) + [
        ConditionalRequiredRule(
            is_true(f"{INFO}.medicalSchemeMember"),
            required=[f"{INFO}.currentMedicalScheme"],
        ),
        CrossFieldThresholdRule(
            at_least(f"{INFO}.numberOfDependants", 1),
            required=[f"{INFO}.dependantsDetails"],
        ),
    ]


def business_operations_rules(category: Category) -> Rules:
    return bag_rules(catalog.BUSINESS_OPERATIONS, category)


def liability_limits_rules(category: Category) -> Rules:
    return bag_rules(catalog.LIABILITY_LIMITS, category) + [
        ConditionalRequiredRule(
            is_true(f"{INFO}.productLiability"),
            required=[f"{INFO}.productsDescription"],
        ),
    ]


def business_assets_rules(category: Category) -> Rules:
    return bag_rules(catalog.BUSINESS_ASSETS, category) + [
        ConditionalRequiredRule(
            is_true(f"{INFO}.buildingsOwned"),
            required=[f"{INFO}.buildingsValue"],
        ),
        ConditionalRequiredRule(
            is_true(f"{INFO}.businessInterruptionCover"),
            required=[(f"{INFO}.indemnityPeriodMonths", "Indemnity period (months)")],
        ),
    ]


def fleet_details_rules(category: Category) -> Rules:
    return bag_rules(catalog.FLEET_DETAILS, category) + [
        CrossFieldThresholdRule(
            at_least(f"{INFO}.numberOfVehicles", Config.FLEET_MANAGEMENT_THRESHOLD),
            required=[f"{INFO}.fleetManagementSystem"],
        ),
    ]


def cargo_details_rules(category: Category) -> Rules:
    return bag_rules(catalog.CARGO_DETAILS, category) + [
        ConditionalRequiredRule(
            is_true(f"{INFO}.hazardousGoods"),
            required=[(f"{INFO}.hazchemCertification", "Hazchem certification")],
        ),
    ]


def scheme_details_rules(category: Category) -> Rules:
    return bag_rules(catalog.SCHEME_DETAILS, category)


def trustee_details_rules(category: Category) -> Rules:
    return bag_rules(catalog.TRUSTEE_DETAILS, category) + [
        ConditionalRequiredRule(
            is_true(f"{INFO}.fidelityGuaranteeRequired"),
            required=[f"{INFO}.fidelityCoverAmount"],
        ),
    ]


def project_details_rules(category: Category) -> Rules:
    return [
        _required("projectName"),
        _required("projectLocation"),
        _required("principalContractor"),
        _required("contractValue"),
        RangeRule("contractValue", minimum=1),
        _required("projectStartDate"),
        FormatRule("projectStartDate", "date"),
        _required("projectEndDate"),
        FormatRule("projectEndDate", "date"),
        DateOrderRule("projectStartDate", "projectEndDate"),
    ]


def contract_works_rules(category: Category) -> Rules:
    return bag_rules(catalog.CONTRACT_WORKS, category) + [
        ConditionalRequiredRule(
            is_true(f"{INFO}.hasSubcontractors"),
            required=[f"{INFO}.subcontractorDetails"],
        ),
    ]


def craft_details_rules(category: Category) -> Rules:
    return bag_rules(catalog.CRAFT_DETAILS, category) + [
        ConditionalRequiredRule(
            equals(f"{INFO}.craftType", "aircraft"),
            required=[(f"{INFO}.maxTakeoffWeight", "Maximum take-off weight (kg)")],
        ),
        ConditionalRequiredRule(
            equals(f"{INFO}.craftType", "vessel"),
            required=[(f"{INFO}.hullLength", "Hull length (m)")],
        ),
    ]


def operator_experience_rules(category: Category) -> Rules:
    return bag_rules(catalog.OPERATOR_EXPERIENCE, category) + [
        CrossFieldThresholdRule(
            less_than(f"{INFO}.operatorHours", Config.MIN_OPERATOR_HOURS),
            required=[f"{INFO}.supervisedOperationDetails"],
        ),
    ]


def mine_site_details_rules(category: Category) -> Rules:
    return bag_rules(catalog.MINE_SITE_DETAILS, category)


def rehabilitation_guarantee_rules(category: Category) -> Rules:
    return bag_rules(catalog.REHABILITATION_GUARANTEE, category) + [
        CrossFieldThresholdRule(
            less_than_field(f"{INFO}.guaranteeAmount", f"{INFO}.rehabilitationLiability"),
            required=[f"{INFO}.shortfallExplanation"],
        ),
    ]


# =========================================================================
# Terminal steps
# =========================================================================

def disclosure_rules(category: Category) -> Rules:
    return [
        _required(
            "declarations.disclosureAcknowledged",
            must_be_true=True,
            message="Please confirm that you have read the disclosure",
        ),
        _required(
            "declarations.informationAccurate",
            must_be_true=True,
            message="Please confirm that the information provided is accurate",
        ),
    ]


def consent_rules(category: Category) -> Rules:
    return [
        _required(
            "consent.consentGiven",
            must_be_true=True,
            message="You must give consent before submitting",
        ),
        _required("consent.digitalSignature", message="A signature is required"),
        ChoiceRule("consent.signatureType", Config.SIGNATURE_TYPES,
                   message="Signature must be drawn or uploaded"),
        ConditionalRequiredRule(
            equals("consent.signatureType", "uploaded"),
            required=[("consent.signatureFileName", "Signature file")],
        ),
    ]


# Step id -> rule builder. Steps without an entry (review) own no fields.
STEP_RULE_BUILDERS: Dict[str, RuleBuilder] = {
    catalog.PERSONAL_INFO: personal_info_rules,
    catalog.COMPANY_INFO: company_info_rules,
    catalog.CURRENT_SITUATION: current_situation_rules,
    catalog.COVERAGE_NEEDS: coverage_needs_rules,
    catalog.RISK_FACTORS: risk_factors_rules,
    catalog.PREFERENCES: preferences_rules,
    catalog.VEHICLE_DETAILS: vehicle_details_rules,
    catalog.DRIVER_DETAILS: driver_details_rules,
    catalog.CO_INSURED: co_insured_rules,
    catalog.PLATFORM_DETAILS: platform_details_rules,
    catalog.PROPERTY_DETAILS: property_details_rules,
    catalog.OPTIONAL_COVERS: optional_covers_rules,
    catalog.CONTENTS_DETAILS: contents_details_rules,
    catalog.LIFE_COVER_DETAILS: life_cover_details_rules,
    catalog.MEDICAL_DETAILS: medical_details_rules,
    catalog.BUSINESS_OPERATIONS: business_operations_rules,
    catalog.LIABILITY_LIMITS: liability_limits_rules,
    catalog.BUSINESS_ASSETS: business_assets_rules,
    catalog.FLEET_DETAILS: fleet_details_rules,
    catalog.CARGO_DETAILS: cargo_details_rules,
    catalog.SCHEME_DETAILS: scheme_details_rules,
    catalog.TRUSTEE_DETAILS: trustee_details_rules,
    catalog.PROJECT_DETAILS: project_details_rules,
    catalog.CONTRACT_WORKS: contract_works_rules,
    catalog.CRAFT_DETAILS: craft_details_rules,
    catalog.OPERATOR_EXPERIENCE: operator_experience_rules,
    catalog.MINE_SITE_DETAILS: mine_site_details_rules,
    catalog.REHABILITATION_GUARANTEE: rehabilitation_guarantee_rules,
    catalog.DISCLOSURE: disclosure_rules,
    catalog.CONSENT: consent_rules,
}
