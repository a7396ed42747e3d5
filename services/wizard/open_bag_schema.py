# -*- coding: utf-8 -*-
"""
Category-keyed schemas for the open form-state bags.

``needsAnalysis.riskFactors`` and ``insuranceInfo`` hold different keys for
every category. Each category gets an OpenBagSchema listing the legal keys,
their value kind and their base requiredness; writes of unknown keys or
wrongly typed values are rejected.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Optional, Tuple, Union

from app.config import Config
from models.category import Category
from services.exceptions import InvalidFieldPathException, ValidationException
from services.wizard import step_catalog as catalog
from utils.datetime_utils import current_year
from utils.helpers import humanize_field_name, is_blank

TEXT = "text"
BOOL = "bool"
NUMBER = "number"
DATE = "date"

RISK_FACTORS_SECTION = "needsAnalysis.riskFactors"
INSURANCE_INFO_SECTION = "insuranceInfo"

Limit = Union[int, float, Callable[[], Union[int, float]], None]


@dataclass(frozen=True)
class BagField:
    """One typed key of an open bag."""

    name: str
    kind: str = TEXT
    required: bool = True
    minimum: Limit = None
    maximum: Limit = None
    exclusive_minimum: bool = False
    integer: bool = False
    fmt: Optional[str] = None
    label: Optional[str] = None

    @property
    def display_label(self) -> str:
        return self.label or humanize_field_name(self.name)

    @property
    def empty_value(self):
        return "" if self.kind in (TEXT, DATE) else None

    def accepts(self, value: Any) -> bool:
        """Type check; blank values are always accepted."""
        if is_blank(value):
            return True
        if self.kind == TEXT:
            return isinstance(value, str)
        if self.kind == BOOL:
            return isinstance(value, bool)
        if self.kind == NUMBER:
            return isinstance(value, (int, float, str)) and not isinstance(value, bool)
        if self.kind == DATE:
            return isinstance(value, (str, date))
        return False


class OpenBagSchema:
    """Legal keys of one open bag for one category."""

    def __init__(self, section: str, category: Category, fields: Tuple[BagField, ...]):
        self.section = section
        self.category = category
        self._fields: Dict[str, BagField] = {}
        for bag_field in fields:
            self._fields.setdefault(bag_field.name, bag_field)

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(self._fields)

    @property
    def fields(self) -> Tuple[BagField, ...]:
        return tuple(self._fields.values())

    def field(self, key: str) -> Optional[BagField]:
        return self._fields.get(key)

    def path(self, key: str) -> str:
        return f"{self.section}.{key}"

    def empty_bag(self) -> Dict[str, Any]:
        """Fresh bag with every key at its empty value."""
        return {f.name: f.empty_value for f in self._fields.values()}

    def check(self, key: str, value: Any):
        """
        Validate a write to this bag.

        Raises:
            InvalidFieldPathException: key is not part of the category's schema
            ValidationException: value has the wrong type for the key
        """
        bag_field = self._fields.get(key)
        if bag_field is None:
            raise InvalidFieldPathException(
                f"'{key}' is not a {self.category.value} field", path=self.path(key)
            )
        if not bag_field.accepts(value):
            raise ValidationException(
                f"{bag_field.display_label} expects a {bag_field.kind} value",
                field=self.path(key),
            )

    def check_bag(self, bag: Any):
        """Validate a write that replaces the whole bag."""
        if not isinstance(bag, dict):
            raise ValidationException(f"{self.section} expects a mapping", field=self.section)
        for key, value in bag.items():
            self.check(key, value)


def _next_year() -> int:
    return current_year() + 1


# =========================================================================
# Risk factors (needsAnalysis.riskFactors) per category
# =========================================================================

RISK_FACTOR_FIELDS: Dict[Category, Tuple[BagField, ...]] = {
    Category.AUTO: (
        BagField("parkingOvernight"),
        BagField("trackingDevice", BOOL),
        BagField("annualMileage", NUMBER, minimum=0),
        BagField("primaryUse"),
        BagField("immobiliser", BOOL, required=False),
    ),
    Category.E_HAILING: (
        BagField("parkingOvernight"),
        BagField("trackingDevice", BOOL),
        BagField("annualMileage", NUMBER, minimum=0),
        BagField("hoursOnlinePerWeek", NUMBER, minimum=1, maximum=168),
        BagField("dashCamera", BOOL, required=False),
    ),
    Category.BUILDINGS: (
        BagField("constructionType"),
        BagField("roofType"),
        BagField("occupancy"),
        BagField("nearWaterBody", BOOL),
        BagField("thatchDistanceMetres", NUMBER, required=False, minimum=0),
    ),
    Category.HOUSEHOLD_CONTENTS: (
        BagField("constructionType"),
        BagField("alarmSystem", BOOL),
        BagField("alarmLinkedToResponse", BOOL, required=False),
        BagField("occupiedDuringDay", BOOL),
        BagField("burglarBars", BOOL, required=False),
    ),
    Category.LIFE: (
        BagField("smoker", BOOL),
        BagField("occupationRisk"),
        BagField("hazardousActivities", BOOL),
        BagField("hazardousActivitiesDetails", required=False),
    ),
    Category.HEALTH: (
        BagField("smoker", BOOL),
        BagField("chronicConditions", BOOL),
        BagField("chronicConditionsDetails", required=False),
        BagField("bmiRange", required=False),
    ),
    Category.PUBLIC_LIABILITY: (
        BagField("publicFootfall"),
        BagField("hazardousActivities", BOOL),
        BagField("hazardousActivitiesDetails", required=False),
        BagField("priorLiabilityClaims", BOOL),
    ),
    Category.SMALL_BUSINESS: (
        BagField("premisesType"),
        BagField("securityMeasures"),
        BagField("stockValue", NUMBER, minimum=0),
        BagField("cashOnPremises", NUMBER, required=False, minimum=0),
    ),
    Category.COMMERCIAL_PROPERTY: (
        BagField("constructionType"),
        BagField("fireProtection"),
        BagField("sprinklerSystem", BOOL),
        BagField("vacantPeriods", BOOL, required=False),
    ),
    Category.TRANSPORT: (
        BagField("goodsType"),
        BagField("routeType"),
        BagField("driverTraining", BOOL),
        BagField("crossBorder", BOOL, required=False),
    ),
    Category.BODY_CORPORATES: (
        BagField("buildingAge", NUMBER, minimum=0, integer=True),
        BagField("fireCompliance", BOOL),
        BagField("commonPropertyFeatures", required=False),
    ),
    Category.ENGINEERING_CONSTRUCTION: (
        BagField("siteHazards"),
        BagField("safetyOfficerAppointed", BOOL),
        BagField("nearWaterBody", BOOL, required=False),
    ),
    Category.AVIATION_MARINE: (
        BagField("operatingArea"),
        BagField("operatorCertified", BOOL),
        BagField("certificationDetails", required=False),
    ),
    Category.MINING_REHABILITATION: (
        BagField("environmentalRisk"),
        BagField("waterUseLicence", BOOL),
        BagField("priorEnvironmentalIncidents", BOOL),
        BagField("incidentDetails", required=False),
    ),
}


# =========================================================================
# Insurance info keys per category step
# =========================================================================

INSURANCE_INFO_FIELDS: Dict[str, Tuple[BagField, ...]] = {
    catalog.VEHICLE_DETAILS: (
        BagField("vehicleYear", NUMBER, minimum=Config.MIN_VEHICLE_YEAR, maximum=_next_year, integer=True),
        BagField("vehicleMake"),
        BagField("vehicleModel"),
        BagField("vehicleValue", NUMBER, minimum=1),
        BagField("registrationNumber"),
        BagField("vehicleFinanced", BOOL),
        BagField("financeHouse", required=False),
    ),
    catalog.PLATFORM_DETAILS: (
        BagField("platformName"),
        BagField("platformNameOther", required=False, label="Platform name"),
        BagField("tripsPerWeek", NUMBER, minimum=0, integer=True),
        BagField("passengerLiabilityCover", BOOL),
    ),
    catalog.PROPERTY_DETAILS: (
        BagField("propertyType"),
        BagField("propertyValue", NUMBER, minimum=1),
        BagField("yearBuilt", NUMBER, minimum=Config.MIN_BUILDING_YEAR, maximum=current_year, integer=True),
        BagField("floorArea", NUMBER, minimum=1, label="Floor area (m²)"),
        BagField("riskAddressSameAsContact", BOOL),
        BagField("riskStreetAddress", required=False, label="Street address"),
        BagField("riskCity", required=False, label="City"),
        BagField("riskPostalCode", required=False, fmt="postal_code", label="Postal code"),
    ),
    catalog.CONTENTS_DETAILS: (
        BagField("contentsValue", NUMBER, minimum=1),
        BagField("hasSpecifiedItems", BOOL),
        BagField("specifiedItemsDescription", required=False),
        BagField("specifiedItemsValue", NUMBER, required=False, minimum=1),
    ),
    catalog.LIFE_COVER_DETAILS: (
        BagField("lifeCoverAmount", NUMBER, minimum=1),
        BagField("beneficiaryName"),
        BagField("beneficiaryIdNumber", required=False, fmt="sa_id"),
        BagField("beneficiaryRelationship"),
        BagField("beneficiaryRelationshipOther", required=False, label="Relationship"),
    ),
    catalog.MEDICAL_DETAILS: (
        BagField("medicalSchemeMember", BOOL),
        BagField("currentMedicalScheme", required=False),
        BagField("numberOfDependants", NUMBER, minimum=0, integer=True),
        BagField("dependantsDetails", required=False),
        BagField("hospitalPlanPreference", required=False),
    ),
    catalog.BUSINESS_OPERATIONS: (
        BagField("businessActivities"),
        BagField("yearsInOperation", NUMBER, minimum=0),
        BagField("numberOfPremises", NUMBER, minimum=1, integer=True),
    ),
    catalog.LIABILITY_LIMITS: (
        BagField("liabilityLimit", NUMBER, minimum=1),
        BagField("productLiability", BOOL),
        BagField("productsDescription", required=False),
        BagField("contractualLiability", BOOL, required=False),
    ),
    catalog.BUSINESS_ASSETS: (
        BagField("equipmentValue", NUMBER, minimum=0),
        BagField("buildingsOwned", BOOL),
        BagField("buildingsValue", NUMBER, required=False, minimum=1),
        BagField("businessInterruptionCover", BOOL),
        BagField("indemnityPeriodMonths", NUMBER, required=False, minimum=1,
                 maximum=Config.MAX_INDEMNITY_PERIOD_MONTHS, integer=True),
    ),
    catalog.FLEET_DETAILS: (
        BagField("numberOfVehicles", NUMBER, minimum=1, integer=True),
        BagField("vehicleTypes"),
        BagField("averageVehicleValue", NUMBER, minimum=1),
        BagField("fleetManagementSystem", required=False),
    ),
    catalog.CARGO_DETAILS: (
        BagField("cargoType"),
        BagField("maxLoadValue", NUMBER, minimum=1),
        BagField("hazardousGoods", BOOL),
        BagField("hazchemCertification", required=False),
    ),
    catalog.SCHEME_DETAILS: (
        BagField("schemeName"),
        BagField("schemeRegistrationNumber"),
        BagField("numberOfUnits", NUMBER, minimum=2, integer=True),
        BagField("replacementValue", NUMBER, minimum=1),
        BagField("managingAgent", required=False),
    ),
    catalog.TRUSTEE_DETAILS: (
        BagField("numberOfTrustees", NUMBER, minimum=1, integer=True),
        BagField("fidelityGuaranteeRequired", BOOL),
        BagField("fidelityCoverAmount", NUMBER, required=False, minimum=1),
    ),
    catalog.CONTRACT_WORKS: (
        BagField("plantAndMachineryValue", NUMBER, minimum=0),
        BagField("thirdPartyLiabilityLimit", NUMBER, minimum=1),
        BagField("hasSubcontractors", BOOL),
        BagField("subcontractorDetails", required=False),
    ),
    catalog.CRAFT_DETAILS: (
        BagField("craftType"),
        BagField("craftRegistration"),
        BagField("craftValue", NUMBER, minimum=1),
        BagField("yearManufactured", NUMBER, minimum=1900, maximum=current_year, integer=True),
        BagField("maxTakeoffWeight", NUMBER, required=False, minimum=1, label="Maximum take-off weight (kg)"),
        BagField("hullLength", NUMBER, required=False, minimum=1, label="Hull length (m)"),
    ),
    catalog.OPERATOR_EXPERIENCE: (
        BagField("operatorLicenceNumber"),
        BagField("operatorHours", NUMBER, minimum=0),
        BagField("supervisedOperationDetails", required=False),
    ),
    catalog.MINE_SITE_DETAILS: (
        BagField("mineName"),
        BagField("mineralType"),
        BagField("miningRightNumber"),
        BagField("siteAreaHectares", NUMBER, minimum=0, exclusive_minimum=True),
    ),
    catalog.REHABILITATION_GUARANTEE: (
        BagField("rehabilitationLiability", NUMBER, minimum=1),
        BagField("guaranteeAmount", NUMBER, minimum=1),
        BagField("shortfallExplanation", required=False),
    ),
}

_RISK_SCHEMAS: Dict[Category, OpenBagSchema] = {}
_INSURANCE_SCHEMAS: Dict[Category, OpenBagSchema] = {}


def risk_factor_schema(category) -> OpenBagSchema:
    category = Category.from_value(category)
    if category not in _RISK_SCHEMAS:
        _RISK_SCHEMAS[category] = OpenBagSchema(
            RISK_FACTORS_SECTION, category, RISK_FACTOR_FIELDS[category]
        )
    return _RISK_SCHEMAS[category]


def insurance_info_schema(category) -> OpenBagSchema:
    """Union of the insurance info keys of every step in the category."""
    category = Category.from_value(category)
    if category not in _INSURANCE_SCHEMAS:
        fields = []
        for step_id in catalog.step_ids(category):
            fields.extend(INSURANCE_INFO_FIELDS.get(step_id, ()))
        _INSURANCE_SCHEMAS[category] = OpenBagSchema(INSURANCE_INFO_SECTION, category, tuple(fields))
    return _INSURANCE_SCHEMAS[category]


def schema_for_path(path: str, category) -> Optional[OpenBagSchema]:
    """The open-bag schema a path writes into, or None for fixed sections."""
    if path == RISK_FACTORS_SECTION or path.startswith(RISK_FACTORS_SECTION + "."):
        return risk_factor_schema(category)
    if path == INSURANCE_INFO_SECTION or path.startswith(INSURANCE_INFO_SECTION + "."):
        return insurance_info_schema(category)
    return None


def schemas_below(path: str, category) -> Tuple[OpenBagSchema, ...]:
    """Open-bag schemas nested strictly below an ancestor path such as ``needsAnalysis``."""
    if RISK_FACTORS_SECTION.startswith(path + "."):
        return (risk_factor_schema(category),)
    return ()


def step_bag_fields(step_id: str, category) -> Tuple[Tuple[str, BagField], ...]:
    """(path, field) pairs of the open-bag keys a step collects."""
    if step_id == catalog.RISK_FACTORS:
        schema = risk_factor_schema(category)
        return tuple((schema.path(f.name), f) for f in schema.fields)
    section = INSURANCE_INFO_SECTION
    return tuple((f"{section}.{f.name}", f) for f in INSURANCE_INFO_FIELDS.get(step_id, ()))
