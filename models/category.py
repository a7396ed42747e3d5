# -*- coding: utf-8 -*-
"""
Insurance product category.
"""

from enum import Enum

from services.exceptions import InvalidCategoryException


class Category(Enum):
    """Product categories a wizard session can be opened for."""

    AUTO = "auto"
    BUILDINGS = "buildings-insurance"
    HOUSEHOLD_CONTENTS = "household-contents"
    LIFE = "life"
    HEALTH = "health"
    PUBLIC_LIABILITY = "public-liability"
    SMALL_BUSINESS = "small-business"
    COMMERCIAL_PROPERTY = "commercial-property"
    TRANSPORT = "transport-insurance"
    BODY_CORPORATES = "body-corporates"
    ENGINEERING_CONSTRUCTION = "engineering-construction"
    AVIATION_MARINE = "aviation-marine"
    MINING_REHABILITATION = "mining-rehabilitation"
    E_HAILING = "e-hailing"

    @classmethod
    def from_value(cls, value) -> "Category":
        """Resolve a Category from an enum member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidCategoryException(value) from None

    @property
    def is_business(self) -> bool:
        """Business categories collect company details instead of personal details."""
        return self in BUSINESS_CATEGORIES

    @property
    def is_vehicle(self) -> bool:
        return self in VEHICLE_CATEGORIES

    @property
    def is_property(self) -> bool:
        return self in PROPERTY_CATEGORIES


BUSINESS_CATEGORIES = frozenset({
    Category.PUBLIC_LIABILITY,
    Category.SMALL_BUSINESS,
    Category.COMMERCIAL_PROPERTY,
    Category.TRANSPORT,
    Category.BODY_CORPORATES,
    Category.ENGINEERING_CONSTRUCTION,
    Category.AVIATION_MARINE,
    Category.MINING_REHABILITATION,
})

VEHICLE_CATEGORIES = frozenset({Category.AUTO, Category.E_HAILING})

# Categories offering accidental damage / power surge / subsidence covers
PROPERTY_CATEGORIES = frozenset({Category.BUILDINGS, Category.HOUSEHOLD_CONTENTS})
