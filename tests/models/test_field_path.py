# -*- coding: utf-8 -*-
"""
Tests for field paths, field errors and categories.
"""

import pytest

from models.category import Category
from models.field_error import ErrorKind, FieldError
from models.field_path import FieldPath
from services.exceptions import InvalidCategoryException, InvalidFieldPathException


class TestFieldPath:
    """Test dotted path parsing."""

    def test_parse_valid_path(self):
        path = FieldPath.parse("needsAnalysis.currentSituation.claimsHistory.numberOfClaims")

        assert path.section == "needsAnalysis"
        assert path.leaf == "numberOfClaims"
        assert path.parent == "needsAnalysis.currentSituation.claimsHistory"
        assert len(path.parts) == 4

    def test_path_is_a_string(self):
        path = FieldPath("personalInfo.email")

        assert path == "personalInfo.email"
        assert {path: 1}["personalInfo.email"] == 1

    @pytest.mark.parametrize("bad", ["", "personalInfo.", ".email", "personal info.email", "a..b", "1abc"])
    def test_malformed_paths_rejected(self, bad):
        with pytest.raises(InvalidFieldPathException):
            FieldPath.parse(bad)

    def test_non_string_rejected(self):
        with pytest.raises(InvalidFieldPathException):
            FieldPath.parse(None)

    def test_join_and_child(self):
        path = FieldPath.join("coInsured", "address")

        assert path == "coInsured.address"
        assert path.child("city") == "coInsured.address.city"

    def test_is_within_respects_segment_boundary(self):
        assert FieldPath("personalInfo.email").is_within("personalInfo")
        assert FieldPath("personalInfo").is_within("personalInfo")
        assert not FieldPath("personalInfoExtra.email").is_within("personalInfo")


class TestFieldError:
    """Test field error value objects."""

    def test_str_is_message(self):
        error = FieldError(ErrorKind.MISSING_REQUIRED, "First name is required")

        assert str(error) == "First name is required"

    def test_missing_kinds(self):
        assert FieldError(ErrorKind.MISSING_REQUIRED, "x").is_missing
        assert FieldError(ErrorKind.CONDITIONAL_REQUIRED, "x").is_missing
        assert FieldError(ErrorKind.CROSS_FIELD_THRESHOLD, "x").is_missing
        assert not FieldError(ErrorKind.FORMAT_INVALID, "x").is_missing
        assert not FieldError(ErrorKind.RANGE_INVALID, "x").is_missing

    def test_dict_round_trip(self):
        error = FieldError(ErrorKind.RANGE_INVALID, "Amount must not exceed 100 000")

        assert FieldError.from_dict(error.to_dict()) == error


class TestCategory:
    """Test category lookup and grouping."""

    def test_from_value_accepts_member_and_string(self):
        assert Category.from_value("auto") is Category.AUTO
        assert Category.from_value(Category.LIFE) is Category.LIFE

    def test_unknown_category(self):
        with pytest.raises(InvalidCategoryException):
            Category.from_value("pet-insurance")

    def test_groups(self):
        assert Category.TRANSPORT.is_business
        assert not Category.AUTO.is_business
        assert Category.E_HAILING.is_vehicle
        assert Category.HOUSEHOLD_CONTENTS.is_property
        assert len(list(Category)) == 14
