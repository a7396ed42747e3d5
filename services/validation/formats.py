# -*- coding: utf-8 -*-
"""
Field format checks.

South African identity numbers, phone numbers, postal codes, company
registration and VAT numbers, e-mail addresses and ISO dates.
"""

import re

from utils.datetime_utils import parse_date


class FormatValidator:
    """Pattern and checksum based format checks. All methods are pure."""

    EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

    # +27 or 0, mobile prefix 6-8, then eight digits
    PHONE_PATTERN = re.compile(r"^(\+27|0)[6-8][0-9]{8}$")

    POSTAL_CODE_PATTERN = re.compile(r"^[0-9]{4}$")

    SA_ID_PATTERN = re.compile(r"^[0-9]{13}$")

    # CIPC format: YYYY/NNNNNN/NN
    COMPANY_REGISTRATION_PATTERN = re.compile(r"^[0-9]{4}/[0-9]{6}/[0-9]{2}$")

    VAT_NUMBER_PATTERN = re.compile(r"^4[0-9]{9}$")

    @staticmethod
    def is_valid_email(value: str) -> bool:
        return bool(FormatValidator.EMAIL_PATTERN.match(value.strip()))

    @staticmethod
    def normalize_phone(value: str) -> str:
        """Remove all whitespace from a phone number."""
        return re.sub(r"\s", "", value)

    @staticmethod
    def is_valid_phone(value: str) -> bool:
        return bool(FormatValidator.PHONE_PATTERN.match(FormatValidator.normalize_phone(value)))

    @staticmethod
    def is_valid_postal_code(value: str) -> bool:
        return bool(FormatValidator.POSTAL_CODE_PATTERN.match(value.strip()))

    @staticmethod
    def sa_id_check_digit(first_twelve: str) -> int:
        """
        Compute the check digit for the first twelve digits of an SA ID number.

        Digits at even positions are summed as-is. Digits at odd positions are
        doubled, with 9 subtracted from any doubled value above 9, then summed.
        The check digit is (10 - total % 10) % 10.
        """
        total = 0
        for position, char in enumerate(first_twelve):
            digit = int(char)
            if position % 2 == 0:
                total += digit
            else:
                doubled = digit * 2
                total += doubled - 9 if doubled > 9 else doubled
        return (10 - (total % 10)) % 10

    @staticmethod
    def is_valid_sa_id(value: str) -> bool:
        value = value.strip()
        if not FormatValidator.SA_ID_PATTERN.match(value):
            return False
        return FormatValidator.sa_id_check_digit(value[:12]) == int(value[12])

    @staticmethod
    def is_valid_company_registration(value: str) -> bool:
        return bool(FormatValidator.COMPANY_REGISTRATION_PATTERN.match(value.strip()))

    @staticmethod
    def is_valid_vat_number(value: str) -> bool:
        return bool(FormatValidator.VAT_NUMBER_PATTERN.match(re.sub(r"\s", "", value)))

    @staticmethod
    def is_valid_date(value) -> bool:
        return parse_date(value) is not None


# Format name -> (check, message template)
FORMATS = {
    "email": (FormatValidator.is_valid_email, "Please enter a valid email address"),
    "phone": (
        FormatValidator.is_valid_phone,
        "Please enter a valid South African phone number (e.g. 082 123 4567)",
    ),
    "postal_code": (FormatValidator.is_valid_postal_code, "{label} must be a 4-digit code"),
    "sa_id": (FormatValidator.is_valid_sa_id, "Please enter a valid 13-digit South African ID number"),
    "company_registration": (
        FormatValidator.is_valid_company_registration,
        "{label} must use the format YYYY/NNNNNN/NN",
    ),
    "vat_number": (FormatValidator.is_valid_vat_number, "{label} must be 10 digits starting with 4"),
    "date": (FormatValidator.is_valid_date, "{label} must be a valid date (YYYY-MM-DD)"),
}
