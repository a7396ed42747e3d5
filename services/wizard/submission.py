# -*- coding: utf-8 -*-
"""Submission record handed to the downstream quote consumer."""

import copy
from typing import Any, Dict, Optional

from app.config import Config
from models.wizard_session import WizardSession
from services.wizard.form_state_store import FormStateStore
from utils.datetime_utils import utc_now_iso
from utils.helpers import to_number
from utils.logger import get_logger

logger = get_logger(__name__)

OPTIONAL_COVER_KEYS = ("accidentalDamage", "powerSurge", "subsidenceLandslip")
COVERAGE_PATH = "needsAnalysis.coveragePreferences"


def normalize_optional_cover(cover: Any) -> Dict[str, Any]:
    """
    Normalize one optional cover entry.

    The amount survives only when the cover is selected and the amount is a
    number within the configured limits; otherwise it becomes None.
    """
    selected = bool(isinstance(cover, dict) and cover.get("selected"))
    amount = to_number(cover.get("amount")) if isinstance(cover, dict) else None
    in_limits = (
        selected
        and amount is not None
        and Config.OPTIONAL_COVER_MIN <= amount <= Config.OPTIONAL_COVER_MAX
    )
    return {"selected": selected, "amount": amount if in_limits else None}


def normalize_form_state(form_state: Dict[str, Any]) -> Dict[str, Any]:
    """Apply optional cover normalization where the state carries optional covers."""
    coverage = FormStateStore.get(form_state, COVERAGE_PATH, None)
    if not isinstance(coverage, dict) or "optionalCovers" not in coverage:
        return form_state

    covers = coverage.get("optionalCovers") or {}
    comment = coverage.get("optionalCoverAgentComment")
    normalized = dict(coverage)
    normalized["optionalCovers"] = {
        key: normalize_optional_cover(covers.get(key)) for key in OPTIONAL_COVER_KEYS
    }
    normalized["optionalCoverAgentComment"] = comment.strip() if isinstance(comment, str) else ""
    return FormStateStore.set_path(form_state, COVERAGE_PATH, normalized)


def infer_signature_type(consent: Dict[str, Any]) -> str:
    """Signature type as stored, or inferred from the file name when left blank."""
    signature_type = consent.get("signatureType") or ""
    if signature_type:
        return signature_type
    return "uploaded" if consent.get("signatureFileName") else "drawn"


def build_submission_record(session: WizardSession,
                            consent_timestamp: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the JSON-serializable record for a completed session.

    Args:
        session: Session whose steps have all validated
        consent_timestamp: ISO-8601 timestamp of consent (now, UTC, if omitted)

    Returns:
        Full form state plus the consent, signature and session identifiers
    """
    state = normalize_form_state(session.form_state)
    consent = FormStateStore.get(state, "consent", None) or {}

    signature_type = infer_signature_type(consent)

    record = copy.deepcopy(state)
    if isinstance(record.get("consent"), dict):
        record["consent"]["signatureType"] = signature_type
    record.update({
        "consentGiven": consent.get("consentGiven") is True,
        "consentTimestamp": consent_timestamp or utc_now_iso(),
        "digitalSignature": consent.get("digitalSignature", ""),
        "signatureType": signature_type,
        "signatureFileName": consent.get("signatureFileName") or None,
        "category": session.category.value,
        "referenceNumber": session.reference_number,
        "representative": copy.deepcopy(session.representative),
    })
    logger.info(f"Built submission record {session.reference_number} ({session.category.value})")
    return record
