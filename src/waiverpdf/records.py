"""
Submission records: the read-only input of document generation.

A record is a snapshot of one accepted waiver form: participant data,
consents, the accepted waiver version and text hash, the stored
signature image reference, and a tamper hash binding them together.

Records are loaded from the camelCase JSON layout used by the storage
backends (``createdAt``, ``payload.fullName``, ``waiver.textHash``...),
or built from a freshly submitted form payload with :func:`build_record`.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import json
import logging
import re
import secrets
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from .constants import MAX_SIGNATURE_BYTES, SIGNATURE_DATA_URL_PREFIX
from .errors import RecordError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .waiver import LegalText

__all__ = [
    "SignatureRef",
    "SubmissionRecord",
    "WaiverAcceptance",
    "WaiverPayload",
    "build_record",
    "compute_tamper_hash",
    "decode_signature_data_url",
    "normalize_payload",
    "record_from_dict",
    "record_to_dict",
    "sha256_hex",
    "stable_stringify",
    "validate_payload",
]

_logger = logging.getLogger(__name__)

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_PATTERN = re.compile(r"^[0-9+()\-\s]{7,20}$")
_ID_PATTERN = re.compile(r"^[A-Za-z0-9\-]{4,30}$")
_DATA_URL_PATTERN = re.compile(r"^data:image/png;base64,([A-Za-z0-9+/=]+)$")


@dataclass(frozen=True)
class WaiverPayload:
    """Participant data and consents as submitted (signature excluded)."""

    full_name: str
    date_of_birth: str
    email: str
    phone: str
    id_number: str
    emergency_contact_name: str
    emergency_contact_phone: str
    emergency_contact_relationship: str
    consent_waiver_text: bool
    consent_liability: bool
    consent_medical: bool
    consent_privacy: bool
    photo_key: str | None = None


@dataclass(frozen=True)
class WaiverAcceptance:
    """Which legal text was accepted, and when."""

    version: str
    accepted_at: str
    text_hash: str


@dataclass(frozen=True)
class SignatureRef:
    """Where the signature PNG is stored and its SHA-256."""

    key: str
    sha256: str


@dataclass(frozen=True)
class SubmissionRecord:
    """One stored waiver submission."""

    id: str
    created_at: str
    payload: WaiverPayload
    waiver: WaiverAcceptance
    signature: SignatureRef
    tamper_hash: str
    waiver_pdf_key: str | None = None


# ── Hashing ─────────────────────────────────────────────────────────


def sha256_hex(data: str | bytes) -> str:
    """SHA-256 hex digest; strings are hashed as UTF-8."""
    raw = data.encode("utf-8") if isinstance(data, str) else data
    return hashlib.sha256(raw).hexdigest()


def stable_stringify(value: Any) -> str:
    """Serialize to compact JSON with recursively sorted object keys."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def compute_tamper_hash(
    record_id: str, payload: Mapping[str, Any], signature_sha: str, created_at: str
) -> str:
    """Hash binding a submission's id, normalized payload and signature digest.

    Args:
        record_id: Submission id.
        payload: Normalized camelCase payload (see :func:`normalize_payload`).
        signature_sha: SHA-256 hex of the signature PNG.
        created_at: ISO timestamp of the submission.
    """
    hash_payload = {"id": record_id, "payload": dict(payload), "signatureSha": signature_sha}
    return sha256_hex(f"{stable_stringify(hash_payload)}|{created_at}")


# ── Form payload handling ───────────────────────────────────────────


def _is_valid_date(value: object) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


def validate_payload(data: Mapping[str, Any]) -> dict[str, str]:
    """Validate a submitted form payload.

    Returns:
        Mapping of camelCase field name to a user-facing (pt-BR) message.
        Empty when the payload is valid.
    """
    errors: dict[str, str] = {}

    if not _text(data, "fullName"):
        errors["fullName"] = "Nome completo é obrigatório."
    if not _is_valid_date(data.get("dateOfBirth")):
        errors["dateOfBirth"] = "Data de nascimento é obrigatória."
    if not _EMAIL_PATTERN.match(str(data.get("email") or "")):
        errors["email"] = "E-mail válido é obrigatório."
    if not _PHONE_PATTERN.match(str(data.get("phone") or "")):
        errors["phone"] = "Telefone válido é obrigatório."
    if not _ID_PATTERN.match(str(data.get("idNumber") or "")):
        errors["idNumber"] = "Número de documento válido é obrigatório."
    if not _text(data, "emergencyContactName"):
        errors["emergencyContactName"] = "Nome do contato de emergência é obrigatório."
    if not _PHONE_PATTERN.match(str(data.get("emergencyContactPhone") or "")):
        errors["emergencyContactPhone"] = "Telefone do contato de emergência é obrigatório."
    if not _text(data, "emergencyContactRelationship"):
        errors["emergencyContactRelationship"] = (
            "Parentesco do contato de emergência é obrigatório."
        )
    if not data.get("consentLiability"):
        errors["consentLiability"] = "Consentimento de responsabilidade é obrigatório."
    if not data.get("consentWaiverText"):
        errors["consentWaiverText"] = "Você deve confirmar leitura e aceite do termo completo."
    if not data.get("consentMedical"):
        errors["consentMedical"] = "Consentimento médico é obrigatório."
    if not data.get("consentPrivacy"):
        errors["consentPrivacy"] = "Consentimento de privacidade é obrigatório."
    if not str(data.get("signatureDataUrl") or "").startswith(SIGNATURE_DATA_URL_PREFIX):
        errors["signatureDataUrl"] = "Assinatura é obrigatória."

    return errors


def normalize_payload(data: Mapping[str, Any]) -> dict[str, Any]:
    """Trim text fields, lowercase the email, coerce consents to bool.

    The signature data URL is dropped; it is stored separately.
    """
    return {
        "fullName": _text(data, "fullName"),
        "dateOfBirth": data.get("dateOfBirth") or "",
        "email": _text(data, "email").lower(),
        "phone": _text(data, "phone"),
        "idNumber": _text(data, "idNumber"),
        "emergencyContactName": _text(data, "emergencyContactName"),
        "emergencyContactPhone": _text(data, "emergencyContactPhone"),
        "emergencyContactRelationship": _text(data, "emergencyContactRelationship"),
        "consentWaiverText": bool(data.get("consentWaiverText")),
        "consentLiability": bool(data.get("consentLiability")),
        "consentMedical": bool(data.get("consentMedical")),
        "consentPrivacy": bool(data.get("consentPrivacy")),
        "photoKey": data.get("photoKey") or None,
    }


def decode_signature_data_url(data_url: str) -> bytes:
    """Extract PNG bytes from a ``data:image/png;base64,`` URL.

    Raises:
        RecordError: if the URL is not a PNG data URL, is not valid base64,
            or decodes to nothing or to more than the size limit.
    """
    m = _DATA_URL_PATTERN.match(data_url)
    if not m:
        raise RecordError("Signature is not a PNG data URL", field="signatureDataUrl")
    try:
        png = base64.b64decode(m.group(1), validate=True)
    except binascii.Error as e:
        raise RecordError(f"Invalid signature base64: {e}", field="signatureDataUrl") from e
    if not png or len(png) > MAX_SIGNATURE_BYTES:
        raise RecordError(
            f"Signature image size {len(png)} outside 1..{MAX_SIGNATURE_BYTES} bytes",
            field="signatureDataUrl",
        )
    return png


def _new_submission_id() -> str:
    return f"sub_{int(time.time() * 1000)}_{secrets.token_hex(4)}"


def _iso_now() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def build_record(
    data: Mapping[str, Any],
    signature_png: bytes,
    legal_text: LegalText,
    *,
    submission_id: str | None = None,
    created_at: str | None = None,
    signature_key: str | None = None,
) -> SubmissionRecord:
    """Build a record from a validated form payload, as the submission handler does.

    Args:
        data: Raw camelCase form payload (already validated).
        signature_png: Decoded signature image bytes.
        legal_text: The legal text the participant accepted.
        submission_id: Explicit id; generated when omitted.
        created_at: Explicit ISO timestamp; current UTC time when omitted.
        signature_key: Storage key of the signature; derived from the id when omitted.
    """
    record_id = submission_id or _new_submission_id()
    created = created_at or _iso_now()
    payload = normalize_payload(data)
    signature_sha = sha256_hex(signature_png)
    tamper_hash = compute_tamper_hash(record_id, payload, signature_sha, created)

    raw = {
        "id": record_id,
        "createdAt": created,
        "payload": payload,
        "waiver": {
            "version": legal_text.version,
            "acceptedAt": created,
            "textHash": legal_text.text_hash,
        },
        "signature": {
            "key": signature_key or f"signatures/{record_id}.png",
            "sha256": signature_sha,
        },
        "tamperHash": tamper_hash,
    }
    _logger.debug("Built submission record %s", record_id)
    return record_from_dict(raw)


# ── Stored record (de)serialization ─────────────────────────────────


def _require(data: Mapping[str, Any], key: str, path: str, kind: type) -> Any:
    value = data.get(key)
    if not isinstance(value, kind):
        raise RecordError(
            f"Record field {path}{key} must be {kind.__name__}, got {type(value).__name__}",
            field=f"{path}{key}",
        )
    return value


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    return _require(data, key, "", dict)


def record_from_dict(data: Mapping[str, Any]) -> SubmissionRecord:
    """Build a SubmissionRecord from its stored camelCase JSON form.

    Raises:
        RecordError: if a required field is missing or has the wrong type.
    """
    payload = _section(data, "payload")
    waiver = _section(data, "waiver")
    signature = _section(data, "signature")
    documents = data.get("documents")

    photo_key = payload.get("photoKey")
    pdf_key = documents.get("waiverPdfKey") if isinstance(documents, dict) else None

    return SubmissionRecord(
        id=_require(data, "id", "", str),
        created_at=_require(data, "createdAt", "", str),
        payload=WaiverPayload(
            full_name=_require(payload, "fullName", "payload.", str),
            date_of_birth=_require(payload, "dateOfBirth", "payload.", str),
            email=_require(payload, "email", "payload.", str),
            phone=_require(payload, "phone", "payload.", str),
            id_number=_require(payload, "idNumber", "payload.", str),
            emergency_contact_name=_require(payload, "emergencyContactName", "payload.", str),
            emergency_contact_phone=_require(payload, "emergencyContactPhone", "payload.", str),
            emergency_contact_relationship=_require(
                payload, "emergencyContactRelationship", "payload.", str
            ),
            consent_waiver_text=bool(payload.get("consentWaiverText")),
            consent_liability=bool(payload.get("consentLiability")),
            consent_medical=bool(payload.get("consentMedical")),
            consent_privacy=bool(payload.get("consentPrivacy")),
            photo_key=photo_key if isinstance(photo_key, str) and photo_key else None,
        ),
        waiver=WaiverAcceptance(
            version=_require(waiver, "version", "waiver.", str),
            accepted_at=_require(waiver, "acceptedAt", "waiver.", str),
            text_hash=_require(waiver, "textHash", "waiver.", str),
        ),
        signature=SignatureRef(
            key=_require(signature, "key", "signature.", str),
            sha256=_require(signature, "sha256", "signature.", str),
        ),
        tamper_hash=_require(data, "tamperHash", "", str),
        waiver_pdf_key=pdf_key if isinstance(pdf_key, str) and pdf_key else None,
    )


def record_to_dict(record: SubmissionRecord) -> dict[str, Any]:
    """Inverse of :func:`record_from_dict`."""
    p = record.payload
    out: dict[str, Any] = {
        "id": record.id,
        "createdAt": record.created_at,
        "payload": {
            "fullName": p.full_name,
            "dateOfBirth": p.date_of_birth,
            "email": p.email,
            "phone": p.phone,
            "idNumber": p.id_number,
            "emergencyContactName": p.emergency_contact_name,
            "emergencyContactPhone": p.emergency_contact_phone,
            "emergencyContactRelationship": p.emergency_contact_relationship,
            "consentWaiverText": p.consent_waiver_text,
            "consentLiability": p.consent_liability,
            "consentMedical": p.consent_medical,
            "consentPrivacy": p.consent_privacy,
            "photoKey": p.photo_key,
        },
        "waiver": {
            "version": record.waiver.version,
            "acceptedAt": record.waiver.accepted_at,
            "textHash": record.waiver.text_hash,
        },
        "signature": {"key": record.signature.key, "sha256": record.signature.sha256},
        "tamperHash": record.tamper_hash,
    }
    if record.waiver_pdf_key:
        out["documents"] = {"waiverPdfKey": record.waiver_pdf_key}
    return out
