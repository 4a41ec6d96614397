"""
Closed role set and normalisation of the many spellings stored upstream.
"""

from typing import Optional

ROLE_ALIASES = {
    "ops_admin": "ops_admin",
    "operations_admin": "ops_admin",
    "operation_admin": "ops_admin",
    "operations": "ops_admin",
    "op_admin": "ops_admin",
    "opsadmin": "ops_admin",
    "ops": "ops_admin",
    "system_admin": "system_admin",
    "systemadmin": "system_admin",
    "sys_admin": "system_admin",
    "sysadmin": "system_admin",
    "admin": "system_admin",
    "medical_admin": "medical_admin",
    "medicaladmin": "medical_admin",
    "med_admin": "medical_admin",
    "medadmin": "medical_admin",
    "mother": "mother",
    "mom": "mother",
    "patient": "mother",
    "user": "mother",
    "doctor": "doctor",
    "pharmacist": "pharmacist",
    "nutritionist": "nutritionist",
    "merchandiser": "merchandiser",
}

PATIENT_ROLES = frozenset({"mother", "doctor", "pharmacist", "nutritionist", "merchandiser"})
ADMIN_ROLES = frozenset({"medical_admin", "ops_admin", "system_admin"})
CANONICAL_ROLES = PATIENT_ROLES | ADMIN_ROLES


def normalize_role(value) -> Optional[str]:
    """Map a raw role string onto its canonical tag.

    Unknown roles come back cleaned but otherwise untouched, so callers can
    tell them apart from ``None`` (no role at all).
    """
    if value is None:
        return None
    raw = str(value).strip().lower()
    if not raw:
        return None
    cleaned = "_".join(raw.replace("-", " ").split())
    return ROLE_ALIASES.get(cleaned, cleaned)


def is_allowed_role(value) -> bool:
    normalized = normalize_role(value)
    return normalized in CANONICAL_ROLES if normalized else False
