"""
Centralised configuration constants and environment helpers.
"""

import os
import sys

from dotenv import load_dotenv

load_dotenv()

# ── Surfaces ─────────────────────────────────────────────────────────
ADMIN_SURFACE = "admin"
PATIENT_SURFACE = "patient"

ANONYMOUS_ROLE = "anonymous"

# ── Path conventions (kept bit-exact for the front end) ──────────────
ADMIN_PREFIX = "/admin"
ADMIN_LOGIN_PATH = "/admin/login"
ADMIN_REGISTER_PATH = "/admin/register"

PATIENT_LOGIN_PATH = "/login"
PATIENT_REGISTER_PATH = "/register"
PATIENT_HOME_PATH = "/dashboard"

PATIENT_PREFIXES = (
    "/dashboard", "/health", "/health-id", "/appointments", "/vaccines",
    "/profile", "/pharmacy", "/community", "/nutrition", "/pregnancy",
    "/translator", "/myths", "/journal", "/donors", "/blood",
    "/notifications", "/doctor", "/pharmacist",
)

# Where a role that belongs to no surface is sent.
GENERIC_SIGN_OUT_PATH = "/signed-out"

# Upper bound on redirects followed for a single navigation.
MAX_REDIRECT_HOPS = 5

# ── API server ───────────────────────────────────────────────────────
SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-secret-key-change-in-production")
TOKEN_EXPIRY_HOURS = 24


def get_env(name: str) -> str:
    """Return an environment variable or exit with an error message."""
    value = os.getenv(name)
    if not value:
        print(f"ERROR: env var {name} is not set", file=sys.stderr)
        sys.exit(1)
    return value
