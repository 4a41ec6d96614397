"""
The portal's fixed routing tables, built once at startup.
"""

from surfacegate.config import (
    ADMIN_LOGIN_PATH,
    ADMIN_PREFIX,
    ADMIN_REGISTER_PATH,
    ADMIN_SURFACE,
    GENERIC_SIGN_OUT_PATH,
    PATIENT_HOME_PATH,
    PATIENT_LOGIN_PATH,
    PATIENT_PREFIXES,
    PATIENT_REGISTER_PATH,
    PATIENT_SURFACE,
)
from surfacegate.models import RouteEntry, SubRoute, Surface
from surfacegate.roles import ADMIN_ROLES, PATIENT_ROLES
from surfacegate.route_table import RouteTable
from surfacegate.surfaces import SurfaceRegistry

# ── Admin surface ────────────────────────────────────────────────────
# system_admin is let into the medical and operations consoles as well.
ADMIN_SUB_ROUTES = (
    SubRoute("/admin/medical", frozenset({"medical_admin", "system_admin"})),
    SubRoute("/admin/operations", frozenset({"ops_admin", "system_admin"})),
    SubRoute("/admin/system", frozenset({"system_admin"})),
    SubRoute("/admin/analytics", ADMIN_ROLES),
    SubRoute("/admin/interactions", ADMIN_ROLES),
    SubRoute("/admin/notifications", ADMIN_ROLES),
    SubRoute("/admin/actions", ADMIN_ROLES),
)

ADMIN_DEFAULTS = {
    "medical_admin": "/admin/medical",
    "ops_admin": "/admin/operations",
    "system_admin": "/admin/system",
}

# ── Patient surface ──────────────────────────────────────────────────
RESTRICTED_PATIENT_PREFIXES = {
    "/doctor": frozenset({"doctor"}),
    "/pharmacist": frozenset({"pharmacist"}),
}

PATIENT_DEFAULTS = {
    "mother": PATIENT_HOME_PATH,
    "nutritionist": PATIENT_HOME_PATH,
    "merchandiser": PATIENT_HOME_PATH,
    "doctor": "/doctor",
    "pharmacist": "/pharmacist",
}


def build_route_table() -> RouteTable:
    entries = [
        RouteEntry(ADMIN_PREFIX, ADMIN_SURFACE),
        RouteEntry(ADMIN_LOGIN_PATH, ADMIN_SURFACE, public=True),
        RouteEntry(ADMIN_REGISTER_PATH, ADMIN_SURFACE, public=True),
        RouteEntry(PATIENT_LOGIN_PATH, PATIENT_SURFACE, public=True),
        RouteEntry(PATIENT_REGISTER_PATH, PATIENT_SURFACE, public=True),
        RouteEntry(GENERIC_SIGN_OUT_PATH, None, public=True),
    ]
    entries += [RouteEntry(prefix, PATIENT_SURFACE) for prefix in PATIENT_PREFIXES]
    return RouteTable(entries)


def build_surface_registry() -> SurfaceRegistry:
    patient_sub_routes = tuple(
        SubRoute(prefix, RESTRICTED_PATIENT_PREFIXES.get(prefix, PATIENT_ROLES))
        for prefix in PATIENT_PREFIXES
    )

    admin = Surface(
        id=ADMIN_SURFACE,
        allowed_roles=ADMIN_ROLES,
        sub_routes=ADMIN_SUB_ROUTES,
        logout_path=ADMIN_LOGIN_PATH,
        sign_in_path=ADMIN_LOGIN_PATH,
        home_path=ADMIN_LOGIN_PATH,
        default_sub_routes=ADMIN_DEFAULTS,
    )
    patient = Surface(
        id=PATIENT_SURFACE,
        allowed_roles=PATIENT_ROLES,
        sub_routes=patient_sub_routes,
        logout_path=PATIENT_LOGIN_PATH,
        sign_in_path=PATIENT_LOGIN_PATH,
        home_path=PATIENT_HOME_PATH,
        default_sub_routes=PATIENT_DEFAULTS,
    )
    return SurfaceRegistry([admin, patient])
