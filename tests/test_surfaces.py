"""
Unit tests for the surface registry and its construction-time checks.
"""

import pytest

from surfacegate.models import ConfigurationError, RouteEntry, SubRoute, Surface
from surfacegate.route_table import RouteTable
from surfacegate.surfaces import SurfaceRegistry
from surfacegate.tables import build_route_table, build_surface_registry


# ── Helpers ──────────────────────────────────────────────────────────

def make_surface(**overrides):
    fields = dict(
        id="staff",
        allowed_roles={"clerk", "manager"},
        sub_routes=(
            SubRoute("/staff", frozenset({"clerk", "manager"})),
            SubRoute("/staff/books", frozenset({"manager"})),
        ),
        logout_path="/staff/login",
        sign_in_path="/staff/login",
        home_path="/staff",
        default_sub_routes={"clerk": "/staff", "manager": "/staff/books"},
    )
    fields.update(overrides)
    return Surface(**fields)


# ── Tests: construction checks ───────────────────────────────────────

def test_valid_registry_builds():
    registry = SurfaceRegistry([make_surface()])
    assert registry.get("staff").id == "staff"


def test_required_roles_must_be_subset_of_allowed():
    bad = make_surface(sub_routes=(
        SubRoute("/staff", frozenset({"clerk", "manager"})),
        SubRoute("/staff/books", frozenset({"manager", "auditor"})),
    ))
    with pytest.raises(ConfigurationError, match="outside the surface"):
        SurfaceRegistry([bad])


def test_roles_may_not_belong_to_two_surfaces():
    other = make_surface(
        id="back-office",
        allowed_roles={"manager"},
        sub_routes=(SubRoute("/office", frozenset({"manager"})),),
        logout_path="/office",
        sign_in_path="/office",
        home_path="/office",
        default_sub_routes={"manager": "/office"},
    )
    with pytest.raises(ConfigurationError, match="allowed on both"):
        SurfaceRegistry([make_surface(), other])


def test_duplicate_surface_id_rejected():
    with pytest.raises(ConfigurationError, match="Duplicate surface id"):
        SurfaceRegistry([make_surface(), make_surface()])


def test_duplicate_sub_route_rejected():
    bad = make_surface(sub_routes=(
        SubRoute("/staff", frozenset({"clerk", "manager"})),
        SubRoute("/staff", frozenset({"manager"})),
    ))
    with pytest.raises(ConfigurationError, match="twice"):
        SurfaceRegistry([bad])


def test_every_role_needs_a_viewable_default():
    with pytest.raises(ConfigurationError, match="no default sub-route"):
        SurfaceRegistry([make_surface(default_sub_routes={"clerk": "/staff"})])

    with pytest.raises(ConfigurationError, match="not viewable"):
        SurfaceRegistry([make_surface(
            default_sub_routes={"clerk": "/staff/books", "manager": "/staff"},
        )])

    with pytest.raises(ConfigurationError, match="not registered"):
        SurfaceRegistry([make_surface(
            default_sub_routes={"clerk": "/nowhere", "manager": "/staff"},
        )])


def test_surface_is_immutable():
    surface = make_surface()
    with pytest.raises(Exception):
        surface.logout_path = "/elsewhere"
    with pytest.raises(TypeError):
        surface.default_sub_routes["clerk"] = "/staff/books"
    assert isinstance(surface.allowed_roles, frozenset)


# ── Tests: lookups ───────────────────────────────────────────────────

def test_sub_route_for_longest_prefix():
    registry = SurfaceRegistry([make_surface()])
    assert registry.sub_route_for("staff", "/staff/books/42").path == "/staff/books"
    assert registry.sub_route_for("staff", "/staff/rota").path == "/staff"
    assert registry.sub_route_for("staff", "/other") is None
    assert registry.sub_route_for("missing", "/staff") is None


def test_get_unknown_surface_raises_key_error():
    registry = SurfaceRegistry([make_surface()])
    with pytest.raises(KeyError, match="Unknown surface"):
        registry.get("nope")


def test_surface_for_role():
    registry = build_surface_registry()
    assert registry.surface_for_role("mother").id == "patient"
    assert registry.surface_for_role("ops_admin").id == "admin"
    assert registry.surface_for_role("nurse") is None
    assert registry.surface_for_role("anonymous") is None
    assert registry.surface_for_role(None) is None


# ── Tests: cross-check with the route table ──────────────────────────

def test_default_tables_are_consistent():
    build_surface_registry().validate_routes(build_route_table())


def test_logout_path_on_other_surface_rejected():
    table = RouteTable([
        RouteEntry("/staff", "staff"),
        RouteEntry("/staff/login", "staff", public=True),
        RouteEntry("/login", "public-site", public=True),
    ])
    registry = SurfaceRegistry([make_surface(logout_path="/login")])
    with pytest.raises(ConfigurationError, match="unknown surface"):
        registry.validate_routes(table)

    table = RouteTable([
        RouteEntry("/staff", "staff"),
        RouteEntry("/staff/login", "staff", public=True),
    ])
    with pytest.raises(ConfigurationError, match="Logout path '/login'"):
        registry.validate_routes(table)


def test_admin_and_patient_logout_paths():
    registry = build_surface_registry()
    assert registry.get("admin").logout_path == "/admin/login"
    assert registry.get("patient").logout_path == "/login"
