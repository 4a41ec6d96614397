"""
Unit tests for the route table – prefix matching and registration checks.
"""

import pytest

from surfacegate.models import ConfigurationError, RouteEntry
from surfacegate.route_table import RouteTable, normalize_path, path_matches
from surfacegate.tables import build_route_table


# ── Tests: path helpers ──────────────────────────────────────────────

def test_normalize_path_strips_query_fragment_and_slashes():
    assert normalize_path("/admin//system/users/?tab=2#top") == "/admin/system/users"
    assert normalize_path("dashboard") == "/dashboard"
    assert normalize_path("") == "/"
    assert normalize_path(None) == "/"


def test_normalize_path_resolves_dot_segments():
    assert normalize_path("/dashboard/../admin/system") == "/admin/system"
    assert normalize_path("/admin/./medical/") == "/admin/medical"
    assert normalize_path("/../../login") == "/login"
    assert normalize_path("/dashboard/..") == "/"


def test_path_matches_on_whole_segments():
    assert path_matches("/admin", "/admin")
    assert path_matches("/admin", "/admin/login")
    assert not path_matches("/admin", "/administrator")
    assert not path_matches("/health", "/health-id")
    assert path_matches("/", "/anything")


# ── Tests: registration ──────────────────────────────────────────────

def test_duplicate_prefix_rejected_at_registration():
    with pytest.raises(ConfigurationError, match="Duplicate route prefix '/admin'"):
        RouteTable([
            RouteEntry("/admin", "admin"),
            RouteEntry("/admin", "patient"),
        ])


def test_prefix_must_be_canonical():
    with pytest.raises(ConfigurationError, match="must start with"):
        RouteTable([RouteEntry("admin", "admin")])
    with pytest.raises(ConfigurationError, match="canonical form"):
        RouteTable([RouteEntry("/admin/", "admin")])


def test_surface_less_entry_must_be_public():
    with pytest.raises(ConfigurationError, match="no surface and is not public"):
        RouteTable([RouteEntry("/signed-out", None)])


# ── Tests: resolve ───────────────────────────────────────────────────

def test_longest_prefix_wins():
    table = RouteTable([
        RouteEntry("/admin", "admin"),
        RouteEntry("/admin/system", "system"),
    ])
    assert table.resolve("/admin/system/users").path_prefix == "/admin/system"
    assert table.resolve("/admin/medical").path_prefix == "/admin"
    assert table.resolve("/admin").path_prefix == "/admin"


def test_registration_order_does_not_matter():
    table = RouteTable([
        RouteEntry("/admin/system", "system"),
        RouteEntry("/admin", "admin"),
    ])
    assert table.resolve("/admin/system/users").surface_id == "system"


def test_unknown_path_is_none():
    table = build_route_table()
    assert table.resolve("/unknown/path") is None
    assert table.resolve("/") is None
    assert table.resolve("/administrator") is None


def test_default_table_public_entries():
    table = build_route_table()
    for path in ("/admin/login", "/admin/register", "/login", "/register"):
        entry = table.resolve(path)
        assert entry.public, path
        assert entry.path_prefix == path

    assert table.resolve("/admin/login").surface_id == "admin"
    assert table.resolve("/login").surface_id == "patient"
    assert not table.resolve("/admin/loginx").public


def test_default_table_surfaces():
    table = build_route_table()
    assert table.resolve("/admin/system/backups").surface_id == "admin"
    assert table.resolve("/health/blood-pressure").surface_id == "patient"
    assert table.resolve("/health-id").path_prefix == "/health-id"
    assert table.resolve("/signed-out").surface_id is None
