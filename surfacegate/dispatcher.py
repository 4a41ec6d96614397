"""
Dispatcher – turns one navigation event into a render, redirect or not-found.
"""

import sys
from typing import Optional

from surfacegate.config import GENERIC_SIGN_OUT_PATH
from surfacegate.models import (
    Allow,
    DenyReason,
    DispatchResult,
    Identity,
    NotFound,
    Redirect,
    Render,
)
from surfacegate.rbac import authorize
from surfacegate.route_table import RouteTable, normalize_path
from surfacegate.session import StaticSession
from surfacegate.surfaces import SurfaceRegistry
from surfacegate.tables import build_route_table, build_surface_registry


class Dispatcher:
    """Stateless per call; every navigation is evaluated from scratch."""

    def __init__(self, route_table: RouteTable, registry: SurfaceRegistry, session=None):
        registry.validate_routes(route_table)
        self.route_table = route_table
        self.registry = registry
        self.session = session if session is not None else StaticSession()

    def current_identity(self) -> Identity:
        return self.session.current_identity()

    def dispatch(self, path: str, identity: Optional[Identity] = None) -> DispatchResult:
        if identity is None:
            identity = self.current_identity()
        path = normalize_path(path)

        entry = self.route_table.resolve(path)
        if entry is None:
            print(f"[nav] not found: {path} (role={identity.role})", file=sys.stderr)
            return NotFound(path)

        sub_route = None
        if not entry.public:
            sub_route = self.registry.sub_route_for(entry.surface_id, path)
        decision = authorize(identity, entry, sub_route, self.registry)

        if isinstance(decision, Allow):
            if entry.public:
                return Render(entry.surface_id, entry.path_prefix)
            return Render(entry.surface_id, sub_route.path)

        if decision.reason is not DenyReason.UNAUTHENTICATED:
            print(
                f"[nav] {decision.reason.value} denial: role={identity.role} "
                f"path={path} -> {decision.path}",
                file=sys.stderr,
            )
        return Redirect(decision.path, decision.reason)

    def logout_path(self, identity: Optional[Identity] = None) -> str:
        """Logout destination of the identity's own surface."""
        if identity is None:
            identity = self.current_identity()
        surface = self.registry.surface_for_role(identity.role)
        return surface.logout_path if surface is not None else GENERIC_SIGN_OUT_PATH

    def landing_path(self, identity: Optional[Identity] = None) -> str:
        """Where a freshly signed-in identity should start."""
        if identity is None:
            identity = self.current_identity()
        surface = self.registry.surface_for_role(identity.role)
        if surface is None:
            return GENERIC_SIGN_OUT_PATH
        return surface.default_sub_routes[identity.role]


def build_dispatcher(session=None) -> Dispatcher:
    """Dispatcher over the portal's fixed tables."""
    return Dispatcher(build_route_table(), build_surface_registry(), session=session)
