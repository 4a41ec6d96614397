"""
Surface registry – which roles may see which surface and its sub-routes.

All checks run once, at construction. A registry that builds is safe to
share between threads for the life of the process.
"""

from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from surfacegate.models import ConfigurationError, SubRoute, Surface
from surfacegate.route_table import RouteTable, normalize_path, path_matches, validate_prefix


def _check_surface(surface: Surface) -> None:
    if not surface.allowed_roles:
        raise ConfigurationError(f"Surface '{surface.id}' allows no roles")

    seen = set()
    for sub in surface.sub_routes:
        validate_prefix(sub.path)
        if sub.path in seen:
            raise ConfigurationError(
                f"Surface '{surface.id}' registers sub-route '{sub.path}' twice"
            )
        seen.add(sub.path)

        if not sub.required_roles:
            raise ConfigurationError(
                f"Sub-route '{sub.path}' on surface '{surface.id}' requires no roles"
            )
        extra = set(sub.required_roles) - set(surface.allowed_roles)
        if extra:
            raise ConfigurationError(
                f"Sub-route '{sub.path}' on surface '{surface.id}' requires roles "
                f"outside the surface: {sorted(extra)}"
            )

    by_path = {sub.path: sub for sub in surface.sub_routes}
    for role in surface.allowed_roles:
        target = surface.default_sub_routes.get(role)
        if target is None:
            raise ConfigurationError(
                f"Role '{role}' has no default sub-route on surface '{surface.id}'"
            )
        sub = by_path.get(target)
        if sub is None:
            raise ConfigurationError(
                f"Default sub-route '{target}' for role '{role}' is not registered "
                f"on surface '{surface.id}'"
            )
        if role not in sub.required_roles:
            raise ConfigurationError(
                f"Default sub-route '{target}' is not viewable by role '{role}'"
            )

    foreign = set(surface.default_sub_routes) - set(surface.allowed_roles)
    if foreign:
        raise ConfigurationError(
            f"Surface '{surface.id}' declares defaults for foreign roles: {sorted(foreign)}"
        )


class SurfaceRegistry:
    """Immutable registry of surfaces keyed by id."""

    def __init__(self, surfaces: Iterable[Surface]):
        by_id: Dict[str, Surface] = {}
        by_role: Dict[str, Surface] = {}

        for surface in surfaces:
            if surface.id in by_id:
                raise ConfigurationError(f"Duplicate surface id '{surface.id}'")
            _check_surface(surface)

            for role in surface.allowed_roles:
                owner = by_role.get(role)
                if owner is not None:
                    raise ConfigurationError(
                        f"Role '{role}' is allowed on both '{owner.id}' and '{surface.id}'"
                    )
                by_role[role] = surface
            by_id[surface.id] = surface

        self._by_id: Mapping[str, Surface] = MappingProxyType(by_id)
        self._by_role: Mapping[str, Surface] = MappingProxyType(by_role)
        self._sorted_sub_routes: Mapping[str, Tuple[SubRoute, ...]] = MappingProxyType({
            sid: tuple(sorted(s.sub_routes, key=lambda r: len(r.path), reverse=True))
            for sid, s in by_id.items()
        })

    def get(self, surface_id: str) -> Surface:
        try:
            return self._by_id[surface_id]
        except KeyError:
            raise KeyError(f"Unknown surface: {surface_id}") from None

    def surfaces(self) -> Tuple[Surface, ...]:
        return tuple(self._by_id.values())

    def sub_route_for(self, surface_id: str, path: str) -> Optional[SubRoute]:
        """Longest registered sub-route covering *path*, or None."""
        path = normalize_path(path)
        for sub in self._sorted_sub_routes.get(surface_id, ()):
            if path_matches(sub.path, path):
                return sub
        return None

    def surface_for_role(self, role: Optional[str]) -> Optional[Surface]:
        if role is None:
            return None
        return self._by_role.get(role)

    def validate_routes(self, route_table: RouteTable) -> None:
        """Check that every path a surface hands out stays inside that surface.

        Raises ConfigurationError on the first route entry that names an
        unknown surface, or on a sub-route, logout, sign-in or home path
        that the route table maps to a different surface.
        """
        for entry in route_table.entries:
            if entry.surface_id is not None and entry.surface_id not in self._by_id:
                raise ConfigurationError(
                    f"Route '{entry.path_prefix}' points at unknown surface '{entry.surface_id}'"
                )

        for surface in self._by_id.values():
            owned = [("sub-route", sub.path) for sub in surface.sub_routes]
            owned += [
                ("logout path", surface.logout_path),
                ("sign-in path", surface.sign_in_path),
                ("home path", surface.home_path),
            ]
            for label, path in owned:
                entry = route_table.resolve(path)
                if entry is None or entry.surface_id != surface.id:
                    where = entry.surface_id if entry else "no route"
                    raise ConfigurationError(
                        f"{label.capitalize()} '{path}' of surface '{surface.id}' "
                        f"resolves to {where}"
                    )
