"""
Role-Based Access Control – the single allow/deny decision for a navigation.
"""

from typing import Optional

from surfacegate.config import GENERIC_SIGN_OUT_PATH
from surfacegate.models import (
    Allow,
    Decision,
    DenyReason,
    DenyWithRedirect,
    Identity,
    RouteEntry,
    SubRoute,
)
from surfacegate.surfaces import SurfaceRegistry


def home_for_role(registry: SurfaceRegistry, role: str) -> str:
    """Home of the surface owning *role*, or the generic sign-out page."""
    own = registry.surface_for_role(role)
    return own.home_path if own is not None else GENERIC_SIGN_OUT_PATH


def authorize(
    identity: Identity,
    entry: RouteEntry,
    sub_route: Optional[SubRoute],
    registry: SurfaceRegistry,
) -> Decision:
    """Decide whether *identity* may see *entry* / *sub_route*.

    Rules are checked in order; the first one that fires wins:

    1. open pages outside both surfaces are open to everyone;
    2. public entries are open to everyone except roles owned by the
       other surface, who are sent to their own home;
    3. anonymous identities go to the sign-in page of the requested surface;
    4. roles from another surface (or from no surface) go to their own home;
    5. roles of this surface that may not see the sub-route go to their
       default sub-route on the same surface;
    6. everything else is allowed.
    """
    if entry.surface_id is None:
        return Allow()

    surface = registry.get(entry.surface_id)
    own = registry.surface_for_role(identity.role)

    if entry.public:
        if own is None or own.id == surface.id:
            return Allow()
        return DenyWithRedirect(own.home_path, DenyReason.CROSS_SURFACE)

    if identity.is_anonymous:
        return DenyWithRedirect(surface.sign_in_path, DenyReason.UNAUTHENTICATED)

    if own is None or own.id != surface.id:
        return DenyWithRedirect(
            home_for_role(registry, identity.role), DenyReason.CROSS_SURFACE
        )

    if sub_route is None or identity.role not in sub_route.required_roles:
        return DenyWithRedirect(
            surface.default_sub_routes[identity.role], DenyReason.SUB_ROUTE
        )

    return Allow()
