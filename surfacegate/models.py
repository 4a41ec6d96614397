"""
Domain dataclasses used across the application.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple, Union

from surfacegate.config import ANONYMOUS_ROLE


class ConfigurationError(ValueError):
    """Raised when the routing tables are ambiguous or unsafe."""


class DenyReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    CROSS_SURFACE = "cross_surface"
    SUB_ROUTE = "sub_route"


@dataclass(frozen=True)
class Identity:
    """The current user as reported by the session provider."""
    id: Optional[str]
    role: str                  # canonical role tag or "anonymous"

    @property
    def is_anonymous(self) -> bool:
        return self.role == ANONYMOUS_ROLE

    @classmethod
    def anonymous(cls) -> "Identity":
        return cls(id=None, role=ANONYMOUS_ROLE)


@dataclass(frozen=True)
class RouteEntry:
    path_prefix: str
    surface_id: Optional[str]  # None only for open pages outside both surfaces
    public: bool = False


@dataclass(frozen=True)
class SubRoute:
    path: str
    required_roles: FrozenSet[str]


@dataclass(frozen=True)
class Surface:
    """An isolated navigation context with its own roles and sub-routes."""
    id: str
    allowed_roles: FrozenSet[str]
    sub_routes: Tuple[SubRoute, ...]
    logout_path: str
    sign_in_path: str
    home_path: str
    default_sub_routes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "allowed_roles", frozenset(self.allowed_roles))
        object.__setattr__(self, "sub_routes", tuple(self.sub_routes))
        object.__setattr__(
            self, "default_sub_routes", MappingProxyType(dict(self.default_sub_routes))
        )


# ── Guard decisions ──────────────────────────────────────────────────

@dataclass(frozen=True)
class Allow:
    pass


@dataclass(frozen=True)
class DenyWithRedirect:
    path: str
    reason: DenyReason


Decision = Union[Allow, DenyWithRedirect]


# ── Dispatch results ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Render:
    surface_id: Optional[str]
    sub_route_path: str


@dataclass(frozen=True)
class Redirect:
    target_path: str
    reason: Optional[DenyReason] = None


@dataclass(frozen=True)
class NotFound:
    path: str


DispatchResult = Union[Render, Redirect, NotFound]
