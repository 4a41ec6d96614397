"""
Route table – longest-prefix lookup from a navigation path to its surface.
"""

from typing import Dict, Iterable, Optional, Tuple

from surfacegate.models import ConfigurationError, RouteEntry


def normalize_path(path: str) -> str:
    """Drop query/fragment, collapse repeated slashes and strip the trailing one.

    ``.`` and ``..`` segments are resolved the way a browser would, so
    ``/dashboard/../admin`` is looked up as ``/admin``; ``..`` stops at root.
    """
    path = (path or "").split("#", 1)[0].split("?", 1)[0].strip()
    segments = []
    for segment in path.split("/"):
        if not segment or segment == ".":
            continue
        if segment == "..":
            if segments:
                segments.pop()
            continue
        segments.append(segment)
    return "/" + "/".join(segments)


def path_matches(prefix: str, path: str) -> bool:
    """True when *prefix* covers *path* on whole segments."""
    if prefix == "/":
        return True
    return path == prefix or path.startswith(prefix + "/")


def validate_prefix(prefix: str) -> str:
    if not isinstance(prefix, str) or not prefix.startswith("/"):
        raise ConfigurationError(f"Route prefix must start with '/': {prefix!r}")
    if prefix != normalize_path(prefix):
        raise ConfigurationError(f"Route prefix is not in canonical form: {prefix!r}")
    return prefix


class RouteTable:
    """Immutable registry of route entries."""

    def __init__(self, entries: Iterable[RouteEntry]):
        by_prefix: Dict[str, RouteEntry] = {}
        for entry in entries:
            validate_prefix(entry.path_prefix)
            if entry.surface_id is None and not entry.public:
                raise ConfigurationError(
                    f"Route '{entry.path_prefix}' has no surface and is not public"
                )
            if entry.path_prefix in by_prefix:
                raise ConfigurationError(
                    f"Duplicate route prefix '{entry.path_prefix}' "
                    f"({by_prefix[entry.path_prefix].surface_id} / {entry.surface_id})"
                )
            by_prefix[entry.path_prefix] = entry

        # Longest first, so the first hit in resolve() is the winner.
        self._entries: Tuple[RouteEntry, ...] = tuple(
            sorted(by_prefix.values(), key=lambda e: len(e.path_prefix), reverse=True)
        )

    @property
    def entries(self) -> Tuple[RouteEntry, ...]:
        return self._entries

    def resolve(self, path: str) -> Optional[RouteEntry]:
        """Return the entry with the longest matching prefix, or None."""
        path = normalize_path(path)
        for entry in self._entries:
            if path_matches(entry.path_prefix, path):
                return entry
        return None

    def __len__(self):
        return len(self._entries)
