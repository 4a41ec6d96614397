"""
Interactive CLI for trying out navigation as a given role.
Type a path to navigate; `role <name>` switches identity, `logout` signs out.
"""

import sys

from surfacegate.dispatcher import build_dispatcher
from surfacegate.models import Identity, NotFound, Redirect, Render
from surfacegate.navigation import Navigator, RedirectLoopError
from surfacegate.roles import is_allowed_role, normalize_role
from surfacegate.session import StaticSession, identity_from_token


def describe(result) -> str:
    if isinstance(result, Render):
        return f"render surface={result.surface_id} sub_route={result.sub_route_path}"
    if isinstance(result, Redirect):
        reason = result.reason.value if result.reason else "redirect"
        return f"redirect -> {result.target_path} ({reason})"
    if isinstance(result, NotFound):
        return f"not found: {result.path}"
    return repr(result)


def identity_from_input(value: str) -> Identity:
    """A role name, or a JWT if it looks like one."""
    value = value.strip()
    if value.count(".") == 2:
        return identity_from_token(value)
    role = normalize_role(value)
    if not role or role == "anonymous":
        return Identity.anonymous()
    if not is_allowed_role(role):
        print(f"[WARN] Unknown role '{role}'; it belongs to no surface.", file=sys.stderr)
    return Identity(id="cli", role=role)


def main():
    print("=== Surface Gate: navigation dispatch shell ===\n")

    session = StaticSession()
    navigator = Navigator(build_dispatcher(session=session))

    # ── Sign in ──────────────────────────────────────────────────────
    try:
        raw = input("Enter a role or token (blank for anonymous, 'quit' to exit): ").strip()
    except (EOFError, KeyboardInterrupt):
        print("\nExiting.")
        return

    if raw.lower() in {"quit", "exit"}:
        print("Goodbye.")
        return

    if raw:
        result = navigator.sign_in(identity_from_input(raw))
        print(f"\n[auth] Signed in as role={session.current_identity().role}")
        print(f"[nav] {describe(result)}")

    # ── REPL ─────────────────────────────────────────────────────────
    while True:
        try:
            line = input("\npath> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            break

        if not line:
            continue
        if line.lower() in {"quit", "exit"}:
            print("Goodbye.")
            break

        if line.lower() == "logout":
            result = navigator.sign_out()
            print(f"[auth] Signed out. [nav] {describe(result)}")
            continue

        if line.lower().startswith("role "):
            result = navigator.sign_in(identity_from_input(line[5:]))
            print(f"[auth] Now role={session.current_identity().role}")
            print(f"[nav] {describe(result)}")
            continue

        try:
            result = navigator.navigate_to(line)
        except RedirectLoopError as e:
            print("\n[ERROR] Navigation did not settle.")
            print("Details:", e)
            continue

        if len(navigator.last_chain) > 1:
            print("[nav] " + " -> ".join(navigator.last_chain))
        print(f"[nav] {describe(result)}")


if __name__ == "__main__":
    main()
