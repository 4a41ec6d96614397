#!/usr/bin/env python3
"""
Generate development bearer tokens for each portal role.
Usage: python scripts/generate_token.py [role ...]
       python scripts/generate_token.py --secret   (new JWT_SECRET_KEY for .env)
"""

import secrets
import sys

from surfacegate.models import Identity
from surfacegate.roles import CANONICAL_ROLES, is_allowed_role, normalize_role
from surfacegate.session import generate_token


def main(argv):
    if "--secret" in argv:
        print(f"JWT_SECRET_KEY={secrets.token_hex(32)}")
        print("Copy the line above to your .env file")
        return 0

    bad = [r for r in argv if not is_allowed_role(r)]
    if bad:
        print(f"ERROR: unknown role(s): {', '.join(repr(r) for r in bad)}", file=sys.stderr)
        print(f"Known roles: {', '.join(sorted(CANONICAL_ROLES))}", file=sys.stderr)
        return 2

    roles = [normalize_role(r) for r in argv] or sorted(CANONICAL_ROLES)

    print("=" * 70)
    print("Surface Gate development tokens")
    print("=" * 70)
    for i, role in enumerate(roles, 1):
        token = generate_token(Identity(id=f"dev-{i}", role=role))
        print(f"\n-- {role}")
        print(f"Authorization: Bearer {token}")
    print("\n" + "=" * 70)
    print("Tokens are signed with JWT_SECRET_KEY; never use them in production.")
    print("=" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
