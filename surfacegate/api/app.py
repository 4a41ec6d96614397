"""
Flask application factory and server entry-point.
"""

import os
import sys
import traceback

from flask import Flask
from flask_cors import CORS

from surfacegate.config import TOKEN_EXPIRY_HOURS, get_env
from surfacegate.dispatcher import build_dispatcher
from surfacegate.api.auth import RequestSession
from surfacegate.api.routes import register_routes


def create_app(dispatcher=None):
    """Build and return a fully configured Flask application."""
    app = Flask(__name__)
    CORS(app)

    if os.getenv("FLASK_ENV") == "production":
        _ = get_env("JWT_SECRET_KEY")  # no dev fallback secret in production

    # ── Build routing tables ─────────────────────────────────────────
    if dispatcher is None:
        try:
            print("[init] Building route table and surface registry...")
            dispatcher = build_dispatcher(session=RequestSession())
            print(f"[init] ✓ {len(dispatcher.route_table)} routes, "
                  f"{len(dispatcher.registry.surfaces())} surfaces")
        except Exception as e:
            print(f"[FATAL] Failed to initialize: {e}", file=sys.stderr)
            traceback.print_exc()
            sys.exit(1)

    # ── Register routes ──────────────────────────────────────────────
    register_routes(app, dispatcher)

    return app


def main():
    """Run the development server."""
    print("=" * 60)
    print("Surface Gate – navigation dispatch API")
    print("=" * 60)

    app = create_app()

    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    debug = os.getenv("FLASK_ENV") == "development"

    print(f"\n[server] Starting Flask API on {host}:{port}")
    print(f"[server] Debug mode: {debug}")
    print(f"[server] Token expiry: {TOKEN_EXPIRY_HOURS} hours")
    print("\nAPI Endpoints:")
    print(f"  - GET  http://{host}:{port}/api/dispatch?path=/dashboard")
    print(f"  - POST http://{host}:{port}/api/dispatch")
    print(f"  - GET  http://{host}:{port}/api/surfaces")
    print(f"  - GET  http://{host}:{port}/api/whoami")
    print(f"  - POST http://{host}:{port}/api/logout")
    print(f"  - GET  http://{host}:{port}/health")
    print("\n" + "=" * 60)

    app.run(host=host, port=port, debug=debug, threaded=True)


if __name__ == "__main__":
    main()
