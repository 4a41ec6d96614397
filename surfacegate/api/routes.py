"""
Flask route handlers for the REST API.
"""

from flask import request, jsonify

from surfacegate.models import NotFound, Redirect, Render


def result_to_json(result):
    if isinstance(result, Render):
        return {
            "result": "render",
            "surface": result.surface_id,
            "sub_route": result.sub_route_path,
        }
    if isinstance(result, Redirect):
        return {
            "result": "redirect",
            "target": result.target_path,
            "reason": result.reason.value if result.reason else None,
        }
    if isinstance(result, NotFound):
        return {"result": "not_found", "path": result.path}
    raise TypeError(f"Unknown dispatch result: {result!r}")


def register_routes(app, dispatcher):
    """Register all API routes on the Flask *app*."""

    # ── Health / info ────────────────────────────────────────────────

    @app.route("/", methods=["GET"])
    def index():
        return jsonify({
            "service": "Surface Gate API",
            "version": "1.0.0",
            "status": "running",
            "endpoints": {
                "dispatch": "/api/dispatch",
                "surfaces": "/api/surfaces",
                "whoami": "/api/whoami",
                "logout": "/api/logout",
                "health": "/health",
            },
        })

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({
            "status": "healthy",
            "checks": {
                "routes": len(dispatcher.route_table),
                "surfaces": [s.id for s in dispatcher.registry.surfaces()],
            },
        }), 200

    # ── Dispatch ─────────────────────────────────────────────────────

    def _dispatch(path):
        identity = dispatcher.current_identity()
        result = dispatcher.dispatch(path, identity)
        status = 404 if isinstance(result, NotFound) else 200
        return jsonify(result_to_json(result)), status

    @app.route("/api/dispatch", methods=["GET"])
    def dispatch_get():
        path = request.args.get("path", "").strip()
        if not path:
            return jsonify({"error": "path is required"}), 400
        return _dispatch(path)

    @app.route("/api/dispatch", methods=["POST"])
    def dispatch_post():
        if not request.is_json:
            return jsonify({"error": "Content-Type must be application/json"}), 400
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Body must be a JSON object"}), 400
        path = str(data.get("path") or "").strip()
        if not path:
            return jsonify({"error": "path is required"}), 400
        return _dispatch(path)

    # ── Identity ─────────────────────────────────────────────────────

    @app.route("/api/whoami", methods=["GET"])
    def whoami():
        identity = dispatcher.current_identity()
        surface = dispatcher.registry.surface_for_role(identity.role)
        return jsonify({
            "id": identity.id,
            "role": identity.role,
            "anonymous": identity.is_anonymous,
            "surface": surface.id if surface else None,
        }), 200

    @app.route("/api/surfaces", methods=["GET"])
    def surfaces():
        identity = dispatcher.current_identity()
        own = dispatcher.registry.surface_for_role(identity.role)

        # Signed-in callers only ever see their own surface's chrome; a
        # signed-in role of no surface gets sign-in paths and nothing else.
        listed = [own] if own is not None else list(dispatcher.registry.surfaces())
        payload = []
        for surface in listed:
            sub_routes = [
                sub.path for sub in surface.sub_routes
                if identity.is_anonymous or identity.role in sub.required_roles
            ]
            payload.append({
                "id": surface.id,
                "sign_in": surface.sign_in_path,
                "logout": surface.logout_path,
                "home": surface.home_path,
                "sub_routes": sub_routes,
            })
        return jsonify({"surfaces": payload}), 200

    @app.route("/api/logout", methods=["POST"])
    def logout():
        identity = dispatcher.current_identity()
        return jsonify({
            "success": True,
            "redirect": dispatcher.logout_path(identity),
        }), 200

    # ── Error handlers ───────────────────────────────────────────────

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Endpoint not found", "message": str(e)}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "Method not allowed", "message": str(e)}), 405

    @app.errorhandler(500)
    def internal_error(e):
        return jsonify({"error": "Internal server error", "message": str(e)}), 500
