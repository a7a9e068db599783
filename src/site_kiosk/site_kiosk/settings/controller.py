from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.validators import as_bool
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import AuthorizationError, StorageError
from .model import SettingsPatch

logger = logging.getLogger(__name__)


def ensure_admin_session() -> None:
    if not session.get("admin"):
        raise AuthorizationError("Admin PIN required")


def _forbidden(e: AuthorizationError):
    return jsonify({"success": False, "message": str(e)}), 403


def register(app: Flask, container: Container) -> None:
    settings_service = container.settings_service
    kiosk = container.kiosk_service

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                ensure_admin_session()
            except AuthorizationError as e:
                return _forbidden(e)
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/admin/login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        data = request.get_json(silent=True) or {}
        pin = data.get("pin") if isinstance(data, dict) else None
        session.pop("admin", None)
        try:
            settings_service.authorize_admin(pin if isinstance(pin, str) else None)
        except AuthorizationError as e:
            logger.warning("Admin PIN rejected")
            return _forbidden(e)
        except StorageError:
            logger.exception("Could not read the admin PIN")
            return jsonify({"success": False, "message": "Settings could not be read"}), 500

        session["admin"] = True
        logger.info("Admin view opened")
        return jsonify({"success": True})

    @app.route("/api/admin/logout", methods=["POST"], endpoint="admin_logout")
    def admin_logout():
        session.pop("admin", None)
        return jsonify({"success": True})

    @app.route("/api/admin/visits", methods=["GET"], endpoint="admin_visits")
    @admin_required
    def admin_visits():
        try:
            limit = int(request.args.get("limit", DEFAULT_HISTORY_LIMIT))
        except ValueError:
            limit = DEFAULT_HISTORY_LIMIT
        rows = kiosk.history(limit)
        return jsonify({"total": kiosk.visit_count(), "rows": [r.to_dict() for r in rows]})

    @app.route("/api/admin/settings", methods=["GET"], endpoint="admin_settings")
    @admin_required
    def admin_settings():
        return jsonify(settings_service.get().to_dict())

    @app.route("/api/admin/settings", methods=["PATCH"], endpoint="admin_settings_update")
    @admin_required
    def admin_settings_update():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"success": False, "message": "Expected a JSON object"}), 400

        patch = SettingsPatch.from_dict(data)
        if patch.is_empty():
            return jsonify({"success": False, "message": "No recognised settings in request"}), 400

        try:
            updated = settings_service.update(patch)
        except StorageError:
            logger.exception("Could not save settings")
            return jsonify({"success": False, "message": "Could not save settings"}), 500
        return jsonify(updated.to_dict())

    @app.route("/api/admin/reset", methods=["POST"], endpoint="admin_reset")
    @admin_required
    def admin_reset():
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict) or not as_bool(data.get("confirm")):
            return jsonify({"success": False, "message": "Reset must be confirmed"}), 400

        try:
            kiosk.reset_all()
        except StorageError:
            logger.exception("Could not reset data")
            return jsonify({"success": False, "message": "Could not reset data"}), 500
        return jsonify({"success": True})
