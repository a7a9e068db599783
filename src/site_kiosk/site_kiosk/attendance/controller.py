from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.enums import Direction
from ..core.exceptions import SignRejected, StorageError, ValidationError
from ..container import Container
from ..ppe.catalog import as_dicts, ordered
from ..visits.model import Declarations
from ..workers.model import WorkerProfile

logger = logging.getLogger(__name__)


def _person(w: WorkerProfile) -> dict:
    return {"id": w.id, "name": w.name, "company": w.company, "role": w.role}


def register(app: Flask, container: Container) -> None:
    kiosk = container.kiosk_service

    @app.route("/api/site", methods=["GET"], endpoint="site_info")
    def site_info():
        settings = container.settings_service.get()
        return jsonify(
            {
                "siteName": settings.site_name,
                "ppeItems": as_dicts(),
                "requireInduction": settings.require_induction,
                "requireRAMS": settings.require_rams,
                "requirePPE": ordered(settings.require_ppe),
            }
        )

    @app.route("/api/workers", methods=["GET"], endpoint="workers_list")
    def workers_list():
        """Existing people for the "returning visitor" picker."""
        return jsonify([{**w.to_dict(), "label": w.label} for w in kiosk.workers()])

    def _sign(direction: Direction):
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"success": False, "message": "Expected a JSON object"}), 400

        try:
            profile = WorkerProfile.from_dict({**data, "id": data.get("id") or data.get("existingId") or ""})
            if direction == Direction.IN:
                declarations = Declarations.from_dict(data)
            else:
                declarations = Declarations(notes=str(data.get("notes") or ""))
            result = kiosk.sign(direction, profile, declarations)
        except SignRejected as e:
            body = {"success": False, "message": "Please complete required fields and declarations."}
            return jsonify({**body, **e.result.to_dict()}), 400
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except StorageError:
            logger.exception("Could not record sign %s", direction.value)
            return jsonify({"success": False, "message": "Could not save the record"}), 500

        return (
            jsonify(
                {
                    "success": True,
                    "message": f"Successfully signed {direction.value}.",
                    "worker": result.worker.to_dict(),
                    "event": result.event.to_dict(),
                    "onSite": result.on_site,
                }
            ),
            201,
        )

    @app.route("/api/sign-in", methods=["POST"], endpoint="sign_in")
    def sign_in():
        return _sign(Direction.IN)

    @app.route("/api/sign-out", methods=["POST"], endpoint="sign_out")
    def sign_out():
        return _sign(Direction.OUT)

    @app.route("/api/roster", methods=["GET"], endpoint="roster")
    def roster():
        people = kiosk.on_site(request.args.get("q"))
        return jsonify({"count": len(people), "people": [_person(w) for w in people]})

    @app.route("/api/roll-call", methods=["GET"], endpoint="roll_call")
    def roll_call():
        rc = kiosk.roll_call()
        return jsonify(
            {
                "siteName": rc.site_name,
                "generatedAt": rc.generated_at,
                "count": len(rc.people),
                "people": [{**_person(w), "phone": w.phone, "emergencyContact": w.emergency_contact} for w in rc.people],
            }
        )

    @app.route("/export.csv", methods=["GET"], endpoint="export_csv")
    def export_csv():
        filename, content = kiosk.export_csv()
        return app.response_class(
            content.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
