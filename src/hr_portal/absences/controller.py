from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, request, send_from_directory, session

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty
from ..core.constants import CERTIFICATE_PREFIX
from ..core.enums import REVIEWER_ROLES, Role
from ..core.exceptions import (
    AuthorizationError,
    DomainError,
    NotFoundError,
    StateError,
    StorageError,
    ValidationError,
)
from ..container import Container
from ..storage.file_storage import UploadedFile
from .model import Absence, AbsenceRequestData

logger = logging.getLogger(__name__)

_STATUS_CODES = {
    ValidationError: 400,
    AuthorizationError: 403,
    NotFoundError: 404,
    StateError: 409,
    StorageError: 500,
}


def error_response(e: DomainError):
    code = next((c for cls, c in _STATUS_CODES.items() if isinstance(e, cls)), 400)
    return jsonify({"success": False, "error": str(e)}), code


def server_error(message: str):
    return jsonify({"success": False, "error": message}), 500


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session or "company_id" not in session:
                return jsonify({"success": False, "error": "Bitte melde dich an"}), 401
            return view(*args, **kwargs)

        return wrapper

    def reviewer_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session or "company_id" not in session:
                return jsonify({"success": False, "error": "Bitte melde dich an"}), 401
            try:
                role = Role(session.get("role"))
            except ValueError:
                role = None
            if role not in REVIEWER_ROLES:
                return jsonify({"success": False, "error": "Keine Berechtigung"}), 403
            return view(*args, **kwargs)

        return wrapper

    def _load_in_company(absence_id: str) -> Absence:
        record = container.absence_service.get_absence(absence_id)
        if record.company_id != str(session["company_id"]):
            raise NotFoundError("Abwesenheit nicht gefunden")
        return record

    def _parse_date(field: str):
        try:
            return parse_iso_date(request.form.get(field) or "")
        except ValueError:
            raise ValidationError("Ungültiges Datum")

    def _uploaded_file():
        storage = request.files.get("certificate")
        if storage is None or not storage.filename:
            return None
        return UploadedFile(
            filename=storage.filename,
            content=storage.read(),
            content_type=storage.mimetype or "application/octet-stream",
        )

    @app.route("/api/absences/me", methods=["GET"], endpoint="my_absences")
    @login_required
    def my_absences():
        user_id = str(session["user_id"])
        company_id = str(session["company_id"])
        try:
            absences = container.absence_service.list_my_absences(user_id=user_id, company_id=company_id)
            stats = container.absence_service.get_stats(user_id=user_id, company_id=company_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("loading absences failed", extra={"user_id": user_id})
            return server_error("Abwesenheiten konnten nicht geladen werden")

        return jsonify({"success": True, "absences": [a.to_dict() for a in absences], "stats": stats.to_dict()})

    @app.route("/api/absences", methods=["POST"], endpoint="request_absence")
    @login_required
    def request_absence():
        try:
            data = AbsenceRequestData(
                type=request.form.get("type", ""),
                start_date=_parse_date("start_date"),
                end_date=_parse_date("end_date"),
                note=request.form.get("note"),
                destination_country=request.form.get("destination_country"),
            )
            absence_id = container.absence_service.request_absence(
                user_id=str(session["user_id"]),
                company_id=str(session["company_id"]),
                data=data,
                file=_uploaded_file(),
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("absence request failed", extra={"user_id": session.get("user_id")})
            return server_error("Fehler beim Speichern des Antrags")

        return jsonify({"success": True, "id": absence_id}), 201

    @app.route("/api/absences/<absence_id>/cancel", methods=["POST"], endpoint="cancel_absence")
    @login_required
    def cancel_absence(absence_id: str):
        try:
            record = _load_in_company(absence_id)
            if record.user_id != str(session["user_id"]):
                raise AuthorizationError("Nur eigene Anträge können storniert werden")
            container.absence_service.cancel_absence(absence_id=absence_id, current_status=record.status)
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("cancel failed", extra={"absence_id": absence_id})
            return server_error("Fehler beim Stornieren")

        return jsonify({"success": True})

    @app.route("/api/admin/absences/pending", methods=["GET"], endpoint="pending_absences")
    @reviewer_required
    def pending_absences():
        try:
            rows = container.review_service.list_pending(company_id=str(session["company_id"]))
        except Exception:
            logger.exception("loading pending absences failed")
            return server_error("Anträge konnten nicht geladen werden")
        return jsonify({"success": True, "absences": [r.to_dict() for r in rows]})

    @app.route("/api/admin/absences", methods=["GET"], endpoint="all_absences")
    @reviewer_required
    def all_absences():
        try:
            rows = container.review_service.list_all(company_id=str(session["company_id"]))
        except Exception:
            logger.exception("loading absences failed")
            return server_error("Anträge konnten nicht geladen werden")
        return jsonify({"success": True, "absences": [r.to_dict() for r in rows]})

    @app.route("/api/admin/absences/<absence_id>/approve", methods=["POST"], endpoint="approve_absence")
    @reviewer_required
    def approve_absence(absence_id: str):
        try:
            record = _load_in_company(absence_id)
            container.review_service.approve_absence(
                absence_id=absence_id,
                reviewer_id=str(session["user_id"]),
                record=record,
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("approve failed", extra={"absence_id": absence_id})
            return server_error("Fehler beim Genehmigen")

        return jsonify({"success": True})

    @app.route("/api/admin/absences/<absence_id>/reject", methods=["POST"], endpoint="reject_absence")
    @reviewer_required
    def reject_absence(absence_id: str):
        try:
            reason = require_non_empty(request.form.get("reason"), "Grund")
            record = _load_in_company(absence_id)
            container.review_service.reject_absence(
                absence_id=absence_id,
                reviewer_id=str(session["user_id"]),
                record=record,
                reason=reason,
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("reject failed", extra={"absence_id": absence_id})
            return server_error("Fehler beim Ablehnen")

        return jsonify({"success": True})

    def _may_read_upload(path: str) -> bool:
        # Certificates live under absences/<owner_id>/...
        parts = [p for p in path.split("/") if p]
        if len(parts) < 3 or parts[0] != CERTIFICATE_PREFIX or any(p in (".", "..") for p in parts):
            return False

        owner_id = parts[1]
        if owner_id == str(session["user_id"]):
            return True

        try:
            role = Role(session.get("role"))
        except ValueError:
            return False
        if role not in REVIEWER_ROLES:
            return False

        owner = container.employees_repo.get_by_id(owner_id)
        return owner is not None and owner.company_id == str(session["company_id"])

    @app.route("/uploads/<path:path>", methods=["GET"], endpoint="uploaded_file")
    @login_required
    def uploaded_file(path: str):
        try:
            allowed = _may_read_upload(path)
        except Exception:
            logger.exception("upload access check failed", extra={"path": path})
            return server_error("Datei konnte nicht geladen werden")

        if not allowed:
            return jsonify({"success": False, "error": "Datei nicht gefunden"}), 404
        return send_from_directory(container.storage.root, path)
