from __future__ import annotations

import logging
from datetime import date
from functools import wraps

from flask import Flask, jsonify, request, session

from ..absences.controller import error_response, server_error
from ..container import Container
from ..core.exceptions import DomainError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session or "company_id" not in session:
                return jsonify({"success": False, "error": "Bitte melde dich an"}), 401
            return view(*args, **kwargs)

        return wrapper

    def _int_arg(name: str, default: int) -> int:
        raw = request.args.get(name)
        if raw in (None, ""):
            return default
        try:
            return int(raw)
        except ValueError:
            raise ValidationError(f"Ungültiger Wert für {name}")

    @app.route("/api/calendar", methods=["GET"], endpoint="team_calendar")
    @login_required
    def team_calendar():
        today = date.today()
        try:
            year = _int_arg("year", today.year)
            month = _int_arg("month", today.month)
            if not 1 <= month <= 12:
                raise ValidationError("Ungültiger Monat")

            viewer = container.employees_repo.get_by_id(str(session["user_id"]))
            result = container.calendar_service.month_view(
                company_id=str(session["company_id"]),
                year=year,
                month=month,
                department_id=request.args.get("department") or None,
                holiday_region=viewer.holiday_region if viewer else None,
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("loading team calendar failed")
            return server_error("Kalender konnte nicht geladen werden")

        return jsonify({"success": True, **result.to_dict()})
