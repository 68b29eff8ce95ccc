from __future__ import annotations

from datetime import date

from ..common.datetime_utils import format_de

_TYPE_LABELS = {
    "vacation": "Urlaubsantrag",
    "sick": "Krankmeldung",
    "sick_child": "Krankmeldung Kind",
    "work_remote_abroad": "Workation-Antrag",
    "business_trip": "Dienstreise",
}


def type_label(absence_type: str) -> str:
    return _TYPE_LABELS.get(str(getattr(absence_type, "value", absence_type)), "Antrag")


def approved_message(absence_type: str, start_date: date) -> str:
    return f"Dein {type_label(absence_type)} vom {format_de(start_date)} wurde genehmigt."


def rejected_message(absence_type: str, start_date: date, reason: str) -> str:
    return f"Dein {type_label(absence_type)} vom {format_de(start_date)} wurde abgelehnt. Grund: {reason}"
