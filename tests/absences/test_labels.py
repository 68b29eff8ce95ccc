from __future__ import annotations

from datetime import date

from hr_portal.absences.labels import approved_message, rejected_message, type_label
from hr_portal.core.enums import AbsenceType


def test_type_labels():
    assert type_label(AbsenceType.VACATION) == "Urlaubsantrag"
    assert type_label("sick_child") == "Krankmeldung Kind"
    assert type_label("work_remote_abroad") == "Workation-Antrag"
    assert type_label("something_else") == "Antrag"


def test_messages_use_german_date():
    assert approved_message("vacation", date(2024, 6, 3)) == "Dein Urlaubsantrag vom 03.06.2024 wurde genehmigt."
    assert (
        rejected_message("business_trip", date(2024, 6, 3), "Projektphase")
        == "Dein Dienstreise vom 03.06.2024 wurde abgelehnt. Grund: Projektphase"
    )
