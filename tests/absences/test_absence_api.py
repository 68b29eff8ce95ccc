from __future__ import annotations

import io
from datetime import date

from hr_portal.core.enums import AbsenceStatus, Role


def test_requires_session(client):
    resp = client.get("/api/absences/me")
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_my_absences_with_stats(client, login, absences_repo, absence_factory):
    absences_repo.add(absence_factory("x1"))
    absences_repo.add(absence_factory("x2", user_id="hr1"))
    login()

    body = client.get("/api/absences/me").get_json()

    assert body["success"] is True
    assert [a["absence_id"] for a in body["absences"]] == ["x1"]
    assert body["absences"][0]["start_date"] == "2024-06-03"
    assert body["stats"]["vacation_total"] == 30


def test_request_sick_note_with_certificate(client, login, absences_repo):
    login()

    resp = client.post(
        "/api/absences",
        data={
            "type": "sick",
            "start_date": "2024-06-03",
            "end_date": "2024-06-04",
            "certificate": (io.BytesIO(b"%PDF-1.4"), "attest.pdf"),
        },
        content_type="multipart/form-data",
    )

    assert resp.status_code == 201
    created = absences_repo.get(resp.get_json()["id"])
    assert created.status == AbsenceStatus.REQUESTED
    assert created.working_days == 2
    assert created.certificate_url.startswith("/uploads/absences/u1/")
    assert created.certificate_url.endswith("_attest.pdf")

    download = client.get(created.certificate_url)
    assert download.status_code == 200
    assert download.data == b"%PDF-1.4"
    download.close()


def test_request_with_invalid_date(client, login, absences_repo):
    login()

    resp = client.post("/api/absences", data={"type": "sick", "start_date": "2024-13-01", "end_date": "2024-06-04"})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Ungültiges Datum"


def test_workation_without_destination_is_rejected(client, login):
    login()

    resp = client.post(
        "/api/absences",
        data={"type": "work_remote_abroad", "start_date": "2024-06-03", "end_date": "2024-06-04"},
    )

    assert resp.status_code == 400
    assert "Zielland" in resp.get_json()["error"]


def test_cancel_own_request(client, login, absences_repo, absence_factory):
    absences_repo.add(absence_factory("x1"))
    login()

    resp = client.post("/api/absences/x1/cancel")

    assert resp.status_code == 200
    assert absences_repo.get("x1").status == AbsenceStatus.CANCELLED


def test_cancel_approved_request_conflicts(client, login, absences_repo, absence_factory):
    absences_repo.add(absence_factory("x1", status=AbsenceStatus.APPROVED))
    login()

    resp = client.post("/api/absences/x1/cancel")

    assert resp.status_code == 409
    assert absences_repo.get("x1").status == AbsenceStatus.APPROVED


def test_cancel_someone_elses_request(client, login, absences_repo, absence_factory):
    absences_repo.add(absence_factory("x1", user_id="hr1"))
    login()

    assert client.post("/api/absences/x1/cancel").status_code == 403


def test_other_company_record_is_not_found(client, login, absences_repo, absence_factory):
    absences_repo.add(absence_factory("x1", company_id="c2"))
    login("hr1", Role.HR_MANAGER)

    assert client.post("/api/admin/absences/x1/approve").status_code == 404


def test_admin_routes_need_reviewer_role(client, login):
    login(role=Role.EMPLOYEE)
    assert client.get("/api/admin/absences/pending").status_code == 403

    login(role=Role.SUPERVISOR)
    assert client.get("/api/admin/absences").status_code == 403


def test_pending_list_for_reviewer(client, login, absences_repo, absence_factory):
    absences_repo.add(absence_factory("x1"))
    absences_repo.add(absence_factory("x2", status=AbsenceStatus.APPROVED))
    login("hr1", Role.HR_MANAGER)

    body = client.get("/api/admin/absences/pending").get_json()

    assert [a["absence_id"] for a in body["absences"]] == ["x1"]
    assert body["absences"][0]["user_name"] == "Anna Schmidt"


def test_approve_via_api(client, login, absences_repo, notifications_repo, absence_factory):
    absences_repo.add(absence_factory("x1"))
    login("adm1", Role.COMPANY_ADMIN)

    resp = client.post("/api/admin/absences/x1/approve")

    assert resp.status_code == 200
    assert absences_repo.get("x1").approved_by == "adm1"
    assert notifications_repo.created[0].title == "Antrag genehmigt"


def test_reject_requires_reason(client, login, absences_repo, absence_factory):
    absences_repo.add(absence_factory("x1"))
    login("hr1", Role.HR_MANAGER)

    resp = client.post("/api/admin/absences/x1/reject", data={"reason": "  "})

    assert resp.status_code == 400
    assert absences_repo.get("x1").status == AbsenceStatus.REQUESTED


def test_reject_via_api(client, login, absences_repo, absence_factory):
    absences_repo.add(absence_factory("x1", start_date=date(2024, 6, 3)))
    login("hr1", Role.GLOBAL_ADMIN)

    resp = client.post("/api/admin/absences/x1/reject", data={"reason": "Urlaubssperre"})

    assert resp.status_code == 200
    assert absences_repo.get("x1").rejected_reason == "Urlaubssperre"


def test_unexpected_error_is_reported_generically(client, login, absences_repo, monkeypatch):
    def broken(**kwargs):
        raise RuntimeError("db gone")

    monkeypatch.setattr(absences_repo, "list_for_company", broken)
    login()

    resp = client.get("/api/absences/me")

    assert resp.status_code == 500
    assert "db gone" not in resp.get_json()["error"]


def _upload_certificate(client, login):
    login()
    resp = client.post(
        "/api/absences",
        data={
            "type": "sick",
            "start_date": "2024-06-03",
            "end_date": "2024-06-03",
            "certificate": (io.BytesIO(b"SECRET-MEDICAL"), "attest.pdf"),
        },
        content_type="multipart/form-data",
    )
    assert resp.status_code == 201
    return resp.get_json()["id"]


def test_certificate_hidden_from_other_company(client, login, absences_repo):
    url = absences_repo.get(_upload_certificate(client, login)).certificate_url
    login("stranger", Role.HR_MANAGER, company_id="other-co")

    resp = client.get(url)

    assert resp.status_code == 404
    assert b"SECRET-MEDICAL" not in resp.data


def test_certificate_hidden_from_colleague(client, login, absences_repo, employees_repo, employee_factory):
    employees_repo.add(employee_factory("u2"))
    url = absences_repo.get(_upload_certificate(client, login)).certificate_url
    login("u2", Role.EMPLOYEE)

    assert client.get(url).status_code == 404


def test_certificate_visible_to_reviewer_of_same_company(client, login, absences_repo):
    url = absences_repo.get(_upload_certificate(client, login)).certificate_url
    login("hr1", Role.HR_MANAGER)

    resp = client.get(url)

    assert resp.status_code == 200
    assert resp.data == b"SECRET-MEDICAL"
    resp.close()


def test_certificate_visible_to_owner(client, login, absences_repo):
    url = absences_repo.get(_upload_certificate(client, login)).certificate_url

    resp = client.get(url)

    assert resp.status_code == 200
    assert resp.data == b"SECRET-MEDICAL"
    resp.close()


def test_certificate_path_cannot_climb_into_another_folder(client, login, absences_repo):
    url = absences_repo.get(_upload_certificate(client, login)).certificate_url
    filename = url.rsplit("/", 1)[1]
    login("u2", Role.EMPLOYEE)

    assert client.get(f"/uploads/absences/u2/../u1/{filename}").status_code == 404
