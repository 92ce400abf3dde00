# ruff: noqa

import io
from datetime import date

from openpyxl import load_workbook


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_list_employees_is_paginated(client):
    body = client.get("/employees", params={"limit": 2}).json()
    assert body["total"] == 5
    assert [e["employee_id"] for e in body["items"]] == ["EMP001", "EMP002"]


def test_create_employee_synthesizes_id(client):
    resp = client.post("/employees", json={"name": "Dana White", "position_id": "3"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["employee_id"] == "EMP006"
    assert body["position"] == "Apprentice"
    assert body["status"] == "Active"


def test_create_employee_duplicate_id_is_conflict(client):
    resp = client.post("/employees", json={"employee_id": "EMP001", "name": "Clone"})
    assert resp.status_code == 409
    assert resp.json()["error"] == "Conflict error"


def test_create_employee_rejects_bad_status(client):
    resp = client.post("/employees", json={"name": "Dana White", "status": "Retired"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation error"


def test_patch_and_get_employee(client):
    resp = client.patch("/employees/EMP004", json={"status": "Active"})
    assert resp.status_code == 200
    assert client.get("/employees/EMP004").json()["status"] == "Active"
    assert client.get("/employees/EMP404").status_code == 404


def test_create_and_update_project(client):
    resp = client.post("/projects", json={"name": "Airport Terminal", "budget": 500000})
    assert resp.status_code == 201
    project_id = resp.json()["project_id"]
    assert project_id == "PROJ-004"
    resp = client.patch(f"/projects/{project_id}", json={"status": "On Hold"})
    assert resp.json()["status"] == "On Hold"


def test_create_assignment_scenario(client):
    resp = client.post(
        "/assignments",
        json={"employee_id": "EMP004", "project_id": "PROJ-003", "assignment_date": "2025-06-16"},
    )
    assert resp.status_code == 201
    assert resp.json() == {
        "assignment_id": 5,
        "employee_id": "EMP004",
        "employee_name": "Robert Wilson",
        "project_id": "PROJ-003",
        "project_name": "Retail Store Chain",
        "assignment_date": "2025-06-16",
        "notes": None,
    }


def test_duplicate_assignment_is_409(client):
    payload = {"employee_id": "EMP001", "project_id": "PROJ-002", "assignment_date": "2025-06-14"}
    resp = client.post("/assignments", json=payload)
    assert resp.status_code == 409
    assert "already assigned" in resp.json()["message"]
    assert client.get("/assignments").json()["total"] == 4


def test_duplicate_assignment_ignored_when_configured(client_factory):
    client = client_factory(duplicate_policy="ignore")
    payload = {"employee_id": "EMP001", "project_id": "PROJ-002", "assignment_date": "2025-06-14"}
    resp = client.post("/assignments", json=payload)
    assert resp.status_code == 201
    assert resp.json()["assignment_id"] == 1
    assert client.get("/assignments").json()["total"] == 4


def test_unknown_employee_is_404_in_strict_mode(client):
    resp = client.post(
        "/assignments",
        json={"employee_id": "EMP999", "project_id": "PROJ-001", "assignment_date": "2025-06-15"},
    )
    assert resp.status_code == 404


def test_unknown_employee_sentinel_in_lenient_mode(client_factory):
    client = client_factory(strict_references=False)
    resp = client.post(
        "/assignments",
        json={"employee_id": "EMP999", "project_id": "PROJ-001", "assignment_date": "2025-06-15"},
    )
    assert resp.status_code == 201
    assert resp.json()["employee_name"] == "Unknown Employee"


def test_missing_assignment_fields_is_400(client):
    resp = client.post("/assignments", json={"employee_id": "EMP001"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Missing required fields: project_id, assignment_date"


def test_list_assignments_filters(client):
    body = client.get("/assignments", params={"project_id": "PROJ-002"}).json()
    assert [a["employee_name"] for a in body["items"]] == ["Lisa Brown", "Sarah Davis"]
    body = client.get("/assignments", params={"start_date": "2025-06-15"}).json()
    assert body["total"] == 0


def test_update_and_delete_assignment(client):
    resp = client.patch("/assignments/1", json={"project_id": "PROJ-003"})
    assert resp.status_code == 200
    assert resp.json()["project_name"] == "Retail Store Chain"
    assert client.patch("/assignments/1", json={"employee_id": "EMP002"}).status_code == 409
    assert client.delete("/assignments/1").json() == {"ok": True}
    assert client.get("/assignments/1").status_code == 404
    assert client.delete("/assignments/1").status_code == 404


def test_week_summary(client):
    body = client.get("/assignments/week", params={"start": "2025-06-09"}).json()
    assert body["week_start"] == "2025-06-09"
    assert body["week_end"] == "2025-06-13"
    # The demo assignments fall on a Saturday, outside the working week.
    assert body["total_assignments"] == 0

    client.post(
        "/assignments",
        json={"employee_id": "EMP001", "project_id": "PROJ-001", "assignment_date": "2025-06-10"},
    )
    body = client.get("/assignments/week", params={"start": "2025-06-11"}).json()
    assert body["total_assignments"] == 1
    assert body["days"]["Tuesday"]["PROJ-001"][0]["employee_name"] == "John Smith"


def test_export_csv(client):
    resp = client.get("/export-projects", params={"format": "csv"})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    today = date.today().isoformat()
    assert resp.headers["content-disposition"] == f'attachment; filename="projects_{today}.csv"'
    rows = resp.text.split("\n")
    assert len(rows) == 4
    assert rows[0].startswith("project_id,name,number,status")
    assert '"123 Main St, Atlanta, GA"' in rows[1]


def test_export_csv_is_default_format(client):
    resp = client.get("/export-assignments")
    assert resp.headers["content-type"].startswith("text/csv")
    assert len(resp.text.split("\n")) == 5


def test_export_json(client):
    body = client.get("/export-employees", params={"format": "json"}).json()
    assert body["success"] is True
    assert body["type"] == "employees"
    assert body["count"] == 5
    assert body["data"][0]["hire_date"] == "2024-01-15"


def test_export_excel(client):
    resp = client.get("/export-assignments", params={"format": "excel"})
    assert resp.status_code == 200
    assert resp.headers["content-disposition"].endswith('.xlsx"')
    ws = load_workbook(io.BytesIO(resp.content)).active
    assert ws.title == "Assignments"
    assert ws.max_row == 5


def test_export_rejects_unknown_type_and_format(client):
    resp = client.get("/export-widgets")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid export type"
    assert client.get("/export-employees", params={"format": "pdf"}).status_code == 400


def test_export_empty_collection_is_empty_body(client_factory):
    client = client_factory(seed_demo_data=False)
    resp = client.get("/export-assignments")
    assert resp.status_code == 200
    assert resp.text == ""


def test_manager_token_guards_writes(client_factory):
    client = client_factory(manager_token="s3cret")
    payload = {"name": "Dana White"}
    assert client.post("/employees", json=payload).status_code == 401
    resp = client.post("/employees", json=payload, headers={"Authorization": "Bearer wrong"})
    assert resp.status_code == 401
    resp = client.post("/employees", json=payload, headers={"Authorization": "Bearer s3cret"})
    assert resp.status_code == 201
    assert client.get("/employees").status_code == 200


def test_database_backend(client_factory, tmp_path):
    client = client_factory(
        storage_backend="database",
        database_url=f"sqlite:///{tmp_path / 'metropower.db'}",
    )
    assert client.get("/employees").json()["total"] == 5
    resp = client.post(
        "/assignments",
        json={"employee_id": "EMP004", "project_id": "PROJ-003", "assignment_date": "2025-06-16"},
    )
    assert resp.status_code == 201
    assert resp.json()["assignment_id"] == 5
    resp = client.post(
        "/assignments",
        json={"employee_id": "EMP004", "project_id": "PROJ-001", "assignment_date": "2025-06-16"},
    )
    assert resp.status_code == 409
    emp = client.post("/employees", json={"name": "Dana White"}).json()
    assert emp["employee_id"].startswith("EMP-")


def test_patch_null_status_is_400_and_leaves_record(client):
    resp = client.patch("/employees/EMP001", json={"status": None})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation error"
    assert client.get("/employees/EMP001").json()["status"] == "Active"
    assert client.patch("/projects/PROJ-001", json={"status": None}).status_code == 400
    assert client.get("/projects/PROJ-001").json()["status"] == "Active"


def test_unassigned_employees_for_date(client):
    # EMP004 is on PTO; everyone else is busy on the demo day.
    assert client.get("/employees/unassigned/2025-06-14").json()["items"] == []
    body = client.get("/employees/unassigned/2025-06-15").json()
    assert [e["name"] for e in body["items"]] == ["John Smith", "Lisa Brown", "Mike Johnson", "Sarah Davis"]
    assert client.get("/employees/unassigned/06-15-2025").status_code == 400


def test_active_projects(client):
    client.patch("/projects/PROJ-002", json={"status": "On Hold"})
    body = client.get("/projects/active").json()
    assert [p["project_id"] for p in body["items"]] == ["PROJ-001", "PROJ-003"]


def test_project_assignments_in_range(client):
    params = {"start_date": "2025-06-14", "end_date": "2025-06-14"}
    body = client.get("/projects/PROJ-002/assignments", params=params).json()
    assert [a["employee_name"] for a in body["items"]] == ["Lisa Brown", "Sarah Davis"]
    params = {"start_date": "2025-06-15", "end_date": "2025-06-30"}
    assert client.get("/projects/PROJ-002/assignments", params=params).json()["total"] == 0


def test_project_assignments_require_range_and_known_project(client):
    resp = client.get("/projects/PROJ-002/assignments", params={"start_date": "2025-06-14"})
    assert resp.status_code == 400
    assert "end_date" in resp.json()["message"]
    params = {"start_date": "2025-06-14", "end_date": "2025-06-14"}
    assert client.get("/projects/PROJ-404/assignments", params=params).status_code == 404
