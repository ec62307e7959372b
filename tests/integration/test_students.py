"""Integration tests: Students endpoints."""

import uuid

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_add_student_anonymous(async_client: AsyncClient, school: dict, klass: dict):
    resp = await async_client.post(
        "/students/addStudent",
        json={"studentName": "Grace Hopper", "studentClass": klass["id"], "studentSchool": school["id"]},
    )
    assert resp.status_code == 201
    student = resp.json()["student"]
    assert student["studentName"] == "Grace Hopper"
    assert student["studentClass"] == klass["id"]
    assert student["studentSchool"] == school["id"]


@pytest.mark.asyncio
async def test_add_student_with_bad_token_rejected(async_client: AsyncClient, school: dict, klass: dict):
    resp = await async_client.post(
        "/students/addStudent",
        headers={"Authorization": "Bearer junk"},
        json={"studentName": "Grace", "studentClass": klass["id"], "studentSchool": school["id"]},
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_add_student_validation(async_client: AsyncClient, school: dict):
    resp = await async_client.post(
        "/students/addStudent",
        json={"studentName": "Grace", "studentSchool": school["id"]},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "studentClass is required"}


@pytest.mark.asyncio
async def test_get_student_populates(
    async_client: AsyncClient, member_headers: dict, school: dict, klass: dict, student: dict
):
    resp = await async_client.get(f"/students/getStudent/{student['id']}", headers=member_headers)
    assert resp.status_code == 200
    data = resp.json()["student"]
    assert data["studentClass"]["className"] == klass["className"]
    assert data["studentSchool"]["schoolName"] == school["schoolName"]


@pytest.mark.asyncio
async def test_get_student_not_an_id(async_client: AsyncClient, member_headers: dict):
    resp = await async_client.get("/students/getStudent/not-an-id", headers=member_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "invalid student id"}


@pytest.mark.asyncio
async def test_get_all_students(async_client: AsyncClient, member_headers: dict, student: dict):
    resp = await async_client.get("/students/getAllStudents", headers=member_headers)
    assert resp.status_code == 200
    assert [s["id"] for s in resp.json()["students"]] == [student["id"]]


@pytest.mark.asyncio
async def test_update_student(
    async_client: AsyncClient, admin_headers: dict, student: dict
):
    school = await async_client.post(
        "/schools/addSchool", headers=admin_headers, json={"schoolName": "Other School"}
    )
    new_school = school.json()["school"]
    klass = await async_client.post(
        "/classes/addClass", headers=admin_headers, json={"className": "7C", "school": new_school["id"]}
    )
    new_class = klass.json()["class"]

    resp = await async_client.put(
        f"/students/updateStudent/{student['id']}",
        headers=admin_headers,
        json={"newClass": new_class["id"], "newSchool": new_school["id"]},
    )
    assert resp.status_code == 200
    assert resp.json() == {"message": "student updated"}

    resp = await async_client.get(f"/students/getStudent/{student['id']}", headers=admin_headers)
    data = resp.json()["student"]
    assert data["studentClass"]["id"] == new_class["id"]
    assert data["studentSchool"]["id"] == new_school["id"]


@pytest.mark.asyncio
async def test_update_student_unauthorized(async_client: AsyncClient, member_headers: dict, student: dict):
    resp = await async_client.put(
        f"/students/updateStudent/{student['id']}",
        headers=member_headers,
        json={"newClass": str(uuid.uuid4()), "newSchool": str(uuid.uuid4())},
    )
    assert resp.status_code == 403
    assert resp.json() == {"error": "unauthorized"}


@pytest.mark.asyncio
async def test_update_unknown_student(async_client: AsyncClient, admin_headers: dict):
    resp = await async_client.put(
        f"/students/updateStudent/{uuid.uuid4()}",
        headers=admin_headers,
        json={"newClass": str(uuid.uuid4()), "newSchool": str(uuid.uuid4())},
    )
    assert resp.status_code == 404
    assert resp.json() == {"error": "student not found"}


@pytest.mark.asyncio
async def test_delete_student(async_client: AsyncClient, admin_headers: dict, student: dict):
    resp = await async_client.delete(f"/students/deleteStudent/{student['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "student deleted"}

    resp = await async_client.get(f"/students/getStudent/{student['id']}", headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "student not found"}


@pytest.mark.asyncio
async def test_student_with_deleted_class_populates_none(
    async_client: AsyncClient, admin_headers: dict, klass: dict, student: dict
):
    await async_client.delete(f"/classes/deleteClass/{klass['id']}", headers=admin_headers)

    resp = await async_client.get(f"/students/getStudent/{student['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["student"]["studentClass"] is None
