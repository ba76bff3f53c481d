#!/usr/bin/env python3
"""
API Endpoint Test Script

Walks the portal through FastAPI's TestClient:
1. Company signs up and posts an internship
2. Student signs up, uploads a resume, gets suggestions, applies
3. Company reviews ranked applicants, accepts one, checks analytics

Services are swapped for in-memory ones through dependency_overrides,
so no MongoDB is needed.

Run: python scripts/test_api.py   (or: pytest scripts/test_api.py)
"""
import sys
sys.path.insert(0, '.')

import pytest
from fastapi.testclient import TestClient

from fake_repositories import make_repositories
from talentflow.main import app
from talentflow.services.company_service import CompanyService, get_company_service
from talentflow.services.matching_service import ScoreWeights
from talentflow.services.student_service import StudentService, get_student_service


@pytest.fixture
def client():
    students, internships, companies = make_repositories()
    student_service = StudentService(students, internships, companies)
    company_service = CompanyService(students, internships, companies, weights=ScoreWeights(0.5, 0.3, 0.2))

    app.dependency_overrides[get_student_service] = lambda: student_service
    app.dependency_overrides[get_company_service] = lambda: company_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def _company_with_internship(client):
    company = client.post("/api/companies", json={
        "company_name": "Acme", "email": "hr@acme.io", "industry": "Software"
    }).json()
    internship = client.post(f"/api/companies/{company['id']}/internships", json={
        "role": "Backend Intern", "required_skills": ["Python", "SQL", "Docker", "AWS"]
    }).json()
    return company, internship


def _student(client, name="Asha", skills=None):
    return client.post("/api/students", json={
        "name": name, "email": f"{name.lower()}@uni.edu", "skills": skills or []
    }).json()


def test_create_student_validates_email(client):
    response = client.post("/api/students", json={"name": "Asha", "email": "not-an-email"})
    assert response.status_code == 422


def test_student_profile_round_trip(client):
    student = _student(client, skills=["Python"])
    response = client.get(f"/api/students/{student['id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["skills"] == ["Python"]
    assert body["resume_uploaded"] is False
    assert body["profile_completion"] == 20


def test_unknown_student_is_404(client):
    response = client.get("/api/students/missing")
    assert response.status_code == 404
    assert response.json()["detail"] == "Student not found"


def test_resume_formats(client):
    response = client.get("/api/students/resume/formats")
    assert response.status_code == 200
    extensions = [f["extension"] for f in response.json()["supported_formats"]]
    assert extensions == [".pdf", ".docx", ".txt"]


def test_resume_upload_extracts_skills(client):
    student = _student(client)
    resume = b"Backend developer. Python, SQL and Docker on Linux."
    response = client.post(
        f"/api/students/{student['id']}/resume",
        files={"file": ("cv.txt", resume, "text/plain")}
    )
    assert response.status_code == 200
    body = response.json()
    assert {"python", "sql", "docker", "linux"} <= set(body["extracted_skills"])
    assert body["word_count"] == 8
    assert body["skill_density"] > 0

    skills = client.get(f"/api/students/{student['id']}/skills").json()
    assert "python" in skills["skills"]
    assert skills["total"] == len(skills["skills"])


def test_resume_upload_rejects_unsupported_type(client):
    student = _student(client)
    response = client.post(
        f"/api/students/{student['id']}/resume",
        files={"file": ("cv.png", b"\x89PNG", "image/png")}
    )
    assert response.status_code == 400


def test_suggestions_and_apply(client):
    _, internship = _company_with_internship(client)
    student = _student(client, skills=["python", "sql"])

    suggestions = client.get(f"/api/students/{student['id']}/suggestions").json()
    assert suggestions[0]["id"] == internship["id"]
    assert suggestions[0]["match_percentage"] == 50
    assert suggestions[0]["missing_skills"] == ["Docker", "AWS"]
    assert suggestions[0]["company_industry"] == "Software"

    applied = client.post(
        f"/api/students/{student['id']}/applications",
        json={"internship_id": internship["id"]}
    )
    assert applied.status_code == 201
    assert applied.json() == {"internship_id": internship["id"], "status": "pending", "match_percentage": 50}

    again = client.post(
        f"/api/students/{student['id']}/applications",
        json={"internship_id": internship["id"]}
    )
    assert again.status_code == 400
    assert again.json()["detail"] == "Already applied to this internship"


def test_ranked_applicants_and_status(client):
    company, internship = _company_with_internship(client)
    strong = _student(client, "Asha", ["python", "sql", "docker"])
    weak = _student(client, "Ben", ["react"])
    for student in (weak, strong):
        client.post(f"/api/students/{student['id']}/applications", json={"internship_id": internship["id"]})

    ranked = client.get(f"/api/internships/{internship['id']}/applicants").json()
    assert [a["student_id"] for a in ranked] == [strong["id"], weak["id"]]
    assert [a["ranking_badge"] for a in ranked] == ["top", "strong"]
    assert ranked[0]["final_score"] == 37.5

    response = client.put(
        f"/api/internships/{internship['id']}/applicants/{strong['id']}/status",
        json={"status": "accepted"}
    )
    assert response.status_code == 200

    mine = client.get(f"/api/students/{strong['id']}/applications").json()
    assert mine[0]["application_status"] == "accepted"

    analytics = client.get(f"/api/companies/{company['id']}/analytics").json()
    assert analytics["total_applicants"] == 2
    assert analytics["avg_match"] == 37.5
    assert analytics["highest_score"] == 37.5


def test_invalid_status_is_rejected(client):
    _, internship = _company_with_internship(client)
    student = _student(client)
    client.post(f"/api/students/{student['id']}/applications", json={"internship_id": internship["id"]})
    response = client.put(
        f"/api/internships/{internship['id']}/applicants/{student['id']}/status",
        json={"status": "maybe"}
    )
    assert response.status_code == 422


def test_delete_internship(client):
    company, internship = _company_with_internship(client)
    student = _student(client)
    client.post(f"/api/students/{student['id']}/applications", json={"internship_id": internship["id"]})

    assert client.delete(f"/api/internships/{internship['id']}").status_code == 200
    assert client.get(f"/api/internships/{internship['id']}").status_code == 404
    assert client.get(f"/api/students/{student['id']}/applications").json() == []
    assert client.get(f"/api/companies/{company['id']}/internships").json() == []


def main():
    print("=" * 60)
    print("API ENDPOINT TEST")
    print("=" * 60)
    sys.exit(pytest.main([__file__, "-v"]))


if __name__ == "__main__":
    main()
