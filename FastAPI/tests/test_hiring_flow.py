"""Full hiring flow over HTTP against an in-memory database."""

from app.repos.application_repo import create as create_application


def test_apply_shortlist_select_and_accounting(api, seed, bearer):
    employer = seed.employer(company_name="Acme")
    rival = seed.employer(company_name="Globex")
    applicant = seed.applicant()
    other_applicant = seed.applicant(first_name="Juan")
    j1 = seed.job_order(employer, positions=1)
    rival_job = seed.job_order(rival, title="Welder")
    rival_application = create_application(seed.db, other_applicant.profile.id, rival_job.id)

    resp = api.post(f"/applicant/jobs/{j1.id}/apply", headers=bearer(applicant))
    assert resp.status_code == 201
    application = resp.json()["data"]
    assert application["status"] == "APPLIED"
    assert application["shortlistedAt"] is None

    resp = api.patch(
        f"/employer/applications/{application['id']}/status",
        json={"status": "shortlisted"},
        headers=bearer(employer),
    )
    assert resp.status_code == 200
    shortlisted = resp.json()["data"]
    assert shortlisted["status"] == "SHORTLISTED"
    assert shortlisted["shortlistedAt"] is not None

    resp = api.patch(
        f"/employer/applications/{application['id']}/status",
        json={"status": "SELECTED", "notes": "Offer sent"},
        headers=bearer(employer),
    )
    selected = resp.json()["data"]
    assert selected["selectedAt"] is not None
    assert selected["shortlistedAt"] == shortlisted["shortlistedAt"]
    assert selected["interviewNotes"] == "Offer sent"

    detail = api.get(f"/employer/job-orders/{j1.id}", headers=bearer(employer)).json()["data"]
    assert detail["fulfillment"]["selectedCount"] == 1
    assert detail["fulfillment"]["fillPercentage"] == 100.0
    assert sum(detail["statusCounts"].values()) == detail["applicantCount"] == len(detail["candidates"]) == 1

    resp = api.patch(
        f"/employer/applications/{rival_application.id}/status",
        json={"status": "SELECTED"},
        headers=bearer(employer),
    )
    assert resp.status_code == 404

    resp = api.post(f"/applicant/jobs/{j1.id}/apply", headers=bearer(applicant))
    assert resp.status_code == 409
    assert "Already applied" in resp.json()["message"]

    mine = api.get("/applicant/applications", headers=bearer(applicant)).json()["data"]
    assert [a["status"] for a in mine] == ["SELECTED"]
    assert mine[0]["employer"] == "Acme"


def test_employer_never_lists_other_employers_applications(api, seed, bearer):
    acme = seed.employer(company_name="Acme")
    globex = seed.employer(company_name="Globex")
    applicant = seed.applicant()
    create_application(seed.db, applicant.profile.id, seed.job_order(acme).id)
    globex_job = seed.job_order(globex)
    create_application(seed.db, applicant.profile.id, globex_job.id)

    candidates = api.get("/employer/candidates", headers=bearer(acme)).json()["data"]
    assert len(candidates) == 1
    assert api.get(f"/employer/job-orders/{globex_job.id}", headers=bearer(acme)).status_code == 404
    stats = api.get("/employer/dashboard-stats", headers=bearer(acme)).json()["data"]
    assert stats["candidateCount"] == 1
    assert stats["activeJobOrders"] == 1


def test_over_hiring_reports_more_than_full(api, seed, bearer):
    employer = seed.employer()
    job = seed.job_order(employer, positions=1)
    for _ in range(2):
        app = create_application(seed.db, seed.applicant().profile.id, job.id)
        resp = api.patch(f"/employer/applications/{app.id}/status", json={"status": "DEPLOYED"}, headers=bearer(employer))
        assert resp.status_code == 200

    admin = seed.admin()
    detail = api.get(f"/admin/job-orders/{job.id}", headers=bearer(admin)).json()["data"]
    assert detail["fulfillment"]["fillPercentage"] == 200.0
    assert detail["fulfillment"]["openPositions"] == 0
    stats = api.get("/admin/stats", headers=bearer(admin)).json()["data"]
    assert stats["deploymentCount"] == 2
    assert stats["applicantCount"] == 2


def test_deployed_application_cannot_be_reopened(api, seed, bearer):
    employer = seed.employer()
    app = create_application(seed.db, seed.applicant().profile.id, seed.job_order(employer).id)
    url = f"/employer/applications/{app.id}/status"
    assert api.patch(url, json={"status": "deployed"}, headers=bearer(employer)).status_code == 200

    resp = api.patch(url, json={"status": "applied"}, headers=bearer(employer))
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Cannot move application from DEPLOYED to APPLIED"}
    seed.db.refresh(app)
    assert app.status == "DEPLOYED"

def test_profile_update_and_completion(api, seed, bearer):
    applicant = seed.applicant()
    assert api.get("/applicant/profile-completion", headers=bearer(applicant)).json()["data"] == 35

    resp = api.patch(
        "/applicant/profile",
        json={"phone": "+63 917 000 0000", "bio": "Caregiver", "skills": ["first aid"]},
        headers=bearer(applicant),
    )
    assert resp.status_code == 200
    profile = resp.json()["data"]
    assert profile["aiGeneratedCv"] == {"summary": "Caregiver", "skills": ["first aid"]}
    assert profile["lastName"] == "Santos"
    assert api.get("/applicant/profile-completion", headers=bearer(applicant)).json()["data"] == 100

    resp = api.patch("/applicant/profile", json={"nationality": None}, headers=bearer(applicant))
    assert resp.json()["data"]["nationality"] is None
    assert api.get("/applicant/profile-completion", headers=bearer(applicant)).json()["data"] == 85


def test_job_order_lifecycle_and_null_guard(api, seed, bearer):
    employer = seed.employer()
    resp = api.post(
        "/employer/job-orders",
        json={"title": "Nurse", "description": "ICU", "location": "Dubai", "positions": 2, "salary": 1800},
        headers=bearer(employer),
    )
    assert resp.status_code == 201
    job_id = resp.json()["data"]["id"]

    resp = api.patch(f"/employer/job-orders/{job_id}", json={"salary": None}, headers=bearer(employer))
    assert resp.json()["data"]["salary"] is None
    assert resp.json()["data"]["title"] == "Nurse"

    resp = api.patch(f"/employer/job-orders/{job_id}", json={"title": None}, headers=bearer(employer))
    assert resp.status_code == 400

    assert api.delete(f"/employer/job-orders/{job_id}", headers=bearer(employer)).status_code == 200
    assert api.get(f"/employer/job-orders/{job_id}", headers=bearer(employer)).status_code == 404


def test_complaints_and_documents(api, seed, bearer):
    applicant = seed.applicant()
    resp = api.post(
        "/applicant/complaints",
        json={"category": "Deployment delay", "description": "Still waiting for visa"},
        headers=bearer(applicant),
    )
    assert resp.status_code == 201
    assert resp.json()["data"]["category"] == "DEPLOYMENT_DELAY"
    resp = api.post("/applicant/complaints", json={"category": "weather"}, headers=bearer(applicant))
    assert resp.json()["data"]["category"] == "OTHER"
    assert resp.json()["data"]["description"] == "No description"

    employer = seed.employer()
    resp = api.post("/employer/documents", json={"name": "Business permit"}, headers=bearer(employer))
    assert resp.status_code == 201
    doc_id = resp.json()["data"]["id"]

    admin = seed.admin()
    complaints = api.get("/admin/complaints", headers=bearer(admin)).json()["data"]
    assert complaints["total"] == 2
    resp = api.patch(
        f"/admin/employers/{employer.employer.id}/verification",
        json={"isVerified": True},
        headers=bearer(admin),
    )
    assert resp.json()["data"]["isVerified"] is True
    profile = api.get("/employer/profile", headers=bearer(employer)).json()["data"]
    assert profile["verificationStatus"] == "approved"
    assert profile["documents"][0]["id"] == doc_id
    assert profile["documents"][0]["status"] == "approved"


def test_deactivated_user_loses_access(api, seed, bearer):
    admin = seed.admin()
    applicant = seed.applicant()
    resp = api.patch(f"/admin/users/{applicant.id}/status", json={"isActive": False}, headers=bearer(admin))
    assert resp.status_code == 200
    assert api.get("/auth/me", headers=bearer(applicant)).status_code == 401
