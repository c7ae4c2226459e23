"""Approve/reject decisions, the verification-document gate and vendor publishing."""

from sqlalchemy import text

from conftest import ADMIN_ID, VENDOR_ID


def _decide(client, app_id, status, headers):
    return client.post(
        f"/api/v1/applications/{app_id}/decision", json={"status": status}, headers=headers
    )


def _vendors(client):
    resp = client.get("/api/v1/vendors")
    assert resp.status_code == 200
    return resp.json()["data"]


def _status(client, app_id, admin_auth):
    return client.get(f"/api/v1/applications/{app_id}", headers=admin_auth).json()["data"]["status"]


# ---------------------------------------------------------------------------
# Gate
# ---------------------------------------------------------------------------

def test_approve_without_document_is_refused_and_nothing_changes(client, submit, admin_auth):
    app_id = submit(businessName="Coral Bay Villas", vendorCategory="Venues", categorySpecific=None)

    resp = _decide(client, app_id, "Approved", admin_auth)

    assert resp.status_code == 422
    assert resp.json()["error"] == {
        "code": "VERIFICATION_DOCUMENT_REQUIRED",
        "message": "Cannot approve without a verification document",
    }
    assert _status(client, app_id, admin_auth) == "Pending"
    assert _vendors(client) == []
    audit = client.get(f"/api/v1/applications/{app_id}/audit", headers=admin_auth).json()["data"]
    assert [e["action"] for e in audit] == ["application.submitted"]


def test_blank_document_url_counts_as_missing(client, submit, admin_auth):
    app_id = submit(verificationDocumentUrl="   ")

    assert _decide(client, app_id, "Approved", admin_auth).status_code == 422


def test_verification_flag_does_not_satisfy_gate(client, submit, admin_auth):
    app_id = submit()
    client.put(
        f"/api/v1/applications/{app_id}/verification",
        json={"verificationDocumentUploaded": True, "verificationComplete": True},
        headers=admin_auth,
    )

    assert _decide(client, app_id, "Approved", admin_auth).status_code == 422
    assert _vendors(client) == []


def test_approve_with_document_publishes_vendor(client, submit, upload_document, admin_auth):
    doc_url = upload_document()
    app_id = submit(businessName="Sunset Dhow Cruises", verificationDocumentUrl=doc_url)

    resp = _decide(client, app_id, "Approved", admin_auth)

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["application"]["status"] == "Approved"
    assert data["application"]["approvedAt"] is not None
    vendor = data["vendor"]
    assert vendor["id"] == app_id
    assert vendor["name"] == "Sunset Dhow Cruises"
    assert vendor["rating"] == 0.0
    assert vendor["priceRange"] == "From $1,200"
    assert vendor["imageUrl"] == "/api/v1/files/11111111-1111-1111-1111-111111111111"
    assert vendor["category"] == "Boat & Dhow Cruises"
    assert vendor["location"] == "Lamu, Kenya"

    listed = _vendors(client)
    assert [(v["name"], v["rating"]) for v in listed] == [("Sunset Dhow Cruises", 0.0)]


def test_approval_is_audited(client, submit, upload_document, admin_auth):
    app_id = submit(verificationDocumentUrl=upload_document())
    _decide(client, app_id, "Approved", admin_auth)

    audit = client.get(f"/api/v1/applications/{app_id}/audit", headers=admin_auth).json()["data"]
    approved = next(e for e in audit if e["action"] == "application.approved")
    assert approved["userId"] == ADMIN_ID
    assert approved["oldValue"] == {"status": "Pending"}
    assert approved["newValue"] == {"status": "Approved", "vendorPublished": True}


# ---------------------------------------------------------------------------
# Re-approval and amendments
# ---------------------------------------------------------------------------

def test_reapproval_converges_on_one_vendor(client, submit, upload_document, admin_auth):
    app_id = submit(verificationDocumentUrl=upload_document())

    first = _decide(client, app_id, "Approved", admin_auth).json()["data"]["vendor"]
    second = _decide(client, app_id, "Approved", admin_auth).json()["data"]["vendor"]

    listed = _vendors(client)
    assert len(listed) == 1
    for key in ("id", "name", "category", "description", "imageUrl", "priceRange", "location"):
        assert first[key] == second[key]


def test_reapproval_after_amend_updates_vendor(
    client, submit, upload_document, admin_auth, vendor_auth
):
    app_id = submit(verificationDocumentUrl=upload_document())
    _decide(client, app_id, "Approved", admin_auth)

    client.patch(
        f"/api/v1/applications/{app_id}",
        json={"businessDescription": "Refitted dhows, now with a chef on board."},
        headers=vendor_auth,
    )
    assert _vendors(client)[0]["description"].startswith("Traditional dhow cruises")

    resp = _decide(client, app_id, "Approved", admin_auth)

    assert resp.status_code == 200
    listed = _vendors(client)
    assert len(listed) == 1
    assert listed[0]["description"] == "Refitted dhows, now with a chef on board."


def test_reapproval_keeps_rating(client, engine, submit, upload_document, admin_auth):
    app_id = submit(verificationDocumentUrl=upload_document())
    _decide(client, app_id, "Approved", admin_auth)

    async def _rate(engine):
        async with engine.begin() as conn:
            await conn.execute(
                text("UPDATE vendors SET rating = 4.5 WHERE id = :id"), {"id": app_id}
            )

    client.portal.call(_rate, engine)

    resp = _decide(client, app_id, "Approved", admin_auth)

    assert resp.json()["data"]["vendor"]["rating"] == 4.5
    assert _vendors(client)[0]["rating"] == 4.5


# ---------------------------------------------------------------------------
# Reject and status monotonicity
# ---------------------------------------------------------------------------

def test_reject_without_document_succeeds(client, submit, admin_auth):
    app_id = submit()

    resp = _decide(client, app_id, "Rejected", admin_auth)

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["application"]["status"] == "Rejected"
    assert data["application"]["approvedAt"] is None
    assert data["vendor"] is None
    assert _vendors(client) == []


def test_rejecting_twice_is_a_no_op(client, submit, admin_auth):
    app_id = submit()
    _decide(client, app_id, "Rejected", admin_auth)

    assert _decide(client, app_id, "Rejected", admin_auth).status_code == 200
    assert _status(client, app_id, admin_auth) == "Rejected"


def test_approved_cannot_be_rejected(client, submit, upload_document, admin_auth):
    app_id = submit(verificationDocumentUrl=upload_document())
    _decide(client, app_id, "Approved", admin_auth)

    resp = _decide(client, app_id, "Rejected", admin_auth)

    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "CONFLICT"
    assert _status(client, app_id, admin_auth) == "Approved"
    assert len(_vendors(client)) == 1


def test_rejected_cannot_be_approved(client, submit, upload_document, admin_auth):
    app_id = submit(verificationDocumentUrl=upload_document())
    _decide(client, app_id, "Rejected", admin_auth)

    resp = _decide(client, app_id, "Approved", admin_auth)

    assert resp.status_code == 409
    assert _status(client, app_id, admin_auth) == "Rejected"
    assert _vendors(client) == []


def test_pending_is_not_a_decision(client, submit, admin_auth):
    app_id = submit()

    resp = _decide(client, app_id, "Pending", admin_auth)

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_decision_on_unknown_application_is_404(client, admin_auth):
    assert _decide(client, "missing", "Rejected", admin_auth).status_code == 404


# ---------------------------------------------------------------------------
# Authorization
# ---------------------------------------------------------------------------

def test_non_admin_cannot_decide(client, submit, upload_document, vendor_auth, admin_auth):
    app_id = submit(verificationDocumentUrl=upload_document())

    assert _decide(client, app_id, "Approved", vendor_auth).status_code == 403
    assert _decide(client, app_id, "Approved", {}).status_code == 401

    assert _status(client, app_id, admin_auth) == "Pending"
    assert _vendors(client) == []


# ---------------------------------------------------------------------------
# Verification metadata
# ---------------------------------------------------------------------------

def test_verification_update_never_moves_status(client, submit, upload_document, admin_auth):
    app_id = submit(verificationDocumentUrl=upload_document())

    resp = client.put(
        f"/api/v1/applications/{app_id}/verification",
        json={
            "verificationDocumentUploaded": True,
            "verifiedBy": "ops@amari.example",
            "dateVerified": "2026-01-05T10:00:00Z",
            "verificationComplete": True,
            "adminNotes": "Licence checked against the county register.",
        },
        headers=admin_auth,
    )

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["status"] == "Pending"
    assert data["verificationDocumentUploaded"] is True
    assert data["verifiedBy"] == "ops@amari.example"
    assert data["dateVerified"].startswith("2026-01-05T10:00:00")
    assert data["verificationComplete"] is True
    assert data["adminNotes"] == "Licence checked against the county register."
    assert _vendors(client) == []


def test_verification_update_skips_null_flags(client, submit, admin_auth):
    app_id = submit()
    client.put(
        f"/api/v1/applications/{app_id}/verification",
        json={"verificationDocumentUploaded": True, "adminNotes": "first pass"},
        headers=admin_auth,
    )

    resp = client.put(
        f"/api/v1/applications/{app_id}/verification",
        json={"verificationDocumentUploaded": None, "adminNotes": None},
        headers=admin_auth,
    )

    data = resp.json()["data"]
    assert data["verificationDocumentUploaded"] is True
    assert data["adminNotes"] is None


def test_verification_update_on_approved_vendor_leaves_directory_alone(
    client, submit, upload_document, admin_auth
):
    app_id = submit(verificationDocumentUrl=upload_document())
    before = _decide(client, app_id, "Approved", admin_auth).json()["data"]["vendor"]

    client.put(
        f"/api/v1/applications/{app_id}/verification",
        json={"verificationComplete": False, "adminNotes": "re-check next year"},
        headers=admin_auth,
    )

    after = _vendors(client)
    assert len(after) == 1
    assert after[0]["name"] == before["name"]
    assert after[0]["approvedAt"] == before["approvedAt"]
    assert _status(client, app_id, admin_auth) == "Approved"


def test_verification_update_requires_admin(client, submit, vendor_auth):
    app_id = submit()

    resp = client.put(
        f"/api/v1/applications/{app_id}/verification",
        json={"verificationComplete": True},
        headers=vendor_auth,
    )

    assert resp.status_code == 403


def test_directory_entry_does_not_expose_owner(client, submit, upload_document, admin_auth):
    app_id = submit(verificationDocumentUrl=upload_document())

    vendor = _decide(client, app_id, "Approved", admin_auth).json()["data"]["vendor"]

    assert vendor["id"] == app_id
    assert VENDOR_ID not in vendor.values()
