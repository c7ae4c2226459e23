"""Document store: JSON and multipart uploads, and serving files back."""

import math
import uuid

from conftest import PDF_BYTES, PDF_DATA_URL

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _upload(client, **body):
    return client.post("/api/v1/files", json=body)


def test_upload_data_url_and_read_it_back(client):
    resp = _upload(
        client,
        fileCategory="verification_document",
        fileName="licence.pdf",
        mimeType="application/pdf",
        fileData=PDF_DATA_URL,
    )

    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["url"] == f"/api/v1/files/{data['id']}"
    assert data["fileName"] == "licence.pdf"
    assert data["mimeType"] == "application/pdf"
    assert data["size"] == math.ceil(len(PDF_DATA_URL.partition(",")[2]) * 0.75)

    served = client.get(data["url"])
    assert served.status_code == 200
    assert served.content == PDF_BYTES
    assert served.headers["content-type"] == "application/pdf"
    assert served.headers["content-disposition"] == 'inline; filename="licence.pdf"'
    assert served.headers["x-content-type-options"] == "nosniff"
    assert "immutable" in served.headers["cache-control"]


def test_upload_infers_mime_type_from_data_url(client):
    resp = _upload(client, fileCategory="real_work_image", fileData="data:text/plain,hello%20world")

    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["mimeType"] == "text/plain"

    served = client.get(data["url"])
    assert served.content == b"hello world"


def test_upload_requires_category_and_data(client):
    for body in ({"fileCategory": "verification_document"}, {"fileData": PDF_DATA_URL}, {}):
        resp = _upload(client, **body)
        assert resp.status_code == 400
        assert resp.json()["error"]["message"] == "fileCategory and fileData are required"


def test_upload_rejects_unknown_category(client):
    resp = _upload(client, fileCategory="selfie", fileData=PDF_DATA_URL)

    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == (
        "fileCategory must be verification_document or real_work_image"
    )


def test_upload_rejects_non_data_url(client):
    resp = _upload(client, fileCategory="verification_document", fileData="https://example.com/a.pdf")

    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "fileData must be a base64 data URL"


def test_upload_rejects_oversized_payload(client):
    payload = "A" * (4 * 1024 * 1024 // 3 * 4 + 8)

    resp = _upload(
        client,
        fileCategory="real_work_image",
        fileData=f"data:image/jpeg;base64,{payload}",
    )

    assert resp.status_code == 413
    assert resp.json()["error"] == {
        "code": "PAYLOAD_TOO_LARGE",
        "message": "File too large. Maximum size is 4MB",
    }


def test_served_file_name_is_sanitized(client):
    data = _upload(
        client,
        fileCategory="verification_document",
        fileName='my "licence" (final).pdf',
        fileData=PDF_DATA_URL,
    ).json()["data"]

    served = client.get(data["url"])

    assert served.headers["content-disposition"] == 'inline; filename="my _licence_ _final_.pdf"'


def test_corrupt_stored_data_is_a_generic_failure(client):
    data = _upload(
        client, fileCategory="verification_document", fileData="data:application/pdf;base64,abc"
    ).json()["data"]

    served = client.get(data["url"])

    assert served.status_code == 500
    assert served.json()["error"] == {"code": "INTERNAL_ERROR", "message": "Invalid file data"}


def test_get_unknown_file_is_404(client):
    resp = client.get(f"/api/v1/files/{uuid.uuid4()}")

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


def test_get_malformed_file_id_is_400(client):
    resp = client.get("/api/v1/files/not-a-uuid")

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


# ---------------------------------------------------------------------------
# Multipart
# ---------------------------------------------------------------------------

def test_multipart_upload_round_trip(client):
    resp = client.post(
        "/api/v1/files/upload",
        files={"file": ("beach.png", PNG_BYTES, "image/png")},
        data={"fileCategory": "real_work_image"},
    )

    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["mimeType"] == "image/png"
    assert data["fileName"] == "beach.png"

    served = client.get(data["url"])
    assert served.content == PNG_BYTES
    assert served.headers["content-type"] == "image/png"


def test_multipart_falls_back_to_extension(client):
    resp = client.post(
        "/api/v1/files/upload",
        files={"file": ("scan.PDF", PDF_BYTES, "application/octet-stream")},
        data={"fileCategory": "verification_document"},
    )

    assert resp.status_code == 201
    assert resp.json()["data"]["mimeType"] == "application/pdf"


def test_multipart_rejects_unsupported_type(client):
    resp = client.post(
        "/api/v1/files/upload",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        data={"fileCategory": "verification_document"},
    )

    assert resp.status_code == 415
    assert resp.json()["error"]["code"] == "UNSUPPORTED_MEDIA_TYPE"


def test_multipart_rejects_empty_file(client):
    resp = client.post(
        "/api/v1/files/upload",
        files={"file": ("empty.pdf", b"", "application/pdf")},
        data={"fileCategory": "verification_document"},
    )

    assert resp.status_code == 400


def test_multipart_rejects_unknown_category(client):
    resp = client.post(
        "/api/v1/files/upload",
        files={"file": ("beach.png", PNG_BYTES, "image/png")},
        data={"fileCategory": "selfie"},
    )

    assert resp.status_code == 400
