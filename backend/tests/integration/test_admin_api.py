"""Integration tests for /api/admin and the public CMS read."""

import base64

import pytest

from yardpass.application.services import ADMIN_COOKIE_NAME
from yardpass.content import default_cms

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
PNG_DATA_URL = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()

PROTECTED = [
    ("GET", "/api/admin/passes"),
    ("GET", "/api/admin/cms"),
    ("PUT", "/api/admin/cms"),
    ("POST", "/api/admin/cms/reset"),
    ("POST", "/api/admin/upload"),
]


# ── Session ──────────────────────────────────────────────────────────


@pytest.mark.parametrize(("method", "path"), PROTECTED)
@pytest.mark.asyncio
async def test_protected_routes_require_session(client, method, path):
    response = await client.request(method, path)
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


@pytest.mark.asyncio
async def test_forged_session_cookie_is_rejected(client):
    response = await client.get(
        "/api/admin/passes", headers={"Cookie": f"{ADMIN_COOKIE_NAME}=9999999999.nonce.deadbeef"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_with_wrong_password(client):
    response = await client.post("/api/admin/login", json={"password": "nope"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid password"}
    assert ADMIN_COOKIE_NAME not in response.cookies


@pytest.mark.asyncio
async def test_login_sets_strict_session_cookie(client, settings):
    response = await client.post("/api/admin/login", json={"password": settings.admin_password})

    assert response.status_code == 200
    assert response.json() == {"success": True}
    set_cookie = response.headers["set-cookie"].lower()
    assert set_cookie.startswith(f"{ADMIN_COOKIE_NAME}=")
    assert "httponly" in set_cookie
    assert "samesite=strict" in set_cookie
    assert "max-age=43200" in set_cookie


@pytest.mark.asyncio
async def test_login_without_configured_password(app, client):
    app.state.settings.admin_password = ""
    response = await client.post("/api/admin/login", json={"password": ""})
    assert response.status_code == 500
    assert response.json() == {"error": "Server configuration error"}


@pytest.mark.asyncio
async def test_logout_clears_session(admin_client):
    assert (await admin_client.get("/api/admin/passes")).status_code == 200

    response = await admin_client.delete("/api/admin/login")
    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert (await admin_client.get("/api/admin/passes")).status_code == 401


# ── Passes ───────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_list_passes_returns_every_device(admin_client, client):
    for name in ("First Fan", "Second Fan"):
        client.cookies.clear()
        response = await client.post(
            "/api/passes",
            json={
                "name": name,
                "email": "fan@example.com",
                "phone": "0800",
                "gender": "male",
                "pngDataUrl": PNG_DATA_URL,
            },
        )
        assert response.status_code == 201

    response = await admin_client.get("/api/admin/passes")

    assert response.status_code == 200
    passes = response.json()["passes"]
    assert {p["name"] for p in passes} == {"First Fan", "Second Fan"}
    assert len({p["anonId"] for p in passes}) == 2
    assert passes[0]["createdAt"] >= passes[1]["createdAt"]


# ── CMS ──────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_public_cms_seeds_defaults(client):
    response = await client.get("/api/cms")

    assert response.status_code == 200
    cms = response.json()["cms"]
    assert cms["version"] == 2
    assert cms["updatedAt"] > 0
    assert cms["releases"] == default_cms()["releases"]


@pytest.mark.asyncio
async def test_cms_update_is_visible_publicly(admin_client, client):
    current = (await admin_client.get("/api/admin/cms")).json()["cms"]
    current["visuals"] = [
        {"id": "new-video", "title": "New Video", "kind": "Official Video", "year": "2026", "href": "https://youtu.be/x"}
    ]

    response = await admin_client.put("/api/admin/cms", json={"cms": current})

    assert response.status_code == 200
    saved = response.json()
    assert saved["ok"] is True
    assert saved["cms"]["updatedAt"] > current["updatedAt"]

    public = (await client.get("/api/cms")).json()["cms"]
    assert [v["id"] for v in public["visuals"]] == ["new-video"]


@pytest.mark.asyncio
async def test_cms_update_rejects_invalid_document(admin_client):
    document = default_cms()
    document["releases"] = [{"title": "Missing id"}]

    response = await admin_client.put("/api/admin/cms", json={"cms": document})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid CMS document")


@pytest.mark.asyncio
async def test_cms_update_requires_cms_object(admin_client):
    response = await admin_client.put("/api/admin/cms", json={"document": {}})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_cms_reset_restores_defaults(admin_client):
    await admin_client.put("/api/admin/cms", json={"cms": {"releases": []}})

    response = await admin_client.post("/api/admin/cms/reset")

    assert response.status_code == 200
    assert response.json()["cms"]["releases"] == default_cms()["releases"]


# ── Uploads ──────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_upload_stores_and_serves_image(admin_client, tmp_path):
    response = await admin_client.post(
        "/api/admin/upload", files={"file": ("cover.png", PNG_BYTES, "image/png")}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["type"] == "image/png"
    assert data["size"] == len(PNG_BYTES)
    assert data["url"] == f"/uploads/{data['filename']}"
    assert (tmp_path / "uploads" / data["filename"]).exists()

    served = await admin_client.get(data["url"])
    assert served.status_code == 200
    assert served.content == PNG_BYTES


@pytest.mark.asyncio
async def test_upload_extension_follows_content_type_not_filename(admin_client):
    response = await admin_client.post(
        "/api/admin/upload", files={"file": ("x.html", b"<script>alert(1)</script>", "image/png")}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["filename"].endswith(".png")

    served = await admin_client.get(data["url"])
    assert served.status_code == 200
    assert served.headers["content-type"] == "image/png"


@pytest.mark.asyncio
async def test_upload_rejects_wrong_type(admin_client):
    response = await admin_client.post(
        "/api/admin/upload", files={"file": ("notes.txt", b"hello", "text/plain")}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid file type. Allowed: JPEG, PNG, WebP, GIF"}


@pytest.mark.asyncio
async def test_upload_rejects_oversized_file(admin_client):
    response = await admin_client.post(
        "/api/admin/upload", files={"file": ("big.jpg", b"\xff\xd8\xff" + b"\x00" * (1024 * 1024), "image/jpeg")}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "File too large. Max 1MB"}


@pytest.mark.asyncio
async def test_upload_without_file(admin_client):
    response = await admin_client.post("/api/admin/upload", data={"other": "x"})
    assert response.status_code == 400
    assert response.json() == {"error": "No file provided"}
