"""
User endpoint tests — creation with profile and placeholder image, image
upload, profile image reset and the cascading user delete.
"""
import pytest
from httpx import AsyncClient

from social_api.config import settings


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _create_user(client: AsyncClient, suffix: str) -> dict:
    resp = await client.post("/users", json={
        "username": f"user_{suffix}",
        "email": f"user_{suffix}@example.com",
        "name": f"User {suffix}",
        "profile": {"biography": f"Bio of {suffix}"},
    })
    assert resp.status_code == 201
    return resp.json()


async def _upload_user(client: AsyncClient, suffix: str) -> dict:
    resp = await client.post(
        "/users/upload",
        data={"username": f"up_{suffix}", "email": f"up_{suffix}@example.com", "biography": "Uploaded"},
        files={"image": ("avatar.png", b"\x89PNG fake image bytes", "image/png")},
    )
    assert resp.status_code == 201
    return resp.json()


# ---------------------------------------------------------------------------
# Create user
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_user_gets_placeholder_image(async_client: AsyncClient):
    """A new user gets a profile whose only image is the placeholder."""
    user = await _create_user(async_client, "placeholder")
    assert user["username"] == "user_placeholder"
    assert "idUser" in user
    assert "createdAt" in user

    profile = user["profile"]
    assert profile["idUser"] == user["idUser"]
    assert profile["biography"] == "Bio of placeholder"
    assert profile["imageUrl"] == settings.DEFAULT_PROFILE_IMAGE_URL
    assert profile["imageThumbnailUrl"] == settings.DEFAULT_PROFILE_IMAGE_URL


@pytest.mark.asyncio
async def test_create_user_without_profile_returns_400(async_client: AsyncClient):
    resp = await async_client.post("/users", json={
        "username": "noprofile",
        "email": "noprofile@example.com",
    })
    assert resp.status_code == 400
    assert resp.json()["detail"] == "A user must be created with a profile"


@pytest.mark.asyncio
async def test_create_user_missing_email_returns_422(async_client: AsyncClient):
    resp = await async_client.post("/users", json={"username": "noemail", "profile": {}})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_username_length_matches_column(async_client: AsyncClient):
    ok = await async_client.post("/users", json={
        "username": "a" * 100, "email": "longname@example.com", "profile": {},
    })
    assert ok.status_code == 201

    too_long = await async_client.post("/users", json={
        "username": "b" * 101, "email": "longer@example.com", "profile": {},
    })
    assert too_long.status_code == 422


@pytest.mark.asyncio
async def test_duplicate_username_returns_409(async_client: AsyncClient):
    await _create_user(async_client, "dup")
    resp = await async_client.post("/users", json={
        "username": "user_dup",
        "email": "other@example.com",
        "profile": {},
    })
    assert resp.status_code == 409


# ---------------------------------------------------------------------------
# Create user with uploaded image
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_user_with_uploaded_image(async_client: AsyncClient, upload_dir):
    user = await _upload_user(async_client, "img")
    image_url = user["profile"]["imageUrl"]
    assert image_url.startswith(settings.UPLOAD_URL_PREFIX + "/")
    assert image_url.endswith(".png")
    assert user["profile"]["imageThumbnailUrl"] == image_url

    stored = upload_dir / image_url.rsplit("/", 1)[1]
    assert stored.read_bytes() == b"\x89PNG fake image bytes"


@pytest.mark.asyncio
async def test_upload_rejects_non_image(async_client: AsyncClient):
    resp = await async_client.post(
        "/users/upload",
        data={"username": "textfile", "email": "textfile@example.com"},
        files={"image": ("notes.txt", b"plain text", "text/plain")},
    )
    assert resp.status_code == 400

    listing = await async_client.get("/users")
    assert listing.json() == []


@pytest.mark.asyncio
async def test_upload_with_overlong_username_returns_422(async_client: AsyncClient, upload_dir):
    resp = await async_client.post(
        "/users/upload",
        data={"username": "u" * 120, "email": "long@example.com"},
        files={"image": ("avatar.png", b"png bytes", "image/png")},
    )
    assert resp.status_code == 422
    assert resp.json()["detail"][0]["loc"] == ["username"]
    assert not upload_dir.exists() or not any(upload_dir.iterdir())


@pytest.mark.asyncio
async def test_upload_extension_follows_content_type(async_client: AsyncClient, upload_dir):
    resp = await async_client.post(
        "/users/upload",
        data={"username": "sneaky", "email": "sneaky@example.com"},
        files={"image": ("page.html", b"<script>alert(1)</script>", "image/png")},
    )
    assert resp.status_code == 201
    assert resp.json()["profile"]["imageUrl"].endswith(".png")
    assert [p.suffix for p in upload_dir.iterdir()] == [".png"]


@pytest.mark.asyncio
async def test_upload_duplicate_username_returns_409_and_removes_file(async_client: AsyncClient, upload_dir):
    first = await _upload_user(async_client, "twice")
    kept = first["profile"]["imageUrl"].rsplit("/", 1)[1]

    resp = await async_client.post(
        "/users/upload",
        data={"username": "up_twice", "email": "another@example.com"},
        files={"image": ("avatar.png", b"second image", "image/png")},
    )
    assert resp.status_code == 409
    assert [p.name for p in upload_dir.iterdir()] == [kept]


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_and_get_users(async_client: AsyncClient):
    first = await _create_user(async_client, "a")
    await _create_user(async_client, "b")

    resp = await async_client.get("/users")
    assert resp.status_code == 200
    assert len(resp.json()) == 2

    resp = await async_client.get(f"/users/{first['idUser']}")
    assert resp.status_code == 200
    assert resp.json()["email"] == "user_a@example.com"
    assert resp.json()["profile"]["imageUrl"] == settings.DEFAULT_PROFILE_IMAGE_URL


@pytest.mark.asyncio
async def test_get_unknown_user_returns_404(async_client: AsyncClient):
    resp = await async_client.get("/users/99999")
    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Profile image reset
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_profile_image_resets_to_placeholder(async_client: AsyncClient):
    user = await _upload_user(async_client, "reset")
    uploaded = user["profile"]["imageUrl"]

    resp = await async_client.delete(f"/users/{user['idUser']}/profile-image")
    assert resp.status_code == 200
    image = resp.json()
    assert image["imageUrl"] == settings.DEFAULT_PROFILE_IMAGE_URL
    assert image["imageThumbnailUrl"] == settings.DEFAULT_PROFILE_IMAGE_URL

    # Same row, new URLs.
    profile = (await async_client.get(f"/users/{user['idUser']}")).json()["profile"]
    assert profile["imageUrl"] == settings.DEFAULT_PROFILE_IMAGE_URL
    assert profile["imageUrl"] != uploaded
    assert image["idProfile"] == profile["idProfile"]


@pytest.mark.asyncio
async def test_delete_placeholder_image_returns_400(async_client: AsyncClient):
    user = await _create_user(async_client, "already_default")
    resp = await async_client.delete(f"/users/{user['idUser']}/profile-image")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "The user has the default profile image"


@pytest.mark.asyncio
async def test_delete_profile_image_unknown_user_returns_404(async_client: AsyncClient):
    resp = await async_client.delete("/users/99999/profile-image")
    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Delete user
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_user_removes_reactions_first(async_client: AsyncClient):
    author = await _create_user(async_client, "author")
    reactor = await _create_user(async_client, "reactor")

    post_ids = []
    for i in range(3):
        resp = await async_client.post("/posts", json={"content": f"Post {i}", "idUser": author["idUser"]})
        post_ids.append(resp.json()["idPost"])
    for post_id in post_ids:
        resp = await async_client.post("/reactions", json={"idUser": reactor["idUser"], "idPost": post_id})
        assert resp.status_code == 201

    resp = await async_client.delete(f"/users/{reactor['idUser']}")
    assert resp.status_code == 204

    assert (await async_client.get(f"/users/{reactor['idUser']}")).status_code == 404
    for post_id in post_ids:
        reactions = (await async_client.get(f"/reactions/post/{post_id}")).json()
        assert reactions == []

    # The author and the posts are untouched.
    assert (await async_client.get(f"/users/{author['idUser']}")).status_code == 200
    assert (await async_client.get(f"/posts/{post_ids[0]}")).status_code == 200


@pytest.mark.asyncio
async def test_delete_user_removes_profile(async_client: AsyncClient):
    user = await _create_user(async_client, "gone")
    resp = await async_client.delete(f"/users/{user['idUser']}")
    assert resp.status_code == 204

    resp = await async_client.get(f"/profiles/user/{user['idUser']}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_unknown_user_returns_404(async_client: AsyncClient):
    resp = await async_client.delete("/users/99999")
    assert resp.status_code == 404
