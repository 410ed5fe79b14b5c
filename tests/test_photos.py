"""Tests for photo endpoints."""

from urllib.parse import parse_qs, urlparse

from fastapi.testclient import TestClient

NEW_PHOTO = {
    "imageId": "img_1",
    "filename": "site.jpg",
    "logId": "log_1",
    "metadata": {"filetype": "image/png", "filesize": 2048},
}


def test_save_photo(client: TestClient, photo_repo):
    response = client.post("/api/photos", json=NEW_PHOTO)
    assert response.status_code == 201
    data = response.json()
    assert data["teamId"] == "team_1"
    assert data["creatorId"] == "user_123"
    assert data["contentType"] == "image/png"
    assert data["size"] == 2048
    assert len(photo_repo.photos) == 1


def test_save_photo_invalid_input(client: TestClient, photo_repo):
    response = client.post("/api/photos", json={"imageId": "img_1", "filename": "a.jpg"})
    assert response.status_code == 400
    data = response.json()
    assert data["message"] == "Invalid input"
    assert "logId" in data["errors"]
    assert photo_repo.photos == {}


def test_save_photo_unknown_log(client: TestClient):
    response = client.post("/api/photos", json={**NEW_PHOTO, "logId": "log_other"})
    assert response.status_code == 404


def test_get_photo_with_signed_url(client: TestClient):
    photo_id = client.post("/api/photos", json=NEW_PHOTO).json()["id"]

    response = client.get("/api/photos", params={"id": photo_id})
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == photo_id
    url = urlparse(data["url"])
    assert url.netloc == "imagedelivery.net"
    assert url.path == "/hash123/img_1/public"
    query = parse_qs(url.query)
    assert "exp" in query and "sig" in query


def test_get_missing_photo(client: TestClient):
    response = client.get("/api/photos", params={"id": "photo_nope"})
    assert response.status_code == 404


def test_list_team_photos(client: TestClient):
    client.post("/api/photos", json=NEW_PHOTO)
    client.post("/api/photos", json={**NEW_PHOTO, "imageId": "img_2"})

    response = client.get("/api/photos", params={"teamId": "team_1"})
    assert response.status_code == 200
    photos = response.json()
    assert len(photos) == 2
    assert all(photo["url"] for photo in photos)


def test_list_requires_team_or_id(client: TestClient):
    response = client.get("/api/photos")
    assert response.status_code == 400


def test_list_log_photos(client: TestClient):
    client.post("/api/photos", json=NEW_PHOTO)
    client.post("/api/photos", json={**NEW_PHOTO, "imageId": "img_2", "logId": "log_2"})

    response = client.get("/api/photos", params={"logId": "log_2"})
    assert response.status_code == 200
    photos = response.json()
    assert [p["imageId"] for p in photos] == ["img_2"]
    assert photos[0]["url"]


def test_move_photo_to_log(client: TestClient, photo_repo):
    photo_id = client.post("/api/photos", json=NEW_PHOTO).json()["id"]

    response = client.patch("/api/photos", json={"id": photo_id, "logId": "log_2"})
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert photo_repo.moves == [(photo_id, "log_2")]
    assert [p["id"] for p in client.get("/api/photos", params={"logId": "log_2"}).json()] == [
        photo_id
    ]


def test_unassign_photo_from_log(client: TestClient, photo_repo):
    photo_id = client.post("/api/photos", json=NEW_PHOTO).json()["id"]

    response = client.patch("/api/photos", json={"id": photo_id, "logId": None})
    assert response.status_code == 200
    assert photo_repo.photos[photo_id].logId is None


def test_move_photo_to_inaccessible_log(client: TestClient, photo_repo):
    photo_id = client.post("/api/photos", json=NEW_PHOTO).json()["id"]

    response = client.patch("/api/photos", json={"id": photo_id, "logId": "log_9"})
    assert response.status_code == 404
    assert response.json()["error"] == "Log not found or you do not have access"
    assert photo_repo.moves == []


def test_move_missing_photo(client: TestClient, photo_repo):
    response = client.patch("/api/photos", json={"id": "photo_nope", "logId": "log_1"})
    assert response.status_code == 404
    assert photo_repo.moves == []


def test_move_photo_requires_id(client: TestClient):
    response = client.patch("/api/photos", json={"logId": "log_1"})
    assert response.status_code == 400
    assert "id" in response.json()["errors"]


def test_delete_photo(client: TestClient, photo_repo):
    photo_id = client.post("/api/photos", json=NEW_PHOTO).json()["id"]

    response = client.delete("/api/photos", params={"id": photo_id})
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert photo_repo.deleted == [photo_id]

    assert client.get("/api/photos", params={"id": photo_id}).status_code == 404


def test_delete_photo_requires_id(client: TestClient):
    response = client.delete("/api/photos")
    assert response.status_code == 400
    assert "id" in response.json()["errors"]


def test_signed_url(client: TestClient):
    photo_id = client.post("/api/photos", json=NEW_PHOTO).json()["id"]

    response = client.get("/api/photos/signed-url", params={"id": photo_id, "variant": "thumb"})
    assert response.status_code == 200
    assert "/hash123/img_1/thumb?" in response.json()["url"]


def test_signed_url_requires_id(client: TestClient):
    assert client.get("/api/photos/signed-url").status_code == 400


def test_signed_url_missing_photo(client: TestClient):
    assert client.get("/api/photos/signed-url", params={"id": "nope"}).status_code == 404


def test_upload_url(client: TestClient, image_service):
    response = client.get("/api/photos/upload-url")
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "uploadURL": "https://upload.example.com/abc",
        "imageId": "img_abc",
    }
    assert image_service.upload_metadata["userId"] == "user_123"
    assert "uploadedAt" in image_service.upload_metadata


def test_upload_url_failure(client: TestClient, image_service):
    image_service.fail_uploads = True
    response = client.get("/api/photos/upload-url")
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_photos_require_auth(anonymous_client: TestClient):
    assert anonymous_client.get("/api/photos", params={"teamId": "team_1"}).status_code == 401
    assert anonymous_client.get("/api/photos/upload-url").status_code == 401
