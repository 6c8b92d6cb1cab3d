import pytest
from fastapi import status
from fastapi.testclient import TestClient

from presign_api.main import create_app
from tests.fixtures.app_fixtures import FailingSigner


@pytest.mark.parametrize(
    "query",
    ["", "?fileName=", "?filename=photo.png", "?other=1", "?fileName=&fileName=photo.png"],
)
def test_missing_file_name_is_bad_request(fake_client: TestClient, recording_signer, query):
    response = fake_client.get(f"/generate-presigned-url{query}")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.text == "fileName is required"
    assert response.headers["content-type"].startswith("text/plain")
    with pytest.raises(ValueError):
        response.json()
    assert recording_signer.calls == []


def test_signing_failure_is_internal_server_error(app_settings):
    app = create_app(settings=app_settings, signer=FailingSigner(RuntimeError("credentials expired")))
    with TestClient(app) as client:
        response = client.get("/generate-presigned-url", params={"fileName": "photo.png"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Failed to generate pre-signed URL: credentials expired"


def test_unexpected_error_is_internal_server_error(app_settings):
    class BrokenSigner:
        def sign(self, bucket_name, object_key, ttl):
            raise KeyError("boom")

    with TestClient(create_app(settings=app_settings, signer=BrokenSigner())) as client:
        response = client.get("/generate-presigned-url", params={"fileName": "photo.png"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.text == "Internal server error"


def test_health_check_ignores_signer_health(app_settings):
    app = create_app(settings=app_settings, signer=FailingSigner(RuntimeError("down")))
    with TestClient(app) as client:
        response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.text == "OK"


def test_signing_without_credentials_is_internal_server_error(app_settings, monkeypatch, tmp_path):
    for name in [
        "AWS_ACCESS_KEY_ID",
        "AWS_SECRET_ACCESS_KEY",
        "AWS_SESSION_TOKEN",
        "AWS_SECURITY_TOKEN",
        "AWS_WEB_IDENTITY_TOKEN_FILE",
        "AWS_CONTAINER_CREDENTIALS_RELATIVE_URI",
        "AWS_CONTAINER_CREDENTIALS_FULL_URI",
    ]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "credentials"))
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "config"))
    monkeypatch.setenv("AWS_EC2_METADATA_DISABLED", "true")

    with TestClient(create_app(settings=app_settings)) as client:
        response = client.get("/generate-presigned-url", params={"fileName": "photo.png"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text.startswith("Failed to generate pre-signed URL: ")
    assert "Unable to locate credentials" in response.text
