import pytest
from fastapi.testclient import TestClient

from weighin.app import create_app
from weighin.config import AppConfig
from weighin.runtime import Runtime
from weighin.service import NO_WEIGHT_ERROR, WeighInService
from weighin.vision import StaticTextRecognizer


def _runtime(text: str, max_image_bytes: int = 1024) -> Runtime:
    config = AppConfig(
        vision_api_key=None,
        vision_url="https://vision.example.com/v1/images:annotate",
        http_timeout=5.0,
        http_retries=1,
        http_user_agent="weighin-tests",
        max_image_bytes=max_image_bytes,
        static_text=text,
        log_level="INFO",
    )
    recognizer = StaticTextRecognizer(text)
    return Runtime(
        config=config,
        recognizer=recognizer,
        service=WeighInService(recognizer, max_image_bytes=max_image_bytes),
    )


@pytest.fixture()
def client():
    with TestClient(create_app(_runtime("974."))) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["recognizer"] == "static"


def test_parse_endpoint(client):
    response = client.post("/weight/parse", json={"text": "Max: 400 kg, Display: 98.5 kg"})
    assert response.status_code == 200
    assert response.json()["weight"] == 98.5


def test_process_endpoint_accepts_data_url(client):
    response = client.post("/weight/process", json={"imageBase64": "data:image/png;base64,aGVsbG8="})
    body = response.json()

    assert response.status_code == 200
    assert body["success"] is True
    assert body["weight"] == 97.4
    assert body["rawText"] == "974."


def test_process_endpoint_requires_image(client):
    assert client.post("/weight/process", json={}).status_code == 422


def test_process_endpoint_without_weight_is_bad_request():
    with TestClient(create_app(_runtime("no numbers here"))) as client:
        response = client.post("/weight/process", json={"imageBase64": "aGVsbG8="})

    assert response.status_code == 400
    assert response.json()["error"] == NO_WEIGHT_ERROR


def test_process_endpoint_rejects_large_images():
    with TestClient(create_app(_runtime("85.5", max_image_bytes=4))) as client:
        response = client.post("/weight/process", json={"imageBase64": "aGVsbG8gd29ybGQ="})

    assert response.status_code == 413
