from fastapi.testclient import TestClient


def test_health_check(client: TestClient, configured):
    response = client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["llm_configured"] is True


def test_health_check_reports_missing_credential(client: TestClient, monkeypatch):
    from simple_explain.config import settings

    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")

    response = client.get("/api/health")

    assert response.json()["llm_configured"] is False


def test_unknown_route_uses_error_envelope(client: TestClient):
    response = client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json() == {"error": {"code": "HTTP_ERROR", "message": "Not Found"}}


def test_wrong_method_uses_error_envelope(client: TestClient):
    response = client.get("/api/generate")

    assert response.status_code == 405
    assert response.json()["error"]["code"] == "HTTP_ERROR"
    assert "POST" in response.headers["allow"]
