"""
Test health endpoint for the mockup recolor service.
"""


def test_health_check(test_client):
    """Test health check reports service identity."""
    response = test_client.get("/healthz")

    assert response.status_code == 200
    data = response.json()

    assert data["ok"] is True
    assert data["version"] == "1.0.0"
    assert data["service"] == "mockup-recolor"


def test_server_bind_defaults():
    """Direct runs bind to the configured host and port."""
    from app.config import config

    assert config.HOST == "0.0.0.0"
    assert config.PORT == 8000
