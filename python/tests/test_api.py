"""
Tests for the HTTP JSON API.
"""

import pytest
from fastapi.testclient import TestClient

from passmint.api import create_app
from passmint.api.params import bool_param, int_param, requirements_from_params
from passmint.utils.charsets import AMBIGUOUS_CHARS, DIGITS, SYMBOLS
from passmint.utils.validation import ValidationRequirements


@pytest.fixture
def client():
    """API client with lifespan events."""
    with TestClient(create_app()) as test_client:
        yield test_client


class TestGeneratePassword:
    """Test GET /api/password."""

    def test_defaults(self, client):
        """Test generation with no parameters."""
        resp = client.get("/api/password")

        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert len(data["password"]) == 16
        assert data["length"] == 16
        assert data["options"] == {
            "includeUppercase": True,
            "includeLowercase": True,
            "includeNumbers": True,
            "includeSymbols": False,
            "excludeAmbiguous": False,
            "exclude": "",
            "requireEach": True,
        }

    def test_query_options(self, client):
        """Test that query parameters are applied."""
        resp = client.get("/api/password", params={
            "length": "40",
            "includeSymbols": "YES",
            "excludeAmbiguous": "1",
            "includeNumbers": "false",
            "exclude": "xyz",
        })

        assert resp.status_code == 200
        data = resp.json()
        password = data["password"]
        assert len(password) == 40
        assert any(c in SYMBOLS for c in password)
        assert not set(password) & set(AMBIGUOUS_CHARS + DIGITS + "xyz")
        assert data["options"]["includeNumbers"] is False
        assert data["options"]["exclude"] == "xyz"

    def test_padded_boolean_is_false(self, client):
        """Test that boolean strings are matched exactly, without trimming."""
        resp = client.get("/api/password", params={"length": "64", "includeSymbols": " true "})

        assert resp.status_code == 200
        data = resp.json()
        assert data["options"]["includeSymbols"] is False
        assert not any(c in SYMBOLS for c in data["password"])

    def test_non_numeric_length_uses_default(self, client):
        """Test that an unparseable length falls back to 16."""
        resp = client.get("/api/password", params={"length": "abc"})

        assert resp.status_code == 200
        assert resp.json()["length"] == 16

    @pytest.mark.parametrize("length", ["3", "129"])
    def test_length_out_of_range(self, client, length):
        """Test the error envelope for invalid lengths."""
        resp = client.get("/api/password", params={"length": length})

        assert resp.status_code == 400
        data = resp.json()
        assert data["error"] is True
        assert data["status"] == 400
        assert "between 4 and 128" in data["message"]

    def test_no_categories(self, client):
        """Test the error envelope when every category is disabled."""
        resp = client.get("/api/password", params={
            "includeUppercase": "no",
            "includeLowercase": "0",
            "includeNumbers": "false",
        })

        assert resp.status_code == 400
        assert resp.json()["error"] is True

    def test_category_emptied(self, client):
        """Test the error envelope when exclusions empty a category."""
        resp = client.get("/api/password", params={"exclude": DIGITS})

        assert resp.status_code == 400
        assert "digits" in resp.json()["message"]


class TestGeneratePasswords:
    """Test POST /api/passwords."""

    def test_batch(self, client):
        """Test generating several passwords."""
        resp = client.post("/api/passwords", json={"count": 5, "length": 10})

        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["count"] == 5
        assert data["length"] == 10
        assert len(data["passwords"]) == 5
        assert all(len(p) == 10 for p in data["passwords"])

    def test_empty_body_uses_defaults(self, client):
        """Test that an empty body produces one default password."""
        resp = client.post("/api/passwords")

        assert resp.status_code == 200
        data = resp.json()
        assert data["count"] == 1
        assert len(data["passwords"][0]) == 16

    def test_native_and_integer_booleans(self, client):
        """Test JSON booleans and integers as flags."""
        resp = client.post("/api/passwords", json={
            "count": 3,
            "length": 20,
            "includeUppercase": False,
            "includeLowercase": 0,
            "includeNumbers": 1,
        })

        assert resp.status_code == 200
        for password in resp.json()["passwords"]:
            assert all(c in DIGITS for c in password)

    @pytest.mark.parametrize("count", [0, 101])
    def test_count_out_of_range(self, client, count):
        """Test the error envelope for invalid counts."""
        resp = client.post("/api/passwords", json={"count": count})

        assert resp.status_code == 400
        assert resp.json() == {
            "error": True,
            "message": "Password count must be between 1 and 100",
            "status": 400,
        }

    def test_invalid_json(self, client):
        """Test that a malformed body is rejected."""
        resp = client.post(
            "/api/passwords",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert resp.status_code == 400
        assert "Invalid JSON body" in resp.json()["message"]

    def test_deeply_nested_json(self, client):
        """Test that a body nested beyond the parser's limit is rejected."""
        resp = client.post(
            "/api/passwords",
            content=b"[" * 100000 + b"]" * 100000,
            headers={"Content-Type": "application/json"},
        )

        assert resp.status_code == 400
        data = resp.json()
        assert data["error"] is True
        assert data["status"] == 400
        assert "Invalid JSON body" in data["message"]

    def test_non_object_body(self, client):
        """Test that a JSON array body is rejected."""
        resp = client.post("/api/passwords", json=[1, 2, 3])

        assert resp.status_code == 400
        assert resp.json()["error"] is True


class TestValidateEndpoint:
    """Test POST /api/password/validate."""

    def test_valid_password(self, client):
        """Test a password meeting every requirement."""
        resp = client.post("/api/password/validate", json={
            "password": "Password123!",
            "requirements": {
                "minLength": 8,
                "requireUppercase": True,
                "requireLowercase": True,
                "requireNumbers": True,
                "requireSymbols": True,
            },
        })

        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert data["password"] == "Password123!"
        assert data["result"]["valid"] is True
        assert data["result"]["score"] == 100
        assert data["result"]["strength"] == "strong"
        assert len(data["result"]["checks"]) == 6

    def test_invalid_password(self, client):
        """Test that a failing password returns 422 with the report."""
        resp = client.post("/api/password/validate", json={
            "password": "Ab1!",
            "requirements": {"minLength": 8},
        })

        assert resp.status_code == 422
        result = resp.json()["result"]
        assert result["valid"] is False
        assert result["checks"]["minLength"]["passed"] is False

    def test_default_requirements(self, client):
        """Test that missing requirements use defaults."""
        resp = client.post("/api/password/validate", json={"password": "longenough"})

        assert resp.status_code == 200
        assert set(resp.json()["result"]["checks"]) == {"minLength", "maxLength"}

    @pytest.mark.parametrize("body", [
        {},
        {"password": ""},
        {"password": 12345678},
        {"password": None},
    ])
    def test_missing_password(self, client, body):
        """Test the error envelope for a missing or non-string password."""
        resp = client.post("/api/password/validate", json=body)

        assert resp.status_code == 422
        data = resp.json()
        assert data["error"] is True
        assert data["status"] == 422
        assert "password" in data["message"]


class TestRouting:
    """Test unknown routes and methods."""

    @pytest.mark.parametrize("method,path", [
        ("GET", "/api/unknown"),
        ("POST", "/api/password"),
        ("DELETE", "/api/passwords"),
        ("GET", "/api/password/validate"),
    ])
    def test_not_found(self, client, method, path):
        """Test that anything else is a 404 error envelope."""
        resp = client.request(method, path)

        assert resp.status_code == 404
        data = resp.json()
        assert data == {
            "error": True,
            "message": f"Endpoint not found: {method} {path}",
            "status": 404,
        }

    def test_trailing_slash(self, client):
        """Test that a trailing slash is served directly, without a redirect."""
        resp = client.get("/api/password/", params={"length": "12"}, follow_redirects=False)

        assert resp.status_code == 200
        assert resp.json()["length"] == 12

        resp = client.post("/api/passwords/", json={"count": 2}, follow_redirects=False)

        assert resp.status_code == 200
        assert resp.json()["count"] == 2

    def test_unknown_path_with_trailing_slash(self, client):
        """Test the 404 message omits the trailing slash."""
        resp = client.get("/api/unknown/", follow_redirects=False)

        assert resp.status_code == 404
        assert resp.json()["message"] == "Endpoint not found: GET /api/unknown"

    def test_health(self, client):
        """Test the health endpoint."""
        resp = client.get("/health")

        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"


class TestParams:
    """Test lenient parameter parsing."""

    @pytest.mark.parametrize("value,default,expected", [
        (True, False, True),
        (False, True, False),
        ("TRUE", False, True),
        ("Yes", False, True),
        ("1", False, True),
        ("no", True, False),
        ("", True, False),
        (" true ", False, False),
        ("yes\n", True, False),
        (5, False, True),
        (0, True, False),
        (None, True, True),
        (None, False, False),
        ([1], True, True),
        (1.0, False, False),
    ])
    def test_bool_param(self, value, default, expected):
        """Test boolean parameter coercion."""
        assert bool_param(value, default) is expected

    @pytest.mark.parametrize("value,expected", [
        (12, 12),
        ("12", 12),
        (" 7 ", 7),
        ("12.9", 12),
        (12.9, 12),
        ("-3", -3),
        ("abc", 16),
        (None, 16),
        (True, 16),
        ("nan", 16),
        ({"a": 1}, 16),
    ])
    def test_int_param(self, value, expected):
        """Test integer parameter coercion."""
        assert int_param(value, 16) == expected

    def test_requirements_from_params(self):
        """Test requirement parsing keeps defaults for absent keys."""
        requirements = requirements_from_params({
            "minLength": "10",
            "maxLength": None,
            "requireSymbols": "yes",
        })

        assert requirements == ValidationRequirements(min_length=10, require_symbols=True)
        assert requirements_from_params("bogus") == ValidationRequirements()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
