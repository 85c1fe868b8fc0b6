"""
Tests for the HTTP API

Each test gets a TestClient bound to its own empty in-memory store through
FastAPI dependency overrides.
"""

from cpf_registry.api.dependencies import get_user_store
from cpf_registry.core.constants import ErrorMessages
from cpf_registry.main import app
from cpf_registry.repositories import InMemoryUserStore

API = "/api/v1/users"
UNKNOWN_ID = "3f2b8c1e-9a4d-4e6f-8b7a-1c2d3e4f5a6b"


def _enroll(client, **overrides):
    payload = {
        "name": "Maria Souza",
        "email": "maria.souza@email.com",
        "cpf": "48472338088",
        **overrides,
    }
    return client.post(API, json=payload)


class TestHealth:
    """Test suite for service endpoints"""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["api"] == "/api/v1"

    def test_request_id_header_is_returned(self, client):
        response = client.get("/health")
        assert response.headers.get("X-Request-ID")

    def test_incoming_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"


class TestUserEndpoints:
    """Test suite for user CRUD endpoints"""

    def test_create_user(self, client):
        response = _enroll(client)

        assert response.status_code == 201
        data = response.json()
        assert len(data["id"]) == 36
        assert data["cpf"] == "48472338088"
        assert data["date_creation"]

    def test_create_user_with_invalid_cpf(self, client):
        response = _enroll(client, cpf="48472338080")

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "ValidationError"
        assert data["detail"] == ErrorMessages.CPF_INVALID
        assert data["request_id"] == response.headers["X-Request-ID"]

    def test_create_user_missing_field(self, client):
        """Test: Payload shape errors are reported by FastAPI request validation"""
        response = client.post(API, json={"name": "Maria Souza", "email": "maria.souza@email.com"})
        assert response.status_code == 422

    def test_create_duplicate_cpf(self, client):
        _enroll(client)

        response = _enroll(client, email="other@email.com")

        assert response.status_code == 400
        assert response.json()["detail"] == ErrorMessages.CPF_ALREADY_CREATED

    def test_list_users(self, client):
        _enroll(client)
        _enroll(client, name="João Lima", email="joao.lima@email.com", cpf="32016170085")

        response = client.get(API)

        assert response.status_code == 200
        assert [user["name"] for user in response.json()] == ["Maria Souza", "João Lima"]
        assert set(response.json()[0]) == {"id", "name", "email", "cpf"}

    def test_get_user(self, client):
        user_id = _enroll(client).json()["id"]

        response = client.get(f"{API}/{user_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == user_id
        assert data["is_credit_eligible"] == 0

    def test_get_unknown_user(self, client):
        response = client.get(f"{API}/{UNKNOWN_ID}")

        assert response.status_code == 404
        assert response.json()["detail"] == ErrorMessages.USER_NOT_FOUND

    def test_get_user_with_malformed_id(self, client):
        response = client.get(f"{API}/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["detail"] == ErrorMessages.ID_INVALID

    def test_delete_user(self, client):
        user_id = _enroll(client).json()["id"]

        response = client.delete(f"{API}/{user_id}")

        assert response.status_code == 204
        assert client.get(f"{API}/{user_id}").status_code == 404
        assert client.delete(f"{API}/{user_id}").status_code == 404
        assert client.get(API).json() == []

    def test_soft_deleted_record_is_kept(self, client, memory_store):
        user_id = _enroll(client).json()["id"]

        client.delete(f"{API}/{user_id}")

        assert memory_store.get_stored(user_id).is_active is False


class TestEditEndpoints:
    """Test suite for field edit endpoints"""

    def test_edit_name(self, client):
        user_id = _enroll(client).json()["id"]

        response = client.patch(f"{API}/{user_id}/name", json={"name": "Maria Souza Lima"})

        assert response.status_code == 200
        assert response.json()["name"] == "Maria Souza Lima"
        assert response.json()["date_time"]
        assert client.get(f"{API}/{user_id}").json()["name"] == "Maria Souza Lima"

    def test_edit_cpf(self, client):
        user_id = _enroll(client).json()["id"]

        response = client.patch(f"{API}/{user_id}/cpf", json={"cpf": "32016170085"})

        assert response.status_code == 200
        assert response.json()["cpf"] == "32016170085"

    def test_edit_cpf_rejects_punctuation(self, client):
        user_id = _enroll(client).json()["id"]

        response = client.patch(f"{API}/{user_id}/cpf", json={"cpf": "320.161.700-85"})

        assert response.status_code == 400
        assert response.json()["detail"] == ErrorMessages.CPF_INVALID

    def test_edit_email_to_taken_email(self, client):
        _enroll(client)
        other_id = _enroll(client, email="other@email.com", cpf="32016170085").json()["id"]

        response = client.patch(f"{API}/{other_id}/email", json={"email": "maria.souza@email.com"})

        assert response.status_code == 400
        assert response.json()["error"] == "DuplicateError"

    def test_edit_deleted_user(self, client):
        user_id = _enroll(client).json()["id"]
        client.delete(f"{API}/{user_id}")

        response = client.patch(f"{API}/{user_id}/email", json={"email": "new@email.com"})

        assert response.status_code == 404


class TestSpreadsheetEndpoints:
    """Test suite for CSV import/export endpoints"""

    CONTENT = (
        "name,cpf,email\n"
        "Maria Souza,48472338088,maria.souza@email.com\n"
        "João Lima,32016170085,joao.lima@email.com\n"
    )

    def _upload(self, client, content: bytes, mime_type: str = "text/csv"):
        return client.post(
            f"{API}/spreadsheet",
            files={"file": ("users.csv", content, mime_type)}
        )

    def test_import(self, client):
        response = self._upload(client, self.CONTENT.encode("utf-8"))

        assert response.status_code == 201
        assert response.json()["created_users"] == 2
        assert len(client.get(API).json()) == 2

    def test_import_invalid_row_creates_nothing(self, client):
        content = self.CONTENT.replace("32016170085", "32016170080")

        response = self._upload(client, content.encode("utf-8"))

        assert response.status_code == 400
        assert response.json()["error"] == "SpreadsheetError"
        assert response.json()["detail"] == "Spreadsheet error: line 3 | " + ErrorMessages.CPF_INVALID
        assert client.get(API).json() == []

    def test_import_rejects_mime_type(self, client):
        response = self._upload(client, b"\x89PNG", mime_type="image/png")

        assert response.status_code == 400

    def test_import_rejects_oversized_payload(self, client):
        """Test: Bodies far above the upload limit are refused before reaching the endpoint"""
        response = self._upload(client, b"x" * (1100 * 1024))

        assert response.status_code == 413
        assert response.json()["request_id"] == response.headers["X-Request-ID"]

    def test_export(self, client):
        self._upload(client, self.CONTENT.encode("utf-8"))

        response = client.get(f"{API}/spreadsheet")

        assert response.status_code == 200
        assert response.json()["csv"] == self.CONTENT

    def test_export_without_users(self, client):
        response = client.get(f"{API}/spreadsheet")

        assert response.status_code == 400
        assert response.json()["detail"] == ErrorMessages.SPREADSHEET_NO_USERS_TO_EXPORT


class TestUnexpectedErrors:
    """Test suite for errors outside the domain hierarchy"""

    def test_unhandled_error_is_a_500(self, client):
        class BrokenStore(InMemoryUserStore):
            def find_all(self):
                raise RuntimeError("database is gone")

        app.dependency_overrides[get_user_store] = lambda: BrokenStore()

        response = client.get(API)

        assert response.status_code == 500
        assert response.json()["error"] == ErrorMessages.INTERNAL_SERVER_ERROR
        assert response.json()["request_id"] == response.headers["X-Request-ID"]
