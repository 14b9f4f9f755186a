"""API endpoint tests."""

import pytest

from src.models.user import User
from src.services.passwords import verify_password

ANA = {
    "nomeUsuario": "Ana",
    "userUsuario": "ana1",
    "senhaUsuario": "Secret123",
    "cpfUsuario": "111",
    "emailUsuario": "ana@x.com",
}


@pytest.fixture
def user_id(client, db):
    """Create the Ana user through the API and return its ID."""
    response = client.post("/users", json=ANA)
    assert response.status_code == 201
    return db.query(User).filter(User.email == ANA["emailUsuario"]).one().id


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_create_user(client):
    """Test user creation."""
    response = client.post("/users", json=ANA)
    assert response.status_code == 201
    assert response.json() == {"msg": "Usuário criado com sucesso!"}


def test_create_fetch_delete_scenario(client, db):
    """Test the full lifecycle of a user record."""
    response = client.post("/users", json=ANA)
    assert response.status_code == 201
    user_id = db.query(User).filter(User.email == "ana@x.com").one().id

    response = client.get(f"/users/{user_id}")
    assert response.status_code == 200
    data = response.json()
    assert data["idUsuario"] == user_id
    assert data["emailUsuario"] == "ana@x.com"
    assert data["senhaUsuario"].startswith("$2b$12$")

    response = client.delete(f"/users/{user_id}")
    assert response.status_code == 200
    assert response.json() == {"msg": "Usuário deletado com sucesso!"}

    response = client.get(f"/users/{user_id}")
    assert response.status_code == 404
    assert response.json() == {"msg": "Usuário não encontrado"}


def test_stored_password_is_hash(client, user_id):
    """Test that the stored password is a hash that verifies against the plaintext."""
    data = client.get(f"/users/{user_id}").json()
    assert data["senhaUsuario"] != ANA["senhaUsuario"]
    assert verify_password(ANA["senhaUsuario"], data["senhaUsuario"])
    assert not verify_password("wrongpass", data["senhaUsuario"])


def test_fetch_returns_all_fields(client, user_id):
    """Test that fetch serializes every stored column."""
    data = client.get(f"/users/{user_id}").json()
    assert set(data) == {
        "idUsuario",
        "nomeUsuario",
        "userUsuario",
        "senhaUsuario",
        "cpfUsuario",
        "emailUsuario",
    }
    assert data["nomeUsuario"] == "Ana"
    assert data["userUsuario"] == "ana1"
    assert data["cpfUsuario"] == "111"


def test_create_duplicate_email(client, db, user_id):
    """Test that a second user with the same email is rejected."""
    response = client.post("/users", json={**ANA, "nomeUsuario": "Other", "userUsuario": "other"})
    assert response.status_code == 422
    assert response.json() == {"msg": "E-mail em uso! Por favor, utilize outro e-mail!"}
    assert db.query(User).filter(User.email == ANA["emailUsuario"]).count() == 1


def test_create_missing_field(client, db):
    """Test that every field is required on creation."""
    for field in ANA:
        payload = {key: value for key, value in ANA.items() if key != field}
        response = client.post("/users", json=payload)
        assert response.status_code == 422, field
        assert response.json() == {"msg": "Todos os campos são obrigatórios!"}
    assert db.query(User).count() == 0


def test_create_empty_field(client):
    """Test that empty strings count as missing."""
    response = client.post("/users", json={**ANA, "cpfUsuario": ""})
    assert response.status_code == 422
    assert response.json() == {"msg": "Todos os campos são obrigatórios!"}


def test_create_malformed_body(client):
    """Test that wrongly typed fields get a message body, not validation details."""
    response = client.post("/users", json={**ANA, "nomeUsuario": 123})
    assert response.status_code == 422
    assert response.json() == {"msg": "Dados inválidos"}


def test_fetch_nonexistent_user(client):
    """Test fetching a user that doesn't exist."""
    response = client.get("/users/99999")
    assert response.status_code == 404
    assert response.json() == {"msg": "Usuário não encontrado"}


def test_fetch_non_numeric_id(client):
    """Test that identifiers are passed through without type validation."""
    response = client.get("/users/abc")
    assert response.status_code == 404


def test_update_user(client, user_id):
    """Test updating some fields of a user."""
    response = client.put(
        f"/users/{user_id}",
        json={"nomeUsuario": "Ana Maria", "emailUsuario": "ana.maria@x.com"},
    )
    assert response.status_code == 200
    assert response.json() == {"msg": "Usuário atualizado com sucesso!"}

    data = client.get(f"/users/{user_id}").json()
    assert data["nomeUsuario"] == "Ana Maria"
    assert data["emailUsuario"] == "ana.maria@x.com"
    assert data["userUsuario"] == "ana1"
    assert data["cpfUsuario"] == "111"


def test_patch_user(client, user_id):
    """Test that PATCH behaves like PUT."""
    response = client.patch(f"/users/{user_id}", json={"userUsuario": "ana2"})
    assert response.status_code == 200
    assert client.get(f"/users/{user_id}").json()["userUsuario"] == "ana2"


def test_update_password_only(client, user_id):
    """Test that updating only the password leaves other fields untouched."""
    before = client.get(f"/users/{user_id}").json()

    response = client.put(f"/users/{user_id}", json={"senhaUsuario": "NewSecret456"})
    assert response.status_code == 200

    after = client.get(f"/users/{user_id}").json()
    assert after["senhaUsuario"] != before["senhaUsuario"]
    assert verify_password("NewSecret456", after["senhaUsuario"])
    assert not verify_password(ANA["senhaUsuario"], after["senhaUsuario"])
    for field in ("idUsuario", "nomeUsuario", "userUsuario", "cpfUsuario", "emailUsuario"):
        assert after[field] == before[field]


def test_update_no_fields(client, user_id):
    """Test that an update without fields is rejected and changes nothing."""
    before = client.get(f"/users/{user_id}").json()

    response = client.put(f"/users/{user_id}", json={})
    assert response.status_code == 422
    assert response.json() == {"msg": "Nenhum dado fornecido para atualizar!"}

    response = client.put(f"/users/{user_id}", json={"nomeUsuario": "", "senhaUsuario": ""})
    assert response.status_code == 422

    assert client.get(f"/users/{user_id}").json() == before


def test_update_nonexistent_user(client):
    """Test updating a user that doesn't exist."""
    response = client.put("/users/99999", json={"nomeUsuario": "Ghost"})
    assert response.status_code == 404
    assert response.json() == {"msg": "Usuário não encontrado"}


def test_update_with_identical_values(client, user_id):
    """Test that an update matching the stored values still succeeds."""
    response = client.put(f"/users/{user_id}", json={"nomeUsuario": ANA["nomeUsuario"]})
    assert response.status_code == 200


def test_update_email_in_use(client, user_id):
    """Test that changing email to another user's email is a conflict."""
    response = client.post(
        "/users", json={**ANA, "emailUsuario": "bia@x.com", "userUsuario": "bia"}
    )
    assert response.status_code == 201

    response = client.put(f"/users/{user_id}", json={"emailUsuario": "bia@x.com"})
    assert response.status_code == 422
    assert response.json() == {"msg": "E-mail em uso! Por favor, utilize outro e-mail!"}
    assert client.get(f"/users/{user_id}").json()["emailUsuario"] == ANA["emailUsuario"]


def test_delete_nonexistent_user(client):
    """Test deleting a user that doesn't exist."""
    response = client.delete("/users/99999")
    assert response.status_code == 404
    assert response.json() == {"msg": "Usuário não encontrado"}


def test_delete_twice(client, user_id):
    """Test that delete is not idempotent in its status."""
    assert client.delete(f"/users/{user_id}").status_code == 200
    assert client.delete(f"/users/{user_id}").status_code == 404


def test_create_without_body(client):
    """Test that a request with no body is reported as missing fields."""
    response = client.post("/users")
    assert response.status_code == 422
    assert response.json() == {"msg": "Todos os campos são obrigatórios!"}


def test_update_without_body(client, user_id):
    """Test that an update with no body is reported as having no fields."""
    for method in (client.put, client.patch):
        response = method(f"/users/{user_id}")
        assert response.status_code == 422
        assert response.json() == {"msg": "Nenhum dado fornecido para atualizar!"}


def test_long_password_accepted(client, user_id):
    """Test that passwords aren't length-limited on create or update."""
    long_password = "x" * 200
    response = client.post(
        "/users",
        json={**ANA, "emailUsuario": "long@x.com", "senhaUsuario": long_password},
    )
    assert response.status_code == 201

    response = client.put(f"/users/{user_id}", json={"senhaUsuario": long_password})
    assert response.status_code == 200
