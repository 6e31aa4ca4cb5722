from config import get_settings
from core.auth.security import decode_access_token


def _count_users(client):
    res = client.get("/users")
    assert res.status_code == 200
    return len(res.json())


def test_create_user_example(client, ana_payload):
    res = client.post("/users", json=ana_payload)

    assert res.status_code == 201
    assert res.json() == {"message": "Usuário cadastrado com sucesso.", "user": {"id": "1"}}


def test_create_then_get_one(client, ana_payload):
    user_id = client.post("/users", json=ana_payload).json()["user"]["id"]

    res = client.get(f"/users/{user_id}")

    assert res.status_code == 200
    user = res.json()
    assert user["id"] == int(user_id)
    for field in ("name", "email", "cpf", "state", "city", "neighborhood", "street", "number", "phone", "birthdate"):
        assert user[field] == ana_payload[field]
    assert user["password"] != ana_payload["password"]


def test_create_accepts_numeric_json_values(client, ana_payload):
    ana_payload["number"] = 10

    res = client.post("/users", json=ana_payload)

    assert res.status_code == 201
    assert client.get("/users/1").json()["number"] == "10"


def test_create_with_missing_field(client, ana_payload):
    del ana_payload["phone"]

    res = client.post("/users", json=ana_payload)

    assert res.status_code == 400
    assert res.json()["message"].startswith("Preencha todos os campos")
    assert _count_users(client) == 0


def test_create_with_invalid_cpf(client, ana_payload):
    ana_payload["cpf"] = "12345678900"

    res = client.post("/users", json=ana_payload)

    assert res.status_code == 400
    assert res.json() == {"message": "O CPF inserido é inválido."}


def test_create_with_duplicate_email_keeps_row_count(client, ana_payload):
    client.post("/users", json=ana_payload)
    count = _count_users(client)

    res = client.post("/users", json=dict(ana_payload, cpf="11144477735"))

    assert res.status_code == 400
    assert res.json() == {"message": "E-mail ou CPF já cadastrados."}
    assert _count_users(client) == count


def test_create_conflict_at_insert_keeps_row_count(client, ana_payload, monkeypatch):
    from core.database.gateway import DataStoreGateway, QueryResult

    client.post("/users", json=ana_payload)
    count = _count_users(client)

    execute = DataStoreGateway.execute

    async def lookup_misses(self, sql, args=()):
        if sql.startswith("SELECT id"):
            return QueryResult()
        return await execute(self, sql, args)

    monkeypatch.setattr(DataStoreGateway, "execute", lookup_misses)

    res = client.post("/users", json=dict(ana_payload, email="other@x.com"))

    assert res.status_code == 400
    assert res.json() == {"message": "E-mail ou CPF já cadastrados."}
    assert _count_users(client) == count


def test_malformed_body_is_bad_request(client):
    res = client.post("/users", content="not json", headers={"content-type": "application/json"})

    assert res.status_code == 400
    assert "message" in res.json()


def test_list_users(client, ana_payload):
    assert client.get("/users").json() == []

    client.post("/users", json=ana_payload)
    client.post("/users", json=dict(ana_payload, email="bia@x.com", cpf="11144477735"))

    users = client.get("/users").json()
    assert [user["email"] for user in users] == ["ana@x.com", "bia@x.com"]


def test_get_unknown_user(client):
    res = client.get("/users/5")

    assert res.status_code == 404
    assert res.json() == {"message": "O usuário de ID 5 não foi encontrado no banco de dados."}


def test_get_user_with_non_ascii_digit_id(client, ana_payload):
    client.post("/users", json=ana_payload)

    res = client.get("/users/\u0661")

    assert res.status_code == 404


def test_update_user(client, ana_payload):
    client.post("/users", json=ana_payload)
    body = {key: value for key, value in ana_payload.items() if key not in ("email", "cpf", "password")}
    body["city"] = "Campinas"

    res = client.put("/users/1", json=body)

    assert res.status_code == 200
    assert res.json() == {"message": "Usuário atualizado com sucesso."}
    assert client.get("/users/1").json()["city"] == "Campinas"

    # Old password still works since none was sent
    login = client.post("/users/auth", json={"email": "ana@x.com", "password": "secret1"})
    assert login.status_code == 200


def test_update_missing_user_keeps_row_count(client, ana_payload):
    client.post("/users", json=ana_payload)
    body = {key: value for key, value in ana_payload.items() if key not in ("email", "cpf")}

    res = client.put("/users/99", json=body)

    assert res.status_code == 404
    assert _count_users(client) == 1


def test_update_with_missing_field(client, ana_payload):
    client.post("/users", json=ana_payload)

    res = client.put("/users/1", json={"name": "Ana"})

    assert res.status_code == 400
    assert res.json()["message"].startswith("Preencha todos os campos obrigatórios")


def test_delete_user(client, ana_payload):
    client.post("/users", json=ana_payload)

    res = client.delete("/users/1")

    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Usuário deletado com sucesso!"
    assert body["user"]["email"] == "ana@x.com"
    assert client.get("/users/1").status_code == 404
    assert client.delete("/users/1").status_code == 404


def test_authenticate(client, ana_payload):
    client.post("/users", json=ana_payload)

    res = client.post("/users/auth", json={"email": "ana@x.com", "password": "secret1"})

    assert res.status_code == 200
    body = res.json()
    payload = decode_access_token(body["token"], get_settings().JWT_SECRET)
    assert payload["sub"] == "1"
    assert payload["email"] == "ana@x.com"
    assert body["user"]["id"] == 1
    assert body["user"]["email"] == "ana@x.com"


def test_authenticate_failures_are_indistinguishable(client, ana_payload):
    client.post("/users", json=ana_payload)

    wrong_password = client.post("/users/auth", json={"email": "ana@x.com", "password": "bad"})
    unknown_email = client.post("/users/auth", json={"email": "zed@x.com", "password": "secret1"})

    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json() == {"message": "E-mail ou senha inválidos."}


def test_authenticate_requires_both_fields(client):
    res = client.post("/users/auth", json={"email": "ana@x.com"})

    assert res.status_code == 400
    assert res.json() == {"message": "Preencha ambos os campos."}


def test_store_failure_hides_details_by_default(client, monkeypatch):
    from core.database.gateway import DataStoreGateway
    from core.exceptions import StoreError

    async def broken_execute(self, sql, args=()):
        raise StoreError("Erro ao acessar o banco de dados.", detail="disk I/O error")

    monkeypatch.setattr(DataStoreGateway, "execute", broken_execute)

    res = client.get("/users")

    assert res.status_code == 500
    assert res.json() == {"message": "Erro ao buscar usuários no banco de dados."}


def test_store_failure_details_when_enabled(client, monkeypatch):
    from core.database.gateway import DataStoreGateway
    from core.exceptions import StoreError

    async def broken_execute(self, sql, args=()):
        raise StoreError("Erro ao acessar o banco de dados.", detail="disk I/O error")

    monkeypatch.setattr(DataStoreGateway, "execute", broken_execute)
    monkeypatch.setattr(get_settings(), "EXPOSE_ERROR_DETAILS", True)

    res = client.get("/users/1")

    assert res.status_code == 500
    assert res.json() == {"message": "Erro ao recuperar dados do usuário", "error": "disk I/O error"}
