from app.models import UserRole

def register(client, username, password="password1"):
    res = client.post("/api/users/register", json={"username": username, "password": password})
    assert res.status_code == 201, res.text
    data = res.json()
    return data["user"]["id"], {"Authorization": f"Bearer {data['access_token']}"}

def test_register_and_login(client):
    user_id, _ = register(client, "alice")

    res = client.post("/api/users/login", json={"username": "alice", "password": "password1"})
    assert res.status_code == 200
    data = res.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == user_id
    assert data["user"]["last_login"] is not None
    assert "password_hash" not in data["user"]

    res = client.get("/api/users/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert res.json()["name"] == "alice"

def test_login_with_bad_credentials(client):
    register(client, "alice")

    for username, password in (("alice", "wrong-one"), ("ghost", "password1")):
        res = client.post("/api/users/login", json={"username": username, "password": password})
        assert res.status_code == 401
        assert res.json()["error_code"] == "INVALID_CREDENTIALS"

def test_register_duplicate_and_invalid(client):
    register(client, "alice")

    res = client.post("/api/users/register", json={"username": "alice", "password": "password2"})
    assert res.status_code == 409
    assert res.json()["error_code"] == "USERNAME_TAKEN"

    res = client.post("/api/users/register", json={"username": "bob", "password": "123"})
    assert res.status_code == 400
    assert res.json()["context"]["field"] == "password"

def test_check_username(client):
    register(client, "alice")

    assert client.get("/api/users/check-username", params={"username": "alice"}).json()["available"] is False
    assert client.get("/api/users/check-username", params={"username": "bob"}).json()["available"] is True

def test_user_lookup_requires_admin(client, db, alice, bob, bearer):
    res = client.get(f"/api/users/{bob.id}", headers=bearer(alice))
    assert res.status_code == 403

    alice.role = UserRole.ADMIN
    db.commit()

    assert client.get(f"/api/users/{bob.id}", headers=bearer(alice)).json()["name"] == "bob"
    assert client.get("/api/users/by-username/bob", headers=bearer(alice)).json()["id"] == bob.id
    res = client.get("/api/users/999", headers=bearer(alice))
    assert res.status_code == 404
    assert res.json()["error_code"] == "USER_NOT_FOUND"

def test_todos_require_valid_token(client):
    assert client.get("/api/todos").status_code in (401, 403)
    assert client.get("/api/todos", headers={"Authorization": "Bearer garbage"}).status_code == 401

def test_example_scenario_over_http(client):
    _, alice = register(client, "alice")
    _, bob = register(client, "bob")

    res = client.post("/api/todos", json={"title": "Write report"}, headers=alice)
    assert res.status_code == 201
    report = res.json()

    res = client.post("/api/todos", json={"title": "Draft outline", "parent_id": report["id"]}, headers=alice)
    assert res.status_code == 201
    outline = res.json()
    assert outline["parent"]["title"] == "Write report"
    assert outline["owner"]["name"] == "alice"

    res = client.get(f"/api/todos/{outline['id']}", headers=bob)
    assert res.status_code == 403
    body = res.json()
    assert body["error_code"] == "OWNERSHIP_VIOLATION"
    assert body["context"]["resource_id"] == outline["id"]

    assert client.delete(f"/api/todos/{report['id']}", headers=alice).status_code == 204

    for todo_id in (report["id"], outline["id"]):
        res = client.get(f"/api/todos/{todo_id}", headers=alice)
        assert res.status_code == 404
        assert res.json()["error_code"] == "TODO_NOT_FOUND"

def test_hierarchy_listings(client):
    _, alice = register(client, "alice")
    root = client.post("/api/todos", json={"title": "Root"}, headers=alice).json()
    child = client.post("/api/todos", json={"title": "Child", "parent_id": root["id"]}, headers=alice).json()

    assert [t["id"] for t in client.get("/api/todos", headers=alice).json()] == [root["id"], child["id"]]
    assert [t["id"] for t in client.get("/api/todos/main", headers=alice).json()] == [root["id"]]
    subtodos = client.get(f"/api/todos/{root['id']}/subtodos", headers=alice).json()
    assert [t["id"] for t in subtodos] == [child["id"]]

def test_create_ignores_owner_and_rejects_foreign_parent(client):
    alice_id, alice = register(client, "alice")
    bob_id, bob = register(client, "bob")
    bobs = client.post("/api/todos", json={"title": "Bob's"}, headers=bob).json()

    res = client.post("/api/todos", json={"title": "Mine", "owner_id": bob_id}, headers=alice)
    assert res.json()["owner_id"] == alice_id

    res = client.post("/api/todos", json={"title": "Attach", "parent_id": bobs["id"]}, headers=alice)
    assert res.status_code == 403

def test_create_validation_errors(client):
    _, alice = register(client, "alice")

    res = client.post("/api/todos", json={"title": "   "}, headers=alice)
    assert res.status_code == 400
    assert res.json()["error_code"] == "REQUIRED_FIELD"
    assert res.json()["context"]["field"] == "title"

    res = client.post("/api/todos", json={"description": "no title"}, headers=alice)
    assert res.status_code == 422

def test_update_ignores_protected_fields(client):
    alice_id, alice = register(client, "alice")
    _, bob = register(client, "bob")
    root = client.post("/api/todos", json={"title": "Root"}, headers=alice).json()
    child = client.post("/api/todos", json={"title": "Child", "parent_id": root["id"]}, headers=alice).json()

    res = client.patch(
        f"/api/todos/{child['id']}",
        json={"title": "Renamed", "progress": 30, "owner_id": 999, "parent_id": None, "created_at": "2000-01-01T00:00:00"},
        headers=alice,
    )
    assert res.status_code == 200
    updated = res.json()
    assert updated["title"] == "Renamed"
    assert updated["progress"] == 30
    assert updated["owner_id"] == alice_id
    assert updated["parent_id"] == root["id"]
    assert updated["created_at"] == child["created_at"]
    assert updated["updated_at"] > child["updated_at"]

    res = client.put(f"/api/todos/{child['id']}", json={"completed": True}, headers=bob)
    assert res.status_code == 403

def test_search_overdue_and_stats(client):
    _, alice = register(client, "alice")
    client.post("/api/todos", json={"title": "Pay rent", "due_date": "2001-01-01T00:00:00"}, headers=alice)
    client.post("/api/todos", json={"title": "Read book", "completed": True}, headers=alice)

    assert [t["title"] for t in client.get("/api/todos/search", params={"q": "RENT"}, headers=alice).json()] == ["Pay rent"]
    assert [t["title"] for t in client.get("/api/todos/overdue", headers=alice).json()] == ["Pay rent"]
    assert client.get("/api/todos/stats", headers=alice).json() == {"total": 2, "completed": 1, "pending": 1, "overdue": 1}

def test_health_reports_database_and_pool(client):
    res = client.get("/health")

    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert "pool_class" in body["pool_stats"]
