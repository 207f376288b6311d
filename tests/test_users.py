def test_me_includes_private_fields_and_counts(client, register, create_idea):
    _, alice = register("alice")
    create_idea(alice)

    me = client.get("/api/users/me", headers=alice).json()

    assert me["email"] == "alice@example.com"
    assert me["ideaCount"] == 1
    assert me["skills"] == []
    assert client.get("/api/users/me").status_code == 401


def test_public_profile_by_username_hides_email(client, register):
    register("alice")

    response = client.get("/api/users/ALICE")

    assert response.status_code == 200
    assert response.json()["username"] == "alice"
    assert "email" not in response.json()
    assert client.get("/api/users/nobody").status_code == 404


def test_update_profile(client, register):
    _, alice = register("alice")

    response = client.put(
        "/api/users/me",
        json={"bio": "Builder of things", "skills": "python, design", "interests": ["climate"], "firstName": ""},
        headers=alice,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["bio"] == "Builder of things"
    assert body["skills"] == ["python", "design"]
    assert body["interests"] == ["climate"]
    assert body["firstName"] == "Test"


def test_user_ideas_hide_private_ones_from_others(client, register, create_idea):
    alice_user, alice = register("alice")
    _, bob = register("bobby")
    create_idea(alice, title="Public one")
    create_idea(alice, title="Secret one", isPublic=False)

    own = client.get(f"/api/users/{alice_user['id']}/ideas", headers=alice).json()
    seen_by_bob = client.get(f"/api/users/{alice_user['id']}/ideas", headers=bob).json()
    anonymous = client.get(f"/api/users/{alice_user['id']}/ideas").json()

    assert [i["title"] for i in own] == ["Secret one", "Public one"]
    assert [i["title"] for i in seen_by_bob] == ["Public one"]
    assert anonymous == seen_by_bob
    assert client.get("/api/users/999/ideas").status_code == 404
