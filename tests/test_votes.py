from models.vote import Vote


def upvotes(client, idea):
    return client.get(f"/api/ideas/{idea['slug']}").json()["upvoteCount"]


def test_vote_then_unvote_restores_count(client, register, create_idea):
    _, alice = register("alice")
    _, bob = register("bobby")
    idea = create_idea(alice)
    before = upvotes(client, idea)

    added = client.post(f"/api/votes/idea/{idea['id']}", json={"type": "UPVOTE"}, headers=bob)
    assert added.status_code == 201
    assert added.json()["voted"] is True
    assert upvotes(client, idea) == before + 1

    removed = client.request("DELETE", f"/api/votes/idea/{idea['id']}", json={"type": "UPVOTE"}, headers=bob)
    assert removed.status_code == 200
    assert removed.json()["voted"] is False
    assert upvotes(client, idea) == before


def test_repeated_vote_is_idempotent(client, db, register, create_idea):
    _, alice = register("alice")
    idea = create_idea(alice)

    first = client.post(f"/api/votes/idea/{idea['id']}", json={"type": "INVEST_INTEREST"}, headers=alice)
    second = client.post(f"/api/votes/idea/{idea['id']}", json={"type": "INVEST_INTEREST"}, headers=alice)

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["voteCounts"]["INVEST_INTEREST"] == 1
    assert db.query(Vote).count() == 1


def test_unvote_without_vote_is_harmless(client, register, create_idea):
    _, alice = register("alice")
    idea = create_idea(alice)

    response = client.delete(f"/api/votes/idea/{idea['id']}?type=WOULD_USE", headers=alice)

    assert response.status_code == 200
    assert response.json()["voteCounts"]["WOULD_USE"] == 0


def test_vote_types_are_independent_and_listed_per_user(client, register, create_idea):
    _, alice = register("alice")
    _, bob = register("bobby")
    idea = create_idea(alice)
    client.post(f"/api/votes/idea/{idea['id']}", json={"type": "UPVOTE"}, headers=bob)
    client.post(f"/api/votes/idea/{idea['id']}", json={"type": "WOULD_USE"}, headers=bob)
    client.post(f"/api/votes/idea/{idea['id']}", headers=alice)

    mine = client.get(f"/api/votes/idea/{idea['id']}/user", headers=bob).json()

    assert sorted(v["type"] for v in mine) == ["UPVOTE", "WOULD_USE"]
    assert upvotes(client, idea) == 2


def test_voting_requires_auth_and_known_type(client, register, create_idea):
    _, alice = register("alice")
    idea = create_idea(alice)

    assert client.post(f"/api/votes/idea/{idea['id']}", json={"type": "UPVOTE"}).status_code == 401
    bad = client.post(f"/api/votes/idea/{idea['id']}", json={"type": "MEH"}, headers=alice)
    assert bad.status_code == 400
    assert bad.json()["fields"] == ["type"]
    assert client.post("/api/votes/idea/999", json={"type": "UPVOTE"}, headers=alice).status_code == 404
