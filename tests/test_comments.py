def post_comment(client, headers, idea_id, content, parent_id=None):
    body = {"ideaId": idea_id, "content": content}
    if parent_id is not None:
        body["parentId"] = parent_id
    response = client.post("/api/comments", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_comment_scenario_and_non_author_delete(client, register, create_idea):
    _, alice = register("alice")
    idea = create_idea(alice)
    bob_user, bob = register("bobby")

    comment = post_comment(client, bob, idea["id"], "Love it")

    listing = client.get(f"/api/comments/idea/{idea['id']}").json()
    assert len(listing) == 1
    assert listing[0]["author"]["id"] == bob_user["id"]
    assert listing[0]["type"] == "FEEDBACK"

    response = client.delete(f"/api/comments/{comment['id']}", headers=alice)
    assert response.status_code == 403


def test_replies_are_nested_and_oldest_first(client, register, create_idea):
    _, alice = register("alice")
    _, bob = register("bobby")
    idea = create_idea(alice)
    parent = post_comment(client, alice, idea["id"], "Question?")
    first = post_comment(client, bob, idea["id"], "Answer one", parent["id"])
    second = post_comment(client, alice, idea["id"], "Answer two", parent["id"])

    listing = client.get(f"/api/comments/idea/{idea['id']}").json()

    assert [c["id"] for c in listing] == [parent["id"]]
    assert [r["id"] for r in listing[0]["replies"]] == [first["id"], second["id"]]


def test_soft_deleted_comment_keeps_its_replies(client, register, create_idea):
    _, alice = register("alice")
    _, bob = register("bobby")
    idea = create_idea(alice)
    parent = post_comment(client, bob, idea["id"], "Parent")
    reply = post_comment(client, alice, idea["id"], "Reply", parent["id"])

    assert client.delete(f"/api/comments/{parent['id']}", headers=bob).status_code == 200

    assert client.get(f"/api/comments/idea/{idea['id']}").json() == []
    replies = client.get(f"/api/comments/{parent['id']}/replies").json()
    assert [r["id"] for r in replies] == [reply["id"]]


def test_deleted_comment_cannot_be_edited_or_deleted_again(client, register, create_idea):
    _, alice = register("alice")
    idea = create_idea(alice)
    comment = post_comment(client, alice, idea["id"], "Oops")
    client.delete(f"/api/comments/{comment['id']}", headers=alice)

    assert client.put(f"/api/comments/{comment['id']}", json={"content": "x"}, headers=alice).status_code == 404
    assert client.delete(f"/api/comments/{comment['id']}", headers=alice).status_code == 404


def test_edit_sets_flag_and_is_author_only(client, register, create_idea):
    _, alice = register("alice")
    _, bob = register("bobby")
    idea = create_idea(alice)
    comment = post_comment(client, alice, idea["id"], "First draft")

    assert client.put(f"/api/comments/{comment['id']}", json={"content": "Hijack"}, headers=bob).status_code == 403

    response = client.put(f"/api/comments/{comment['id']}", json={"content": "Second draft"}, headers=alice)
    assert response.status_code == 200
    assert response.json()["content"] == "Second draft"
    assert response.json()["isEdited"] is True


def test_create_validates_input(client, register, create_idea):
    _, alice = register("alice")
    idea = create_idea(alice)
    other_idea = create_idea(alice, title="Other")
    foreign_parent = post_comment(client, alice, other_idea["id"], "Elsewhere")

    missing = client.post("/api/comments", json={"content": ""}, headers=alice)
    assert missing.status_code == 400
    assert missing.json()["fields"] == ["content", "ideaId"]

    assert client.post("/api/comments", json={"ideaId": 999, "content": "hi"}, headers=alice).status_code == 404

    mismatch = client.post(
        "/api/comments",
        json={"ideaId": idea["id"], "content": "hi", "parentId": foreign_parent["id"]},
        headers=alice,
    )
    assert mismatch.status_code == 400
    assert mismatch.json()["fields"] == ["parentId"]

    assert client.post("/api/comments", json={"ideaId": idea["id"], "content": "hi"}).status_code == 401


def test_comments_on_private_idea_hidden_from_others(client, register, create_idea):
    _, alice = register("alice")
    _, bob = register("bobby")
    idea = create_idea(alice, isPublic=False)
    post_comment(client, alice, idea["id"], "Note to self")

    assert client.get(f"/api/comments/idea/{idea['id']}", headers=bob).status_code == 404
    assert len(client.get(f"/api/comments/idea/{idea['id']}", headers=alice).json()) == 1
    assert client.post("/api/comments", json={"ideaId": idea["id"], "content": "hi"}, headers=bob).status_code == 404
