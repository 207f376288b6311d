import httpx
import pytest

from ideasnet_client import (
    ApiClient, ApiError, FileTokenStorage, IdeasNetQueries, MemoryTokenStorage, NetworkError, QueryCache, Session,
)


def make_client(handler, token=None, on_unauthorized=None):
    storage = MemoryTokenStorage({"token": token} if token else None)
    return ApiClient(
        base_url="http://api.test",
        session=Session(storage),
        on_unauthorized=on_unauthorized,
        transport=httpx.MockTransport(handler),
    )


def test_bearer_token_is_attached():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"ok": True})

    api = make_client(handler, token="abc")

    assert api.get("/api/ideas") == {"ok": True}
    assert seen["auth"] == "Bearer abc"


def test_401_clears_token_and_calls_back():
    redirects = []
    api = make_client(
        lambda request: httpx.Response(401, json={"error": "Invalid token"}),
        token="stale",
        on_unauthorized=lambda: redirects.append("/login"),
    )

    with pytest.raises(ApiError) as excinfo:
        api.get("/api/auth/verify")

    assert excinfo.value.status_code == 401
    assert api.session.token is None
    assert redirects == ["/login"]


def test_error_payload_is_structured():
    api = make_client(lambda request: httpx.Response(
        400, json={"error": "Username too short", "message": "At least 3", "fields": ["username"]}
    ))

    with pytest.raises(ApiError) as excinfo:
        api.post("/api/auth/register", json={})

    assert excinfo.value.fields == ["username"]
    assert excinfo.value.text == "At least 3"


def test_transport_failure_is_a_network_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(NetworkError):
        make_client(handler).get("/api/ideas")


def test_query_cache_retries_server_errors_only():
    calls = []

    def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise ApiError(503, "Unavailable")
        return ["idea"]

    cache = QueryCache(retry=2, retry_delay=0)

    assert cache.fetch(("ideas",), flaky) == ["idea"]
    assert len(calls) == 3
    assert cache.fetch(("ideas",), flaky) == ["idea"]
    assert len(calls) == 3

    def not_found():
        calls.append(1)
        raise ApiError(404, "Idea not found")

    with pytest.raises(ApiError):
        cache.fetch(("idea", "x"), not_found)
    assert len(calls) == 4


def test_invalidate_by_prefix():
    cache = QueryCache()
    cache.set(("comments", 1), [])
    cache.set(("comments", 2), [])
    cache.set(("idea", "a"), {})

    assert cache.invalidate("comments", 1) == 1
    assert ("comments", 2) in cache
    assert cache.invalidate("comments") == 1
    assert ("idea", "a") in cache


def test_posting_a_comment_refetches_that_ideas_comments():
    comments = []

    def handler(request):
        if request.method == "POST":
            comments.append({"id": len(comments) + 1})
            return httpx.Response(201, json=comments[-1])
        return httpx.Response(200, json=list(comments))

    queries = IdeasNetQueries(make_client(handler, token="abc"), QueryCache(retry_delay=0))
    queries.cache.set(("ideas",), [{"id": 7, "commentCount": 0}])

    assert queries.comments(7) == []
    queries.post_comment(7, "hello")
    assert queries.comments(7) == [{"id": 1}]
    assert ("ideas",) not in queries.cache


def test_vote_uses_post_or_delete_and_invalidates():
    requests = []

    def handler(request):
        requests.append((request.method, request.url.path, request.content))
        return httpx.Response(200, json={"voted": request.method == "POST"})

    queries = IdeasNetQueries(make_client(handler, token="abc"), QueryCache(retry_delay=0))
    idea = {"id": 3, "slug": "big-idea-abcde"}
    queries.cache.set(("idea", idea["slug"]), idea)
    queries.cache.set(("ideas",), [idea])

    queries.vote(idea, "UPVOTE", voted=False)
    queries.vote(idea, "UPVOTE", voted=True)

    assert [r[0] for r in requests] == ["POST", "DELETE"]
    assert all(r[1] == "/api/votes/idea/3" for r in requests)
    assert b"UPVOTE" in requests[1][2]
    assert ("idea", idea["slug"]) not in queries.cache
    assert ("ideas",) not in queries.cache


def test_oauth_callback_stores_token_and_verifies():
    def handler(request):
        assert request.headers["Authorization"] == "Bearer from-redirect"
        return httpx.Response(200, json={"user": {"id": 1}})

    queries = IdeasNetQueries(make_client(handler))

    user = queries.complete_oauth_callback("http://client.test/auth/callback?token=from-redirect")

    assert user == {"id": 1}
    assert queries.api.session.token == "from-redirect"


def test_oauth_callback_error():
    queries = IdeasNetQueries(make_client(lambda request: httpx.Response(200)))

    with pytest.raises(ApiError):
        queries.complete_oauth_callback("http://client.test/login?error=oauth_failed")


def test_user_votes_are_empty_when_signed_out():
    queries = IdeasNetQueries(make_client(lambda request: httpx.Response(500)))

    assert queries.user_votes(1) == []


def test_file_storage_survives_new_session(tmp_path):
    path = str(tmp_path / "state" / "session.json")
    Session(FileTokenStorage(path)).login("persisted")

    session = Session(FileTokenStorage(path))
    assert session.token == "persisted"

    session.logout()
    assert Session(FileTokenStorage(path)).is_authenticated is False
