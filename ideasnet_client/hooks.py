from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlparse

from .api import ApiClient, ApiError
from .queries import QueryCache


class IdeasNetQueries:
    """Page-level data access: cached reads plus mutations that invalidate them."""

    def __init__(self, api: ApiClient, cache: Optional[QueryCache] = None):
        self.api = api
        self.cache = cache or QueryCache()

    # ---------------------- auth ----------------------
    def register(self, **fields: Any) -> Dict[str, Any]:
        data = self.api.post("/api/auth/register", json=fields)
        self.api.session.login(data["token"])
        return data

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self.api.post("/api/auth/login", json={"email": email, "password": password})
        self.api.session.login(data["token"])
        self.cache.clear()
        return data

    def logout(self) -> None:
        self.api.session.logout()
        self.cache.clear()

    def complete_oauth_callback(self, callback_url: str) -> Dict[str, Any]:
        """Store the `token` the OAuth redirect carried and return the verified user."""
        query = parse_qs(urlparse(callback_url).query)
        if "error" in query:
            raise ApiError(401, query["error"][0])
        tokens = query.get("token")
        if not tokens:
            raise ApiError(401, "No token provided")
        self.api.session.login(tokens[0])
        return self.api.get("/api/auth/verify")["user"]

    # ---------------------- ideas ----------------------
    def ideas(self) -> List[Dict[str, Any]]:
        return self.cache.fetch(("ideas",), lambda: self.api.get("/api/ideas"))

    def idea(self, slug: str) -> Dict[str, Any]:
        return self.cache.fetch(("idea", slug), lambda: self.api.get(f"/api/ideas/{slug}"))

    def user_ideas(self, user_id: int) -> List[Dict[str, Any]]:
        return self.cache.fetch(("userIdeas", user_id), lambda: self.api.get(f"/api/users/{user_id}/ideas"))

    def create_idea(self, **fields: Any) -> Dict[str, Any]:
        idea = self.api.post("/api/ideas", json=fields)
        self.cache.invalidate("ideas")
        self.cache.invalidate("userIdeas")
        return idea

    def delete_idea(self, idea: Dict[str, Any]) -> None:
        self.api.delete(f"/api/ideas/{idea['id']}")
        self.cache.invalidate("ideas")
        self.cache.invalidate("idea", idea["slug"])
        self.cache.invalidate("userIdeas")

    # ---------------------- comments ----------------------
    def comments(self, idea_id: int) -> List[Dict[str, Any]]:
        return self.cache.fetch(("comments", idea_id), lambda: self.api.get(f"/api/comments/idea/{idea_id}"))

    def post_comment(self, idea_id: int, content: str, parent_id: Optional[int] = None) -> Dict[str, Any]:
        body: Dict[str, Any] = {"ideaId": idea_id, "content": content}
        if parent_id is not None:
            body["parentId"] = parent_id
        comment = self.api.post("/api/comments", json=body)
        self.cache.invalidate("comments", idea_id)
        self.cache.invalidate("ideas")
        self.cache.invalidate("userIdeas")
        return comment

    # ---------------------- votes ----------------------
    def user_votes(self, idea_id: int) -> List[Dict[str, Any]]:
        if not self.api.session.is_authenticated:
            return []
        try:
            return self.cache.fetch(
                ("userVotes", idea_id),
                lambda: self.api.get(f"/api/votes/idea/{idea_id}/user"),
                retry=0,
            )
        except ApiError:
            return []

    def vote(self, idea: Dict[str, Any], vote_type: str, voted: bool) -> Dict[str, Any]:
        """Add the vote when `voted` is False, remove it otherwise."""
        path = f"/api/votes/idea/{idea['id']}"
        if voted:
            result = self.api.delete(path, json={"type": vote_type})
        else:
            result = self.api.post(path, json={"type": vote_type})
        self.cache.invalidate("idea", idea["slug"])
        self.cache.invalidate("userVotes", idea["id"])
        self.cache.invalidate("ideas")
        self.cache.invalidate("userIdeas")
        return result
