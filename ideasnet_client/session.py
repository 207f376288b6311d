from typing import Optional

from .storage import MemoryTokenStorage, TokenStorage

TOKEN_KEY = "token"


class Session:
    """The signed-in state of one client, backed by an injected storage."""

    def __init__(self, storage: Optional[TokenStorage] = None):
        self.storage = storage or MemoryTokenStorage()

    @property
    def token(self) -> Optional[str]:
        return self.storage.get(TOKEN_KEY)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def login(self, token: str) -> None:
        self.storage.set(TOKEN_KEY, token)

    def logout(self) -> None:
        self.storage.remove(TOKEN_KEY)
