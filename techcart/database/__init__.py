from .session_store import DEFAULT_TOKEN_KEY, FileSessionStore, InMemorySessionStore, SessionStore

__all__ = ["DEFAULT_TOKEN_KEY", "FileSessionStore", "InMemorySessionStore", "SessionStore"]
