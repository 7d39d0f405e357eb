from .store import InMemoryMessageStore

__all__ = ["InMemoryMessageStore"]
