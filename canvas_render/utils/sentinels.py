from __future__ import annotations


class _NotProvided:
    """Marks a configuration argument the caller left untouched."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NotProvided"

    def __bool__(self) -> bool:
        return False


NotProvided = _NotProvided()
