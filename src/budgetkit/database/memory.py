"""In-memory property store."""

from typing import Optional

from budgetkit.database.base import PropertyStore


class InMemoryPropertyStore(PropertyStore):
    """Dictionary-backed property store for scratch work and tests."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> bool:
        return self._values.pop(key, None) is not None

    def list(self) -> dict[str, str]:
        return dict(sorted(self._values.items()))
