"""Read-only accessor over a merged config tree."""

from __future__ import annotations

from typing import Any

from enx.core.constants import PATH_SEPARATOR

_MISSING = object()


def parse_bool(val: Any) -> bool | None:
    """Parse a config or env value to bool; None if not a recognized bool."""
    if isinstance(val, bool):
        return val
    v = str(val).strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off", ""):
        return False
    return None


class Config:
    """Dot-path access to a merged config (values from dotenv files are strings)."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = data or {}

    @property
    def raw(self) -> dict[str, Any]:
        """Underlying merged tree."""
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Get value by dot-separated path (e.g. 'db.replicas.0')."""
        obj: Any = self._data
        for part in key.split(PATH_SEPARATOR):
            if isinstance(obj, dict) and part in obj:
                obj = obj[part]
            elif isinstance(obj, list) and part.isdecimal() and int(part) < len(obj):
                obj = obj[int(part)]
            else:
                return default
        return obj

    def get_bool(self, key: str, default: bool = False) -> bool:
        val = self.get(key, _MISSING)
        if val is _MISSING:
            return default
        parsed = parse_bool(val)
        return default if parsed is None else parsed

    def get_int(self, key: str, default: int = 0) -> int:
        val = self.get(key)
        if val is None or isinstance(val, bool):
            return default
        try:
            return int(val)
        except (TypeError, ValueError):
            return default

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING
