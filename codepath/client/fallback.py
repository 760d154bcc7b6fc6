"""Offline stand-in data for the client stores."""

import copy
import json
from importlib import resources
from pathlib import Path
from typing import Any, Protocol


class FallbackProvider(Protocol):
    """Source of substitute data when the API is unreachable or empty."""

    def contents_for(self, language: str) -> list[dict[str, Any]]: ...

    def content_by_id(self, content_id: str) -> dict[str, Any] | None: ...

    def profile(self) -> dict[str, Any] | None: ...


class StaticFallback:
    """Fallback backed by in-memory data, keyed by lower-cased language."""

    def __init__(
        self,
        contents: dict[str, list[dict[str, Any]]] | None = None,
        profile: dict[str, Any] | None = None,
    ) -> None:
        self._contents = {key.lower(): list(items) for key, items in (contents or {}).items()}
        self._profile = profile

    def contents_for(self, language: str) -> list[dict[str, Any]]:
        return [dict(item) for item in self._contents.get(language.strip().lower(), [])]

    def content_by_id(self, content_id: str) -> dict[str, Any] | None:
        for items in self._contents.values():
            for item in items:
                if str(item.get("id")) == str(content_id):
                    return dict(item)
        return None

    def profile(self) -> dict[str, Any] | None:
        if self._profile is None:
            return None
        return copy.deepcopy(self._profile)


class EmptyFallback(StaticFallback):
    """Fallback with no data; failures surface as empty results."""

    def __init__(self) -> None:
        super().__init__()


class SampleDataFallback(StaticFallback):
    """Sample catalog and profile shipped with the package (or read from a JSON file)."""

    def __init__(self, path: str | Path | None = None) -> None:
        if path is None:
            raw = resources.files("codepath.client").joinpath("data/sample_data.json").read_text(
                encoding="utf-8"
            )
        else:
            raw = Path(path).read_text(encoding="utf-8")
        data = json.loads(raw)
        super().__init__(contents=data.get("contents"), profile=data.get("profile"))
