"""
Client-side mirrors of catalog and account state.

Each store wraps a CodepathClient and keeps the last loaded data plus
loading/success/error flags. Content and profile loads never fail hard:
when the API is unreachable (or returns no content) the store substitutes
data from its FallbackProvider and explains why in `notice`.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import httpx

from codepath.client.api_client import CodepathClient
from codepath.client.fallback import FallbackProvider, SampleDataFallback
from codepath.domain.common.exceptions import ValidationError
from codepath.domain.common.value_objects.ids import ProgressRecordId
from codepath.domain.learning.entities.progress_record import ProgressRecord
from codepath.domain.learning.services import progress_engine
from codepath.utils import ensure_utc, utc_now

logger = logging.getLogger(__name__)

EMPTY_CONTENT_NOTICE = "No content available from the server yet; showing sample content."
OFFLINE_CONTENT_NOTICE = "Could not reach the content service; showing sample content."
SIGNED_OUT_PROFILE_NOTICE = "Not signed in; showing a sample profile."
OFFLINE_PROFILE_NOTICE = "Could not reach the account service; showing a sample profile."
LOCAL_PROGRESS_NOTICE = "Could not save progress to the server; it was updated locally only."
NOT_AUTHENTICATED = "Not authenticated"


def error_message(error: Exception) -> str:
    """Best human-readable message for a failed request."""
    if isinstance(error, httpx.HTTPStatusError):
        try:
            body = error.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return f"Request failed with status {error.response.status_code}"
    return str(error) or error.__class__.__name__


@dataclass
class RequestState:
    is_loading: bool = False
    is_success: bool = False
    is_error: bool = False
    error_message: str = ""
    notice: str | None = None


@dataclass
class ContentState(RequestState):
    contents: list[dict[str, Any]] = field(default_factory=list)
    selected_content: dict[str, Any] | None = None
    roadmap: dict[str, Any] | None = None
    resources: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class UserState(RequestState):
    profile: dict[str, Any] | None = None
    learning_progress: list[dict[str, Any]] = field(default_factory=list)


class _Store:
    state: RequestState

    def _start(self) -> None:
        self.state.is_loading = True
        self.state.notice = None

    def _succeed(self, notice: str | None = None) -> None:
        self.state.is_loading = False
        self.state.is_success = True
        self.state.is_error = False
        self.state.error_message = ""
        self.state.notice = notice

    def _fail(self, message: str) -> None:
        self.state.is_loading = False
        self.state.is_success = False
        self.state.is_error = True
        self.state.error_message = message

    def reset(self) -> None:
        """Clear status flags and messages; loaded data is kept."""
        self.state.is_loading = False
        self.state.is_success = False
        self.state.is_error = False
        self.state.error_message = ""
        self.state.notice = None


class ContentStore(_Store):
    """Mirror of catalog data for one client session."""

    def __init__(self, client: CodepathClient, fallback: FallbackProvider | None = None) -> None:
        self.client = client
        self.fallback = fallback if fallback is not None else SampleDataFallback()
        self.state = ContentState()

    async def load_by_language(self, language: str) -> list[dict[str, Any]]:
        """
        Load content for a language.

        An empty API result or a failed request falls back to sample content
        for the language and sets a notice.
        """
        if not language or not language.strip():
            self.state.contents = []
            self._succeed()
            return self.state.contents

        key = language.strip().lower()
        self._start()
        try:
            contents = await self.client.list_by_language(key)
        except httpx.HTTPError as e:
            logger.warning(f"Loading {key} content failed, using fallback data: {e!s}")
            self.state.contents = self.fallback.contents_for(key)
            self._succeed(OFFLINE_CONTENT_NOTICE)
            return self.state.contents

        if contents:
            self.state.contents = contents
            self._succeed()
        else:
            self.state.contents = self.fallback.contents_for(key)
            self._succeed(EMPTY_CONTENT_NOTICE if self.state.contents else None)
        return self.state.contents

    async def load_by_id(self, content_id: int | str) -> dict[str, Any] | None:
        """
        Load one content item into selected_content.

        Sample identifiers (non-numeric) are served from the fallback. A
        failed request also tries the fallback before reporting an error.
        """
        self._start()
        if not str(content_id).isdigit():
            return self._select_fallback(content_id, error=None)

        try:
            content = await self.client.get_content(int(content_id))
        except httpx.HTTPError as e:
            logger.warning(f"Loading content {content_id} failed: {e!s}")
            return self._select_fallback(content_id, error=e)

        self.state.selected_content = content
        self._succeed()
        return content

    def _select_fallback(
        self, content_id: int | str, error: Exception | None
    ) -> dict[str, Any] | None:
        content = self.fallback.content_by_id(str(content_id))
        if content is None:
            self._fail(error_message(error) if error else f"Content {content_id} not found")
            return None
        self.state.selected_content = content
        self._succeed(OFFLINE_CONTENT_NOTICE if error else None)
        return content

    async def load_roadmap(self, language: str) -> dict[str, Any] | None:
        self._start()
        try:
            self.state.roadmap = await self.client.get_roadmap(language.strip().lower())
        except httpx.HTTPError as e:
            self._fail(error_message(e))
            return None
        self._succeed()
        return self.state.roadmap

    async def load_resources(
        self, language: str, content_type: str | None = None
    ) -> list[dict[str, Any]]:
        self._start()
        try:
            self.state.resources = await self.client.get_resources(
                language.strip().lower(), content_type
            )
        except httpx.HTTPError as e:
            self._fail(error_message(e))
            return self.state.resources
        self._succeed()
        return self.state.resources

    def clear_selected(self) -> None:
        self.state.selected_content = None


class UserStore(_Store):
    """Mirror of the signed-in user's profile and learning progress."""

    def __init__(self, client: CodepathClient, fallback: FallbackProvider | None = None) -> None:
        self.client = client
        self.fallback = fallback if fallback is not None else SampleDataFallback()
        self.state = UserState()

    def _set_profile(self, profile: dict[str, Any] | None) -> None:
        self.state.profile = profile
        self.state.learning_progress = list((profile or {}).get("learning_progress", []))

    async def load_profile(self) -> dict[str, Any] | None:
        """Load the profile; signed-out or failed loads show the fallback profile."""
        self._start()
        if not self.client.is_authenticated:
            self._set_profile(self.fallback.profile())
            self._succeed(SIGNED_OUT_PROFILE_NOTICE)
            return self.state.profile

        try:
            profile = await self.client.get_profile()
        except httpx.HTTPError as e:
            logger.warning(f"Loading profile failed, using fallback data: {e!s}")
            self._set_profile(self.fallback.profile())
            self._succeed(OFFLINE_PROFILE_NOTICE)
            return self.state.profile

        self._set_profile(profile)
        self._succeed()
        return profile

    async def update_profile(self, **changes: str) -> dict[str, Any] | None:
        self._start()
        if not self.client.is_authenticated:
            self._fail(NOT_AUTHENTICATED)
            return None
        try:
            profile = await self.client.update_profile(**changes)
        except httpx.HTTPError as e:
            self._fail(error_message(e))
            return None
        self._set_profile(profile)
        self._succeed()
        return profile

    async def update_progress(
        self, language: str, completed_topic: str, total_topics: int | None = None
    ) -> dict[str, Any] | None:
        """
        Report a completed topic.

        If the request fails the same progress rules are applied locally to
        the mirrored profile and a notice is set; nothing is queued for sync.

        Args:
            language: Language of the topic
            completed_topic: Topic identifier
            total_topics: Topic count used for the local percentage; defaults
                to the number of fallback items for the language
        """
        self._start()
        if not self.client.is_authenticated:
            self._fail(NOT_AUTHENTICATED)
            return None

        try:
            profile = await self.client.update_progress(language, completed_topic)
        except httpx.HTTPError as e:
            logger.warning(f"Progress update failed, applying locally: {e!s}")
            return self._apply_locally(language, completed_topic, total_topics)

        self._set_profile(profile)
        self._succeed()
        return profile

    def _apply_locally(
        self, language: str, completed_topic: str, total_topics: int | None
    ) -> dict[str, Any] | None:
        key = language.strip().lower()
        if total_topics is None:
            total_topics = len(self.fallback.contents_for(key))

        entries = list(self.state.learning_progress)
        index = next(
            (i for i, entry in enumerate(entries) if entry.get("language", "").lower() == key),
            None,
        )
        current = _record_from_entry(entries[index]) if index is not None else None

        try:
            record = progress_engine.complete_topic(
                key, completed_topic, current, total_topics, utc_now()
            )
        except ValidationError as e:
            self._fail(e.message)
            return None

        entry = _entry_from_record(record)
        if index is None:
            entries.append(entry)
        else:
            entries[index] = entry

        profile = dict(self.state.profile or {})
        profile["learning_progress"] = entries
        self._set_profile(profile)
        self._succeed(LOCAL_PROGRESS_NOTICE)
        return profile


def _record_from_entry(entry: dict[str, Any]) -> ProgressRecord:
    last_accessed = entry.get("last_accessed")
    return ProgressRecord(
        id=ProgressRecordId(0),
        language=entry["language"],
        completed_topics=list(entry.get("completed_topics", [])),
        progress_percent=int(entry.get("progress_percent", 0)),
        current_step=int(entry.get("current_step", 0)),
        last_accessed=ensure_utc(datetime.fromisoformat(last_accessed)) if last_accessed else None,
    )


def _entry_from_record(record: ProgressRecord) -> dict[str, Any]:
    return {
        "language": record.language,
        "completed_topics": list(record.completed_topics),
        "progress_percent": record.progress_percent,
        "current_step": record.current_step,
        "last_accessed": record.last_accessed.isoformat() if record.last_accessed else None,
    }
