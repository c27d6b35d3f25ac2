"""Runner context: the event payload and the target repository.

GitHub Actions writes the webhook payload to the file named by
GITHUB_EVENT_PATH and sets GITHUB_REPOSITORY to ``owner/repo``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping

from prbranch.models import PullRequestEvent, RepositoryCoordinates

log = logging.getLogger("prbranch.event")


def parse_event(payload: Dict[str, Any]) -> PullRequestEvent:
    """Build PullRequestEvent from a webhook payload dict."""
    return PullRequestEvent.model_validate(payload or {})


def load_event(path: Path) -> PullRequestEvent:
    """Read and parse the event JSON file."""
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise ValueError(f"Event payload in {path} is not a JSON object")
    return parse_event(raw)


def event_path_from_env(env: Mapping[str, str]) -> Path | None:
    """Event file named by GITHUB_EVENT_PATH, if set."""
    value = env.get("GITHUB_EVENT_PATH")
    return Path(value) if value else None


def resolve_repository(
    explicit: str | None,
    env: Mapping[str, str],
    event: PullRequestEvent | None = None,
) -> RepositoryCoordinates | None:
    """Pick the repository: explicit value, then GITHUB_REPOSITORY, then the
    event's repository.full_name."""
    slug = explicit or env.get("GITHUB_REPOSITORY")
    if not slug and event is not None and event.repository is not None:
        slug = event.repository.full_name
    if not slug:
        return None
    log.debug("Target repository: %s", slug)
    return RepositoryCoordinates.from_slug(slug)
