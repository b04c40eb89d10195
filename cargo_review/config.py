"""
Action configuration read from the GitHub Actions environment.

- RUNNER_DEBUG: "1" enables debug logging and cargo output
- INPUT_ARGS: extra flags passed to `cargo audit`
- INPUT_GITHUB_TOKEN: token used to submit the review
- INPUT_MANIFEST_PATH: manifest to anchor comments on (default: Cargo.toml)
- GITHUB_REPOSITORY, GITHUB_EVENT_PATH, GITHUB_SHA, GITHUB_API_URL
"""
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_MANIFEST_PATH = "Cargo.toml"


class ConfigError(Exception):
    pass


@dataclass
class Config:
    is_debug: bool = False
    args: str = ""
    token: Optional[str] = None
    owner: Optional[str] = None
    repository: Optional[str] = None
    event: Dict[str, Any] = field(default_factory=dict)
    sha: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    manifest_path: str = DEFAULT_MANIFEST_PATH

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "Config":
        owner, repository = None, None
        full_name = environ.get("GITHUB_REPOSITORY", "")
        if "/" in full_name:
            owner, repository = full_name.split("/", 1)

        return cls(
            is_debug=environ.get("RUNNER_DEBUG") == "1",
            args=environ.get("INPUT_ARGS", ""),
            token=environ.get("INPUT_GITHUB_TOKEN") or None,
            owner=owner,
            repository=repository,
            event=_load_event(environ.get("GITHUB_EVENT_PATH")),
            sha=environ.get("GITHUB_SHA") or None,
            api_url=(environ.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
            manifest_path=environ.get("INPUT_MANIFEST_PATH") or DEFAULT_MANIFEST_PATH,
        )

    @property
    def pull_request_number(self) -> Optional[int]:
        pull_request = self.event.get("pull_request")
        if not pull_request:
            return None
        return pull_request.get("number")

    def require_review_context(self) -> None:
        missing = [
            label
            for label, value in (
                ("GITHUB_REPOSITORY", self.owner and self.repository),
                ("github_token input", self.token),
                ("pull request number", self.pull_request_number),
            )
            if not value
        ]
        if missing:
            raise ConfigError(f"Cannot submit a review, missing: {', '.join(missing)}")


def _load_event(path: Optional[str]) -> Dict[str, Any]:
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            event = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logging.error(f"Event payload error: {e}")
        raise ConfigError(f"Fail to read event payload {path}: {e}") from e

    logging.debug(f"Event payload read from {path}.")
    return event
