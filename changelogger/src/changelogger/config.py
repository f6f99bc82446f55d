"""Configuration loading from .changelogger.yaml."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from changelogger.errors import ConfigurationError
from changelogger.messages import DEFAULT_MESSAGES, render_message
from changelogger.utils.io import load_yaml

LOG = logging.getLogger(__name__)

CONFIG_FILE = ".changelogger.yaml"

CURRENT_TOKEN = "{CUR}"
PREVIOUS_TOKEN = "{PREV}"

_NEWLINE_ALIASES = {"lf": "\n", "crlf": "\r\n", "\\n": "\n", "\\r\\n": "\r\n"}


class LinkPattern(BaseModel):
    """URL templates used to synthesise footer links on release."""

    model_config = {"populate_by_name": True}

    first_release: Optional[str] = Field(
        default=None, alias="firstRelease", description="Link for the first ever release."
    )
    normal_release: Optional[str] = Field(
        default=None, alias="normalRelease", description="Link comparing {PREV} to {CUR}."
    )
    unreleased: str = Field(..., description="Link comparing {CUR} to the development head.")

    @staticmethod
    def expand(template: str, current: str, previous: Optional[str] = None) -> str:
        """Substitute the version placeholders in ``template``."""
        url = template.replace(CURRENT_TOKEN, current)
        if previous is not None:
            url = url.replace(PREVIOUS_TOKEN, previous)
        return url

    def release_link(self, current: str, previous: Optional[str]) -> str:
        template = self.first_release if previous is None else self.normal_release
        if template is None:
            raise ConfigurationError()
        return self.expand(template, current, previous)

    def unreleased_link(self, current: str) -> str:
        return self.expand(self.unreleased, current)


class ChangelogConfig(BaseModel):
    """Per-call options: newline style, message table and link patterns."""

    newline: Literal["\n", "\r\n"] = "\n"
    messages: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_MESSAGES))
    links: Optional[LinkPattern] = None

    model_config = {"validate_assignment": True}

    @field_validator("newline", mode="before")
    @classmethod
    def _resolve_newline(cls, value: object) -> object:
        if isinstance(value, str):
            return _NEWLINE_ALIASES.get(value.lower(), value)
        return value

    @field_validator("messages", mode="before")
    @classmethod
    def _merge_messages(cls, value: object) -> object:
        if value is None:
            return dict(DEFAULT_MESSAGES)
        if isinstance(value, dict):
            return {**DEFAULT_MESSAGES, **value}
        return value

    def message(self, message_id: str, **params: object) -> str:
        """Render a message id with the configured table."""
        return render_message(message_id, params, self.messages)


def find_config(start: Optional[Path] = None) -> Optional[Path]:
    """Return the project config in ``start`` (default: cwd), if present."""
    candidate = (start or Path.cwd()) / CONFIG_FILE
    return candidate if candidate.is_file() else None


def load_config(path: Optional[Path] = None) -> ChangelogConfig:
    """Load configuration from ``path`` or the project config file, falling back to defaults."""
    if path is None:
        path = find_config()
        if path is None:
            return ChangelogConfig()
    elif not path.is_file():
        raise FileNotFoundError(f"Config file does not exist: {path}")
    LOG.debug("Loading configuration from %s", path)
    return ChangelogConfig.model_validate(load_yaml(path))


__all__ = [
    "CONFIG_FILE",
    "ChangelogConfig",
    "LinkPattern",
    "find_config",
    "load_config",
]
