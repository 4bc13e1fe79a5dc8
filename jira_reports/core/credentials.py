"""Load Jira credentials from the environment, a YAML file, or an interactive prompt."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from pathlib import Path

import typer
import yaml

from .config import (
    CONFIG_KEY_API_KEY,
    CONFIG_KEY_URL,
    CONFIG_KEY_USERNAME,
    DEFAULT_CONFIG_PATH,
    ENV_JIRA_API_KEY,
    ENV_JIRA_URL,
    ENV_JIRA_USERNAME,
)
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

Prompt = Callable[..., str]

# (config key, env variable, prompt label, hidden input)
_FIELDS = (
    (CONFIG_KEY_URL, ENV_JIRA_URL, "Jira URL", False),
    (CONFIG_KEY_USERNAME, ENV_JIRA_USERNAME, "Jira Username", False),
    (CONFIG_KEY_API_KEY, ENV_JIRA_API_KEY, "Jira API Key", True),
)


@dataclass(slots=True, frozen=True)
class JiraCredentials:
    url: str
    username: str
    api_key: str


def load_config_file(path: str | Path) -> dict[str, str]:
    yaml_path = Path(path)
    if not yaml_path.exists():
        return {}
    try:
        data = yaml.safe_load(yaml_path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid config file {yaml_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {yaml_path} must contain a mapping")
    return {str(k): str(v) for k, v in data.items() if v is not None}


def save_config_file(path: str | Path, values: Mapping[str, str]) -> None:
    yaml_path = Path(path)
    yaml_path.write_text(yaml.safe_dump(dict(values), default_flow_style=False))
    yaml_path.chmod(0o600)


def load_credentials(
    config_path: str | Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    prompt: Prompt | None = typer.prompt,
) -> JiraCredentials:
    """Resolve each credential from env first, then the config file, then a prompt.

    Values obtained by prompting are written back to the config file so the
    next run does not ask again. Pass ``prompt=None`` to fail instead of asking.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    env = os.environ if env is None else env
    stored = load_config_file(path)
    values: dict[str, str] = {}
    prompted = False
    for key, env_name, label, hidden in _FIELDS:
        value = env.get(env_name) or stored.get(key)
        if not value:
            if prompt is None:
                raise ConfigurationError(f"You need to specify a {label} ({env_name} or {key} in {path})")
            value = prompt(label, hide_input=hidden).strip()
            if not value:
                raise ConfigurationError(f"You need to specify a {label}")
            prompted = True
        values[key] = value

    if prompted:
        try:
            save_config_file(path, {**stored, **values})
        except OSError as exc:
            logger.warning("Could not save credentials to %s: %s", path, exc)
    return JiraCredentials(
        url=values[CONFIG_KEY_URL],
        username=values[CONFIG_KEY_USERNAME],
        api_key=values[CONFIG_KEY_API_KEY],
    )
