"""Configuration loading: TOML file + environment variable overlay."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]


DEFAULT_CONFIG_DIR = Path.home() / ".config" / "editbench"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"

DEFAULT_MODEL = "claude-3-7-sonnet-20250219"
DEFAULT_INSTRUCTION = "Refactor the code to be more readable and maintainable."


DEFAULT_CONFIG_TOML = """\
[providers.anthropic]
api_key_env = "ANTHROPIC_API_KEY"
default_model = "claude-3-7-sonnet-20250219"

[agent]
provider = "anthropic"
max_tokens = 4096
tool_type = "text_editor_20250124"
tool_name = "str_replace_editor"
# 0 disables the round limit
max_rounds = 50
default_instruction = "Refactor the code to be more readable and maintainable."

[editor]
backup_suffix = ".backup"
encoding = "utf-8"
"""


@dataclass
class ProviderConfig:
    api_key_env: str = ""
    api_key: str = ""
    default_model: str = ""


@dataclass
class AgentConfig:
    provider: str = "anthropic"
    model: str = ""
    max_tokens: int = 4096
    tool_type: str = "text_editor_20250124"
    tool_name: str = "str_replace_editor"
    max_rounds: int = 50
    default_instruction: str = DEFAULT_INSTRUCTION

    @property
    def tool_definition(self) -> dict:
        return {"type": self.tool_type, "name": self.tool_name}


@dataclass
class EditorConfig:
    backup_suffix: str = ".backup"
    encoding: str = "utf-8"


@dataclass
class AppConfig:
    providers: dict[str, ProviderConfig] = field(default_factory=dict)
    agent: AgentConfig = field(default_factory=AgentConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)
    config_path: Path = DEFAULT_CONFIG_PATH

    @property
    def resolved_model(self) -> str:
        """Model for the agent: explicit agent.model, else the provider default."""
        if self.agent.model:
            return self.agent.model
        prov = self.providers.get(self.agent.provider)
        if prov and prov.default_model:
            return prov.default_model
        return DEFAULT_MODEL

    @property
    def api_key(self) -> str:
        prov = self.providers.get(self.agent.provider)
        return prov.api_key if prov else ""


def _check_max_rounds(value: object, source: str) -> int:
    """Round limits are non-negative integers; 0 disables the limit."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{source} must be a non-negative integer, got {value!r}")
    return value


def _env_overlay(config: AppConfig) -> None:
    """Override config values with environment variables where applicable."""
    # Resolve API keys from env vars
    for name, prov in config.providers.items():
        if prov.api_key_env:
            prov.api_key = os.environ.get(prov.api_key_env, "")

    if model := os.environ.get("EDITBENCH_MODEL"):
        config.agent.model = model
    if max_rounds := os.environ.get("EDITBENCH_MAX_ROUNDS"):
        try:
            value = int(max_rounds)
        except ValueError:
            raise ValueError(
                f"EDITBENCH_MAX_ROUNDS must be an integer, got {max_rounds!r}"
            ) from None
        config.agent.max_rounds = _check_max_rounds(value, "EDITBENCH_MAX_ROUNDS")


def _parse_provider(data: dict) -> ProviderConfig:
    return ProviderConfig(
        api_key_env=data.get("api_key_env", ""),
        default_model=data.get("default_model", ""),
    )


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from TOML file with env var overlay."""
    path = config_path or DEFAULT_CONFIG_PATH

    if path.exists():
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    else:
        raw = tomllib.loads(DEFAULT_CONFIG_TOML)

    providers_raw = raw.get("providers", {})
    agent_raw = raw.get("agent", {})
    editor_raw = raw.get("editor", {})

    config = AppConfig(
        providers={name: _parse_provider(data) for name, data in providers_raw.items()},
        agent=AgentConfig(
            provider=agent_raw.get("provider", "anthropic"),
            model=agent_raw.get("model", ""),
            max_tokens=agent_raw.get("max_tokens", 4096),
            tool_type=agent_raw.get("tool_type", "text_editor_20250124"),
            tool_name=agent_raw.get("tool_name", "str_replace_editor"),
            max_rounds=_check_max_rounds(
                agent_raw.get("max_rounds", 50), "agent.max_rounds"
            ),
            default_instruction=agent_raw.get("default_instruction", DEFAULT_INSTRUCTION),
        ),
        editor=EditorConfig(
            backup_suffix=editor_raw.get("backup_suffix", ".backup"),
            encoding=editor_raw.get("encoding", "utf-8"),
        ),
        config_path=path,
    )

    # A config file without a providers table still gets the default key lookup
    if "anthropic" not in config.providers:
        config.providers["anthropic"] = ProviderConfig(
            api_key_env="ANTHROPIC_API_KEY", default_model=DEFAULT_MODEL
        )

    _env_overlay(config)
    return config


def init_config(config_path: Path | None = None) -> Path:
    """Create default config file."""
    path = config_path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG_TOML)
    return path
