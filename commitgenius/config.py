"""Configuration management for commit-genius."""
import json
import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from rich.console import Console
from rich.markup import escape

from .commit_message.strategy import DEFAULT_MODEL
from .errors import MissingApiKeyError
from .models import PrefixFormat

ENV_API_KEY = "COMMIT_GENIUS_API_KEY"
ENV_MODEL = "COMMIT_GENIUS_MODEL"
LEGACY_ENV_API_KEY = "GEMINI_API_KEY"
LEGACY_ENV_MODEL = "GEMINI_MODEL"
ENV_CONFIG_PATH = "COMMIT_GENIUS_CONFIG"

CONFIG_FILENAME = ".commit-genius.json"
ENV_FILENAME = ".env"


class ConfigFile(BaseModel):
    """Schema of the global JSON configuration file."""

    model_config = ConfigDict(extra="ignore")

    api_key: Optional[str] = Field(default=None, alias="apiKey")
    model: Optional[str] = Field(default=None, alias="model")
    prefix_format: Optional[PrefixFormat] = Field(default=None, alias="prefixFormat")
    auto_prefix_from_branch: Optional[bool] = Field(default=None, alias="autoPrefixFromBranch")

    @field_validator("api_key", "model")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    @classmethod
    def known_keys(cls) -> List[str]:
        return [field.alias for field in cls.model_fields.values()]


def load_env_file(directory: Path) -> Optional[Path]:
    """Load ``directory/.env`` into the process environment, if there is one.

    Variables that are already set are not overridden, so the file only fills
    in the environment tiers of the precedence order.
    """
    path = directory / ENV_FILENAME
    if not path.is_file():
        return None
    load_dotenv(path, override=False)
    return path


def config_candidates(environ: Optional[Mapping[str, str]] = None) -> List[Path]:
    """Config file locations, in the order they are tried."""
    environ = os.environ if environ is None else environ
    home = Path(environ.get("HOME") or Path.home())
    xdg_config = Path(environ.get("XDG_CONFIG_HOME") or home / ".config")

    candidates = []
    if environ.get(ENV_CONFIG_PATH):
        candidates.append(Path(environ[ENV_CONFIG_PATH]).expanduser())
    candidates.append(home / CONFIG_FILENAME)
    candidates.append(xdg_config / "commit-genius" / "config.json")
    return candidates


def load_config_file(
    candidates: Sequence[Path], console: Optional[Console] = None
) -> Tuple[Optional[Path], Optional[ConfigFile]]:
    """Return the first existing, valid config file.

    Unreadable or invalid files are reported and skipped.
    """
    console = console or Console()
    for path in candidates:
        if not path.is_file():
            continue

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            console.print(f"[yellow]Warning: Skipping config file {escape(str(path))}: {escape(str(e))}[/yellow]")
            continue

        if not isinstance(data, dict):
            console.print(f"[yellow]Warning: Skipping config file {escape(str(path))}: expected a JSON object[/yellow]")
            continue

        unknown = sorted(set(data) - set(ConfigFile.known_keys()))
        if unknown:
            console.print(f"[yellow]Warning: Ignoring unknown keys in {escape(str(path))}: {', '.join(unknown)}[/yellow]")

        try:
            return path, ConfigFile.model_validate(data)
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
            )
            console.print(f"[yellow]Warning: Skipping config file {escape(str(path))}: {escape(errors)}[/yellow]")

    return None, None


def _first(*candidates: Tuple[Optional[object], str]) -> Tuple[Optional[object], str]:
    for value, source in candidates:
        if value is not None and value != "":
            return value, source
    return None, "default"


class Config(BaseModel):
    """Resolved settings for one run.

    Built once with :meth:`load` and handed to the components that need it.
    Each value follows the precedence: command line, ``COMMIT_GENIUS_*``
    environment, config file, legacy ``GEMINI_*`` environment, default.
    """

    api_key: Optional[str] = Field(default=None, description="Google Gemini API key")
    model: str = Field(default=DEFAULT_MODEL, description="Gemini model used to write messages")
    prefix_format: PrefixFormat = Field(
        default=PrefixFormat.BRACKETS, description="How prefixes are rendered: brackets or colon"
    )
    auto_prefix_from_branch: bool = Field(
        default=True, description="Whether to detect a ticket prefix from the branch name"
    )
    config_path: Optional[Path] = Field(default=None, description="Config file the settings came from")
    sources: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def load(
        cls,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        prefix_format: Optional[PrefixFormat] = None,
        auto_prefix_from_branch: Optional[bool] = None,
        environ: Optional[Mapping[str, str]] = None,
        candidates: Optional[Sequence[Path]] = None,
        console: Optional[Console] = None,
    ) -> "Config":
        environ = os.environ if environ is None else environ
        if candidates is None:
            candidates = config_candidates(environ)
        config_path, file_config = load_config_file(candidates, console)
        file_config = file_config or ConfigFile()

        resolved_key, key_source = _first(
            (api_key, "cli"),
            (environ.get(ENV_API_KEY), ENV_API_KEY),
            (file_config.api_key, "config"),
            (environ.get(LEGACY_ENV_API_KEY), LEGACY_ENV_API_KEY),
        )
        resolved_model, model_source = _first(
            (model, "cli"),
            (environ.get(ENV_MODEL), ENV_MODEL),
            (file_config.model, "config"),
            (environ.get(LEGACY_ENV_MODEL), LEGACY_ENV_MODEL),
        )
        resolved_format, format_source = _first(
            (prefix_format, "cli"),
            (file_config.prefix_format, "config"),
        )
        resolved_auto, auto_source = _first(
            (auto_prefix_from_branch, "cli"),
            (file_config.auto_prefix_from_branch, "config"),
        )

        settings = {
            "api_key": resolved_key,
            "model": resolved_model,
            "prefix_format": resolved_format,
            "auto_prefix_from_branch": resolved_auto,
        }
        return cls(
            **{name: value for name, value in settings.items() if value is not None},
            config_path=config_path,
            sources={
                "api_key": key_source,
                "model": model_source,
                "prefix_format": format_source,
                "auto_prefix_from_branch": auto_source,
            },
        )

    def require_api_key(self) -> str:
        if not self.api_key:
            raise MissingApiKeyError(
                f"No Gemini API key found. Set {ENV_API_KEY} (or {LEGACY_ENV_API_KEY}) in the "
                "environment or a .env file, pass --api-key, or add apiKey to the config "
                "file (see --init-config)."
            )
        return self.api_key

    @staticmethod
    def write_template(path: Path) -> bool:
        """Write a starter config file. Returns False if one already exists."""
        if path.exists():
            return False
        path.parent.mkdir(parents=True, exist_ok=True)
        template = {
            "apiKey": "",
            "model": DEFAULT_MODEL,
            "prefixFormat": PrefixFormat.BRACKETS.value,
            "autoPrefixFromBranch": True,
        }
        path.write_text(json.dumps(template, indent=2) + "\n", encoding="utf-8")
        return True
