"""releasegit configuration management using Pydantic."""

from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field, ValidationError

from releasegit.constants import DEFAULT_CONFIG_PATH, DEFAULT_GIT_EXECUTABLE, GIT_NOTE_REF
from releasegit.exceptions import ConfigurationError


class GitSettings(BaseModel):
    """Settings for the git command-line facade."""

    executable: str = Field(default=DEFAULT_GIT_EXECUTABLE, min_length=1)
    # Single ref path component, no globs: it is suffixed with "-<ref>" and
    # globbed with "*" when reading notes back.
    note_ref: str = Field(default=GIT_NOTE_REF, pattern=r"^[A-Za-z0-9._-]+$")
    remote_url: str | None = None
    ci_branch: str | None = None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="info", pattern="^(debug|info|warn|error)$")
    directory: str | None = None
    json_output: bool = False


class ReleaseGitConfig(BaseModel):
    """Top-level releasegit configuration."""

    git: GitSettings = Field(default_factory=GitSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> "ReleaseGitConfig":
        """Load configuration from YAML file.

        Args:
            config_path: Path to config file. Defaults to .releasegit.yaml

        Returns:
            ReleaseGitConfig instance

        Raises:
            ConfigurationError: If the file is not valid YAML or fails validation
        """
        config_path = Path(DEFAULT_CONFIG_PATH) if config_path is None else Path(config_path)

        if not config_path.exists():
            return cls()

        try:
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in {config_path}", details={"error": str(e)}
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Expected a mapping in {config_path}", details={"type": type(data).__name__}
            )

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReleaseGitConfig":
        """Create configuration from dictionary.

        Raises:
            ConfigurationError: If the data fails validation
        """
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(
                "Invalid releasegit configuration", details={"errors": e.errors()}
            ) from e

    def save(self, config_path: str | Path | None = None) -> None:
        """Save configuration to YAML file.

        Args:
            config_path: Path to save config. Defaults to .releasegit.yaml
        """
        config_path = Path(DEFAULT_CONFIG_PATH) if config_path is None else Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()
