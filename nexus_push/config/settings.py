"""
Configuration for helm-nexus-push using pydantic-settings.

Every setting can be given as a ``HELM_NEXUS_PUSH_<NAME>`` environment
variable or as a key in a YAML settings file. Paths below the helm home are
derived once the helm home is known, which usually means asking ``helm home``.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nexus_push.exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class PushSettings(BaseSettings):
    """helm-nexus-push settings.

    Attributes:
        helm_bin: helm executable to run for ``repo list``, ``home`` and ``package``
        helm_home: Helm home directory; discovered from helm when unset
        repositories_file: Override for ``<helm home>/repository/repositories.yaml``
        auth_dir: Override for the directory holding ``auth.<repo>`` cache files
        upload_timeout: Seconds before the chart upload is abandoned
        verify_tls: Verify the repository's TLS certificate
        prompt: Ask for missing credentials on the terminal as a last resort
        log_level: Minimum level for diagnostic logs written to stderr
    """

    model_config = SettingsConfigDict(
        env_prefix="HELM_NEXUS_PUSH_",
        case_sensitive=False,
    )

    helm_bin: str = Field(default="helm", description="helm executable")
    helm_home: Path | None = Field(default=None, description="Helm home directory")
    repositories_file: Path | None = Field(default=None, description="Path to repositories.yaml")
    auth_dir: Path | None = Field(default=None, description="Directory for cached login files")
    upload_timeout: float = Field(default=60.0, gt=0, description="Upload timeout in seconds")
    verify_tls: bool = Field(default=True, description="Verify TLS certificates on upload")
    prompt: bool = Field(default=True, description="Prompt for credentials when no source has them")
    log_level: str = Field(default="WARNING", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalise the level name and reject unknown ones."""
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got: {value}")
        return level

    @property
    def repository_dir(self) -> Path:
        """Helm's ``repository`` directory below the helm home."""
        if self.helm_home is None:
            raise ConfigurationError("Helm home is not known; set HELM_NEXUS_PUSH_HELM_HOME or HELM_HOME")
        return self.helm_home / "repository"

    @property
    def repositories_path(self) -> Path:
        """Location of the repositories document."""
        return self.repositories_file or self.repository_dir / "repositories.yaml"

    @property
    def auth_path(self) -> Path:
        """Directory holding the per-repository cached credential files."""
        return self.auth_dir or self.repository_dir

    def with_helm_home(self, helm_home: Path | str) -> PushSettings:
        """Return a copy with the helm home filled in."""
        return self.model_copy(update={"helm_home": Path(helm_home)})

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> PushSettings:
        """Load settings from a YAML file.

        Keys in the file override ``HELM_NEXUS_PUSH_*`` environment variables.

        Args:
            config_path: Path to YAML settings file

        Returns:
            PushSettings instance

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            yaml_content = config_file.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            config_dict = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        try:
            return cls(**config_dict)
        except Exception as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e
