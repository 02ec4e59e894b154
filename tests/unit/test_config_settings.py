"""Tests for nexus_push/config/settings.py."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from nexus_push.config.settings import PushSettings
from nexus_push.exceptions import ConfigurationError


class TestDefaults:
    def test_defaults(self):
        settings = PushSettings()

        assert settings.helm_bin == "helm"
        assert settings.helm_home is None
        assert settings.upload_timeout == 60.0
        assert settings.verify_tls is True
        assert settings.prompt is True
        assert settings.log_level == "WARNING"

    def test_log_level_normalised(self):
        assert PushSettings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            PushSettings(log_level="verbose")

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            PushSettings(upload_timeout=0)


class TestEnvironment:
    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HELM_NEXUS_PUSH_HELM_HOME", str(tmp_path))
        monkeypatch.setenv("HELM_NEXUS_PUSH_UPLOAD_TIMEOUT", "5")
        monkeypatch.setenv("HELM_NEXUS_PUSH_PROMPT", "false")

        settings = PushSettings()

        assert settings.helm_home == tmp_path
        assert settings.upload_timeout == 5.0
        assert settings.prompt is False


class TestPaths:
    def test_derived_paths(self, tmp_path):
        settings = PushSettings(helm_home=tmp_path)

        assert settings.repository_dir == tmp_path / "repository"
        assert settings.repositories_path == tmp_path / "repository" / "repositories.yaml"
        assert settings.auth_path == tmp_path / "repository"

    def test_overridden_paths(self, tmp_path):
        settings = PushSettings(
            helm_home=tmp_path,
            repositories_file=tmp_path / "custom.yaml",
            auth_dir=tmp_path / "auth",
        )

        assert settings.repositories_path == tmp_path / "custom.yaml"
        assert settings.auth_path == tmp_path / "auth"

    def test_unknown_helm_home(self):
        with pytest.raises(ConfigurationError, match="Helm home"):
            _ = PushSettings().repository_dir

    def test_with_helm_home(self, tmp_path):
        settings = PushSettings(upload_timeout=10).with_helm_home(str(tmp_path))

        assert settings.helm_home == Path(tmp_path)
        assert settings.upload_timeout == 10


class TestFromYaml:
    def test_load(self, tmp_path):
        config = tmp_path / "nexus-push.yaml"
        config.write_text(
            f"helm_bin: /usr/local/bin/helm\nhelm_home: {tmp_path}\nupload_timeout: 15\nverify_tls: false\n"
        )

        settings = PushSettings.from_yaml(config)

        assert settings.helm_bin == "/usr/local/bin/helm"
        assert settings.helm_home == tmp_path
        assert settings.upload_timeout == 15.0
        assert settings.verify_tls is False

    def test_empty_file_gives_defaults(self, tmp_path):
        config = tmp_path / "empty.yaml"
        config.write_text("")

        assert PushSettings.from_yaml(config).helm_bin == "helm"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            PushSettings.from_yaml(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path):
        config = tmp_path / "bad.yaml"
        config.write_text("helm_bin: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            PushSettings.from_yaml(config)

    def test_not_a_mapping(self, tmp_path):
        config = tmp_path / "list.yaml"
        config.write_text("- helm\n- bin\n")

        with pytest.raises(ConfigurationError, match="YAML object"):
            PushSettings.from_yaml(config)

    def test_invalid_values(self, tmp_path):
        config = tmp_path / "invalid.yaml"
        config.write_text("upload_timeout: -3\n")

        with pytest.raises(ConfigurationError, match="Failed to validate"):
            PushSettings.from_yaml(config)
