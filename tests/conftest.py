"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
import structlog

from nexus_push.config.settings import PushSettings

REPOSITORIES_YAML = """\
apiVersion: v1
generated: "2019-03-01T10:00:00.000000000Z"
repositories:
- caFile: ""
  cache: /home/dev/.helm/repository/cache/stable-index.yaml
  certFile: ""
  keyFile: ""
  name: stable
  password: ""
  url: https://kubernetes-charts.storage.googleapis.com
  username: ""
- caFile: ""
  cache: /home/dev/.helm/repository/cache/nexus-index.yaml
  certFile: ""
  keyFile: ""
  name: nexus
  password: "s3cret"
  url: https://nexus.example.com/repository/helm-hosted/
  username: alice
- caFile: ""
  cache: /home/dev/.helm/repository/cache/local-index.yaml
  name: local
  url: http://127.0.0.1:8879/charts
"""


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration made by a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def repositories_yaml() -> str:
    """repositories.yaml as written by helm 2."""
    return REPOSITORIES_YAML


@pytest.fixture
def helm_home(tmp_path: Path) -> Path:
    """Temporary helm home with an empty repository directory."""
    home = tmp_path / ".helm"
    (home / "repository").mkdir(parents=True)
    return home


@pytest.fixture
def repositories_file(helm_home: Path, repositories_yaml: str) -> Path:
    """repositories.yaml written into the temporary helm home."""
    path = helm_home / "repository" / "repositories.yaml"
    path.write_text(repositories_yaml)
    return path


@pytest.fixture
def settings(helm_home: Path) -> PushSettings:
    """Settings pointing at the temporary helm home."""
    return PushSettings(helm_home=helm_home)


@pytest.fixture
def chart_archive(tmp_path: Path) -> Path:
    """A fake packaged chart."""
    archive = tmp_path / "mychart-0.1.0.tgz"
    archive.write_bytes(b"\x1f\x8b fake chart archive")
    return archive
