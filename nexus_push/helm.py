"""Thin wrapper around the helm CLI.

helm is the source of truth for which repositories exist (``helm repo
list``), where the helm home is (``helm home``) and how a chart directory
becomes an archive (``helm package``). Output is parsed as plain text;
nothing here understands chart metadata.
"""

import os
import subprocess
from pathlib import Path

import structlog

from nexus_push.exceptions import ExternalServiceError, PackagingError, UnknownRepositoryError

log = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 60.0


class HelmClient:
    """Runs helm subcommands and parses their output.

    Example:
        >>> helm = HelmClient()
        >>> helm.repo_url("nexus")
        'https://nexus.example.com/repository/helm-hosted/'
        >>> helm.resolve_chart("./charts/api")
        PosixPath('/work/api-1.2.0.tgz')
    """

    def __init__(self, helm_bin: str = "helm", timeout: float = DEFAULT_TIMEOUT) -> None:
        self.helm_bin = helm_bin
        self.timeout = timeout

    def _run(self, *args: str) -> subprocess.CompletedProcess[str]:
        """Run ``helm <args>``; raise ExternalServiceError unless it exits 0."""
        command = [self.helm_bin, *args]
        try:
            result = subprocess.run(  # nosec B603 # argument list, no shell
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ExternalServiceError(f"helm executable not found: {self.helm_bin}") from e
        except subprocess.TimeoutExpired as e:
            raise ExternalServiceError(f"'helm {' '.join(args)}' timed out after {self.timeout}s") from e

        if result.returncode != 0:
            raise ExternalServiceError(
                f"'helm {' '.join(args)}' failed: {result.stderr.strip() or result.stdout.strip()}",
                response_text=result.stderr,
            )
        return result

    def list_repositories(self) -> dict[str, str]:
        """Return configured repositories as ``name -> url``, in helm's order."""
        try:
            result = self._run("repo", "list")
        except ExternalServiceError as e:
            # helm 3 exits non-zero when nothing is configured
            if e.response_text and "no repositories" in e.response_text:
                return {}
            raise

        repositories: dict[str, str] = {}
        for line in result.stdout.splitlines()[1:]:
            columns = line.split()
            if len(columns) >= 2:
                repositories[columns[0]] = columns[1]
        return repositories

    def repo_url(self, name: str) -> str:
        """Return the repository's URL, always ending in ``/``.

        Raises:
            UnknownRepositoryError: If helm has no repository by that name
        """
        repositories = self.list_repositories()
        url = repositories.get(name)
        if not url:
            raise UnknownRepositoryError(name, known=repositories)
        return url if url.endswith("/") else f"{url}/"

    def home(self) -> Path:
        """Locate the helm home.

        Asks ``helm home`` first (helm 2), then falls back to ``$HELM_HOME``
        and finally ``~/.helm``.
        """
        try:
            output = self._run("home").stdout.strip()
        except ExternalServiceError as e:
            log.debug("helm_home_unavailable", error=e.message)
            output = ""

        if output:
            return Path(output)
        env_home = os.environ.get("HELM_HOME")
        if env_home:
            return Path(env_home)
        return Path.home() / ".helm"

    def package(self, chart_dir: Path | str, destination: Path | str | None = None) -> Path:
        """Package a chart directory and return the archive path.

        Raises:
            PackagingError: If helm fails or does not report where it saved the archive
        """
        args = ["package", str(chart_dir)]
        if destination is not None:
            args.extend(["--destination", str(destination)])

        try:
            result = self._run(*args)
        except ExternalServiceError as e:
            raise PackagingError(f"Failed to package chart {chart_dir}: {e.message}") from e

        # "Successfully packaged chart and saved it to: /path/chart-0.1.0.tgz"
        for line in reversed(result.stdout.splitlines()):
            if ":" in line:
                archive = line.split(":", 1)[1].strip()
                if archive:
                    log.info("chart_packaged", chart=str(chart_dir), archive=archive)
                    return Path(archive)

        raise PackagingError(f"helm package did not report an archive path for {chart_dir}")

    def resolve_chart(self, chart: Path | str) -> Path:
        """Package ``chart`` if it is a directory, otherwise use the file as-is."""
        chart_path = Path(chart)
        if chart_path.is_dir():
            return self.package(chart_path)
        return chart_path
