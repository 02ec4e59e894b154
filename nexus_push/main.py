"""CLI entry point for helm-nexus-push."""

import sys
import textwrap
from pathlib import Path
from typing import NoReturn

import click
import structlog
from pydantic import ValidationError

from nexus_push.config.settings import LOG_LEVELS, PushSettings
from nexus_push.credentials import (
    ClickPrompter,
    CredentialError,
    CredentialResolver,
    FileCredentialStore,
    ResolutionContext,
    ResolvedCredential,
)
from nexus_push.exceptions import ConfigurationError, NexusPushError, UnknownRepositoryError
from nexus_push.helm import HelmClient
from nexus_push.upload import ChartUploader
from nexus_push.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)

SOURCE_MESSAGES = {
    "cache": "Using cached login creds...",
    "repositories": "Found credentials inside helm file",
}


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("repo")
@click.argument("target", metavar="login|logout|CHART")
@click.option("-u", "--username", help="Username for authenticated repo")
@click.option("-p", "--password", help="Password for authenticated repo (prompts if unspecified)")
@click.option(
    "--config",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="HELM_NEXUS_PUSH_CONFIG",
    help="Path to a YAML settings file",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level for diagnostics on stderr",
)
@click.option(
    "--helm-home",
    type=click.Path(file_okay=False, path_type=Path),
    help="Helm home directory (default: output of 'helm home')",
)
def cli(
    repo: str,
    target: str,
    username: str | None,
    password: str | None,
    config: Path | None,
    log_level: str | None,
    helm_home: Path | None,
) -> None:
    """Push Helm Chart to Nexus repository.

    Pushes a Helm chart directory or package to a remote Nexus Helm
    repository.

    \b
    Usage:
      helm nexus-push REPO login [flags]     Setup login information for repo
      helm nexus-push REPO logout [flags]    Remove login information for repo
      helm nexus-push REPO CHART [flags]     Pushes chart to repo

    Credentials for a push come from, in order: --username and --password
    together, the login cache, the repo's entry in helm's repositories.yaml,
    and finally a prompt.
    """
    try:
        settings = _load_settings(config, log_level, helm_home)
    except ConfigurationError as e:
        _fail(e)

    configure_logging(settings.log_level)
    helm = HelmClient(settings.helm_bin)

    try:
        repo_url = helm.repo_url(repo)
        if settings.helm_home is None:
            settings = settings.with_helm_home(helm.home())

        if target == "login":
            _login(settings, repo, username, password)
        elif target == "logout":
            _logout(settings, repo)
        else:
            _push(settings, helm, repo, repo_url, target, username, password)

    except UnknownRepositoryError as e:
        known = ", ".join(e.known) or "(none configured)"
        raise click.UsageError(f"Invalid repo specified! Must specify one of these repos: {known}") from e
    except NexusPushError as e:
        log.debug("command_failed", repo=repo, exc_info=True)
        _fail(e)
    except (KeyboardInterrupt, click.Abort):
        # click.prompt turns Ctrl-C into Abort
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)


def _load_settings(config: Path | None, log_level: str | None, helm_home: Path | None) -> PushSettings:
    """Settings from --config (or the environment), with command-line overrides applied."""
    if config is not None:
        settings = PushSettings.from_yaml(config)
    else:
        try:
            settings = PushSettings()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid HELM_NEXUS_PUSH_* environment settings: {e}") from e

    updates: dict[str, object] = {}
    if log_level:
        updates["log_level"] = log_level.upper()
    if helm_home is not None:
        updates["helm_home"] = helm_home
    return settings.model_copy(update=updates) if updates else settings


def _fail(error: NexusPushError) -> NoReturn:
    """Report a domain error and exit 1."""
    message = error.message
    if isinstance(error, CredentialError):
        details = [f"{label}: {value}" for label, value in (("repo", error.repo), ("source", error.source)) if value]
        if details:
            message = f"{message} ({', '.join(details)})"

    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    suggestion = getattr(error, "suggestion", None)
    if suggestion:
        click.echo(click.style(f"Suggestion: {suggestion}", fg="yellow"), err=True)
    sys.exit(1)


def _login(settings: PushSettings, repo: str, username: str | None, password: str | None) -> None:
    resolver = CredentialResolver(prompter=ClickPrompter() if settings.prompt else None)
    credential = resolver.prompt_missing(ResolutionContext(repo=repo, username=username, password=password))

    FileCredentialStore(settings.auth_path).save(repo, credential.username, credential.password)
    log.info("login_saved", repo=repo)
    click.echo(f"Login information for {repo} saved")


def _logout(settings: PushSettings, repo: str) -> None:
    removed = FileCredentialStore(settings.auth_path).clear(repo)
    log.info("logout", repo=repo, removed=removed)
    if removed:
        click.echo(f"Login information for {repo} removed")
    else:
        click.echo(f"No login information stored for {repo}")


def _push(
    settings: PushSettings,
    helm: HelmClient,
    repo: str,
    repo_url: str,
    chart: str,
    username: str | None,
    password: str | None,
) -> None:
    resolver = CredentialResolver.default(settings)
    credential: ResolvedCredential = resolver.resolve(repo, username=username, password=password)
    if credential.source in SOURCE_MESSAGES:
        click.echo(SOURCE_MESSAGES[credential.source])

    chart_package = helm.resolve_chart(chart)

    click.echo(f"Pushing {chart} to repo {repo_url}...")
    uploader = ChartUploader(timeout=settings.upload_timeout, verify=settings.verify_tls)
    result = uploader.upload(repo_url, chart_package, credential)

    click.echo(textwrap.indent(result.render(), "  "))
    click.echo("Done")


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
