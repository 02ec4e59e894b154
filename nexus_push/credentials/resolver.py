"""Credential resolution in strict priority order."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .backend import CredentialSource, Prompter
from .exceptions import NoCredentialsResolvedError
from .models import ResolutionContext, ResolvedCredential
from .prompt import ClickPrompter
from .repositories import RepositoriesFileSource
from .store import FileCredentialStore

if TYPE_CHECKING:
    from nexus_push.config.settings import PushSettings

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Pick the username/password to push with.

    Resolution order:
    1. A complete explicit pair (``--username`` and ``--password``)
    2. Each configured source in turn (by default the login cache, then
       helm's repositories.yaml); the first complete pair wins
    3. Prompting for whatever is still missing, keeping any explicit value

    A partial explicit pair does not skip the sources, and values from two
    sources are never combined. Only the final prompt mixes explicit and
    entered values.

    Example:
        >>> resolver = CredentialResolver.default(settings)
        >>> credential = resolver.resolve("nexus", username="alice")
        >>> credential.source
        'cache'
    """

    def __init__(
        self,
        sources: Sequence[CredentialSource] = (),
        prompter: Prompter | None = None,
    ) -> None:
        """Initialize credential resolver.

        Args:
            sources: Credential sources in resolution order
            prompter: Used for the interactive fallback; without one,
                running out of sources raises NoCredentialsResolvedError
        """
        self._sources: tuple[CredentialSource, ...] = tuple(sources)
        self.prompter = prompter

    @classmethod
    def default(cls, settings: PushSettings) -> CredentialResolver:
        """Build the standard chain: login cache, repositories.yaml, terminal prompt."""
        return cls(
            sources=(
                FileCredentialStore(settings.auth_path),
                RepositoriesFileSource(settings.repositories_path),
            ),
            prompter=ClickPrompter() if settings.prompt else None,
        )

    @property
    def sources(self) -> tuple[CredentialSource, ...]:
        return self._sources

    def resolve(
        self,
        repo: str,
        username: str | None = None,
        password: str | None = None,
    ) -> ResolvedCredential:
        """Resolve credentials for a repository.

        Args:
            repo: Repository name
            username: Explicit username, if given
            password: Explicit password, if given

        Returns:
            The resolved pair, tagged with its source

        Raises:
            NoCredentialsResolvedError: If no source has credentials and
                there is no prompter
            CacheFileError: If the login cache exists but cannot be read
        """
        context = ResolutionContext(repo=repo, username=username, password=password)

        if context.has_explicit_pair:
            logger.debug(f"Using explicit credentials for {repo}")
            return ResolvedCredential(
                username=context.username or "",
                password=context.password or "",
                source="explicit",
            )

        for source in self._sources:
            context.attempted.append(source.name)
            credential = source.lookup(context)
            if credential is not None:
                logger.debug(f"Resolved credentials for {repo} from {source.name}")
                return credential

        return self.prompt_missing(context)

    def prompt_missing(self, context: ResolutionContext) -> ResolvedCredential:
        """Ask for the fields the context is missing: username first, then password.

        Raises:
            NoCredentialsResolvedError: If there is no prompter
        """
        if context.missing_fields and self.prompter is None:
            raise NoCredentialsResolvedError(
                "No credentials found and interactive prompting is disabled",
                repo=context.repo,
                source=", ".join(context.attempted) or None,
                suggestion=(
                    f"Pass --username and --password, or run: helm nexus-push {context.repo} login"
                ),
            )

        username = context.username
        password = context.password
        if username is None:
            username = self.prompter.prompt("username")  # type: ignore[union-attr]
        if password is None:
            password = self.prompter.prompt("password", secret=True)  # type: ignore[union-attr]

        return ResolvedCredential(username=username, password=password, source="prompt")
