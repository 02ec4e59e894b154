"""Protocols for credential sources and interactive prompting."""

from typing import Protocol

from .models import ResolutionContext, ResolvedCredential


class CredentialSource(Protocol):
    """A place credentials may be found for a repository.

    Sources are consulted in order by the CredentialResolver; the first one
    returning a credential wins.
    """

    @property
    def name(self) -> str:
        """Source identifier (e.g., 'cache', 'repositories')."""
        ...

    def lookup(self, context: ResolutionContext) -> ResolvedCredential | None:
        """Return a complete username/password pair, or None.

        Args:
            context: The resolution in progress

        Returns:
            Credential or None if this source has nothing for the repository

        Raises:
            CredentialError: If the source exists but is broken in a way
                the user needs to know about
        """
        ...


class Prompter(Protocol):
    """Asks the user for a credential field."""

    def prompt(self, field: str, secret: bool = False) -> str:
        """Return the value the user entered for ``field``.

        Args:
            field: "username" or "password"
            secret: Do not echo the input
        """
        ...
