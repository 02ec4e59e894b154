"""Custom exception hierarchy for helm-nexus-push.

Exception Hierarchy:
    NexusPushError (base)
    ├── ConfigurationError
    ├── UnknownRepositoryError
    ├── CredentialError
    │   ├── DocumentUnreadableError
    │   ├── NoCredentialsResolvedError
    │   ├── CacheFileError
    │   └── InvalidCredentialError
    ├── PackagingError
    └── ExternalServiceError

Malformed lines in the repositories document are not represented here: the
flattener skips them and never raises.

Example Usage:
    >>> from nexus_push.exceptions import CacheFileError
    >>> try:
    ...     store.save("nexus", "alice", "secret")
    ... except CacheFileError as e:
    ...     print(e.message, e.repo)
"""

from collections.abc import Iterable


class NexusPushError(Exception):
    """Base exception for all helm-nexus-push errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(NexusPushError):
    """Settings file missing, unreadable or invalid."""

    pass


class UnknownRepositoryError(NexusPushError):
    """The requested repository is not registered with helm.

    Resolution never starts for an unknown repository; the CLI turns this
    into a usage error.

    Attributes:
        repo: Repository name that was requested
        known: Repository names helm does know about
    """

    def __init__(self, repo: str, known: Iterable[str] = ()) -> None:
        self.repo = repo
        self.known = tuple(known)
        super().__init__(f"Invalid repo specified: {repo}")


class CredentialError(NexusPushError):
    """Credential-related errors.

    Attributes:
        message: Human-readable error description
        repo: Repository the credentials were for
        source: Credential source that was being consulted (e.g. "cache")
        suggestion: Optional suggestion for resolution
    """

    def __init__(
        self,
        message: str,
        repo: str | None = None,
        source: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        self.repo = repo
        self.source = source
        self.suggestion = suggestion

        full_message = message
        details = []
        if repo:
            details.append(f"repo: {repo}")
        if source:
            details.append(f"source: {source}")
        if details:
            full_message = f"{message} ({', '.join(details)})"
        if suggestion:
            full_message = f"{full_message}\nSuggestion: {suggestion}"

        super().__init__(full_message)
        # super() stored the decorated text; keep the bare message
        self.message = message


class DocumentUnreadableError(CredentialError):
    """The repositories document is missing or cannot be read.

    Non-fatal: the resolver treats the document source as absent.
    """

    pass


class NoCredentialsResolvedError(CredentialError):
    """Every source was exhausted and interactive prompting is unavailable."""

    pass


class CacheFileError(CredentialError):
    """Reading, writing or deleting a cached credential file failed."""

    pass


class InvalidCredentialError(CredentialError):
    """A credential value cannot be stored in the login cache."""

    pass


class PackagingError(NexusPushError):
    """`helm package` failed or produced no archive path."""

    pass


class ExternalServiceError(NexusPushError):
    """Communication with helm or the remote repository failed.

    Attributes:
        message: Error message
        status_code: HTTP status code (if applicable)
        response_text: Response body or command output (if applicable)
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.response_text = response_text

        full_message = message
        if status_code:
            full_message = f"{message} (HTTP {status_code})"

        super().__init__(full_message)
        self.message = message
