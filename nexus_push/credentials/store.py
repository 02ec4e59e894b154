"""Cached login credentials, one plain-text file per repository.

``helm nexus-push REPO login`` writes ``<auth dir>/auth.REPO`` containing a
single ``username:password`` line, ``push`` reads it and ``logout`` deletes
it. There is no locking: the last writer wins.

Security Considerations:
- The password is stored unencrypted
- Files are restricted to mode 0600 where the platform allows it
"""

import logging
from pathlib import Path

from .exceptions import CacheFileError, InvalidCredentialError
from .models import ResolutionContext, ResolvedCredential

logger = logging.getLogger(__name__)


class FileCredentialStore:
    """Per-repository credential cache files.

    Example:
        >>> store = FileCredentialStore(Path("~/.helm/repository").expanduser())
        >>> store.save("nexus", "alice", "secret")
        >>> store.load("nexus")
        ResolvedCredential(username='alice', password='***', source='cache')
        >>> store.clear("nexus")
        True
    """

    FILE_PREFIX = "auth."

    def __init__(self, root: Path | str) -> None:
        """Initialize the store.

        Args:
            root: Directory holding the cache files. It is not created.
        """
        self.root = Path(root)

    @property
    def name(self) -> str:
        return "cache"

    def path_for(self, repo: str) -> Path:
        """Return the cache file path for a repository.

        Raises:
            CacheFileError: If the name would escape the store directory
        """
        if not repo or repo in (".", "..") or "/" in repo or "\\" in repo:
            raise CacheFileError(
                "Repository name cannot be used as a cache file name",
                repo=repo,
                source=self.name,
            )
        return self.root / f"{self.FILE_PREFIX}{repo}"

    def save(self, repo: str, username: str, password: str) -> None:
        """Write ``username:password`` for a repository, replacing any old entry.

        Raises:
            InvalidCredentialError: If the username contains ':' (it could not be read back)
            CacheFileError: If the file cannot be written
        """
        if ":" in username:
            raise InvalidCredentialError(
                "Username cannot contain ':'",
                repo=repo,
                source=self.name,
                suggestion="Use a username without ':'; the login cache stores username:password",
            )

        path = self.path_for(repo)
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(f"{username}:{password}\n")
        except OSError as e:
            raise CacheFileError(
                f"Failed to write cached credentials to {path}: {e.strerror or e}",
                repo=repo,
                source=self.name,
                suggestion=f"Check that {self.root} exists and is writable",
            ) from e

        try:
            path.chmod(0o600)
        except OSError as e:
            logger.warning(f"Could not set file permissions on {path}: {e}")

        logger.debug(f"Saved cached credentials for {repo}")

    def load(self, repo: str) -> ResolvedCredential | None:
        """Read the cached pair for a repository.

        Returns:
            The cached credential, or None if there is no usable cache file

        Raises:
            CacheFileError: If the file exists but cannot be read
        """
        path = self.path_for(repo)
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CacheFileError(
                f"Failed to read cached credentials from {path}: {e.strerror or e}",
                repo=repo,
                source=self.name,
            ) from e

        line = content.splitlines()[0] if content else ""
        if ":" not in line:
            logger.warning(f"Ignoring cached credentials without a ':' separator: {path}")
            return None

        username, password = line.split(":", 1)
        return ResolvedCredential(username=username, password=password, source=self.name)

    def clear(self, repo: str) -> bool:
        """Delete the cache file for a repository.

        Returns:
            True if a file was removed, False if there was none

        Raises:
            CacheFileError: If an existing file cannot be removed
        """
        path = self.path_for(repo)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise CacheFileError(
                f"Failed to remove cached credentials {path}: {e.strerror or e}",
                repo=repo,
                source=self.name,
            ) from e

        logger.debug(f"Removed cached credentials for {repo}")
        return True

    def lookup(self, context: ResolutionContext) -> ResolvedCredential | None:
        credential = self.load(context.repo)
        if credential is not None:
            logger.info(f"Using cached login credentials for {context.repo}")
        return credential
