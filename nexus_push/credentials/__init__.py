"""Credential resolution for pushing charts to a Nexus Helm repository.

This package provides:
- A lenient flattener for Helm's repositories.yaml
- The repository list index built from the flattened document
- The per-repository login cache (``auth.<repo>`` files)
- The resolver that picks credentials in priority order

Example usage:

    from nexus_push.credentials import CredentialResolver, FileCredentialStore

    # Cache a login
    store = FileCredentialStore(helm_home / "repository")
    store.save("nexus", "alice", "secret")

    # Resolve credentials for a push
    resolver = CredentialResolver.default(settings)
    credential = resolver.resolve("nexus")
"""

from .backend import CredentialSource, Prompter
from .exceptions import (
    CacheFileError,
    CredentialError,
    DocumentUnreadableError,
    InvalidCredentialError,
    NoCredentialsResolvedError,
)
from .flattener import FlatEntry, flatten, flatten_to_mapping
from .models import RepositoryRecord, ResolutionContext, ResolvedCredential
from .prompt import ClickPrompter
from .repositories import RepositoriesFileSource, build_index, lookup
from .resolver import CredentialResolver
from .store import FileCredentialStore

__all__ = [
    # Sources
    "CredentialSource",
    "FileCredentialStore",
    "RepositoriesFileSource",
    # Prompting
    "Prompter",
    "ClickPrompter",
    # Document handling
    "FlatEntry",
    "flatten",
    "flatten_to_mapping",
    "build_index",
    "lookup",
    # Resolver
    "CredentialResolver",
    "ResolutionContext",
    "ResolvedCredential",
    "RepositoryRecord",
    # Exceptions
    "CredentialError",
    "CacheFileError",
    "DocumentUnreadableError",
    "InvalidCredentialError",
    "NoCredentialsResolvedError",
]
