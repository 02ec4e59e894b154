"""Credential-related exceptions.

Re-exported from nexus_push.exceptions so the credentials package can be
used on its own.
"""

from nexus_push.exceptions import (
    CacheFileError,
    CredentialError,
    DocumentUnreadableError,
    InvalidCredentialError,
    NoCredentialsResolvedError,
)

__all__ = [
    "CredentialError",
    "CacheFileError",
    "DocumentUnreadableError",
    "InvalidCredentialError",
    "NoCredentialsResolvedError",
]
