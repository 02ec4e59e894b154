"""Credentials stored in Helm's repositories.yaml.

Helm keeps every configured repository as a record in the ``repositories``
list, and records added with ``helm repo add --username --password`` carry
their credentials::

    repositories:
    - name: nexus
      url: https://nexus.example.com/repository/helm/
      username: alice
      password: secret

The document is flattened (see ``flattener``) and the records are rebuilt
from the positional index segments. Indexing is contiguous from 1: the scan
stops at the first position without a ``name``, so entries after a gap are
never seen.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from .exceptions import DocumentUnreadableError
from .flattener import FlatEntry, flatten
from .models import RepositoryRecord, ResolutionContext, ResolvedCredential

logger = logging.getLogger(__name__)

DEFAULT_ROOT = "repositories"


def build_index(entries: Iterable[FlatEntry], root: str = DEFAULT_ROOT) -> list[RepositoryRecord]:
    """Rebuild the ordered repository records from flat entries.

    Only entries shaped ``(root, <index>, <field>)`` take part. When a field
    appears twice for the same index the first occurrence wins.

    Args:
        entries: Flattened document
        root: Key of the list holding the records

    Returns:
        Records in document order, starting at index 1
    """
    fields_by_index: dict[int, dict[str, str]] = {}
    for entry in entries:
        if len(entry.path) != 3 or entry.path[0] != root:
            continue
        position, field_name = entry.path[1], entry.path[2]
        if not position.isdigit():
            continue
        fields_by_index.setdefault(int(position), {}).setdefault(field_name, entry.value)

    records: list[RepositoryRecord] = []
    index = 1
    while "name" in fields_by_index.get(index, {}):
        fields = fields_by_index[index]
        records.append(
            RepositoryRecord(
                index=index,
                name=fields["name"],
                username=fields.get("username"),
                password=fields.get("password"),
                url=fields.get("url"),
            )
        )
        index += 1

    return records


def lookup(
    entries: Iterable[FlatEntry], repo_name: str, root: str = DEFAULT_ROOT
) -> RepositoryRecord | None:
    """Find the first record named ``repo_name``, or None."""
    for record in build_index(entries, root):
        if record.name == repo_name:
            return record
    return None


class RepositoriesFileSource:
    """Credential source backed by a repositories.yaml file.

    A missing or unreadable file is not an error for resolution: the source
    simply has nothing to offer.

    Example:
        >>> source = RepositoriesFileSource(Path("~/.helm/repository/repositories.yaml").expanduser())
        >>> source.find("nexus")
        RepositoryRecord(index=2, name='nexus', username='alice', password='***', url=...)
    """

    def __init__(self, path: Path | str, root: str = DEFAULT_ROOT) -> None:
        self.path = Path(path)
        self.root = root

    @property
    def name(self) -> str:
        return "repositories"

    def read(self) -> str:
        """Return the raw document text.

        Raises:
            DocumentUnreadableError: If the file is missing or cannot be read
        """
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise DocumentUnreadableError(
                f"Repositories file not found: {self.path}", source=self.name
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentUnreadableError(
                f"Cannot read repositories file {self.path}: {e}", source=self.name
            ) from e

    def records(self) -> list[RepositoryRecord]:
        """Return every record in the document."""
        return build_index(flatten(self.read()), self.root)

    def find(self, repo: str) -> RepositoryRecord | None:
        """Return the record for ``repo``, or None if it is not listed.

        Raises:
            DocumentUnreadableError: If the file is missing or cannot be read
        """
        return lookup(flatten(self.read()), repo, self.root)

    def lookup(self, context: ResolutionContext) -> ResolvedCredential | None:
        try:
            record = self.find(context.repo)
        except DocumentUnreadableError as e:
            logger.debug(f"Skipping repositories document: {e.message}")
            return None

        if record is None:
            logger.debug(f"No entry for {context.repo} in {self.path}")
            return None
        if not record.has_credentials:
            logger.debug(f"Entry for {context.repo} in {self.path} has no username/password")
            return None

        logger.info(f"Found credentials for {context.repo} inside {self.path}")
        # has_credentials guarantees both are set
        return ResolvedCredential(
            username=record.username or "",
            password=record.password or "",
            source=self.name,
        )
