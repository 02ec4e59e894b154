"""Value types shared by the credential sources and the resolver."""

from dataclasses import dataclass, field


@dataclass(frozen=True, repr=False)
class ResolvedCredential:
    """Username/password pair chosen for one push.

    Attributes:
        username: Repository username
        password: Repository password
        source: Where the pair came from ("explicit", "cache",
            "repositories" or "prompt")
    """

    username: str
    password: str
    source: str

    def as_auth(self) -> tuple[str, str]:
        """Return the pair in the shape httpx expects for basic auth."""
        return (self.username, self.password)

    def __repr__(self) -> str:
        return f"ResolvedCredential(username={self.username!r}, password='***', source={self.source!r})"


@dataclass(frozen=True, repr=False)
class RepositoryRecord:
    """One entry of the ``repositories`` list in repositories.yaml.

    Attributes:
        index: 1-based position in the list
        name: Repository name
        username: Username, if the entry has one
        password: Password, if the entry has one
        url: Repository URL, if the entry has one
    """

    index: int
    name: str
    username: str | None = None
    password: str | None = None
    url: str | None = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.username) and bool(self.password)

    def __repr__(self) -> str:
        password = "'***'" if self.password else repr(self.password)
        return (
            f"RepositoryRecord(index={self.index}, name={self.name!r}, "
            f"username={self.username!r}, password={password}, url={self.url!r})"
        )


@dataclass
class ResolutionContext:
    """State for a single credential resolution.

    Built fresh for every invocation and handed to each source in turn;
    nothing here outlives the call.

    Attributes:
        repo: Target repository name
        username: Username passed explicitly by the caller
        password: Password passed explicitly by the caller
        attempted: Names of the sources consulted so far
    """

    repo: str
    username: str | None = None
    password: str | None = None
    attempted: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        # Empty strings from the command line mean "not given"
        self.username = self.username or None
        self.password = self.password or None

    @property
    def has_explicit_pair(self) -> bool:
        return self.username is not None and self.password is not None

    @property
    def missing_fields(self) -> list[str]:
        missing = []
        if self.username is None:
            missing.append("username")
        if self.password is None:
            missing.append("password")
        return missing
