"""Chart upload over HTTP.

Nexus accepts a chart by an HTTP ``PUT`` of the archive to
``<repository url>/<archive file name>``. The response is handed back to the
caller untouched: a 4xx or 5xx status is reported, not raised.
"""

from dataclasses import dataclass
from pathlib import Path

import httpx
import structlog

from nexus_push.credentials.models import ResolvedCredential
from nexus_push.exceptions import ExternalServiceError, PackagingError

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class UploadResult:
    """What the repository answered.

    Attributes:
        url: URL the chart was sent to
        status_code: HTTP status code
        reason: HTTP reason phrase
        http_version: Protocol version of the response (e.g. "HTTP/1.1")
        body: Response body text
    """

    url: str
    status_code: int
    reason: str
    http_version: str
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def render(self) -> str:
        """Status line followed by the body, as shown to the user."""
        status_line = f"{self.http_version} {self.status_code} {self.reason}".strip()
        if not self.body:
            return status_line
        return f"{status_line}\n\n{self.body}"


class ChartUploader:
    """Uploads chart archives with HTTP basic auth.

    Example:
        >>> uploader = ChartUploader(timeout=30)
        >>> result = uploader.upload(
        ...     "https://nexus.example.com/repository/helm-hosted/",
        ...     Path("api-1.2.0.tgz"),
        ...     credential,
        ... )
        >>> result.status_code
        200
    """

    def __init__(
        self,
        timeout: float = 60.0,
        verify: bool = True,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize uploader.

        Args:
            timeout: Request timeout in seconds
            verify: Verify the server's TLS certificate
            transport: Optional httpx transport (used by tests)
        """
        self.timeout = timeout
        self.verify = verify
        self.transport = transport

    @staticmethod
    def target_url(repo_url: str, chart_path: Path) -> str:
        """Append the archive file name to the repository URL."""
        base = repo_url if repo_url.endswith("/") else f"{repo_url}/"
        return f"{base}{chart_path.name}"

    def upload(self, repo_url: str, chart_path: Path, credential: ResolvedCredential) -> UploadResult:
        """PUT the archive to the repository.

        Raises:
            PackagingError: If the archive cannot be read
            ExternalServiceError: If the request could not be completed
        """
        url = self.target_url(repo_url, chart_path)

        try:
            payload = chart_path.read_bytes()
        except OSError as e:
            raise PackagingError(f"Cannot read chart archive {chart_path}: {e.strerror or e}") from e

        log.info("chart_upload_started", url=url, size=len(payload), credential_source=credential.source)

        try:
            with httpx.Client(timeout=self.timeout, verify=self.verify, transport=self.transport) as client:
                response = client.put(url, content=payload, auth=credential.as_auth())
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Failed to upload {chart_path.name} to {url}: {e}") from e

        log.info("chart_upload_finished", url=url, status=response.status_code)

        return UploadResult(
            url=url,
            status_code=response.status_code,
            reason=response.reason_phrase,
            http_version=response.http_version,
            body=response.text,
        )
