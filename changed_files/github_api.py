from __future__ import annotations

from urllib.parse import quote

import requests

from changed_files import actions
from changed_files.errors import UpstreamAPIError
from changed_files.models import ChangedFile, Comparison


DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
MAX_COMPARE_FILES = 300


class GitHubClient:
    """Minimal client for the compare-two-commits endpoint."""

    def __init__(
        self,
        token: str,
        owner: str,
        repo: str,
        api_url: str = DEFAULT_API_URL,
        timeout_seconds: int = 30,
    ) -> None:
        self.token = token
        self.owner = owner
        self.repo = repo
        self.api_url = api_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }

    def compare_url(self, base: str, head: str) -> str:
        basehead = f"{quote(base, safe='/')}...{quote(head, safe='/')}"
        return f"{self.api_url}/repos/{self.owner}/{self.repo}/compare/{basehead}"

    def compare(self, base: str, head: str) -> Comparison:
        # https://docs.github.com/rest/commits/commits#compare-two-commits
        # Only the first page carries the file list; later pages add commits.
        url = self.compare_url(base, head)
        try:
            resp = requests.get(url, headers=self._headers(), timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            raise UpstreamAPIError(f"Request to {url} failed: {str(exc)[:220]}") from exc

        if resp.status_code != 200:
            return Comparison(http_status=resp.status_code, status=None)

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstreamAPIError(f"The compare API returned a non-JSON body for {base}...{head}.") from exc

        files = [ChangedFile.from_api(raw) for raw in (data.get("files") or [])]
        if len(files) >= MAX_COMPARE_FILES:
            actions.warning(
                f"The compare API returned {len(files)} files for {base}...{head}, its maximum. "
                "Changes beyond that are not listed."
            )
        return Comparison(http_status=200, status=data.get("status"), files=files)
