"""Release download client for kind and kubectl"""

import re
from pathlib import Path
from typing import Optional

import httpx

from keeldev.errors import DownloadError

VERSION_PATTERN = re.compile(r"^v\d+\.\d+\.\d+([-+.][0-9A-Za-z.-]+)?$")


class ReleaseClient:
    """Fetch release metadata and binaries over HTTPS"""

    def __init__(
        self,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport

    def stable_version(self, url: str) -> str:
        """Resolve the latest stable version tag published at ``url``"""
        response = self._request("GET", url)
        version = response.text.strip()

        if not VERSION_PATTERN.match(version):
            raise DownloadError(f"Unexpected stable version {version!r} from {url}")

        return version

    def download(self, url: str, dest: Path) -> Path:
        """Stream ``url`` into ``dest``"""
        try:
            with self._client() as client:
                with client.stream("GET", url) as response:
                    if response.status_code >= 400:
                        raise DownloadError(f"Download failed ({response.status_code}): {url}")
                    with open(dest, "wb") as f:
                        for chunk in response.iter_bytes():
                            f.write(chunk)
        except httpx.HTTPError as e:
            raise DownloadError(f"Download failed: {url}: {e}") from e

        return dest

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self.transport,
        )

    def _request(self, method: str, url: str) -> httpx.Response:
        """Execute HTTP request"""
        try:
            with self._client() as client:
                response = client.request(method, url)
        except httpx.HTTPError as e:
            raise DownloadError(f"Request failed: {url}: {e}") from e

        if response.status_code >= 400:
            raise DownloadError(f"Request failed ({response.status_code}): {url}")

        return response
