"""Install kind and kubectl when they are missing from PATH"""

import subprocess
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from keeldev.api.client import ReleaseClient
from keeldev.errors import InstallError
from keeldev.installer.platform import detect_arch, detect_os
from keeldev.output import log_info, log_warn


class ToolInstaller:
    """Download pinned or latest-stable binaries into the install directory"""

    def __init__(
        self,
        tools_config: Dict[str, Any],
        run: Callable[..., subprocess.CompletedProcess],
        which: Callable[[str], Optional[str]],
        releases: ReleaseClient,
    ):
        self.config = tools_config
        self.run = run
        self.which = which
        self.releases = releases

    def install_kind(self) -> None:
        """Install the pinned kind release unless kind is already on PATH"""
        if self.which("kind"):
            result = self.run(["kind", "version"], capture_output=True)
            log_info(f"kind is already installed: {result.stdout.strip()}")
            return

        version = self.config["kind_version"]
        log_info(f"Installing kind {version}...")

        url = self.config["kind_url"].format(version=version, os=detect_os(), arch=detect_arch())
        self._install_binary("kind", url)

        log_info("kind installed successfully")

    def ensure_kubectl(self) -> None:
        """Install the latest stable kubectl if missing, then report its version"""
        if not self.which("kubectl"):
            log_warn("kubectl is not installed. Installing...")

            version = self.releases.stable_version(self.config["kubectl_stable_url"])
            url = self.config["kubectl_url"].format(version=version, os=detect_os(), arch=detect_arch())
            self._install_binary("kubectl", url)

        log_info(f"kubectl is available: {self.kubectl_client_version()}")

    def kubectl_client_version(self) -> str:
        # --short was removed in kubectl 1.28
        result = self.run(["kubectl", "version", "--client", "--short"], check=False, capture_output=True)
        if result.returncode != 0:
            result = self.run(["kubectl", "version", "--client"], capture_output=True)
        return result.stdout.strip()

    def _install_binary(self, name: str, url: str) -> Path:
        """Download ``url``, mark it executable and move it into the install dir"""
        dest = Path(self.config["install_dir"]) / name

        with tempfile.TemporaryDirectory(prefix="keeldev-") as tmp:
            path = Path(tmp) / name
            self.releases.download(url, path)

            try:
                path.chmod(path.stat().st_mode | 0o111)
            except OSError as e:
                raise InstallError(f"Could not mark {path} executable: {e}") from e

            cmd = ["mv", str(path), str(dest)]
            if self.config.get("use_sudo", True):
                cmd = ["sudo"] + cmd

            try:
                self.run(cmd)
            except subprocess.CalledProcessError as e:
                raise InstallError(f"Failed to install {name} to {dest}", exit_code=e.returncode) from e

        return dest
