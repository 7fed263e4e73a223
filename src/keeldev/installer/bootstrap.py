"""Provisioning workflow for the local Keel development cluster"""

import shutil
import subprocess
from typing import Any, Callable, Dict, List, Optional, Tuple

from keeldev.api.client import ReleaseClient
from keeldev.errors import PrerequisiteError
from keeldev.installer.cluster import KindCluster
from keeldev.installer.shell import run_command
from keeldev.installer.tools import ToolInstaller
from keeldev.output import console, log_command, log_info


class Provisioner:
    """Run the provisioning steps in order, stopping at the first failure.

    External commands go through ``runner`` and PATH lookups through
    ``which`` so the workflow can be driven without a real host.
    """

    def __init__(
        self,
        config: Dict[str, Any],
        runner: Callable[..., subprocess.CompletedProcess] = run_command,
        which: Callable[[str], Optional[str]] = shutil.which,
        releases: Optional[ReleaseClient] = None,
        verbose: bool = False,
    ):
        self.config = config
        self.runner = runner
        self.which = which
        self.verbose = verbose

        if releases is None:
            releases = ReleaseClient(timeout=config.get("http", {}).get("timeout", 30))

        self.cluster = KindCluster(
            name=config["cluster"]["name"],
            ready_timeout=config["cluster"]["ready_timeout"],
            run=self.run,
        )
        self.tools = ToolInstaller(config["tools"], run=self.run, which=which, releases=releases)

    def run(self, cmd: List[str], **kwargs) -> subprocess.CompletedProcess:
        if self.verbose:
            log_command(cmd)
        return self.runner(cmd, **kwargs)

    def check_docker(self) -> None:
        """Check Docker is installed and the daemon answers"""
        if not self.which("docker"):
            raise PrerequisiteError("Docker is not installed. Please install Docker first.")

        if self.run(["docker", "info"], check=False, quiet=True).returncode != 0:
            raise PrerequisiteError("Docker is not running. Please start Docker first.")

        log_info("Docker is installed and running")

    def up(self) -> None:
        """Bring the cluster up from whatever state the host is in"""
        console.print()
        console.print("🚀 Setting up local Kubernetes cluster for Keel development")
        console.print()

        self.check_docker()
        self.tools.install_kind()
        self.tools.ensure_kubectl()
        self.cluster.create()
        self.cluster.verify()
        print_instructions(self.cluster)

    def down(self) -> None:
        """Delete the cluster if it exists"""
        self.check_docker()

        if not self.which("kind"):
            log_info("kind is not installed, no cluster to delete")
            return

        self.cluster.delete()

    def status(self) -> List[Tuple[str, bool, str]]:
        """Collect (check, ok, detail) rows without failing on any of them"""
        rows = []

        docker = self.which("docker")
        rows.append(("Docker installed", bool(docker), docker or "not found"))

        running = bool(docker) and self.run(["docker", "info"], check=False, quiet=True).returncode == 0
        rows.append(("Docker running", running, "" if running else "not responding"))

        kind = self.which("kind")
        rows.append(("kind", bool(kind), kind or "not found"))

        kubectl = self.which("kubectl")
        rows.append(("kubectl", bool(kubectl), kubectl or "not found"))

        exists = bool(kind) and running and self.cluster.exists()
        rows.append((f"Cluster {self.cluster.name}", exists, "present" if exists else "absent"))

        current = self.cluster.current_context() if kubectl else ""
        rows.append(("kubectl context", current == self.cluster.context, current or "none"))

        return rows


def print_instructions(cluster: KindCluster) -> None:
    """Print next steps once the cluster is Ready"""
    console.print()
    console.print("==============================================")
    console.print("[green]✅ Local Kubernetes cluster is ready![/green]")
    console.print("==============================================")
    console.print()
    console.print(f"Cluster name: {cluster.name}")
    console.print(f"Context:      {cluster.context}")
    console.print()
    console.print("To run Keel against this cluster:")
    console.print()
    console.print("  cd cmd/keel && go build && ./keel --no-incluster")
    console.print()
    console.print("  # Or use make:")
    console.print("  make run")
    console.print()
    console.print("To delete the cluster when done:")
    console.print()
    console.print(f"  kind delete cluster --name {cluster.name}")
    console.print("  # or: keel-dev down")
    console.print()
