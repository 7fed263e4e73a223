"""kind cluster lifecycle: existence check, creation, readiness and teardown"""

import subprocess
from typing import Callable

from keeldev.errors import ReadinessTimeoutError
from keeldev.output import console, log_info


class KindCluster:
    """A named kind cluster and its kubectl context"""

    def __init__(self, name: str, ready_timeout: int, run: Callable[..., subprocess.CompletedProcess]):
        self.name = name
        self.ready_timeout = ready_timeout
        self.run = run

    @property
    def context(self) -> str:
        return f"kind-{self.name}"

    def exists(self) -> bool:
        """Check kind's cluster list for an exact name match"""
        result = self.run(["kind", "get", "clusters"], check=False, capture_output=True)
        if result.returncode != 0:
            return False
        return any(line.strip() == self.name for line in result.stdout.splitlines())

    def create(self) -> None:
        """Create the cluster unless kind already knows it"""
        if self.exists():
            log_info(f"Cluster '{self.name}' already exists")
            return

        log_info(f"Creating kind cluster '{self.name}'...")
        self.run(["kind", "create", "cluster", "--name", self.name])
        log_info("Cluster created successfully")

    def verify(self) -> None:
        """Switch context, wait for all nodes Ready and list them"""
        log_info("Verifying cluster...")

        self.run(["kubectl", "config", "use-context", self.context], quiet=True)

        log_info("Waiting for node to be ready...")
        try:
            self.run(
                [
                    "kubectl",
                    "wait",
                    "--for=condition=Ready",
                    "node",
                    "--all",
                    f"--timeout={self.ready_timeout}s",
                ]
            )
        except subprocess.CalledProcessError as e:
            raise ReadinessTimeoutError(
                f"Nodes not Ready within {self.ready_timeout}s (context {self.context})",
                exit_code=e.returncode,
            ) from e

        console.print()
        self.run(["kubectl", "get", "nodes"])
        console.print()

    def delete(self) -> bool:
        """Delete the cluster if present; returns whether anything was deleted"""
        if not self.exists():
            log_info(f"Cluster '{self.name}' does not exist, nothing to delete")
            return False

        log_info(f"Deleting kind cluster '{self.name}'...")
        self.run(["kind", "delete", "cluster", "--name", self.name])
        log_info("Cluster deleted")
        return True

    def current_context(self) -> str:
        result = self.run(["kubectl", "config", "current-context"], check=False, capture_output=True)
        if result.returncode != 0:
            return ""
        return result.stdout.strip()
