"""Shared fixtures: a scripted command runner and fake release host"""

import subprocess
from pathlib import Path

import pytest

from keeldev.config.manager import ConfigManager
from keeldev.installer.bootstrap import Provisioner


class FakeRunner:
    """Record commands and answer them from a table of prefix -> (code, stdout)"""

    def __init__(self, responses=None):
        self.calls = []
        self.responses = dict(responses or {})

    def __call__(self, cmd, *, check=True, capture_output=False, quiet=False):
        self.calls.append(list(cmd))
        returncode, stdout = self._lookup(cmd)
        if check and returncode != 0:
            raise subprocess.CalledProcessError(returncode, cmd, output=stdout)
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr="")

    def _lookup(self, cmd):
        for n in range(len(cmd), 0, -1):
            key = tuple(cmd[:n])
            if key in self.responses:
                return self.responses[key]
        return 0, ""

    def ran(self, *prefix):
        return any(call[: len(prefix)] == list(prefix) for call in self.calls)

    def index(self, *prefix):
        for i, call in enumerate(self.calls):
            if call[: len(prefix)] == list(prefix):
                return i
        raise ValueError(f"{prefix} was not run")


class FakeReleases:
    """Stand-in for ReleaseClient that never touches the network"""

    def __init__(self, stable="v1.29.0"):
        self.stable = stable
        self.downloads = []
        self.version_requests = []

    def stable_version(self, url):
        self.version_requests.append(url)
        return self.stable

    def download(self, url, dest: Path):
        self.downloads.append(url)
        dest.write_bytes(b"#!/bin/sh\n")
        return dest

    @property
    def network_calls(self):
        return len(self.downloads) + len(self.version_requests)


def make_which(*present):
    return lambda name: f"/usr/local/bin/{name}" if name in present else None


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("KEEL_CLUSTER_NAME", "KEEL_READY_TIMEOUT", "KEEL_KIND_VERSION", "KEEL_INSTALL_DIR"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def config(tmp_path):
    return ConfigManager(tmp_path / "config.yaml").load()


@pytest.fixture
def fixed_platform(monkeypatch):
    monkeypatch.setattr("keeldev.installer.tools.detect_os", lambda: "linux")
    monkeypatch.setattr("keeldev.installer.tools.detect_arch", lambda: "amd64")


@pytest.fixture
def runner():
    return FakeRunner({("kind", "version"): (0, "kind v0.20.0 go1.20.4 linux/amd64\n")})


@pytest.fixture
def releases():
    return FakeReleases()


@pytest.fixture
def provisioner_factory(config, runner, releases):
    def factory(*present, **overrides):
        return Provisioner(
            overrides.get("config", config),
            runner=runner,
            which=make_which(*present),
            releases=releases,
        )

    return factory


@pytest.fixture
def which_factory():
    return make_which
