"""Tests for kind and kubectl installation"""

import subprocess
from pathlib import Path

import pytest

from keeldev.errors import DownloadError, InstallError
from keeldev.installer.tools import ToolInstaller


@pytest.fixture
def installer_factory(config, runner, releases, which_factory, fixed_platform):
    def factory(*present, tools_config=None):
        return ToolInstaller(
            tools_config or config["tools"],
            run=runner,
            which=which_factory(*present),
            releases=releases,
        )

    return factory


class TestInstallKind:
    def test_skips_when_present(self, installer_factory, runner, releases, capsys):
        """kind on PATH means no download"""
        installer_factory("kind").install_kind()

        assert releases.network_calls == 0
        assert not runner.ran("sudo")
        assert "kind is already installed: kind v0.20.0" in capsys.readouterr().out

    def test_downloads_pinned_version(self, installer_factory, runner, releases, capsys):
        installer_factory().install_kind()

        assert releases.downloads == ["https://kind.sigs.k8s.io/dl/v0.20.0/kind-linux-amd64"]
        mv = runner.calls[-1]
        assert mv[:2] == ["sudo", "mv"]
        assert mv[2].endswith("/kind")
        assert mv[3] == "/usr/local/bin/kind"
        out = capsys.readouterr().out
        assert "Installing kind v0.20.0..." in out
        assert "kind installed successfully" in out

    def test_without_sudo(self, installer_factory, runner, config):
        tools = dict(config["tools"], use_sudo=False, install_dir="/home/dev/bin")

        installer_factory(tools_config=tools).install_kind()

        assert runner.calls[-1][0] == "mv"
        assert runner.calls[-1][2] == "/home/dev/bin/kind"

    def test_temporary_download_is_executable_and_cleaned_up(self, installer_factory, runner):
        seen = {}

        def record_mv(cmd, **kwargs):
            path = Path(cmd[2])
            seen["mode"] = path.stat().st_mode
            seen["path"] = path
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        installer = installer_factory()
        installer.run = record_mv
        installer.install_kind()

        assert seen["mode"] & 0o111
        assert not seen["path"].exists()

    def test_move_failure(self, installer_factory, runner):
        runner.responses[("sudo", "mv")] = (1, "")

        with pytest.raises(InstallError) as excinfo:
            installer_factory().install_kind()

        assert "/usr/local/bin/kind" in str(excinfo.value)
        assert excinfo.value.exit_code == 1

    def test_download_failure_propagates(self, installer_factory, runner, releases):
        def fail(url, dest):
            raise DownloadError(f"Download failed (404): {url}")

        releases.download = fail

        with pytest.raises(DownloadError):
            installer_factory().install_kind()
        assert not runner.ran("sudo")


class TestEnsureKubectl:
    def test_skips_when_present(self, installer_factory, runner, releases, capsys):
        runner.responses[("kubectl", "version", "--client", "--short")] = (0, "Client Version: v1.27.1\n")

        installer_factory("kubectl").ensure_kubectl()

        assert releases.network_calls == 0
        out = capsys.readouterr().out
        assert "kubectl is available: Client Version: v1.27.1" in out
        assert "[WARN]" not in out

    def test_installs_latest_stable(self, installer_factory, runner, releases, capsys):
        installer_factory().ensure_kubectl()

        assert releases.version_requests == ["https://dl.k8s.io/release/stable.txt"]
        assert releases.downloads == ["https://dl.k8s.io/release/v1.29.0/bin/linux/amd64/kubectl"]
        assert runner.calls[runner.index("sudo", "mv")][3] == "/usr/local/bin/kubectl"
        assert "[WARN] kubectl is not installed. Installing..." in capsys.readouterr().out

    def test_version_falls_back_when_short_flag_removed(self, installer_factory, runner, capsys):
        runner.responses[("kubectl", "version", "--client", "--short")] = (1, "")
        runner.responses[("kubectl", "version", "--client")] = (0, "Client Version: v1.30.2\n")

        installer_factory("kubectl").ensure_kubectl()

        assert runner.calls[-1] == ["kubectl", "version", "--client"]
        assert "kubectl is available: Client Version: v1.30.2" in capsys.readouterr().out

    def test_broken_kubectl_aborts(self, installer_factory, runner):
        runner.responses[("kubectl", "version")] = (1, "")

        with pytest.raises(subprocess.CalledProcessError):
            installer_factory("kubectl").ensure_kubectl()

    def test_invalid_stable_version_aborts_before_download(self, installer_factory, releases):
        def bad(url):
            raise DownloadError("Unexpected stable version '' from " + url)

        releases.stable_version = bad

        with pytest.raises(DownloadError):
            installer_factory().ensure_kubectl()
        assert releases.downloads == []
