"""Configuration management for keeldev"""

import copy
import os
from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG_PATH = Path.home() / ".keeldev" / "config.yaml"


class ConfigManager:
    """Manage keeldev configuration"""

    def __init__(self, config_path: Path = DEFAULT_CONFIG_PATH):
        self.config_path = config_path

    def load(self) -> Dict[str, Any]:
        """Load configuration from defaults, file and environment.

        Raises ``ValueError`` for unparsable YAML or values of the wrong shape.
        """
        config = self._load_defaults()

        if self.config_path.exists():
            with open(self.config_path) as f:
                try:
                    file_config = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ValueError(f"{self.config_path} is not valid YAML: {e}") from e

            if not isinstance(file_config, dict):
                raise ValueError(f"{self.config_path} must contain a mapping")
            config = self._merge(config, file_config)

        config = self._apply_env_overrides(config)
        self._validate(config)

        return config

    def save(self, config: Dict[str, Any]) -> None:
        """Save configuration to file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.config_path, "w") as f:
            yaml.dump(config, f, default_flow_style=False)

    def _load_defaults(self) -> Dict[str, Any]:
        """Load default configuration"""
        return {
            "cluster": {
                "name": "keel-dev",
                "ready_timeout": 60,
            },
            "tools": {
                "kind_version": "v0.20.0",
                "install_dir": "/usr/local/bin",
                "use_sudo": True,
                "kind_url": "https://kind.sigs.k8s.io/dl/{version}/kind-{os}-{arch}",
                "kubectl_url": "https://dl.k8s.io/release/{version}/bin/{os}/{arch}/kubectl",
                "kubectl_stable_url": "https://dl.k8s.io/release/stable.txt",
            },
            "http": {
                "timeout": 30,
            },
        }

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Merge two configuration dictionaries"""
        result = copy.deepcopy(base)

        for key, value in override.items():
            if key in result and isinstance(result[key], dict):
                if not isinstance(value, dict):
                    raise ValueError(f"'{key}' must be a mapping, got {value!r}")
                result[key] = self._merge(result[key], value)
            else:
                result[key] = value

        return result

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides"""
        if name := os.getenv("KEEL_CLUSTER_NAME"):
            config["cluster"]["name"] = name

        if timeout := os.getenv("KEEL_READY_TIMEOUT"):
            try:
                config["cluster"]["ready_timeout"] = int(timeout)
            except ValueError:
                raise ValueError(f"KEEL_READY_TIMEOUT must be an integer, got {timeout!r}") from None

        if version := os.getenv("KEEL_KIND_VERSION"):
            config["tools"]["kind_version"] = version

        if install_dir := os.getenv("KEEL_INSTALL_DIR"):
            config["tools"]["install_dir"] = install_dir

        return config

    def _validate(self, config: Dict[str, Any]) -> None:
        timeout = config["cluster"]["ready_timeout"]
        # bool is an int subclass
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
            raise ValueError(f"cluster.ready_timeout must be a positive number of seconds, got {timeout!r}")
