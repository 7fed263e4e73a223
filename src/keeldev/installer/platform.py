"""Host OS and architecture detection for release downloads"""

import platform

ARCH_ALIASES = {
    "x86_64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
}


def normalize_arch(machine: str) -> str:
    """Map a machine name to the release naming; unknown names pass through."""
    return ARCH_ALIASES.get(machine, machine)


def detect_os() -> str:
    return platform.system().lower()


def detect_arch() -> str:
    return normalize_arch(platform.machine())
