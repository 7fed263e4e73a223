"""Provisioning steps for the local kind cluster"""

from .bootstrap import Provisioner, print_instructions
from .cluster import KindCluster
from .platform import detect_arch, detect_os, normalize_arch
from .tools import ToolInstaller

__all__ = [
    "KindCluster",
    "Provisioner",
    "ToolInstaller",
    "detect_arch",
    "detect_os",
    "normalize_arch",
    "print_instructions",
]
