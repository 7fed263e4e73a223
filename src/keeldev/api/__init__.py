"""HTTP access to kind and Kubernetes release hosts"""

from .client import ReleaseClient

__all__ = ["ReleaseClient"]
