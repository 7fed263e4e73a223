"""Local Kubernetes cluster provisioning for Keel development"""

__version__ = "0.1.0"
