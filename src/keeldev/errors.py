"""Errors raised while provisioning the local cluster"""


class ProvisionError(Exception):
    """Base exception for provisioning failures"""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class PrerequisiteError(ProvisionError):
    """Docker is missing or not running"""

    pass


class DownloadError(ProvisionError):
    """A release could not be fetched"""

    pass


class InstallError(ProvisionError):
    """A downloaded binary could not be installed"""

    pass


class ReadinessTimeoutError(ProvisionError):
    """Nodes did not report Ready in time"""

    pass
