from __future__ import annotations


class InstallerError(Exception):
    """Base class for all installer errors. Each maps to a process exit code."""

    exit_code = 1


class ConfigError(InstallerError):
    exit_code = 2


class ValidationError(InstallerError):
    """A preflight condition is not met."""

    exit_code = 2

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class UserAborted(InstallerError):
    """The operator declined at the confirmation prompt."""

    exit_code = 3


class StepFailure(InstallerError):
    exit_code = 4

    def __init__(self, index: int, label: str, cause: str):
        super().__init__(f"Step {index} ({label}) failed: {cause}")
        self.index = index
        self.label = label
        self.cause = cause
