"""
Exception classes for arbortest.

Hook and test faults never surface through these classes; the engine turns
them into outcome records. These exceptions cover misuse of the builder and
configuration APIs, and the single fatal condition that stops a run.
"""


class ArbortestError(Exception):
    """Base exception for all arbortest errors."""

    pass


class TreeStructureError(ArbortestError):
    """Raised when a tree declaration is malformed."""

    def __init__(self, path: str, reason: str):
        """
        Initialize the exception.

        Params:
            path: Display path of the group being declared into
            reason: Why the declaration was rejected
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid declaration in '{path}': {reason}")


class ConfigurationError(ArbortestError):
    """Raised when a configuration setting is given an invalid value."""

    def __init__(self, setting: str, reason: str):
        """
        Initialize the exception.

        Params:
            setting: Name of the rejected setting
            reason: Why the value was rejected
        """
        self.setting = setting
        self.reason = reason
        super().__init__(f"Invalid configuration for '{setting}': {reason}")


class TransformError(ArbortestError):
    """Raised when a registered tree transform misbehaves."""

    def __init__(self, transform: str, reason: str):
        self.transform = transform
        self.reason = reason
        super().__init__(f"Tree transform '{transform}' failed: {reason}")


class RunAbortedError(ArbortestError):
    """Raised when the result aggregator fails and the run cannot continue."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Run aborted: {reason}")
