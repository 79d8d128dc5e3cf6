"""Exceptions raised by docker-container-inspector."""


class InspectorError(Exception):
    """Base class for all errors reported by the CLI."""


class EngineConnectionError(InspectorError):
    """The Docker client could not be created or the daemon is unreachable."""


class InspectionError(InspectorError):
    """The container does not exist or the engine rejected the inspect call."""


class ProcessSamplingError(InspectorError):
    """The OS could not be queried for a process's resource usage."""


class ProcessNotFound(ProcessSamplingError):
    """No process with the requested PID exists on the host."""


class UsageError(InspectorError):
    """Bad or missing command-line arguments.

    Args:
        usage: Usage line to show the user, if any
    """

    def __init__(self, message, usage=None):
        super().__init__(message)
        self.usage = usage
