class FlowScriptError(Exception):
    """Base error raised while running a FlowScript script."""


class CommandError(FlowScriptError):
    """Raised when a command is misused or its target does not exist."""
    def __init__(self, command: str, message: str):
        super().__init__(message)
        self.command = command


class SandboxError(FlowScriptError):
    """Raised by a sandbox when the user code fails.

    The message starts with ``PythonError:`` so the dispatcher can strip
    the prefix before showing it to the user.
    """
    PREFIX = 'PythonError:'

    def __init__(self, detail: str):
        super().__init__(f"{self.PREFIX} {detail}")
        self.detail = detail
