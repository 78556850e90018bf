"""Exceptions raised by the emsecp orchestrator."""


class OrchestratorError(Exception):
    """Base exception; exit_code is what the command line exits with."""

    exit_code = 1


class UsageError(OrchestratorError):
    """Raised when the command line has too few arguments."""

    exit_code = 1


class GlueScriptNotFoundError(OrchestratorError):
    """Raised when the glue script is missing from the source directory."""

    exit_code = 2

    def __init__(self, path):
        self.path = path
        super().__init__(f'Cannot find glue script at "{path}"')


class ToolchainNotFoundError(OrchestratorError):
    """Raised when Emscripten is not installed or not on PATH."""

    exit_code = 3

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing Emscripten tools: {', '.join(missing)}")


class CommandFailedError(OrchestratorError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(self, command: list[str], exit_code: int):
        self.command = command
        self.exit_code = exit_code
        super().__init__(f"Command failed with exit code {exit_code}: {' '.join(command)}")
