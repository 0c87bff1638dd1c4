"""Project-specific exception types."""

from __future__ import annotations

from typing import Sequence


class WslCmdError(RuntimeError):
    """Base error for domain-level wslcmd failures."""


class ExternalToolFailure(WslCmdError):
    """Raised when wsl.exe exits with a non-zero status."""

    def __init__(
        self,
        cmd: Sequence[str] | str,
        code: int,
        output: Sequence[str] = (),
    ):
        self.cmd = cmd
        self.code = code
        self.output = list(output)
        detail = '\n'.join(self.output)
        super().__init__(
            f'Command failed (code={code}): {cmd}\n{detail}'.strip()
        )


class ToolNotFoundError(WslCmdError):
    """Raised when the wsl.exe executable cannot be launched."""


class DistributionNotFoundError(WslCmdError):
    """Raised when a name lookup matches no installed distribution."""


class DestinationExistsError(WslCmdError):
    """Raised when an export target is already present."""


class OutputFormatError(WslCmdError):
    """Raised when wsl.exe output does not have the expected shape."""
