"""Exception types for defaults2nix."""

from __future__ import annotations


class Defaults2NixError(Exception):
    """Base class for every error raised by defaults2nix."""


class UnknownFilterError(Defaults2NixError, ValueError):
    """A ``--filter`` entry is not one of the known filter names."""

    def __init__(self, name: str, valid: tuple[str, ...]) -> None:
        self.name = name
        self.valid = valid
        super().__init__(
            f"Unknown filter option '{name}'. Valid options are: {', '.join(valid)}"
        )


class DefaultsCommandError(Defaults2NixError):
    """The ``defaults`` command exited with an error."""

    def __init__(self, command: list[str], stderr: str = "", returncode: int | None = None) -> None:
        self.command = command
        self.stderr = stderr
        self.returncode = returncode
        message = f"executing '{' '.join(command)}' failed"
        if returncode is not None:
            message += f": exit status {returncode}"
        if stderr.strip():
            message += f" ({stderr.strip()})"
        super().__init__(message)


class UnsupportedPlatformError(Defaults2NixError):
    """defaults2nix needs the macOS ``defaults`` command."""


class UsageError(Defaults2NixError):
    """Invalid combination of command line arguments."""
