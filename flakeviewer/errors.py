"""Exception types shared by the gateway, navigator, and CLI."""

from __future__ import annotations


class ViewerError(Exception):
    """Base class for failures that end a flakeviewer session."""


class EvaluatorError(ViewerError):
    """The evaluator process exited non-zero or could not be launched."""

    def __init__(self, path: str, stderr: str, returncode: int | None = None) -> None:
        self.path = path
        self.stderr = stderr
        self.returncode = returncode
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"evaluating {path!r} failed: {detail}")


class StartupError(ViewerError):
    """Root path is malformed or does not name an attribute set with children."""
