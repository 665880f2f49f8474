"""Error types raised by repository, index, diff and terminal layers.

Repository and terminal errors are fatal before the UI starts. Index write
errors are caught at the key-handler boundary and shown on the status line.
"""

from __future__ import annotations


class CommitterError(Exception):
    """Base class for all errors raised by committer."""


class RepositoryAccessError(CommitterError):
    """Raised when the repository cannot be opened or queried."""


class IndexWriteError(CommitterError):
    """Raised when a stage/unstage change cannot be written to the index."""


class DiffToolUnavailable(CommitterError):
    """Raised internally when the structural diff tool cannot produce output."""


class TerminalSetupError(CommitterError):
    """Raised when raw mode or the alternate screen cannot be set up."""
