"""Process exit codes used by the basis CLI and script helpers."""

from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERNAL_ERROR = 3
