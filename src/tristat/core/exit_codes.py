# topmark:header:start
#
#   project      : Tristat
#   file         : exit_codes.py
#   file_relpath : src/tristat/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the Tristat CLI.

The values mirror ``git diff --exit-code`` so shell scripts can branch on the
state of a working copy without parsing output. Click reports its own usage errors
with code 2 as well, which matches `ExitCode.ERROR`.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the Tristat CLI.

    Attributes:
        CLEAN: The working copy has no changes (ignored paths do not count).
        DIRTY: At least one staged, unstaged, untracked or conflicted path exists.
        ERROR: Operational failure: invalid arguments or configuration, a repository
            state read failure, or an internal rendering error.
    """

    CLEAN = 0
    DIRTY = 1
    ERROR = 2
