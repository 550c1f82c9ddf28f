from __future__ import annotations

import logging
import subprocess

from jiu.errors import ExecutionError
from jiu.resolver import ResolvedCommand

logger = logging.getLogger(__name__)

# Shell convention for a process ended by SIGINT (128 + 2).
INTERRUPTED_EXIT_CODE = 130


def run_command(resolved: ResolvedCommand) -> int:
    """Run the command with inherited stdio and return its exit code."""
    argv = list(resolved.program_and_args)
    if not resolved.working_directory.is_dir():
        raise ExecutionError(
            f"Working directory does not exist: {resolved.working_directory}",
            code="missing_working_directory",
            details={"argv": argv, "cwd": str(resolved.working_directory)},
        )
    try:
        proc = subprocess.run(argv, cwd=str(resolved.working_directory), check=False)
    except FileNotFoundError as e:
        raise ExecutionError(
            f'Failed to spawn {argv!r}: "{argv[0]}" not found',
            code="program_not_found",
            details={"argv": argv, "error": str(e)},
            hint=f"Ensure `{argv[0]}` is installed and available on PATH.",
        ) from e
    except OSError as e:
        raise ExecutionError(
            f"Failed to spawn {argv!r}: {e}",
            code="spawn_failed",
            details={"argv": argv, "error": str(e)},
        ) from e
    except KeyboardInterrupt:
        # The child got the same SIGINT; subprocess.run waits briefly for it, then kills it.
        logger.debug("interrupted while running %r", argv)
        return INTERRUPTED_EXIT_CODE

    logger.debug("command exited with %d", proc.returncode)
    # Negative return codes mean the child was killed by a signal.
    return proc.returncode if proc.returncode >= 0 else 1
