# -----------------------------------------------------------------------------
# Copyright (c) 2025 SSA Exporter contributors
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Invocation of the ssacli management tool.

This is the only module that crosses the process boundary. Callers get raw
stdout bytes back, or a CommandError they should treat as "no data this cycle".
"""

import logging
import subprocess
from typing import List, Optional, Sequence

from ssa_exporter.exceptions import CommandError

LOG = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = 'ssacli'

LIST_CONTROLLERS_ARGS = ['ctrl', 'all', 'show']


def logical_drive_args(slot: int) -> List[str]:
    """Argument list for showing every logical drive on one controller."""
    return ['ctrl', f'slot={slot}', 'ld', 'all', 'show']


class CommandRunner:
    """Runs ssacli synchronously and captures its standard output."""

    def __init__(self, executable: str = DEFAULT_EXECUTABLE, timeout: Optional[float] = None):
        """
        Args:
            executable: Name or path of the management tool
            timeout: Seconds to wait for the tool; None blocks until it exits
        """
        self.executable = executable
        self.timeout = timeout

    def run(self, args: Sequence[str]) -> bytes:
        """
        Run the tool with the given arguments.

        Args:
            args: Arguments passed after the executable name

        Returns:
            Raw standard output

        Raises:
            CommandError: If the tool is missing, cannot be launched, times out
                or exits with a non-zero status
        """
        cmd = [self.executable, *args]
        LOG.debug(f"Running {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise CommandError(f"{self.executable} not found: {e}", args=cmd) from e
        except subprocess.TimeoutExpired as e:
            raise CommandError(
                f"{' '.join(cmd)} timed out after {self.timeout}s", args=cmd
            ) from e
        except OSError as e:
            raise CommandError(f"Failed to launch {' '.join(cmd)}: {e}", args=cmd) from e

        if result.returncode != 0:
            stderr = result.stderr.decode('utf-8', errors='replace').strip()
            LOG.debug(f"{' '.join(cmd)} stderr: {stderr}")
            raise CommandError(
                f"{' '.join(cmd)} exited with status {result.returncode}",
                args=cmd,
                returncode=result.returncode,
                stderr=stderr,
            )
        return result.stdout

    def list_controllers(self) -> bytes:
        """Output of `ssacli ctrl all show`."""
        return self.run(LIST_CONTROLLERS_ARGS)

    def show_logical_drives(self, slot: int) -> bytes:
        """Output of `ssacli ctrl slot=<slot> ld all show`."""
        return self.run(logical_drive_args(slot))
