"""Executors that shell out to command-line programs such as kubectl."""

import asyncio
import logging
from typing import List, Optional

from ..core.errors import ToolExecutionError

LOGGER = logging.getLogger(__name__)


class CommandLineTool:
    """Runs one external program with arguments taken from a command string.

    The command string comes from the model, which often repeats the program
    name (``"kubectl get pods"``); that leading token is dropped before the
    rest is split on whitespace. No shell is involved.
    """

    def __init__(self, program: str, timeout: Optional[float] = None):
        """Initialize the executor.

        Args:
            program: Executable to run (looked up on PATH)
            timeout: Seconds to wait before killing the process; None waits forever
        """
        self.program = program
        self.timeout = timeout if timeout else None

    def normalize(self, command: str) -> str:
        """Strip a redundant leading program name from `command`."""
        command = command.lstrip()
        prefix = f"{self.program} "
        if command.startswith(prefix):
            return command[len(prefix):]
        return command

    def split_arguments(self, command: str) -> List[str]:
        return self.normalize(command).split()

    async def __call__(self, command: str) -> str:
        """Run the program and return its combined stdout and stderr.

        Raises:
            ToolExecutionError: The program could not start, timed out or
                exited with a non-zero status. Captured output is attached.
        """
        args = self.split_arguments(command)
        LOGGER.debug("Running %s %s", self.program, args)

        try:
            process = await asyncio.create_subprocess_exec(
                self.program,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except (OSError, ValueError) as e:
            raise ToolExecutionError(
                self.program, f"failed to start {self.program}: {e}"
            ) from e

        try:
            stdout, _ = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise ToolExecutionError(
                self.program,
                f"{self.program} timed out after {self.timeout:g} seconds",
            )

        output = stdout.decode("utf-8", errors="replace") if stdout else ""

        if process.returncode != 0:
            LOGGER.warning("%s exited with status %s", self.program, process.returncode)
            raise ToolExecutionError(
                self.program,
                f"exit status {process.returncode}",
                output=output,
                return_code=process.returncode,
            )

        return output
