"""External command execution for VCS backends."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Sequence

from repoherd.exceptions import ExternalCommandFailedError

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127


class CommandRunner:
    """Runs one external command to completion.

    Output goes straight to the terminal unless ``silent`` is set, in which
    case it is captured and stderr is attached to any failure.
    """

    async def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        silent: bool = False,
        backend: str | None = None,
    ) -> None:
        """Run a command asynchronously, raising on non-zero exit."""
        logger.debug(f"Running {list(cmd)} (cwd={cwd}, silent={silent})")
        stream = asyncio.subprocess.PIPE if silent else None

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=cwd,
                stdout=stream,
                stderr=stream,
            )
        except FileNotFoundError as e:
            raise ExternalCommandFailedError(
                cmd,
                COMMAND_NOT_FOUND,
                cwd=cwd,
                backend=backend,
                stderr=f"{cmd[0]}: command not found",
            ) from e

        _, stderr = await process.communicate()

        if process.returncode != 0:
            raise ExternalCommandFailedError(
                cmd,
                process.returncode,
                cwd=cwd,
                backend=backend,
                stderr=stderr.decode(errors="replace") if stderr else "",
            )
