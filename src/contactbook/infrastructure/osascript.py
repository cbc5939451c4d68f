"""Runs AppleScript source through osascript with a bounded wait."""

import asyncio
import logging

from contactbook.application.errors import ScriptExecutionError

logger = logging.getLogger(__name__)

OSASCRIPT = "/usr/bin/osascript"
DEFAULT_TIMEOUT = 120.0


class OsascriptRunner:
    """Spawns `<executable> -e <script>` once per call.

    A run that outlives its timeout is killed and reported as "" (the same as
    "no result"); only the log tells the two apart.
    """

    def __init__(self, executable: str = OSASCRIPT, inline_flag: str = "-e") -> None:
        self._executable = executable
        self._inline_flag = inline_flag

    async def run(self, script: str, timeout: float = DEFAULT_TIMEOUT) -> str:
        try:
            process = await asyncio.create_subprocess_exec(
                self._executable,
                self._inline_flag,
                script,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ScriptExecutionError(f"could not start {self._executable}: {exc}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            logger.warning(
                "%s timed out after %.1fs; returning empty result", self._executable, timeout
            )
            return ""

        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip() or "Unknown error"
            logger.debug("%s exited with %s: %s", self._executable, process.returncode, message)
            raise ScriptExecutionError(message, returncode=process.returncode)

        return stdout.decode("utf-8", errors="replace").strip()
