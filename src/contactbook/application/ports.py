"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol


class ScriptRunner(Protocol):
    """Executes one script in the external interpreter."""

    async def run(self, script: str, timeout: float) -> str:
        """Return trimmed stdout, or "" if the timeout elapsed.

        Raises ScriptExecutionError when the interpreter exits non-zero.
        """
        ...
