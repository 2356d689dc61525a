import subprocess
from pathlib import Path

from app.logging.logger import Log
from app.tools.base import BaseTool, ToolResult
from app.tools.exceptions import ToolError


class SubprocessTool(BaseTool):
    """Runs an executable with subprocess, never through a shell."""

    def __init__(self, executable: str, timeout_seconds: int) -> None:
        self._executable = executable
        self._timeout_seconds = timeout_seconds

    @property
    def name(self) -> str:
        return Path(self._executable).name

    def run(self, args: list[str], stdin_path: Path | None = None) -> ToolResult:
        command = [self._executable, *args]
        Log.debug(f"Running {self.name} with {len(args)} arguments")
        try:
            if stdin_path is not None:
                with stdin_path.open("rb") as stdin:
                    completed = self._run(command, stdin)
            else:
                completed = self._run(command, subprocess.DEVNULL)
        except FileNotFoundError as exc:
            raise ToolError(f"{self.name} is not installed: {exc}") from exc
        except subprocess.TimeoutExpired as exc:
            raise ToolError(
                f"{self.name} timed out after {self._timeout_seconds}s"
            ) from exc

        return ToolResult(
            exit_code=completed.returncode,
            stdout=completed.stdout.decode("utf-8", errors="replace"),
            stderr=completed.stderr.decode("utf-8", errors="replace"),
        )

    def _run(self, command: list[str], stdin: object) -> subprocess.CompletedProcess[bytes]:
        return subprocess.run(  # noqa: S603
            command,
            stdin=stdin,
            capture_output=True,
            timeout=self._timeout_seconds,
            check=False,
        )
