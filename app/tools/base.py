from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one external program invocation."""

    exit_code: int
    stdout: str
    stderr: str

    @property
    def diagnostics(self) -> str:
        """Combined output used for error classification and messages."""
        return "\n".join(part for part in (self.stderr.strip(), self.stdout.strip()) if part)


class BaseTool(ABC):
    """Contract for invoking an external command-line program."""

    @abstractmethod
    def run(self, args: list[str], stdin_path: Path | None = None) -> ToolResult:
        """Run the program with `args`, optionally feeding `stdin_path` to stdin.

        Raises:
            ToolError: if the program cannot be started or times out.
        """
