import os
import shutil
import tempfile
from pathlib import Path
from types import TracebackType

from app.logging.logger import Log


class TempWorkspace:
    """Private scratch directory for one tool invocation.

    Use as a context manager: the directory and everything written into it
    is removed on exit, whether the block succeeded or raised.
    """

    def __init__(self, base_dir: str | None = None, prefix: str = "statement-") -> None:
        self._base_dir = base_dir
        self._prefix = prefix
        self._root: Path | None = None

    def __enter__(self) -> "TempWorkspace":
        self._root = Path(tempfile.mkdtemp(prefix=self._prefix, dir=self._base_dir))
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cleanup()

    @property
    def root(self) -> Path:
        if self._root is None:
            raise RuntimeError("TempWorkspace is not active")
        return self._root

    def path(self, name: str) -> Path:
        """Path of a file inside the workspace (not created)."""
        return self.root / name

    def write_bytes(self, name: str, data: bytes) -> Path:
        """Write a file readable only by the current user."""
        target = self.path(name)
        fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        return target

    def write_secret(self, name: str, secret: str) -> Path:
        return self.write_bytes(name, secret.encode("utf-8"))

    def cleanup(self) -> None:
        if self._root is None:
            return
        root, self._root = self._root, None
        try:
            shutil.rmtree(root)
        except OSError as exc:
            Log.warning(f"Could not remove temp workspace {root}: {exc}")
