from app.logging.logger import Log
from app.pdf.base import BasePdfExtractor
from app.pdf.exceptions import PdfExtractionError, PdfPasswordError, is_password_diagnostic
from app.tools.base import BaseTool
from app.tools.exceptions import ToolError
from app.tools.workspace import TempWorkspace


class PdfToTextAdapter(BasePdfExtractor):
    """Extracts text with poppler's `pdftotext -layout`."""

    def __init__(self, tool: BaseTool, temp_dir: str | None = None) -> None:
        self._tool = tool
        self._temp_dir = temp_dir

    def extract(self, pdf_bytes: bytes) -> str:
        with TempWorkspace(self._temp_dir, prefix="pdftotext-") as workspace:
            source = workspace.write_bytes("input.pdf", pdf_bytes)
            target = workspace.path("output.txt")
            try:
                result = self._tool.run(
                    ["-layout", "-enc", "UTF-8", str(source), str(target)]
                )
            except ToolError as exc:
                raise PdfExtractionError(str(exc)) from exc

            if result.exit_code != 0:
                message = result.diagnostics or f"exit code {result.exit_code}"
                if is_password_diagnostic(message):
                    raise PdfPasswordError(f"pdftotext: {message}")
                raise PdfExtractionError(f"pdftotext failed: {message}")
            if not target.exists():
                raise PdfExtractionError("pdftotext produced no output file")

            text = target.read_text(encoding="utf-8", errors="replace")

        Log.info(f"Extracted {len(text)} chars ({len(text.splitlines())} lines) with pdftotext")
        return text
