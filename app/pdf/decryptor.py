from app.logging.logger import Log
from app.pdf.exceptions import PdfExtractionError, PdfPasswordError, is_password_diagnostic
from app.tools.base import BaseTool
from app.tools.exceptions import ToolError
from app.tools.workspace import TempWorkspace

# qpdf exits with 3 when it succeeded but printed warnings.
_QPDF_SUCCESS_CODES = frozenset({0, 3})


class QpdfDecryptor:
    """Removes PDF encryption with `qpdf --decrypt`.

    The password is handed to qpdf through a 0600 file inside a private temp
    directory, never on the command line.
    """

    def __init__(self, tool: BaseTool, temp_dir: str | None = None) -> None:
        self._tool = tool
        self._temp_dir = temp_dir

    def decrypt(self, pdf_bytes: bytes, password: str) -> bytes:
        """Return the decrypted PDF bytes.

        Raises:
            PdfPasswordError: if qpdf reports a wrong or missing password.
            PdfExtractionError: on any other qpdf failure.
        """
        with TempWorkspace(self._temp_dir, prefix="qpdf-") as workspace:
            source = workspace.write_bytes("encrypted.pdf", pdf_bytes)
            password_file = workspace.write_secret("secret", password)
            target = workspace.path("decrypted.pdf")
            try:
                result = self._tool.run(
                    [
                        f"--password-file={password_file}",
                        "--decrypt",
                        str(source),
                        str(target),
                    ]
                )
            except ToolError as exc:
                raise PdfExtractionError(str(exc)) from exc

            if result.exit_code not in _QPDF_SUCCESS_CODES or not target.exists():
                message = result.diagnostics or f"exit code {result.exit_code}"
                if is_password_diagnostic(message):
                    raise PdfPasswordError(f"qpdf: {message}")
                raise PdfExtractionError(f"qpdf failed: {message}")

            if result.exit_code == 3:
                Log.warning(f"qpdf decrypted with warnings: {result.diagnostics}")
            decrypted = target.read_bytes()

        Log.info(f"Decrypted PDF ({len(pdf_bytes)} -> {len(decrypted)} bytes)")
        return decrypted
