from collections.abc import Callable

from app.config.settings import Settings
from app.pdf.base import BasePdfExtractor
from app.pdf.pdfplumber_adapter import PdfPlumberAdapter
from app.pdf.pdftotext_adapter import PdfToTextAdapter
from app.tools.runner import SubprocessTool


def _pdftotext(settings: Settings) -> BasePdfExtractor:
    tool = SubprocessTool(settings.pdftotext_path, settings.tool_timeout_seconds)
    return PdfToTextAdapter(tool, temp_dir=settings.temp_dir)


def _pdfplumber(settings: Settings) -> BasePdfExtractor:
    return PdfPlumberAdapter()


class PdfExtractorFactory:
    """Creates the correct PDF extractor based on settings."""

    ADAPTERS: dict[str, Callable[[Settings], BasePdfExtractor]] = {
        "pdftotext": _pdftotext,
        "pdfplumber": _pdfplumber,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        builder = cls.ADAPTERS.get(engine)
        if builder is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return builder(settings)
