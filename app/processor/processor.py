from app.config.settings import Settings
from app.credentials.resolver import CredentialResolver
from app.database.connection import Database
from app.database.repositories.credentials_repository import CredentialsRepository
from app.database.repositories.document_status_repository import DocumentStatusRepository
from app.database.repositories.transactions_repository import TransactionsRepository
from app.logging.logger import Log
from app.parsing.parser import TransactionParser
from app.pdf.decryptor import QpdfDecryptor
from app.pdf.factory import PdfExtractorFactory
from app.pdf.text_extraction import TextExtractionEngine
from app.persistence.transaction_store import TransactionStore
from app.processor.failures import classify_failure
from app.processor.models import DocumentJob
from app.processor.pipeline import PipelineContext, PipelineStep
from app.processor.steps import (
    ExtractTextStep,
    MarkCompletedStep,
    MarkProcessingStep,
    ParseTransactionsStep,
    PersistTransactionsStep,
    ResolveCredentialsStep,
)
from app.status.models import PASSWORD_FAILURES, DocumentStatus
from app.status.tracker import StatusTracker
from app.tools.runner import SubprocessTool


class Processor:
    """Runs the document pipeline steps in order.

    Pipeline: mark processing -> resolve credentials -> extract text ->
    parse -> persist -> mark completed. A failing step is classified,
    recorded on the document and re-raised to the caller.
    """

    def __init__(self, steps: list[PipelineStep], tracker: StatusTracker) -> None:
        self._steps = steps
        self._tracker = tracker

    def process(self, job: DocumentJob, raw_bytes: bytes) -> PipelineContext | None:
        """Process one document.

        Returns:
            The final pipeline context, or None if the document was already
            completed by an earlier delivery.
        """
        Log.info(f"Processing document {job.document_id} for owner {job.owner_id}")

        current = self._tracker.get_document(job.owner_id, job.document_id)
        if current is not None and current.status == DocumentStatus.COMPLETED:
            Log.info(f"Document {job.document_id} already completed, skipping")
            return None

        context = PipelineContext(job=job, raw_bytes=raw_bytes)
        for step in self._steps:
            try:
                context = step.run(context)
            except Exception as exc:
                self._record_failure(context, step, exc)
                raise

        result = context.save_result
        Log.info(
            f"Document {job.document_id} processed in {context.elapsed_ms()}ms: "
            f"{len(context.transactions)} transactions"
            + (f", {result.saved} saved, {result.duplicates} duplicates" if result else "")
        )
        return context

    def _record_failure(
        self,
        context: PipelineContext,
        step: PipelineStep,
        exc: Exception,
    ) -> None:
        job = context.job
        kind = classify_failure(exc, password_supplied=bool(context.password))
        Log.error(
            f"{type(step).__name__} failed: {exc}",
            document_id=job.document_id,
            failure_kind=str(kind),
        )
        if kind in PASSWORD_FAILURES:
            self._tracker.mark_password_error(job.owner_id, job.document_id, str(exc), kind)
        else:
            self._tracker.mark_failed(job.owner_id, job.document_id, kind, str(exc))


def build_processor(settings: Settings, db: Database) -> Processor:
    """Build a Processor with all required adapters."""
    tracker = StatusTracker(DocumentStatusRepository(db))
    resolver = CredentialResolver(CredentialsRepository(db))
    engine = TextExtractionEngine(
        decryptor=QpdfDecryptor(
            SubprocessTool(settings.qpdf_path, settings.tool_timeout_seconds),
            temp_dir=settings.temp_dir,
        ),
        extractor=PdfExtractorFactory.create(settings),
    )
    store = TransactionStore(TransactionsRepository(db))
    steps: list[PipelineStep] = [
        MarkProcessingStep(tracker),
        ResolveCredentialsStep(resolver),
        ExtractTextStep(engine, tracker),
        ParseTransactionsStep(TransactionParser(), tracker),
        PersistTransactionsStep(store),
        MarkCompletedStep(tracker),
    ]
    return Processor(steps=steps, tracker=tracker)
