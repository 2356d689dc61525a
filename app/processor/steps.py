from app.credentials.resolver import CredentialResolver
from app.logging.logger import Log
from app.parsing.exceptions import ParsingError
from app.parsing.models import ParseContext
from app.parsing.parser import TransactionParser
from app.pdf.text_extraction import TextExtractionEngine
from app.persistence.transaction_store import TransactionStore
from app.processor.exceptions import NoTransactionsFoundError
from app.processor.pipeline import PipelineContext, PipelineStep
from app.status.models import DocumentStatus
from app.status.tracker import StatusTracker


class MarkProcessingStep(PipelineStep):
    def __init__(self, tracker: StatusTracker) -> None:
        self._tracker = tracker

    def run(self, context: PipelineContext) -> PipelineContext:
        job = context.job
        fields: dict[str, object] = {"size_bytes": job.size_bytes or len(context.raw_bytes)}
        if job.filename:
            fields["filename"] = job.filename
        self._tracker.advance(job.owner_id, job.document_id, DocumentStatus.PROCESSING, **fields)
        return context


class ResolveCredentialsStep(PipelineStep):
    def __init__(self, resolver: CredentialResolver) -> None:
        self._resolver = resolver

    def run(self, context: PipelineContext) -> PipelineContext:
        job = context.job
        if job.has_password:
            context.password = self._resolver.resolve(job.owner_id, job.document_type)
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, engine: TextExtractionEngine, tracker: StatusTracker) -> None:
        self._engine = engine
        self._tracker = tracker

    def run(self, context: PipelineContext) -> PipelineContext:
        job = context.job
        status = DocumentStatus.DECRYPTING if context.password else DocumentStatus.EXTRACTING_TEXT
        self._tracker.advance(job.owner_id, job.document_id, status)
        context.extracted_text = self._engine.extract(context.raw_bytes, context.password)
        Log.info(
            f"Extracted {len(context.extracted_text)} chars from document {job.document_id}"
        )
        return context


class ParseTransactionsStep(PipelineStep):
    def __init__(self, parser: TransactionParser, tracker: StatusTracker) -> None:
        self._parser = parser
        self._tracker = tracker

    def run(self, context: PipelineContext) -> PipelineContext:
        job = context.job
        self._tracker.advance(job.owner_id, job.document_id, DocumentStatus.PARSING)
        parse_context = ParseContext(
            source_document_id=job.document_id,
            owner_id=job.owner_id,
            document_type=job.document_type,
            display_email=job.display_email,
        )
        try:
            context.transactions = self._parser.parse(context.extracted_text, parse_context)
        except Exception as exc:
            raise ParsingError(f"{type(exc).__name__}: {exc}") from exc

        if not context.transactions:
            raise NoTransactionsFoundError(
                f"No transactions found in document {job.document_id}"
            )
        return context


class PersistTransactionsStep(PipelineStep):
    def __init__(self, store: TransactionStore) -> None:
        self._store = store

    def run(self, context: PipelineContext) -> PipelineContext:
        context.save_result = self._store.save(context.transactions)
        return context


class MarkCompletedStep(PipelineStep):
    def __init__(self, tracker: StatusTracker) -> None:
        self._tracker = tracker

    def run(self, context: PipelineContext) -> PipelineContext:
        job = context.job
        self._tracker.mark_completed(
            job.owner_id,
            job.document_id,
            transactions_extracted=len(context.transactions),
            processing_time_ms=context.elapsed_ms(),
        )
        return context
