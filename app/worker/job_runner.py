from app.config.settings import Settings
from app.logging.logger import Log
from app.processor.exceptions import TerminalProcessingError
from app.processor.models import DocumentJob
from app.processor.processor import Processor
from app.storage.object_store import S3ObjectStore
from app.worker.envelope import EnvelopeError, ObjectRef, QueueMessage, parse_storage_events


class JobRunner:
    """Run one queue message and decide whether it may be acknowledged."""

    def __init__(
        self,
        processor: Processor,
        object_store: S3ObjectStore,
        settings: Settings,
    ) -> None:
        self._processor = processor
        self._object_store = object_store
        self._settings = settings

    def run(self, message: QueueMessage) -> bool:
        """Process every document named in the message.

        Returns:
            True if the message is finished with and should be deleted,
            False to leave it for redelivery after the visibility timeout.
        """
        Log.info(
            f"Running message {message.message_id} (delivery {message.receive_count})"
        )
        try:
            refs = parse_storage_events(message.body)
        except EnvelopeError as exc:
            Log.error(f"Dropping message {message.message_id}: {exc}")
            return True

        try:
            for ref in refs:
                self._run_object(ref)
        except Exception as exc:
            self._handle_failure(message, exc)
            return False

        Log.info(f"Message {message.message_id} completed successfully")
        return True

    def _run_object(self, ref: ObjectRef) -> None:
        prefix = self._settings.object_key_prefix
        if prefix and not ref.key.startswith(prefix):
            Log.info(f"Ignoring s3://{ref.bucket}/{ref.key}: outside '{prefix}'")
            return

        try:
            stored = self._object_store.fetch(ref.bucket, ref.key)
            job = DocumentJob.from_metadata(
                ref.bucket,
                ref.key,
                stored.metadata,
                size_bytes=ref.size_bytes if ref.size_bytes is not None else stored.size_bytes,
            )
            self._processor.process(job, stored.body)
        except TerminalProcessingError as exc:
            Log.warning(f"Giving up on s3://{ref.bucket}/{ref.key}: {exc}")

    def _handle_failure(self, message: QueueMessage, exc: Exception) -> None:
        Log.exception(
            f"Message failed, leaving it for redelivery: {exc}",
            message_id=message.message_id,
            delivery=message.receive_count,
        )
