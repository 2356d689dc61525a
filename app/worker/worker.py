import time
from typing import Any

from app.config.settings import Settings
from app.logging.logger import Log
from app.worker.envelope import QueueMessage
from app.worker.job_runner import JobRunner


class Worker:
    """Poll loop: receive -> dispatch -> delete on success."""

    def __init__(
        self,
        sqs_client: Any,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._sqs = sqs_client
        self._job_runner = job_runner
        self._settings = settings

    def run(self, max_messages: int | None = None) -> None:
        """Main poll loop. Runs forever until interrupted.

        If max_messages is set, stop after handling that many messages (for testing).
        """
        Log.info(f"Worker started, polling {self._settings.queue_url}")
        handled = 0
        try:
            while max_messages is None or handled < max_messages:
                messages = self._try_receive()
                if messages is None:
                    time.sleep(self._settings.queue_error_backoff_seconds)
                    continue
                if not messages:
                    Log.debug("No messages available")
                    continue
                for message in messages:
                    if self._job_runner.run(message):
                        self._acknowledge(message)
                    handled += 1
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")

    def _try_receive(self) -> list[QueueMessage] | None:
        """Long-poll the queue. Returns None if the queue could not be reached."""
        try:
            response = self._sqs.receive_message(
                QueueUrl=self._settings.queue_url,
                MaxNumberOfMessages=self._settings.queue_max_messages,
                WaitTimeSeconds=self._settings.queue_wait_time_seconds,
                VisibilityTimeout=self._settings.queue_visibility_timeout_seconds,
                AttributeNames=["ApproximateReceiveCount"],
            )
        except Exception as exc:
            Log.warning(f"Queue error, will retry: {exc}")
            return None

        return [
            QueueMessage(
                message_id=raw["MessageId"],
                receipt_handle=raw["ReceiptHandle"],
                body=raw.get("Body", ""),
                receive_count=int(
                    raw.get("Attributes", {}).get("ApproximateReceiveCount", "1")
                ),
            )
            for raw in response.get("Messages", [])
        ]

    def _acknowledge(self, message: QueueMessage) -> None:
        try:
            self._sqs.delete_message(
                QueueUrl=self._settings.queue_url,
                ReceiptHandle=message.receipt_handle,
            )
        except Exception as exc:
            # Redelivered after the visibility timeout.
            Log.warning(f"Could not delete message {message.message_id}: {exc}")
