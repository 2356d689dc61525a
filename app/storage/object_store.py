from dataclasses import dataclass, field
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from app.logging.logger import Log
from app.storage.exceptions import StorageError


@dataclass(frozen=True)
class StoredObject:
    """Bytes and user metadata of one uploaded object."""

    body: bytes
    metadata: dict[str, str] = field(default_factory=dict)
    content_type: str | None = None

    @property
    def size_bytes(self) -> int:
        return len(self.body)


class S3ObjectStore:
    """Reads uploaded statements from S3."""

    def __init__(self, client: Any) -> None:
        self._client = client

    def fetch(self, bucket: str, key: str) -> StoredObject:
        """Download an object with its metadata.

        Raises:
            StorageError: if the object cannot be read.
        """
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
            body = response["Body"].read()
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"Cannot read s3://{bucket}/{key}: {exc}") from exc

        # S3 returns user metadata keys lower-cased, without the x-amz-meta- prefix.
        metadata = {k.lower(): v for k, v in (response.get("Metadata") or {}).items()}
        Log.info(f"Fetched s3://{bucket}/{key} ({len(body)} bytes)")
        return StoredObject(
            body=body,
            metadata=metadata,
            content_type=response.get("ContentType"),
        )
