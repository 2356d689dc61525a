from dataclasses import dataclass

from app.processor.exceptions import MissingMetadataError

OWNER_ID_KEY = "owner-id"
# Key written by the upload API; read when owner-id is absent.
LEGACY_OWNER_ID_KEY = "auth0-user-id"
DISPLAY_EMAIL_KEY = "user-email"
DOCUMENT_ID_KEY = "document-id"
DOCUMENT_TYPE_KEY = "document-type"
HAS_PASSWORD_KEY = "has-password"
FILENAME_KEY = "filename"

DEFAULT_DOCUMENT_TYPE = "default"


@dataclass(frozen=True)
class DocumentJob:
    """One uploaded document to process, built from its object metadata."""

    bucket: str
    key: str
    owner_id: str
    document_id: str
    document_type: str = DEFAULT_DOCUMENT_TYPE
    has_password: bool = False
    filename: str | None = None
    display_email: str | None = None
    size_bytes: int | None = None

    @classmethod
    def from_metadata(
        cls,
        bucket: str,
        key: str,
        metadata: dict[str, str],
        size_bytes: int | None = None,
    ) -> "DocumentJob":
        """Build a job from upload-time object metadata.

        Raises:
            MissingMetadataError: if owner-id or document-id is absent.
        """
        owner_id = (
            metadata.get(OWNER_ID_KEY) or metadata.get(LEGACY_OWNER_ID_KEY) or ""
        ).strip()
        document_id = (metadata.get(DOCUMENT_ID_KEY) or "").strip()
        if not owner_id:
            raise MissingMetadataError(f"'{OWNER_ID_KEY}' metadata missing on {key}")
        if not document_id:
            raise MissingMetadataError(f"'{DOCUMENT_ID_KEY}' metadata missing on {key}")

        return cls(
            bucket=bucket,
            key=key,
            owner_id=owner_id,
            document_id=document_id,
            document_type=(metadata.get(DOCUMENT_TYPE_KEY) or "").strip()
            or DEFAULT_DOCUMENT_TYPE,
            has_password=(metadata.get(HAS_PASSWORD_KEY) or "").strip().lower() == "true",
            filename=metadata.get(FILENAME_KEY) or key.rsplit("/", 1)[-1],
            display_email=metadata.get(DISPLAY_EMAIL_KEY) or None,
            size_bytes=size_bytes,
        )
