from app.database.repositories.credentials_repository import CredentialsRepository
from app.logging.logger import Log


class CredentialResolver:
    """Looks up the stored PDF password for an owner's document type."""

    def __init__(self, repository: CredentialsRepository) -> None:
        self._repository = repository

    def resolve(self, owner_id: str, document_type: str) -> str | None:
        """Return the password, or None when the owner never stored one."""
        credential = self._repository.find(owner_id, document_type)
        if credential is None:
            Log.warning(
                f"No stored password for owner {owner_id} and document type '{document_type}'"
            )
            return None
        Log.info(f"Found stored password for document type '{document_type}'")
        return credential.password
