import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from app.parsing.models import Transaction
from app.persistence.transaction_store import SaveResult
from app.processor.models import DocumentJob


@dataclass(slots=True)
class PipelineContext:
    job: DocumentJob
    raw_bytes: bytes = b""
    password: str | None = None
    extracted_text: str = ""
    transactions: list[Transaction] = field(default_factory=list)
    save_result: SaveResult | None = None
    started_at: float = field(default_factory=time.monotonic)

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.started_at) * 1000)


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
