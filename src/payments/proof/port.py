"""Payment proof storage port.

Proofs are opaque blobs (usually a screenshot of a bank transfer). The order
keeps only a reference; the bytes live in whatever blob store is configured.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProofBlob:
    data: bytes
    content_type: str = "application/octet-stream"


class ProofStore(ABC):
    """Abstract proof blob store."""

    @abstractmethod
    def put(self, order_id: str, blob: ProofBlob) -> str:
        """Store ``blob`` for ``order_id`` and return a reference to it."""
        ...

    @abstractmethod
    def get(self, reference: str) -> ProofBlob:
        """Return the blob for ``reference`` or raise ``ProofNotFound``."""
        ...

    @abstractmethod
    def delete(self, reference: str) -> None:
        """Drop the blob stored under ``reference``. Unknown references are ignored."""
        ...
