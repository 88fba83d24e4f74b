"""In-memory proof store for development and testing."""

from uuid import uuid4

from shared.exceptions import ProofNotFound

from payments.proof.port import ProofBlob, ProofStore


class InMemoryProofStore(ProofStore):
    def __init__(self) -> None:
        self.blobs: dict[str, ProofBlob] = {}

    def put(self, order_id: str, blob: ProofBlob) -> str:
        reference = f"proof-{order_id}-{uuid4().hex[:8]}"
        self.blobs[reference] = blob
        return reference

    def get(self, reference: str) -> ProofBlob:
        blob = self.blobs.get(reference)
        if blob is None:
            raise ProofNotFound({"payment_proof": [f"No proof stored under {reference}"]})
        return blob

    def delete(self, reference: str) -> None:
        self.blobs.pop(reference, None)

    def reset(self) -> None:
        self.blobs.clear()
