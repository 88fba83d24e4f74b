"""Proof store factory.

Provides get_proof_store() / set_proof_store() to swap implementations.
Defaults to InMemoryProofStore.
"""

from payments.proof.memory_store import InMemoryProofStore
from payments.proof.port import ProofBlob, ProofStore

__all__ = ["ProofBlob", "ProofStore", "get_proof_store", "reset_proof_store", "set_proof_store"]

_current_store: ProofStore | None = None


def get_proof_store() -> ProofStore:
    """Return the current proof store. Defaults to InMemoryProofStore."""
    global _current_store
    if _current_store is None:
        _current_store = InMemoryProofStore()
    return _current_store


def set_proof_store(store: ProofStore) -> None:
    """Override the active proof store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_proof_store() -> None:
    """Reset to default proof store."""
    global _current_store
    _current_store = None
