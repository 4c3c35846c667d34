"""Key derivation for entries in the backing store.

A store writes one index entry and one entry per document. Document ids
are hex-encoded, which keeps keys free of separator characters and makes
the mapping injective, and the ``.document.`` segment keeps them apart
from the index key.
"""


def index_key(namespace: str) -> str:
    """Return the reserved key holding the document index."""
    return f"{namespace}.index"


def document_key(namespace: str, document_id: str) -> str:
    """Return the key holding the document with the given id."""
    return f"{namespace}.document.{document_id.encode('utf-8').hex()}"
