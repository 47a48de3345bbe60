"""Domain protocols - interfaces for all collaborators.

Structural types describing what the core expects from storage, directory
backends and the surrounding document model. Tests satisfy them with
small stubs.
"""

from mentionkit.domain.protocols.cache import Cache, K, V
from mentionkit.domain.protocols.document import DocumentModel
from mentionkit.domain.protocols.lookup import LookupService, ResultCallback

__all__ = [
    "Cache",
    "K",
    "V",
    "DocumentModel",
    "LookupService",
    "ResultCallback",
]
