"""Object metadata shared by all source kinds."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

# Key used for indexing resources by their source.
SOURCE_INDEX_KEY = ".metadata.source"


@dataclass
class ObjectMeta:
    """Identity and bookkeeping data of a stored object."""

    name: str = ""
    namespace: str = ""
    generation: int = 0
    annotations: Dict[str, str] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)
    finalizers: List[str] = field(default_factory=list)
    deletion_timestamp: Optional[datetime] = None

    def has_finalizer(self, finalizer: str) -> bool:
        """Tell whether the finalizer is registered."""
        return finalizer in self.finalizers

    def add_finalizer(self, finalizer: str) -> None:
        """Register the finalizer unless it already is."""
        if finalizer not in self.finalizers:
            self.finalizers.append(finalizer)

    def remove_finalizer(self, finalizer: str) -> None:
        """Remove every occurrence of the finalizer."""
        self.finalizers = [f for f in self.finalizers if f != finalizer]

    def is_deleting(self) -> bool:
        """Tell whether the object is marked for deletion."""
        return self.deletion_timestamp is not None