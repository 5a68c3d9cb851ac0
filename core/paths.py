"""
Siraw Links - Document Paths
=============================
Where the counter and visitor documents live in the shared store.
"""

from dataclasses import dataclass


COUNTER_COLLECTION = 'viewCounts'
COUNTER_DOCUMENT = 'profile'
VISITORS_COLLECTION = 'uniqueVisitors'


@dataclass(frozen=True)
class DocumentPaths:
    """Builds slash-separated document paths under the app's namespace."""

    app_id: str = 'default-app-id'

    @property
    def root(self) -> str:
        return f"artifacts/{self.app_id}/public/data"

    @property
    def counter(self) -> str:
        """Path of the global counter document."""
        return f"{self.root}/{COUNTER_COLLECTION}/{COUNTER_DOCUMENT}"

    def visitor(self, visitor_id: str) -> str:
        """Path of the visitor record for ``visitor_id``."""
        if not visitor_id or '/' in visitor_id:
            raise ValueError(f"Invalid visitor id: {visitor_id!r}")
        return f"{self.root}/{VISITORS_COLLECTION}/{visitor_id}"
