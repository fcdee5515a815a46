"""In-session storage for accepted document entries."""
from intake.entries.store import EntryListStore

__all__ = ["EntryListStore"]
