"""Entry use cases."""

from .create_entry import CreateEntryRequest, CreateEntryResponse, CreateEntryUseCase
from .delete_entry import DeleteEntryRequest, DeleteEntryResponse, DeleteEntryUseCase
from .get_entry import GetEntryRequest, GetEntryResponse, GetEntryUseCase
from .list_entries import (
    ListEntriesRequest,
    ListEntriesResponse,
    ListEntriesUseCase,
    RootCounts,
)
from .list_my_entries import (
    ListMyEntriesRequest,
    ListMyEntriesResponse,
    ListMyEntriesUseCase,
)
from .restore_entry import (
    RestoreEntryRequest,
    RestoreEntryResponse,
    RestoreEntryUseCase,
)
from .view import EntryView, ReactionStatsView

__all__ = [
    "CreateEntryRequest",
    "CreateEntryResponse",
    "CreateEntryUseCase",
    "DeleteEntryRequest",
    "DeleteEntryResponse",
    "DeleteEntryUseCase",
    "EntryView",
    "GetEntryRequest",
    "GetEntryResponse",
    "GetEntryUseCase",
    "ListEntriesRequest",
    "ListEntriesResponse",
    "ListEntriesUseCase",
    "ListMyEntriesRequest",
    "ListMyEntriesResponse",
    "ListMyEntriesUseCase",
    "ReactionStatsView",
    "RestoreEntryRequest",
    "RestoreEntryResponse",
    "RestoreEntryUseCase",
    "RootCounts",
]
