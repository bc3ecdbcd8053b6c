"""API dependencies for dependency injection."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from rfp_desk.attachments.resolver import AttachmentResolver
from rfp_desk.config import get_settings
from rfp_desk.query.engine import QueryEngine
from rfp_desk.services.transfer import TransferService
from rfp_desk.storage.backends import JSONFileStorage
from rfp_desk.store.record_store import RecordStore


@lru_cache()
def get_storage() -> JSONFileStorage:
    """Get or create the local key/value storage."""
    return JSONFileStorage(get_settings().storage_file)


@lru_cache()
def get_resolver() -> AttachmentResolver:
    """Get or create the attachment resolver."""
    return AttachmentResolver(handle_directory=get_settings().handle_directory)


@lru_cache()
def get_record_store() -> RecordStore:
    """Get or create the record store."""
    return RecordStore(
        storage=get_storage(),
        storage_key=get_settings().storage_key,
        resolver=get_resolver(),
    )


@lru_cache()
def get_query_engine() -> QueryEngine:
    """Get or create the query engine."""
    return QueryEngine()


@lru_cache()
def get_transfer_service() -> TransferService:
    """Get or create the export/import/share service."""
    return TransferService(
        store=get_record_store(),
        storage=get_storage(),
        settings=get_settings(),
    )


# Type aliases for dependency injection
StoreDep = Annotated[RecordStore, Depends(get_record_store)]
QueryDep = Annotated[QueryEngine, Depends(get_query_engine)]
ResolverDep = Annotated[AttachmentResolver, Depends(get_resolver)]
TransferDep = Annotated[TransferService, Depends(get_transfer_service)]
