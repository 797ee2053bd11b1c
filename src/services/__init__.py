from src.services import (
    bucket_service,
    calendar_mode_service,
    event_service,
    filter_options_service,
    filter_service,
    filter_store,
    filter_sync_service,
)


__all__ = [
    "bucket_service",
    "calendar_mode_service",
    "event_service",
    "filter_options_service",
    "filter_service",
    "filter_store",
    "filter_sync_service",
]
