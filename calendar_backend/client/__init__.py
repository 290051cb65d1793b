from calendar_backend.client.api_client import ApiClient, ApiError
from calendar_backend.client.response_cache import ResponseCache
from calendar_backend.client.store import CalendarStore

__all__ = ["ApiClient", "ApiError", "ResponseCache", "CalendarStore"]
