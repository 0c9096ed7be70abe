"""Backlog integration module."""

from .client import (
    PAGE_SIZE,
    BacklogClient,
    BacklogClientError,
    BacklogTransportError,
    BacklogAuthenticationError,
    BacklogNotFoundError,
    BacklogRateLimitError,
    BacklogDecodeError,
    BacklogAPIError,
)
from .models import Issue, Priority, Project, Status, User

__all__ = [
    "PAGE_SIZE",
    "BacklogClient",
    "BacklogClientError",
    "BacklogTransportError",
    "BacklogAuthenticationError",
    "BacklogNotFoundError",
    "BacklogRateLimitError",
    "BacklogDecodeError",
    "BacklogAPIError",
    "Issue",
    "Priority",
    "Project",
    "Status",
    "User",
]
