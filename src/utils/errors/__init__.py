"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    InfrastructureError,
    RedisConnectionError,
)
from .relay import (
    DeliveryExhausted,
    DeliveryFailed,
    InvalidRequest,
    MalformedPayload,
    RateLimited,
    RelayError,
    Unauthorized,
    UpstreamTaskCreationFailed,
)

__all__ = [
    "DeliveryExhausted",
    "DeliveryFailed",
    "InfrastructureError",
    "InvalidRequest",
    "MalformedPayload",
    "RateLimited",
    "RedisConnectionError",
    "RelayError",
    "Unauthorized",
    "UpstreamTaskCreationFailed",
]
