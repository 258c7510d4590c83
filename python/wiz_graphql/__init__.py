from .auth import (
    AuthProvider,
    BearerTokenAuth,
    ClientCredentialsAuth,
    acquire_token,
)
from .client import GraphQLClient
from .errors import (
    AuthError,
    GraphQLError,
    GraphQLOperationError,
    PaginationError,
    RateLimitError,
    RequestError,
    SerializationError,
    TransientError,
    ValidationError,
)
from .models import GraphQLErrorItem, GraphQLResult
from .transport import reset_shared_http_client, shared_http_client

__all__ = [
    "GraphQLClient",
    "AuthProvider",
    "BearerTokenAuth",
    "ClientCredentialsAuth",
    "acquire_token",
    "shared_http_client",
    "reset_shared_http_client",
    "GraphQLResult",
    "GraphQLErrorItem",
    "TransientError",
    "RateLimitError",
    "AuthError",
    "RequestError",
    "SerializationError",
    "GraphQLError",
    "GraphQLOperationError",
    "ValidationError",
    "PaginationError",
]
