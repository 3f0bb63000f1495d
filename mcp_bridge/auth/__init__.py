from .cache import TokenCache
from .bearer import authenticate, require_claims, get_bearer_token
from .validator import TokenValidator, decode_claims

__all__ = [
    "TokenCache",
    "TokenValidator",
    "authenticate",
    "decode_claims",
    "get_bearer_token",
    "require_claims",
]
