from slowapi import Limiter
from slowapi.util import get_remote_address

from playbook.core.auth import decode_access_token, token_from_request


def get_rate_limit_key(request):
    """Search limits are per user when the request carries a valid token; else per IP."""
    token = token_from_request(
        request.headers.get("Authorization"), request.query_params.get("token")
    )
    user_id = decode_access_token(token) if token else None
    if user_id:
        return f"user:{user_id}"
    return get_remote_address(request)


limiter = Limiter(key_func=get_rate_limit_key)
