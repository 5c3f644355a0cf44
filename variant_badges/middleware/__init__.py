from .session_token import get_current_shop, decode_session_token

__all__ = ["get_current_shop", "decode_session_token"]
