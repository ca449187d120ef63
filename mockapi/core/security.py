# === mockapi/core/security.py ===
from fastapi import Cookie, HTTPException, Request
from jose import jwt, ExpiredSignatureError, JWTError
import logging

logger = logging.getLogger(__name__)


def extract_bearer_token(authorization: str) -> str:
    if authorization and authorization.startswith("Bearer "):
        return authorization[len("Bearer "):]
    return ""


def decode_access_token(token: str, secret_key: str, algorithm: str = "HS256") -> dict:
    return jwt.decode(token, secret_key, algorithms=[algorithm])


async def get_current_user_id(request: Request, access_token: str = Cookie(None)) -> str:
    """Resolve the caller of an admin route from a session token.

    Tokens are minted by the sign-in service; this only verifies them. The
    cookie wins over the Authorization header when both are sent.
    """
    token = access_token or extract_bearer_token(request.headers.get("Authorization", ""))

    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")

    settings = request.app.state.settings
    try:
        payload = decode_access_token(token, settings.SECRET_KEY, settings.JWT_ALGORITHM)
    except ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except JWTError as e:
        logger.info(f"Rejected admin token: {e}")
        raise HTTPException(status_code=401, detail="Invalid token")

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token")
    return str(user_id)
