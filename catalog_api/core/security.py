from jose import JWTError, jwt
from fastapi import HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from catalog_api.core.config import settings
import structlog

logger = structlog.get_logger()

security = HTTPBearer()

# Claims checked, in order, for the caller's identity
USER_ID_CLAIMS = ("userId", "id", "sub")


def verify_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.error("JWT validation error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = next((payload[claim] for claim in USER_ID_CLAIMS if payload.get(claim)), None)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing userId",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {"user_id": str(user_id), "payload": payload}


def validate_request(credentials: HTTPAuthorizationCredentials = Depends(security)) -> dict:
    token = credentials.credentials
    return verify_token(token)
