"""API dependencies: auth, db session."""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.core.security import ACCESS_TOKEN_TYPE, token_subject
from blog_api.db.session import get_db
from blog_api.models.user import User
from blog_api.services.auth_service import get_user_by_id

security = HTTPBearer(auto_error=False)


async def get_current_user_optional(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    if not credentials:
        return None
    user_id = token_subject(credentials.credentials, ACCESS_TOKEN_TYPE)
    if user_id is None:
        return None
    return await get_user_by_id(db, user_id)


async def get_current_user(
    user: User | None = Depends(get_current_user_optional),
) -> User:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
