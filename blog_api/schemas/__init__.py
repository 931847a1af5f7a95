from blog_api.schemas.user import (
    UserCreate,
    UserResponse,
    UserPublic,
    Token,
    TokenRefresh,
    LoginRequest,
)
from blog_api.schemas.post import PostCreate, PostUpdate, PostResponse, PostPage, PostForm, FormField
