from blog_api.models.user import User
from blog_api.models.post import Post

__all__ = ["User", "Post"]
