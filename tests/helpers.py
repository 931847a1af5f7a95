from datetime import timedelta

from blog_api.core.clock import utc_now
from blog_api.core.security import create_access_token
from blog_api.models.user import User


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


def hours_ago(n: float):
    return utc_now() - timedelta(hours=n)


def hours_ahead(n: float):
    return utc_now() + timedelta(hours=n)
