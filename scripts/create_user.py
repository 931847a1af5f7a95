import asyncio
import sys
import os

# Add project root to sys.path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from blog_api.db.session import async_session_maker
from blog_api.schemas.user import UserCreate
from blog_api.services.auth_service import create_user, get_user_by_email


async def create_user_cmd(name, email, password):
    async with async_session_maker() as session:
        if await get_user_by_email(session, email):
            print(f"Error: User with email '{email}' already exists.")
            return 1

        user = await create_user(session, UserCreate(name=name, email=email, password=password))
        await session.commit()
        print("Success: User created!")
        print(f"ID: {user.id}")
        print(f"Name: {user.name}")
        print(f"Email: {user.email}")
        return 0


if __name__ == "__main__":
    if len(sys.argv) < 4:
        print("Usage: python scripts/create_user.py <name> <email> <password>")
        sys.exit(1)

    name = sys.argv[1]
    email = sys.argv[2]
    password = sys.argv[3]
    sys.exit(asyncio.run(create_user_cmd(name, email, password)))
