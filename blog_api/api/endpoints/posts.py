"""Posts CRUD, the public listing, and the editor pages."""
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.api.deps import get_current_user, get_current_user_optional, get_db
from blog_api.core.config import settings
from blog_api.models.post import TITLE_MAX_LENGTH
from blog_api.models.user import User
from blog_api.schemas.post import FormField, PostCreate, PostForm, PostPage, PostResponse, PostUpdate
from blog_api.services.post_service import (
    create_post,
    delete_post,
    get_owned_post,
    get_visible_post,
    last_page_for,
    list_published,
    post_to_response,
    update_post,
)

router = APIRouter(prefix="/posts", tags=["posts"])

POST_FORM_FIELDS = [
    FormField(name="title", type="string", required=True, max_length=TITLE_MAX_LENGTH),
    FormField(name="content", type="text", required=True),
    FormField(name="is_draft", type="boolean", required=False),
    FormField(name="published_at", type="datetime", required=False),
]


def _login_redirect(request: Request) -> RedirectResponse:
    return RedirectResponse(url=str(request.url_for("login")), status_code=status.HTTP_302_FOUND)


@router.get("", response_model=PostPage)
async def list_posts(
    request: Request,
    page: int = Query(1, ge=1),
    db: AsyncSession = Depends(get_db),
):
    per_page = settings.POSTS_PER_PAGE
    posts, total = await list_published(db, page=page, per_page=per_page)
    last_page = last_page_for(total, per_page)

    def page_url(number: int) -> str:
        return str(request.url.include_query_params(page=number))

    return PostPage(
        data=[post_to_response(p) for p in posts],
        current_page=page,
        per_page=per_page,
        total=total,
        last_page=last_page,
        path=str(request.url.remove_query_params("page")),
        first_page_url=page_url(1),
        last_page_url=page_url(last_page),
        next_page_url=page_url(page + 1) if page < last_page else None,
        prev_page_url=page_url(page - 1) if page > 1 else None,
    )


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post_endpoint(
    data: PostCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    post = await create_post(db, current_user.id, data)
    await db.commit()
    post.user = current_user
    return post_to_response(post)


# Registered before "/{post_id}" so "create" is not parsed as an id.
@router.get("/create", response_model=PostForm)
async def create_page(
    request: Request,
    current_user: User | None = Depends(get_current_user_optional),
):
    if current_user is None:
        return _login_redirect(request)
    return PostForm(
        action=str(request.url_for("create_post_endpoint")),
        method="POST",
        fields=POST_FORM_FIELDS,
        defaults={"is_draft": True, "published_at": None},
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    post = await get_visible_post(db, post_id, current_user.id if current_user else None)
    return post_to_response(post)


@router.get("/{post_id}/edit", response_model=PostForm)
async def edit_page(
    post_id: int,
    request: Request,
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_db),
):
    if current_user is None:
        return _login_redirect(request)
    post = await get_owned_post(db, post_id, current_user.id)
    return PostForm(
        action=str(request.url_for("update_post_endpoint", post_id=post.id)),
        method="PUT",
        fields=POST_FORM_FIELDS,
        defaults={"is_draft": post.is_draft, "published_at": post.published_at},
        post=post_to_response(post),
    )


@router.put("/{post_id}", response_model=PostResponse)
async def update_post_endpoint(
    post_id: int,
    data: PostUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    post = await update_post(db, post_id, current_user.id, data)
    await db.commit()
    return post_to_response(post)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post_endpoint(
    post_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await delete_post(db, post_id, current_user.id)
    await db.commit()
    return None
