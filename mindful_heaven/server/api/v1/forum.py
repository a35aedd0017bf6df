"""
API endpoints for the community forum.

Authors are shown by their anonymous alias only. Replying to someone else's
post notifies its author.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from mindful_heaven.core.database.entities.forum import ForumCategory, ForumPost
from mindful_heaven.core.database.repositories import ForumRepository, ProfileRepository
from mindful_heaven.core.models.io import ForumPostCreate, ForumPostRead, ForumReplyCreate, ForumReplyRead
from mindful_heaven.server.services.deps import CurrentUserDep, SessionDep
from mindful_heaven.server.services.notifier import Notifier

router = APIRouter(tags=["forum"])


def _post_read(post: ForumPost, alias: str, reply_count: int) -> ForumPostRead:
    return ForumPostRead(
        id=post.id,
        user_id=post.user_id,
        title=post.title,
        content=post.content,
        category=post.category,
        author_alias=alias,
        reply_count=reply_count,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


async def _get_post(forum: ForumRepository, post_id: str) -> ForumPost:
    post = await forum.get_by_id(post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Post {post_id} not found")
    return post


@router.get(
    "/posts",
    response_model=list[ForumPostRead],
    summary="List Posts",
    description="Forum posts, newest first, optionally filtered by category and a search term.",
)
async def list_posts(
    user: CurrentUserDep,
    session: SessionDep,
    category: Optional[ForumCategory] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Matches title or content, case-insensitive"),
) -> list[ForumPostRead]:
    """
    List forum posts.

    - **category**: One of ``general``, ``stress``, ``anxiety``, ``depression``,
      ``relationships``, ``academics``.
    - **search**: Text to look for in titles and contents.
    """
    forum = ForumRepository(session)
    posts = await forum.list_posts(category=category, search=search)
    aliases = await ProfileRepository(session).aliases_for(p.user_id for p in posts)
    counts = await forum.reply_counts(p.id for p in posts)
    return [_post_read(p, aliases[p.user_id], counts.get(p.id, 0)) for p in posts]


@router.post(
    "/posts",
    response_model=ForumPostRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Post",
    responses={400: {"description": "Title and content are required"}},
)
async def create_post(payload: ForumPostCreate, user: CurrentUserDep, session: SessionDep) -> ForumPostRead:
    title, content = payload.title.strip(), payload.content.strip()
    if not title or not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Title and content are required")
    post = await ForumRepository(session).create(
        ForumPost(user_id=user.id, title=title, content=content, category=payload.category)
    )
    aliases = await ProfileRepository(session).aliases_for([user.id])
    return _post_read(post, aliases[user.id], 0)


@router.get(
    "/posts/{post_id}",
    response_model=ForumPostRead,
    summary="Get Post",
    responses={404: {"description": "Post not found"}},
)
async def get_post(post_id: str, user: CurrentUserDep, session: SessionDep) -> ForumPostRead:
    forum = ForumRepository(session)
    post = await _get_post(forum, post_id)
    aliases = await ProfileRepository(session).aliases_for([post.user_id])
    counts = await forum.reply_counts([post.id])
    return _post_read(post, aliases[post.user_id], counts.get(post.id, 0))


@router.delete(
    "/posts/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Post",
    description="Delete one of the caller's posts together with its replies.",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Post not found"},
    },
)
async def delete_post(post_id: str, user: CurrentUserDep, session: SessionDep) -> None:
    forum = ForumRepository(session)
    post = await _get_post(forum, post_id)
    if post.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only delete your own posts")
    await forum.delete_post(post)


@router.get(
    "/posts/{post_id}/replies",
    response_model=list[ForumReplyRead],
    summary="List Replies",
    description="Replies to a post, oldest first.",
    responses={404: {"description": "Post not found"}},
)
async def list_replies(post_id: str, user: CurrentUserDep, session: SessionDep) -> list[ForumReplyRead]:
    forum = ForumRepository(session)
    post = await _get_post(forum, post_id)
    replies = await forum.get_replies(post.id)
    aliases = await ProfileRepository(session).aliases_for(r.user_id for r in replies)
    return [
        ForumReplyRead(
            id=r.id,
            post_id=r.post_id,
            user_id=r.user_id,
            content=r.content,
            author_alias=aliases[r.user_id],
            created_at=r.created_at,
        )
        for r in replies
    ]


@router.post(
    "/posts/{post_id}/replies",
    response_model=ForumReplyRead,
    status_code=status.HTTP_201_CREATED,
    summary="Reply To Post",
    responses={
        400: {"description": "Reply cannot be empty"},
        404: {"description": "Post not found"},
    },
)
async def create_reply(
    post_id: str, payload: ForumReplyCreate, user: CurrentUserDep, session: SessionDep
) -> ForumReplyRead:
    content = payload.content.strip()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Reply cannot be empty")

    forum = ForumRepository(session)
    post = await _get_post(forum, post_id)
    reply = await forum.add_reply(post, user.id, content)
    alias = (await ProfileRepository(session).aliases_for([user.id]))[user.id]

    if post.user_id != user.id:
        await Notifier(session).forum_reply(post.user_id, post.id, post.title, alias)

    return ForumReplyRead(
        id=reply.id,
        post_id=reply.post_id,
        user_id=reply.user_id,
        content=reply.content,
        author_alias=alias,
        created_at=reply.created_at,
    )


@router.delete(
    "/replies/{reply_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Reply",
    responses={
        403: {"description": "Not the author"},
        404: {"description": "Reply not found"},
    },
)
async def delete_reply(reply_id: str, user: CurrentUserDep, session: SessionDep) -> None:
    forum = ForumRepository(session)
    reply = await forum.get_reply(reply_id)
    if reply is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Reply {reply_id} not found")
    if reply.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only delete your own replies")
    await forum.delete_reply(reply)
