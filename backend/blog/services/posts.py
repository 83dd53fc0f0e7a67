"""
文章服务：CRUD + 读取时把作者 id 解析为用户名
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog.errors import ValidationError
from blog.models.post import Post, PostTag
from blog.models.user import User
from blog.schemas.post import PostRead

logger = logging.getLogger(__name__)

# 对外排序字段名 -> 列
SORTABLE_FIELDS = {
    "createdAt": Post.created_at,
    "updatedAt": Post.updated_at,
    "title": Post.title,
}
SORT_ORDERS = ("ascending", "descending")

DEFAULT_SORT_BY = "createdAt"
DEFAULT_SORT_ORDER = "descending"


def _require(field: str, value: Optional[str]):
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required", field=field, kind="required")


def _tag_rows(tags: Optional[List[str]]) -> List[PostTag]:
    return [PostTag(position=i, name=name) for i, name in enumerate(tags or [])]


def _to_read(post: Post, author_username: Optional[str]) -> PostRead:
    return PostRead(
        id=post.id,
        title=post.title,
        author=author_username,
        contents=post.contents,
        tags=post.tags,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


class PostService:
    """文章服务（绑定一个数据库会话）"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_post(
        self,
        title: str,
        author: str,
        contents: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> PostRead:
        """
        创建文章

        Args:
            title: 标题（必填）
            author: 作者用户 id（必填，调用方负责确认用户存在）
            contents: 正文
            tags: 标签列表，保留顺序
        """
        _require("title", title)
        _require("author", author)

        post = Post(title=title, author_id=author, contents=contents)
        post.tag_rows = _tag_rows(tags)
        self.db.add(post)
        await self._commit()

        logger.info("Created post %s by author %s", post.id, author)
        return await self.get_post_by_id(post.id)

    async def list_posts(
        self,
        filters: Optional[Dict[str, Any]] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> List[PostRead]:
        """
        按条件列出文章，作者在同一次查询里通过外连接解析为用户名

        Args:
            filters: 支持 author（用户 id）与 tag，空则返回全部
            sort_by: createdAt / updatedAt / title
            sort_order: ascending / descending

        Returns:
            PostRead 列表；同值时按 id 同向排序
        """
        sort_by = sort_by or DEFAULT_SORT_BY
        sort_order = sort_order or DEFAULT_SORT_ORDER
        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError(f"Cannot sort by '{sort_by}'", field="sortBy")
        if sort_order not in SORT_ORDERS:
            raise ValidationError(f"Invalid sort order '{sort_order}'", field="sortOrder")

        column = SORTABLE_FIELDS[sort_by]
        if sort_order == "descending":
            ordering = (column.desc(), Post.id.desc())
        else:
            ordering = (column.asc(), Post.id.asc())

        stmt = select(Post, User.username).outerjoin(User, Post.author_id == User.id)
        filters = filters or {}
        if filters.get("author") is not None:
            stmt = stmt.where(Post.author_id == filters["author"])
        if filters.get("tag") is not None:
            stmt = stmt.where(Post.tag_rows.any(PostTag.name == filters["tag"]))
        stmt = stmt.order_by(*ordering)

        result = await self.db.execute(stmt)
        return [_to_read(post, username) for post, username in result.all()]

    async def list_all_posts(self, sort_by: Optional[str] = None, sort_order: Optional[str] = None) -> List[PostRead]:
        return await self.list_posts({}, sort_by, sort_order)

    async def list_posts_by_author(
        self, author: str, sort_by: Optional[str] = None, sort_order: Optional[str] = None
    ) -> List[PostRead]:
        return await self.list_posts({"author": author}, sort_by, sort_order)

    async def list_posts_by_tag(
        self, tag: str, sort_by: Optional[str] = None, sort_order: Optional[str] = None
    ) -> List[PostRead]:
        return await self.list_posts({"tag": tag}, sort_by, sort_order)

    async def get_post_by_id(self, post_id: str) -> Optional[PostRead]:
        """按 id 获取文章，不存在返回 None"""
        result = await self.db.execute(
            select(Post, User.username)
            .outerjoin(User, Post.author_id == User.id)
            .where(Post.id == post_id)
        )
        row = result.first()
        if not row:
            return None
        post, username = row
        return _to_read(post, username)

    async def update_post(
        self,
        post_id: str,
        title: str,
        author: str,
        contents: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> Optional[PostRead]:
        """
        整体替换 title/author/contents/tags

        未提供的 contents/tags 会被清空，不保留旧值。
        """
        _require("title", title)
        _require("author", author)

        post = await self.db.get(Post, post_id)
        if not post:
            return None

        post.title = title
        post.author_id = author
        post.contents = contents
        post.tag_rows = _tag_rows(tags)
        # 只改标签时 onupdate 不会触发，这里显式更新时间
        post.updated_at = datetime.utcnow()
        await self._commit()

        logger.info("Updated post %s", post_id)
        return await self.get_post_by_id(post_id)

    async def delete_post(self, post_id: str) -> int:
        """删除文章，返回删除条数（0 或 1）"""
        post = await self.db.get(Post, post_id)
        if not post:
            return 0
        await self.db.delete(post)
        await self.db.commit()
        logger.info("Deleted post %s", post_id)
        return 1

    async def _commit(self):
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ValidationError(f"Post violates a storage constraint: {e.orig}", kind="constraint")
