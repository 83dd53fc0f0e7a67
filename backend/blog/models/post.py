"""
文章相关模型
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Text, Integer
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from blog.database import Base


class Post(Base):
    """文章表"""
    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(200), nullable=False)
    author_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    contents = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 标签（随文章级联删除）
    tag_rows = relationship(
        "PostTag",
        back_populates="post",
        order_by="PostTag.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def tags(self):
        """按插入顺序的标签列表"""
        return [t.name for t in self.tag_rows]

    def __repr__(self):
        return f"<Post {self.title}>"


class PostTag(Base):
    """文章标签表（position 保留展示顺序）"""
    __tablename__ = "post_tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(String(36), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(100), nullable=False, index=True)

    post = relationship("Post", back_populates="tag_rows")

    def __repr__(self):
        return f"<PostTag {self.name}>"
