"""数据库模型（博客现有表结构）"""
from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class TbUser(Base):
    """用户表，只用到文章计数"""
    __tablename__ = "tb_user"

    id = Column(Integer, primary_key=True)
    post_count = Column("postCount", Integer, default=0, nullable=False)


class TbPost(Base):
    """文章表"""
    __tablename__ = "tb_post"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100))
    link = Column(String(1024))
    status = Column(String(20))
    content = Column(Text)
    up_vote = Column("upVote", Integer, default=0)
    collect_vote = Column("collectVote", Integer, default=0)
    type = Column(String(20))
    user_id = Column(Integer)
    pid = Column(String(20), unique=True)  # 来源前缀 + 日期，例如 HN20240615
    comment_count = Column("commentCount", Integer, default=0)
    point = Column(Numeric(20, 10, asdecimal=False))
    top = Column(Integer, default=0)
    click_vote = Column("clickVote", Integer, default=0)
    created_at = Column(DateTime, default=func.now())


class TbPostTag(Base):
    """文章标签关联表"""
    __tablename__ = "tb_post_tag"

    tb_post_id = Column(Integer, primary_key=True)
    tb_tag_id = Column(Integer, primary_key=True)
