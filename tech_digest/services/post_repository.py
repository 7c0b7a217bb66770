"""日报入库"""

from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..digest.models import DigestResult
from ..errors import DuplicatePostError, PersistenceError
from ..infrastructure.db.models import TbPost, TbPostTag, TbUser

POST_STATUS = "Active"
POST_TYPE = "ask"
POST_POINT = 0.1


class PostRepository:
    """在一个事务内完成：插入文章、作者文章数 +1、插入标签关联"""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        author_id: int = 1,
    ):
        self.session_factory = session_factory
        self.author_id = author_id

    async def save_post(self, result: DigestResult) -> int:
        """
        保存日报

        Returns:
            新文章的 id

        Raises:
            DuplicatePostError: 当天该来源的日报已存在
            PersistenceError: 任一步骤失败，整个事务已回滚
        """
        async with self.session_factory() as session:
            try:
                existing = await session.scalar(select(TbPost.id).where(TbPost.pid == result.pid))
                if existing is not None:
                    raise DuplicatePostError(f"pid {result.pid} 已存在 (post id={existing})")

                post = TbPost(
                    title=result.title,
                    content=result.content,
                    status=POST_STATUS,
                    created_at=result.created_at,
                    up_vote=0,
                    collect_vote=0,
                    type=POST_TYPE,
                    user_id=self.author_id,
                    pid=result.pid,
                    comment_count=0,
                    point=POST_POINT,
                    top=0,
                    click_vote=0,
                )
                session.add(post)
                await session.flush()

                # 更新用户文章计数
                await session.execute(
                    update(TbUser)
                    .where(TbUser.id == self.author_id)
                    .values({TbUser.post_count: TbUser.post_count + 1})
                )

                session.add(TbPostTag(tb_post_id=post.id, tb_tag_id=result.source.tag_id))
                await session.flush()
                await session.commit()
            except DuplicatePostError:
                await session.rollback()
                raise
            except SQLAlchemyError as exc:
                await session.rollback()
                raise PersistenceError(f"保存文章失败: {exc}") from exc

        logger.info(f"[入库] 已保存日报 {result.pid} (post id={post.id}, tag={result.source.tag_id})")
        return post.id
