"""服务层：业务逻辑服务"""

from .digest_service import DigestService
from .pipeline_service import PipelineService, build_pipeline
from .post_repository import PostRepository

__all__ = ["DigestService", "PipelineService", "PostRepository", "build_pipeline"]
