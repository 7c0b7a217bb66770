"""流水线异常定义"""


class DigestError(Exception):
    """所有流水线异常的基类"""


class FetchError(DigestError):
    """网络请求失败或 HTTP 状态码非成功"""


class DecodeError(DigestError):
    """响应 JSON 格式错误或不符合预期结构"""


class SummarizationError(DigestError):
    """AI 摘要生成失败或返回为空"""


class PersistenceError(DigestError):
    """数据库事务失败"""


class DuplicatePostError(PersistenceError):
    """同一来源当天的日报已入库（pid 冲突）"""
