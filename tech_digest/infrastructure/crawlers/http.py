"""HTTP 请求与 JSON 解码工具"""

from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from ...errors import DecodeError, FetchError

T = TypeVar("T")


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Dict[str, Any]] = None,
) -> Any:
    """GET 并解析 JSON，网络/URL/状态码错误抛 FetchError，JSON 错误抛 DecodeError"""
    try:
        resp = await client.get(url, params=params)
        resp.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FetchError(f"请求 {url} 失败: {exc}") from exc

    try:
        return resp.json()
    except ValueError as exc:
        raise DecodeError(f"解析 {url} 响应失败: {exc}") from exc


def decode(schema: Type[T], data: Any, what: str = "响应") -> T:
    """按 schema 校验已解析的 JSON"""
    try:
        return TypeAdapter(schema).validate_python(data)
    except ValidationError as exc:
        raise DecodeError(f"{what}结构不符合预期: {exc.error_count()} 处错误") from exc
