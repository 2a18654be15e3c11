"""
响应序列化工具

所有时间字段统一在这里转换为 ISO-8601 UTC 字符串（例如 2025-03-01T08:30:00.000Z），
可选字段为空时直接从 JSON 中省略，而不是输出 null。
"""
from datetime import datetime, timezone
from typing import Annotated, Any, ClassVar, FrozenSet

from pydantic import BaseModel, PlainSerializer, model_serializer
from pydantic.alias_generators import to_camel


def to_iso_string(value: datetime) -> str:
    """datetime -> ISO-8601 字符串（毫秒精度，UTC，Z 结尾）"""
    # 数据库里的 naive 时间按 UTC 存储
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


IsoDatetime = Annotated[datetime, PlainSerializer(to_iso_string, return_type=str)]


class ProjectionModel(BaseModel):
    """响应模型基类：驼峰命名 + 空值省略"""

    # 值为 None 时不输出的字段（按 Python 字段名）
    omit_when_absent: ClassVar[FrozenSet[str]] = frozenset()

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel

    @model_serializer(mode="wrap")
    def drop_absent_fields(self, handler) -> Any:
        data = handler(self)
        if not isinstance(data, dict):
            return data
        fields = type(self).model_fields
        for name in self.omit_when_absent:
            if getattr(self, name, None) is not None:
                continue
            data.pop(name, None)
            alias = fields[name].alias
            if alias:
                data.pop(alias, None)
        return data
