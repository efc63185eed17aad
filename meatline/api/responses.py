from typing import Any, Iterable, Type

from pydantic import BaseModel


def dump(schema: Type[BaseModel], obj: Any) -> dict:
    """ORM-объект -> JSON-совместимый dict через pydantic-схему"""
    return schema.model_validate(obj).model_dump(mode="json")


def dump_list(schema: Type[BaseModel], objs: Iterable[Any]) -> list:
    return [dump(schema, obj) for obj in objs]


def ok(data: Any = None, **extra) -> dict:
    """Успешный ответ: {"success": true, "data": ...}"""
    body = {"success": True}
    if data is not None:
        body["data"] = data
    body.update(extra)
    return body
