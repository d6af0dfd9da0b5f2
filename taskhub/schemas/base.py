# taskhub/schemas/base.py
from typing import Any, Annotated
from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


def coerce_id(value: Any) -> str:
    """Accept an id as int, str, or a nested object carrying `id`/`_id`"""
    if isinstance(value, dict):
        value = value.get("id") or value.get("_id")
    if isinstance(value, bool) or value is None:
        raise ValueError("must be an identifier")
    if isinstance(value, (int, str)):
        return str(value).strip()
    raise ValueError("must be an identifier")


EntityId = Annotated[str, BeforeValidator(coerce_id)]


def require_text(value: str, label: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValueError(f"{label} cannot be empty")
    return text


class WireModel(BaseModel):
    """Request bodies: camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CanonicalModel(BaseModel):
    """Canonical records produced by the normalizer"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)
