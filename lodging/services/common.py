"""Helpers shared by the services: input validation and record lookup.

Services accept either a schema instance or a plain mapping. Mappings are
validated here and pydantic's errors are re-raised as the domain
:class:`~lodging.exceptions.ValidationError`.
"""

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from lodging.exceptions import NotFoundError, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        message = error["msg"].removeprefix("Value error, ")
        parts.append(f"{field}: {message}" if field else message)
    return "; ".join(parts)


def parse_input(model: type[ModelT], data: ModelT | Mapping[str, Any]) -> ModelT:
    """Return ``data`` as a ``model`` instance, raising ValidationError if it does not fit."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid input: {_describe(e)}") from e


class _Identified(Protocol):
    id: str


RecordT = TypeVar("RecordT", bound=_Identified)


def find_record(items: list[RecordT], item_id: str, label: str) -> tuple[int, RecordT]:
    """Return ``(index, item)`` for ``item_id`` or raise NotFoundError("<label> not found")."""
    for index, item in enumerate(items):
        if item.id == item_id:
            return index, item
    raise NotFoundError(f"{label} not found")
