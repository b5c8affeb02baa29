from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterator, List, Optional, TypeVar

from ..common.datetime_utils import parse_api_datetime
from ..core.exceptions import ApiSchemaError

T = TypeVar("T")


@contextmanager
def parsing(what: str) -> Iterator[None]:
    """Turn shape errors raised while mapping a payload into ApiSchemaError."""
    try:
        yield
    except ApiSchemaError:
        raise
    except (KeyError, TypeError, ValueError, InvalidOperation, AttributeError) as e:
        raise ApiSchemaError(f"Resposta inválida da API ({what}): {e!r}") from e


def as_dict(payload: Any, what: str) -> dict:
    if not isinstance(payload, dict):
        raise ApiSchemaError(f"Resposta inválida da API ({what}): objeto esperado")
    return payload


def as_list(payload: Any, what: str) -> List[Any]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ApiSchemaError(f"Resposta inválida da API ({what}): lista esperada")
    return payload


def map_rows(payload: Any, what: str, mapper: Callable[[dict], T]) -> List[T]:
    rows = as_list(payload, what)
    with parsing(what):
        return [mapper(as_dict(row, what)) for row in rows]


def map_one(payload: Any, what: str, mapper: Callable[[dict], T]) -> T:
    row = as_dict(payload, what)
    with parsing(what):
        return mapper(row)


def to_decimal(value: Any) -> Decimal:
    """Normalize money values: the API sends numbers or numeric strings."""
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, bool):
        raise TypeError(f"Unsupported money value: {value!r}")
    return Decimal(str(value))


def to_optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def to_optional_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    return parse_api_datetime(value)


def to_optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)
