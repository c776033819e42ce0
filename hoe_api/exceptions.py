"""
Типи помилок клієнта hoe.com.ua

Парсери кидають ці винятки, а клієнт перетворює їх на Error (див. result.py).

  - TransportError → сайт недоступний або відповів не 2xx
  - StructureError → на сторінці немає очікуваної структури (таблиця, заголовок, комірки)
  - ParseError     → текст поля не відповідає формату (дата, список черг, адреса)
"""

from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple, Union


class ErrorKind(str, Enum):
    """Категорія помилки"""
    TRANSPORT = "transport"
    TABLE_NOT_FOUND = "table-not-found"
    HEADING_NOT_FOUND = "heading-not-found"
    ELEMENT_NOT_FOUND = "element-not-found"
    UNEXPECTED_SHAPE = "unexpected-shape"
    MALFORMED_TEMPORAL = "malformed-temporal"
    MALFORMED_LIST = "malformed-list"
    MALFORMED_ADDRESS = "malformed-address"
    INCONSISTENT_SCHEDULE = "inconsistent-schedule"
    LOOKUP_FAILED = "lookup-failed"
    UNEXPECTED = "unexpected"


class HoeApiError(Exception):
    """Базова помилка клієнта"""

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(
        self,
        message: str,
        kind: Optional[ErrorKind] = None,
        context: Optional[Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]] = None,
    ):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind
        if isinstance(context, Mapping):
            context = context.items()
        self.context: Tuple[Tuple[str, Any], ...] = tuple(context or ())

    def __str__(self) -> str:
        if not self.context:
            return f"{self.message} [{self.kind.value}]"
        details = ", ".join(f"{key}={value!r}" for key, value in self.context)
        return f"{self.message} [{self.kind.value}] ({details})"


class TransportError(HoeApiError):
    kind = ErrorKind.TRANSPORT


class StructureError(HoeApiError):
    kind = ErrorKind.UNEXPECTED_SHAPE


class ParseError(HoeApiError):
    kind = ErrorKind.MALFORMED_TEMPORAL
