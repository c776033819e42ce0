"""
Результат операції клієнта: Ok зі значенням або Error з описом

Кожна публічна операція клієнта повертає Result замість того, щоб кидати виняток.
Контекст помилки - це діагностичний слід для логів: пари (ключ, значення) лише
додаються, однакові ключі не перезаписують один одного.

    match await client.fetch_power_outage(26499, 280542, "12"):
        case Ok(value=NoOutage()):
            ...
        case Ok(value=event):
            ...
        case Error(message=message):
            ...
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, Tuple, TypeVar, Union

from hoe_api.exceptions import ErrorKind, HoeApiError

T = TypeVar("T")
U = TypeVar("U")

ContextPairs = Tuple[Tuple[str, Any], ...]


def _as_pairs(context: Union[Mapping[str, Any], Iterable[Tuple[str, Any]], None]) -> ContextPairs:
    if context is None:
        return ()
    if isinstance(context, Mapping):
        return tuple(context.items())
    return tuple(context)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Успішний результат"""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def get_or_throw(self) -> T:
        return self.value

    def get_or_none(self) -> Optional[T]:
        return self.value

    def map(self, transform: Callable[[T], U]) -> "Ok[U]":
        return Ok(transform(self.value))

    def add_context(self, context=None, **extra) -> "Ok[T]":
        return self


@dataclass(frozen=True)
class Error:
    """
    Неуспішний результат

    Attributes:
        message: Стабільний опис помилки
        context: Впорядковані пари (ключ, значення) для діагностики
        kind: Категорія помилки
        exception: Виняток, що спричинив помилку (якщо був)
    """

    message: str
    context: ContextPairs = ()
    kind: ErrorKind = ErrorKind.UNEXPECTED
    exception: Optional[BaseException] = None

    @classmethod
    def with_context(cls, message: str, kind: ErrorKind = ErrorKind.UNEXPECTED, **context) -> "Error":
        return cls(message=message, context=_as_pairs(context), kind=kind)

    @classmethod
    def from_exception(cls, exc: HoeApiError) -> "Error":
        return cls(message=exc.message, context=exc.context, kind=exc.kind, exception=exc)

    @property
    def is_ok(self) -> bool:
        return False

    def get_or_throw(self):
        if isinstance(self.exception, HoeApiError):
            raise self.exception
        raise HoeApiError(self.message, kind=self.kind, context=self.context) from self.exception

    def get_or_none(self) -> None:
        return None

    def map(self, transform: Callable[[Any], Any]) -> "Error":
        return self

    def add_context(self, context=None, **extra) -> "Error":
        """Новий Error з доданими парами; наявні пари зберігаються"""
        pairs = self.context + _as_pairs(context) + _as_pairs(extra)
        return Error(message=self.message, context=pairs, kind=self.kind, exception=self.exception)

    def context_values(self, key: str) -> list:
        """Усі значення контексту з даним ключем, у порядку додавання"""
        return [value for name, value in self.context if name == key]

    def __str__(self) -> str:
        details = ", ".join(f"{key}={value!r}" for key, value in self.context)
        return f"{self.message} [{self.kind.value}]" + (f" ({details})" if details else "")


Result = Union[Ok[T], Error]
