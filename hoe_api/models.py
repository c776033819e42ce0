"""
Моделі даних про відключення hoe.com.ua
"""

from datetime import date, datetime
from enum import Enum
from typing import FrozenSet, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# === Адреси ===

class StreetGroup(FrozenModel):
    """Вулиця разом з усіма номерами будинків, яких стосується відключення"""
    street: str = Field(..., description="Назва вулиці, наприклад 'вул. Тиха'")
    house_numbers: FrozenSet[str] = Field(..., description="Номери будинків: '25', '29/4', '60А'")

    @field_validator("street")
    @classmethod
    def _street_is_trimmed(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("street must not be blank")
        return value

    @field_validator("house_numbers")
    @classmethod
    def _has_house_numbers(cls, value: FrozenSet[str]) -> FrozenSet[str]:
        if not value:
            raise ValueError("street group must have at least one house number")
        return value

    @classmethod
    def of(cls, street: str, *house_numbers: str) -> "StreetGroup":
        return cls(street=street, house_numbers=frozenset(house_numbers))


class Settlement(FrozenModel):
    """Населений пункт з автодоповнення"""
    id: int
    name: str = Field(..., alias="text", description="Наприклад 'м. Хмельницький (Хмельницька громада)'")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Street(FrozenModel):
    """Вулиця з автодоповнення"""
    id: int
    name: str = Field(..., alias="text", description="Наприклад 'вул. Січових стрільців'")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


# === Відключення зі списку РЕМу ===

class Pem(FrozenModel):
    """Район електричних мереж (РЕМ)"""
    id: str = Field(..., description="ID РЕМу, наприклад '21'")
    name: str = Field(..., description="Назва, наприклад 'Хмельницький РЕМ'")

    def __eq__(self, other) -> bool:
        if isinstance(other, Pem):
            return self.id == other.id
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.id)


class OutageType(Enum):
    """Тип відключення у списку РЕМу (параметр TypeId)"""
    UNPLANNED = ("1", "Аварійні")
    PLANNED = ("2", "Планові")

    def __init__(self, type_id: str, type_name: str):
        self.type_id = type_id
        self.type_name = type_name


class PowerCutEvent(FrozenModel):
    """Одне відключення в населеному пункті для переліку вулиць і будинків"""
    settlement: str = Field(..., description="Наприклад 'м. Хмельницький (Хмельницька громада)'")
    pem: Pem
    street_groups: Tuple[StreetGroup, ...]
    type: OutageType
    type_of_work: str = Field(..., description="Наприклад 'Графік погодинних відключень'")
    created_at: date = Field(..., description="Дата додавання запису на сайті")
    estimated_start_time: datetime
    estimated_end_time: datetime

    @model_validator(mode="after")
    def _start_not_after_end(self) -> "PowerCutEvent":
        if self.estimated_start_time > self.estimated_end_time:
            raise ValueError("estimated_start_time is after estimated_end_time")
        return self

    def is_created_before_start(self) -> bool:
        """Чи створено запис не пізніше дати початку відключення (сайт цього не гарантує)"""
        return self.created_at <= self.estimated_start_time.date()


# === Відключення за конкретною адресою ===

class PowerOutageKind(str, Enum):
    """Тип відключення у відповіді пошуку за адресою"""
    PLANNED = "Планове"
    EMERGENCY = "Аварійне"
    UNKNOWN = "Невідоме"

    @classmethod
    def parse(cls, text: str) -> "PowerOutageKind":
        text = " ".join(text.split()).lower()
        for kind in (cls.PLANNED, cls.EMERGENCY):
            if kind.value.lower() == text:
                return kind
        return cls.UNKNOWN


class NoOutage(FrozenModel):
    """За адресою немає зареєстрованого відключення"""
    status: Literal["no_outage"] = "no_outage"
    settlement_id: int
    street_id: int
    house_number: str


class ActiveOutage(FrozenModel):
    """Активне відключення за адресою"""
    status: Literal["active"] = "active"
    settlement_id: int
    street_id: int
    house_number: str
    type_of_work: str
    type: PowerOutageKind
    schedule: int = Field(0, description="Номер черги графіка, 0 якщо не вказано")
    estimated_start_time: datetime
    estimated_end_time: datetime


PowerOutageEvent = Union[NoOutage, ActiveOutage]


# === Графік погодинних відключень ===

class NoImage(FrozenModel):
    """На сторінці немає зображення графіка"""
    status: Literal["no_image"] = "no_image"


class Image(FrozenModel):
    """Поточне зображення графіка"""
    status: Literal["image"] = "image"
    url: str
    alt: Optional[str] = None


ScheduleImage = Union[NoImage, Image]
