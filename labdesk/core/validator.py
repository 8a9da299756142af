"""
Валидация формы клиента перед сохранением
"""

import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .models import LabCustomer

EMAIL_PATTERN = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'
PHONE_PATTERN = r'^\+?[\d\s\-()]{5,20}$'


class CustomerForm(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=2)
    mobile: str
    address: str = Field(..., min_length=1)
    email: Optional[str] = None

    @field_validator("name", "address")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Поле не может быть пустым")
        return value

    @field_validator("mobile")
    @classmethod
    def validate_mobile(cls, value: str) -> str:
        value = value.strip()
        if not re.match(PHONE_PATTERN, value):
            raise ValueError("Некорректный номер телефона")
        return value

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        value = value.strip()
        if not re.match(EMAIL_PATTERN, value):
            raise ValueError("Некорректный email")
        return value

    @classmethod
    def from_customer(cls, customer: LabCustomer) -> 'CustomerForm':
        return cls(
            id=customer.id,
            name=customer.name,
            mobile=customer.mobile,
            address=customer.address,
            email=customer.email,
        )

    def to_customer(self) -> LabCustomer:
        return LabCustomer(
            id=self.id,
            name=self.name,
            mobile=self.mobile,
            address=self.address,
            email=self.email,
        )


def format_errors(error) -> str:
    """Собирает сообщения pydantic в одну строку"""
    parts = []
    for item in error.errors():
        location = '.'.join(str(loc) for loc in item.get('loc', ()))
        parts.append(f"{location}: {item.get('msg')}")
    return '; '.join(parts)
