"""
Уведомления для пользователя (аналог всплывающих сообщений интерфейса)
"""

from dataclasses import dataclass, field
from typing import List, Optional
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


@dataclass
class Notice:
    title: str
    description: str
    variant: str = "default"  # default | destructive
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"


class Notifier:
    """Собирает уведомления и дублирует их в лог"""

    def __init__(self):
        self.notices: List[Notice] = []

    def notify(self, title: str, description: str, variant: str = "default") -> Notice:
        notice = Notice(title=title, description=description, variant=variant)
        self.notices.append(notice)

        if notice.is_error:
            logger.warning(f"{title}: {description}")
        else:
            logger.info(f"{title}: {description}")

        return notice

    def error(self, title: str, description: str) -> Notice:
        return self.notify(title, description, variant="destructive")

    @property
    def last(self) -> Optional[Notice]:
        return self.notices[-1] if self.notices else None

    def clear(self):
        self.notices.clear()
