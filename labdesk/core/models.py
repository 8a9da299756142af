"""
Модели данных для LabDesk
"""

from dataclasses import dataclass, field, replace
from typing import Optional, List, Dict, Any
from datetime import datetime
from enum import Enum


class LabTestStatus(str, Enum):
    """Этап лабораторного процесса"""
    PENDING = "pending"
    SAMPLING = "sampling"
    PROCESSING = "processing"
    REPORTING = "reporting"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TestCategory(str, Enum):
    """Категории анализов"""
    PATHOLOGY = "pathology"
    RADIOLOGY = "radiology"
    OTHER = "other"


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class WorkflowHistoryItem:
    """Одна запись журнала смены статусов"""

    from_status: LabTestStatus
    to_status: LabTestStatus
    timestamp: datetime

    notes: Optional[str] = None
    performed_by: Optional[str] = None
    performer_name: Optional[str] = None
    sample_details: Optional[str] = None
    collection_details: Optional[str] = None
    reporting_details: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'from_status': self.from_status.value,
            'to_status': self.to_status.value,
            'timestamp': self.timestamp.isoformat(),
            'notes': self.notes,
            'performed_by': self.performed_by,
            'performer_name': self.performer_name,
            'sample_details': self.sample_details,
            'collection_details': self.collection_details,
            'reporting_details': self.reporting_details,
        }
        return {k: v for k, v in result.items() if v is not None}


@dataclass
class LabTest:
    """Лабораторный тест, заказанный для пациента"""

    # Основные поля
    id: str
    patient_id: str
    patient_name: str
    test_name: str
    status: LabTestStatus
    ordered_date: datetime

    # Результат
    completed_date: Optional[datetime] = None
    result_url: Optional[str] = None
    notes: Optional[str] = None

    # Счет и назначение
    price: Optional[float] = None
    category: Optional[TestCategory] = None
    bill_id: Optional[str] = None  # Группирует тесты одного счета
    representative_id: Optional[str] = None
    doctor_name: Optional[str] = None
    referral_id: Optional[str] = None

    # Образец
    sample_details: Optional[str] = None
    sample_id: Optional[str] = None
    estimated_completion_time: Optional[datetime] = None

    # Выезд на дом
    is_home_collection: bool = False
    collection_address: Optional[str] = None
    collection_datetime: Optional[datetime] = None
    collection_notes: Optional[str] = None
    collection_representative_id: Optional[str] = None

    workflow_history: List[WorkflowHistoryItem] = field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        return self.status == LabTestStatus.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        """Преобразует тест в словарь"""
        result = {
            'id': self.id,
            'patient_id': self.patient_id,
            'patient_name': self.patient_name,
            'test_name': self.test_name,
            'status': self.status.value,
            'ordered_date': _iso(self.ordered_date),
            'completed_date': _iso(self.completed_date),
            'result_url': self.result_url,
            'notes': self.notes,
            'price': self.price,
            'category': self.category.value if self.category else None,
            'bill_id': self.bill_id,
            'representative_id': self.representative_id,
            'doctor_name': self.doctor_name,
            'referral_id': self.referral_id,
            'sample_details': self.sample_details,
            'sample_id': self.sample_id,
            'estimated_completion_time': _iso(self.estimated_completion_time),
            'is_home_collection': self.is_home_collection or None,
            'collection_address': self.collection_address,
            'collection_datetime': _iso(self.collection_datetime),
            'collection_notes': self.collection_notes,
            'collection_representative_id': self.collection_representative_id,
            'workflow_history': [item.to_dict() for item in self.workflow_history],
        }

        # Удаляем None значения
        return {k: v for k, v in result.items() if v is not None}


@dataclass
class LabBillItem:
    """Позиция в счете до печати"""

    id: str
    test_name: str
    price: float
    quantity: int = 1
    discount: float = 0.0  # Процент, 0-100
    category: TestCategory = TestCategory.OTHER

    representative_id: Optional[str] = None
    # Живые поля для отслеживания прямо в корзине
    status: Optional[LabTestStatus] = None
    estimated_time: Optional[str] = None

    sample_details: Optional[str] = None
    sample_id: Optional[str] = None

    def line_total(self) -> float:
        return self.price * self.quantity * (1 - self.discount / 100)

    def copy(self) -> 'LabBillItem':
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'id': self.id,
            'test_name': self.test_name,
            'price': self.price,
            'quantity': self.quantity,
            'discount': self.discount,
            'category': self.category.value,
            'representative_id': self.representative_id,
            'status': self.status.value if self.status else None,
            'estimated_time': self.estimated_time,
            'sample_details': self.sample_details,
            'sample_id': self.sample_id,
        }
        return {k: v for k, v in result.items() if v is not None}


@dataclass
class LabCustomer:
    """Клиент лаборатории"""

    id: str
    name: str
    mobile: str
    address: str
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'id': self.id,
            'name': self.name,
            'mobile': self.mobile,
            'address': self.address,
            'email': self.email,
        }
        return {k: v for k, v in result.items() if v is not None}


@dataclass
class LabWaitlistPatient:
    """Пациент из листа ожидания с рекомендованными анализами"""

    id: str
    name: str
    items: int = 0
    is_highlighted: bool = False
    tests: List[LabBillItem] = field(default_factory=list)

    def __post_init__(self):
        if not self.items:
            self.items = len(self.tests)


@dataclass
class LabTestOption:
    """Позиция прайс-листа"""

    id: str
    test_name: str
    price: float
    category: TestCategory

    def to_bill_item(self) -> LabBillItem:
        return LabBillItem(
            id=self.id,
            test_name=self.test_name,
            price=self.price,
            quantity=1,
            discount=0,
            category=self.category,
        )


@dataclass
class LabRepresentative:
    """Сотрудник лаборатории"""

    id: str
    name: str
    role: str
    specialty: Optional[str] = None


@dataclass
class BillReceipt:
    """Результат печати счета"""

    bill_id: str
    customer: LabCustomer
    tests: List[LabTest] = field(default_factory=list)
    total: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'bill_id': self.bill_id,
            'customer': self.customer.to_dict(),
            'tests': [test.to_dict() for test in self.tests],
            'total': self.total,
        }
