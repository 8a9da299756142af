"""
Лист ожидания пациентов с рекомендованными анализами
"""

import logging
from typing import Iterable, List, Optional

from .billing import BillingCart
from .models import LabCustomer, LabWaitlistPatient

logger = logging.getLogger(__name__)


class WaitlistStore:
    """Выбор пациента из листа ожидания заполняет корзину его анализами"""

    def __init__(self, cart: BillingCart, patients: Optional[Iterable[LabWaitlistPatient]] = None):
        self.cart = cart
        self.notifier = cart.notifier
        self.patients: List[LabWaitlistPatient] = list(patients or [])

    def seed(self, patients: Iterable[LabWaitlistPatient]):
        self.patients = list(patients)

    def get(self, patient_id: str) -> Optional[LabWaitlistPatient]:
        for patient in self.patients:
            if patient.id == patient_id:
                return patient
        return None

    @property
    def highlighted(self) -> Optional[LabWaitlistPatient]:
        for patient in self.patients:
            if patient.is_highlighted:
                return patient
        return None

    def select_patient(self, patient: LabWaitlistPatient) -> LabCustomer:
        """Заменяет позиции счета рекомендациями пациента и выбирает клиента"""
        self.cart.replace_items(patient.tests)

        customer = None
        for candidate in self.cart.customers:
            if candidate.name == patient.name:
                customer = candidate
                break

        if customer is None:
            customer = LabCustomer(
                id=patient.id,
                name=patient.name,
                mobile="Unknown",
                address="Unknown",
            )
        self.cart.select_customer(customer)

        for candidate in self.patients:
            candidate.is_highlighted = candidate.id == patient.id

        self.notifier.notify("Пациент загружен", f"Рекомендованные анализы {patient.name} загружены")
        return customer

    def remove_from_waitlist(self, name: str) -> int:
        before = len(self.patients)
        self.patients = [p for p in self.patients if p.name.lower() != name.lower()]
        removed = before - len(self.patients)

        if removed:
            logger.info(f"Из листа ожидания удалено: {name}")
        return removed
