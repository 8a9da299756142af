"""
Корзина счета: позиции, выбор клиента и печать счета
"""

import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from pydantic import ValidationError

from .lab_tests import LabTestStore
from .models import (
    BillReceipt, LabBillItem, LabCustomer, LabTest, LabTestStatus, WorkflowHistoryItem,
)
from .notifier import Notifier
from .validator import CustomerForm, format_errors

logger = logging.getLogger(__name__)


class BillingCart:
    """Собирает счет и превращает его в тесты для лаборатории"""

    def __init__(
        self,
        test_store: LabTestStore,
        customers: Optional[Iterable[LabCustomer]] = None,
        notifier: Optional[Notifier] = None,
        bill_id_prefix: str = "BILL-",
        test_id_prefix: str = "LT",
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.test_store = test_store
        self.notifier = notifier or test_store.notifier
        self.bill_id_prefix = bill_id_prefix
        self.test_id_prefix = test_id_prefix
        self.clock = clock

        self.items: List[LabBillItem] = []
        self.customers: List[LabCustomer] = list(customers or [])
        self.selected_customer: Optional[LabCustomer] = None
        self.search_term: str = ""
        self.is_editing_customer: bool = False
        self._last_stamp = 0

    def seed(self, customers: Iterable[LabCustomer]):
        self.customers = list(customers)
        self.items = []
        self.selected_customer = None
        self.search_term = ""
        self.is_editing_customer = False

    # ------------------------------------------------------------------
    # Позиции

    def _find_item(self, item_id: str) -> Optional[LabBillItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def add_item(self, item: LabBillItem):
        """Добавляет позицию; повторная позиция увеличивает количество"""
        existing = self._find_item(item.id)
        if existing is not None:
            existing.quantity += 1
        else:
            self.items.append(item.copy())

        self.notifier.notify("Добавлено в счет", f"{item.test_name} добавлен в счет")

    def replace_items(self, items: Iterable[LabBillItem]):
        self.items = [item.copy() for item in items]

    def update_quantity(self, item_id: str, delta: int):
        item = self._find_item(item_id)
        if item is None:
            logger.debug(f"Позиция {item_id} не найдена в счете")
            return
        item.quantity = max(1, item.quantity + delta)

    def remove_item(self, item_id: str):
        self.items = [item for item in self.items if item.id != item_id]

    def subtotal(self) -> float:
        return sum(item.line_total() for item in self.items)

    def update_item_status(
        self,
        item_id: str,
        status: LabTestStatus,
        estimated_time: Optional[str] = None,
    ) -> Optional[LabBillItem]:
        item = self._find_item(item_id)
        if item is None:
            return None

        item.status = LabTestStatus(status)
        item.estimated_time = estimated_time
        self.notifier.notify("Статус теста обновлен", f"Статус теста изменен на {item.status.value}")
        return item

    def assign_representative(self, item_id: str, representative_id: str) -> Optional[LabBillItem]:
        item = self._find_item(item_id)
        if item is None:
            return None

        item.representative_id = representative_id
        self.notifier.notify(
            "Тест назначен",
            f"Тест назначен сотруднику с ID: {representative_id}",
        )
        return item

    # ------------------------------------------------------------------
    # Клиенты

    def _find_customer_by_name(self, name: str) -> Optional[LabCustomer]:
        name = name.lower()
        for customer in self.customers:
            if customer.name.lower() == name:
                return customer
        return None

    def search_customer(self, term: str) -> Optional[LabCustomer]:
        """Ищет клиента по точному имени без учета регистра"""
        self.search_term = term

        matched = self._find_customer_by_name(term)
        if matched is not None:
            self.selected_customer = matched
        elif self.selected_customer is not None and not term:
            self.selected_customer = None

        return matched

    def add_new_customer(self, name: Optional[str] = None) -> Optional[LabCustomer]:
        """
        Создает клиента по имени из поиска

        Returns:
            Выбранный клиент или None, если имя пустое
        """
        if name is None:
            name = self.search_term

        if not name.strip():
            self.notifier.error("Некорректный ввод", "Введите имя, чтобы добавить нового клиента")
            return None

        existing = self._find_customer_by_name(name)
        if existing is not None:
            self.selected_customer = existing
            self.notifier.notify("Клиент выбран", f"{existing.name} уже есть в системе")
            return existing

        # В список клиент попадает только после сохранения формы
        customer = LabCustomer(
            id=f"C{len(self.customers) + 1}",
            name=name,
            mobile="New customer",
            address="Please update address",
        )
        self.selected_customer = customer
        self.is_editing_customer = True

        self.notifier.notify("Новый пациент добавлен", "Заполните данные пациента")
        return customer

    def edit_customer(self) -> bool:
        if self.selected_customer is None:
            return False
        self.is_editing_customer = True
        return True

    def save_customer(self, customer: LabCustomer) -> Optional[LabCustomer]:
        """Проверяет форму и сохраняет клиента (добавляет или обновляет по id)"""
        try:
            customer = CustomerForm.from_customer(customer).to_customer()
        except ValidationError as e:
            self.notifier.error("Некорректные данные пациента", format_errors(e))
            return None

        for index, existing in enumerate(self.customers):
            if existing.id == customer.id:
                self.customers[index] = customer
                break
        else:
            self.customers.append(customer)

        self.selected_customer = customer
        self.is_editing_customer = False

        self.notifier.notify("Пациент сохранен", "Данные пациента успешно обновлены")
        return customer

    def select_customer(self, customer: LabCustomer):
        self.selected_customer = customer
        self.search_term = customer.name

    # ------------------------------------------------------------------
    # Печать

    def print_bill(self) -> Optional[BillReceipt]:
        """
        Печатает счет: каждая позиция становится тестом в статусе sampling

        Returns:
            Квитанция или None, если счет пуст или клиент не выбран
        """
        if not self.items:
            self.notifier.error("Счет пуст", "Добавьте позиции в счет перед печатью")
            return None

        if self.selected_customer is None:
            self.notifier.error("Пациент не выбран", "Выберите пациента перед печатью счета")
            return None

        now = self.clock()
        # Два счета в одну миллисекунду не должны получить одинаковые id
        stamp = max(int(now.timestamp() * 1000), self._last_stamp + 1)
        self._last_stamp = stamp
        bill_id = f"{self.bill_id_prefix}{stamp}"
        customer = self.selected_customer

        tests = []
        for index, item in enumerate(self.items):
            tests.append(LabTest(
                id=f"{self.test_id_prefix}{stamp}-{index}",
                patient_id=customer.id,
                patient_name=customer.name,
                test_name=item.test_name,
                status=LabTestStatus.SAMPLING,
                ordered_date=now,
                doctor_name=f"Rep ID: {item.representative_id}" if item.representative_id else "Self-Order",
                category=item.category,
                bill_id=bill_id,
                price=item.price,
                representative_id=item.representative_id,
                sample_details=item.sample_details,
                sample_id=item.sample_id,
                workflow_history=[WorkflowHistoryItem(
                    from_status=LabTestStatus.PENDING,
                    to_status=LabTestStatus.SAMPLING,
                    timestamp=now,
                    notes="Initial status",
                )],
            ))

        receipt = BillReceipt(bill_id=bill_id, customer=customer, tests=tests, total=self.subtotal())
        self.test_store.add_tests(tests)

        self.items = []
        self.selected_customer = None
        self.search_term = ""

        self.notifier.notify("Счет сформирован", f"Счет #{bill_id} создан, тестов: {len(tests)}")
        logger.info(f"Счет {bill_id} для {customer.name}: {len(tests)} тестов на сумму {receipt.total:.2f}")
        return receipt
