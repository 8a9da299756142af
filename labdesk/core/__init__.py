from .models import (
    LabTest, LabTestStatus, TestCategory, WorkflowHistoryItem,
    LabBillItem, LabCustomer, LabWaitlistPatient, LabTestOption, BillReceipt,
)
from .notifier import Notifier, Notice
from .lab_tests import LabTestStore
from .billing import BillingCart
from .waitlist import WaitlistStore
from .engine import LabDeskEngine

__all__ = [
    'LabTest',
    'LabTestStatus',
    'TestCategory',
    'WorkflowHistoryItem',
    'LabBillItem',
    'LabCustomer',
    'LabWaitlistPatient',
    'LabTestOption',
    'BillReceipt',
    'Notifier',
    'Notice',
    'LabTestStore',
    'BillingCart',
    'WaitlistStore',
    'LabDeskEngine'
]
