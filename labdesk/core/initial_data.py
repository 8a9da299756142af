"""
Начальные демонстрационные данные лаборатории.

Каждая функция возвращает новые объекты, поэтому сброс состояния
не зависит от изменений, сделанных в предыдущей сессии.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from .models import (
    LabBillItem, LabCustomer, LabRepresentative, LabTest, LabTestOption,
    LabTestStatus, LabWaitlistPatient, TestCategory, WorkflowHistoryItem,
)

S = LabTestStatus
PATHOLOGY = TestCategory.PATHOLOGY
RADIOLOGY = TestCategory.RADIOLOGY


def _history(*steps) -> List[WorkflowHistoryItem]:
    return [
        WorkflowHistoryItem(from_status=a, to_status=b, timestamp=ts, notes=notes)
        for a, b, ts, notes in steps
    ]


def initial_pending_tests(now: Optional[datetime] = None) -> List[LabTest]:
    now = now or datetime.now()
    hours = lambda n: now + timedelta(hours=n)

    tests = [
        LabTest(
            id="LT001", patient_name="John Doe", patient_id="P001",
            test_name="Complete Blood Count", status=S.SAMPLING,
            ordered_date=datetime(2023, 8, 15), doctor_name="Dr. Sarah Smith",
            category=PATHOLOGY, sample_details="Blood sample - 5ml", sample_id="S001-CBC",
            estimated_completion_time=hours(2),
            workflow_history=_history(
                (S.PENDING, S.SAMPLING, datetime(2023, 8, 15), "Sample collection scheduled"),
            ),
        ),
        LabTest(
            id="LT002", patient_name="Jane Smith", patient_id="P002",
            test_name="Lipid Profile", status=S.PROCESSING,
            ordered_date=datetime(2023, 8, 16), doctor_name="Dr. Robert Johnson",
            category=PATHOLOGY, sample_details="Blood sample - 10ml (fasting)", sample_id="S002-LP",
            estimated_completion_time=hours(3),
            workflow_history=_history(
                (S.PENDING, S.SAMPLING, datetime(2023, 8, 16, 9, 0), "Sample collected"),
                (S.SAMPLING, S.PROCESSING, datetime(2023, 8, 16, 10, 0), "Sample sent to lab for processing"),
            ),
        ),
        LabTest(
            id="LT003", patient_name="Alex Brown", patient_id="P003",
            test_name="Thyroid Function Test", status=S.REPORTING,
            ordered_date=datetime(2023, 8, 16), doctor_name="Dr. Emily Williams",
            category=PATHOLOGY, sample_details="Blood sample - 5ml", sample_id="S003-TFT",
            estimated_completion_time=hours(1),
            workflow_history=_history(
                (S.PENDING, S.SAMPLING, datetime(2023, 8, 16, 8, 30), "Sample collected"),
                (S.SAMPLING, S.PROCESSING, datetime(2023, 8, 16, 9, 15), "Sample processing"),
                (S.PROCESSING, S.REPORTING, datetime(2023, 8, 16, 14, 0), "Processing complete, report preparation"),
            ),
        ),
        LabTest(
            id="LT004", patient_name="Maria Garcia", patient_id="P004",
            test_name="Blood Glucose", status=S.SAMPLING,
            ordered_date=datetime(2023, 8, 17), doctor_name="Dr. Michael Davis",
            category=PATHOLOGY, sample_details="Blood sample - 3ml", sample_id="S004-BG",
            estimated_completion_time=hours(2),
            workflow_history=_history(
                (S.PENDING, S.SAMPLING, datetime(2023, 8, 17, 10, 0), "Sample collection in progress"),
            ),
        ),
        LabTest(
            id="LT005", patient_name="Robert Wilson", patient_id="P005",
            test_name="Liver Function Test", status=S.PROCESSING,
            ordered_date=datetime(2023, 8, 17), doctor_name="Dr. Sarah Smith",
            category=PATHOLOGY, sample_details="Blood sample - 7ml", sample_id="S005-LFT",
            estimated_completion_time=hours(4),
            workflow_history=_history(
                (S.PENDING, S.SAMPLING, datetime(2023, 8, 17, 9, 0), "Sample collected"),
                (S.SAMPLING, S.PROCESSING, datetime(2023, 8, 17, 11, 0), "Processing in lab"),
            ),
        ),
        LabTest(
            id="LT006", patient_name="William Moore", patient_id="P006",
            test_name="X-Ray Chest", status=S.REPORTING,
            ordered_date=datetime(2023, 8, 18), doctor_name="Dr. James Wilson",
            category=RADIOLOGY, sample_details="PA view X-ray", sample_id="S006-XR",
            estimated_completion_time=now + timedelta(minutes=30),
            workflow_history=_history(
                (S.PENDING, S.SAMPLING, datetime(2023, 8, 18, 10, 0), "Patient prepped for imaging"),
                (S.SAMPLING, S.PROCESSING, datetime(2023, 8, 18, 10, 15), "Imaging completed"),
                (S.PROCESSING, S.REPORTING, datetime(2023, 8, 18, 11, 0), "Images processed, report in preparation"),
            ),
        ),
        LabTest(
            id="LT007", patient_name="Susan Taylor", patient_id="P007",
            test_name="MRI Brain", status=S.SAMPLING,
            ordered_date=datetime(2023, 8, 18), doctor_name="Dr. Patricia Johnson",
            category=RADIOLOGY, sample_details="Full brain scan with contrast", sample_id="S007-MRI",
            estimated_completion_time=hours(5),
            workflow_history=_history(
                (S.PENDING, S.SAMPLING, datetime(2023, 8, 18, 13, 0), "Patient prepped for MRI"),
            ),
        ),
    ]

    # Первые два теста для демонстрации берутся на дом
    for test in tests[:2]:
        test.is_home_collection = True
        test.collection_address = "123 Patient Home St, Medical City, MC 12345"
        test.collection_datetime = now + timedelta(days=1)
        test.collection_notes = "Patient prefers morning collection, has a dog in the house."
        test.workflow_history.append(WorkflowHistoryItem(
            from_status=test.status,
            to_status=test.status,
            timestamp=now - timedelta(days=1),
            notes="Home collection scheduled",
            performed_by="R5",
            performer_name="David Wilson",
        ))

    return tests


def initial_completed_tests() -> List[LabTest]:
    rows = [
        ("LT008", "David Lee", "P008", "Complete Blood Count", 14, "LT006", "Dr. Robert Johnson", PATHOLOGY, 25),
        ("LT009", "Lucy Chen", "P009", "Urine Analysis", 13, "LT007", "Dr. Emily Williams", PATHOLOGY, 20),
        ("LT010", "Thomas Johnson", "P010", "CT Scan Head", 12, "LT010", "Dr. James Wilson", RADIOLOGY, 250),
        ("LT011", "Laura Rodriguez", "P011", "Ultrasound Abdomen", 11, "LT011", "Dr. Patricia Johnson", RADIOLOGY, 80),
    ]
    return [
        LabTest(
            id=test_id, patient_name=patient_name, patient_id=patient_id,
            test_name=test_name, status=S.COMPLETED,
            ordered_date=datetime(2023, 8, day),
            completed_date=datetime(2023, 8, day + 1),
            result_url=f"https://example.com/results/{result_file}.pdf",
            doctor_name=doctor, category=category, price=price,
        )
        for test_id, patient_name, patient_id, test_name, day, result_file, doctor, category, price in rows
    ]


def lab_test_options() -> List[LabTestOption]:
    return [
        LabTestOption("LT101", "Complete Blood Count (CBC)", 25.00, PATHOLOGY),
        LabTestOption("LT102", "Lipid Profile", 35.00, PATHOLOGY),
        LabTestOption("LT103", "Thyroid Function Test", 45.00, PATHOLOGY),
        LabTestOption("LT104", "Liver Function Test", 40.00, PATHOLOGY),
        LabTestOption("LT105", "Kidney Function Test", 42.00, PATHOLOGY),
        LabTestOption("LT106", "HbA1c", 30.00, PATHOLOGY),
        LabTestOption("LT107", "X-Ray Chest", 60.00, RADIOLOGY),
        LabTestOption("LT108", "Ultrasound Abdomen", 80.00, RADIOLOGY),
        LabTestOption("LT109", "CT Scan Head", 250.00, RADIOLOGY),
        LabTestOption("LT110", "MRI Brain", 350.00, RADIOLOGY),
    ]


def initial_customers() -> List[LabCustomer]:
    return [
        LabCustomer("C1", "John Smith", "+1-555-123-4567", "123 Main St, Anytown"),
        LabCustomer("C2", "Sarah Johnson", "+1-555-987-6543", "456 Oak Ave, Somewhere"),
        LabCustomer("C3", "Michael Brown", "+1-555-456-7890", "789 Pine Rd, Nowhere"),
        LabCustomer("C4", "Emily Davis", "+1-555-789-0123", "101 Maple Dr, Anywhere"),
    ]


def initial_waitlist_patients() -> List[LabWaitlistPatient]:
    options = {option.id: option for option in lab_test_options()}

    def items(*ids) -> List[LabBillItem]:
        return [options[i].to_bill_item() for i in ids]

    return [
        LabWaitlistPatient("WP001", "David Lee", 3, True, items("LT101", "LT103", "LT105")),
        LabWaitlistPatient("WP002", "Sarah Johnson", 2, False, items("LT104", "LT107")),
        LabWaitlistPatient("WP003", "Michael Brown", 1, False, items("LT110")),
    ]


def lab_representatives() -> List[LabRepresentative]:
    return [
        LabRepresentative("R1", "Dr. Sarah Smith", "Lab Technician"),
        LabRepresentative("R2", "Dr. Robert Johnson", "Pathologist"),
        LabRepresentative("R3", "Dr. Emily Williams", "Radiologist"),
        LabRepresentative("R4", "John Miller", "Lab Assistant"),
    ]
