import json
from datetime import datetime

from labdesk.core.models import LabTestStatus

NOW = datetime(2024, 1, 10, 12, 0)


def _ids(tests):
    return [t.id for t in tests]


def assert_views_consistent(store):
    pending = set(_ids(store.pending_tests))
    completed = set(_ids(store.completed_tests))
    assert pending.isdisjoint(completed)
    assert pending | completed == set(_ids(store.all_tests))
    for test in store.completed_tests:
        assert test.status == LabTestStatus.COMPLETED
        assert test.completed_date is not None


def test_seed_views(engine):
    store = engine.tests

    assert _ids(store.pending_tests) == ["LT001", "LT002", "LT003", "LT004", "LT005", "LT006", "LT007"]
    assert _ids(store.completed_tests) == ["LT008", "LT009", "LT010", "LT011"]
    assert_views_consistent(store)


def test_update_workflow_to_completed_moves_test(engine):
    store = engine.tests

    test = store.update_workflow("LT001", LabTestStatus.COMPLETED)

    assert "LT001" not in _ids(store.pending_tests)
    assert _ids(store.completed_tests)[-1] == "LT001"
    assert test.completed_date == NOW
    assert test.workflow_history[-1].to_status == LabTestStatus.COMPLETED
    assert test.workflow_history[-1].from_status == LabTestStatus.SAMPLING
    assert test.workflow_history[-1].notes == "Status changed from sampling to completed"
    assert_views_consistent(store)


def test_update_workflow_reopens_completed_test(engine):
    store = engine.tests

    test = store.update_workflow("LT008", "sampling", "Sample rejected")

    assert "LT008" not in _ids(store.completed_tests)
    assert _ids(store.pending_tests)[-1] == "LT008"
    assert test.completed_date is None
    assert test.status == LabTestStatus.SAMPLING
    assert test.workflow_history[-1].notes == "Sample rejected"
    assert_views_consistent(store)


def test_update_workflow_in_place(engine):
    store = engine.tests

    test = store.update_workflow(
        "LT002", LabTestStatus.REPORTING,
        performed_by="R2", performer_name="Dr. Robert Johnson",
        sample_details="Re-run on second analyser",
    )

    assert _ids(store.pending_tests).index("LT002") == 1
    assert test.status == LabTestStatus.REPORTING
    assert test.representative_id == "R2"
    assert test.sample_details == "Re-run on second analyser"


def test_update_workflow_completed_to_completed_keeps_date(engine):
    store = engine.tests
    original_date = store.get("LT009").completed_date

    test = store.update_workflow("LT009", LabTestStatus.COMPLETED)

    assert test.completed_date == original_date
    assert len(test.workflow_history) == 1
    assert_views_consistent(store)


def test_any_transition_is_accepted(engine):
    store = engine.tests

    store.update_workflow("LT004", LabTestStatus.CANCELLED)
    test = store.update_workflow("LT004", LabTestStatus.SAMPLING)

    assert test.status == LabTestStatus.SAMPLING
    assert [h.to_status for h in test.workflow_history[-2:]] == [
        LabTestStatus.CANCELLED, LabTestStatus.SAMPLING,
    ]


def test_update_workflow_unknown_test_is_noop(engine):
    store = engine.tests
    before = [t.to_dict() for t in store.all_tests]

    assert store.update_workflow("NOPE", LabTestStatus.COMPLETED) is None
    assert [t.to_dict() for t in store.all_tests] == before


def test_upload_result_completes_test(engine):
    store = engine.tests
    store.select_test(store.get("LT002"))

    test = store.upload_result("LT002", "lipids.pdf")

    assert test.status == LabTestStatus.COMPLETED
    assert test.completed_date == NOW
    assert test.result_url == "https://example.com/results/LT002.pdf"
    assert test.workflow_history[-1].notes == "Result uploaded: lipids.pdf"
    assert store.selected_test is None
    assert _ids(store.completed_tests)[-1] == "LT002"
    assert_views_consistent(store)


def test_upload_result_ignores_completed_test(engine):
    store = engine.tests

    assert store.upload_result("LT008", "cbc.pdf") is None
    assert store.get("LT008").result_url == "https://example.com/results/LT006.pdf"


def test_create_report_stores_report_data(engine):
    store = engine.tests
    report = {"TSH": "2.1 mIU/L", "supportingFiles": ["scan.png"]}

    test = store.create_report("LT003", report)

    assert json.loads(test.notes) == report
    assert test.result_url == "https://example.com/reports/LT003.pdf"
    assert json.loads(test.workflow_history[-1].reporting_details) == ["scan.png"]
    assert test in store.completed_tests


def test_update_sample_details_pending_only(engine):
    store = engine.tests

    test = store.update_sample_details("LT004", "Blood sample - 4ml", "S004-BG2")

    assert test.sample_details == "Blood sample - 4ml"
    assert test.sample_id == "S004-BG2"
    assert test.workflow_history[-1].from_status == test.workflow_history[-1].to_status
    assert store.update_sample_details("LT010", "n/a") is None


def test_setup_home_collection_skips_unknown(engine):
    store = engine.tests

    updated = store.setup_home_collection(
        ["LT005", "LT010", "missing"],
        address="7 River Rd",
        collection_date=datetime(2024, 1, 11, 8, 0),
        notes="Ring twice",
        representative_id="R4",
    )

    assert updated == 1
    test = store.get("LT005")
    assert test.is_home_collection
    assert test.collection_address == "7 River Rd"
    assert test.collection_representative_id == "R4"
    assert test.workflow_history[-1].collection_details == "Ring twice"
    assert not store.get("LT010").is_home_collection


def test_update_workflow_drops_unknown_history_fields(engine):
    store = engine.tests

    test = store.update_workflow(
        "LT004", LabTestStatus.PROCESSING,
        performedBy="R1", from_status="cancelled", performed_by="R2",
    )

    item = test.workflow_history[-1]
    assert item.from_status == LabTestStatus.SAMPLING
    assert item.performed_by == "R2"
    assert test.representative_id == "R2"
