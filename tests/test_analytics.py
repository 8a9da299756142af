from datetime import datetime

from labdesk.core import models
from labdesk.core.analytics import acquisition_analytics, representative_analytics

S = models.LabTestStatus


def _test(test_id, **kwargs):
    return models.LabTest(
        id=test_id, patient_id="P1", patient_name="Ann Lee", test_name="CBC",
        status=S.SAMPLING, ordered_date=datetime(2024, 1, 1), **kwargs
    )


def test_seed_representative_analytics(engine):
    reps = representative_analytics(engine.tests.all_tests)

    assert len(reps) == 1
    rep = reps[0]
    assert rep.representative_id == "R5"
    assert rep.representative_name == "David Wilson"
    assert rep.steps_completed == 2
    assert rep.tests_handled == 2
    assert rep.efficiency == 1.0
    assert rep.specialties == {"pathology": 2}


def test_representative_counts_distinct_tests(engine):
    store = engine.tests
    store.update_workflow("LT006", S.COMPLETED, performed_by="R3", performer_name="Dr. Emily Williams")
    store.update_workflow("LT006", S.REPORTING, performed_by="R3", performer_name="Dr. Emily Williams")
    store.update_workflow("LT007", S.PROCESSING, performed_by="R3", performer_name="Dr. Emily Williams")
    # Без имени исполнителя запись не учитывается
    store.update_workflow("LT007", S.REPORTING, performed_by="R3")

    reps = {r.representative_id: r for r in representative_analytics(store.all_tests)}

    r3 = reps["R3"]
    assert r3.steps_completed == 3
    assert r3.tests_handled == 2
    assert r3.efficiency == 1.5
    assert r3.specialties == {"radiology": 3}


def test_seed_acquisition_analytics(engine):
    analytics = acquisition_analytics(engine.tests.all_tests)

    assert analytics.to_dict() == {
        "walk_in": 0,
        "home_collection": 2,
        "online": 9,
        "referral": 0,
    }


def test_acquisition_channels():
    tests = [
        _test("A1", is_home_collection=True, referral_id="REF1"),
        _test("B2", referral_id="REF2"),
        _test("L3"),
        _test("K4"),
    ]

    analytics = acquisition_analytics(tests)

    assert analytics.home_collection == 1
    assert analytics.referral == 1
    assert analytics.online == 1
    assert analytics.walk_in == 1


def test_engine_analytics_shape(engine):
    data = engine.analytics()

    assert data["acquisition"]["home_collection"] == 2
    assert data["representatives"][0]["representative_id"] == "R5"
