from labdesk.core.models import LabBillItem


def test_select_patient_replaces_cart_items(engine):
    cart = engine.billing
    cart.add_item(LabBillItem(id="LT109", test_name="CT Scan Head", price=250))

    patient = engine.waitlist.get("WP002")
    customer = engine.waitlist.select_patient(patient)

    assert [item.id for item in cart.items] == ["LT104", "LT107"]
    assert customer.id == "C2"
    assert cart.selected_customer is customer
    assert cart.search_term == "Sarah Johnson"


def test_select_patient_highlights_exactly_one(engine):
    waitlist = engine.waitlist

    waitlist.select_patient(waitlist.get("WP003"))

    highlighted = [p.id for p in waitlist.patients if p.is_highlighted]
    assert highlighted == ["WP003"]
    assert waitlist.highlighted.id == "WP003"


def test_select_patient_synthesizes_customer(engine):
    patient = engine.waitlist.get("WP001")

    customer = engine.waitlist.select_patient(patient)

    assert customer.id == "WP001"
    assert customer.name == "David Lee"
    assert customer.mobile == "Unknown"
    assert len(engine.billing.items) == 3


def test_cart_changes_do_not_touch_waitlist(engine):
    patient = engine.waitlist.get("WP003")
    engine.waitlist.select_patient(patient)

    engine.billing.add_item(patient.tests[0])

    assert engine.billing.items[0].quantity == 2
    assert patient.tests[0].quantity == 1


def test_selected_patient_bill_can_be_printed(engine):
    engine.waitlist.select_patient(engine.waitlist.get("WP002"))

    receipt = engine.billing.print_bill()

    assert [t.test_name for t in receipt.tests] == ["Liver Function Test", "X-Ray Chest"]
    assert all(t.patient_id == "C2" for t in receipt.tests)


def test_remove_from_waitlist_case_insensitive(engine):
    waitlist = engine.waitlist

    assert waitlist.remove_from_waitlist("sarah JOHNSON") == 1
    assert [p.id for p in waitlist.patients] == ["WP001", "WP003"]
    assert waitlist.remove_from_waitlist("nobody") == 0
