from webless_explorer.etl import transform
from webless_explorer.models import BusinessDetail, BusinessStub, FullBusinessData


def test_to_business_stub_uses_fallbacks():
    stub = transform.to_business_stub({"place_id": "x", "vicinity": "Near the beach"})
    assert stub == BusinessStub(name="N/A", address="Near the beach", rating=0.0, place_id="x")

    stub = transform.to_business_stub({"place_id": "y"})
    assert stub.address == "N/A"


def test_to_business_stub_requires_place_id():
    assert transform.to_business_stub({"name": "Ghost"}) is None


def test_to_business_detail_normalizes_blank_values():
    detail = transform.to_business_detail({"formatted_phone_number": "  ", "website": ""})
    assert detail == BusinessDetail(phone_number=None, website=None)

    detail = transform.to_business_detail({"website": " https://example.com "})
    assert detail.website == "https://example.com"
    assert detail.phone_number is None


def test_dedupe_stubs_keeps_first_occurrence():
    stubs = [
        BusinessStub("A", "1", 4.0, "p1"),
        BusinessStub("B", "2", 3.0, "p2"),
        BusinessStub("A2", "1b", 1.0, "p1"),
    ]
    assert [stub.name for stub in transform.dedupe_stubs(stubs)] == ["A", "B"]


def test_merge_business():
    record = transform.merge_business(
        BusinessStub("Acme", "Main St", 4.5, "pid"),
        BusinessDetail(phone_number="123", website="https://acme.example"),
    )
    assert record.place_id == "pid"
    assert record.phone_number == "123"
    assert record.has_website


def test_full_business_data_from_dict_coerces_contact_fields():
    record = FullBusinessData.from_dict({"name": "Acme", "placeId": "a", "phoneNumber": 5551234, "website": None})

    assert record.phone_number == "5551234"
    assert record.website is None
    assert record.rating == 0.0
    assert record.has_website is False
