import pytest

from feedesk.app.core.errors import ValidationError
from feedesk.app.schemas.fee_item import FeeItem
from feedesk.app.services.fee_items import FeeItemSet


def test_new_set_starts_with_blank_rows():
    items = FeeItemSet()
    assert len(items) == 3
    assert all(row.label == "" and row.amount == "" for row in items)


def test_add_appends_blank_row():
    items = FeeItemSet(initial_rows=1)
    index = items.add()
    assert index == 1
    assert len(items) == 2
    assert items.rows[1].label == ""


def test_remove_last_row_leaves_a_blank_row():
    items = FeeItemSet([("Tuition", 500)])
    items.remove(0)
    assert len(items) == 1
    assert items.rows[0].label == ""
    assert items.rows[0].amount == ""


def test_update_amount_is_normalized():
    items = FeeItemSet(initial_rows=1)
    items.update(0, "amount", "120.6")
    assert items.rows[0].amount == "121"
    items.update(0, "amount", "oops")
    assert items.rows[0].amount == ""


def test_update_label_passes_through_transform():
    items = FeeItemSet(initial_rows=1, label_transform=str.upper)
    items.update(0, "label", "tuition")
    assert items.rows[0].label == "TUITION"


def test_update_unknown_field_is_rejected():
    items = FeeItemSet(initial_rows=1)
    with pytest.raises(ValidationError) as exc_info:
        items.update(0, "discount", "5")
    assert exc_info.value.code == "unknown-field"


def test_clean_drops_empty_rows_and_reindexes():
    items = FeeItemSet(
        [
            {"label": "", "amount": "0"},
            {"label": " Tuition ", "amount": "500.7"},
            {"label": "", "amount": ""},
            {"label": "", "amount": "40"},
            {"label": "Books", "amount": ""},
        ]
    )
    assert items.clean() == [
        FeeItem(label="Tuition", amount=501, sort_order=0),
        FeeItem(label="", amount=40, sort_order=1),
        FeeItem(label="Books", amount=0, sort_order=2),
    ]


def test_validate_requires_one_complete_item():
    with pytest.raises(ValidationError) as exc_info:
        FeeItemSet([("Tuition", 0), ("", 300)]).validate()
    assert exc_info.value.code == "incomplete-items"

    FeeItemSet([("Tuition", 0), ("Exam", 300)]).validate()


def test_validate_rejects_blank_set():
    with pytest.raises(ValidationError):
        FeeItemSet().validate()


def test_validate_and_clean_see_edited_rows():
    items = FeeItemSet(initial_rows=2)
    items.update(1, "label", "Exam")
    items.update(1, "amount", "80")

    items.validate()
    assert [row.label for row in items] == ["", "Exam"]
    assert items.clean() == [FeeItem(label="Exam", amount=80, sort_order=0)]
