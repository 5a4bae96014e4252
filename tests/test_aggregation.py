"""Unit tests for grouping receipts into per-student totals and dues."""

import itertools
from decimal import Decimal

import pytest

from feeportal.api.v1.receipts.service import (
    aggregate_receipts,
    format_receipt_date,
    format_receipt_line,
    to_summary_rows,
)
from feeportal.core.exceptions import MissingFieldError
from feeportal.core.schemas import PaymentRecord

from conftest import RECEIPTS


def _records(rows):
    return [PaymentRecord.model_validate(r) for r in rows]


def test_two_students_totals_and_dues() -> None:
    rows = [
        {"rollno": "5", "name": "A", "totalAmount": 3000},
        {"rollno": "5", "name": "A", "totalAmount": 2000},
        {"rollno": "7", "name": "B", "totalAmount": 10000},
    ]
    result = aggregate_receipts(_records(rows), total_fee=Decimal("10000"))

    assert [a.roll_no for a in result] == ["5", "7"]
    assert result[0].total_paid == Decimal("5000")
    assert result[0].dues_fee == Decimal("5000")
    assert result[1].total_paid == Decimal("10000")
    assert result[1].dues_fee == Decimal("0")
    assert all(a.total_fee == Decimal("10000") for a in result)


def test_default_total_fee_is_ten_thousand() -> None:
    result = aggregate_receipts(_records(RECEIPTS))
    assert result[0].total_fee == Decimal("10000")


@pytest.mark.parametrize("roll_number", [None, "", "5", "7", "99"])
def test_total_paid_is_conserved(roll_number) -> None:
    records = _records(RECEIPTS)
    result = aggregate_receipts(records, roll_number=roll_number)
    expected = sum(
        (Decimal(r.total_amount) for r in records if not roll_number or r.roll_no == roll_number),
        Decimal("0"),
    )
    assert sum((a.total_paid for a in result), Decimal("0")) == expected


def test_filter_keeps_only_that_roll_number_in_order() -> None:
    records = _records(RECEIPTS)
    result = aggregate_receipts(records, roll_number="5")
    assert len(result) == 1
    assert [r.receipt_no for r in result[0].receipts] == ["R-101", "R-102"]
    assert result[0].receipts == [r for r in records if r.roll_no == "5"]


def test_filter_absent_roll_number_is_empty() -> None:
    assert aggregate_receipts(_records(RECEIPTS), roll_number="99") == []


def test_filter_is_exact_string_match() -> None:
    records = _records([{"rollno": 5, "name": "A", "totalAmount": 100}, {"rollno": 15, "name": "C", "totalAmount": 50}])
    result = aggregate_receipts(records, roll_number="5")
    assert [a.roll_no for a in result] == ["5"]
    assert aggregate_receipts(records, roll_number="05") == []


def test_dues_independent_of_receipt_order() -> None:
    rows = [
        {"rollno": "3", "name": "A", "totalAmount": 1200},
        {"rollno": "3", "name": "A", "totalAmount": 800},
        {"rollno": "3", "name": "A", "totalAmount": 4550},
    ]
    outcomes = set()
    for perm in itertools.permutations(rows):
        (agg,) = aggregate_receipts(_records(perm))
        assert agg.dues_fee == agg.total_fee - agg.total_paid
        outcomes.add((agg.total_paid, agg.dues_fee))
    assert outcomes == {(Decimal("6550"), Decimal("3450"))}


def test_overpayment_gives_negative_dues() -> None:
    rows = [{"rollno": "1", "name": "A", "totalAmount": 7000}, {"rollno": "1", "name": "A", "totalAmount": 4000}]
    (agg,) = aggregate_receipts(_records(rows))
    assert agg.dues_fee == Decimal("-1000")


def test_shared_roll_number_merges_and_first_record_names_the_group() -> None:
    rows = [
        {"rollno": "4", "name": "First", "std": "1", "totalAmount": 100},
        {"rollno": "4", "name": "Second", "std": "2", "totalAmount": 200},
    ]
    (agg,) = aggregate_receipts(_records(rows))
    assert agg.name == "First"
    assert agg.standard == "1"
    assert len(agg.receipts) == 2


def test_output_follows_first_appearance() -> None:
    rows = [
        {"rollno": "9", "totalAmount": 1},
        {"rollno": "2", "totalAmount": 1},
        {"rollno": "9", "totalAmount": 1},
        {"rollno": "4", "totalAmount": 1},
    ]
    assert [a.roll_no for a in aggregate_receipts(_records(rows))] == ["9", "2", "4"]


def test_aggregation_is_deterministic() -> None:
    records = _records(RECEIPTS)
    assert aggregate_receipts(records) == aggregate_receipts(records)


def test_missing_total_amount_raises() -> None:
    records = _records([{"rollno": "5", "receiptno": "R-9", "name": "A"}])
    with pytest.raises(MissingFieldError) as exc:
        aggregate_receipts(records)
    assert exc.value.field == "totalAmount"
    assert exc.value.status_code == 422
    assert "R-9" in exc.value.message


def test_missing_total_amount_outside_filter_is_ignored() -> None:
    records = _records([{"rollno": "5", "totalAmount": 10}, {"rollno": "6"}])
    (agg,) = aggregate_receipts(records, roll_number="5")
    assert agg.total_paid == Decimal("10")


def test_receipt_line_format() -> None:
    record = PaymentRecord.model_validate(RECEIPTS[0])
    assert format_receipt_line(record) == (
        "Receipt_No: R-101, Amount: 3000, Tui_Fee: 2500, Add_Fee: 500, "
        "Pros:-0, Trans:-0, Other:-0, on 15/04/2024"
    )


def test_receipt_line_shows_dash_for_missing_fields() -> None:
    record = PaymentRecord.model_validate({"rollno": "5", "receiptno": "R-1", "totalAmount": 10})
    line = format_receipt_line(record)
    assert "Tui_Fee: -" in line
    assert line.endswith("on Invalid Date")


@pytest.mark.parametrize("value", [None, "", "not a date"])
def test_invalid_dates(value) -> None:
    assert format_receipt_date(value) == "Invalid Date"


def test_summary_rows_join_receipt_lines_with_newlines() -> None:
    rows = to_summary_rows(aggregate_receipts(_records(RECEIPTS)))
    assert [r.roll_no for r in rows] == ["5", "7"]
    assert rows[0].receipt_details.count("\n") == 1
    assert rows[0].receipt_details.splitlines()[1].startswith("Receipt_No: R-102")
    assert rows[1].total_paid == Decimal("10000")


@pytest.mark.parametrize("bad", ["", "abc", "NaN", "Infinity"])
def test_non_numeric_total_amount_raises(bad) -> None:
    records = _records([{"rollno": "5", "receiptno": "R-7", "totalAmount": bad}])
    with pytest.raises(MissingFieldError) as exc:
        aggregate_receipts(records)
    assert exc.value.field == "totalAmount"


def test_bad_fields_outside_filter_are_ignored() -> None:
    records = _records(
        RECEIPTS + [{"rollno": "8", "totalAmount": "abc", "tuitionFee": "", "admissionfee": "n/a"}]
    )
    (agg,) = aggregate_receipts(records, roll_number="5")
    assert agg.total_paid == Decimal("5000")


def test_blank_display_field_shows_dash() -> None:
    record = PaymentRecord.model_validate({"rollno": "8", "receiptno": "R-8", "totalAmount": 100, "tuitionFee": ""})
    assert "Tui_Fee: -," in format_receipt_line(record)
