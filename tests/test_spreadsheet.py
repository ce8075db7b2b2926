import io

import pandas as pd
import pytest

from backend.app.errors import DecodeFailure, InvalidPayload
from backend.app.spreadsheet import decode, encode


def test_csv_layout():
    records = [{
        "id": "abc", "amount": 1500.0, "type": "expense", "category": 'Makan "enak"',
        "date": "2025-01-12T12:30:00.000Z", "note": "a, b",
    }]

    text = encode(records, "csv").decode("utf-8")

    assert text == (
        "id,amount,type,category,date,note\n"
        'abc,1500,expense,"Makan ""enak""",2025-01-12T12:30:00.000Z,"a, b"'
    )


def test_csv_keeps_fractional_amounts():
    text = encode([{"id": "x", "amount": 12.75, "type": "income", "category": "Umum", "date": "2025-01-01", "note": ""}], "csv")
    assert b'x,12.75,income,"Umum",2025-01-01,""' in text


def test_csv_round_trip(sample_entries):
    records = sample_entries[:3]

    decoded, added = decode(encode(records, "csv"))

    assert added == 3
    assert sorted((r["amount"], r["type"], r["category"], r["note"]) for r in decoded) == sorted(
        (r["amount"], r["type"], r["category"], r["note"]) for r in records
    )
    assert "id" not in decoded[0]
    assert decoded[0]["date"] == "2025-01-05T08:00:00.000Z"


def test_bad_rows_are_skipped():
    data = (
        "amount,type,category\n"
        "100,income,Gaji\n"
        "abc,expense,Makan\n"
        "50,expense,Makan\n"
        "20,transfer,Makan\n"
        "-5,expense,Makan\n"
    ).encode()

    records, added = decode(data)

    assert added == 2
    assert [r["amount"] for r in records] == [100.0, 50.0]


def test_headers_are_case_insensitive():
    data = b"ID,Amount,TYPE,Category,Date,Note\nold-id,10,Income,Makan,2025-01-15,lunch\n"

    records, added = decode(data)

    assert added == 1
    assert records[0] == {
        "amount": 10.0, "type": "income", "category": "Makan",
        "date": "2025-01-15T00:00:00.000Z", "note": "lunch",
    }


def test_missing_columns_get_defaults():
    records, _ = decode(b"amount,type\n10,expense\n")

    assert records[0]["category"] == "Umum"
    assert records[0]["note"] == ""
    assert records[0]["date"].endswith("Z")


def test_unparseable_date_skips_row():
    records, added = decode(b"amount,type,date\n10,expense,not-a-date\n20,expense,2025-02-01\n")
    assert added == 1
    assert records[0]["amount"] == 20.0


def test_xlsx_has_one_entries_sheet(sample_entries):
    data = encode(sample_entries, "xlsx")

    book = pd.ExcelFile(io.BytesIO(data))
    assert book.sheet_names == ["Entries"]
    frame = book.parse("Entries")
    assert list(frame.columns) == ["id", "amount", "type", "category", "date", "note"]
    assert len(frame) == 4


def test_xlsx_import(sample_entries):
    records, added = decode(encode(sample_entries, "xlsx"))

    assert added == 4
    assert {r["category"] for r in records} == {"Gaji", "Makan", "Umum"}
    assert sum(r["amount"] for r in records) == 1700


def test_unknown_export_format():
    with pytest.raises(InvalidPayload):
        encode([], "pdf")


@pytest.mark.parametrize("data", [b"", b"PK\x03\x04not really a zip"])
def test_unreadable_file(data):
    with pytest.raises(DecodeFailure):
        decode(data)


def test_ragged_row_is_skipped():
    data = b"amount,type,category,note\n100,income,Gaji,ok\n50,expense,Makan,a,b\n20,expense,Makan,fine\n"

    records, added = decode(data)

    assert added == 2
    assert [r["amount"] for r in records] == [100.0, 20.0]


def test_csv_round_trip_keeps_whitespace():
    records = [{"id": "w", "amount": 5.0, "type": "expense", "category": " ", "date": "2025-01-01T00:00:00.000Z", "note": "  "}]

    decoded, _ = decode(encode(records, "csv"))

    assert (decoded[0]["category"], decoded[0]["note"]) == (" ", "  ")


def test_blank_date_defaults_to_now():
    records, added = decode(b'amount,type,date\n10,expense," "\n')
    assert added == 1
    assert records[0]["date"].endswith("Z")
