"""Tests for CSV import service."""

from datetime import date
from decimal import Decimal

import pytest

from budgetkit.domain.csv_import import PREFERENCES_KEY, CSVImportService
from budgetkit.domain.errors import ValidationError
from budgetkit.domain.unknowns import UnknownScanner

BANK_MAPPING = {
    "date": "Date",
    "description": "Description",
    "debit": "Debit",
    "credit": "Credit",
    "balance": "Balance",
}


@pytest.fixture
def import_service(temp_db):
    return CSVImportService(temp_db)


def test_import_bank_export(import_service, temp_db, fixtures_dir):
    result = import_service.import_csv(
        str(fixtures_dir / "bank_export.csv"), BANK_MAPPING, delimiter=",", has_header=True
    )

    assert result["inserted"] == 6
    assert result["dropped"] == 1
    assert result["skipped"] == 1
    rows = temp_db.list_ledger_rows()
    assert len(rows) == 6
    assert result["first_row"] == rows[0].id
    assert result["last_row"] == rows[-1].id


def test_import_places_amounts_on_their_side(import_service, temp_db, fixtures_dir):
    import_service.import_csv(
        str(fixtures_dir / "bank_export.csv"), BANK_MAPPING, delimiter=",", has_header=True
    )
    rows = temp_db.list_ledger_rows()

    payroll = rows[0]
    assert payroll.debit_side.is_blank
    assert payroll.credit_side.description == "PAYROLL ACME CORP"
    assert payroll.credit_side.amount == Decimal("2500.00")
    assert payroll.credit_side.date == date(2024, 1, 5)
    assert payroll.balance == Decimal("3100.00")

    grocery = rows[-1]
    assert grocery.debit_side.amount == Decimal("1045.10")
    assert grocery.credit_side.is_blank
    # Imported sides start unclassified
    assert grocery.debit_side.category == ""


def test_import_signed_amounts_with_sniffed_delimiter(import_service, temp_db, fixtures_dir):
    mapping = {"date": 0, "description": 1, "amount": 2}

    result = import_service.import_csv(
        str(fixtures_dir / "signed_amounts.csv"), mapping, has_header=True
    )

    assert result["inserted"] == 2
    coffee, refund = temp_db.list_ledger_rows()
    assert coffee.debit_side.amount == Decimal("3.75")
    assert coffee.debit_side.date == date(2024, 1, 15)
    assert coffee.credit_side.is_blank
    assert refund.credit_side.amount == Decimal("20.00")
    assert refund.debit_side.is_blank


def test_import_then_scan_counts_every_transaction(import_service, temp_db, fixtures_dir):
    result = import_service.import_csv(
        str(fixtures_dir / "bank_export.csv"), BANK_MAPPING, delimiter=",", has_header=True
    )

    groups = UnknownScanner(temp_db).scan()

    assert sum(g.count for g in groups) == result["inserted"]
    assert groups[0].description == "STARBUCKS #123"
    assert groups[0].average_debit == Decimal("4.875")


def test_import_text_without_header(import_service, temp_db):
    text = "2024-02-01,COFFEE,3.00,\n2024-02-02,REFUND,,8.00\n"
    mapping = {"date": 0, "description": 1, "debit": 2, "credit": 3}

    result = import_service.import_text(text, mapping)

    assert result["inserted"] == 2
    rows = temp_db.list_ledger_rows()
    assert rows[0].debit_side.amount == Decimal("3.00")
    assert rows[1].credit_side.amount == Decimal("8.00")


def test_import_row_with_both_amounts_fills_both_sides(import_service, temp_db):
    text = "2024-02-01,TRANSFER,10.00,25.00\n"
    mapping = {"date": 0, "description": 1, "debit": 2, "credit": 3}

    import_service.import_text(text, mapping)

    row = temp_db.list_ledger_rows()[0]
    assert row.debit_side.amount == Decimal("10.00")
    assert row.credit_side.amount == Decimal("25.00")


def test_import_row_without_amount_goes_to_debit_side(import_service, temp_db):
    import_service.import_text("2024-02-01,NOTE ONLY,,\n", {"date": 0, "description": 1, "debit": 2, "credit": 3})

    row = temp_db.list_ledger_rows()[0]
    assert row.debit_side.description == "NOTE ONLY"
    assert row.debit_side.amount == Decimal("0")
    assert row.credit_side.is_blank


def test_import_bad_amount_is_dropped(import_service, temp_db):
    text = "2024-02-01,COFFEE,abc\n2024-02-02,TEA,2.00\n"

    result = import_service.import_text(text, {"date": 0, "description": 1, "debit": 2})

    assert result["inserted"] == 1
    assert result["dropped"] == 1


def test_import_empty_text(import_service, temp_db):
    result = import_service.import_text("   ", {"date": 0})

    assert result == {
        "inserted": 0,
        "skipped": 0,
        "dropped": 0,
        "first_row": None,
        "last_row": None,
    }
    assert temp_db.list_ledger_rows() == []


def test_import_unknown_field(import_service):
    with pytest.raises(ValidationError, match="Unknown import field"):
        import_service.import_text("a,b\n", {"memo": 0})


def test_import_missing_header_column(import_service):
    with pytest.raises(ValidationError, match="no column named 'Posted'"):
        import_service.import_text("Date,Amount\n2024-01-01,5\n", {"date": "Posted"}, has_header=True)


def test_import_missing_file(import_service):
    with pytest.raises(FileNotFoundError):
        import_service.import_csv("/nonexistent/file.csv", {"date": 0})


def test_preferences_round_trip(import_service, temp_db):
    prefs = {"delimiter": ";", "has_header": True, "mapping": {"date": "Date"}}

    import_service.save_preferences(prefs)

    assert CSVImportService(temp_db).get_preferences() == prefs


def test_preferences_missing_or_corrupt(import_service, temp_db):
    assert import_service.get_preferences() == {}

    temp_db.property_store().set(PREFERENCES_KEY, "{broken")
    assert import_service.get_preferences() == {}

    temp_db.property_store().set(PREFERENCES_KEY, "[1]")
    assert import_service.get_preferences() == {}


def test_import_month_first_dates(import_service, temp_db, tmp_path):
    us_export = tmp_path / "us.csv"
    us_export.write_text("01/15/2024,COFFEE,3.50\n01/02/2024,TEA,2.00\n", encoding="utf-8")

    result = import_service.import_csv(
        str(us_export), {"date": 0, "description": 1, "debit": 2}, delimiter=","
    )

    assert result["inserted"] == 2
    assert result["dropped"] == 0
    coffee, tea = temp_db.list_ledger_rows()
    assert coffee.debit_side.date == date(2024, 1, 15)
    # Ambiguous slash dates stay day-first
    assert tea.debit_side.date == date(2024, 2, 1)


def test_import_non_utf8_file(import_service, temp_db, tmp_path):
    latin1 = tmp_path / "latin1.csv"
    latin1.write_bytes("2024-01-02,CAFÉ LUNCH,12.00\n".encode("latin-1"))

    with pytest.raises(ValidationError, match="not UTF-8 encoded"):
        import_service.import_csv(str(latin1), {"date": 0, "description": 1, "debit": 2})
    assert temp_db.list_ledger_rows() == []
