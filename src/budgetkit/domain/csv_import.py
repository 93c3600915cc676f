"""CSV import domain service."""

import csv
import io
import json
import logging
from pathlib import Path
from typing import Any, Optional

from budgetkit.database.base import Database
from budgetkit.domain.entities import LedgerRow, TransactionSide
from budgetkit.domain.errors import ValidationError, csv_not_utf8
from budgetkit.utils.amount_parser import parse_optional_amount
from budgetkit.utils.date_parser import parse_date

log = logging.getLogger(__name__)

PREFERENCES_KEY = "IMPORT_PREFS"

# Ledger fields a CSV column can be mapped to
IMPORT_FIELDS = ("date", "description", "debit", "credit", "amount", "balance")


def _clean_text(value: Optional[str]) -> str:
    return str(value or "").strip()


class CSVImportService:
    """Service for importing bank CSV exports into the ledger."""

    def __init__(self, db: Database):
        """Initialize CSV import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.store = db.property_store()

    # Preferences
    def save_preferences(self, prefs: dict[str, Any]) -> None:
        """Remember delimiter, header flag and mapping for later imports."""
        self.store.set(PREFERENCES_KEY, json.dumps(prefs or {}))

    def get_preferences(self) -> dict[str, Any]:
        """Saved import preferences; unreadable data counts as none."""
        raw = self.store.get(PREFERENCES_KEY)
        if not raw:
            return {}
        try:
            prefs = json.loads(raw)
        except ValueError:
            log.warning("Ignoring unreadable import preferences")
            return {}
        return prefs if isinstance(prefs, dict) else {}

    # Import
    def import_csv(
        self,
        csv_file_path: str,
        mapping: dict[str, Any],
        delimiter: Optional[str] = None,
        has_header: bool = False,
    ) -> dict[str, Any]:
        """Import transactions from a CSV file.

        Args:
            csv_file_path: Path to CSV file
            mapping: Ledger field -> column index (or header name)
            delimiter: Field delimiter; sniffed from the file when None
            has_header: True when the first row holds column names

        Returns:
            Import statistics, see import_text

        Raises:
            FileNotFoundError: If CSV file doesn't exist
            ValidationError: If the mapping is invalid or the file is not UTF-8
        """
        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        try:
            with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
                text = f.read()
        except UnicodeDecodeError as e:
            raise ValidationError(csv_not_utf8(csv_file_path, e))

        if delimiter is None:
            try:
                delimiter = csv.Sniffer().sniff(text[:1024], delimiters=",;\t|").delimiter
            except csv.Error:
                delimiter = ","

        return self.import_text(text, mapping, delimiter=delimiter, has_header=has_header)

    def import_text(
        self,
        csv_text: str,
        mapping: dict[str, Any],
        delimiter: str = ",",
        has_header: bool = False,
    ) -> dict[str, Any]:
        """Import transactions from CSV text and append them to the ledger.

        Rows without description and amounts are skipped. Rows whose date or
        amounts cannot be parsed are dropped. Neither stops the import.

        Returns:
            Dict with import statistics:
            - inserted: number of ledger rows appended
            - skipped: number of empty rows
            - dropped: number of rows with unparseable values
            - first_row / last_row: IDs of the appended rows, or None

        Raises:
            ValidationError: If the mapping names unknown fields or columns
        """
        result: dict[str, Any] = {
            "inserted": 0,
            "skipped": 0,
            "dropped": 0,
            "first_row": None,
            "last_row": None,
        }
        if not csv_text or not csv_text.strip():
            log.warning("CSV text empty; nothing imported")
            return result

        records = list(csv.reader(io.StringIO(csv_text), delimiter=delimiter or ","))
        if not records:
            return result

        header: list[str] = []
        if has_header:
            header = [h.strip() for h in records[0]]
            records = records[1:]

        columns = self._resolve_columns(mapping, header)

        rows: list[LedgerRow] = []
        for row_num, record in enumerate(records, start=2 if has_header else 1):
            if not any(cell.strip() for cell in record):
                result["skipped"] += 1
                continue
            try:
                row = self.build_row(record, columns)
            except ValueError as e:
                log.warning("Row %d dropped: %s", row_num, e)
                result["dropped"] += 1
                continue
            if row is None:
                result["skipped"] += 1
                continue
            rows.append(row)

        if rows:
            ids = self.db.append_ledger_rows(rows)
            result["inserted"] = len(ids)
            result["first_row"] = ids[0]
            result["last_row"] = ids[-1]

        log.info(
            "Imported %d rows (%d skipped, %d dropped)",
            result["inserted"],
            result["skipped"],
            result["dropped"],
        )
        return result

    def build_row(self, record: list[str], columns: dict[str, int]) -> Optional[LedgerRow]:
        """Turn one CSV record into a ledger row.

        Returns:
            LedgerRow, or None when the record carries no transaction

        Raises:
            ValueError: If the date or an amount cannot be parsed
        """

        def cell(field: str) -> Optional[str]:
            index = columns.get(field)
            if index is None or index >= len(record):
                return None
            return record[index]

        description = _clean_text(cell("description"))
        debit = parse_optional_amount(cell("debit"))
        credit = parse_optional_amount(cell("credit"))
        signed = parse_optional_amount(cell("amount"))
        if signed < 0:
            debit += -signed
        elif signed > 0:
            credit += signed

        if not description and debit == 0 and credit == 0:
            return None

        txn_date = parse_date(cell("date"))
        balance_cell = cell("balance")
        balance = parse_optional_amount(balance_cell) if _clean_text(balance_cell) else None

        debit_side = TransactionSide()
        credit_side = TransactionSide()
        if debit != 0 or credit == 0:
            debit_side = TransactionSide(date=txn_date, description=description, amount=debit)
        if credit != 0:
            credit_side = TransactionSide(date=txn_date, description=description, amount=credit)

        return LedgerRow(id=0, debit_side=debit_side, credit_side=credit_side, balance=balance)

    def _resolve_columns(self, mapping: dict[str, Any], header: list[str]) -> dict[str, int]:
        """Map ledger fields to column indexes."""
        columns: dict[str, int] = {}
        for field, column in (mapping or {}).items():
            if field not in IMPORT_FIELDS:
                raise ValidationError(
                    f"Unknown import field '{field}'. Expected one of: {', '.join(IMPORT_FIELDS)}"
                )
            if column is None or str(column).strip() == "":
                continue
            if isinstance(column, int) or str(column).strip().isdigit():
                columns[field] = int(column)
                continue
            name = str(column).strip()
            if name not in header:
                raise ValidationError(f"CSV file has no column named '{name}'")
            columns[field] = header.index(name)
        return columns

