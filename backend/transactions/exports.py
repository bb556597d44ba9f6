"""
Export utilities for ledger transactions.
Supports Excel (.xlsx) and CSV (.csv) formats.
"""
import csv
import io
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter


class ExportFormat:
    EXCEL = 'xlsx'
    CSV = 'csv'

    CHOICES = [EXCEL, CSV]
    CONTENT_TYPES = {
        EXCEL: 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        CSV: 'text/csv',
    }


DEFAULT_ATTRIBUTES = [
    'id',
    'created_at',
    'amount',
    'currency',
    'description',
    'net_amount_in_collective_currency',
    'host_currency',
    'host_currency_fx_rate',
    'payment_processor_fee_in_host_currency',
    'host_fee_in_host_currency',
    'platform_fee_in_host_currency',
    'net_amount_in_host_currency',
]

NUMERIC_ATTRIBUTES = {
    'amount',
    'net_amount_in_collective_currency',
    'amount_in_host_currency',
    'host_currency_fx_rate',
    'payment_processor_fee_in_host_currency',
    'host_fee_in_host_currency',
    'platform_fee_in_host_currency',
    'net_amount_in_host_currency',
    'tax_amount',
}


def format_value(value: Any) -> str:
    """Format a value for export."""
    if value is None:
        return ''
    if isinstance(value, datetime):
        return value.strftime('%Y-%m-%d %H:%M:%S')
    if isinstance(value, Decimal):
        return format(value.normalize(), 'f')
    if isinstance(value, bool):
        return 'Yes' if value else 'No'
    return str(value)


def export_to_csv(rows: list[dict], attributes: list[str], delimiter: str = ',') -> str:
    """
    Export rows to CSV, with the attribute names as header row.

    Returns:
        CSV string
    """
    output = io.StringIO()
    writer = csv.writer(output, delimiter=delimiter, quoting=csv.QUOTE_MINIMAL)
    writer.writerow(attributes)
    for row in rows:
        writer.writerow([format_value(row.get(attribute)) for attribute in attributes])
    return output.getvalue()


def export_to_excel(rows: list[dict], attributes: list[str], sheet_name: str = 'Transactions') -> bytes:
    """
    Export rows to an Excel workbook, with the attribute names as header row.

    Returns:
        Bytes of the Excel file
    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name

    header_font = Font(bold=True, color='FFFFFF')
    header_fill = PatternFill(start_color='4472C4', end_color='4472C4', fill_type='solid')

    for col_idx, attribute in enumerate(attributes, 1):
        cell = ws.cell(row=1, column=col_idx, value=attribute)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal='center')
        ws.column_dimensions[get_column_letter(col_idx)].width = max(12, len(attribute) + 2)

    for row_idx, row in enumerate(rows, 2):
        for col_idx, attribute in enumerate(attributes, 1):
            cell = ws.cell(row=row_idx, column=col_idx, value=format_value(row.get(attribute)))
            if attribute in NUMERIC_ATTRIBUTES:
                cell.alignment = Alignment(horizontal='right')

    ws.freeze_panes = ws.cell(row=2, column=1)

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()


def transaction_rows(transactions: Iterable, attributes: list[str]) -> list[dict]:
    """Read `attributes` off each transaction (model fields or properties)."""
    return [
        {attribute: getattr(transaction, attribute, None) for attribute in attributes}
        for transaction in transactions
    ]


def export_transactions(transactions: Iterable, attributes: Optional[list[str]] = None, fmt: str = ExportFormat.CSV):
    """
    Export transactions as CSV text or XLSX bytes.

    Args:
        transactions: Transaction instances
        attributes: Columns to export, defaults to DEFAULT_ATTRIBUTES
        fmt: ExportFormat.CSV or ExportFormat.EXCEL
    """
    attributes = list(attributes or DEFAULT_ATTRIBUTES)
    rows = transaction_rows(transactions, attributes)
    if fmt == ExportFormat.CSV:
        return export_to_csv(rows, attributes)
    if fmt == ExportFormat.EXCEL:
        return export_to_excel(rows, attributes)
    raise ValueError(f"Unsupported export format: {fmt}. Use one of {ExportFormat.CHOICES}")
