"""Excel export of parsed receipts and review data."""

import logging
from typing import List, Dict, Any
from pathlib import Path
import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter

from .review import ReviewItem

logger = logging.getLogger(__name__)

HEADERS = ["File Name", "Date", "Merchant", "Address", "Description", "Quantity",
           "Unit Price", "Amount", "Currency", "Status", "Review Reason"]
COLUMN_WIDTHS = [25, 12, 30, 35, 35, 10, 12, 12, 10, 10, 45]


class ExcelExporter:
    """Export parsed receipts and review items to Excel."""

    def __init__(self, output_path: Path):
        """
        Initialize Excel exporter.

        Args:
            output_path: Path for the output Excel file
        """
        self.output_path = output_path
        self.workbook = Workbook()

    def export_receipts(self,
                        entries: List[Dict[str, Any]],
                        review_items: List[ReviewItem],
                        include_summary: bool = False):
        """
        Export receipts to a single sheet, one row per line item.

        Args:
            entries: Dicts with 'file_path' and 'record' (a ReceiptRecord)
            review_items: Receipts that need manual review
            include_summary: Whether to put a summary block above the rows
        """
        try:
            if "Sheet" in self.workbook.sheetnames:
                self.workbook.remove(self.workbook["Sheet"])

            self._create_receipts_sheet(entries, review_items, include_summary)

            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.workbook.save(str(self.output_path))

            logger.info(f"Excel file exported to: {self.output_path}")

        except Exception as e:
            logger.error(f"Failed to export Excel file: {e}")
            raise

    def _create_receipts_sheet(self, entries: List[Dict[str, Any]],
                               review_items: List[ReviewItem], include_summary: bool):
        ws = self.workbook.create_sheet("Receipts")
        current_row = 1

        if include_summary:
            current_row = self._add_summary_section(ws, entries, current_row)
            current_row += 2

        review_lookup = {item.file_path: item for item in review_items}

        ws.cell(row=current_row, column=1, value="ALL RECEIPTS").font = Font(bold=True, size=14)
        current_row += 2

        for col, header in enumerate(HEADERS, 1):
            cell = ws.cell(row=current_row, column=col, value=header)
            cell.font = Font(bold=True)
            cell.fill = PatternFill(start_color="E6E6E6", end_color="E6E6E6", fill_type="solid")
            cell.alignment = Alignment(horizontal="center")
        current_row += 1

        # OK receipts first, then the ones needing review
        ordered = sorted(entries, key=lambda e: e['file_path'] in review_lookup)
        for entry in ordered:
            record = entry['record']
            review_item = review_lookup.get(entry['file_path'])
            file_name = Path(entry['file_path']).name

            for item in record.items:
                values = [
                    file_name,
                    record.date,
                    record.merchant_name,
                    record.address,
                    item.description,
                    float(item.quantity),
                    float(item.unit_price),
                    float(item.amount),
                    record.currency,
                    "REVIEW" if review_item else "OK",
                    review_item.reason if review_item else "",
                ]
                for col, value in enumerate(values, 1):
                    ws.cell(row=current_row, column=col, value=value)
                current_row += 1

        for i, width in enumerate(COLUMN_WIDTHS, 1):
            ws.column_dimensions[get_column_letter(i)].width = width

        logger.info(f"Created receipts sheet with {len(entries)} receipts and {len(review_items)} review items")

    def _add_summary_section(self, ws, entries: List[Dict[str, Any]], start_row: int) -> int:
        """Add summary statistics to the top of the sheet."""
        if not entries:
            ws.cell(row=start_row, column=1, value="No receipts to summarize")
            return start_row + 1

        df = self.build_summary_frame(entries)

        ws.cell(row=start_row, column=1, value="RECEIPT SUMMARY").font = Font(bold=True, size=14)
        current_row = start_row + 2

        ws.cell(row=current_row, column=1, value="Total Receipts:").font = Font(bold=True)
        ws.cell(row=current_row, column=2, value=len(df))
        ws.cell(row=current_row, column=4, value="Total Amount:").font = Font(bold=True)
        ws.cell(row=current_row, column=5, value=round(float(df['total'].sum()), 2))
        ws.cell(row=current_row, column=7, value="Total Tax:").font = Font(bold=True)
        ws.cell(row=current_row, column=8, value=round(float(df['tax'].sum()), 2))
        current_row += 2

        ws.cell(row=current_row, column=1, value="Merchant Breakdown:").font = Font(bold=True)
        current_row += 1
        ws.cell(row=current_row, column=1, value="Merchant").font = Font(bold=True)
        ws.cell(row=current_row, column=2, value="Count").font = Font(bold=True)
        ws.cell(row=current_row, column=3, value="Amount").font = Font(bold=True)
        current_row += 1

        by_merchant = df.groupby('merchant')['total'].agg(['count', 'sum'])
        for merchant, data in by_merchant.sort_values('sum', ascending=False).head(5).iterrows():
            ws.cell(row=current_row, column=1, value=merchant)
            ws.cell(row=current_row, column=2, value=int(data['count']))
            ws.cell(row=current_row, column=3, value=round(float(data['sum']), 2))
            current_row += 1

        return current_row

    @staticmethod
    def build_summary_frame(entries: List[Dict[str, Any]]) -> pd.DataFrame:
        """One row per receipt with merchant, currency, total and tax as floats."""
        return pd.DataFrame([
            {
                'merchant': entry['record'].merchant_name,
                'currency': entry['record'].currency,
                'total': float(entry['record'].total_amount),
                'tax': float(entry['record'].tax_amount),
            }
            for entry in entries
        ])
