"""Jinja2 Invoice Document Renderer

Renders the printable HTML invoice from templates/invoice.html.
"""

import os
from datetime import date
from decimal import Decimal
from typing import List
from jinja2 import Environment, FileSystemLoader, select_autoescape

from src.app.services.document_renderer import InvoiceDocumentRenderer
from src.domain.invoice import Invoice
from src.domain.invoice_item import InvoiceItem
from src.domain.totals import format_currency

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")


def format_quantity(value) -> str:
    """Quantity or rate as entered: 2.50 prints as 2.5, 100 as 100"""
    return f"{Decimal(value).normalize():f}"


def format_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


class Jinja2InvoiceDocumentRenderer(InvoiceDocumentRenderer):
    """
    Jinja2 implementation of InvoiceDocumentRenderer

    The document carries a print button and print stylesheet; printing and
    PDF export are left to the browser.
    """

    def __init__(self, templates_dir: str = TEMPLATES_DIR):
        self.env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(["html"]),
        )
        self.env.filters["currency"] = format_currency
        self.env.filters["quantity"] = format_quantity
        self.env.filters["display_date"] = format_date

    def render_invoice(self, invoice: Invoice, items: List[InvoiceItem]) -> str:
        """
        Render a printable invoice document

        Args:
            invoice: Invoice entity with stored totals
            items: Line items of the invoice

        Returns:
            HTML document as a string
        """
        template = self.env.get_template("invoice.html")
        status = invoice.status.value if hasattr(invoice.status, "value") else invoice.status
        return template.render(invoice=invoice, items=items, status=status)
