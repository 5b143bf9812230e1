"""Invoice Document Renderer Interface

Defines the contract for producing the printable invoice document.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice import Invoice
from src.domain.invoice_item import InvoiceItem


class InvoiceDocumentRenderer(ABC):
    """
    Service interface for invoice document rendering

    The output is printed (or saved as PDF) by the viewer's own print
    facility; no PDF is produced here.
    """

    @abstractmethod
    def render_invoice(self, invoice: Invoice, items: List[InvoiceItem]) -> str:
        """
        Render a printable invoice document

        Args:
            invoice: Invoice entity with stored totals
            items: Line items of the invoice

        Returns:
            HTML document as a string
        """
        pass
