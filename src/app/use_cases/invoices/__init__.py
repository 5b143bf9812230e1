"""Invoice use cases"""
from .create_invoice import CreateInvoice
from .list_invoices import ListInvoices
from .get_invoice import GetInvoice
from .delete_invoice import DeleteInvoice
from .update_invoice_status import UpdateInvoiceStatus
from .calculate_totals import CalculateTotals
from .new_invoice_draft import NewInvoiceDraft
from .render_invoice_document import RenderInvoiceDocument
from .dtos import (
    CreateInvoiceCommandDTO,
    InvoiceItemDTO,
    InvoiceResponseDTO,
    InvoiceDetailResponseDTO,
    ListInvoicesResponseDTO,
    UpdateInvoiceStatusCommandDTO,
    DeleteInvoiceResponseDTO,
    CalculateTotalsCommandDTO,
    TotalsResponseDTO,
    InvoiceDraftDTO,
    RenderedInvoiceDTO,
)

__all__ = [
    "CreateInvoice",
    "ListInvoices",
    "GetInvoice",
    "DeleteInvoice",
    "UpdateInvoiceStatus",
    "CalculateTotals",
    "NewInvoiceDraft",
    "RenderInvoiceDocument",
    "CreateInvoiceCommandDTO",
    "InvoiceItemDTO",
    "InvoiceResponseDTO",
    "InvoiceDetailResponseDTO",
    "ListInvoicesResponseDTO",
    "UpdateInvoiceStatusCommandDTO",
    "DeleteInvoiceResponseDTO",
    "CalculateTotalsCommandDTO",
    "TotalsResponseDTO",
    "InvoiceDraftDTO",
    "RenderedInvoiceDTO",
]
