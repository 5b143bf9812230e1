"""RenderInvoiceDocument Use Case

Produces the printable HTML document of an invoice.
"""

from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.services.document_renderer import InvoiceDocumentRenderer
from .dtos import RenderedInvoiceDTO


class RenderInvoiceDocument:
    """
    Use Case: Render printable invoice

    Business Rules:
    1. Invoice must exist and belong to the caller
    2. Any status can be rendered
    3. Printing / saving as PDF is done by the viewer's browser

    Flow:
    1. Retrieve invoice
    2. Retrieve its items
    3. Render document
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_item_repo: InvoiceItemRepository,
        renderer: InvoiceDocumentRenderer,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo
        self.renderer = renderer

    async def execute(self, user_id: int, invoice_id: int) -> Result[RenderedInvoiceDTO]:
        """
        Execute document rendering

        Args:
            user_id: Owning user
            invoice_id: Invoice to render

        Returns:
            Result[RenderedInvoiceDTO]: HTML document or error
        """
        try:
            # Step 1: Retrieve invoice
            invoice = await self.invoice_repo.get_by_id(invoice_id, user_id)

            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            # Step 2: Retrieve items
            items = await self.invoice_item_repo.get_by_invoice_id(invoice.id)

            # Step 3: Render
            html = self.renderer.render_invoice(invoice=invoice, items=items)

            return Return.ok(
                RenderedInvoiceDTO(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    html=html,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="RENDER_INVOICE_FAILED",
                    message="Failed to render invoice",
                    reason=str(e),
                )
            )
