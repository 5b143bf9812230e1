"""
Get Invoice Use Case

Loads one invoice together with its line items.
"""
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from .dtos import InvoiceDetailResponseDTO


class GetInvoice:
    """
    Use case: View an invoice

    Items expose the stored text split into name and description.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        invoice_item_repo: InvoiceItemRepository,
    ):
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo

    async def execute(self, user_id: int, invoice_id: int) -> Result[InvoiceDetailResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id, user_id)
            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {invoice_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            items = await self.invoice_item_repo.get_by_invoice_id(invoice.id)

        except Exception as e:
            return Return.err(
                Error(
                    code="PERSISTENCE_ERROR",
                    message="Failed to load invoice",
                    reason=str(e),
                )
            )

        return Return.ok(InvoiceDetailResponseDTO.from_entities(invoice, items))
