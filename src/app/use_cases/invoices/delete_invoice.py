"""DeleteInvoice Use Case

Deletes an invoice and the line items it owns.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from .dtos import DeleteInvoiceResponseDTO

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete invoice

    Business Rules:
    1. Invoice must exist and belong to the caller
    2. Its items are removed with it
    3. Deletion cannot be undone
    """

    def __init__(self, uow: UnitOfWork, invoice_repo: InvoiceRepository):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, user_id: int, invoice_id: int) -> Result[DeleteInvoiceResponseDTO]:
        """
        Execute invoice deletion

        Args:
            user_id: Owning user
            invoice_id: Invoice to delete

        Returns:
            Result[DeleteInvoiceResponseDTO]: Confirmation or error
        """
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

            await self.invoice_repo.delete(invoice)
            await self.uow.commit()

            logger.info(f"Deleted invoice {invoice_id} for user {user_id}")
            return Return.ok(DeleteInvoiceResponseDTO(invoice_id=invoice_id))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to delete invoice {invoice_id}: {e}")
            return Return.err(
                Error(
                    code="PERSISTENCE_ERROR",
                    message="Failed to delete invoice",
                    reason=str(e),
                )
            )
