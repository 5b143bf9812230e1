"""
List Invoices Use Case

Retrieves a user's invoices, newest first, optionally filtered by status.
"""
import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from .dtos import ListInvoicesResponseDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class ListInvoices:
    """
    Use case: List invoices

    Invoices are ordered by created_at DESC (most recent first).
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        """
        Initialize with invoice repository.

        Args:
            invoice_repo: InvoiceRepository instance
        """
        self.invoice_repo = invoice_repo

    async def execute(
        self,
        user_id: int,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[ListInvoicesResponseDTO]:
        """
        List invoices for a user with pagination.

        Args:
            user_id: Owning user
            status: Optional status filter (draft, sent, paid, overdue)
            limit: Maximum number of invoices to return (default 50)
            offset: Number of invoices to skip (default 0)

        Returns:
            Result[ListInvoicesResponseDTO]: Paginated invoice list
        """
        status_filter = None
        if status:
            try:
                status_filter = InvoiceStatus(status)
            except ValueError:
                return Return.err(
                    Error(
                        code="VALIDATION_ERROR",
                        message=f"Unknown invoice status: {status}",
                        reason=f"Expected one of {[s.value for s in InvoiceStatus]}",
                    )
                )

        try:
            invoices, total = await self.invoice_repo.list_by_user(
                user_id=user_id,
                status=status_filter,
                limit=limit,
                offset=offset,
            )
        except Exception as e:
            logger.error(f"Failed to load invoices for user {user_id}: {e}")
            return Return.err(
                Error(
                    code="PERSISTENCE_ERROR",
                    message="Failed to load invoices",
                    reason=str(e),
                )
            )

        return Return.ok(
            ListInvoicesResponseDTO(
                invoices=[InvoiceResponseDTO.from_entity(invoice) for invoice in invoices],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
