"""UpdateInvoiceStatus Use Case

Changes the status label of an invoice.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus, can_transition
from .dtos import UpdateInvoiceStatusCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class UpdateInvoiceStatus:
    """
    Use Case: Change invoice status

    Business Rules:
    1. Target status must be draft, sent, paid or overdue
    2. Any status may follow any other (see can_transition)
    3. Only the status changes; totals are left as stored

    Flow:
    1. Parse target status
    2. Load invoice owned by the caller
    3. Check the transition
    4. Store the new status and commit
    """

    def __init__(self, uow: UnitOfWork, invoice_repo: InvoiceRepository):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, command: UpdateInvoiceStatusCommandDTO) -> Result[InvoiceResponseDTO]:
        # Step 1: Parse target status
        try:
            target = InvoiceStatus(command.status)
        except ValueError:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message=f"Unknown invoice status: {command.status}",
                    reason=f"Expected one of {[s.value for s in InvoiceStatus]}",
                )
            )

        try:
            # Step 2: Load invoice
            invoice = await self.invoice_repo.get_by_id(command.invoice_id, command.user_id)

            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f"Invoice with ID {command.invoice_id} not found",
                        reason="Invoice does not exist",
                    )
                )

            # Step 3: Check transition
            current = invoice.status
            if not can_transition(current, target):
                return Return.err(
                    Error(
                        code="INVALID_STATUS_TRANSITION",
                        message=f"Cannot change status from {InvoiceStatus(current).value} "
                                f"to {target.value}",
                        reason="Transition not allowed",
                    )
                )

            # Step 4: Store
            invoice.status = target
            updated = await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(
                f"Invoice {updated.id} status changed "
                f"{InvoiceStatus(current).value} -> {target.value}"
            )
            return Return.ok(InvoiceResponseDTO.from_entity(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="PERSISTENCE_ERROR",
                    message="Failed to update status",
                    reason=str(e),
                )
            )
