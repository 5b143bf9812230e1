"""CreateInvoice Use Case

Validates the invoice form, computes totals and stores the invoice with its
line items in one transaction.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, List
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_item import InvoiceItem
from src.domain.invoice_number import generate_invoice_number
from src.domain.totals import calculate_totals
from src.domain.user import is_valid_email
from .dtos import CreateInvoiceCommandDTO, InvoiceDetailResponseDTO

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("client_name", "client_email", "client_address", "due_date")


class CreateInvoice:
    """
    Use Case: Create an invoice with line items

    Business Rules:
    1. client_name, client_email, client_address and due_date are required
    2. tax_rate lies in [0, 100]
    3. At least one line item; in strict mode every item needs a name and
       a quantity above zero
    4. Invoice number is generated (INV-YYYYMM-RRR), not checked for uniqueness
    5. Totals are computed once here and stored
    6. Invoice is created with status=draft, issue_date defaults to today

    Flow:
    1. Validate input (no persistence on failure)
    2. Generate invoice number
    3. Compute subtotal, tax amount and total
    4. Persist invoice, then items referencing its ID
    5. Commit both writes together; roll back on any failure
    6. Return the stored invoice with its items
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        invoice_item_repo: InvoiceItemRepository,
        strict: bool = True,
        number_generator: Callable[[], str] = generate_invoice_number,
        today: Callable[[], date] = date.today,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.invoice_item_repo = invoice_item_repo
        self.strict = strict
        self.number_generator = number_generator
        self.today = today

    def validate(self, command: CreateInvoiceCommandDTO) -> List[str]:
        """
        Collect validation problems

        Args:
            command: Invoice form input

        Returns:
            List of problems, empty when the command is valid
        """
        problems = []

        for field in REQUIRED_FIELDS:
            value = getattr(command, field)
            if value is None or (isinstance(value, str) and not value.strip()):
                problems.append(f"{field} is required")

        if command.client_email.strip() and not is_valid_email(command.client_email):
            problems.append("client_email is not a valid email address")

        if not Decimal("0") <= command.tax_rate <= Decimal("100"):
            problems.append("tax_rate must be between 0 and 100")

        if not command.items:
            problems.append("at least one line item is required")

        if self.strict:
            for position, item in enumerate(command.items, start=1):
                if not item.name.strip():
                    problems.append(f"item {position}: name is required")
                if item.quantity <= 0:
                    problems.append(f"item {position}: quantity must be greater than 0")

        return problems

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceDetailResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with client details and line items

        Returns:
            Result[InvoiceDetailResponseDTO]: Stored invoice or error
        """
        # Step 1: Validate
        problems = self.validate(command)
        if problems:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="Please fill in all required fields",
                    reason="; ".join(problems),
                )
            )

        try:
            # Step 2: Generate invoice number
            invoice_number = self.number_generator()

            # Step 3: Compute totals
            totals = calculate_totals(command.items, command.tax_rate)

            # Step 4: Persist invoice, then items
            invoice = Invoice(
                user_id=command.user_id,
                invoice_number=invoice_number,
                client_name=command.client_name.strip(),
                client_email=command.client_email.strip(),
                client_address=command.client_address.strip(),
                issue_date=command.issue_date or self.today(),
                due_date=command.due_date,
                status=InvoiceStatus.DRAFT,
                tax_rate=command.tax_rate,
                subtotal=totals.subtotal,
                tax_amount=totals.tax_amount,
                total=totals.total,
                notes=command.notes or None,
            )

            created_invoice = await self.invoice_repo.create(invoice)

            items = [
                InvoiceItem(
                    invoice_id=created_invoice.id,
                    description=item.stored_description,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    amount=item.amount,
                )
                for item in command.items
            ]
            created_items = await self.invoice_item_repo.create_many(items)

            # Step 5: Commit invoice and items together
            await self.uow.commit()

            logger.info(
                f"Created invoice {created_invoice.invoice_number} "
                f"(id={created_invoice.id}) with {len(created_items)} items "
                f"for user {command.user_id}"
            )

            # Step 6: Build response
            return Return.ok(
                InvoiceDetailResponseDTO.from_entities(created_invoice, created_items)
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create invoice for user {command.user_id}: {e}")
            return Return.err(
                Error(
                    code="PERSISTENCE_ERROR",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )
