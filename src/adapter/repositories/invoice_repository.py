"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List, Tuple
from sqlalchemy import delete
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.base import utc_now
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_item import InvoiceItem


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID
        """
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: int, user_id: int) -> Optional[Invoice]:
        """
        Retrieve an invoice owned by a user

        Args:
            invoice_id: Invoice ID
            user_id: Owning user ID

        Returns:
            Invoice if found, None otherwise
        """
        statement = (
            select(Invoice)
            .where(Invoice.id == invoice_id)
            .where(Invoice.user_id == user_id)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_by_user(
        self,
        user_id: int,
        status: Optional[InvoiceStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[Invoice], int]:
        """
        List a user's invoices, newest first

        Args:
            user_id: Owning user ID
            status: Optional filter by status
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            Tuple of (invoices, total matching count)
        """
        statement = select(Invoice).where(Invoice.user_id == user_id)
        count_statement = (
            select(func.count())
            .select_from(Invoice)
            .where(Invoice.user_id == user_id)
        )

        if status:
            statement = statement.where(Invoice.status == status)
            count_statement = count_statement.where(Invoice.status == status)

        # id breaks ties between rows created within the same timestamp
        statement = statement.order_by(Invoice.created_at.desc(), Invoice.id.desc())
        statement = statement.limit(limit).offset(offset)

        result = await self.session.execute(statement)
        invoices = list(result.scalars().all())

        count_result = await self.session.execute(count_statement)
        total = count_result.scalar_one()

        return invoices, total

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        invoice.updated_at = utc_now()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        """
        Delete an invoice together with its items

        Items are removed explicitly so the cascade holds on backends
        that do not enforce foreign keys (SQLite by default).

        Args:
            invoice: Invoice entity to delete
        """
        await self.session.execute(
            delete(InvoiceItem).where(InvoiceItem.invoice_id == invoice.id)
        )
        await self.session.delete(invoice)
        await self.session.flush()
