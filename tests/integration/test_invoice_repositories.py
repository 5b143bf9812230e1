"""Integration tests for invoice persistence

Tests cover:
- CreateInvoice writing invoice and items in one transaction
- Listing order, status filter and pagination
- Delete removing the invoice together with its items
- Fractional rates, quantities and prices reading back exactly
"""

import pytest
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy.orm import sessionmaker
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.invoice_item_repository import SqlAlchemyInvoiceItemRepository
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoices.create_invoice import CreateInvoice
from src.app.use_cases.invoices.delete_invoice import DeleteInvoice
from src.app.use_cases.invoices.dtos import CreateInvoiceCommandDTO
from src.app.use_cases.invoices.list_invoices import ListInvoices
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_item import InvoiceItem
from src.domain.invoice_number import INVOICE_NUMBER_PATTERN
from src.domain.line_item import LineItem


def make_command(user_id=1, client_name="Acme Corp", items=None, tax_rate="10"):
    return CreateInvoiceCommandDTO(
        user_id=user_id,
        client_name=client_name,
        client_email="billing@acme.test",
        client_address="1 Main Street",
        due_date=date(2024, 5, 31),
        tax_rate=Decimal(tax_rate),
        items=items or [
            LineItem(name="Widget", description="Blue, size M", quantity="2", unit_price="50"),
            LineItem(name="Setup", quantity="1", unit_price="25"),
        ],
    )


def create_use_case(db_session: AsyncSession) -> CreateInvoice:
    return CreateInvoice(
        SqlAlchemyUnitOfWork(db_session),
        SqlAlchemyInvoiceRepository(db_session),
        SqlAlchemyInvoiceItemRepository(db_session),
    )


@pytest.mark.asyncio
class TestCreateInvoiceIntegration:

    async def test_end_to_end_invoice_creation(self, db_session: AsyncSession):
        """
        Test complete flow: create invoice, verify database state
        """
        # Act
        result = await create_use_case(db_session).execute(make_command())

        # Assert
        assert result.is_ok()
        response = result.value
        assert INVOICE_NUMBER_PATTERN.match(response.invoice_number)

        invoice = await SqlAlchemyInvoiceRepository(db_session).get_by_id(response.invoice_id, 1)
        assert invoice is not None
        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.subtotal == Decimal("125")
        assert invoice.tax_amount == Decimal("12.5")
        assert invoice.total == Decimal("137.5")

        items = await SqlAlchemyInvoiceItemRepository(db_session).get_by_invoice_id(invoice.id)
        assert [item.description for item in items] == ["Widget\nBlue, size M", "Setup"]
        assert [item.amount for item in items] == [Decimal("100"), Decimal("25")]

    async def test_invalid_form_writes_nothing(self, db_session: AsyncSession):
        command = make_command()
        command.client_email = ""

        result = await create_use_case(db_session).execute(command)

        assert result.error.code == "VALIDATION_ERROR"
        invoices = (await db_session.exec(select(Invoice))).all()
        assert invoices == []

    async def test_other_users_invoice_is_invisible(self, db_session: AsyncSession):
        result = await create_use_case(db_session).execute(make_command(user_id=1))

        invoice = await SqlAlchemyInvoiceRepository(db_session).get_by_id(result.value.invoice_id, 2)

        assert invoice is None

    async def test_fractional_values_read_back_exactly(self, engine, db_session: AsyncSession):
        """
        Given: An 8.875% tax rate and items with four-decimal quantity and price
        When: The invoice is created and read back through a new database session
        Then: Rate and amounts are unchanged and the stored totals still add up
        """
        # Arrange
        command = make_command(
            tax_rate="8.875",
            items=[
                LineItem(name="Sample", quantity="0.3333", unit_price="0.3333"),
                LineItem(name="Widget", quantity="3", unit_price="19.99"),
            ],
        )

        # Act
        result = await create_use_case(db_session).execute(command)
        Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        async with Session() as fresh:
            invoice = await SqlAlchemyInvoiceRepository(fresh).get_by_id(result.value.invoice_id, 1)
            items = await SqlAlchemyInvoiceItemRepository(fresh).get_by_invoice_id(invoice.id)

        # Assert
        assert invoice.tax_rate == Decimal("8.875")
        assert [item.quantity for item in items] == [Decimal("0.3333"), Decimal("3")]
        assert [item.amount for item in items] == [Decimal("0.11108889"), Decimal("59.97")]
        for item in items:
            assert item.amount == item.quantity * item.unit_price
        assert invoice.subtotal == sum(item.amount for item in items)
        assert invoice.subtotal == Decimal("60.08108889")
        assert invoice.tax_amount == invoice.subtotal * invoice.tax_rate / Decimal("100")
        assert invoice.tax_amount == Decimal("5.3321966389875")
        assert invoice.total == invoice.subtotal + invoice.tax_amount


@pytest.mark.asyncio
class TestListInvoicesIntegration:

    async def test_newest_first_with_status_filter_and_paging(self, db_session: AsyncSession):
        # Arrange - three invoices with increasing creation time
        repo = SqlAlchemyInvoiceRepository(db_session)
        base = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        for index, status in enumerate([InvoiceStatus.DRAFT, InvoiceStatus.PAID, InvoiceStatus.DRAFT]):
            await repo.create(
                Invoice(
                    user_id=1,
                    invoice_number=f"INV-202405-00{index}",
                    client_name=f"Client {index}",
                    client_email="c@acme.test",
                    client_address="Street",
                    issue_date=date(2024, 5, 1),
                    due_date=date(2024, 5, 31),
                    status=status,
                    tax_rate=Decimal("0"),
                    subtotal=Decimal("1"),
                    tax_amount=Decimal("0"),
                    total=Decimal("1"),
                    created_at=base + timedelta(minutes=index),
                    updated_at=base + timedelta(minutes=index),
                )
            )
        await db_session.commit()
        use_case = ListInvoices(repo)

        # Act
        everything = await use_case.execute(user_id=1)
        drafts = await use_case.execute(user_id=1, status="draft")
        page = await use_case.execute(user_id=1, limit=1, offset=1)

        # Assert
        assert [row.client_name for row in everything.value.invoices] == ["Client 2", "Client 1", "Client 0"]
        assert [row.client_name for row in drafts.value.invoices] == ["Client 2", "Client 0"]
        assert drafts.value.total == 2
        assert [row.client_name for row in page.value.invoices] == ["Client 1"]
        assert page.value.total == 3


@pytest.mark.asyncio
class TestDeleteInvoiceIntegration:

    async def test_delete_removes_invoice_and_items(self, db_session: AsyncSession):
        """
        Given: A stored invoice with two items
        When: It is deleted
        Then: It is gone from the listing and no items reference it
        """
        # Arrange
        created = await create_use_case(db_session).execute(make_command())
        invoice_id = created.value.invoice_id
        repo = SqlAlchemyInvoiceRepository(db_session)

        # Act
        result = await DeleteInvoice(SqlAlchemyUnitOfWork(db_session), repo).execute(1, invoice_id)

        # Assert
        assert result.is_ok()
        listing = await ListInvoices(repo).execute(user_id=1)
        assert listing.value.total == 0

        orphans = (
            await db_session.exec(select(InvoiceItem).where(InvoiceItem.invoice_id == invoice_id))
        ).all()
        assert orphans == []
