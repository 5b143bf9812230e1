"""Unit tests for UpdateInvoiceStatus and DeleteInvoice use cases"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.invoices.delete_invoice import DeleteInvoice
from src.app.use_cases.invoices.dtos import UpdateInvoiceStatusCommandDTO
from src.app.use_cases.invoices.update_invoice_status import UpdateInvoiceStatus
from src.domain.invoice import InvoiceStatus


@pytest.fixture
def mock_invoice_repo():
    repo = MagicMock()
    repo.update = AsyncMock(side_effect=lambda invoice: invoice)
    repo.delete = AsyncMock()
    return repo


@pytest.mark.asyncio
class TestUpdateInvoiceStatus:

    async def test_draft_to_paid(self, mock_uow, mock_invoice_repo, make_invoice):
        """
        Given: A draft invoice
        When: Status is set to paid
        Then: Status is stored, totals untouched, change committed
        """
        # Arrange
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        use_case = UpdateInvoiceStatus(mock_uow, mock_invoice_repo)

        # Act
        result = await use_case.execute(
            UpdateInvoiceStatusCommandDTO(user_id=7, invoice_id=1, status="paid")
        )

        # Assert
        assert result.is_ok()
        assert result.value.status == "paid"
        assert result.value.total == Decimal("137.5")
        updated = mock_invoice_repo.update.call_args[0][0]
        assert updated.status == InvoiceStatus.PAID
        mock_uow.commit.assert_called_once()

    async def test_unknown_status(self, mock_uow, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock()
        use_case = UpdateInvoiceStatus(mock_uow, mock_invoice_repo)

        result = await use_case.execute(
            UpdateInvoiceStatusCommandDTO(user_id=7, invoice_id=1, status="cancelled")
        )

        assert result.error.code == "VALIDATION_ERROR"
        mock_invoice_repo.get_by_id.assert_not_called()

    async def test_invoice_not_found(self, mock_uow, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)
        use_case = UpdateInvoiceStatus(mock_uow, mock_invoice_repo)

        result = await use_case.execute(
            UpdateInvoiceStatusCommandDTO(user_id=7, invoice_id=5, status="sent")
        )

        assert result.error.code == "INVOICE_NOT_FOUND"
        mock_uow.commit.assert_not_called()

    async def test_update_failure_rolls_back(self, mock_uow, mock_invoice_repo, make_invoice):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        mock_invoice_repo.update = AsyncMock(side_effect=Exception("locked"))
        use_case = UpdateInvoiceStatus(mock_uow, mock_invoice_repo)

        result = await use_case.execute(
            UpdateInvoiceStatusCommandDTO(user_id=7, invoice_id=1, status="sent")
        )

        assert result.error.code == "PERSISTENCE_ERROR"
        mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
class TestDeleteInvoice:

    async def test_delete_invoice_success(self, mock_uow, mock_invoice_repo, make_invoice):
        # Arrange
        invoice = make_invoice()
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)

        # Act
        result = await DeleteInvoice(mock_uow, mock_invoice_repo).execute(7, 1)

        # Assert
        assert result.is_ok()
        assert result.value.invoice_id == 1
        assert result.value.deleted is True
        mock_invoice_repo.delete.assert_called_once_with(invoice)
        mock_uow.commit.assert_called_once()

    async def test_delete_other_users_invoice_not_found(self, mock_uow, mock_invoice_repo):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)

        result = await DeleteInvoice(mock_uow, mock_invoice_repo).execute(8, 1)

        assert result.error.code == "INVOICE_NOT_FOUND"
        mock_invoice_repo.delete.assert_not_called()

    async def test_delete_failure_rolls_back(self, mock_uow, mock_invoice_repo, make_invoice):
        mock_invoice_repo.get_by_id = AsyncMock(return_value=make_invoice())
        mock_invoice_repo.delete = AsyncMock(side_effect=Exception("constraint"))

        result = await DeleteInvoice(mock_uow, mock_invoice_repo).execute(7, 1)

        assert result.error.code == "PERSISTENCE_ERROR"
        mock_uow.commit.assert_not_called()
        mock_uow.rollback.assert_called_once()
