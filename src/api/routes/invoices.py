"""Invoice API Routes

FastAPI routes for the invoice form, invoice history and printable documents.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import HTMLResponse
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.invoices import (
    CalculateTotals,
    CalculateTotalsCommandDTO,
    CreateInvoice,
    CreateInvoiceCommandDTO,
    DeleteInvoice,
    DeleteInvoiceResponseDTO,
    GetInvoice,
    InvoiceDetailResponseDTO,
    InvoiceDraftDTO,
    InvoiceResponseDTO,
    ListInvoices,
    ListInvoicesResponseDTO,
    NewInvoiceDraft,
    RenderInvoiceDocument,
    TotalsResponseDTO,
    UpdateInvoiceStatus,
    UpdateInvoiceStatusCommandDTO,
)
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.repositories.invoice_item_repository import SqlAlchemyInvoiceItemRepository
from src.adapter.services.document_renderer import Jinja2InvoiceDocumentRenderer
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.schemas.invoice_request import (
    CalculateTotalsRequestSchema,
    CreateInvoiceRequestSchema,
    UpdateInvoiceStatusRequestSchema,
)
from src.depends import get_session, get_session_context
from src.domain.auth_session import SessionContext
from src.domain.line_item import LineItem

router = APIRouter(prefix="/invoices", tags=["Invoices"])

STATUS_BY_ERROR_CODE = {
    "INVOICE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "AUTH_ERROR": status.HTTP_401_UNAUTHORIZED,
}

NOT_FOUND_RESPONSE = {
    404: {
        "description": "Invoice not found",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "INVOICE_NOT_FOUND",
                        "message": "Invoice with ID 123 not found"
                    }
                }
            }
        }
    }
}


def raise_for_error(result) -> None:
    if result.is_err():
        raise ClientError(
            result.error,
            status_code=STATUS_BY_ERROR_CODE.get(result.error.code, status.HTTP_400_BAD_REQUEST),
        )


def to_line_items(items) -> list:
    return [LineItem(**item.model_dump()) for item in items]


@router.get(
    "/draft",
    response_model=InvoiceDraftDTO,
    status_code=status.HTTP_200_OK,
)
async def get_invoice_draft(
    context: SessionContext = Depends(get_session_context),
):
    """
    Default values of a new invoice form.

    Issue date is today, status is draft, tax rate 0 and one blank line item.
    The form is reset to these values after a successful creation.
    """
    result = await NewInvoiceDraft().execute()
    raise_for_error(result)
    return result.value


@router.post(
    "/totals",
    response_model=TotalsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def calculate_invoice_totals(
    request: CalculateTotalsRequestSchema,
    context: SessionContext = Depends(get_session_context),
):
    """
    Live summary of the invoice form.

    Nothing is stored. Blank quantities and prices count as 0.

    **Example response:**
    ```json
    {
      "item_amounts": ["100.00", "25.00"],
      "subtotal": "125.00",
      "tax_amount": "12.50",
      "total": "137.50",
      "subtotal_display": "$125.00",
      "tax_amount_display": "$12.50",
      "total_display": "$137.50"
    }
    ```
    """
    command = CalculateTotalsCommandDTO(
        items=to_line_items(request.items),
        tax_rate=request.tax_rate,
    )
    result = await CalculateTotals().execute(command)
    raise_for_error(result)
    return result.value


@router.post(
    "",
    response_model=InvoiceDetailResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Missing required fields or failed write",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "Please fill in all required fields"
                        }
                    }
                }
            }
        }
    }
)
async def create_invoice(
    http_request: Request,
    request: CreateInvoiceRequestSchema,
    context: SessionContext = Depends(get_session_context),
    session: AsyncSession = Depends(get_session),
):
    """
    Create an invoice with its line items.

    The invoice number and totals are generated on the server. The invoice
    and its items are stored in one transaction.

    **Returns:**
    - 201: Invoice created
    - 400: VALIDATION_ERROR or PERSISTENCE_ERROR
    - 401: Not signed in
    """
    command = CreateInvoiceCommandDTO(
        user_id=context.user_id,
        client_name=request.client_name,
        client_email=request.client_email,
        client_address=request.client_address,
        issue_date=request.issue_date,
        due_date=request.due_date,
        tax_rate=request.tax_rate,
        notes=request.notes,
        items=to_line_items(request.items),
    )

    use_case = CreateInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        invoice_item_repo=SqlAlchemyInvoiceItemRepository(session),
        strict=http_request.app.state.config.STRICT_LINE_ITEM_VALIDATION,
    )
    result = await use_case.execute(command)

    raise_for_error(result)
    return result.value


@router.get(
    "",
    response_model=ListInvoicesResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_invoices(
    status_filter: Optional[str] = Query(default=None, alias="status", description="draft, sent, paid or overdue"),
    limit: int = Query(default=50, ge=1, le=200, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Page offset"),
    context: SessionContext = Depends(get_session_context),
    session: AsyncSession = Depends(get_session),
):
    """
    Invoice history of the signed-in user, newest first.

    **Query parameters:**
    - `status` (optional): Filter by status
    - `limit` (optional): Page size, default 50
    - `offset` (optional): Page offset, default 0
    """
    use_case = ListInvoices(SqlAlchemyInvoiceRepository(session))
    result = await use_case.execute(
        user_id=context.user_id,
        status=status_filter,
        limit=limit,
        offset=offset,
    )

    raise_for_error(result)
    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceDetailResponseDTO,
    status_code=status.HTTP_200_OK,
    responses=NOT_FOUND_RESPONSE,
)
async def get_invoice(
    invoice_id: int,
    context: SessionContext = Depends(get_session_context),
    session: AsyncSession = Depends(get_session),
):
    """Invoice with its line items"""
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
    )
    result = await use_case.execute(context.user_id, invoice_id)

    raise_for_error(result)
    return result.value


@router.patch(
    "/{invoice_id}/status",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses=NOT_FOUND_RESPONSE,
)
async def update_invoice_status(
    invoice_id: int,
    request: UpdateInvoiceStatusRequestSchema,
    context: SessionContext = Depends(get_session_context),
    session: AsyncSession = Depends(get_session),
):
    """
    Change the status label of an invoice.

    Any of draft, sent, paid and overdue may follow any other.
    """
    command = UpdateInvoiceStatusCommandDTO(
        user_id=context.user_id,
        invoice_id=invoice_id,
        status=request.status,
    )
    use_case = UpdateInvoiceStatus(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
    )
    result = await use_case.execute(command)

    raise_for_error(result)
    return result.value


@router.delete(
    "/{invoice_id}",
    response_model=DeleteInvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses=NOT_FOUND_RESPONSE,
)
async def delete_invoice(
    invoice_id: int,
    context: SessionContext = Depends(get_session_context),
    session: AsyncSession = Depends(get_session),
):
    """
    Delete an invoice together with its line items.

    The caller is expected to confirm before sending this request.
    """
    use_case = DeleteInvoice(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyInvoiceRepository(session),
    )
    result = await use_case.execute(context.user_id, invoice_id)

    raise_for_error(result)
    return result.value


@router.get(
    "/{invoice_id}/print",
    response_class=HTMLResponse,
    responses={
        200: {
            "content": {"text/html": {}},
            "description": "Printable invoice document"
        },
        **NOT_FOUND_RESPONSE,
    }
)
async def print_invoice(
    invoice_id: int,
    context: SessionContext = Depends(get_session_context),
    session: AsyncSession = Depends(get_session),
):
    """
    Printable invoice document.

    Open in a browser and use its print dialog to print or save as PDF.
    """
    use_case = RenderInvoiceDocument(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
        Jinja2InvoiceDocumentRenderer(),
    )
    result = await use_case.execute(context.user_id, invoice_id)

    raise_for_error(result)
    return HTMLResponse(content=result.value.html)
