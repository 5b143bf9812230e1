"""
Calculate Totals Use Case

Computes the live summary of an invoice form without storing anything.
"""
from libs.result import Result, Return
from src.domain.totals import calculate_totals, format_currency
from .dtos import CalculateTotalsCommandDTO, TotalsResponseDTO


class CalculateTotals:
    """
    Use case: Totals preview

    Read-only. Blank quantities and prices were already read as zero when
    the command was parsed.
    """

    async def execute(self, command: CalculateTotalsCommandDTO) -> Result[TotalsResponseDTO]:
        totals = calculate_totals(command.items, command.tax_rate)

        return Return.ok(
            TotalsResponseDTO(
                item_amounts=[item.amount for item in command.items],
                subtotal=totals.subtotal,
                tax_amount=totals.tax_amount,
                total=totals.total,
                subtotal_display=format_currency(totals.subtotal),
                tax_amount_display=format_currency(totals.tax_amount),
                total_display=format_currency(totals.total),
            )
        )
