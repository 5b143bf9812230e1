"""
New Invoice Draft Use Case

Provides the default values an empty invoice form starts from, and is
reset to after a successful creation.
"""
from datetime import date
from typing import Callable
from libs.result import Result, Return
from .dtos import InvoiceDraftDTO


class NewInvoiceDraft:

    def __init__(self, today: Callable[[], date] = date.today):
        self.today = today

    async def execute(self) -> Result[InvoiceDraftDTO]:
        return Return.ok(InvoiceDraftDTO(issue_date=self.today()))
