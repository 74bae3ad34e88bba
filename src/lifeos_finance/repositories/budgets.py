"""Budget repository."""

from typing import Optional

from lifeos_finance.database.mappers import QueryResult, budget_from_document, budget_to_document
from lifeos_finance.database.models import Collections
from lifeos_finance.database.query import EQ
from lifeos_finance.domain.entities import Budget, BudgetPeriod
from lifeos_finance.domain.errors import require_value
from lifeos_finance.repositories.base import DocumentRepository


class BudgetRepository(DocumentRepository[Budget]):
    """Repository for budgets.

    A period is identified by its period key, so budgets are looked up by
    key rather than by start and end dates.
    """

    collection = Collections.BUDGETS
    _to_document = staticmethod(budget_to_document)
    _from_document = staticmethod(budget_from_document)

    def get_by_period_key(self, period_key: str) -> QueryResult:
        """List the budgets of one period sorted by category.

        Raises:
            ValidationError: If period_key is missing or blank
        """
        require_value(period_key, "period key")
        return self._list(self._query().where("periodKey", EQ, period_key).order_by("categoryKey"))

    def get_by_period(self, period: BudgetPeriod) -> QueryResult:
        """List the budgets of period sorted by category."""
        require_value(period, "period")
        return self.get_by_period_key(period.period_key)

    def get_by_category_and_period(self, category_id: str, period: BudgetPeriod) -> Optional[Budget]:
        """Get the budget of one category in one period.

        Returns:
            The budget, or None if the category has no budget in period
        """
        require_value(category_id, "category id")
        require_value(period, "period")
        require_value(period.period_key, "period key")
        q = (
            self._query()
            .where("periodKey", EQ, period.period_key)
            .where("categoryKey", EQ, category_id)
            .order_by("createdAt")
        )
        return self._first(q)
