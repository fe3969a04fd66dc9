"""
Request and response models for the BizBot chat endpoint.
"""
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]


class BusinessData(BaseModel):
    """Business metrics summary computed by the dashboard.

    Every field is optional; the prompt substitutes a default for anything missing.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    total_sales: Optional[Number] = Field(default=None, alias="totalSales")
    total_expenses: Optional[Number] = Field(default=None, alias="totalExpenses")
    net_profit: Optional[Number] = Field(default=None, alias="netProfit")
    profit_margin: Optional[Number] = Field(default=None, alias="profitMargin")
    total_products: Optional[Number] = Field(default=None, alias="totalProducts")
    low_stock_items: Optional[Number] = Field(default=None, alias="lowStockItems")
    top_expense_category: Optional[str] = Field(default=None, alias="topExpenseCategory")
    top_expense_amount: Optional[Number] = Field(default=None, alias="topExpenseAmount")


class ChatRequest(BaseModel):
    """Payload for the chatbot.

    - message: the user's question (checked for emptiness by the controller)
    - businessData: metrics summary, may be omitted
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    message: Optional[str] = None
    business_data: Optional[BusinessData] = Field(default=None, alias="businessData")


class ChatResponse(BaseModel):
    """Successful chatbot reply."""

    success: bool = True
    response: str
