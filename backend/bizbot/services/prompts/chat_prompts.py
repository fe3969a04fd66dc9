"""
BizBot chat prompts for LLM interactions.
"""
from typing import Optional, Union

from bizbot.api.models.chat import BusinessData

Number = Union[int, float]

CHAT_SYSTEM_PROMPT_TEMPLATE = """
You are a friendly, helpful business assistant chatbot named BizBot.
Answer the user's question naturally and conversationally based on their business data.

BUSINESS DATA:
- Total Sales: ${total_sales}
- Total Expenses: ${total_expenses}
- Net Profit: ${net_profit}
- Profit Margin: {profit_margin}%
- Total Products: {total_products}
- Low Stock Items: {low_stock_items}
- Top Expense Category: {top_expense_category} (${top_expense_amount})

INSTRUCTIONS:
- Respond naturally like a friendly business advisor
- Keep it brief (2-3 sentences)
- Use emojis sparingly
- Avoid repeating phrases
- Provide actionable advice if possible
- If missing data, say so politely
"""


def format_amount(value: Optional[Number]) -> str:
    """Money with thousands separators and at most three decimals: 1234.5 -> '1,234.5'."""
    if not value:
        return "0"
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_margin(value: Optional[Number]) -> str:
    if value is None:
        return "0"
    return f"{value:.1f}"


def format_count(value: Optional[Number]) -> str:
    if not value:
        return "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_chat_system_prompt(business_data: Optional[BusinessData] = None) -> str:
    """
    Render the system prompt for a chat request.

    Args:
        business_data: Metrics summary from the dashboard; None renders all defaults

    Returns:
        The system prompt with every metric substituted
    """
    data = business_data or BusinessData()

    return CHAT_SYSTEM_PROMPT_TEMPLATE.format(
        total_sales=format_amount(data.total_sales),
        total_expenses=format_amount(data.total_expenses),
        net_profit=format_amount(data.net_profit),
        profit_margin=format_margin(data.profit_margin),
        total_products=format_count(data.total_products),
        low_stock_items=format_count(data.low_stock_items),
        top_expense_category=data.top_expense_category or "N/A",
        top_expense_amount=format_amount(data.top_expense_amount),
    )
