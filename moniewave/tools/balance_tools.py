"""Integration balance tools."""
from moniewave.tools.descriptor import check_balance, endpoint, tool
from moniewave.tools.schema import date_range, pagination

TOOLS = [
    tool(
        "balance_check",
        "Check the available balance on your Paystack integration",
        invoke=check_balance,
    ),
    tool(
        "balance_ledger",
        "Fetch all pay-ins and pay-outs that occurred on your Paystack integration",
        *pagination("ledger entries"),
        *date_range(),
        invoke=endpoint("GET", "/balance/ledger"),
    ),
]
