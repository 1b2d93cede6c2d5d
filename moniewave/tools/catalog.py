"""The full Paystack tool catalog, in registration order."""
from typing import List

from moniewave.tools import (
    balance_tools,
    billing_tools,
    customer_tools,
    misc_tools,
    payment_request_tools,
    product_tools,
    transaction_tools,
    transfer_tools,
)
from moniewave.tools.descriptor import ToolDescriptor

TOOL_MODULES = (
    balance_tools,
    customer_tools,
    transaction_tools,
    transfer_tools,
    billing_tools,
    misc_tools,
    product_tools,
    payment_request_tools,
)


def all_tools() -> List[ToolDescriptor]:
    return [descriptor for module in TOOL_MODULES for descriptor in module.TOOLS]
