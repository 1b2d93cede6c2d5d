"""Plans, subscriptions and subaccounts (read-only listings)."""
from moniewave.tools.descriptor import endpoint, tool
from moniewave.tools.schema import integer, pagination, string

TOOLS = [
    tool(
        "plan_list",
        "List subscription plans",
        *pagination("plans"),
        string("status", "Filter by plan status"),
        string("interval", "Filter by interval", choices=("daily", "weekly", "monthly", "quarterly", "biannually", "annually")),
        integer("amount", "Filter by amount in kobo"),
        invoke=endpoint("GET", "/plan"),
    ),
    tool(
        "subscription_list",
        "List subscriptions",
        *pagination("subscriptions"),
        integer("customer", "Filter by customer ID"),
        string("plan", "Filter by plan ID or code"),
        invoke=endpoint("GET", "/subscription"),
    ),
    tool(
        "subaccount_list",
        "List subaccounts",
        *pagination("subaccounts"),
        invoke=endpoint("GET", "/subaccount"),
    ),
]
