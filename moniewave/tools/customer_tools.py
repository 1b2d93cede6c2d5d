"""Customer tools."""
from moniewave.tools.descriptor import endpoint, tool
from moniewave.tools.schema import date_range, obj, pagination, string

TOOLS = [
    tool(
        "customer_create",
        "Create a new customer",
        string("email", "Customer email address", required=True),
        string("first_name", "Customer first name"),
        string("last_name", "Customer last name"),
        string("phone", "Customer phone number"),
        obj("metadata", "Additional key/value data stored on the customer"),
        invoke=endpoint("POST", "/customer"),
    ),
    tool(
        "customer_list",
        "List customers available on your integration",
        *pagination("customers"),
        *date_range(),
        invoke=endpoint("GET", "/customer"),
    ),
    tool(
        "customer_get",
        "Get details of a customer by email or customer code",
        string("email_or_code", "Customer email or customer code (CUS_xxx)", required=True),
        invoke=endpoint("GET", "/customer/{email_or_code}"),
    ),
    tool(
        "customer_update",
        "Update a customer's details",
        string("code", "Customer code (CUS_xxx)", required=True),
        string("first_name", "Customer first name"),
        string("last_name", "Customer last name"),
        string("phone", "Customer phone number"),
        obj("metadata", "Additional key/value data stored on the customer"),
        invoke=endpoint("PUT", "/customer/{code}"),
    ),
    tool(
        "customer_validate",
        "Validate a customer's identity against a bank account",
        string("code", "Customer code (CUS_xxx)", required=True),
        string("country", "Two-letter country code, e.g. NG", required=True),
        string("type", "Identification type", required=True, choices=("bank_account",)),
        string("account_number", "Customer bank account number", required=True),
        string("bvn", "Customer Bank Verification Number", required=True),
        string("bank_code", "Bank code", required=True),
        string("first_name", "Customer first name", required=True),
        string("last_name", "Customer last name", required=True),
        string("middle_name", "Customer middle name"),
        invoke=endpoint("POST", "/customer/{code}/identification"),
    ),
    tool(
        "customer_set_risk_action",
        "Whitelist or blacklist a customer",
        string("customer", "Customer code or email", required=True),
        string(
            "risk_action",
            "allow to whitelist, deny to blacklist, default to reset",
            choices=("default", "allow", "deny"),
        ),
        invoke=endpoint("POST", "/customer/set_risk_action"),
    ),
    tool(
        "customer_deactivate_authorization",
        "Deactivate a payment authorization when a card needs to be forgotten",
        string("authorization_code", "Authorization code to deactivate", required=True),
        invoke=endpoint("POST", "/customer/deactivate_authorization"),
    ),
]
