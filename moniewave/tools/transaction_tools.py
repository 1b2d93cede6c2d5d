"""Transaction tools. Amounts are in the lowest currency unit (kobo for NGN)."""
from moniewave.tools.descriptor import endpoint, tool
from moniewave.tools.schema import array, boolean, date_range, integer, obj, pagination, string

TOOLS = [
    tool(
        "transaction_initialize",
        "Initialize a transaction to accept payment on Paystack",
        string("email", "Customer email", required=True),
        integer("amount", "Amount in kobo (NGN) or lowest currency unit", required=True, minimum=1),
        string("reference", "Unique transaction reference"),
        string("callback_url", "URL to redirect to after payment"),
        string("currency", "Currency (NGN, USD, GHS, ZAR, KES)"),
        string("plan", "Plan code to subscribe the customer to"),
        array("channels", "Payment channels to offer, e.g. [\"card\", \"bank\"]"),
        obj("metadata", "Additional key/value data stored on the transaction"),
        invoke=endpoint("POST", "/transaction/initialize"),
    ),
    tool(
        "transaction_verify",
        "Verify a transaction's status using the transaction reference",
        string("reference", "Transaction reference", required=True),
        invoke=endpoint("GET", "/transaction/verify/{reference}"),
    ),
    tool(
        "transaction_list",
        "List transactions with pagination and filtering options",
        *pagination("transactions"),
        string("customer", "Filter by customer ID"),
        string("status", "Filter by status", choices=("failed", "success", "abandoned")),
        integer("amount", "Filter by amount in kobo"),
        *date_range(),
        invoke=endpoint("GET", "/transaction"),
    ),
    tool(
        "transaction_fetch",
        "Get details of a transaction by ID",
        integer("id", "Transaction ID", required=True, minimum=1),
        invoke=endpoint("GET", "/transaction/{id}"),
    ),
    tool(
        "transaction_charge_authorization",
        "Charge a previously authorized card",
        string("email", "Customer email", required=True),
        integer("amount", "Amount in kobo", required=True, minimum=1),
        string("authorization_code", "Authorization code from a previous transaction", required=True),
        string("reference", "Unique transaction reference"),
        string("currency", "Currency code"),
        obj("metadata", "Additional key/value data stored on the transaction"),
        invoke=endpoint("POST", "/transaction/charge_authorization"),
    ),
    tool(
        "transaction_partial_debit",
        "Charge a partial amount from a previously authorized card",
        string("authorization_code", "Authorization code from a previous transaction", required=True),
        string("currency", "Currency code", required=True),
        integer("amount", "Amount in kobo", required=True, minimum=1),
        string("email", "Customer email", required=True),
        string("reference", "Unique transaction reference"),
        integer("at_least", "Minimum amount to charge in kobo", minimum=1),
        invoke=endpoint("POST", "/transaction/partial_debit"),
    ),
    tool(
        "transaction_totals",
        "Get the total amount received on your account",
        *pagination("totals"),
        *date_range(),
        invoke=endpoint("GET", "/transaction/totals"),
    ),
    tool(
        "transaction_export",
        "Export a list of transactions carried out on your integration",
        *pagination("transactions"),
        *date_range(),
        string("customer", "Filter by customer ID"),
        string("status", "Filter by status", choices=("failed", "success", "abandoned")),
        string("currency", "Filter by currency"),
        boolean("settled", "Only settled (true) or pending (false) transactions"),
        invoke=endpoint("GET", "/transaction/export"),
    ),
]
