"""Payment requests (Paystack invoices)."""
from moniewave.tools.descriptor import endpoint, tool
from moniewave.tools.schema import array, boolean, date_range, integer, pagination, string

TOOLS = [
    tool(
        "payment_request_create",
        "Send an invoice (payment request) to a customer",
        string("customer", "Customer ID or code", required=True),
        integer("amount", "Amount in kobo", required=True, minimum=1),
        string("description", "What the invoice is for"),
        array("line_items", "Items as objects with name, amount and quantity"),
        array("tax", "Taxes as objects with name and amount"),
        string("due_date", "ISO 8601 due date"),
        boolean("send_notification", "Email the invoice to the customer"),
        boolean("draft", "Save as draft instead of sending"),
        boolean("has_invoice", "Generate an invoice number"),
        integer("invoice_number", "Override the auto-incremented invoice number", minimum=1),
        string("currency", "Currency code"),
        invoke=endpoint("POST", "/paymentrequest"),
    ),
    tool(
        "payment_request_list",
        "List payment requests",
        *pagination("payment requests"),
        string("customer", "Filter by customer ID"),
        string("status", "Filter by status", choices=("draft", "pending", "success", "failed")),
        string("currency", "Filter by currency"),
        *date_range(),
        invoke=endpoint("GET", "/paymentrequest"),
    ),
    tool(
        "payment_request_get",
        "Get a payment request by ID or request code",
        string("id_or_code", "Payment request ID or code (PRQ_xxx)", required=True),
        invoke=endpoint("GET", "/paymentrequest/{id_or_code}"),
    ),
    tool(
        "payment_request_verify",
        "Verify the status of a payment request",
        string("code", "Payment request code (PRQ_xxx)", required=True),
        invoke=endpoint("GET", "/paymentrequest/verify/{code}"),
    ),
]
