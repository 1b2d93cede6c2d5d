"""Transfer and transfer recipient tools."""
from moniewave.tools.descriptor import endpoint, tool
from moniewave.tools.schema import date_range, integer, obj, pagination, string

TOOLS = [
    tool(
        "transfer_recipient_create",
        "Create a transfer recipient",
        string(
            "type",
            "Recipient type",
            required=True,
            choices=("nuban", "ghipss", "mobile_money", "basa", "authorization"),
        ),
        string("name", "Recipient name", required=True),
        string("account_number", "Account number", required=True),
        string("bank_code", "Bank code", required=True),
        string("currency", "Currency code", default="NGN"),
        string("description", "Note about the recipient"),
        obj("metadata", "Additional key/value data stored on the recipient"),
        invoke=endpoint("POST", "/transferrecipient"),
    ),
    tool(
        "transfer_recipient_list",
        "List transfer recipients",
        *pagination("recipients"),
        *date_range(),
        invoke=endpoint("GET", "/transferrecipient"),
    ),
    tool(
        "transfer_recipient_get",
        "Get a transfer recipient by ID or recipient code",
        string("id_or_code", "Recipient ID or code (RCP_xxx)", required=True),
        invoke=endpoint("GET", "/transferrecipient/{id_or_code}"),
    ),
    tool(
        "transfer_initiate",
        "Send money to a transfer recipient",
        integer("amount", "Amount in kobo", required=True, minimum=1),
        string("recipient", "Recipient code (RCP_xxx)", required=True),
        string("source", "Where the money comes from", default="balance", choices=("balance",)),
        string("reason", "Reason for the transfer"),
        string("currency", "Currency code"),
        string("reference", "Unique transfer reference"),
        invoke=endpoint("POST", "/transfer"),
    ),
    tool(
        "transfer_list",
        "List transfers",
        *pagination("transfers"),
        string("customer", "Filter by customer ID"),
        *date_range(),
        invoke=endpoint("GET", "/transfer"),
    ),
    tool(
        "transfer_verify",
        "Verify the status of a transfer by reference",
        string("reference", "Transfer reference", required=True),
        invoke=endpoint("GET", "/transfer/verify/{reference}"),
    ),
    tool(
        "transfer_resend_otp",
        "Generate a new OTP and send it to the customer for transfer verification",
        string("transfer_code", "Transfer code (TRF_xxx)", required=True),
        string("reason", "Why the OTP is being resent", required=True, choices=("resend_otp", "transfer")),
        invoke=endpoint("POST", "/transfer/resend_otp"),
    ),
    tool(
        "transfer_disable_otp",
        "Start disabling the OTP requirement for transfers",
        invoke=endpoint("POST", "/transfer/disable_otp"),
    ),
    tool(
        "transfer_disable_otp_finalize",
        "Finalize the request to disable OTP on transfers",
        string("otp", "OTP sent to the business phone", required=True),
        invoke=endpoint("POST", "/transfer/disable_otp_finalize"),
    ),
    tool(
        "transfer_enable_otp",
        "Enable the OTP requirement for transfers",
        invoke=endpoint("POST", "/transfer/enable_otp"),
    ),
]
