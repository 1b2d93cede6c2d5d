"""Reference data: banks, account resolution, countries, states."""
from moniewave.tools.descriptor import endpoint, tool
from moniewave.tools.schema import boolean, integer, string

TOOLS = [
    tool(
        "bank_list",
        "Get a list of all banks supported by Paystack",
        string("country", "Country to list banks for", choices=("ghana", "kenya", "nigeria", "south africa")),
        string("currency", "Currency the banks support"),
        string("type", "Financial channel, e.g. nuban, mobile_money"),
        boolean("pay_with_bank", "Only banks that support Pay with Bank"),
        integer("per_page", "Number of banks per page", minimum=1, wire_name="perPage"),
        invoke=endpoint("GET", "/bank"),
    ),
    tool(
        "bank_resolve_account",
        "Confirm the account name behind an account number",
        string("account_number", "Account number", required=True),
        string("bank_code", "Bank code", required=True),
        invoke=endpoint("GET", "/bank/resolve"),
    ),
    tool(
        "country_list",
        "Get a list of countries that Paystack currently supports",
        invoke=endpoint("GET", "/country"),
    ),
    tool(
        "state_list",
        "Get a list of states for a country for address verification",
        string("country", "Two-letter country code, e.g. CA", required=True),
        invoke=endpoint("GET", "/address_verification/states"),
    ),
]
