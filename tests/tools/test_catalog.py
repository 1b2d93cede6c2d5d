import string

from moniewave.tools.catalog import all_tools

EXPECTED_TOOLS = {
    "balance_check",
    "balance_ledger",
    "customer_create",
    "customer_list",
    "customer_get",
    "customer_update",
    "customer_validate",
    "customer_set_risk_action",
    "customer_deactivate_authorization",
    "transaction_initialize",
    "transaction_verify",
    "transaction_list",
    "transaction_fetch",
    "transaction_charge_authorization",
    "transaction_partial_debit",
    "transaction_totals",
    "transaction_export",
    "transfer_recipient_create",
    "transfer_recipient_list",
    "transfer_recipient_get",
    "transfer_initiate",
    "transfer_list",
    "transfer_verify",
    "transfer_resend_otp",
    "transfer_disable_otp",
    "transfer_disable_otp_finalize",
    "transfer_enable_otp",
    "plan_list",
    "subscription_list",
    "subaccount_list",
    "bank_list",
    "bank_resolve_account",
    "country_list",
    "state_list",
    "product_create",
    "product_list",
    "product_get",
    "product_update",
    "payment_request_create",
    "payment_request_list",
    "payment_request_get",
    "payment_request_verify",
}


def test_catalog_names_are_unique_and_complete():
    names = [descriptor.name for descriptor in all_tools()]

    assert len(names) == len(set(names))
    assert set(names) == EXPECTED_TOOLS


def test_schemas_are_well_formed():
    for descriptor in all_tools():
        schema = descriptor.input_schema
        assert schema["type"] == "object"
        assert set(schema["required"]) <= set(schema["properties"])
        assert descriptor.description


def test_path_placeholders_are_required_parameters():
    for descriptor in all_tools():
        closure = descriptor.invoke.__closure__ or ()
        paths = [cell.cell_contents for cell in closure if isinstance(cell.cell_contents, str) and "/" in cell.cell_contents]
        required = {p.key for p in descriptor.params if p.required}
        for path in paths:
            for _, field, _, _ in string.Formatter().parse(path):
                if field:
                    assert field in required, f"{descriptor.name}: {field}"


def test_transfer_source_defaults_to_balance():
    transfer = next(d for d in all_tools() if d.name == "transfer_initiate")
    source = transfer.input_schema["properties"]["source"]

    assert source["default"] == "balance"
    assert source["enum"] == ["balance"]
