"""Product tools."""
from moniewave.tools.descriptor import endpoint, tool
from moniewave.tools.schema import boolean, date_range, integer, obj, pagination, string

TOOLS = [
    tool(
        "product_create",
        "Create a new product on your Paystack integration",
        string("name", "Product name", required=True),
        string("description", "Product description", required=True),
        integer("price", "Price in kobo", required=True, minimum=1),
        string("currency", "Currency code", required=True),
        boolean("unlimited", "Whether the product has unlimited stock"),
        integer("quantity", "Number of units in stock", minimum=0),
        obj("metadata", "Additional key/value data stored on the product"),
        invoke=endpoint("POST", "/product"),
    ),
    tool(
        "product_list",
        "List products available on your Paystack integration",
        *pagination("products"),
        *date_range(),
        invoke=endpoint("GET", "/product"),
    ),
    tool(
        "product_get",
        "Get details of a product by ID",
        integer("id", "Product ID", required=True, minimum=1),
        invoke=endpoint("GET", "/product/{id}"),
    ),
    tool(
        "product_update",
        "Update an existing product by ID",
        integer("id", "Product ID", required=True, minimum=1),
        string("name", "Product name"),
        string("description", "Product description"),
        integer("price", "Price in kobo", minimum=1),
        string("currency", "Currency code"),
        boolean("unlimited", "Whether the product has unlimited stock"),
        integer("quantity", "Number of units in stock", minimum=0),
        obj("metadata", "Additional key/value data stored on the product"),
        invoke=endpoint("PUT", "/product/{id}"),
    ),
]
