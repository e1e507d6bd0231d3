"""Cart lines as submitted by the buyer at checkout."""

import json

from protean.fields import Identifier, Integer

from cargo.domain import cargo


@cargo.value_object
class CartLine:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


def cart_lines_from_json(raw: str | None) -> list[CartLine]:
    """Rebuild cart lines carried in a command's JSON payload."""
    if not raw:
        return []
    return [CartLine(product_id=line["product_id"], quantity=line["quantity"]) for line in json.loads(raw)]


def cart_lines_to_json(lines) -> str:
    return json.dumps([{"product_id": str(line["product_id"]), "quantity": int(line["quantity"])} for line in lines])
