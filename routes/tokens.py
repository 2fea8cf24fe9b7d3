"""Token conversion route."""

import math
from typing import Any, Dict

from fastapi import APIRouter, Query  # type: ignore

from domain.value_objects.price import Price
from services.domain.token_calculator import convert
from shared.exceptions import InvalidArgumentError

router = APIRouter(prefix="/tokens", tags=["tokens"])


@router.get("/calculate")
def calculate_tokens(
    price: str = Query(..., description="Restaurant price in euros, e.g. 12.50 or 12,50"),
) -> Dict[str, Any]:
    parsed = Price.from_string(price)
    # The response carries JSON numbers
    if not math.isfinite(float(parsed.value)):
        raise InvalidArgumentError(f"Price out of range: {price!r}", value=price)
    result = convert(parsed)
    return {
        "price": float(parsed.value),
        "price_display": parsed.to_euro_string(),
        **result.to_dict(),
    }
