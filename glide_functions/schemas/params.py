# -----------------------------------------------------------------------------
# glide_functions/schemas/params.py — Host parameter unwrapping
# -----------------------------------------------------------------------------
# The host hands every positional parameter over as {"value": ...}. A bare
# primitive in its place is accepted too. Missing, null and unparseable
# values fall back to the caller's default.
# -----------------------------------------------------------------------------

from typing import Annotated, Any

from pydantic import BeforeValidator


def unwrap(param: Any) -> Any:
    if isinstance(param, dict) and set(param) <= {"value", "type"} and "value" in param:
        return param["value"]
    return param


Param = Annotated[Any, BeforeValidator(unwrap)]


def as_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def as_float(value: Any, default: float) -> float:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and value.strip():
        try:
            return float(value.strip())
        except ValueError:
            return default
    return default


def as_int(value: Any, default: int) -> int:
    number = as_float(value, float(default))
    if number != number or number in (float("inf"), float("-inf")):
        return default
    return int(number)
