from pydantic import BaseModel


class FunctionResult(BaseModel):
    """Outcome of one function call.

    The host only ever reads ``value``: on failure it holds the error string,
    so callers that ignore ``ok`` still get the flattened behaviour.
    """

    ok: bool
    value: str | float
    error: str | None = None

    @classmethod
    def success(cls, value: str | float) -> "FunctionResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "FunctionResult":
        return cls(ok=False, value=error, error=error)

    def as_text(self) -> str:
        return str(self.value)
