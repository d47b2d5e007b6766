# -----------------------------------------------------------------------------
# glide_functions/core/errors.py — Function-level error taxonomy
# -----------------------------------------------------------------------------
# Every error carries the prefix the host sees once the result is flattened
# into a string ("Error:", "Error (<model>):", "Blocked:", ...).
# -----------------------------------------------------------------------------


class FunctionError(ValueError):
    prefix = "Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def flatten(self) -> str:
        return f"{self.prefix}: {self.message}"


class MissingCredentialError(FunctionError):
    pass


class MissingInputError(FunctionError):
    pass


class AttachmentFetchError(FunctionError):
    pass


class UpstreamError(FunctionError):
    """Failure attributed to the model that was called."""

    def __init__(self, model: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.model = model
        self.status_code = status_code

    @property
    def prefix(self) -> str:  # type: ignore[override]
        return f"Error ({self.model})"


class UpstreamHTTPError(UpstreamError):
    pass


class UpstreamVendorError(UpstreamError):
    pass


class MalformedResponseError(UpstreamError):
    pass


class PromptBlockedError(FunctionError):
    prefix = "Blocked"


class ModelListError(FunctionError):
    prefix = "Error listing models"


class ModelListFetchError(FunctionError):
    prefix = "Error fetching model list"


class InvalidCoordinatesError(FunctionError):
    pass


def flatten_exception(exc: Exception) -> str:
    if isinstance(exc, FunctionError):
        return exc.flatten()
    return f"System Error: {str(exc) or type(exc).__name__}"
