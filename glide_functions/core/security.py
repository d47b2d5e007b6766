from glide_functions.core.errors import MissingCredentialError, MissingInputError


def require_api_key(api_key: str | None) -> str:
    if not api_key or not api_key.strip():
        raise MissingCredentialError("API key is required")
    return api_key.strip()


def require_prompt(prompt: str | None) -> str:
    if not prompt or not prompt.strip():
        raise MissingInputError("Prompt is required")
    return prompt


def redact_key(url: str) -> str:
    """Drop the query string before a URL is logged."""
    return url.split("?", 1)[0]
