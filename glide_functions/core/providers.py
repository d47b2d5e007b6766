from enum import Enum

from glide_functions.core.config import Settings

LIST_MODELS_COMMANDS = ("list", "help", "info")


class Provider(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"


PROVIDERS = {
    Provider.OPENAI: {
        "label": "OpenAI",
        "path": "/v1/chat/completions",
        "prefixes": (),
    },
    Provider.ANTHROPIC: {
        "label": "Anthropic",
        "path": "/v1/messages",
        "prefixes": ("claude", "anthropic"),
    },
    Provider.GEMINI: {
        "label": "Gemini",
        "path": "/v1beta/models",
        "prefixes": ("gemini",),
    },
}


def classify_provider(model: str | None) -> Provider:
    m = (model or "").strip().lower()
    for provider in (Provider.ANTHROPIC, Provider.GEMINI):
        if m.startswith(PROVIDERS[provider]["prefixes"]):
            return provider
    return Provider.OPENAI


def is_list_models_command(model: str | None) -> bool:
    return (model or "").strip().lower() in LIST_MODELS_COMMANDS


def default_model(provider: Provider, settings: Settings) -> str:
    if provider == Provider.ANTHROPIC:
        return settings.anthropic_default_model
    if provider == Provider.GEMINI:
        return settings.gemini_default_model
    return settings.openai_default_model


def provider_label(provider: Provider) -> str:
    return PROVIDERS[provider]["label"]
