"""Summarization providers and provider selection.

Each backend is a ``SummarizationProvider`` subclass registered in a
static table keyed by ``Provider``.  Every variant exposes the same
``summarize(context, request)`` call, so the pipeline never needs to
know which backend it is talking to.

Usage::

    from gitstory.llm.providers import create_provider, select_provider
    from gitstory.llm.credentials import EnvironmentCredentialResolver

    resolver = EnvironmentCredentialResolver()
    provider = create_provider(select_provider(None, resolver), resolver=resolver)
    response = provider.summarize(CallContext(), request)
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from ..core.models import Provider, SummaryRequest, SummaryResponse
from ..errors import (
    NoProviderConfiguredError,
    ProviderCallError,
    ProviderConfigError,
    ProviderNotImplementedError,
    UnsupportedProviderError,
)
from .credentials import CredentialResolver, env_var_names
from .platforms import max_tokens_for, system_prompt
from .prompt import build_prompt

logger = logging.getLogger("gitstory.llm.providers")

# ── Defaults ──────────────────────────────────────────────────────────────

DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT = 60.0

# Auto-detection order; the first provider with a credential wins.
PROVIDER_PRIORITY: tuple[Provider, ...] = (Provider.OPENAI, Provider.GEMINI, Provider.CLAUDE)

_DEFAULT_MODELS: dict[Provider, str] = {
    Provider.OPENAI: "gpt-4o-mini",
    Provider.GEMINI: "gemini-2.5-flash-lite",
    Provider.CLAUDE: "claude-3",
}

SUPPORTED_PROVIDERS = [p.value for p in PROVIDER_PRIORITY]


@dataclass
class CallContext:
    """Per-call controls: cancellation signal and request timeout.

    ``cancel_event`` is checked right before the SDK call and right after
    it returns.  It does not interrupt a request already in flight; that
    request is bounded only by ``timeout``, which is passed to the SDK.
    """

    cancel_event: threading.Event | None = None
    timeout: float | None = DEFAULT_TIMEOUT

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()


# ══════════════════════════════════════════════════════════════════════════
# Base class
# ══════════════════════════════════════════════════════════════════════════


class SummarizationProvider(ABC):
    """Abstract base for all summarization backends."""

    provider_id: ClassVar[Provider]

    def __init__(
        self,
        *,
        api_key: str,
        model: str | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> None:
        self.api_key = api_key
        self.model = model or _DEFAULT_MODELS[self.provider_id]
        self.temperature = temperature

    # ── Public API ────────────────────────────────────────────────────

    def summarize(
        self, context: CallContext | None, request: SummaryRequest,
    ) -> SummaryResponse:
        """Generate a summary for *request*.  One attempt, no retry."""
        context = context or CallContext()
        name = self.provider_id.value
        system = system_prompt(request.platform)
        user = build_prompt(request)
        max_tokens = max_tokens_for(request.platform)

        if context.cancelled:
            raise ProviderCallError(name, "cancelled before the request was sent")
        logger.debug(
            "LLM call: provider=%s model=%s platform=%s system=%d chars, user=%d chars",
            name, self.model, request.platform.value, len(system), len(user),
        )
        try:
            text = self._call(system, user, max_tokens=max_tokens, timeout=context.timeout)
        except ProviderCallError:
            raise
        except Exception as exc:
            raise ProviderCallError(name, f"failed to generate summary: {exc}") from exc
        if context.cancelled:
            raise ProviderCallError(name, "cancelled while waiting for the response")

        summary = (text or "").strip()
        if not summary:
            raise ProviderCallError(name, "empty response from the API")
        logger.debug("LLM response: %d chars", len(summary))
        return SummaryResponse(summary=summary, platform=request.platform)

    # ── Subclass hooks ────────────────────────────────────────────────

    @abstractmethod
    def _call(
        self, system: str, user: str, *, max_tokens: int, timeout: float | None,
    ) -> str:
        """Provider-specific completion → plain text."""


# ══════════════════════════════════════════════════════════════════════════
# OpenAI
# ══════════════════════════════════════════════════════════════════════════


class OpenAIProvider(SummarizationProvider):
    """OpenAI chat completions API."""

    provider_id = Provider.OPENAI

    def __init__(self, **kwargs: Any):
        super().__init__(**kwargs)
        try:
            from openai import OpenAI
        except ImportError:
            raise ImportError(
                "OpenAI provider requires the 'openai' package. "
                "Install with: pip install openai"
            )
        self._client = OpenAI(api_key=self.api_key)

    def _call(
        self, system: str, user: str, *, max_tokens: int, timeout: float | None,
    ) -> str:
        resp = self._client.chat.completions.create(
            model=self.model,
            temperature=self.temperature,
            max_tokens=max_tokens,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            timeout=timeout,
        )
        if not resp.choices:
            raise ProviderCallError(self.provider_id.value, "no choices returned from OpenAI API")
        return resp.choices[0].message.content or ""


# ══════════════════════════════════════════════════════════════════════════
# Google Gemini
# ══════════════════════════════════════════════════════════════════════════


class GeminiProvider(SummarizationProvider):
    """Google Generative AI (Gemini) API."""

    provider_id = Provider.GEMINI

    def __init__(self, **kwargs: Any):
        super().__init__(**kwargs)
        try:
            import google.generativeai as genai
        except ImportError:
            raise ImportError(
                "Gemini provider requires the 'google-generativeai' package. "
                "Install with: pip install google-generativeai"
            )
        genai.configure(api_key=self.api_key)
        self._genai = genai

    def _call(
        self, system: str, user: str, *, max_tokens: int, timeout: float | None,
    ) -> str:
        model = self._genai.GenerativeModel(
            model_name=self.model,
            system_instruction=system,
            generation_config=self._genai.GenerationConfig(
                temperature=self.temperature,
                max_output_tokens=max_tokens,
            ),
        )
        request_options = {"timeout": timeout} if timeout else None
        resp = model.generate_content(user, request_options=request_options)
        if not resp.candidates:
            raise ProviderCallError(self.provider_id.value, "no response from Gemini API")
        return resp.text or ""


# ══════════════════════════════════════════════════════════════════════════
# Claude (declared, not implemented)
# ══════════════════════════════════════════════════════════════════════════


class ClaudeProvider(SummarizationProvider):
    """Placeholder: selectable, but every call fails."""

    provider_id = Provider.CLAUDE

    def summarize(
        self, context: CallContext | None, request: SummaryRequest,
    ) -> SummaryResponse:
        raise ProviderNotImplementedError(self.provider_id.value)

    def _call(
        self, system: str, user: str, *, max_tokens: int, timeout: float | None,
    ) -> str:
        raise ProviderNotImplementedError(self.provider_id.value)


# ══════════════════════════════════════════════════════════════════════════
# Selection and factory
# ══════════════════════════════════════════════════════════════════════════

_PROVIDERS: dict[Provider, type[SummarizationProvider]] = {
    Provider.OPENAI: OpenAIProvider,
    Provider.GEMINI: GeminiProvider,
    Provider.CLAUDE: ClaudeProvider,
}


def parse_provider(name: str | Provider) -> Provider:
    """Validate a provider name (case-insensitive)."""
    if isinstance(name, Provider):
        return name
    try:
        return Provider(name.strip().lower())
    except ValueError:
        raise UnsupportedProviderError(name, SUPPORTED_PROVIDERS) from None


def detect_available_providers(resolver: CredentialResolver) -> list[Provider]:
    """Providers with a configured credential, in priority order."""
    return [p for p in PROVIDER_PRIORITY if resolver.lookup(p)]


def select_provider(name: str | None, resolver: CredentialResolver) -> Provider:
    """Pick the provider to use.

    An explicit *name* always wins.  Otherwise the first provider in
    ``PROVIDER_PRIORITY`` with a credential is chosen.
    """
    if name:
        return parse_provider(name)
    available = detect_available_providers(resolver)
    if not available:
        env_vars = [v for p in PROVIDER_PRIORITY for v in env_var_names(p)]
        raise NoProviderConfiguredError(env_vars)
    if len(available) > 1:
        logger.info(
            "Multiple providers available (%s); using %s",
            ", ".join(p.value for p in available), available[0].value,
        )
    return available[0]


def create_provider(
    provider: str | Provider,
    *,
    resolver: CredentialResolver,
    model: str | None = None,
    temperature: float = DEFAULT_TEMPERATURE,
) -> SummarizationProvider:
    """Create a provider instance with its credential from *resolver*."""
    pid = parse_provider(provider)
    api_key = resolver.lookup(pid)
    if not api_key:
        raise ProviderConfigError(
            f"API key not provided for {pid.value}. "
            f"Set {' or '.join(env_var_names(pid))} environment variable"
        )
    cls = _PROVIDERS[pid]
    logger.debug("Creating %s provider (model=%s)", pid.value, model or _DEFAULT_MODELS[pid])
    return cls(api_key=api_key, model=model, temperature=temperature)


def default_model_for(provider: str | Provider) -> str:
    """Return the default model name for a given provider."""
    return _DEFAULT_MODELS[parse_provider(provider)]
