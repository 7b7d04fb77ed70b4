"""Prompt synthesis and summarization providers.

Supported backends: OpenAI and Google Gemini.  Claude is selectable but
not implemented yet.  Provider SDKs are imported lazily, when a provider
is created.
"""

from .credentials import (  # noqa: F401
    EnvironmentCredentialResolver,
    MappingCredentialResolver,
)
from .platforms import normalize_platform, SUPPORTED_PLATFORMS  # noqa: F401
from .prompt import build_prompt  # noqa: F401
from .providers import (  # noqa: F401
    CallContext,
    create_provider,
    default_model_for,
    select_provider,
    SUPPORTED_PROVIDERS,
)
