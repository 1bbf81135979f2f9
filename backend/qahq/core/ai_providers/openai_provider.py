"""
OpenAI provider adapter
"""

from qahq.core.ai_providers.openai_compatible_provider import OpenAICompatibleProvider


class OpenAIProvider(OpenAICompatibleProvider):
    """OpenAI Chat Completions adapter"""

    @property
    def provider_name(self) -> str:
        return "openai"
