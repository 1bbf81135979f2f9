"""
Answer generator
Turns a question prompt into structured article content via the configured AI provider
"""

import logging
from typing import Optional

from qahq.config import settings
from qahq.core.ai_providers.base import BaseAIProvider, GenerationResult
from qahq.core.ai_providers.openai_provider import OpenAIProvider
from qahq.core.exceptions import GenerationError, ProviderNotConfiguredError
from qahq.core.slug import slugify

logger = logging.getLogger(__name__)


def build_default_provider() -> Optional[BaseAIProvider]:
    """OpenAI provider from settings, or None when no API key is set"""
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY is not set, answer generation is disabled")
        return None
    return OpenAIProvider(
        api_key=settings.OPENAI_API_KEY,
        base_url=settings.OPENAI_BASE_URL,
        model=settings.OPENAI_MODEL,
        temperature=settings.OPENAI_TEMPERATURE,
        max_tokens=settings.OPENAI_MAX_TOKENS,
    )


class AnswerGenerator:
    """Answer generator"""

    def __init__(self, provider: Optional[BaseAIProvider] = None):
        self.provider = provider

    def _get_provider_or_raise(self) -> BaseAIProvider:
        if self.provider is None:
            raise ProviderNotConfiguredError(
                "No AI provider available, set OPENAI_API_KEY"
            )
        return self.provider

    async def generate(
        self,
        question: str,
        category: str,
        tags: list[str],
        notes: Optional[str] = None,
    ) -> GenerationResult:
        """
        Generate one article

        Args:
            question: proposed question text
            category: resolved category id
            tags: idea tags, used when the model returns none
            notes: optional editor notes

        Returns:
            GenerationResult with question and slug always filled

        Raises:
            GenerationError: the call failed or the reply was unusable
        """
        provider = self._get_provider_or_raise()

        logger.info(
            f"Generating answer with {provider.provider_name}: "
            f"question={question!r}, category={category}"
        )

        try:
            text = await provider.chat(
                provider._build_system_prompt(),
                provider._build_user_prompt(question, category, tags, notes),
            )
            result = provider._parse_response(text)
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"Answer generation failed ({provider.provider_name}): {e}")
            raise GenerationError(str(e) or type(e).__name__) from e

        if not result.question:
            result.question = question.strip()
        result.slug = slugify(result.slug or result.question)
        if not result.slug:
            raise GenerationError(f"Could not derive a slug for {question!r}")
        if not result.tags:
            result.tags = list(tags)

        logger.info(f"Answer generated: {result.question} (slug={result.slug})")
        return result
