"""
AI provider base class
Every answer-generation provider adapter inherits from this ABC
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from qahq.models.question import VERDICTS


@dataclass
class GenerationResult:
    """Structured article content returned by one generator call"""
    question: str
    slug: str
    short_answer: str
    verdict: Optional[str]
    summary: str
    body_markdown: str
    evidence: list[dict] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


class BaseAIProvider(ABC):
    """AI provider ABC"""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 4096,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider name"""
        ...

    @abstractmethod
    async def chat(self, system_prompt: str, user_prompt: str) -> str:
        """Single chat completion, returns the raw assistant text"""
        ...

    def _build_system_prompt(self) -> str:
        return (
            "You are a research expert who provides accurate, well-sourced answers "
            "to questions. Always respond with valid JSON."
        )

    def _build_user_prompt(
        self,
        question: str,
        category: str,
        tags: list[str],
        notes: Optional[str] = None,
    ) -> str:
        """
        Research-article prompt

        The model may refine the question wording; the refined text and the
        slug it suggests are what the pipeline checks for duplicates.
        """
        tags_text = ", ".join(tags) if tags else "none"
        notes_text = f"\nEditor notes: {notes}" if notes else ""

        return f"""You are a research expert. Generate a comprehensive, research-backed answer to the following question.

Question: {question}
Category: {category}
Suggested tags: {tags_text}{notes_text}

Requirements:
1. Provide the final question wording (keep it close to the original, fix grammar only)
2. Provide a URL slug for the question (lower-case words joined by hyphens)
3. Provide a short_answer (2-3 sentences)
4. Provide a verdict: 'works', 'doesnt_work', or 'mixed'
5. Provide a summary (2-3 paragraphs)
6. Provide a detailed body_markdown (600-900 words) organised in ## sections
7. Provide evidence array with at least 3-5 sources. Prioritize:
   - PubMed articles first
   - .gov sources
   - Major medical institutions (Mayo Clinic, Cleveland Clinic, etc.)
   - Smithsonian, National Geographic
   - BBC, NYT, Reuters
   - Consumer Reports
   - Other reputable sources
8. Provide sources: the list of URLs you relied on
9. Provide 3-6 short lower-case tags

Format your response as JSON with this exact structure:
{{
  "question": "...",
  "slug": "...",
  "short_answer": "...",
  "verdict": "works|doesnt_work|mixed",
  "summary": "...",
  "body_markdown": "...",
  "evidence": [
    {{
      "title": "...",
      "url": "...",
      "explanation": "..."
    }}
  ],
  "sources": ["..."],
  "tags": ["..."]
}}

Be thorough, accurate, and cite real sources when possible."""

    @staticmethod
    def _parse_json_text(text: str) -> dict:
        """
        Parse JSON out of a model reply
        Handles ```json fences and leading/trailing chatter
        """
        text = text.strip()
        if text.startswith("```json"):
            text = text[7:]
        if text.startswith("```"):
            text = text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()

        try:
            data = json.loads(text, strict=False)
        except json.JSONDecodeError:
            start = text.find("{")
            end = text.rfind("}") + 1
            if start == -1 or end <= start:
                raise ValueError(
                    f"Could not parse JSON from model reply: {text[:200]}..."
                )
            data = json.loads(text[start:end], strict=False)

        if not isinstance(data, dict):
            raise ValueError("Model reply is not a JSON object")
        return data

    def _parse_response(self, text: str) -> GenerationResult:
        """
        Turn the raw reply into a GenerationResult

        question and slug are left empty when missing; the answer generator
        fills them from the prompt.
        """
        data = self._parse_json_text(text)

        verdict = data.get("verdict")
        if verdict not in VERDICTS:
            verdict = None

        evidence = [
            {
                "title": str(item.get("title", "")),
                "url": str(item.get("url", "")),
                "explanation": str(item.get("explanation", "")),
            }
            for item in (data.get("evidence") or [])
            if isinstance(item, dict)
        ]
        sources = [str(s) for s in (data.get("sources") or []) if s]
        tags = data.get("tags", [])

        return GenerationResult(
            question=str(data.get("question") or "").strip(),
            slug=str(data.get("slug") or "").strip(),
            short_answer=str(data.get("short_answer") or ""),
            verdict=verdict,
            summary=str(data.get("summary") or ""),
            body_markdown=str(data.get("body_markdown") or ""),
            evidence=evidence,
            sources=sources,
            tags=[str(t) for t in tags] if isinstance(tags, list) else [],
        )
