# src/services/recommendation_client.py

"""Remote recommendation client: prompt, call the backend, parse."""

import json
import logging
from collections.abc import Sequence

from src.config.settings import Settings
from src.models.product import Product
from src.models.recommendation import Recommendation
from src.services.errors import RemoteUnavailable
from src.services.response_parser import BaseResponseParser, JsonArrayParser
from src.services.text_backend import BaseTextBackend, GeminiBackend

logger = logging.getLogger("product_advisor.remote")

PROMPT_TEMPLATE = """
You are an expert product advisor. A user is looking for products and has described their needs as: "{query}"

Here is the available product catalog:
{catalog}

Please analyze the user's query and recommend the top {limit} most suitable products. For each recommendation, provide:
1. The exact product ID from the catalog
2. A match score (0-100) indicating how well it fits their needs
3. Clear reasoning for why this product matches their requirements
4. 2-3 key pros specific to their needs
5. 1-2 potential cons or considerations

Format your response as a JSON array with this structure:
[
  {{
    "productId": number,
    "matchScore": number,
    "reasoning": "string",
    "pros": ["string", "string"],
    "cons": ["string"]
  }}
]

Focus on understanding the user's underlying needs, use case, and context. Consider factors like:
- Primary use case and functionality needed
- Budget considerations (if mentioned)
- User demographics (if implied)
- Quality vs price trade-offs
- Specific features mentioned

Provide only the JSON response, no additional text.
""".strip()


def build_prompt(
    query: str,
    catalog: Sequence[Product],
    limit: int | None = None,
) -> str:
    """Embed the query and the serialised catalog in the instruction."""
    return PROMPT_TEMPLATE.format(
        query=query,
        catalog=json.dumps(
            [p.to_dict() for p in catalog], indent=2, ensure_ascii=False,
        ),
        limit=limit or Settings.MAX_RECOMMENDATIONS,
    )


class RemoteRecommendationClient:
    """Asks a text-generation backend to rank catalog products."""

    def __init__(
        self,
        backend: BaseTextBackend | None = None,
        parser: BaseResponseParser | None = None,
    ) -> None:
        self.backend = backend
        self.parser = parser or JsonArrayParser()

    @classmethod
    def from_settings(cls) -> "RemoteRecommendationClient":
        """Client wired to Gemini with the configured key and model."""
        return cls(backend=GeminiBackend())

    def fetch_recommendations(
        self,
        query: str,
        catalog: Sequence[Product],
    ) -> list[Recommendation]:
        """Return parsed recommendations in the order the backend gave.

        Raises ``RemoteUnavailable`` without a configured backend,
        ``RemoteError`` on transport failure and ``ParseError`` on a
        payload without a usable JSON array.
        """
        if self.backend is None or not self.backend.is_configured():
            raise RemoteUnavailable("No remote recommendation backend configured")

        prompt = build_prompt(query, catalog)
        logger.debug(
            "Requesting remote recommendations for '%s' (%d products)",
            query,
            len(catalog),
        )
        raw_text = self.backend.generate(prompt)
        recommendations = self.parser.parse(raw_text, catalog)
        logger.info(
            "Remote returned %d resolvable recommendations for '%s'",
            len(recommendations),
            query,
        )
        return recommendations
