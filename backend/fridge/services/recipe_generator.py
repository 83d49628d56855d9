"""
AI Recipe Generator

Uses the Google Gemini API to draft recipes from a list of ingredients:
1. Ask for 4 short recipes as a JSON array
2. Clean up the reply (code fences, smart quotes, trailing commas, truncation)
3. Validate each draft against the recipe payload model
4. Decorate each draft with a picture from Pexels (placeholder without a key)

Drafts are never stored. Saving one goes through normal recipe creation
with ``source="ai"``.
"""
import json
import logging
import re
from typing import Any, Dict, List
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..config import settings
from ..core.errors import DependencyFailure
from ..schemas.recipe import RecipeIn

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE = "https://placehold.co/800x600/667eea/ffffff?text={term}"

PROMPT_TEMPLATE = """Generate 4 SHORT recipes using: {ingredients}

IMPORTANT: Keep recipes concise. Return ONLY valid JSON array.

Format:
[
  {{
    "title": "Recipe Name",
    "description": "Brief description under 100 chars",
    "ingredients": [{{"name": "item", "quantity": 2, "unit": "cups"}}],
    "instructions": [{{"step": 1, "description": "Short instruction"}}],
    "cookingTime": 15,
    "preparationTime": 5,
    "servings": 2,
    "difficulty": "Easy",
    "category": "Breakfast",
    "tags": ["Quick"],
    "nutritionalInfo": {{"calories": 200, "protein": 10, "carbs": 25, "fat": 8}}
  }}
]

"category" must be one of Breakfast, Lunch, Dinner, Dessert, Snack, Beverage.
"difficulty" must be one of Easy, Medium, Hard.
Keep instructions to 10-15 steps maximum. Return ONLY the JSON array."""


def extract_json_array(text: str) -> List[Any]:
    """
    Pull the JSON array of drafts out of a model reply.

    Raises:
        ValueError: no array, unrecoverable truncation, or an empty array
    """
    cleaned = text.replace("```json", "").replace("```", "")
    start = cleaned.find("[")
    if start == -1:
        raise ValueError("no JSON array in reply")

    end = cleaned.rfind("]")
    if end > start:
        cleaned = cleaned[start:end + 1]
    else:
        # Reply was cut off: keep everything up to the last complete object
        last_obj = cleaned.rfind("}")
        if last_obj < start:
            raise ValueError("reply was cut off and cannot be recovered")
        cleaned = cleaned[start:last_obj + 1] + "\n]"

    cleaned = re.sub("[“”]", '"', cleaned)
    cleaned = re.sub("[‘’]", "'", cleaned)
    cleaned = re.sub(r",\s*}", "}", cleaned)
    cleaned = re.sub(r",\s*]", "]", cleaned)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError(f"JSON parsing failed: {e}") from e
    if not isinstance(data, list):
        raise ValueError("reply is not a JSON array")
    if not data:
        raise ValueError("reply is an empty array")
    return data


class RecipeGeneratorService:
    """Gemini-backed recipe drafting"""

    def __init__(self):
        self.api_key = settings.gemini_api_key
        self.model = settings.gemini_model
        self.api_url = settings.gemini_api_url
        self.timeout = settings.gemini_timeout_sec
        self.pexels_api_key = settings.pexels_api_key
        self.pexels_api_url = settings.pexels_api_url

    def is_available(self) -> bool:
        """Check if API key is configured"""
        return bool(self.api_key)

    async def generate(self, ingredients: List[str]) -> List[Dict[str, Any]]:
        """
        Draft recipes from ingredients.

        Returns:
            list of recipe payload dicts (camelCase, ``source="ai"``, ``image`` set)

        Raises:
            DependencyFailure: AI_UNAVAILABLE without a key, AI_BAD_RESPONSE
            when the call fails or no usable draft comes back
        """
        if not self.is_available():
            raise DependencyFailure("AI recipe generation is not configured", code="AI_UNAVAILABLE")

        raw_text = await self._call_model(ingredients)
        try:
            items = extract_json_array(raw_text)
        except ValueError as e:
            logger.error("[recipe_generator] unusable reply: %s", e)
            raise DependencyFailure(f"AI returned an unusable reply: {e}", code="AI_BAD_RESPONSE") from e

        drafts = []
        for item in items:
            if not isinstance(item, dict):
                continue
            item = {**item, "source": "ai", "image": ""}
            try:
                drafts.append(RecipeIn.model_validate(item).model_dump(mode="json"))
            except PydanticValidationError as e:
                logger.warning(
                    "[recipe_generator] skipped invalid draft %r: %d error(s)",
                    item.get("title"),
                    e.error_count(),
                )
        if not drafts:
            raise DependencyFailure("AI returned no valid recipe", code="AI_BAD_RESPONSE")

        await self._attach_images(drafts)
        logger.info("[recipe_generator] generated %d draft(s)", len(drafts))
        return drafts

    async def _call_model(self, ingredients: List[str]) -> str:
        url = f"{self.api_url}/{self.model}:generateContent"
        payload = {
            "contents": [{"parts": [{"text": PROMPT_TEMPLATE.format(ingredients=", ".join(ingredients))}]}],
            "generationConfig": {
                "temperature": 0.4,
                "maxOutputTokens": 8192,
                "topP": 0.8,
                "topK": 40,
            },
        }
        logger.info("[recipe_generator] calling %s with %d ingredient(s)", self.model, len(ingredients))
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(url, params={"key": self.api_key}, json=payload)
                resp.raise_for_status()
                result = resp.json()
        except httpx.HTTPError as e:
            logger.error("[recipe_generator] Gemini call failed: %s", e)
            raise DependencyFailure("AI service request failed", code="AI_BAD_RESPONSE") from e

        try:
            return result["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise DependencyFailure("Invalid response structure from AI service", code="AI_BAD_RESPONSE") from e

    async def _attach_images(self, drafts: List[Dict[str, Any]]) -> None:
        """Best effort: a failed lookup falls back to the placeholder."""
        if not self.pexels_api_key:
            for d in drafts:
                d["image"] = self._placeholder(d["title"])
            return

        async with httpx.AsyncClient(timeout=10) as client:
            for d in drafts:
                d["image"] = await self._search_image(client, d["title"]) or self._placeholder(d["title"])

    async def _search_image(self, client: httpx.AsyncClient, title: str) -> str | None:
        try:
            resp = await client.get(
                self.pexels_api_url,
                params={"query": f"{title.lower()} food", "per_page": 1},
                headers={"Authorization": self.pexels_api_key},
            )
            resp.raise_for_status()
            photos = resp.json().get("photos") or []
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("[recipe_generator] Pexels lookup failed for %r: %s", title, e)
            return None
        if not photos:
            return None
        src = photos[0].get("src") or {}
        return src.get("large") or src.get("medium")

    @staticmethod
    def _placeholder(title: str) -> str:
        return PLACEHOLDER_IMAGE.format(term=quote(title))


# Global instance
recipe_generator = RecipeGeneratorService()
