import asyncio
import json
import logging
from typing import Optional

from google import genai

from .errors import VERSE_NOT_FOUND, GenerationFailure, VerseNotFound
from .models import CharacterDescriptions, ScenePrompt

log = logging.getLogger(__name__)


class ScenePromptPlanner:
    """Turns a verse reference into an illustration prompt plus a character sheet."""

    def __init__(self, client: genai.Client, model: str, style: Optional[str] = None):
        self.client = client
        self.model = model
        self.style = style or (
            "warm children's storybook illustration, soft light, rich colors, "
            "historically inspired clothing and landscapes"
        )

    def _instruction(self, reference: str, prior: Optional[CharacterDescriptions]) -> str:
        instruction = (
            "You illustrate Bible verses for children. Read the verse at the given reference "
            "and describe ONE scene that depicts it. Return JSON only with: "
            "scene_prompt (a detailed image-generation prompt, no text or lettering in the image) "
            "and characters (an array of {name, description} giving the visual appearance of "
            "every person in the scene: age, build, hair, clothing, colors). "
            f"If the reference does not exist in the Bible, return {{\"error\": \"{VERSE_NOT_FOUND}\"}}."
        )
        parts = [instruction, f"Style: {self.style}.", f"Reference: {reference}"]
        if prior:
            sheet = "\n".join(f"- {name}: {desc}" for name, desc in prior.items())
            parts.append(
                "Characters already drawn in earlier verses. Keep their names and reuse these "
                "descriptions word for word when they appear again:\n" + sheet
            )
        return "\n\n".join(parts)

    def plan(self, reference: str, prior: Optional[CharacterDescriptions] = None) -> ScenePrompt:
        schema = {
            "type": "object",
            "properties": {
                "error": {"type": "string"},
                "scene_prompt": {"type": "string"},
                "characters": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "name": {"type": "string"},
                            "description": {"type": "string"},
                        },
                        "required": ["name", "description"],
                    },
                },
            },
        }

        response = self.client.models.generate_content(
            model=self.model,
            contents=[
                {
                    "role": "user",
                    "parts": [{"text": self._instruction(reference, prior)}],
                },
            ],
            config={
                "response_mime_type": "application/json",
                "response_json_schema": schema,
            },
        )

        try:
            body = json.loads(response.text or "")
        except json.JSONDecodeError as exc:
            raise GenerationFailure(f"Prompt model returned invalid JSON: {exc}") from exc

        if body.get("error") == VERSE_NOT_FOUND:
            raise VerseNotFound()
        scene_prompt = (body.get("scene_prompt") or "").strip()
        if not scene_prompt:
            raise GenerationFailure("Prompt model returned no scene prompt")

        # Earlier descriptions survive unless the model redescribes the same name.
        characters = dict(prior or {})
        for raw in body.get("characters", []):
            name = (raw.get("name") or "").strip()
            if name:
                characters[name] = (raw.get("description") or "").strip()
        log.info("Planned scene for %s with %d characters", reference, len(characters))
        return ScenePrompt(scene_prompt=scene_prompt, character_descriptions=characters)

    async def generate_prompt(
        self, reference: str, prior: Optional[CharacterDescriptions] = None
    ) -> ScenePrompt:
        return await asyncio.to_thread(self.plan, reference, prior)
