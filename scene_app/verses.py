import asyncio
import logging
from urllib.parse import quote

import requests
from google import genai

from .config import LANGUAGES
from .errors import VERSE_NOT_FOUND, CommunicationFailure, GenerationFailure, VerseNotFound

log = logging.getLogger(__name__)


class GeminiVerseClient:
    """Looks the verse up with the text model and returns it in the narration language."""

    def __init__(self, client: genai.Client, model: str):
        self.client = client
        self.model = model

    def fetch(self, reference: str, language: str) -> str:
        language_name = LANGUAGES.get(language, language)
        prompt = (
            f"Return the full text of the Bible verse {reference}, in {language_name} "
            f"({language}), using a widely read public translation. Return the verse text only, "
            "without the reference, quotes or commentary. "
            f"If the verse does not exist, return exactly {VERSE_NOT_FOUND}."
        )
        response = self.client.models.generate_content(
            model=self.model,
            contents=[prompt],
        )
        text = (response.text or "").strip()
        if not text:
            raise GenerationFailure("Text model returned no verse text")
        if VERSE_NOT_FOUND in text:
            raise VerseNotFound()
        return text

    async def fetch_verse_text(self, reference: str, language: str) -> str:
        return await asyncio.to_thread(self.fetch, reference, language)


class BibleApiVerseClient:
    """
    Public-domain verse lookup through bible-api.com (no API key).
    """

    # Only the locales the service carries a translation for.
    TRANSLATIONS = {
        "en-US": "web",
        "pt-BR": "almeida",
    }

    def __init__(self, base_url: str = "https://bible-api.com", timeout: int = 30):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _fetch(self, url: str, params: dict) -> dict:
        resp = requests.get(url, params=params, timeout=self.timeout)
        if resp.status_code == 404:
            raise VerseNotFound()
        if resp.status_code != 200:
            raise CommunicationFailure(f"bible-api failed ({resp.status_code}): {resp.text}")
        return resp.json()

    def fetch(self, reference: str, language: str) -> str:
        translation = self.TRANSLATIONS.get(language)
        if not translation:
            raise GenerationFailure(f"No bible-api translation available for {language}")
        data = self._fetch(f"{self.base_url}/{quote(reference)}", {"translation": translation})
        text = " ".join((data.get("text") or "").split())
        if not text:
            raise VerseNotFound()
        return text

    async def fetch_verse_text(self, reference: str, language: str) -> str:
        return await asyncio.to_thread(self.fetch, reference, language)
