import asyncio
import base64
import logging

from google import genai
from google.genai import types

from .errors import GenerationFailure

log = logging.getLogger(__name__)

# Delivery instructions per narration style.
STYLE_DIRECTIONS = {
    "infantil": "Read this aloud slowly, in a warm, gentle and cheerful voice for young children:",
}


class GeminiSpeechSynthesizer:
    """Gemini TTS; returns raw 16-bit mono PCM at 24 kHz."""

    def __init__(self, client: genai.Client, model: str, voice: str = "Leda"):
        self.client = client
        self.model = model
        self.voice = voice

    def synthesize(self, text: str, voice_style: str) -> bytes:
        direction = STYLE_DIRECTIONS.get(voice_style, f"Read this aloud in a {voice_style} style:")
        response = self.client.models.generate_content(
            model=self.model,
            contents=[f"{direction}\n\n{text}"],
            config=types.GenerateContentConfig(
                response_modalities=["AUDIO"],
                speech_config=types.SpeechConfig(
                    voice_config=types.VoiceConfig(
                        prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=self.voice),
                    ),
                ),
            ),
        )

        if response.parts:
            for part in response.parts:
                if part.inline_data and part.inline_data.data:
                    data = part.inline_data.data
                    # Older SDK builds hand back the base64 text untouched.
                    if isinstance(data, str):
                        data = base64.b64decode(data)
                    log.info("Synthesized %d bytes of speech", len(data))
                    return data
        raise GenerationFailure("Speech model returned no audio")

    async def synthesize_speech(self, text: str, voice_style: str) -> bytes:
        return await asyncio.to_thread(self.synthesize, text, voice_style)
