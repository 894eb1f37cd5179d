import os
from pathlib import Path

ASPECT_RATIOS = ("9:16", "16:9")

# Narration locales offered to the caller, with their display names.
LANGUAGES = {
    "pt-BR": "Português",
    "en-US": "English",
    "es-ES": "Español",
    "fr-FR": "Français",
    "de-DE": "Deutsch",
}

VOICE_STYLE = "infantil"


class Settings:
    def __init__(self):
        # Core keys
        self.google_api_key = os.getenv("GOOGLE_API_KEY")

        # Models
        self.gemini_text_model = os.getenv("GEMINI_TEXT_MODEL", "gemini-2.5-flash")
        self.gemini_image_model = os.getenv(
            "GEMINI_IMAGE_MODEL", "imagen-4.0-generate-001"
        )
        self.gemini_tts_model = os.getenv("GEMINI_TTS_MODEL", "gemini-2.5-flash-preview-tts")
        self.gemini_tts_voice = os.getenv("GEMINI_TTS_VOICE", "Leda")

        # Verse text: gemini | bible-api
        self.verse_source = os.getenv("VERSE_SOURCE", "gemini").lower()
        self.bible_api_url = os.getenv("BIBLE_API_URL", "https://bible-api.com")

        # Scene defaults
        self.default_aspect = os.getenv("IMAGE_ASPECT", "9:16")
        if self.default_aspect not in ASPECT_RATIOS:
            raise RuntimeError(f"IMAGE_ASPECT must be one of {', '.join(ASPECT_RATIOS)}")
        self.default_language = os.getenv("NARRATION_LANGUAGE", "pt-BR")
        if self.default_language not in LANGUAGES:
            raise RuntimeError(f"NARRATION_LANGUAGE must be one of {', '.join(LANGUAGES)}")

        # Paths; unset means a private temporary directory per orchestrator.
        audio_dir = os.getenv("AUDIO_DIR")
        self.audio_dir = Path(audio_dir).resolve() if audio_dir else None

        self.port = int(os.getenv("PORT", "5000"))
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        if not self.google_api_key:
            raise RuntimeError("GOOGLE_API_KEY is required for Gemini text/images/speech")
