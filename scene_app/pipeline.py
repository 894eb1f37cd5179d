import logging
from typing import Callable, List, Optional, Protocol

from google import genai

from .config import ASPECT_RATIOS, LANGUAGES, VOICE_STYLE, Settings
from .errors import classify_error
from .images import GeminiImageClient
from .models import CharacterDescriptions, Phase, ScenePrompt, SceneState
from .planner import ScenePromptPlanner
from .reference import ReferenceAddress
from .resources import AudioResourceManager, ResourceHandle
from .tts import GeminiSpeechSynthesizer
from .verses import BibleApiVerseClient, GeminiVerseClient
from .wav import encode_wav

log = logging.getLogger(__name__)

Listener = Callable[[str, SceneState], None]


class PromptGenerator(Protocol):
    async def generate_prompt(
        self, reference: str, prior: Optional[CharacterDescriptions]
    ) -> ScenePrompt: ...


class ImageGenerator(Protocol):
    async def generate_image(self, prompt: str, aspect_ratio: str) -> bytes: ...


class VerseTextSource(Protocol):
    async def fetch_verse_text(self, reference: str, language: str) -> str: ...


class SpeechSynthesizer(Protocol):
    async def synthesize_speech(self, text: str, voice_style: str) -> bytes: ...


class SceneOrchestrator:
    """
    Drives one reference through image generation and, on request, narration.

    Commands never overlap: each one checks and claims the phase before its
    first await, and a second command issued while one is in flight is
    rejected. Failures roll the phase back to the last committed one and are
    reported through ``state.last_error``; they are never raised.
    """

    def __init__(
        self,
        prompts: PromptGenerator,
        images: ImageGenerator,
        verses: VerseTextSource,
        speech: SpeechSynthesizer,
        resources: Optional[AudioResourceManager] = None,
        aspect_ratio: str = "9:16",
        language: str = "pt-BR",
        voice_style: str = VOICE_STYLE,
    ):
        self.prompts = prompts
        self.images = images
        self.verses = verses
        self.speech = speech
        self.resources = resources or AudioResourceManager()
        self.voice_style = voice_style
        self.aspect_ratio = aspect_ratio
        self.language = language
        self._state = SceneState()
        self._listeners: List[Listener] = []
        # Bumped by reset(); an in-flight command that sees a new epoch drops its result.
        self._epoch = 0

    # -- configuration -------------------------------------------------

    @property
    def aspect_ratio(self) -> str:
        return self._aspect_ratio

    @aspect_ratio.setter
    def aspect_ratio(self, value: str) -> None:
        if value not in ASPECT_RATIOS:
            raise ValueError(f"aspect ratio must be one of {', '.join(ASPECT_RATIOS)}")
        self._aspect_ratio = value

    @property
    def language(self) -> str:
        return self._language

    @language.setter
    def language(self, value: str) -> None:
        if value not in LANGUAGES:
            raise ValueError(f"language must be one of {', '.join(LANGUAGES)}")
        self._language = value

    # -- observation ---------------------------------------------------

    @property
    def state(self) -> SceneState:
        return self._state.snapshot()

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _emit(self, stage: str) -> None:
        snapshot = self._state.snapshot()
        for listener in self._listeners:
            try:
                listener(stage, snapshot)
            except Exception:  # noqa: BLE001
                log.exception("Progress listener failed on stage %s", stage)

    def _release_audio(self) -> None:
        self.resources.release(self._state.audio)
        self._state.audio = None
        self._state.narrated_text = None

    # -- commands ------------------------------------------------------

    async def generate_scene(self, raw_reference: str) -> bool:
        if self._state.is_loading:
            log.debug("generate_scene rejected: a generation is in flight")
            return False
        reference = ReferenceAddress.parse(raw_reference or "")
        if reference is None:
            log.debug("generate_scene rejected: unparsable reference %r", raw_reference)
            return False

        state = self._state
        state.phase = Phase.GENERATING_IMAGE
        state.reference = reference
        state.image = None
        state.last_error = None
        self._release_audio()
        epoch = self._epoch
        log.info("Generating scene for %s (%s)", reference, self.aspect_ratio)

        stage = "prompt"
        try:
            self._emit("analyzing_reference")
            prior = dict(state.character_descriptions) or None
            planned = await self.prompts.generate_prompt(str(reference), prior)
            if epoch != self._epoch:
                return True
            state.character_descriptions = dict(planned.character_descriptions)

            stage = "image"
            self._emit("generating_image")
            image = await self.images.generate_image(planned.scene_prompt, self.aspect_ratio)
            if epoch != self._epoch:
                return True
        except Exception as exc:  # noqa: BLE001
            if epoch != self._epoch:
                return True
            log.exception("Scene generation failed for %s at %s", reference, stage)
            state.last_error = classify_error(exc, stage, "Failed to generate the image.")
            state.phase = Phase.IDLE
            self._emit("error")
            return True

        state.image = image
        state.phase = Phase.IMAGE_READY
        log.info("Scene ready for %s (%d bytes)", reference, len(image))
        self._emit("image_ready")
        return True

    async def generate_narration(self) -> bool:
        state = self._state
        if state.phase not in (Phase.IMAGE_READY, Phase.AUDIO_READY) or state.image is None:
            log.debug("generate_narration rejected in phase %s", state.phase.value)
            return False

        state.phase = Phase.GENERATING_AUDIO
        state.last_error = None
        self._release_audio()
        reference = state.reference
        epoch = self._epoch
        log.info("Generating narration for %s (%s)", reference, self.language)

        stage = "verse_text"
        handle: Optional[ResourceHandle] = None
        try:
            self._emit("fetching_text")
            text = await self.verses.fetch_verse_text(str(reference), self.language)
            if epoch != self._epoch:
                return True

            stage = "speech"
            self._emit("synthesizing_speech")
            pcm = await self.speech.synthesize_speech(text, self.voice_style)
            if epoch != self._epoch:
                return True

            stage = "encode"
            handle = self.resources.acquire(encode_wav(pcm))
        except Exception as exc:  # noqa: BLE001
            self.resources.release(handle)
            if epoch != self._epoch:
                return True
            log.exception("Narration failed for %s at %s", reference, stage)
            state.last_error = classify_error(exc, stage, "Failed to generate the narration.")
            state.phase = Phase.IMAGE_READY
            self._emit("error")
            return True

        state.narrated_text = text
        state.audio = handle
        state.phase = Phase.AUDIO_READY
        log.info("Narration ready for %s (%d bytes)", reference, handle.size)
        self._emit("audio_ready")
        return True

    def next_verse(self) -> Optional[ReferenceAddress]:
        state = self._state
        if state.is_loading or state.reference is None:
            return None
        state.reference = state.reference.next()
        state.image = None
        state.last_error = None
        state.phase = Phase.IDLE
        self._release_audio()
        # Character descriptions stay so the next picture keeps the same cast.
        self._emit("idle")
        return state.reference

    def reset(self) -> None:
        self._epoch += 1
        self._release_audio()
        self._state = SceneState()
        log.info("Scene reset")
        self._emit("idle")

    def close(self) -> None:
        self.reset()
        self.resources.release_all()


def build_orchestrator(settings: Settings) -> SceneOrchestrator:
    client = genai.Client(api_key=settings.google_api_key)
    if settings.verse_source == "bible-api":
        verses = BibleApiVerseClient(settings.bible_api_url)
    else:
        verses = GeminiVerseClient(client, settings.gemini_text_model)
    return SceneOrchestrator(
        prompts=ScenePromptPlanner(client, settings.gemini_text_model),
        images=GeminiImageClient.for_model(client, settings.gemini_image_model),
        verses=verses,
        speech=GeminiSpeechSynthesizer(client, settings.gemini_tts_model, settings.gemini_tts_voice),
        resources=AudioResourceManager(settings.audio_dir),
        aspect_ratio=settings.default_aspect,
        language=settings.default_language,
    )
