import asyncio
from typing import List, Optional

from scene_app.models import ScenePrompt


class FakePrompts:
    def __init__(self, characters=None, error: Optional[Exception] = None):
        self.characters = characters if characters is not None else {"Jesus": "man in white robe"}
        self.error = error
        self.calls: List[tuple] = []

    async def generate_prompt(self, reference, prior):
        self.calls.append((reference, prior))
        await asyncio.sleep(0)
        if self.error:
            raise self.error
        return ScenePrompt(scene_prompt=f"scene of {reference}", character_descriptions=dict(self.characters))


class FakeImages:
    def __init__(self, error: Optional[Exception] = None, data: bytes = b"\xff\xd8jpeg"):
        self.error = error
        self.data = data
        self.calls: List[tuple] = []

    async def generate_image(self, prompt, aspect_ratio):
        self.calls.append((prompt, aspect_ratio))
        await asyncio.sleep(0)
        if self.error:
            raise self.error
        return self.data


class FakeVerses:
    def __init__(self, text: str = "For God so loved the world", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls: List[tuple] = []
        self.gate: Optional[asyncio.Event] = None

    async def fetch_verse_text(self, reference, language):
        self.calls.append((reference, language))
        if self.gate is not None:
            await self.gate.wait()
        await asyncio.sleep(0)
        if self.error:
            raise self.error
        return self.text


class FakeSpeech:
    def __init__(self, pcm: bytes = b"\x00\x01" * 500, error: Optional[Exception] = None):
        self.pcm = pcm
        self.error = error
        self.calls: List[tuple] = []

    async def synthesize_speech(self, text, voice_style):
        self.calls.append((text, voice_style))
        await asyncio.sleep(0)
        if self.error:
            raise self.error
        return self.pcm
