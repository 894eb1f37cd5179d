from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional

from .errors import SceneError
from .reference import ReferenceAddress
from .resources import ResourceHandle

CharacterDescriptions = Dict[str, str]


class Phase(str, Enum):
    IDLE = "idle"
    GENERATING_IMAGE = "generating_image"
    IMAGE_READY = "image_ready"
    GENERATING_AUDIO = "generating_audio"
    AUDIO_READY = "audio_ready"


@dataclass
class ScenePrompt:
    scene_prompt: str
    character_descriptions: CharacterDescriptions = field(default_factory=dict)


@dataclass
class SceneState:
    reference: Optional[ReferenceAddress] = None
    character_descriptions: CharacterDescriptions = field(default_factory=dict)
    image: Optional[bytes] = None
    narrated_text: Optional[str] = None
    audio: Optional[ResourceHandle] = None
    phase: Phase = Phase.IDLE
    last_error: Optional[SceneError] = None

    @property
    def is_loading(self) -> bool:
        return self.phase in (Phase.GENERATING_IMAGE, Phase.GENERATING_AUDIO)

    def snapshot(self) -> "SceneState":
        return replace(self, character_descriptions=dict(self.character_descriptions))

    def to_dict(self) -> dict:
        return {
            "reference": str(self.reference) if self.reference else None,
            "next_reference": str(self.reference.next()) if self.reference else None,
            "character_descriptions": dict(self.character_descriptions),
            "has_image": self.image is not None,
            "narrated_text": self.narrated_text,
            "audio_id": self.audio.id if self.audio else None,
            "phase": self.phase.value,
            "is_loading": self.is_loading,
            "error": self.last_error.to_dict() if self.last_error else None,
        }
