from typing import Optional

import requests
from google.genai import errors as genai_errors

VERSE_NOT_FOUND = "VERSE_NOT_FOUND"

_SERVER_MARKERS = ("500", "502", "503", "504", "rpc failed")


class SceneError(RuntimeError):
    kind = "generation"
    default_message = "Scene generation failed."

    def __init__(self, message: Optional[str] = None, stage: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.stage = stage

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message, "stage": self.stage}


class VerseNotFound(SceneError):
    kind = "verse_not_found"
    default_message = "Verse not found. Check the reference or start a new scene."


class CommunicationFailure(SceneError):
    kind = "communication"
    default_message = "A communication error occurred with the server. Please try again."


class GenerationFailure(SceneError):
    kind = "generation"


def classify_error(exc: Exception, stage: Optional[str] = None, default_message: Optional[str] = None) -> SceneError:
    """Map any collaborator exception onto the scene error taxonomy."""
    if isinstance(exc, SceneError):
        if exc.stage is None:
            exc.stage = stage
        return exc
    text = str(exc)
    if VERSE_NOT_FOUND in text:
        return VerseNotFound(stage=stage)
    if isinstance(exc, (genai_errors.ServerError, requests.ConnectionError, requests.Timeout)):
        return CommunicationFailure(stage=stage)
    lowered = text.lower()
    if any(marker in lowered for marker in _SERVER_MARKERS):
        return CommunicationFailure(stage=stage)
    return GenerationFailure(text or default_message, stage=stage)
