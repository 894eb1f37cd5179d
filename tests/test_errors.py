import requests

from scene_app.errors import (
    CommunicationFailure,
    GenerationFailure,
    VerseNotFound,
    classify_error,
)


def test_scene_errors_pass_through_with_stage():
    err = VerseNotFound()
    out = classify_error(err, "prompt")
    assert out is err
    assert out.stage == "prompt"


def test_existing_stage_is_kept():
    err = CommunicationFailure(stage="image")
    assert classify_error(err, "prompt").stage == "image"


def test_verse_not_found_marker():
    out = classify_error(ValueError("model said VERSE_NOT_FOUND"), "prompt")
    assert isinstance(out, VerseNotFound)
    assert out.kind == "verse_not_found"


def test_server_errors_are_communication_failures():
    assert isinstance(classify_error(RuntimeError("500 INTERNAL")), CommunicationFailure)
    assert isinstance(classify_error(RuntimeError("Rpc failed due to xhr error")), CommunicationFailure)
    assert isinstance(classify_error(requests.ConnectionError("refused")), CommunicationFailure)
    assert isinstance(classify_error(requests.Timeout("slow")), CommunicationFailure)


def test_unclassified_keeps_message():
    out = classify_error(KeyError("boom"), "speech")
    assert isinstance(out, GenerationFailure)
    assert "boom" in out.message
    assert out.stage == "speech"


def test_unclassified_without_message_uses_default():
    out = classify_error(RuntimeError(), "image", "Failed to generate the image.")
    assert out.message == "Failed to generate the image."


def test_to_dict():
    out = CommunicationFailure(stage="speech").to_dict()
    assert out["kind"] == "communication"
    assert out["stage"] == "speech"
    assert out["message"]
