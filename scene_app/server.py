import logging
from io import BytesIO
from typing import Optional

from flask import Flask, jsonify, request, send_file

from .config import ASPECT_RATIOS, LANGUAGES, Settings
from .pipeline import SceneOrchestrator, build_orchestrator
from .reference import image_filename

log = logging.getLogger(__name__)


def create_app(orchestrator: Optional[SceneOrchestrator] = None) -> Flask:
    app = Flask(__name__)
    if orchestrator is None:
        orchestrator = build_orchestrator(Settings())
    app.extensions["scene_orchestrator"] = orchestrator

    def _state(status: int = 200):
        return jsonify(orchestrator.state.to_dict()), status

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/options", methods=["GET"])
    def options():
        return jsonify(
            {
                "aspect_ratios": list(ASPECT_RATIOS),
                "languages": LANGUAGES,
                "aspect_ratio": orchestrator.aspect_ratio,
                "language": orchestrator.language,
            }
        )

    @app.route("/api/state", methods=["GET"])
    def state():
        return _state()

    @app.route("/api/scene", methods=["POST"])
    async def generate_scene():
        body = request.get_json(force=True, silent=True) or {}
        reference = (body.get("reference") or "").strip()
        if not reference:
            return jsonify({"error": "reference is required"}), 400
        aspect = body.get("aspect_ratio")
        if aspect:
            if orchestrator.is_loading:
                return _state(409)
            try:
                orchestrator.aspect_ratio = aspect
            except ValueError as exc:
                return jsonify({"error": str(exc)}), 400

        if not await orchestrator.generate_scene(reference):
            return _state(409)
        return _state()

    @app.route("/api/narration", methods=["POST"])
    async def generate_narration():
        body = request.get_json(force=True, silent=True) or {}
        language = body.get("language")
        if language:
            if orchestrator.is_loading:
                return _state(409)
            try:
                orchestrator.language = language
            except ValueError as exc:
                return jsonify({"error": str(exc)}), 400

        if not await orchestrator.generate_narration():
            return _state(409)
        return _state()

    @app.route("/api/next", methods=["POST"])
    def next_verse():
        if orchestrator.next_verse() is None:
            return _state(409)
        return _state()

    @app.route("/api/reset", methods=["POST"])
    def reset():
        orchestrator.reset()
        return _state()

    @app.route("/api/image", methods=["GET"])
    def image():
        current = orchestrator.state
        if current.image is None or current.reference is None:
            return jsonify({"error": "no image"}), 404
        return send_file(
            BytesIO(current.image),
            mimetype="image/jpeg",
            as_attachment=True,
            download_name=image_filename(current.reference),
        )

    @app.route("/api/audio/<handle_id>", methods=["GET"])
    def audio(handle_id: str):
        data = orchestrator.resources.open(handle_id)
        if data is None:
            return jsonify({"error": "audio not found"}), 404
        return send_file(BytesIO(data), mimetype="audio/wav")

    return app
