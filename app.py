import atexit
import logging

from scene_app.config import Settings
from scene_app.pipeline import build_orchestrator
from scene_app.server import create_app

settings = Settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
orchestrator = build_orchestrator(settings)
atexit.register(orchestrator.close)
app = create_app(orchestrator)

if __name__ == "__main__":
    # One request at a time per orchestrator.
    app.run(host="0.0.0.0", port=settings.port, debug=True, threaded=False, use_reloader=False)
