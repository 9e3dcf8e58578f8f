"""
app.py
──────
AQUAI Water Quality Monitor — Application Entry Point.

Startup sequence:
  1. Configure logging and initialize the SQLite log store
  2. Build the monitoring session (policy, narrative provider, history)
  3. Create Dash app with DARKLY bootstrap theme + Flask API routes
  4. Register all callbacks
  5. Run dev server (or expose `server` for gunicorn in production)
"""
import logging

import dash
import dash_bootstrap_components as dbc

from config.settings import settings
from src import api
from src.data.store import initialize_db
from src.layout.main import create_layout
from src.session import build_session

# ── 1. Logging + log store ────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("aquai")

initialize_db()
logger.info("Log store ready at %s", settings.DATABASE_URL)

# ── 2. Session ────────────────────────────────────────────────────────────────
session = build_session(settings)
logger.info("Scoring policy: %s", session.pipeline.policy.name)

# ── 3. Dash app ───────────────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.DARKLY],
    suppress_callback_exceptions=True,
    meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    title="AQUAI",
)

server = app.server  # gunicorn entry point
api.register(server)
app.layout = create_layout()

# ── 4. Register callbacks ─────────────────────────────────────────────────────
from src.callbacks import dashboard, dataset, history, navigation

navigation.register(app, session)
dashboard.register(app, session)
history.register(app, session)
dataset.register(app)

# ── 5. Run ────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    app.run(
        debug=settings.DEBUG,
        host=settings.HOST,
        port=settings.PORT,
    )
