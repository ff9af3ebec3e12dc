"""
Flask application for the Graduate Application Dashboard.

Server-rendered dashboard backed by the graduate-application API:
- Profile form
- Applications table (add / delete)
- Education and publication tables with edit-in-place forms
- Reach / match / safe program suggestions

Stack: Flask + HTMX + Bootstrap (CDN)

Run locally: python -m dashboard.app
"""

import logging
import os

from flask import Flask, jsonify, render_template, request

from .config import DashboardConfig
from .controller import ALERT_DANGER, Alert
from .formatting import (
    author_role,
    badge_for_result,
    display_number,
    format_admit_rate,
    format_education_years,
    format_gpa,
    or_dash,
)
from .routes import dashboard_bp

try:
    from version import __version__
    APP_VERSION = __version__
except ImportError:
    APP_VERSION = "dev"

config = DashboardConfig.from_env()

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Session configuration
if not config.secret_key:
    logger.warning(
        "FLASK_SECRET_KEY not set. Generating random key "
        "(sessions will not persist between restarts)"
    )
    config.secret_key = os.urandom(24).hex()

app.secret_key = config.secret_key
app.config["SESSION_COOKIE_HTTPONLY"] = True
app.config["SESSION_COOKIE_SAMESITE"] = "Lax"

app.register_blueprint(dashboard_bp)

app.add_template_filter(format_education_years)
app.add_template_filter(format_gpa)
app.add_template_filter(author_role)
app.add_template_filter(badge_for_result)
app.add_template_filter(format_admit_rate)
app.add_template_filter(or_dash)
app.add_template_filter(display_number)


@app.context_processor
def inject_version():
    """Inject version info into all templates."""
    return {"version": APP_VERSION}


@app.route("/health", methods=["GET"])
def health_check():
    """Liveness probe; does not call the backend."""
    return jsonify({"status": "ok", "version": APP_VERSION})


@app.errorhandler(500)
def internal_error(error):
    """Render unexpected failures in the status banner instead of a bare 500 page."""
    original = getattr(error, "original_exception", None) or error
    logger.exception(f"Unhandled error: {type(original).__name__}: {original}", exc_info=original)
    alert = Alert("Unexpected error, please try again", ALERT_DANGER)
    html = render_template("partials/alert.html", alert=alert, oob=False)
    if request.headers.get("HX-Request"):
        # Whatever the triggering element targeted, land in the banner
        return html, 500, {"HX-Retarget": "#dashboard-alert", "HX-Reswap": "outerHTML"}
    return html, 500


# ============================================================================
# Application Entry Point
# ============================================================================

if __name__ == "__main__":
    print(f"Starting Graduate Application Dashboard on http://localhost:{config.port}")
    print(f"Backend API: {config.api_url}")
    app.run(host="0.0.0.0", port=config.port, debug=config.debug)
