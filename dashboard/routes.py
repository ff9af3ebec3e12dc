"""
Dashboard Blueprint - HTMX routes for the application tracker page.

Full page:
- GET /                              Profile, applications, education,
                                     publications and suggestions

HTMX partials and form targets:
- GET  /partials/applications        Application rows
- GET  /partials/education           Education rows
- GET  /partials/publications        Publication rows
- GET  /partials/suggestions         Reach/match/safe cards
- POST /profile                      Save profile
- POST /applications                 Add application
- POST /applications/<id>/delete     Delete application
- POST /education                    Create or update education entry
- GET  /education/<id>/edit          Fill the education form from cache
- POST /education/reset              Clear the education form
- POST /education/<id>/delete        Delete education entry
- (same four routes under /publications)

Mutations answer with the refreshed rows plus an out-of-band status
banner. When a list could not be reloaded the response carries only the
banner and tells HTMX not to swap the table.
"""

import logging
from typing import Iterable, Optional

from flask import Blueprint, make_response, render_template, request, session

from .api_client import GradAppClient
from .config import DashboardConfig
from .controller import ActionResult, Alert, DashboardController
from .stores import StateRegistry

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint("dashboard", __name__)

SESSION_VISITOR_KEY = "visitor_id"
SUGGESTIONS_REFRESH_EVENT = "suggestions-refresh"

# (name, label, input type) for the profile form
PROFILE_FIELDS = [
    ("full_name", "Full name", "text"),
    ("target_degree", "Target degree", "text"),
    ("target_term", "Target term", "text"),
    ("intended_major", "Intended major", "text"),
    ("gpa", "GPA", "number"),
    ("gpa_scale", "GPA scale", "number"),
    ("gre_total", "GRE total", "number"),
    ("toefl_total", "TOEFL total", "number"),
    ("research_interests", "Research interests", "text"),
    ("international_student", "International student", "checkbox"),
]

PROFILE_CHECKBOXES = [name for name, _, kind in PROFILE_FIELDS if kind == "checkbox"]

APPLICATION_RESULTS = ["Pending", "Admit", "Waitlist", "Reject"]
JOURNAL_TYPES = ["Journal", "Conference", "Workshop", "Preprint"]
AUTHOR_TYPES = ["First Author", "Co-author"]

_client: Optional[GradAppClient] = None
_registry = StateRegistry()


def get_client() -> GradAppClient:
    """Lazily build the backend client so importing the app needs no configuration."""
    global _client
    if _client is None:
        _client = GradAppClient.from_config(DashboardConfig.from_env())
    return _client


def get_registry() -> StateRegistry:
    return _registry


def get_controller() -> DashboardController:
    """Controller bound to this visitor's cached records and editing state."""
    visitor_id = session.get(SESSION_VISITOR_KEY)
    if not visitor_id:
        visitor_id = StateRegistry.new_key()
        session[SESSION_VISITOR_KEY] = visitor_id
    return DashboardController(get_client(), get_registry().get(visitor_id))


# ============================================================================
# Response helpers
# ============================================================================

def _render_alert(alert: Optional[Alert], oob: bool = True) -> str:
    if alert is None:
        return ""
    return render_template("partials/alert.html", alert=alert, oob=oob)


def _respond(
    result: ActionResult,
    rows_template: str,
    form_template: Optional[str] = None,
    triggers: Iterable[str] = (),
):
    """
    Build the HTMX response for a list load or mutation.

    Primary content is the rows (when reloaded); the banner and a blank
    form (after a successful save) ride along as out-of-band swaps.
    """
    parts = []
    if result.records is not None:
        parts.append(render_template(rows_template, records=result.records))
    parts.append(_render_alert(result.alert))
    if form_template and result.form_reset:
        parts.append(_render_blank_form(form_template))

    response = make_response("".join(parts))
    if result.records is None:
        response.headers["HX-Reswap"] = "none"

    events = list(triggers)
    if result.refresh_suggestions:
        events.append(SUGGESTIONS_REFRESH_EVENT)
    if events:
        response.headers["HX-Trigger"] = ", ".join(events)
    return response


def _render_blank_form(form_template: str, oob: bool = True) -> str:
    return render_template(
        form_template,
        entry={},
        editing=False,
        oob=oob,
        journal_types=JOURNAL_TYPES,
        author_types=AUTHOR_TYPES,
        results=APPLICATION_RESULTS,
    )


# ============================================================================
# Full page
# ============================================================================

@dashboard_bp.route("/")
def index():
    """Render the whole dashboard, loading each flow independently."""
    controller = get_controller()
    # A fresh page starts with both forms in "create" mode
    controller.reset_education_form()
    controller.reset_publication_form()
    view = controller.load_all()
    return render_template(
        "dashboard.html",
        view=view,
        profile_fields=PROFILE_FIELDS,
        results=APPLICATION_RESULTS,
        journal_types=JOURNAL_TYPES,
        author_types=AUTHOR_TYPES,
    )


# ============================================================================
# Profile
# ============================================================================

@dashboard_bp.route("/profile", methods=["POST"])
def save_profile():
    """Save the profile; a successful save also refreshes suggestions."""
    result = get_controller().save_profile(request.form, PROFILE_CHECKBOXES)
    response = make_response(_render_alert(result.alert, oob=False))
    if result.refresh_suggestions:
        response.headers["HX-Trigger"] = SUGGESTIONS_REFRESH_EVENT
    return response


# ============================================================================
# Applications
# ============================================================================

@dashboard_bp.route("/partials/applications", methods=["GET"])
def application_rows():
    """HTMX partial: application table rows (refresh button)."""
    result = get_controller().load_applications()
    return _respond(result, "partials/application_rows.html")


@dashboard_bp.route("/applications", methods=["POST"])
def create_application():
    result = get_controller().create_application(request.form)
    return _respond(
        result,
        "partials/application_rows.html",
        form_template="partials/application_form.html",
    )


@dashboard_bp.route("/applications/<application_id>/delete", methods=["POST"])
def delete_application(application_id: str):
    result = get_controller().delete_application(application_id)
    return _respond(result, "partials/application_rows.html")


# ============================================================================
# Education
# ============================================================================

@dashboard_bp.route("/partials/education", methods=["GET"])
def education_rows():
    """HTMX partial: education table rows."""
    result = get_controller().load_educations()
    return _respond(result, "partials/education_rows.html")


@dashboard_bp.route("/education", methods=["POST"])
def save_education():
    """Update the entry being edited, or create a new one."""
    result = get_controller().save_education(request.form)
    return _respond(
        result,
        "partials/education_rows.html",
        form_template="partials/education_form.html",
    )


@dashboard_bp.route("/education/<education_id>/edit", methods=["GET"])
def edit_education(education_id: str):
    """Fill the education form from the cached record."""
    entry = get_controller().begin_education_edit(education_id)
    if entry is None:
        # Not in the cache: leave the form as it is
        return "", 204
    return render_template("partials/education_form.html", entry=entry, editing=True, oob=False)


@dashboard_bp.route("/education/reset", methods=["POST"])
def reset_education():
    get_controller().reset_education_form()
    return _render_blank_form("partials/education_form.html", oob=False)


@dashboard_bp.route("/education/<education_id>/delete", methods=["POST"])
def delete_education(education_id: str):
    result = get_controller().delete_education(education_id)
    return _respond(
        result,
        "partials/education_rows.html",
        form_template="partials/education_form.html",
    )


# ============================================================================
# Publications
# ============================================================================

@dashboard_bp.route("/partials/publications", methods=["GET"])
def publication_rows():
    """HTMX partial: publication table rows."""
    result = get_controller().load_publications()
    return _respond(result, "partials/publication_rows.html")


@dashboard_bp.route("/publications", methods=["POST"])
def save_publication():
    result = get_controller().save_publication(request.form)
    return _respond(
        result,
        "partials/publication_rows.html",
        form_template="partials/publication_form.html",
    )


@dashboard_bp.route("/publications/<publication_id>/edit", methods=["GET"])
def edit_publication(publication_id: str):
    entry = get_controller().begin_publication_edit(publication_id)
    if entry is None:
        return "", 204
    return render_template(
        "partials/publication_form.html",
        entry=entry,
        editing=True,
        oob=False,
        journal_types=JOURNAL_TYPES,
        author_types=AUTHOR_TYPES,
    )


@dashboard_bp.route("/publications/reset", methods=["POST"])
def reset_publication():
    get_controller().reset_publication_form()
    return _render_blank_form("partials/publication_form.html", oob=False)


@dashboard_bp.route("/publications/<publication_id>/delete", methods=["POST"])
def delete_publication(publication_id: str):
    result = get_controller().delete_publication(publication_id)
    return _respond(
        result,
        "partials/publication_rows.html",
        form_template="partials/publication_form.html",
    )


# ============================================================================
# Suggestions
# ============================================================================

@dashboard_bp.route("/partials/suggestions", methods=["GET"])
def suggestions():
    """HTMX partial: reach/match/safe suggestion cards."""
    result = get_controller().load_suggestions()
    return render_template("partials/suggestions.html", suggestions=result)
