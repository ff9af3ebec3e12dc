"""
Dashboard controller.

Each operation follows the same contract: call the backend, reload the
affected list on success, and turn any ApiError into an alert banner
instead of raising. Routes render whatever the result carries.

Education and publications share the edit/create duality implemented by
SubResourceFlow: a submit updates the record being edited when there is
one, and creates a new record otherwise.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from .api_client import ApiError, GradAppClient
from .models import SUGGESTION_SECTIONS, SuggestionBuckets
from .payloads import (
    CO_AUTHOR,
    FIRST_AUTHOR,
    application_payload,
    education_payload,
    profile_payload,
    publication_payload,
)
from .stores import ControllerState, EditingState, RecordStore, normalize_id

logger = logging.getLogger(__name__)

ALERT_SUCCESS = "success"
ALERT_INFO = "info"
ALERT_DANGER = "danger"


@dataclass
class Alert:
    """Message for the shared status banner."""
    message: str
    level: str = ALERT_INFO

    @property
    def css_class(self) -> str:
        return f"alert alert-{self.level}"


@dataclass
class ProfileResult:
    profile: Dict[str, Any] = field(default_factory=dict)
    alert: Optional[Alert] = None


@dataclass
class ActionResult:
    """
    Outcome of a load or mutation.

    records is the reloaded list, or None when the list was not reloaded
    (the operation failed before or during the reload).
    """
    records: Optional[List[Dict[str, Any]]] = None
    alert: Optional[Alert] = None
    succeeded: bool = False
    refresh_suggestions: bool = False
    form_reset: bool = False


@dataclass
class SuggestionsResult:
    buckets: Optional[SuggestionBuckets] = None
    error: Optional[str] = None


@dataclass
class DashboardView:
    """Everything the full page needs, loaded flow by flow."""
    profile: Dict[str, Any]
    applications: List[Dict[str, Any]]
    educations: List[Dict[str, Any]]
    publications: List[Dict[str, Any]]
    suggestions: SuggestionsResult
    alert: Optional[Alert] = None


def _danger(error: Exception, prefix: str = "") -> Alert:
    return Alert(f"{prefix}{error}", ALERT_DANGER)


class SubResourceFlow:
    """
    CRUD flow for a list of records edited through a single form.

    Args:
        name: Resource name used in log lines
        list_records / create / update / delete: Backend calls
        build_payload: Serializes the submitted form
        store: Cache of the last fetched records
        editing: Edit-vs-create state, used when the form carries no
            `<name>_id` field
        saved_message / deleted_message: Success banners
    """

    def __init__(
        self,
        name: str,
        list_records: Callable[[], List[Dict[str, Any]]],
        create: Callable[[Dict[str, Any]], Any],
        update: Callable[[Any, Dict[str, Any]], Any],
        delete: Callable[[Any], Any],
        build_payload: Callable[[Mapping[str, Any]], Dict[str, Any]],
        store: RecordStore,
        editing: EditingState,
        saved_message: str,
        deleted_message: str,
    ):
        self.name = name
        self.id_field = f"{name}_id"
        self._list = list_records
        self._create = create
        self._update = update
        self._delete = delete
        self._build_payload = build_payload
        self.store = store
        self.editing = editing
        self.saved_message = saved_message
        self.deleted_message = deleted_message

    def load(self) -> ActionResult:
        """Fetch the list and rebuild the record cache."""
        try:
            records = self._list()
        except ApiError as e:
            return ActionResult(alert=_danger(e))
        self.store.replace(records)
        return ActionResult(records=records, succeeded=True)

    def save(self, form: Mapping[str, Any]) -> ActionResult:
        """Update the record being edited, or create a new one."""
        # Submitted hidden id decides update vs create; server state is the fallback
        if self.id_field in form:
            editing_id = normalize_id(form.get(self.id_field))
        else:
            editing_id = self.editing.editing_id
        payload = self._build_payload(form)
        try:
            if editing_id is not None:
                logger.info(f"Updating {self.name} {editing_id}")
                self._update(editing_id, payload)
            else:
                logger.info(f"Creating {self.name}")
                self._create(payload)
        except ApiError as e:
            return ActionResult(alert=_danger(e))

        self.reset()
        return self._reload_after(Alert(self.saved_message, ALERT_SUCCESS), form_reset=True)

    def delete(self, record_id: Any) -> ActionResult:
        """Delete without confirmation; resets the form if it was editing this record."""
        if record_id is None or str(record_id).strip() == "":
            return ActionResult()
        try:
            logger.info(f"Deleting {self.name} {record_id}")
            self._delete(record_id)
        except ApiError as e:
            return ActionResult(alert=_danger(e))

        form_reset = False
        if self.editing.is_editing(record_id):
            self.reset()
            form_reset = True
        return self._reload_after(Alert(self.deleted_message, ALERT_INFO), form_reset=form_reset)

    def begin_edit(self, record_id: Any) -> Optional[Dict[str, Any]]:
        """
        Load a cached record into the form without another backend call.

        Returns:
            The record, or None (with state unchanged) when it is not cached
        """
        record = self.store.get(record_id)
        if record is None:
            return None
        self.editing.begin(record.get("id"))
        return record

    def reset(self) -> None:
        self.editing.reset()

    def _reload_after(self, alert: Alert, form_reset: bool) -> ActionResult:
        reloaded = self.load()
        if not reloaded.succeeded:
            # The mutation went through; only the reload failed
            return ActionResult(alert=reloaded.alert, succeeded=True, form_reset=form_reset)
        return ActionResult(
            records=reloaded.records,
            alert=alert,
            succeeded=True,
            form_reset=form_reset,
        )


class DashboardController:
    """Page controller for the profile, applications, education, publications and suggestions flows."""

    def __init__(self, client: GradAppClient, state: ControllerState):
        self.client = client
        self.state = state
        self.education = SubResourceFlow(
            name="education",
            list_records=client.list_education,
            create=client.create_education,
            update=client.update_education,
            delete=client.delete_education,
            build_payload=education_payload,
            store=state.education_store,
            editing=state.education_editing,
            saved_message="Education saved",
            deleted_message="Education entry deleted",
        )
        self.publications = SubResourceFlow(
            name="publication",
            list_records=client.list_publications,
            create=client.create_publication,
            update=client.update_publication,
            delete=client.delete_publication,
            build_payload=publication_payload,
            store=state.publication_store,
            editing=state.publication_editing,
            saved_message="Publication saved",
            deleted_message="Publication deleted",
        )

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def load_profile(self) -> ProfileResult:
        try:
            return ProfileResult(profile=self.client.get_profile())
        except ApiError as e:
            return ProfileResult(alert=_danger(e))

    def save_profile(self, form: Mapping[str, Any], checkbox_fields: Iterable[str] = ()) -> ActionResult:
        payload = profile_payload(form, checkbox_fields)
        try:
            self.client.update_profile(payload)
        except ApiError as e:
            return ActionResult(alert=_danger(e, prefix="Error: "))
        logger.info("Profile saved")
        return ActionResult(
            alert=Alert("Profile saved successfully!", ALERT_SUCCESS),
            succeeded=True,
            refresh_suggestions=True,
        )

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------

    def load_applications(self) -> ActionResult:
        try:
            records = self.client.list_applications()
        except ApiError as e:
            return ActionResult(alert=_danger(e))
        return ActionResult(records=records, succeeded=True)

    def create_application(self, form: Mapping[str, Any]) -> ActionResult:
        payload = application_payload(form)
        try:
            self.client.create_application(payload)
        except ApiError as e:
            return ActionResult(alert=_danger(e))
        logger.info(f"Application added: {payload.get('university')} / {payload.get('program')}")
        return self._reload_applications(Alert("Application added", ALERT_SUCCESS), form_reset=True)

    def delete_application(self, application_id: Any) -> ActionResult:
        if application_id is None or str(application_id).strip() == "":
            return ActionResult()
        try:
            self.client.delete_application(application_id)
        except ApiError as e:
            return ActionResult(alert=_danger(e))
        logger.info(f"Application deleted: {application_id}")
        return self._reload_applications(Alert("Application deleted", ALERT_INFO))

    def _reload_applications(self, alert: Alert, form_reset: bool = False) -> ActionResult:
        reloaded = self.load_applications()
        return ActionResult(
            records=reloaded.records,
            alert=reloaded.alert or alert,
            succeeded=True,
            refresh_suggestions=True,
            form_reset=form_reset,
        )

    # ------------------------------------------------------------------
    # Education
    # ------------------------------------------------------------------

    def load_educations(self) -> ActionResult:
        return self.education.load()

    def save_education(self, form: Mapping[str, Any]) -> ActionResult:
        return self.education.save(form)

    def delete_education(self, education_id: Any) -> ActionResult:
        return self.education.delete(education_id)

    def begin_education_edit(self, education_id: Any) -> Optional[Dict[str, Any]]:
        return self.education.begin_edit(education_id)

    def reset_education_form(self) -> None:
        self.education.reset()

    # ------------------------------------------------------------------
    # Publications
    # ------------------------------------------------------------------

    def load_publications(self) -> ActionResult:
        return self.publications.load()

    def save_publication(self, form: Mapping[str, Any]) -> ActionResult:
        return self.publications.save(form)

    def delete_publication(self, publication_id: Any) -> ActionResult:
        return self.publications.delete(publication_id)

    def begin_publication_edit(self, publication_id: Any) -> Optional[Dict[str, Any]]:
        record = self.publications.begin_edit(publication_id)
        if record is None:
            return None
        values = dict(record)
        if not values.get("author_type"):
            values["author_type"] = FIRST_AUTHOR if values.get("first_author") else CO_AUTHOR
        return values

    def reset_publication_form(self) -> None:
        self.publications.reset()

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    def load_suggestions(self) -> SuggestionsResult:
        """
        Fetch reach/match/safe suggestions.

        Failures are reported in the result's error rather than as a banner,
        since the suggestions panel shows its own error text.
        """
        try:
            data = self.client.get_suggestions()
            buckets = SuggestionBuckets(
                **{section: data.get(section) or [] for section in SUGGESTION_SECTIONS}
            )
        except ApiError as e:
            return SuggestionsResult(error=str(e))
        except ValidationError as e:
            logger.warning(f"Malformed suggestions response: {e}")
            return SuggestionsResult(error="Request failed")
        return SuggestionsResult(buckets=buckets)

    # ------------------------------------------------------------------
    # Page load
    # ------------------------------------------------------------------

    def load_all(self) -> DashboardView:
        """
        Load every flow for the full page.

        Flows fail independently; the banner shows the last failure, as
        each failing flow overwrites the one before it.
        """
        profile = self.load_profile()
        applications = self.load_applications()
        suggestions = self.load_suggestions()
        educations = self.load_educations()
        publications = self.load_publications()

        alert = None
        for result in (profile, applications, educations, publications):
            if result.alert is not None:
                alert = result.alert

        return DashboardView(
            profile=profile.profile,
            applications=applications.records or [],
            educations=educations.records or [],
            publications=publications.records or [],
            suggestions=suggestions,
            alert=alert,
        )
