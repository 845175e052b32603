"""
Multi-step tenant settings wizard.

Steps: Domain Details, Agent Basic Information, Site Identity,
Distributor Details, Update. The step index and the accumulated fields
live in the session between requests; an uploaded site logo is parked
in the default file storage until the final submission.
"""

import logging

from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile

from tenant_backoffice import forms
from tenant_backoffice.conf import backoffice_settings
from tenant_backoffice.editors import BackofficeScreen
from tenant_backoffice.exceptions import ApiError, AuthenticationError
from tenant_backoffice.notifications import notify_error, notify_info, notify_success

logger = logging.getLogger(__name__)


STEPS = (
    ("Domain Details", forms.DomainDetailsForm),
    ("Agent Basic Information", forms.AgentInformationForm),
    ("Site Identity", forms.SiteIdentityForm),
    ("Distributor Details", forms.DistributorDetailsForm),
    ("Update", forms.ReviewForm),
)

# Labels of the current-settings display
SETTINGS_DISPLAY = (
    ("site_name", "Site Name"),
    ("website_link", "Website Link"),
    ("email_id", "Email"),
    ("mobile", "Mobile"),
    ("address", "Address"),
    ("publish_on_site", "Publish on Site"),
    ("skype", "Skype"),
    ("nht_website_link", "NHT Website Link"),
    ("nht_store_link", "NHT Store Link"),
    ("nht_joining_link", "NHT Joining Link"),
)

# Backend field carrying the site logo upload
LOGO_UPLOAD_FIELD = "files"


class WizardState:
    """
    Step index, accumulated fields and parked logo of one wizard run.

    Backed by a session entry; ``active`` is False until the user
    starts editing.
    """

    def __init__(self, session, key: str):
        self._session = session
        self._key = key

    @property
    def _state(self) -> dict:
        return self._session.get(self._key) or {}

    @property
    def active(self) -> bool:
        return self._key in self._session

    @property
    def step(self) -> int:
        return self._state.get("step", 0)

    @property
    def data(self) -> dict:
        return dict(self._state.get("data") or {})

    @property
    def logo(self):
        return self._state.get("logo")

    def start(self, data: dict):
        self._session[self._key] = {"step": 0, "data": data, "logo": None}

    def update(self, **changes):
        state = dict(self._state)
        state.update(changes)
        self._session[self._key] = state

    def forward(self, cleaned: dict):
        data = self.data
        data.update(cleaned)
        self.update(data=data, step=min(self.step + 1, len(STEPS) - 1))

    def back(self):
        self.update(step=max(self.step - 1, 0))

    def reset(self):
        logo = self.logo
        if logo:
            default_storage.delete(logo["path"])
        self._session.pop(self._key, None)


class SettingsWizardView(BackofficeScreen):
    """Current settings display plus the five-step edit wizard."""

    title = "Settings"
    display_template_name = "tenant_backoffice/wizard/display.html"
    step_template_name = "tenant_backoffice/wizard/step.html"

    @property
    def state(self) -> WizardState:
        return WizardState(
            self.request.session,
            f"tenant_backoffice:wizard:{self.tenant_session.tenant_id}",
        )

    def get_settings_path(self) -> str:
        return self.client.tenant_path("settings")

    def fetch_settings(self):
        result = self.client.fetch(self.get_settings_path())
        if result.failed:
            notify_error(self.request, result, "Failed to load settings")
        return result

    def get(self, request, *args, **kwargs):
        mode = request.GET.get("mode")
        state = self.state

        if mode == "edit":
            settings = self.fetch_settings().unwrap_or({}) or {}
            state.reset()
            state.start(self.initial_data(settings))
        elif mode == "cancel":
            state.reset()

        if state.active:
            return self.render_step(state)
        return self.render_display(self.fetch_settings())

    def post(self, request, *args, **kwargs):
        state = self.state
        if not state.active:
            return self.render_display(self.fetch_settings())

        action = request.POST.get("action", "next")
        if action == "back":
            state.back()
            return self.render_step(state)
        if action == "cancel":
            state.reset()
            notify_info(request, "Settings edit cancelled.")
            return self.render_display(self.fetch_settings())

        form = self.get_step_form(state, data=request.POST, files=request.FILES)
        if not form.is_valid():
            return self.render_step(state, form=form)

        if state.step < len(STEPS) - 1:
            cleaned = dict(form.cleaned_data)
            logo = cleaned.pop("site_logo", None)
            if logo:
                self.park_logo(state, logo)
            state.forward(cleaned)
            return self.render_step(state)

        return self.submit(state)

    def initial_data(self, settings: dict) -> dict:
        """Wizard fields pre-filled from the current settings."""
        data = {}
        for _, form_class in STEPS:
            for name in form_class.base_fields:
                if name != "site_logo" and settings.get(name) is not None:
                    data[name] = settings[name]
        return data

    def get_step_form(self, state: WizardState, data=None, files=None):
        form_class = STEPS[state.step][1]
        if data is not None:
            return form_class(data, files)
        return form_class(initial=state.data)

    def park_logo(self, state: WizardState, upload):
        if state.logo:
            default_storage.delete(state.logo["path"])
        directory = f"{backoffice_settings.WIZARD_UPLOAD_DIR}/{self.tenant_session.tenant_id}"
        path = default_storage.save(f"{directory}/{upload.name}", upload)
        state.update(logo={
            "path": path,
            "name": upload.name,
            "content_type": getattr(upload, "content_type", None) or "application/octet-stream",
        })

    def parked_logo(self, state: WizardState):
        logo = state.logo
        if not logo:
            return None
        with default_storage.open(logo["path"], "rb") as handle:
            return SimpleUploadedFile(logo["name"], handle.read(), logo["content_type"])

    def submit(self, state: WizardState):
        """Send the accumulated fields as one multipart PUT."""
        body = {key: value for key, value in state.data.items() if value is not None}
        files = {}
        logo = self.parked_logo(state)
        if logo is not None:
            files[LOGO_UPLOAD_FIELD] = logo

        try:
            self.client.put(self.get_settings_path(), body, multipart=True, files=files)
        except AuthenticationError:
            raise
        except ApiError as exc:
            notify_error(self.request, exc, "Failed to update settings")
            return self.render_step(state, submit_error=exc.display_message("Failed to update settings"))

        logger.info("Settings updated for tenant %s", self.tenant_session.tenant_id)
        notify_success(self.request, "Settings updated successfully!")
        state.reset()
        return self.render_display(self.fetch_settings())

    def render_step(self, state: WizardState, form=None, submit_error=None):
        step = state.step
        if form is None:
            form = self.get_step_form(state)
        review = [
            (name.replace("_", " "), value if value not in (None, "") else "N/A")
            for name, value in state.data.items()
        ]
        if state.logo:
            review.append(("site logo", state.logo["name"]))
        return self.render(
            self.step_template_name,
            form=form,
            step=step,
            step_title=STEPS[step][0],
            steps=[title for title, _ in STEPS],
            is_first=step == 0,
            is_last=step == len(STEPS) - 1,
            progress=int(step * 100 / (len(STEPS) - 1)),
            review=review,
            logo=state.logo,
            submit_error=submit_error,
        )

    def render_display(self, result):
        settings = result.unwrap_or({}) or {}
        rows = []
        for name, label in SETTINGS_DISPLAY:
            value = settings.get(name)
            if name == "publish_on_site":
                value = "Yes" if value else "No"
            rows.append((label, value if value not in (None, "") else "N/A"))
        return self.render(
            self.display_template_name,
            settings=settings,
            rows=rows,
            site_logo_url=settings.get("site_logo_url"),
            failed=result.failed,
        )
