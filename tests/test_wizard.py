"""
Tests for the tenant settings wizard.
"""

import pytest
from django.contrib.messages import get_messages
from django.core.files.uploadedfile import SimpleUploadedFile

from tenant_backoffice.exceptions import ApiError
from tenant_backoffice.wizard import STEPS
from tests.fakes import unauthorized


SETTINGS = "/tenants/42/settings"
URL = "/backoffice/settings/"
STATE_KEY = "tenant_backoffice:wizard:42"

DOMAIN = {
    "domain_type": "primary_domain",
    "primary_domain_name": "acme.example",
    "sub_domain": "",
    "website_link": "https://acme.example",
}
AGENT = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email_id": "ada@acme.example",
    "mobile": "555-0100",
    "address": "1 Main St",
    "skype": "",
    "publish_on_site": "on",
}
IDENTITY = {"site_name": "Acme Wellness"}
DISTRIBUTOR = {
    "nht_website_link": "",
    "nht_store_link": "https://store.example",
    "nht_joining_link": "",
}


def messages_of(response):
    return [str(message) for message in get_messages(response.wsgi_request)]


@pytest.fixture
def settings_record(backend):
    backend.records[SETTINGS] = {
        "site_name": "Acme",
        "email_id": "old@acme.example",
        "first_name": "Ada",
        "publish_on_site": True,
        "site_logo_url": "/media/logo.png",
        "mobile": "",
    }
    return backend.records[SETTINGS]


@pytest.fixture
def editing(tenant_client, settings_record):
    tenant_client.get(URL, {"mode": "edit"})
    return tenant_client


def walk_to_review(client, logo=None):
    client.post(URL, DOMAIN)
    client.post(URL, AGENT)
    identity = dict(IDENTITY)
    if logo is not None:
        identity["site_logo"] = logo
    client.post(URL, identity)
    return client.post(URL, DISTRIBUTOR)


class TestDisplay:
    """Tests for the current settings display."""

    def test_rows(self, tenant_client, settings_record):
        response = tenant_client.get(URL)

        rows = dict(response.context["rows"])
        assert rows["Site Name"] == "Acme"
        assert rows["Publish on Site"] == "Yes"
        assert rows["Mobile"] == "N/A"
        assert response.context["site_logo_url"] == "/media/logo.png"

    def test_failed_load(self, tenant_client, backend):
        backend.errors[("GET", SETTINGS)] = ApiError(status_code=500, response_data={"message": "DB down"})

        response = tenant_client.get(URL)

        assert response.context["failed"] is True
        assert "Failed to load settings: DB down" in messages_of(response)


class TestSteps:
    """Tests for step navigation."""

    def test_edit_starts_at_first_step_prefilled(self, editing):
        response = editing.get(URL)

        assert response.context["step"] == 0
        assert response.context["step_title"] == "Domain Details"
        assert editing.session[STATE_KEY]["data"]["site_name"] == "Acme"
        assert "site_logo_url" not in editing.session[STATE_KEY]["data"]

    def test_invalid_step_does_not_advance(self, editing):
        response = editing.post(URL, {"domain_type": "", "primary_domain_name": ""})

        assert response.context["step"] == 0
        assert response.context["form"].errors["domain_type"] == ["Domain type is required"]
        assert response.context["form"].errors["primary_domain_name"] == ["Primary domain is required"]

    def test_sub_domain_required_for_sub_domain_type(self, editing):
        response = editing.post(URL, dict(DOMAIN, domain_type="sub_domain"))

        assert response.context["step"] == 0
        assert response.context["form"].errors["sub_domain"] == ["Sub domain is required"]

    def test_valid_step_advances(self, editing):
        response = editing.post(URL, DOMAIN)

        assert response.context["step"] == 1
        assert response.context["step_title"] == "Agent Basic Information"
        assert response.context["progress"] == 25

    def test_back(self, editing):
        editing.post(URL, DOMAIN)

        response = editing.post(URL, {"action": "back"})

        assert response.context["step"] == 0
        assert response.context["form"].initial["primary_domain_name"] == "acme.example"

    def test_back_stops_at_first_step(self, editing):
        response = editing.post(URL, {"action": "back"})
        assert response.context["step"] == 0

    def test_review_step_lists_values(self, editing):
        response = walk_to_review(editing)

        assert response.context["step"] == len(STEPS) - 1
        assert response.context["is_last"] is True
        review = dict(response.context["review"])
        assert review["site name"] == "Acme Wellness"
        assert review["skype"] == "N/A"

    def test_cancel(self, editing, backend):
        response = editing.post(URL, {"action": "cancel"})

        assert STATE_KEY not in editing.session
        assert "Settings edit cancelled." in messages_of(response)
        assert not backend.calls_to("PUT")


class TestLogo:
    """Tests for the parked site logo."""

    def test_logo_is_parked_between_steps(self, editing):
        logo = SimpleUploadedFile("logo.png", b"png-bytes", content_type="image/png")

        response = walk_to_review(editing, logo=logo)

        parked = editing.session[STATE_KEY]["logo"]
        assert parked["name"] == "logo.png"
        assert parked["content_type"] == "image/png"
        assert ("site logo", "logo.png") in response.context["review"]

    def test_invalid_logo_blocks_step(self, editing):
        editing.post(URL, DOMAIN)
        editing.post(URL, AGENT)
        logo = SimpleUploadedFile("logo.gif", b"gif", content_type="image/gif")

        response = editing.post(URL, dict(IDENTITY, site_logo=logo))

        assert response.context["step"] == 2
        assert response.context["form"].errors["site_logo"] == ["Please upload a JPEG, JPG, or PNG image."]


class TestSubmit:
    """Tests for the final submission."""

    def test_single_multipart_put(self, editing, backend):
        logo = SimpleUploadedFile("logo.png", b"png-bytes", content_type="image/png")
        walk_to_review(editing, logo=logo)

        response = editing.post(URL, {"action": "save"})

        puts = backend.calls_to("PUT", SETTINGS)
        assert len(puts) == 1
        put = puts[0]
        assert put.multipart is True
        assert put.form["site_name"] == "Acme Wellness"
        assert put.form["primary_domain_name"] == "acme.example"
        assert put.form["publish_on_site"] == "true"
        assert set(put.files) == {"files"}
        assert put.files["files"].read() == b"png-bytes"

        assert "Settings updated successfully!" in messages_of(response)
        assert STATE_KEY not in editing.session
        assert dict(response.context["rows"])["Site Name"] == "Acme Wellness"

    def test_without_logo_sends_no_file(self, editing, backend):
        walk_to_review(editing)

        editing.post(URL, {"action": "save"})

        assert backend.calls_to("PUT", SETTINGS)[0].files == {}

    def test_failure_keeps_wizard_open(self, editing, backend):
        walk_to_review(editing)
        backend.errors[("PUT", SETTINGS)] = ApiError(status_code=400, response_data={"message": "Invalid domain"})

        response = editing.post(URL, {"action": "save"})

        assert response.context["submit_error"] == "Invalid domain"
        assert "Failed to update settings: Invalid domain" in messages_of(response)
        assert editing.session[STATE_KEY]["step"] == len(STEPS) - 1

    def test_rejected_token_logs_out(self, editing, backend):
        walk_to_review(editing)
        backend.errors[("PUT", SETTINGS)] = unauthorized()

        response = editing.post(URL, {"action": "save"})

        assert response.status_code == 302
        assert response.url == "/backoffice-login"
        assert "token" not in editing.session
