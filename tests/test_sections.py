"""
Tests for tenant_backoffice single-record section editors.
"""

import pytest
from django.contrib.messages import get_messages
from django.core.files.uploadedfile import SimpleUploadedFile

from tenant_backoffice.exceptions import ApiError
from tenant_backoffice.screens import HOME_PAGE_FIELDS, OPPORTUNITY_PAGE_FIELDS


HOME_PAGE = "/tenants/42/home-page"
OPPORTUNITY_PAGE = "/tenants/42/opportunity-page"
FOOTER = "/tenants/42/footer/disclaimers"


def messages_of(response):
    return [str(message) for message in get_messages(response.wsgi_request)]


@pytest.fixture
def home_page(backend):
    backend.records[HOME_PAGE] = {
        "id": 1,
        "welcome_description": "Welcome to Acme",
        "introduction_content": "We sell wellness.",
        "introduction_image_url": "/media/intro.png",
        "about_company_title": "About Acme",
        "about_company_content_1": "Founded in 2010.",
        "about_company_content_2": "",
        "about_company_image_url": "/media/about.png",
        "why_network_marketing_title": "Why us",
        "why_network_marketing_content": "Freedom.",
        "opportunity_video_header_title": "Watch",
        "opportunity_video_url": "https://www.youtube.com/embed/abc",
        "support_content": "Call us.",
    }
    return backend.records[HOME_PAGE]


class TestDisplay:
    """Tests for the section display state."""

    def test_shows_owned_fields(self, tenant_client, home_page):
        response = tenant_client.get("/backoffice/home/support-message/")

        assert response.context["record"]["support_content"] == "Call us."
        assert ("Support message", "Call us.") in response.context["rows"]

    def test_missing_record_is_empty_state(self, tenant_client, backend):
        response = tenant_client.get("/backoffice/home/support-message/")

        assert response.context["record"] is None
        assert response.context["failed"] is False
        assert b"Add your first support message." in response.content

    def test_failed_fetch(self, tenant_client, backend):
        backend.errors[("GET", HOME_PAGE)] = ApiError(status_code=500, response_data={"message": "DB down"})

        response = tenant_client.get("/backoffice/home/support-message/")

        assert response.context["failed"] is True
        assert "Failed to load support message: DB down" in messages_of(response)

    def test_edit_form_populated(self, tenant_client, home_page):
        response = tenant_client.get("/backoffice/home/about-company/", {"mode": "edit"})

        initial = response.context["form"].initial
        assert initial["about_company_title"] == "About Acme"
        assert initial["about_company_content_1"] == "Founded in 2010."


class TestWholeRecordReplacement:
    """Saving one section re-submits every sibling field."""

    def test_siblings_unchanged(self, tenant_client, backend, home_page):
        before = dict(home_page)

        tenant_client.post("/backoffice/home/why-network-marketing/", {
            "why_network_marketing_title": "Why network marketing",
            "why_network_marketing_content": "Build your own business.",
        })

        put = backend.calls_to("PUT", HOME_PAGE)[0]
        sent = put.form
        assert sent["why_network_marketing_title"] == "Why network marketing"
        assert sent["why_network_marketing_content"] == "Build your own business."
        for name in HOME_PAGE_FIELDS:
            if not name.startswith("why_network_marketing"):
                assert sent[name] == (before[name] or HOME_PAGE_FIELDS[name])

        stored = backend.records[HOME_PAGE]
        assert stored["support_content"] == "Call us."
        assert stored["introduction_content"] == "We sell wellness."
        assert stored["opportunity_video_url"] == "https://www.youtube.com/embed/abc"

    def test_record_is_refetched_before_write(self, tenant_client, backend, home_page):
        tenant_client.post("/backoffice/home/support-message/", {"support_content": "Email us."})

        methods = [(call.method, call.path) for call in backend.calls]
        assert methods == [
            ("GET", HOME_PAGE),
            ("PUT", HOME_PAGE),
            ("GET", HOME_PAGE),
        ]

    def test_missing_siblings_get_defaults(self, tenant_client, backend):
        backend.records[HOME_PAGE] = {"id": 1, "support_content": "Call us."}

        tenant_client.post("/backoffice/home/introduction/", {"introduction_content": "Hello"})

        sent = backend.calls_to("PUT", HOME_PAGE)[0].form
        assert sent["introduction_content"] == "Hello"
        assert sent["support_content"] == "Call us."
        assert sent["welcome_description"] == "Default welcome"
        assert sent["about_company_title"] == "About Us"

    def test_first_save_creates_record(self, tenant_client, backend):
        response = tenant_client.post("/backoffice/home/support-message/", {"support_content": "Call us."})

        post = backend.calls_to("POST", HOME_PAGE)[0]
        assert post.form["support_content"] == "Call us."
        assert post.form["about_company_title"] == "About Us"
        assert backend.calls_to("PUT") == []
        assert response.context["record"]["support_content"] == "Call us."

    def test_upload_travels_with_siblings(self, tenant_client, backend, home_page):
        image = SimpleUploadedFile("team.png", b"png", content_type="image/png")

        tenant_client.post("/backoffice/home/about-company/", {
            "about_company_title": "About Acme",
            "about_company_content_1": "Founded in 2010.",
            "about_company_image": image,
        })

        put = backend.calls_to("PUT", HOME_PAGE)[0]
        assert set(put.files) == {"about_company_image"}
        assert put.form["support_content"] == "Call us."

    def test_failed_refetch_blocks_write(self, tenant_client, backend, home_page):
        backend.errors[("GET", HOME_PAGE)] = ApiError(status_code=500, response_data={"message": "DB down"})

        response = tenant_client.post("/backoffice/home/support-message/", {"support_content": "Email us."})

        assert backend.calls_to("PUT") == []
        assert backend.calls_to("POST") == []
        assert "Failed to save support message: DB down" in messages_of(response)

    def test_invalid_form_sends_nothing(self, tenant_client, backend, home_page):
        response = tenant_client.post("/backoffice/home/support-message/", {"support_content": ""})

        assert backend.calls == []
        assert "support_content" in response.context["form"].errors


class TestOpportunityVideo:
    URL = "/backoffice/home/opportunity-video/"

    def test_invalid_link_sends_nothing(self, tenant_client, backend, home_page):
        response = tenant_client.post(self.URL, {
            "opportunity_video_header_title": "Watch",
            "opportunity_video_url": "not a youtube link",
        })

        assert backend.calls_to("PUT") == []
        assert backend.calls_to("POST") == []
        assert response.context["form"].errors["opportunity_video_url"] == [
            "Invalid YouTube URL. Please provide a valid link.",
        ]

    def test_video_required_without_existing_one(self, tenant_client, backend):
        response = tenant_client.post(self.URL, {"opportunity_video_header_title": "Watch"})

        assert backend.calls_to("PUT") == []
        assert backend.calls_to("POST") == []
        assert response.context["form"].non_field_errors() == [
            "Please upload a video or provide a YouTube link.",
        ]

    def test_header_only_keeps_existing_video(self, tenant_client, backend, home_page):
        tenant_client.post(self.URL, {"opportunity_video_header_title": "Watch now"})

        sent = backend.calls_to("PUT", HOME_PAGE)[0].form
        assert sent["opportunity_video_header_title"] == "Watch now"
        assert sent["opportunity_video_url"] == "https://www.youtube.com/embed/abc"

    def test_watch_link_stored_as_embed(self, tenant_client, backend, home_page):
        tenant_client.post(self.URL, {
            "opportunity_video_header_title": "Watch",
            "opportunity_video_url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        })

        sent = backend.calls_to("PUT", HOME_PAGE)[0].form
        assert sent["opportunity_video_url"] == "https://www.youtube.com/embed/dQw4w9WgXcQ"
        assert sent["support_content"] == "Call us."

    def test_upload_clears_link(self, tenant_client, backend, home_page):
        video = SimpleUploadedFile("pitch.mp4", b"mp4", content_type="video/mp4")

        tenant_client.post(self.URL, {
            "opportunity_video_header_title": "Watch",
            "opportunity_video": video,
        })

        put = backend.calls_to("PUT", HOME_PAGE)[0]
        assert set(put.files) == {"opportunity_video"}
        assert put.form["opportunity_video_url"] == ""


class TestOpportunityPage:
    """Tests for the opportunity page sections."""

    @pytest.fixture
    def opportunity_page(self, backend):
        backend.records[OPPORTUNITY_PAGE] = {
            "id": 5,
            "welcome_message": "Join the team",
            "page_image_url": "/media/banner.png",
            "page_content": "Earn while you learn.",
            "header_title": "Our plan",
            "video_section_link": "https://www.youtube.com/embed/xyz",
            "plan_document_url": "/media/plan.pdf",
        }
        return backend.records[OPPORTUNITY_PAGE]

    def test_content_save_keeps_banner(self, tenant_client, backend, opportunity_page):
        tenant_client.post("/backoffice/opportunity/content/", {"page_content": "New content"})

        sent = backend.calls_to("PUT", OPPORTUNITY_PAGE)[0].form
        assert sent["page_content"] == "New content"
        assert sent["welcome_message"] == "Join the team"
        assert sent["video_section_link"] == "https://www.youtube.com/embed/xyz"
        assert set(sent) == set(OPPORTUNITY_PAGE_FIELDS)

    def test_video_section_needs_file_or_link(self, tenant_client, backend, opportunity_page):
        response = tenant_client.post("/backoffice/opportunity/video-section/", {"header_title": "Plan"})

        assert backend.calls == []
        assert response.context["form"].non_field_errors() == [
            "Please upload a video file or provide a YouTube link."
        ]

    def test_compensation_plan_must_be_pdf(self, tenant_client, backend, opportunity_page):
        document = SimpleUploadedFile("plan.docx", b"doc", content_type="application/msword")

        response = tenant_client.post("/backoffice/opportunity/compensation-plan/", {
            "plan_document": document,
        })

        assert backend.calls == []
        assert response.context["form"].errors["plan_document"] == ["Please upload a PDF file only."]

    def test_delete_record(self, tenant_client, backend, opportunity_page):
        response = tenant_client.post("/backoffice/opportunity/banner/", {
            "action": "delete",
            "confirm": "yes",
        })

        assert backend.calls_to("DELETE", OPPORTUNITY_PAGE)
        assert OPPORTUNITY_PAGE not in backend.records
        assert response.context["record"] is None


class TestFooterDisclaimers:
    """Tests for the JSON footer section."""

    def test_sent_as_json_with_nulls(self, tenant_client, backend):
        backend.records[FOOTER] = {"site_disclaimer": "Old", "product_disclaimer": None, "income_disclaimer": None}

        tenant_client.post("/backoffice/footer/", {
            "site_disclaimer": "Results vary.",
            "product_disclaimer": "",
            "income_disclaimer": "",
        })

        put = backend.calls_to("PUT", FOOTER)[0]
        assert put.multipart is False
        assert put.body == {
            "site_disclaimer": "Results vary.",
            "product_disclaimer": None,
            "income_disclaimer": None,
        }

    def test_at_least_one_disclaimer(self, tenant_client, backend):
        response = tenant_client.post("/backoffice/footer/", {
            "site_disclaimer": " ",
            "product_disclaimer": "",
            "income_disclaimer": "",
        })

        assert backend.calls == []
        assert response.context["form"].non_field_errors() == ["Please provide at least one disclaimer."]

    def test_not_deletable_sections_ignore_delete(self, tenant_client, backend, home_page):
        tenant_client.post("/backoffice/home/support-message/", {
            "action": "delete",
            "confirm": "yes",
            "support_content": "Still here",
        })

        assert backend.calls_to("DELETE") == []
