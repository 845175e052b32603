"""
Property-based tests for tenant_backoffice using Hypothesis.

These tests validate universal correctness properties that should hold
for all valid inputs, not just specific examples.
"""

from django.contrib.sessions.backends.cache import SessionStore
from hypothesis import given, settings
from hypothesis import strategies as st

from tenant_backoffice import screens
from tenant_backoffice.session import TenantSession
from tenant_backoffice.utils import as_list, excerpt, filter_records
from tests.strategies import (
    home_page_strategy,
    record_list_strategy,
    tenant_id_strategy,
    text_strategy,
)


hypothesis_settings = settings(
    max_examples=50,
    deadline=None,
)


class TestFilterProperties:
    """Property-based tests for client-side search."""

    @hypothesis_settings
    @given(records=record_list_strategy(), term=text_strategy)
    def test_result_is_subset_in_order(self, records, term):
        """Property 1: Filtering never invents or reorders records."""
        result = filter_records(records, term, ("name", "description"))

        remaining = iter(records)
        assert all(any(record is candidate for candidate in remaining) for record in result)

    @hypothesis_settings
    @given(records=record_list_strategy(), term=text_strategy)
    def test_every_match_contains_term(self, records, term):
        """Property 2: Every kept record contains the term in a searched field."""
        needle = term.strip().lower()
        result = filter_records(records, term, ("name", "description"))

        for record in result:
            assert any(needle in record[field].lower() for field in ("name", "description"))

    @hypothesis_settings
    @given(records=record_list_strategy(), term=text_strategy)
    def test_case_insensitive(self, records, term):
        """Property 3: Upper and lower case terms select the same records."""
        fields = ("name", "description")
        assert filter_records(records, term.upper(), fields) == filter_records(records, term.lower(), fields)

    @hypothesis_settings
    @given(records=record_list_strategy())
    def test_empty_term_keeps_everything(self, records):
        """Property 4: An empty term is no filter."""
        assert filter_records(records, "", ("name",)) == records
        assert filter_records(records, "   ", ("name",)) == records


class TestMergeRecordProperties:
    """Property-based tests for whole-record section saves."""

    @hypothesis_settings
    @given(existing=home_page_strategy(), content=text_strategy)
    def test_siblings_survive_section_save(self, existing, content):
        """Property 5: Saving one section leaves every sibling field unchanged."""
        editor = screens.SupportMessageEditor()

        body = editor.merge_record(existing, {"support_content": content})

        assert body["support_content"] == content
        for name in screens.HOME_PAGE_FIELDS:
            if name != "support_content":
                assert body[name] == existing[name]

    @hypothesis_settings
    @given(
        existing=home_page_strategy(),
        dropped=st.sets(st.sampled_from(sorted(screens.HOME_PAGE_FIELDS))),
    )
    def test_missing_siblings_take_defaults(self, existing, dropped):
        """Property 6: The body always carries every field of the record."""
        for name in dropped:
            existing.pop(name)
        editor = screens.IntroductionEditor()
        owned = {"introduction_content": "Hello"}

        body = editor.merge_record(existing, owned)

        assert set(body) == set(screens.HOME_PAGE_FIELDS)
        for name in dropped - set(owned):
            assert body[name] == screens.HOME_PAGE_FIELDS[name]

    @hypothesis_settings
    @given(owned=st.fixed_dictionaries({
        "welcome_message": text_strategy,
        "page_content": text_strategy,
    }))
    def test_owned_fields_win(self, owned):
        """Property 7: Submitted values replace stored ones."""
        editor = screens.OpportunityContentEditor()
        existing = {name: "stored" for name in screens.OPPORTUNITY_PAGE_FIELDS}

        body = editor.merge_record(existing, owned)

        assert body["welcome_message"] == owned["welcome_message"]
        assert body["page_content"] == owned["page_content"]
        assert body["header_title"] == "stored"


class TestSessionProperties:
    """Property-based tests for the stored tenant context."""

    @hypothesis_settings
    @given(tenant_id=tenant_id_strategy, token=text_strategy)
    def test_login_round_trips(self, tenant_id, token):
        """Property 8: What login stores is what the session reports."""
        tenant_session = TenantSession(SessionStore())
        tenant_session.login(token, int(tenant_id))

        assert tenant_session.token == token
        assert tenant_session.tenant_id == tenant_id
        assert tenant_session.get_client().tenant_path("blogs") == f"/tenants/{tenant_id}/blogs"


class TestUtilityProperties:
    """Property-based tests for payload helpers."""

    @hypothesis_settings
    @given(records=record_list_strategy())
    def test_as_list_unwraps_data(self, records):
        assert as_list(records) == records
        assert as_list({"data": records}) == records

    @hypothesis_settings
    @given(text=st.text(min_size=1))
    def test_excerpt_bounded(self, text):
        result = excerpt(text)
        assert result.endswith("...")
        assert len(result) <= 53
        assert text.startswith(result[:-3])
