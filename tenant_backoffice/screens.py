"""
Concrete backoffice editor screens.

Each screen is a configuration of one of the generic editors in
``tenant_backoffice.editors``.
"""

from tenant_backoffice import forms
from tenant_backoffice.editors import (
    LocalCollectionEditorView,
    ResourceEditorView,
    SectionEditorView,
)
from tenant_backoffice.exceptions import ApiError, AuthenticationError
from tenant_backoffice.notifications import notify_error, notify_success
from tenant_backoffice.utils import as_list


# ---------------------------------------------------------------------------
# List resources
# ---------------------------------------------------------------------------

class CategoryEditor(ResourceEditorView):
    title = "Categories"
    resource_path = "categories"
    form_class = forms.CategoryForm
    verbose_name = "category"
    verbose_name_plural = "categories"
    search_fields = ("name", "description")
    list_columns = (("name", "Name"), ("description", "Description"), ("status", "Status"))
    fetch_error_message = "Failed to load categories"


class ProductEditor(ResourceEditorView):
    title = "Products"
    resource_path = "products"
    form_class = forms.ProductForm
    verbose_name = "product"
    verbose_name_plural = "products"
    search_fields = ("name", "category_name")
    list_columns = (
        ("name", "Name"),
        ("category_name", "Category"),
        ("price", "Price"),
        ("availability", "Availability"),
        ("status", "Status"),
    )
    fetch_error_message = "Failed to load products"

    def get_categories(self):
        if not hasattr(self, "_categories"):
            try:
                self._categories = as_list(self.client.get_all(self.client.tenant_path("categories")))
            except AuthenticationError:
                raise
            except ApiError as exc:
                notify_error(self.request, exc, "Failed to load categories")
                self._categories = []
        return self._categories

    def get_form_kwargs(self, editing=False):
        return {
            "category_choices": [
                (str(category.get("id")), category.get("name") or "Unnamed Category")
                for category in self.get_categories()
            ],
        }

    def load_records(self):
        records, error = super().load_records()
        names = {str(category.get("id")): category.get("name") for category in self.get_categories()}
        for record in records:
            if not record.get("category_name"):
                record["category_name"] = names.get(str(record.get("category_id")), "")
        return records, error


class BlogEditor(ResourceEditorView):
    title = "Blogs"
    resource_path = "blogs"
    form_class = forms.BlogForm
    verbose_name = "blog"
    verbose_name_plural = "blogs"
    search_fields = ("title", "content")
    list_columns = (("title", "Title"), ("is_visible", "Visible"), ("created_at", "Created"))
    row_actions = (
        ("Banners", "{screen}{id}/banners/"),
        ("Comments", "{screen}{id}/comments/"),
    )
    fetch_error_message = "Failed to load blogs"


class BlogBannerEditor(ResourceEditorView):
    title = "Blog banners"
    resource_path = "blogs/{blog_id}/banners"
    form_class = forms.BannerForm
    verbose_name = "banner"
    verbose_name_plural = "banners"
    search_fields = ("image_content",)
    list_columns = (("image_content", "Text"), ("image_url", "Image"))
    fetch_error_message = "Failed to load banners"

    def get_form_kwargs(self, editing=False):
        return {"is_edit": editing}


class ContactPageEditor(ResourceEditorView):
    title = "Contact us"
    resource_path = "contactus"
    form_class = forms.ContactPageForm
    verbose_name = "contact page"
    verbose_name_plural = "contact pages"
    search_fields = ("contactus_text",)
    list_columns = (("contactus_text", "Text"), ("contactus_image_url", "Image"))
    fetch_error_message = "Failed to load contact pages"


# ---------------------------------------------------------------------------
# Home page sections (one "home-page" record per tenant)
# ---------------------------------------------------------------------------

HOME_PAGE_FIELDS = {
    "welcome_description": "Default welcome",
    "introduction_content": "Default introduction",
    "introduction_image_url": "",
    "about_company_title": "About Us",
    "about_company_content_1": "Default content",
    "about_company_content_2": "",
    "about_company_image_url": "",
    "why_network_marketing_title": "Why Network Marketing",
    "why_network_marketing_content": "Default why content",
    "opportunity_video_header_title": "Opportunity Video",
    "opportunity_video_url": "",
    "support_content": "Default support content",
}


class HomePageSectionEditor(SectionEditorView):
    resource_path = "home-page"
    record_fields = HOME_PAGE_FIELDS


class IntroductionEditor(HomePageSectionEditor):
    title = "Home page: introduction"
    form_class = forms.IntroductionForm
    verbose_name = "introduction"
    empty_message = "Add your first introduction."


class AboutCompanyEditor(HomePageSectionEditor):
    title = "Home page: about company"
    form_class = forms.AboutCompanyForm
    verbose_name = "about company section"
    empty_message = "Add your company story."


class WhyNetworkMarketingEditor(HomePageSectionEditor):
    title = "Home page: why network marketing"
    form_class = forms.WhyNetworkMarketingForm
    verbose_name = "why network marketing section"
    empty_message = "Explain why network marketing works."


class OpportunityVideoEditor(HomePageSectionEditor):
    title = "Home page: opportunity video"
    form_class = forms.OpportunityVideoForm
    verbose_name = "opportunity video"
    empty_message = "Add your first opportunity video."

    def get_form_kwargs(self):
        record = self.fetch_record().unwrap_or({}) or {}
        return {"existing_video_url": record.get("opportunity_video_url")}


class SupportMessageEditor(HomePageSectionEditor):
    title = "Home page: support message"
    form_class = forms.SupportMessageForm
    verbose_name = "support message"
    empty_message = "Add your first support message."


# ---------------------------------------------------------------------------
# Opportunity page sections (one "opportunity-page" record per tenant)
# ---------------------------------------------------------------------------

OPPORTUNITY_PAGE_FIELDS = {
    "welcome_message": "Welcome",
    "page_image_url": "",
    "page_content": "",
    "header_title": "Compensation Plan",
    "video_section_link": "",
    "plan_document_url": "",
}


class OpportunityPageSectionEditor(SectionEditorView):
    resource_path = "opportunity-page"
    record_fields = OPPORTUNITY_PAGE_FIELDS
    deletable = True


class OpportunityBannerEditor(OpportunityPageSectionEditor):
    title = "Opportunity: page banner"
    form_class = forms.OpportunityBannerForm
    verbose_name = "opportunity banner"
    empty_message = "Add your first opportunity banner."


class OpportunityContentEditor(OpportunityPageSectionEditor):
    title = "Opportunity: page content"
    form_class = forms.OpportunityContentForm
    verbose_name = "opportunity page content"
    empty_message = "Add your first opportunity page content."


class OpportunityVideoSectionEditor(OpportunityPageSectionEditor):
    title = "Opportunity: video section"
    form_class = forms.OpportunityVideoSectionForm
    verbose_name = "video section"
    empty_message = "Add your first opportunity video."


class CompensationPlanEditor(OpportunityPageSectionEditor):
    title = "Opportunity: compensation plan"
    form_class = forms.CompensationPlanForm
    verbose_name = "compensation plan"
    empty_message = "Upload your compensation plan."


# ---------------------------------------------------------------------------
# Other single-record resources
# ---------------------------------------------------------------------------

class ProductPageEditor(SectionEditorView):
    title = "About products page"
    resource_path = "product-page"
    form_class = forms.ProductPageForm
    record_fields = {
        "banner_content": "",
        "banner_image_url": "",
        "about_description": "",
        "video_section_link": "",
    }
    verbose_name = "product page"
    empty_message = "Add your product page content."


class FooterDisclaimerEditor(SectionEditorView):
    title = "Footer disclaimers"
    resource_path = "footer/disclaimers"
    form_class = forms.FooterDisclaimerForm
    record_fields = {
        "site_disclaimer": None,
        "product_disclaimer": None,
        "income_disclaimer": None,
    }
    multipart = False
    deletable = True
    verbose_name = "disclaimers"
    empty_message = "Add your first disclaimer."


# ---------------------------------------------------------------------------
# Session-held collections
# ---------------------------------------------------------------------------

class TestimonialEditor(LocalCollectionEditorView):
    title = "Testimonials"
    session_key = "testimonials"
    form_class = forms.TestimonialForm
    verbose_name = "testimonial"
    verbose_name_plural = "testimonials"
    search_fields = ("content", "author")
    list_columns = (("content", "Content"), ("author", "Author"), ("created_at", "Created"))
    seed = (
        {"id": 1, "content": "Great service!", "author": "John Doe", "created_at": "2025-03-01 10:00:00"},
        {"id": 2, "content": "Amazing experience!", "author": "Jane Smith", "created_at": "2025-03-02 14:30:00"},
    )


class FAQEditor(LocalCollectionEditorView):
    title = "FAQs"
    session_key = "faqs"
    form_class = forms.FAQForm
    verbose_name = "FAQ"
    verbose_name_plural = "FAQs"
    search_fields = ("question", "answer")
    list_columns = (("question", "Question"), ("answer", "Answer"))


class BlogCommentEditor(LocalCollectionEditorView):
    """Comments of one blog; approval is a local toggle."""

    title = "Blog comments"
    session_key = "comments"
    form_class = forms.CommentForm
    verbose_name = "comment"
    verbose_name_plural = "comments"
    search_fields = ("content",)
    list_columns = (("content", "Comment"), ("is_approved", "Approved"), ("created_at", "Created"))
    row_post_actions = (("Approve", "approve"),)
    row_defaults = {"is_approved": False}

    def get_session_key(self):
        return f"{super().get_session_key()}:{self.kwargs['blog_id']}"

    def build_row(self, form):
        return {"content": form.cleaned_data["content"]}

    def get_success_message(self, verb):
        if verb == "created":
            return "Comment added (pending approval)."
        return super().get_success_message(verb)

    def handle_approve(self, record_id):
        rows = []
        approved = False
        for row in self.get_rows():
            if str(row["id"]) == str(record_id):
                row = dict(row, is_approved=True)
                approved = True
            rows.append(row)
        self.save_rows(rows)
        if approved:
            notify_success(self.request, "Comment approved!")
        else:
            notify_error(self.request, "Comment not found.")
        return self.render_list(*self.load_records())
