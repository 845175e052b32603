"""
Field schemas for the backoffice screens.

Each editor form names its fields after the backend's wire keys, so
``payload()`` can split cleaned data into the text body and the
uploaded files without a mapping table.
"""

from decimal import Decimal

from django import forms

from tenant_backoffice.validators import (
    validate_document,
    validate_image,
    validate_video,
    validate_youtube_embed,
    youtube_embed_url,
)


STATUS_CHOICES = [
    ("active", "Active"),
    ("inactive", "Inactive"),
]

AVAILABILITY_CHOICES = [
    ("in_stock", "In Stock"),
    ("out_of_stock", "Out of Stock"),
]


def image_field(label: str, required: bool = False) -> forms.FileField:
    return forms.FileField(label=label, required=required, validators=[validate_image])


class EditorForm(forms.Form):
    """
    Base form for everything submitted to the backend.

    Subclasses declare fields only. File fields travel as multipart
    parts and are omitted when nothing was uploaded; every other field
    is sent, so a cleared value reaches the backend as an empty string.
    """

    def payload(self):
        """
        Split cleaned data into (body, files).

        Must only be called on a valid form.
        """
        body, files = {}, {}
        for name, field in self.fields.items():
            value = self.cleaned_data.get(name)
            if isinstance(field, forms.FileField):
                if value:
                    files[name] = value
            else:
                body[name] = self.wire_value(value)
        return body, files

    def wire_value(self, value):
        if isinstance(value, Decimal):
            return str(value)
        if value is None:
            return ""
        return value

    @classmethod
    def text_fields(cls):
        return [
            name for name, field in cls.base_fields.items()
            if not isinstance(field, forms.FileField)
        ]

    @classmethod
    def initial_from_record(cls, record: dict) -> dict:
        """Form initial data for editing an existing record."""
        record = record or {}
        return {name: record[name] for name in cls.text_fields() if record.get(name) is not None}


# ---------------------------------------------------------------------------
# List editors
# ---------------------------------------------------------------------------

class CategoryForm(EditorForm):
    name = forms.CharField(
        max_length=255,
        error_messages={"required": "Category name is required."},
    )
    description = forms.CharField(widget=forms.Textarea, required=False)
    status = forms.ChoiceField(choices=STATUS_CHOICES, initial="active")
    image = image_field("Image")

    def clean_status(self):
        return self.cleaned_data["status"].lower()


class ProductForm(EditorForm):
    category_id = forms.ChoiceField(label="Category", choices=())
    name = forms.CharField(max_length=255)
    title = forms.CharField(max_length=255)
    price = forms.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    price_description = forms.CharField(required=False)
    availability = forms.ChoiceField(choices=AVAILABILITY_CHOICES, initial="in_stock")
    status = forms.ChoiceField(choices=STATUS_CHOICES, initial="active")
    image = image_field("Image")
    banner_image = image_field("Banner image")
    guide_pdf = forms.FileField(label="Guide PDF", required=False, validators=[validate_document])
    video = forms.FileField(required=False, validators=[validate_video])
    youtube_link = forms.CharField(required=False, validators=[validate_youtube_embed])
    instructions = forms.CharField(widget=forms.Textarea, required=False)
    description = forms.CharField(widget=forms.Textarea, required=False)

    def __init__(self, *args, category_choices=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["category_id"].choices = [("", "Select a category")] + list(category_choices)


class BlogForm(EditorForm):
    title = forms.CharField(
        max_length=255,
        error_messages={"required": "Blog title is required."},
    )
    content = forms.CharField(
        widget=forms.Textarea,
        error_messages={"required": "Blog content is required."},
    )
    image = image_field("Image")
    is_visible = forms.BooleanField(label="Visible", required=False, initial=True)


class BannerForm(EditorForm):
    image = image_field("Image")
    image_content = forms.CharField(label="Text", widget=forms.Textarea, required=False)

    def __init__(self, *args, is_edit=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.is_edit = is_edit

    def clean(self):
        cleaned_data = super().clean()
        if not self.is_edit and not cleaned_data.get("image") and "image" not in self.errors:
            raise forms.ValidationError("Image is required for a new banner.")
        return cleaned_data


class ContactPageForm(EditorForm):
    contactus_text = forms.CharField(
        label="Text",
        widget=forms.Textarea,
        error_messages={"required": "Contact text is required."},
    )
    contactus_image = image_field("Image")


# ---------------------------------------------------------------------------
# Whole-record sections
# ---------------------------------------------------------------------------

class IntroductionForm(EditorForm):
    introduction_content = forms.CharField(label="Introduction", widget=forms.Textarea)
    introduction_image = image_field("Image")


class AboutCompanyForm(EditorForm):
    about_company_title = forms.CharField(label="Title", max_length=255)
    about_company_content_1 = forms.CharField(label="Content", widget=forms.Textarea)
    about_company_content_2 = forms.CharField(
        label="Additional content", widget=forms.Textarea, required=False
    )
    about_company_image = image_field("Image")


class WhyNetworkMarketingForm(EditorForm):
    why_network_marketing_title = forms.CharField(label="Title", max_length=255)
    why_network_marketing_content = forms.CharField(label="Content", widget=forms.Textarea)


class OpportunityVideoForm(EditorForm):
    """
    Header plus either an uploaded MP4 or a YouTube link.

    YouTube links are stored as embed URLs. The video already on the
    record (``existing_video_url``) satisfies the video requirement
    and is kept when nothing new is given.
    """

    opportunity_video_header_title = forms.CharField(
        label="Header title",
        max_length=255,
        error_messages={"required": "Header title is required."},
    )
    opportunity_video = forms.FileField(label="Video", required=False, validators=[validate_video])
    opportunity_video_url = forms.CharField(label="YouTube link", required=False)

    def __init__(self, *args, existing_video_url=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.existing_video_url = existing_video_url or ""

    def clean_opportunity_video_url(self):
        link = self.cleaned_data["opportunity_video_url"]
        if not link or link == self.existing_video_url:
            return link
        embed_url = youtube_embed_url(link)
        if embed_url is None:
            raise forms.ValidationError("Invalid YouTube URL. Please provide a valid link.")
        return embed_url

    def clean(self):
        cleaned_data = super().clean()
        if self.errors:
            return cleaned_data
        if cleaned_data.get("opportunity_video"):
            cleaned_data["opportunity_video_url"] = ""
        elif not cleaned_data.get("opportunity_video_url"):
            if not self.existing_video_url:
                raise forms.ValidationError("Please upload a video or provide a YouTube link.")
            cleaned_data["opportunity_video_url"] = self.existing_video_url
        return cleaned_data


class SupportMessageForm(EditorForm):
    support_content = forms.CharField(label="Support message", widget=forms.Textarea)


class OpportunityBannerForm(EditorForm):
    welcome_message = forms.CharField(
        widget=forms.Textarea,
        error_messages={"required": "Welcome message is required."},
    )
    page_image = image_field("Banner image")


class OpportunityContentForm(EditorForm):
    page_content = forms.CharField(
        widget=forms.Textarea,
        error_messages={"required": "Page content is required."},
    )


class OpportunityVideoSectionForm(EditorForm):
    header_title = forms.CharField(
        max_length=255,
        error_messages={"required": "Header title is required."},
    )
    video_section = forms.FileField(label="Video", required=False, validators=[validate_video])
    video_section_link = forms.CharField(label="YouTube link", required=False)

    def clean(self):
        cleaned_data = super().clean()
        if "video_section" in self.errors:
            return cleaned_data
        if not cleaned_data.get("video_section") and not cleaned_data.get("video_section_link"):
            raise forms.ValidationError("Please upload a video file or provide a YouTube link.")
        return cleaned_data


class CompensationPlanForm(EditorForm):
    plan_document = forms.FileField(
        label="Compensation plan (PDF)",
        validators=[validate_document],
        error_messages={"required": "Please select a PDF document."},
    )


class ProductPageForm(EditorForm):
    banner_content = forms.CharField(label="Banner text", widget=forms.Textarea, required=False)
    banner_image = image_field("Banner image")
    about_description = forms.CharField(label="About", widget=forms.Textarea, required=False)
    video_section_link = forms.CharField(
        label="YouTube embed link", required=False, validators=[validate_youtube_embed]
    )


class FooterDisclaimerForm(EditorForm):
    site_disclaimer = forms.CharField(widget=forms.Textarea, required=False)
    product_disclaimer = forms.CharField(widget=forms.Textarea, required=False)
    income_disclaimer = forms.CharField(widget=forms.Textarea, required=False)

    def clean(self):
        cleaned_data = super().clean()
        if not any((cleaned_data.get(name) or "").strip() for name in self.fields):
            raise forms.ValidationError("Please provide at least one disclaimer.")
        return cleaned_data

    def wire_value(self, value):
        # Blank disclaimers are stored as null
        return value or None


# ---------------------------------------------------------------------------
# Session-held collections
# ---------------------------------------------------------------------------

class TestimonialForm(forms.Form):
    content = forms.CharField(widget=forms.Textarea)
    author = forms.CharField(max_length=255, required=False)


class FAQForm(forms.Form):
    question = forms.CharField(max_length=500)
    answer = forms.CharField(widget=forms.Textarea)


class CommentForm(forms.Form):
    content = forms.CharField(
        widget=forms.Textarea,
        error_messages={"required": "Comment cannot be empty."},
    )


# ---------------------------------------------------------------------------
# Authentication and superadmin
# ---------------------------------------------------------------------------

class LoginForm(forms.Form):
    email = forms.EmailField(
        error_messages={
            "required": "Email is required",
            "invalid": "Invalid email format",
        },
    )
    password = forms.CharField(
        widget=forms.PasswordInput,
        error_messages={"required": "Password is required"},
    )


class SignupForm(forms.Form):
    name = forms.CharField(max_length=255, error_messages={"required": "Name is required"})
    email = forms.EmailField(
        error_messages={
            "required": "Email is required",
            "invalid": "Invalid email format",
        },
    )
    password = forms.CharField(widget=forms.PasswordInput, min_length=8)
    confirm_password = forms.CharField(widget=forms.PasswordInput)

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get("password")
        if password and password != cleaned_data.get("confirm_password"):
            self.add_error("confirm_password", "Passwords do not match")
        return cleaned_data


SUBSCRIPTION_PLAN_CHOICES = [
    ("yearly", "Yearly ($156/year)"),
    ("monthly", "Monthly ($16.25/month)"),
]


class CreateUserForm(forms.Form):
    name = forms.CharField(max_length=255, error_messages={"required": "Name is required"})
    email = forms.EmailField(
        error_messages={
            "required": "Email is required",
            "invalid": "Email address is invalid",
        },
    )
    subscription_plan = forms.ChoiceField(choices=SUBSCRIPTION_PLAN_CHOICES, initial="yearly")
    template_id = forms.TypedChoiceField(coerce=int, choices=(), initial=1)

    def __init__(self, *args, templates=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["template_id"].choices = [
            (template["id"], template.get("name") or f"Template {template['id']}")
            for template in templates
        ]


# ---------------------------------------------------------------------------
# Settings wizard steps
# ---------------------------------------------------------------------------

DOMAIN_TYPE_CHOICES = [
    ("", "Select domain type"),
    ("primary_domain", "Primary Domain"),
    ("sub_domain", "Sub Domain"),
]


class DomainDetailsForm(forms.Form):
    domain_type = forms.ChoiceField(
        choices=DOMAIN_TYPE_CHOICES,
        error_messages={"required": "Domain type is required"},
    )
    primary_domain_name = forms.CharField(
        max_length=255,
        error_messages={"required": "Primary domain is required"},
    )
    sub_domain = forms.CharField(max_length=255, required=False)
    website_link = forms.URLField(required=False)

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get("domain_type") == "sub_domain" and not cleaned_data.get("sub_domain"):
            self.add_error("sub_domain", "Sub domain is required")
        return cleaned_data


class AgentInformationForm(forms.Form):
    first_name = forms.CharField(max_length=100, error_messages={"required": "First name is required"})
    last_name = forms.CharField(max_length=100, error_messages={"required": "Last name is required"})
    email_id = forms.EmailField(
        label="Email",
        error_messages={
            "required": "Email is required",
            "invalid": "Enter a valid email address",
        },
    )
    mobile = forms.CharField(max_length=30, required=False)
    address = forms.CharField(widget=forms.Textarea, error_messages={"required": "Address is required"})
    skype = forms.CharField(max_length=100, required=False)
    publish_on_site = forms.BooleanField(required=False)


class SiteIdentityForm(forms.Form):
    site_name = forms.CharField(max_length=255, error_messages={"required": "Site name is required"})
    site_logo = image_field("Site logo")


class DistributorDetailsForm(forms.Form):
    nht_website_link = forms.URLField(label="Distributor website link", required=False)
    nht_store_link = forms.URLField(label="Distributor store link", required=False)
    nht_joining_link = forms.URLField(label="Distributor joining link", required=False)


class ReviewForm(forms.Form):
    """Final step; everything was validated on the way here."""
