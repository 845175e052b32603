"""
URL configuration for django-tenant-backoffice.

Include at the project root:

    urlpatterns = [
        path("", include("tenant_backoffice.urls")),
    ]

The public ``<slug>/`` site routes and the final catch-all must stay
last, after every fixed prefix.
"""

from django.urls import include, path, re_path
from django.views.generic import RedirectView

from tenant_backoffice import screens, site_views, views
from tenant_backoffice.wizard import SettingsWizardView

app_name = "tenant_backoffice"


backoffice_patterns = [
    path("", RedirectView.as_view(url="/backoffice/dashboard", permanent=False)),
    path("dashboard", views.dashboard, name="dashboard"),
    path("categories/", screens.CategoryEditor.as_view(), name="categories"),
    path("products/", screens.ProductEditor.as_view(), name="products"),
    path("blogs/", screens.BlogEditor.as_view(), name="blogs"),
    path("blogs/<int:blog_id>/banners/", screens.BlogBannerEditor.as_view(), name="blog-banners"),
    path("blogs/<int:blog_id>/comments/", screens.BlogCommentEditor.as_view(), name="blog-comments"),
    path("contact-us/", screens.ContactPageEditor.as_view(), name="contact-us"),
    path("home/introduction/", screens.IntroductionEditor.as_view(), name="home-introduction"),
    path("home/about-company/", screens.AboutCompanyEditor.as_view(), name="home-about-company"),
    path(
        "home/why-network-marketing/",
        screens.WhyNetworkMarketingEditor.as_view(),
        name="home-why-network-marketing",
    ),
    path("home/opportunity-video/", screens.OpportunityVideoEditor.as_view(), name="home-opportunity-video"),
    path("home/support-message/", screens.SupportMessageEditor.as_view(), name="home-support-message"),
    path("opportunity/banner/", screens.OpportunityBannerEditor.as_view(), name="opportunity-banner"),
    path("opportunity/content/", screens.OpportunityContentEditor.as_view(), name="opportunity-content"),
    path(
        "opportunity/video-section/",
        screens.OpportunityVideoSectionEditor.as_view(),
        name="opportunity-video-section",
    ),
    path(
        "opportunity/compensation-plan/",
        screens.CompensationPlanEditor.as_view(),
        name="opportunity-compensation-plan",
    ),
    path("product-page/", screens.ProductPageEditor.as_view(), name="product-page"),
    path("footer/", screens.FooterDisclaimerEditor.as_view(), name="footer"),
    path("testimonials/", screens.TestimonialEditor.as_view(), name="testimonials"),
    path("faqs/", screens.FAQEditor.as_view(), name="faqs"),
    path("settings/", SettingsWizardView.as_view(), name="settings"),
]

admin_patterns = [
    path("", RedirectView.as_view(url="/admin/dashboard", permanent=False)),
    path("dashboard", views.admin_dashboard, name="admin-dashboard"),
    path("create-user", views.create_user, name="create-user"),
]

site_patterns = [
    path("", site_views.home, name="site-home"),
    re_path(r"^products/?$", site_views.products, name="site-products"),
    re_path(r"^product/(?P<product_id>[^/]+)/?$", site_views.product_detail, name="site-product"),
    re_path(r"^opportunity/?$", site_views.opportunity, name="site-opportunity"),
    re_path(r"^join-us/?$", site_views.join_us, name="site-join-us"),
    re_path(r"^contact/?$", site_views.contact, name="site-contact"),
    re_path(r"^blog/?$", site_views.blog, name="site-blog"),
    re_path(r"^blog/(?P<blog_id>[^/]+)/?$", site_views.blog_post, name="site-blog-post"),
]

urlpatterns = [
    path("", views.home, name="home"),
    path("backoffice-login", views.backoffice_login, name="backoffice-login"),
    path("backoffice-signup", views.backoffice_signup, name="backoffice-signup"),
    path("superadmin-login", views.superadmin_login, name="superadmin-login"),
    path("logout", views.logout_view, name="logout"),
    path("backoffice/", include(backoffice_patterns)),
    path("admin/", include(admin_patterns)),
    path("template1/", site_views.template_preview, {"template_id": 1}, name="template1"),
    path("template1/<str:page>", site_views.template_preview, {"template_id": 1}),
    path("template1/product/<str:product_id>", site_views.preview_product, {"template_id": 1}),
    path("template1/blog/<str:blog_id>", site_views.preview_blog_post, {"template_id": 1}),
    path("template2/", site_views.template_preview, {"template_id": 2}, name="template2"),
    path("<slug:slug>/", include(site_patterns)),
    re_path(r"^(?P<slug>[-\w]+)$", RedirectView.as_view(url="/%(slug)s/", permanent=False)),
    re_path(r"^.*$", RedirectView.as_view(url="/", permanent=False)),
]
