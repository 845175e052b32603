"""
Public tenant site pages.

Every page under ``/<slug>/`` resolves the tenant's layout first and
renders its content inside it. A site that cannot be loaded shows an
error page; a site with an unknown layout redirects to the root.
"""

from functools import wraps

from django.http import Http404
from django.shortcuts import redirect, render

from tenant_backoffice.client import build_client
from tenant_backoffice.exceptions import TemplateResolutionError
from tenant_backoffice.site_templates import LAYOUTS, ResolvedSite, resolve_template
from tenant_backoffice.utils import audit_log


NAV_ITEMS = (
    ("", "Home"),
    ("products", "Products"),
    ("opportunity", "Opportunity"),
    ("join-us", "Join Us"),
    ("contact", "Contact"),
    ("blog", "Blog"),
)


def site_navigation(slug: str) -> list:
    """Slug-prefixed navigation links of a public site."""
    return [
        {"url": f"/{slug}/{path}" if path else f"/{slug}/", "label": label}
        for path, label in NAV_ITEMS
    ]


def site_context(site: ResolvedSite, **kwargs) -> dict:
    context = {
        "site": site,
        "layout_template": site.layout,
        "slug": site.slug,
        "tenant": site.tenant,
        "site_data": site.site_data,
        "navigation": site_navigation(site.slug),
        "footer": site.site_data.get("footer") or {},
    }
    context.update(kwargs)
    return context


def public_site(view_func):
    """
    Resolve ``slug`` into ``request.site`` before running a site page.

    Fetch failures render the error page with a link back to the root;
    an unknown template id redirects to the root.
    """
    @wraps(view_func)
    def _wrapped_view(request, slug, *args, **kwargs):
        try:
            site = resolve_template(build_client(), slug)
        except TemplateResolutionError as exc:
            audit_log(
                event="template_resolution",
                request=request,
                success=False,
                extra={"slug": slug, "error": exc.message},
            )
            return render(
                request,
                "tenant_backoffice/site/error.html",
                {"error": exc.message, "slug": slug},
                status=502,
            )
        if site is None:
            return redirect("/")
        request.site = site
        return view_func(request, site, *args, **kwargs)

    return _wrapped_view


@public_site
def home(request, site):
    return render(
        request,
        "tenant_backoffice/site/home.html",
        site_context(site, home_page=site.site_data.get("home_page") or {}),
    )


@public_site
def products(request, site):
    """Product catalogue, optionally narrowed by ``?category=<name>``."""
    category = request.GET.get("category", "")
    return render(
        request,
        "tenant_backoffice/site/products.html",
        site_context(
            site,
            products=site.products_in_category(category),
            categories=site.categories,
            active_category=category.lower(),
            product_page=site.site_data.get("product_page") or {},
        ),
    )


def render_product(request, site, product_id, **extra):
    product = site.find_product(product_id)
    if product is None:
        raise Http404("Product not found")
    category_name = site.category_name(product.get("category_id"))
    return render(
        request,
        "tenant_backoffice/site/product_detail.html",
        site_context(
            site,
            product=product,
            category_name=category_name,
            back_url=f"/{site.slug}/products?category={category_name.lower()}",
            **extra,
        ),
    )


@public_site
def product_detail(request, site, product_id):
    return render_product(request, site, product_id)


@public_site
def opportunity(request, site):
    return render(
        request,
        "tenant_backoffice/site/opportunity.html",
        site_context(site, opportunity_page=site.site_data.get("opportunity_page") or {}),
    )


@public_site
def join_us(request, site):
    return render(
        request,
        "tenant_backoffice/site/join_us.html",
        site_context(site, settings=site.site_data.get("settings") or {}),
    )


@public_site
def contact(request, site):
    return render(
        request,
        "tenant_backoffice/site/contact.html",
        site_context(site, contact_pages=site.site_data.get("contactus") or []),
    )


@public_site
def blog(request, site):
    visible = [post for post in site.blogs if post.get("is_visible", True)]
    return render(request, "tenant_backoffice/site/blog.html", site_context(site, blogs=visible))


def render_blog_post(request, site, blog_id, **extra):
    post = site.find_blog(blog_id)
    if post is None:
        raise Http404("Blog post not found")
    return render(request, "tenant_backoffice/site/blog_post.html", site_context(site, post=post, **extra))


@public_site
def blog_post(request, site, blog_id):
    return render_blog_post(request, site, blog_id)


# ---------------------------------------------------------------------------
# Static previews of the fixed layouts
# ---------------------------------------------------------------------------

PREVIEW_SITE_DATA = {
    "categories": [
        {"id": 1, "name": "Skincare"},
        {"id": 2, "name": "Wellness"},
    ],
    "products": [
        {
            "id": 1,
            "category_id": 1,
            "name": "Hydrating Serum",
            "title": "Daily hydration",
            "price": "49.00",
            "availability": "in_stock",
        },
        {
            "id": 2,
            "category_id": 2,
            "name": "Vitality Blend",
            "title": "Morning energy",
            "price": "39.00",
            "availability": "in_stock",
        },
    ],
    "blogs": [
        {"id": 1, "title": "Welcome to our store", "content": "Our first post.", "is_visible": True},
    ],
    "home_page": {
        "welcome_description": "Welcome to our store",
        "introduction_content": "Quality products for a healthier life.",
    },
}

PREVIEW_PAGES = {
    "": "home.html",
    "products": "products.html",
    "opportunity": "opportunity.html",
    "join-us": "join_us.html",
    "contact": "contact.html",
    "blog": "blog.html",
}


def preview_site(template_id) -> ResolvedSite:
    return ResolvedSite(
        f"template{template_id}",
        template_id,
        {"name": "Preview Store", "template_id": template_id},
        PREVIEW_SITE_DATA,
    )


def template_preview(request, template_id, page=""):
    """Render a layout with demonstration content at ``/template<N>/``."""
    if template_id not in LAYOUTS or page not in PREVIEW_PAGES:
        return redirect("/")
    site = preview_site(template_id)
    return render(
        request,
        f"tenant_backoffice/site/{PREVIEW_PAGES[page]}",
        site_context(
            site,
            preview=True,
            home_page=site.site_data["home_page"],
            products=site.products,
            categories=site.categories,
            blogs=site.blogs,
        ),
    )


def preview_product(request, template_id, product_id):
    return render_product(request, preview_site(template_id), product_id, preview=True)


def preview_blog_post(request, template_id, blog_id):
    return render_blog_post(request, preview_site(template_id), blog_id, preview=True)
