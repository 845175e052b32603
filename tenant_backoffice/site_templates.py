"""
Template resolution for the public tenant sites.

A public site is addressed by slug. The backend's ``/site/{slug}``
payload names the tenant's presentation layout through
``tenant.template_id``; exactly three layouts exist and they are
selected by exact match on that integer.
"""

import logging
from typing import Optional

from tenant_backoffice.exceptions import ApiError, TemplateResolutionError

logger = logging.getLogger(__name__)


# Closed dispatch table; a new layout needs a new entry here
LAYOUTS = {
    1: "tenant_backoffice/layouts/template1.html",
    2: "tenant_backoffice/layouts/template2.html",
    3: "tenant_backoffice/layouts/template3.html",
}


class ResolvedSite:
    """
    A public site ready to render.

    Attributes:
        slug: The public slug from the URL
        template_id: The layout identifier read from the tenant
        layout: Template name of the layout to extend
        tenant: The tenant object of the site payload
        site_data: The site content (products, categories, blogs, ...)
    """

    def __init__(self, slug: str, template_id: int, tenant: dict, site_data: dict):
        self.slug = slug
        self.template_id = template_id
        self.layout = LAYOUTS[template_id]
        self.tenant = tenant
        self.site_data = site_data or {}

    @property
    def categories(self) -> list:
        return self.site_data.get("categories") or []

    @property
    def products(self) -> list:
        return self.site_data.get("products") or []

    @property
    def blogs(self) -> list:
        return self.site_data.get("blogs") or []

    def category_name(self, category_id) -> str:
        for category in self.categories:
            if str(category.get("id")) == str(category_id):
                return category.get("name") or "Unknown"
        return "Unknown"

    def products_in_category(self, name: Optional[str]) -> list:
        """Products whose category name matches ``name`` case-insensitively."""
        if not name:
            return self.products
        name = name.lower()
        return [
            product for product in self.products
            if self.category_name(product.get("category_id")).lower() == name
        ]

    def find_product(self, product_id) -> Optional[dict]:
        for product in self.products:
            if str(product.get("id")) == str(product_id):
                return product
        return None

    def find_blog(self, blog_id) -> Optional[dict]:
        for blog in self.blogs:
            if str(blog.get("id")) == str(blog_id):
                return blog
        return None

    def __repr__(self):
        return f"<ResolvedSite slug={self.slug!r} template_id={self.template_id}>"


def layout_for(template_id) -> Optional[str]:
    """
    Layout template for a template id, or None when it is not one of
    the known layouts. Only integers match; "1" and True do not.
    """
    if isinstance(template_id, bool) or not isinstance(template_id, int):
        return None
    return LAYOUTS.get(template_id)


def resolve_template(client, slug: str) -> Optional[ResolvedSite]:
    """
    Fetch a public site and pick its layout.

    Args:
        client: An API client (no token needed)
        slug: The public slug from the URL

    Returns:
        The ResolvedSite, or None when the tenant's template id is
        missing or unknown

    Raises:
        TemplateResolutionError: If the site cannot be fetched or the
            payload has no tenant
    """
    try:
        payload = client.get_all(f"/site/{slug}")
    except ApiError as exc:
        logger.warning("Fetching site %r failed: %s", slug, exc)
        raise TemplateResolutionError(f"Failed to load tenant: {exc.display_message()}", slug=slug) from exc

    tenant = payload.get("tenant") if isinstance(payload, dict) else None
    if not tenant:
        raise TemplateResolutionError("Tenant not found in response", slug=slug)

    template_id = tenant.get("template_id")
    if layout_for(template_id) is None:
        logger.info("Site %r has unknown template id %r", slug, template_id)
        return None

    return ResolvedSite(slug, template_id, tenant, payload.get("site_data"))
