"""
Authentication screens, the backoffice dashboard and the superadmin area.
"""

import logging

from django.shortcuts import redirect, render

from tenant_backoffice.client import build_client
from tenant_backoffice.conf import backoffice_settings
from tenant_backoffice.decorators import admin_login_required, backoffice_login_required
from tenant_backoffice.exceptions import ApiError, AuthenticationError
from tenant_backoffice.forms import CreateUserForm, LoginForm, SignupForm
from tenant_backoffice.notifications import notify_error, notify_form_errors, notify_success
from tenant_backoffice.utils import as_list, audit_log, excerpt, filter_records

logger = logging.getLogger(__name__)


# Backend login error codes mapped to (form field, message)
LOGIN_ERRORS = {
    "EMAIL_NOT_FOUND": ("email", "No account found with this email"),
    "INVALID_PASSWORD": ("password", "Incorrect password"),
    "ACCOUNT_INACTIVE": (None, "Your account is inactive. Please contact support."),
}


def home(request):
    """Public landing page."""
    return render(request, "tenant_backoffice/home.html")


def _authenticate(form):
    """
    POST the credentials of a valid LoginForm.

    Returns the response payload, or None after attaching the backend's
    error to the form.
    """
    try:
        return build_client().post("/users/login", {
            "email": form.cleaned_data["email"],
            "password": form.cleaned_data["password"],
        })
    except ApiError as exc:
        code = exc.response_message or exc.message
        field, message = LOGIN_ERRORS.get(code, (None, code or "Login failed. Please try again."))
        form.add_error(field, message)
        return None


def backoffice_login(request):
    """Tenant login; stores the token and tenant id in the session."""
    tenant_session = request.tenant_session
    form = LoginForm(request.POST or None)

    if request.method == "POST" and form.is_valid():
        response = _authenticate(form)
        if response is not None:
            user = (response or {}).get("user") or {}
            if not response.get("token") or not user.get("tenant_id"):
                form.add_error(None, "Invalid response from server: Missing token or tenant_id")
            else:
                tenant_session.login(response["token"], user["tenant_id"])
                audit_log(event="login", tenant_id=user["tenant_id"], request=request)
                return redirect(backoffice_settings.BACKOFFICE_HOME_URL)
        audit_log(
            event="login",
            request=request,
            success=False,
            extra={"email": form.cleaned_data.get("email")},
        )

    return render(request, "tenant_backoffice/auth/login.html", {
        "form": form,
        "title": "Backoffice Login",
        "signup_url": "/backoffice-signup",
    })


def backoffice_signup(request):
    form = SignupForm(request.POST or None)

    if request.method == "POST" and form.is_valid():
        try:
            build_client().post("/users/signup", {
                "name": form.cleaned_data["name"],
                "email": form.cleaned_data["email"],
                "password": form.cleaned_data["password"],
            })
        except ApiError as exc:
            form.add_error(None, exc.display_message("Signup failed. Please try again."))
        else:
            notify_success(request, "Account created successfully! Please log in.")
            return redirect(backoffice_settings.BACKOFFICE_LOGIN_URL)

    return render(request, "tenant_backoffice/auth/signup.html", {"form": form})


def superadmin_login(request):
    """Superadmin login; only a token is stored."""
    tenant_session = request.tenant_session
    form = LoginForm(request.POST or None)

    if request.method == "POST" and form.is_valid():
        response = _authenticate(form)
        if response is not None:
            if not (response or {}).get("token"):
                form.add_error(None, "Invalid response from server: Missing token")
            else:
                tenant_session.login(response["token"])
                audit_log(event="admin_login", request=request)
                return redirect(backoffice_settings.ADMIN_HOME_URL)

    return render(request, "tenant_backoffice/auth/login.html", {
        "form": form,
        "title": "Superadmin Login",
    })


def logout_view(request):
    """Clear the stored session and return to the matching login."""
    tenant_session = request.tenant_session
    audit_log(event="logout", tenant_id=tenant_session.tenant_id, request=request)
    is_admin = tenant_session.is_authenticated and not tenant_session.has_tenant
    tenant_session.logout()
    if is_admin:
        return redirect(backoffice_settings.ADMIN_LOGIN_URL)
    return redirect(backoffice_settings.BACKOFFICE_LOGIN_URL)


def _load(request, client, resource: str, fallback: str):
    try:
        return as_list(client.get_all(client.tenant_path(resource)))
    except AuthenticationError:
        raise
    except ApiError as exc:
        notify_error(request, exc, fallback)
        return []


@backoffice_login_required
def dashboard(request):
    """
    Backoffice overview.

    Shows product categories with their product counts, the totals and
    the latest blog posts. ``?q=`` filters the category table.
    """
    client = request.tenant_session.get_client()
    categories = _load(request, client, "categories", "Failed to load categories")
    blogs = _load(request, client, "blogs", "Failed to load blogs")
    products = _load(request, client, "products", "Failed to load products")

    product_categories = [
        {
            "id": category.get("id"),
            "name": category.get("name") or "Unnamed Category",
            "product_count": sum(
                1 for product in products
                if str(product.get("category_id")) == str(category.get("id"))
            ),
            "status": "ACTIVE" if category.get("status") == "active" else "INACTIVE",
        }
        for category in categories
    ]
    query = request.GET.get("q", "")
    visible = filter_records(product_categories, query, ("name",))

    blog_posts = [
        {
            "id": blog.get("id"),
            "title": blog.get("title") or "Untitled",
            "excerpt": excerpt(blog.get("content")),
            "created_at": blog.get("created_at"),
        }
        for blog in blogs
    ]

    return render(request, "tenant_backoffice/backoffice/dashboard.html", {
        "title": "Dashboard",
        "product_categories": visible,
        "total_categories": len(product_categories),
        "total_products": len(products),
        "total_blogs": len(blogs),
        "blog_posts": blog_posts,
        "query": query,
    })


@admin_login_required
def admin_dashboard(request):
    return render(request, "tenant_backoffice/admin/dashboard.html", {"title": "Admin Dashboard"})


def load_templates(request, client) -> list:
    """Available site templates, or the fallback catalogue."""
    try:
        templates = as_list(client.get_all("/templates"))
    except AuthenticationError:
        raise
    except ApiError as exc:
        logger.warning("Loading templates failed: %s", exc)
        notify_error(request, "Failed to load templates. Using default options.")
        return list(backoffice_settings.FALLBACK_TEMPLATES)
    return templates or list(backoffice_settings.FALLBACK_TEMPLATES)


@admin_login_required
def create_user(request):
    """Create a tenant user with a subscription plan and site template."""
    client = request.tenant_session.get_client()
    templates = load_templates(request, client)
    form = CreateUserForm(request.POST or None, templates=templates)

    if request.method == "POST":
        if not form.is_valid():
            notify_form_errors(request, form)
        else:
            try:
                response = client.post("/admin/create-user", {
                    "name": form.cleaned_data["name"],
                    "email": form.cleaned_data["email"],
                    "subscription_plan": form.cleaned_data["subscription_plan"],
                    "template_id": form.cleaned_data["template_id"],
                })
            except AuthenticationError:
                raise
            except ApiError as exc:
                notify_error(request, exc.display_message("An unexpected error occurred"))
            else:
                notify_success(request, (response or {}).get("message") or "User created successfully!")
                form = CreateUserForm(templates=templates)

    return render(request, "tenant_backoffice/admin/create_user.html", {
        "title": "Create User",
        "form": form,
        "templates": templates,
    })
