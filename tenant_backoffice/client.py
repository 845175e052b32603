"""
Tenant-scoped REST API client.

Every backoffice screen and the public template resolver talk to the
remote backend through TenantApiClient. It adds the bearer token,
chooses JSON or multipart encoding, and turns failures into ApiError.
There is exactly one attempt per call.
"""

import logging
from typing import Optional

import requests
from django.utils.module_loading import import_string

from tenant_backoffice.conf import backoffice_settings
from tenant_backoffice.exceptions import (
    ApiError,
    AuthenticationError,
    TenantSessionError,
)
from tenant_backoffice.results import Failed, Found, NotFound

logger = logging.getLogger(__name__)


class TenantApiClient:
    """
    Thin wrapper issuing authenticated requests against the backend.

    Usage:
        client = TenantApiClient(token=token, tenant_id="42")
        categories = client.get_all(client.tenant_path("categories"))
        client.put(client.tenant_path("categories", 7), {"name": "Skin Care"},
                   multipart=True)

    Attributes:
        is_loading: True while a request is in flight
        error: The ApiError raised by the last call, or None
    """

    def __init__(
        self,
        token: str = None,
        tenant_id: str = None,
        base_url: str = None,
        timeout: float = None,
    ):
        self.token = token
        self.tenant_id = tenant_id
        self.base_url = (base_url or backoffice_settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout or backoffice_settings.API_TIMEOUT
        self.is_loading = False
        self.error = None
        self._http = requests.Session()

    def tenant_path(self, *parts) -> str:
        """
        Build a ``/tenants/{tenantId}/...`` resource path.

        Raises:
            TenantSessionError: If the client has no tenant id
        """
        if not self.tenant_id:
            raise TenantSessionError()
        suffix = "/".join(str(part).strip("/") for part in parts)
        return f"/tenants/{self.tenant_id}/{suffix}" if suffix else f"/tenants/{self.tenant_id}"

    def get_all(self, path: str):
        """GET a resource and return its parsed body."""
        return self._send("GET", path)

    def post(self, path: str, body: dict = None, multipart: bool = False, files: dict = None):
        """POST a new record; multipart when files are attached."""
        return self._send("POST", path, body=body, multipart=multipart, files=files)

    def put(self, path: str, body: dict = None, multipart: bool = False, files: dict = None):
        """PUT a full replacement of a record."""
        return self._send("PUT", path, body=body, multipart=multipart, files=files)

    def request(self, method: str, path: str, body: dict = None):
        """Issue an arbitrary method; used by the editors for DELETE."""
        return self._send(method.upper(), path, body=body)

    def fetch(self, path: str):
        """
        GET a resource and wrap the outcome in a result variant.

        Returns:
            Found(record), NotFound() for 404 or an empty body, or
            Failed(reason) for any other API failure

        Raises:
            AuthenticationError: Session problems are never folded into
                a result; the caller's auth gate must see them
        """
        try:
            payload = self.get_all(path)
        except AuthenticationError:
            raise
        except ApiError as exc:
            if exc.status_code == 404:
                return NotFound()
            return Failed(exc.display_message(), error=exc)
        if payload is None or payload == {}:
            return NotFound()
        return Found(payload)

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _send(
        self,
        method: str,
        path: str,
        body: dict = None,
        multipart: bool = False,
        files: dict = None,
    ):
        kwargs = {"headers": self._headers(), "timeout": self.timeout}
        if multipart or files:
            kwargs["files"] = _multipart_parts(body or {}, files or {})
        elif body is not None:
            kwargs["json"] = body

        url = self._url(path)
        self.is_loading = True
        self.error = None
        logger.debug("%s %s", method, url)
        try:
            response = self._http.request(method, url, **kwargs)
        except requests.exceptions.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            self.error = ApiError(f"Network error: {exc}")
            raise self.error from exc
        finally:
            self.is_loading = False

        payload = _parse_body(response)
        if response.status_code == 401:
            self.error = AuthenticationError(
                "Session expired. Please log in again.",
                response_data=payload,
            )
            raise self.error
        if not response.ok:
            logger.warning("%s %s returned %s", method, url, response.status_code)
            self.error = ApiError(status_code=response.status_code, response_data=payload)
            raise self.error
        return payload


def _parse_body(response):
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return {"message": response.text[:200]}


def _form_fields(body: dict) -> dict:
    """Multipart text fields; None becomes an empty string and booleans lowercase."""
    fields = {}
    for key, value in body.items():
        if value is None:
            fields[key] = ""
        elif isinstance(value, bool):
            fields[key] = "true" if value else "false"
        else:
            fields[key] = str(value)
    return fields


def _file_fields(files: dict) -> dict:
    """Convert Django uploaded files into requests' (name, fileobj, type) tuples."""
    converted = {}
    for key, upload in files.items():
        if upload is None:
            continue
        if hasattr(upload, "seek"):
            upload.seek(0)
        converted[key] = (
            getattr(upload, "name", key),
            upload,
            getattr(upload, "content_type", None) or "application/octet-stream",
        )
    return converted


def _multipart_parts(body: dict, files: dict) -> list:
    """
    All parts of a multipart body for requests.

    Text fields are sent as (None, value) parts so the body is
    multipart even when nothing was uploaded.
    """
    parts = [(key, (None, value)) for key, value in _form_fields(body).items()]
    parts.extend(_file_fields(files).items())
    return parts


def get_client_class():
    """Return the configured API client class."""
    return import_string(backoffice_settings.API_CLIENT_CLASS)


def build_client(token: Optional[str] = None, tenant_id: Optional[str] = None):
    """Instantiate the configured API client for a session."""
    return get_client_class()(token=token, tenant_id=tenant_id)
