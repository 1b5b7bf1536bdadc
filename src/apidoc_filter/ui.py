"""Helpers for the HTTP layer in front of the documentation UI.

A request carrying ``api-docs=true`` (or ``api-docs=1``) is redirected to
the UI page for the requested path, and the UI's resource list forwards
the inbound query string so the filter sees the same parameters.
"""

import re
from urllib.parse import urlsplit, parse_qs

from apidoc_filter.config import UiConfig
from apidoc_filter.model.base import SwaggerResource


def is_redirect_requested(value: str | None) -> bool:
    """True for ``true`` (any case) or ``1``."""
    if value is None:
        return False
    return value.lower() == "true" or value == "1"


def base_url(scheme: str, server_name: str, port: int) -> str:
    """Build ``scheme://host[:port]``, leaving out the scheme's default port."""
    if port < 0:
        port = 80
    url = f"{scheme}://{server_name}"
    if (scheme == "http" and port != 80) or (scheme == "https" and port != 443):
        url += f":{port}"
    return url


def redirect_location(base: str, request_uri: str, query: str | None, ui: UiConfig | None = None) -> str:
    """Build the UI location a flagged request is redirected to."""
    ui = ui or UiConfig()
    location = f"{base}{ui.ui_path}?path={request_uri}"
    if not query:
        return location

    # The flag is neutralised so the UI does not redirect again
    flag = re.escape(ui.flag_param)
    query = re.sub(rf"{flag}=(1|true)(?=&|$)", "1=1", query, flags=re.IGNORECASE)
    location = f"{location}&{query}"

    if "docExpansion" not in query:
        location += f"&docExpansion={ui.doc_expansion}"
    if "defaultModelsExpandDepth" not in query and ui.has_default_models_expand_depth:
        location += "&defaultModelsExpandDepth=-1"
    return location


def redirect_for_url(url: str, ui: UiConfig | None = None) -> str | None:
    """Return the redirect location for a full request URL, or None if not flagged."""
    ui = ui or UiConfig()
    parts = urlsplit(url)
    values = parse_qs(parts.query, keep_blank_values=True).get(ui.flag_param)
    if not values or not is_redirect_requested(values[0]):
        return None

    port = parts.port
    if port is None:
        port = 443 if parts.scheme == "https" else 80
    base = base_url(parts.scheme, parts.hostname or "", port)
    return redirect_location(base, parts.path or "/", parts.query, ui)


def propagate_query(resources: list[SwaggerResource], query: str | None) -> list[SwaggerResource]:
    """Append the inbound query string to each resource location."""
    if not query:
        return list(resources)

    result = []
    for resource in resources:
        separator = "&" if urlsplit(resource.location).query else "?"
        result.append(resource.model_copy(update={"location": f"{resource.location}{separator}{query}"}))
    return result
