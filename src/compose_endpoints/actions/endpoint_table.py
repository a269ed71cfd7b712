"""Endpoint Table - Renders an endpoint map as an aligned text table.

Pure functions only: the same map always renders to the same text.

Example output:
    📋 Service URLs:
    ┌─────────────────┬───────────────────────────┐
    │ Service         │ URL                       │
    ├─────────────────┼───────────────────────────┤
    │ db-1            │ ✅ http://host:3306       │
    │ web-1           │ ✅ http://host:8080       │
    │                 │    http://host:8443       │
    └─────────────────┴───────────────────────────┘
    💡 Click or copy URLs above to access your deployed services!
"""

import os

from compose_endpoints.model.endpoints import EndpointMap

NO_PORTS_MESSAGE = "No exposed ports detected"
CAPTION = "📋 Service URLs:"
HINT = "💡 Click or copy URLs above to access your deployed services!"

OK_GLYPH = "✅"
NO_PORTS_TEXT = "⚠️ (no exposed ports)"

MIN_PREFIX_LENGTH = 3
PREFIX_SEPARATORS = "-_."

MIN_SERVICE_WIDTH = 15
MAX_SERVICE_WIDTH = 35
MIN_URL_WIDTH = 25
ELLIPSIS = "..."

# Emoji render two cells wide but count as one (✅) or two (⚠️) code points
URL_PREFIX_WIDTH = 3
EMOJI_PADDING_ADJUST = 1


def endpoint_rows(endpoints: EndpointMap) -> list[tuple[str, list[str]]]:
    """Normalize a map into sorted (display name, sorted unique URLs) rows."""
    cleaned = {name: sorted(set(urls)) for name, urls in endpoints.items()}
    names = display_names(list(cleaned))
    return sorted((names[name], urls) for name, urls in cleaned.items())


def display_names(names: list[str]) -> dict[str, str]:
    """Map each service name to a shorter display name.

    A common prefix of at least three characters shared by more than one
    service is stripped (e.g. `myapp-web-1`, `myapp-db-1` -> `web-1`, `db-1`).
    Names are left alone if stripping would make two of them collide.
    """
    prefix = os.path.commonprefix(names) if len(names) > 1 else ""
    if len(prefix) < MIN_PREFIX_LENGTH:
        return {name: name for name in names}

    shortened = {}
    for name in names:
        short = name[len(prefix):].lstrip(PREFIX_SEPARATORS)
        shortened[name] = short or name

    if len(set(shortened.values())) != len(names):
        return {name: name for name in names}
    return shortened


def format_endpoint_table(endpoints: EndpointMap) -> str:
    """Render the endpoint map as a boxed, aligned table."""
    if not endpoints:
        return NO_PORTS_MESSAGE

    rows = endpoint_rows(endpoints)

    longest_name = max(len(name) for name, _ in rows)
    service_width = min(max(MIN_SERVICE_WIDTH, longest_name), MAX_SERVICE_WIDTH)

    url_content_width = 0
    for _, urls in rows:
        if urls:
            url_content_width = max(url_content_width, *(len(url) + URL_PREFIX_WIDTH for url in urls))
        else:
            url_content_width = max(url_content_width, len(NO_PORTS_TEXT) + EMOJI_PADDING_ADJUST)
    url_width = max(url_content_width, MIN_URL_WIDTH)

    def rule(left: str, middle: str, right: str) -> str:
        return f"{left}{'─' * (service_width + 2)}{middle}{'─' * (url_width + 2)}{right}"

    def service_cell(name: str) -> str:
        if len(name) > service_width:
            return name[: service_width - len(ELLIPSIS)] + ELLIPSIS
        return name.ljust(service_width)

    lines = [
        CAPTION,
        rule("┌", "┬", "┐"),
        f"│ {'Service'.ljust(service_width)} │ {'URL'.ljust(url_width)} │",
        rule("├", "┼", "┤"),
    ]

    has_any_urls = False
    for name, urls in rows:
        if not urls:
            warning = NO_PORTS_TEXT.ljust(url_width - EMOJI_PADDING_ADJUST)
            lines.append(f"│ {service_cell(name)} │ {warning} │")
            continue

        has_any_urls = True
        for index, url in enumerate(urls):
            if index == 0:
                cell = f"{OK_GLYPH} {url}".ljust(url_width - EMOJI_PADDING_ADJUST)
                lines.append(f"│ {service_cell(name)} │ {cell} │")
            else:
                cell = f"   {url}".ljust(url_width)
                lines.append(f"│ {' ' * service_width} │ {cell} │")

    lines.append(rule("└", "┴", "┘"))

    if has_any_urls:
        lines.append(HINT)

    return "\n".join(lines)
