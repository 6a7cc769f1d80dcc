"""``Cookie`` header parsing for ``Request.cookies``.

Routers never look at cookies; they are parsed once per request so
handlers behind a router can read them without touching raw headers.
"""


def parse_cookies(header: str) -> dict[str, str]:
    """Map cookie names to values from a ``Cookie`` header.

    Browsers send the most specific cookie first, so a repeated name keeps
    its first value. Double-quoted values are unquoted; pairs without a
    name or ``=`` are skipped.
    """
    cookies: dict[str, str] = {}
    for name, sep, value in (part.partition("=") for part in header.split(";")):
        name = name.strip()
        if not sep or not name or name in cookies:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        cookies[name] = value
    return cookies
