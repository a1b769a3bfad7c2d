from typing import Sequence


def parse_accept_language(header: str | None) -> list[str]:
    """Language tags from an Accept-Language header, highest quality first.

    Ties keep header order. Malformed entries and `q=0` are dropped; never raises.
    """
    if not header:
        return []
    weighted: list[tuple[float, int, str]] = []
    for index, part in enumerate(header.split(",")):
        pieces = [p.strip() for p in part.split(";")]
        tag = pieces[0]
        if not tag or tag == "*":
            continue
        quality = 1.0
        for param in pieces[1:]:
            name, _, value = param.partition("=")
            if name.strip().lower() != "q":
                continue
            try:
                quality = float(value)
            except ValueError:
                quality = 0.0
        if quality <= 0:
            continue
        weighted.append((-quality, index, tag))
    weighted.sort()
    return [tag for _, _, tag in weighted]


def match_locale(tag: str, locales: Sequence[str]) -> str | None:
    """Exact (case-insensitive) match first, then primary subtag, so `zh` picks `zh-CN`."""
    lowered = tag.strip().lower()
    if not lowered:
        return None
    for locale in locales:
        if locale.lower() == lowered:
            return locale
    primary = lowered.split("-", 1)[0]
    for locale in locales:
        if locale.lower().split("-", 1)[0] == primary:
            return locale
    return None


def negotiate_locale(
    locales: Sequence[str],
    default_locale: str,
    *,
    cookie: str | None = None,
    accept_language: str | None = None,
) -> str:
    if cookie and cookie in locales:
        return cookie
    for tag in parse_accept_language(accept_language):
        matched = match_locale(tag, locales)
        if matched is not None:
            return matched
    return default_locale
