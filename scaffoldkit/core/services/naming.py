"""
Naming conventions — derive identifiers from a domain name.

Thin helpers consumed by the wiring composer: package aliases, variable
names, URL paths and display labels for a domain such as ``order_item``.
"""

from __future__ import annotations

import re

MAX_DOMAIN_NAME_LENGTH = 64

_ACRONYMS = frozenset({
    "ID", "URL", "URI", "API", "HTTP", "HTTPS", "HTML", "CSS", "JSON", "XML",
    "SQL", "UUID", "IP", "TCP", "UDP", "DNS", "CPU", "GPU", "RAM", "ROM",
    "UI", "UX", "OK",
})

_IRREGULAR_PLURALS = {
    "person": "people",
    "man": "men",
    "woman": "women",
    "child": "children",
    "mouse": "mice",
    "goose": "geese",
    "foot": "feet",
    "tooth": "teeth",
    "ox": "oxen",
}

_UNCOUNTABLE = frozenset({
    "equipment", "information", "rice", "money", "species", "series",
    "fish", "sheep", "news", "metadata",
})

# (pattern, replacement) applied to the lowercase word, first match wins
_PLURAL_RULES = (
    (re.compile(r"(quiz)$"), r"\1zes"),
    (re.compile(r"(matr|vert|ind)(?:ix|ex)$"), r"\1ices"),
    (re.compile(r"(x|ch|ss|sh|s|z)$"), r"\1es"),
    (re.compile(r"([^aeiouy]|qu)y$"), r"\1ies"),
    (re.compile(r"(?:([^f])fe|([lr])f)$"), r"\1\2ves"),
    (re.compile(r"(buffal|tomat|potat|her)o$"), r"\1oes"),
)

_GO_RESERVED = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer", "else",
    "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
    "map", "package", "range", "return", "select", "struct", "switch", "type",
    "var",
})

_RESERVED_NAMES = frozenset({"main", "init", "test", "internal", "vendor"})


def split_words(s: str) -> list[str]:
    """Split on ``_``/``-``/spaces and on case changes (``XMLParser`` → XML, Parser)."""
    words: list[str] = []
    for chunk in re.split(r"[\s_\-]+", s):
        if not chunk:
            continue
        current = ""
        for i, ch in enumerate(chunk):
            if ch.isupper() and i > 0:
                prev_lower = chunk[i - 1].islower() or chunk[i - 1].isdigit()
                next_lower = i + 1 < len(chunk) and chunk[i + 1].islower()
                if prev_lower or (next_lower and len(current) > 1):
                    words.append(current)
                    current = ""
            current += ch
        if current:
            words.append(current)
    return words


def to_pascal_case(s: str) -> str:
    return "".join(w[:1].upper() + w[1:].lower() for w in split_words(s))


def to_camel_case(s: str) -> str:
    pascal = to_pascal_case(s)
    return pascal[:1].lower() + pascal[1:]


def to_snake_case(s: str) -> str:
    return "_".join(w.lower() for w in split_words(s))


def to_kebab_case(s: str) -> str:
    return "-".join(w.lower() for w in split_words(s))


def to_package_name(s: str) -> str:
    """Lowercase alphanumerics only: ``user-profile`` → ``userprofile``."""
    return "".join(ch.lower() for ch in s if ch.isalnum())


def pluralize(word: str) -> str:
    """Plural of the last word in ``word``, keeping its capitalisation."""
    if not word:
        return ""
    head, sep, last = word.rpartition(" ")
    lower = last.lower()

    if lower in _UNCOUNTABLE:
        plural = lower
    elif lower in _IRREGULAR_PLURALS:
        plural = _IRREGULAR_PLURALS[lower]
    else:
        plural = lower + "s"
        for pattern, repl in _PLURAL_RULES:
            if pattern.search(lower):
                plural = pattern.sub(repl, lower)
                break

    if last.isupper() and len(last) > 1:
        plural = plural.upper()
    elif last[:1].isupper():
        plural = plural[:1].upper() + plural[1:]
    return f"{head}{sep}{plural}"


def to_label(s: str) -> str:
    """Human-readable label: ``first_name`` → ``First Name``, ``user_id`` → ``User ID``."""
    words = []
    for w in split_words(s):
        if w.upper() in _ACRONYMS:
            words.append(w.upper())
        else:
            words.append(w[:1].upper() + w[1:].lower())
    return " ".join(words)


def to_model_name(domain: str) -> str:
    return to_pascal_case(domain)


def to_url_path(domain: str) -> str:
    """``userProfile`` → ``/user-profiles``."""
    return "/" + pluralize(to_kebab_case(domain))


def repo_var(domain: str) -> str:
    return to_camel_case(domain) + "Repo"


def service_var(domain: str) -> str:
    return to_camel_case(domain) + "Service"


def controller_var(domain: str) -> str:
    return to_camel_case(domain) + "Controller"


def repo_alias(domain: str) -> str:
    return to_package_name(domain) + "repo"


def service_alias(domain: str) -> str:
    return to_package_name(domain) + "svc"


def controller_alias(domain: str) -> str:
    return to_package_name(domain) + "ctrl"


def validate_domain_name(name: str) -> str | None:
    """Return an error message for an unusable domain name, else None."""
    if not name:
        return "domain name is required"
    if len(name) > MAX_DOMAIN_NAME_LENGTH:
        return f"domain name is too long (max {MAX_DOMAIN_NAME_LENGTH} characters)"
    if not (name[0].isalpha() or name[0] == "_"):
        return "domain name must start with a letter or underscore"
    for i, ch in enumerate(name):
        if not (ch.isalnum() or ch == "_"):
            return f"domain name contains invalid character '{ch}' at position {i}"
    lower = name.lower()
    if lower in _GO_RESERVED:
        return f"domain name '{name}' is a Go reserved word"
    if lower in _RESERVED_NAMES:
        return f"domain name '{name}' is a reserved name"
    return None
