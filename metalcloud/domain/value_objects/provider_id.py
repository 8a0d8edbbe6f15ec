"""
Provider Identifier Value Objects

Architectural Intent:
- DeviceKey is the only place device UUID syntax is checked
- ProviderId pairs the scheme a caller wrote with the validated key
- Accepted schemes are data, so retiring the legacy alias is a table edit
"""

import re
from dataclasses import dataclass

from metalcloud.domain.exceptions import MalformedKeyError

CURRENT_SCHEME = "equinixmetal"
SCHEME_SEPARATOR = "://"

# scheme as written -> canonical scheme
ACCEPTED_SCHEMES: dict[str, str] = {
    CURRENT_SCHEME: CURRENT_SCHEME,
    "packet": CURRENT_SCHEME,
}

_UUID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class DeviceKey:
    """
    Value Object holding a device UUID in canonical lower-case form.
    """
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _UUID_RE.fullmatch(self.value):
            raise MalformedKeyError(str(self.value))
        object.__setattr__(self, "value", self.value.lower())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ProviderId:
    """
    A parsed provider identifier.

    ``scheme`` is the scheme text exactly as the caller supplied it, or the
    empty string when a bare key was passed.
    """
    scheme: str
    key: DeviceKey

    @property
    def is_legacy(self) -> bool:
        return bool(self.scheme) and self.scheme != CURRENT_SCHEME

    @property
    def canonical(self) -> str:
        return canonical_provider_id(self.key)

    def __str__(self) -> str:
        return self.canonical


def canonical_provider_id(key: DeviceKey) -> str:
    """Render ``key`` under the current scheme."""
    return f"{CURRENT_SCHEME}{SCHEME_SEPARATOR}{key}"
