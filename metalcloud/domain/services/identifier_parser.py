"""
Identifier Parser

Architectural Intent:
- Turns a raw providerID string into a ProviderId
- Pure function, no directory access, no logging
- Callers decide whether an empty identifier is fatal or a cue to use the name

Accepted forms:
    equinixmetal://<uuid>   current scheme
    packet://<uuid>         legacy alias
    <uuid>                  bare key
"""

from metalcloud.domain.exceptions import (
    EmptyIdentifierError,
    UnsupportedSchemeError,
)
from metalcloud.domain.value_objects.provider_id import (
    ACCEPTED_SCHEMES,
    CURRENT_SCHEME,
    SCHEME_SEPARATOR,
    DeviceKey,
    ProviderId,
)


def parse_provider_id(raw: str) -> ProviderId:
    """
    Parse ``raw`` into a ProviderId.

    Raises:
        EmptyIdentifierError: ``raw`` is empty.
        UnsupportedSchemeError: the scheme is not in ACCEPTED_SCHEMES.
        MalformedKeyError: the key part is not a canonical UUID.
    """
    if not raw:
        raise EmptyIdentifierError()

    scheme, separator, candidate = raw.partition(SCHEME_SEPARATOR)
    if not separator:
        return ProviderId(scheme="", key=DeviceKey(raw))

    if scheme not in ACCEPTED_SCHEMES:
        raise UnsupportedSchemeError(scheme, expected=CURRENT_SCHEME)

    return ProviderId(scheme=scheme, key=DeviceKey(candidate))
