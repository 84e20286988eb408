from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Tuple

from ...domain.constants import Endpoint

# request fields per endpoint, in wire order
REQUEST_FIELDS: Mapping[Endpoint, Tuple[str, ...]] = {
    Endpoint.AUTHENTICATE: ("email", "password"),
    Endpoint.VERIFY: ("access_token",),
    Endpoint.LOGOUT: ("access_token",),
}


def build_request(endpoint: Endpoint, **fields: Any) -> Dict[str, Any]:
    """
    Build the JSON request object for `endpoint`.

    Values are passed through verbatim; only presence is checked.
    """
    expected = REQUEST_FIELDS[endpoint]

    unexpected = sorted(set(fields) - set(expected))
    if unexpected:
        raise ValueError(f"Unexpected fields for {endpoint.value}: {', '.join(unexpected)}")

    missing = [name for name in expected if fields.get(name) is None]
    if missing:
        raise ValueError(f"Missing fields for {endpoint.value}: {', '.join(missing)}")

    return {name: fields[name] for name in expected}


def encode_body(body: Mapping[str, Any]) -> bytes:
    return json.dumps(body, ensure_ascii=False).encode("utf-8")
