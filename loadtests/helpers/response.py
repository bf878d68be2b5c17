"""Turn EcoPure API error responses into short, readable failure messages.

Two body shapes come back from the API:

- Request validation (422): {"detail": [{"loc": [...], "msg": "..."}]}
- Domain and authorization errors: {"error": "msg"} or {"error": {"field": ["msg"]}}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

_MAX_LENGTH = 300


def extract_error_detail(response: Response) -> str:
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:_MAX_LENGTH] or "(empty response body)"

    if isinstance(body.get("detail"), list):
        return " | ".join(
            f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg', err)}" for err in body["detail"]
        )

    error = body.get("error")
    if isinstance(error, dict):
        return " | ".join(f"{name}: {', '.join(map(str, msgs)) if isinstance(msgs, list) else msgs}"
                          for name, msgs in error.items())
    if error is not None:
        return str(error)

    return str(body)[:_MAX_LENGTH]
