# JSON encode/decode used for request bodies and response payloads
# decoding never raises: anything that isn't valid JSON comes back as the original text

import json
from datetime import date, datetime, timezone
from typing import Any, Optional


def _encode_default(value: Any) -> Any:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
            return value.isoformat(timespec="milliseconds") + "Z"
        return value.isoformat(timespec="milliseconds")
    if isinstance(value, date):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def deserialize(text: Optional[str]) -> Any:
    if not text:
        return text
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        return text


def serialize(value: Any, pretty: bool = True) -> Optional[str]:
    if value is None:
        return None
    return json.dumps(value, indent=4 if pretty else None, default=_encode_default)
