"""JSON serialization of plaintext values.

Values are dumped as compact UTF-8 JSON. Anything without a JSON
representation (callables, sets, arbitrary objects, cycles, NaN/Infinity,
strings holding lone surrogates) is rejected with :class:`SerializationError`.
"""

import json
from typing import Any

from sealbox.core.exceptions import SerializationError


def dumps(value: Any) -> bytes:
    try:
        text = json.dumps(
            value,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        )
        return text.encode("utf-8")
    except (TypeError, ValueError, UnicodeEncodeError, RecursionError) as e:
        raise SerializationError("value must be serializable") from e


def loads(data: bytes) -> Any:
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise SerializationError("payload is not valid JSON") from e
