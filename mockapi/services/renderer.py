# === mockapi/services/renderer.py ===
import json
import re
from typing import Optional
from mockapi.schemas.mock import RenderedResponse

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain"

_WHITESPACE = re.compile(r"[ \t\n\r]*")
_STRING = re.compile(r'"(?:[^"\\\x00-\x1f]|\\(?:["\\/bfnrt]|u[0-9a-fA-F]{4}))*"')
_SCALAR = re.compile(
    _STRING.pattern
    + r"|-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?"
    r"|true|false|null"
)
_CLOSERS = {"[": "]", "{": "}"}


def _reject_constant(name: str):
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def _is_json_without_recursion(text: str) -> bool:
    """Grammar check with an explicit stack, for nesting too deep for json.loads."""
    stack = []
    expect = "value"
    pos = 0
    end = len(text)

    while True:
        pos = _WHITESPACE.match(text, pos).end()
        if pos == end:
            return expect == "end"
        ch = text[pos]

        if expect in ("value", "value_or_close"):
            if expect == "value_or_close" and ch == "]":
                stack.pop()
                pos += 1
            elif ch in _CLOSERS:
                stack.append(ch)
                expect = "value_or_close" if ch == "[" else "key_or_close"
                pos += 1
                continue
            else:
                match = _SCALAR.match(text, pos)
                if not match:
                    return False
                pos = match.end()
        elif expect in ("key", "key_or_close"):
            if expect == "key_or_close" and ch == "}":
                stack.pop()
                pos += 1
            else:
                match = _STRING.match(text, pos)
                if not match:
                    return False
                pos = match.end()
                expect = "colon"
                continue
        elif expect == "colon":
            if ch != ":":
                return False
            pos += 1
            expect = "value"
            continue
        elif expect == "comma_or_close":
            if ch == ",":
                pos += 1
                expect = "value" if stack[-1] == "[" else "key"
                continue
            if ch != _CLOSERS[stack[-1]]:
                return False
            stack.pop()
            pos += 1
        else:
            # trailing content after a complete document
            return False

        # a value (scalar or container) just finished
        expect = "comma_or_close" if stack else "end"


def is_json(text: str) -> bool:
    try:
        # numbers are only checked for syntax, never converted
        json.loads(text, parse_constant=_reject_constant, parse_int=str, parse_float=str)
    except ValueError:
        return False
    except RecursionError:
        return _is_json_without_recursion(text)
    return True


def render(body: Optional[str], status_code: int) -> RenderedResponse:
    """Classify a stored body as JSON or plain text.

    The stored text is never re-serialized: the bytes sent are exactly the
    bytes stored, only the content type depends on whether it parses.
    """
    if body and is_json(body):
        return RenderedResponse(
            body=body.encode("utf-8"),
            content_type=JSON_CONTENT_TYPE,
            status_code=status_code,
        )

    return RenderedResponse(
        body=(body or "").encode("utf-8"),
        content_type=TEXT_CONTENT_TYPE,
        status_code=status_code,
    )


def render_error(status_code: int, payload: dict) -> RenderedResponse:
    return RenderedResponse(
        body=json.dumps(payload).encode("utf-8"),
        content_type=JSON_CONTENT_TYPE,
        status_code=status_code,
    )
