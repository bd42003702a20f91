"""Turn resolved raw values into encoded Secret data entries."""
import base64
import io
import re
from typing import Dict, List, Optional, Tuple

from dotenv.parser import parse_stream

from .errors import ParseError
from .models import ValueShape

# "KEY: VALUE" lines, accepted alongside "KEY=VALUE"
_COLON_ASSIGNMENT = re.compile(r'^(?:export\s+)?([A-Za-z_][A-Za-z0-9_.-]*)\s*:\s*(.*)$')


def encode_value(value: str) -> str:
    """Standard padded base64 of the value's bytes, on a single line."""
    raw = value.encode("utf-8", "surrogateescape")
    return base64.b64encode(raw).decode("ascii")


def _colon_assignment(text: str) -> Optional[Tuple[str, str]]:
    match = _COLON_ASSIGNMENT.match(text.strip())
    if not match:
        return None
    name, rest = match.groups()
    bindings = [b for b in parse_stream(io.StringIO(f"{name}={rest}")) if b.key is not None or b.error]
    if len(bindings) != 1 or bindings[0].error:
        return None
    return name, bindings[0].value or ""


def parse_env_block(key: str, value: str) -> Dict[str, str]:
    """
    Parse a ``KEY=VALUE`` block the way a shell env file is read.

    Blank lines and comments are skipped, quoting is honoured and
    ``KEY: VALUE`` lines are read like ``KEY=VALUE``. Values are kept
    literal: ``${VAR}`` references are not expanded. A later assignment
    to the same name replaces an earlier one.

    Raises:
        ParseError: On the first line that is not an assignment, including
            a bare word with no separator
    """
    parsed: Dict[str, str] = {}
    for binding in parse_stream(io.StringIO(value)):
        if binding.key is None and not binding.error:
            continue
        if binding.error or binding.value is None:
            assignment = _colon_assignment(binding.original.string)
            if assignment is None:
                # the offending line is left out of the message, it may be secret material
                raise ParseError(key, f"invalid line {binding.original.line}: can't separate key from value")
            name, assigned = assignment
            parsed[name] = assigned
            continue
        parsed[binding.key] = binding.value
    return parsed


def transform(key: str, value: str, shape: ValueShape) -> List[Tuple[str, str]]:
    """Return the ``(output key, encoded value)`` pairs produced by one resolved key."""
    if shape is ValueShape.ENVBLOCK:
        return [(k, encode_value(v)) for k, v in parse_env_block(key, value).items()]
    return [(key, encode_value(value))]
