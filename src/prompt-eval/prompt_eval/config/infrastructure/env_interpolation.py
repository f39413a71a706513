"""${ENV_VAR} and ${ENV_VAR:-default} interpolation for raw project data."""

import os
import re
from collections.abc import Iterator

_ENV_REF = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")

type RawValue = (
    str | int | float | bool | None | list["RawValue"] | dict[str, "RawValue"]
)


def _strings(data: RawValue) -> Iterator[str]:
    if isinstance(data, str):
        yield data
    elif isinstance(data, list):
        for item in data:
            yield from _strings(item)
    elif isinstance(data, dict):
        for value in data.values():
            yield from _strings(value)


def collect_missing_vars(data: RawValue) -> list[str]:
    """Return every referenced variable that is unset and has no default.

    Names appear once each, in first-reference order.
    """
    missing: list[str] = []
    for text in _strings(data):
        for match in _ENV_REF.finditer(text):
            name, default = match.group(1), match.group(2)
            if default is None and name not in os.environ and name not in missing:
                missing.append(name)
    return missing


def _substitute(match: re.Match[str]) -> str:
    name, default = match.group(1), match.group(2)
    if name in os.environ:
        return os.environ[name]
    if default is not None:
        return default
    raise KeyError(name)


def interpolate(data: RawValue) -> RawValue:
    """Return a copy of data with every ${...} reference substituted.

    Call collect_missing_vars first; an unset variable without a default
    raises KeyError here.
    """
    if isinstance(data, str):
        return _ENV_REF.sub(_substitute, data)
    if isinstance(data, list):
        return [interpolate(item) for item in data]
    if isinstance(data, dict):
        return {key: interpolate(value) for key, value in data.items()}
    return data
