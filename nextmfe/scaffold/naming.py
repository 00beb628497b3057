"""Name validation and port allocation for remote applications.

Every remote gets ``port = base_port + index`` in input order and an
identifier base used to build the component symbols in the host page
(``<Base>Counter``, ``<Base>Card``).  All functions here are pure.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from nextmfe.scaffold.models.request import RemoteDescriptor

NAME_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9-]*$")
MAX_PORT = 65535

_LIST_SEPARATOR = re.compile(r"\s*,\s*")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class InvalidNameError(ValueError):
    """One or more application names do not match ``NAME_PATTERN``."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names = list(names)
        super().__init__(
            f"Invalid name(s): {', '.join(repr(n) for n in self.names)}. "
            "Names can only contain letters, numbers, and hyphens, and must not start with a hyphen."
        )


class EmptyHostNameError(ValueError):
    """The host application name is empty."""

    def __init__(self) -> None:
        super().__init__("Host app name must not be empty")


class DuplicateNameError(ValueError):
    """Names that are identical or would generate the same identifiers."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names = list(names)
        super().__init__(f"Duplicate or case-colliding name(s): {', '.join(repr(n) for n in self.names)}")


class PortConflictError(ValueError):
    """Allocated ports overlap or fall outside the valid range."""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_remote_list(raw: str | None) -> list[str]:
    """Split a comma-separated remote list, dropping blanks.

    >>> parse_remote_list(" cart , profile,, ")
    ['cart', 'profile']
    """
    if not raw:
        return []
    return [part for part in _LIST_SEPARATOR.split(raw.strip()) if part]


def validate_names(names: Iterable[str]) -> None:
    """Raise ``InvalidNameError`` listing every name that fails the pattern."""
    invalid = [name for name in names if not NAME_PATTERN.match(name)]
    if invalid:
        raise InvalidNameError(invalid)


def identifier_base(name: str) -> str:
    """Return the capitalized base used for generated JS identifiers.

    ``cart`` -> ``Cart``; hyphenated segments are joined in PascalCase
    (``my-app`` -> ``MyApp``) and a leading digit gets a ``Remote`` prefix
    (``1cart`` -> ``Remote1cart``) so the result is a valid identifier.
    """
    base = "".join(segment[:1].upper() + segment[1:] for segment in name.split("-"))
    if base[:1].isdigit():
        base = f"Remote{base}"
    return base


def find_collisions(names: Iterable[str]) -> list[str]:
    """Return names that share an identifier base with an earlier name, in input order."""
    seen: dict[str, str] = {}
    collisions: list[str] = []
    for name in names:
        key = identifier_base(name).lower()
        if key in seen:
            if seen[key] not in collisions:
                collisions.append(seen[key])
            collisions.append(name)
        else:
            seen[key] = name
    return collisions


def allocate(remote_names: Sequence[str], base_port: int) -> list[RemoteDescriptor]:
    """Assign ports and identifier bases to remotes, preserving input order.

    Raises
    ------
    InvalidNameError:
        Any name fails ``NAME_PATTERN`` (all offenders are listed).
    DuplicateNameError:
        Two names are equal or differ only in case / hyphenation.
    PortConflictError:
        The last allocated port would exceed ``MAX_PORT``.
    """
    validate_names(remote_names)

    collisions = find_collisions(remote_names)
    if collisions:
        raise DuplicateNameError(collisions)

    if remote_names and base_port + len(remote_names) - 1 > MAX_PORT:
        msg = f"Remote ports {base_port}..{base_port + len(remote_names) - 1} exceed {MAX_PORT}"
        raise PortConflictError(msg)

    return [
        RemoteDescriptor(name=name, port=base_port + index, identifier_base=identifier_base(name))
        for index, name in enumerate(remote_names)
    ]
