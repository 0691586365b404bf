"""Named markup snippets: README badges, document skeletons, headers."""

from __future__ import annotations

from dataclasses import dataclass
from string import Formatter
from types import MappingProxyType
from typing import Mapping

from text_macros.buffer.state import Position
from text_macros.buffer.sync import BufferHost
from text_macros.runtime import telemetry

from .errors import MissingTemplateField, UnknownTemplate


def _shield_escape(value: str) -> str:
    # shields.io static badges use ``-`` as separator and ``_`` for spaces
    return value.replace("-", "--").replace("_", "__").replace(" ", "_")


@dataclass(frozen=True, slots=True)
class Boilerplate:
    name: str
    body: str
    kind: str = "badge"
    description: str = ""
    shield_fields: tuple[str, ...] = ()

    @property
    def fields(self) -> tuple[str, ...]:
        names = [
            field for _, field, _, _ in Formatter().parse(self.body) if field
        ]
        return tuple(dict.fromkeys(names))

    def render(self, **values: str) -> str:
        for field in self.fields:
            if not values.get(field):
                raise MissingTemplateField(self.name, field)
        prepared = {
            key: _shield_escape(str(value)) if key in self.shield_fields else str(value)
            for key, value in values.items()
        }
        return self.body.format(**prepared)


_HTML5 = """<!DOCTYPE html>
<html lang="{lang}">
<head>
  <meta charset="utf-8">
  <title>{title}</title>
</head>
<body>

</body>
</html>
"""

_ENTRIES = (
    Boilerplate(
        name="badge-pypi",
        body="[![PyPI](https://img.shields.io/pypi/v/{package}.svg)](https://pypi.org/project/{package}/)",
        description="PyPI version badge",
    ),
    Boilerplate(
        name="badge-python",
        body="[![Python](https://img.shields.io/pypi/pyversions/{package}.svg)](https://pypi.org/project/{package}/)",
        description="Supported Python versions badge",
    ),
    Boilerplate(
        name="badge-license",
        body="[![License](https://img.shields.io/badge/license-{license}-blue.svg)](LICENSE)",
        description="Static license badge",
        shield_fields=("license",),
    ),
    Boilerplate(
        name="badge-build",
        body="[![Build](https://github.com/{repo}/actions/workflows/{workflow}/badge.svg)](https://github.com/{repo}/actions)",
        description="GitHub Actions workflow badge",
    ),
    Boilerplate(
        name="html5",
        body=_HTML5,
        kind="document",
        description="Minimal HTML5 page",
    ),
    Boilerplate(
        name="license-header",
        body="# SPDX-License-Identifier: {license}\n",
        kind="header",
        description="SPDX license comment",
    ),
)

BOILERPLATE: Mapping[str, Boilerplate] = MappingProxyType(
    {entry.name: entry for entry in _ENTRIES}
)


def get_boilerplate(name: str) -> Boilerplate:
    try:
        return BOILERPLATE[name]
    except KeyError:
        raise UnknownTemplate(name, BOILERPLATE) from None


def badge_names() -> tuple[str, ...]:
    return tuple(name for name, entry in BOILERPLATE.items() if entry.kind == "badge")


def render_boilerplate(name: str, **fields: str) -> str:
    return get_boilerplate(name).render(**fields)


def insert_boilerplate(
    buffer: BufferHost, position: Position, name: str, **fields: str
) -> str:
    """Render template ``name`` and insert it at ``position``."""

    text = render_boilerplate(name, **fields)
    with telemetry.span(
        "transform::boilerplate",
        metadata={"template": name},
    ):
        buffer.insert_text(position, text)
    return text


__all__ = [
    "BOILERPLATE",
    "Boilerplate",
    "badge_names",
    "get_boilerplate",
    "insert_boilerplate",
    "render_boilerplate",
]
