"""
Name resolution: turn a name-or-UUID into a backend identifier.

A UUID is returned as-is. Anything else is looked up with a READALL
query filtered by name; several exact matches are handed to a Chooser.
"""

import logging
from typing import Any, Callable, Optional, Protocol
from uuid import UUID

import click

from sdncli.errors import (
    AmbiguousNameError,
    NotFoundError,
    ParseError,
    ResponseFormatError,
    SelectionOutOfRangeError,
)
from sdncli.models.envelope import Operation
from sdncli.transport.envelope import RequestEnvelope
from sdncli.transport.http import Dispatcher

logger = logging.getLogger(__name__)


def parse_uuid(value: str) -> Optional[UUID]:
    try:
        return UUID(value)
    except (ValueError, AttributeError, TypeError):
        return None


def resource_type_for(uri: str) -> str:
    return uri.rstrip("/").split("/")[-1]


class Chooser(Protocol):
    def choose(self, name: str, candidates: list[dict[str, Any]]) -> int:
        """Return the index of the selected candidate."""
        ...


class TerminalChooser:
    """Lists the candidates and reads an index from stdin. Blocks."""

    def __init__(
        self,
        echo: Callable[[str], None] = click.echo,
        read: Optional[Callable[[str], str]] = None,
    ):
        self._echo = echo
        self._read = read or (lambda prompt: click.prompt(prompt, prompt_suffix="", default="", show_default=False))

    def choose(self, name: str, candidates: list[dict[str, Any]]) -> int:
        self._echo(f"@@ Found multiple {name}:")
        for i, res in enumerate(candidates):
            self._echo(f"{i} = {res.get('id')}:{res.get('fq_name')}")
        answer = self._read("Please select: ").strip()
        try:
            index = int(answer)
        except ValueError:
            raise ParseError(f"Invalid selection {answer!r}, expected a number")
        if not 0 <= index < len(candidates):
            raise SelectionOutOfRangeError(index, len(candidates))
        return index


class FailFastChooser:
    """Non-interactive: ambiguity is an error."""

    def choose(self, name: str, candidates: list[dict[str, Any]]) -> int:
        raise AmbiguousNameError(name, candidates)


class NameResolver:
    def __init__(self, dispatcher: Dispatcher, chooser: Optional[Chooser] = None):
        self._dispatcher = dispatcher
        self._chooser = chooser or TerminalChooser()

    async def lookup(self, uri: str, name: str) -> list[dict[str, Any]]:
        """Records whose name is exactly `name`. The server-side filter is advisory."""
        body = (
            RequestEnvelope()
            .set_type(resource_type_for(uri))
            .set_operation(Operation.READALL)
            .set_filters({"name": name})
            .build()
        )
        resp = await self._dispatcher.post(uri, body, bench=False)
        records = resp.json()
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise ResponseFormatError(f"Expected a JSON array of objects from {uri}", body=resp.text)
        logger.debug("Candidates for %s in %s: %s", name, uri, records)
        return [r for r in records if r.get("name") == name]

    async def resolve(self, uri: str, name: str) -> str:
        if parse_uuid(name) is not None:
            return name

        wanted = await self.lookup(uri, name)
        if not wanted:
            raise NotFoundError(uri, name)
        if len(wanted) == 1:
            return self._id_of(wanted[0], uri)

        index = self._chooser.choose(name, wanted)
        if not 0 <= index < len(wanted):
            raise SelectionOutOfRangeError(index, len(wanted))
        return self._id_of(wanted[index], uri)

    @staticmethod
    def _id_of(record: dict[str, Any], uri: str) -> str:
        rid = record.get("id")
        if not isinstance(rid, str) or parse_uuid(rid) is None:
            raise ResponseFormatError(f"Record from {uri} has no valid id: {record}")
        return rid
