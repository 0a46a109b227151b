# tvcontrol/catalog.py
"""
Command catalog for the TV serial protocol.

Every command is a 4-character prefix followed by a payload, space-padded
to a fixed 8-character body and terminated by a carriage return:

    POWR1   \\r
    VOLM25  \\r
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

# ----------------------- Protocol Constants -----------------------

FRAME_WIDTH = 8
PREFIX_WIDTH = 4
TERMINATOR = "\r"

VOLUME_MIN = 0
VOLUME_MAX = 60

# ----------------------- Errors -----------------------

class TVError(Exception):
    """Base class for all controller errors."""

class InvalidArgumentError(TVError, ValueError):
    """Raised when a caller-supplied argument is missing or outside its valid range."""

class UnknownCommandError(TVError, KeyError):
    """Raised when a (domain, action) pair is not in the catalog."""

# ----------------------- Data Types & Enums -----------------------

class Domain(Enum):
    """Groups of related commands, one protocol prefix each."""
    POWER  = "power"
    VOLUME = "volume"
    NAME   = "name"
    MODEL  = "model"
    MUTE   = "mute"
    INPUT  = "input"

class _Argument:
    """Payload placeholder: the value comes from the caller."""

    def __repr__(self) -> str:
        return "ARGUMENT"

ARGUMENT = _Argument()

@dataclass(frozen=True, slots=True)
class ActionSpec:
    description: str
    payload: Union[str, _Argument]

    @property
    def requires_argument(self) -> bool:
        return self.payload is ARGUMENT

@dataclass(frozen=True, slots=True)
class CommandSpec:
    domain: Domain
    prefix: str
    actions: Mapping[str, ActionSpec]

    def __post_init__(self) -> None:
        if len(self.prefix) != PREFIX_WIDTH or not self.prefix.isascii():
            raise ValueError(f"prefix {self.prefix!r} must be {PREFIX_WIDTH} ASCII characters")

def _spec(domain: Domain, prefix: str, **actions: ActionSpec) -> CommandSpec:
    return CommandSpec(domain, prefix, MappingProxyType(dict(actions)))

# ----------------------- Catalog -----------------------

CATALOG: Mapping[Domain, CommandSpec] = MappingProxyType({
    spec.domain: spec for spec in (
        _spec(Domain.POWER, "POWR",
              on=ActionSpec("Turn the TV on", "1"),
              off=ActionSpec("Put the TV in standby", "0")),
        _spec(Domain.VOLUME, "VOLM",
              set=ActionSpec(f"Set the volume ({VOLUME_MIN}-{VOLUME_MAX})", ARGUMENT)),
        _spec(Domain.NAME, "TVNM",
              get=ActionSpec("Read the TV name", "1")),
        _spec(Domain.MODEL, "MNRD",
              get=ActionSpec("Read the model number", "1")),
        _spec(Domain.MUTE, "MUTE",
              on=ActionSpec("Mute audio", "1"),
              off=ActionSpec("Unmute audio", "2"),
              toggle=ActionSpec("Toggle mute", "0")),
        _spec(Domain.INPUT, "ITGD",
              toggle=ActionSpec("Switch to the next input", "1")),
    )
})

# ----------------------- Encoding -----------------------

def lookup(domain: Domain, action: str) -> ActionSpec:
    try:
        return CATALOG[domain].actions[action]
    except KeyError:
        raise UnknownCommandError(f"unknown command: {domain} {action!r}") from None

def _volume_payload(argument: Optional[Union[int, str]]) -> str:
    if argument is None:
        raise InvalidArgumentError("volume level is required")
    if isinstance(argument, bool) or (
            isinstance(argument, str) and not (argument.isascii() and argument.isdecimal())):
        raise InvalidArgumentError(f"volume level must be an integer, got {argument!r}")
    try:
        level = int(argument)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"volume level must be an integer, got {argument!r}") from None
    if isinstance(argument, float) and argument != level:
        raise InvalidArgumentError(f"volume level must be an integer, got {argument!r}")
    if not (VOLUME_MIN <= level <= VOLUME_MAX):
        raise InvalidArgumentError(
            f"volume level {level} out of range {VOLUME_MIN}-{VOLUME_MAX}")
    return str(level)

def encode_command(domain: Domain, action: str,
                   argument: Optional[Union[int, str]] = None) -> str:
    """
    Build the 8-character command body for ``domain``/``action``.

    Literal-payload actions ignore ``argument``. The only argument-taking
    action is volume ``set``, whose level must be an integer in 0-60.
    """
    spec = lookup(domain, action)
    payload = _volume_payload(argument) if spec.requires_argument else spec.payload
    body = CATALOG[domain].prefix + payload
    if len(body) > FRAME_WIDTH:
        raise InvalidArgumentError(f"command body {body!r} exceeds {FRAME_WIDTH} characters")
    return body.ljust(FRAME_WIDTH)

def encode_frame(body: str) -> bytes:
    """Append the terminator to an encoded body and convert it to wire bytes."""
    return (body + TERMINATOR).encode("ascii")
