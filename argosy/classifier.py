"""
Argosy classifier: one left-to-right pass over the raw tokens.

Shapes
- long candidate:  '--name' or '--name=payload'
- short candidate: '-x', '-xyz' (cluster) or '-xyz=payload'
- positional:      everything else, including '-', '-=...' and ''

Effects
- positionals are pushed onto the queue in their original order.
- flag tokens update the matching specs in the registry: they are triggered,
  and an attached payload is coerced and assigned. In a cluster the payload
  belongs to the single character right before the '='.

Faults
- the pass never stops early. Unknown names, values attached to a Flag and
  values that fail coercion are collected (with token and 1-based position)
  and returned to the caller, which decides how to surface them. An unknown
  character in a cluster does not prevent its neighbours from being triggered.
- an empty payload ('--min=') leaves the value untouched and yields an
  EmptyValueWarning.
"""
import copy
from enum import Enum
from typing import NamedTuple

from .faults import ArgumentFault, InvalidFlagError, EmptyValueWarning
from .utils import ordinal


class TokenKind(Enum):
    LONG = "long"
    SHORT = "short"
    POSITIONAL = "positional"


class Token(NamedTuple):
    """
    a raw token broken into its parts.

    - text: the token as given.
    - name: the part before the first '=' (the whole token when there is none).
    - payload: the part after the first '=', or None when there is no '='.
    """
    kind: TokenKind
    text: str
    name: str
    payload: str | None

    @property
    def cluster(self):
        """
        the short-flag characters of a SHORT token (empty for other kinds).
        """
        return self.name[1:] if self.kind is TokenKind.SHORT else ""


def split(token, /):
    """
    classify the shape of one raw token (no registry involved).
    """
    if not isinstance(token, str):
        raise TypeError("raw arguments must be strings")

    name, equals, payload = token.partition("=")
    payload = payload if equals else None

    if token.startswith("--"):
        return Token(TokenKind.LONG, token, name, payload)
    if token.startswith("-") and len(name) > 1:
        return Token(TokenKind.SHORT, token, name, payload)
    return Token(TokenKind.POSITIONAL, token, token, None)


def _unknown(token, index, name, /, character=None):
    return InvalidFlagError(
        "unknown flag %r at %s position" % (name, ordinal(index)) if character is None else
        "unknown flag %r in %r at %s position" % ("-" + character, token.text, ordinal(index)),
        hint="check the spelling, or the list of flags the program accepts",
        token=token.text,
        index=index,
        name=name,
        character=character,
    )


def _attach(spec, token, index, faults, /):
    if token.payload is None:
        return
    if not token.payload:
        faults.append(EmptyValueWarning(
            "empty value attached to %r at %s position" % (token.name, ordinal(index)),
            hint="add a value after '=' or remove the '='",
            token=token.text,
            index=index,
            flag=spec,
        ))
        return
    try:
        spec._assign(token.payload)
    except ArgumentFault as fault:
        faults.append(copy.replace(fault, token=token.text, index=index))


def classify(tokens, registry, queue, /):
    """
    walk `tokens` once, updating `registry` specs and filling `queue`.

    parameters
    - tokens: Iterable[str], the raw arguments in order.
    - registry: Registry of the known specs.
    - queue: PositionalQueue receiving positional tokens.

    returns
    - list of collected faults (ArgumentFault errors and ArgumentWarning
      warnings) in the order they were found.
    """
    faults = []

    for index, text in enumerate(tokens, start=1):
        token = split(text)

        match token.kind:
            case TokenKind.POSITIONAL:
                queue.push_back(token.text)

            case TokenKind.LONG:
                if (spec := registry.long(token.name)) is None:
                    faults.append(_unknown(token, index, token.name))
                    continue
                spec._trigger()
                _attach(spec, token, index, faults)

            case TokenKind.SHORT:
                last = len(token.cluster) - 1
                for position, character in enumerate(token.cluster):
                    if (spec := registry.short(character)) is None:
                        faults.append(_unknown(token, index, "-" + character, character=character))
                        continue
                    spec._trigger()
                    # the payload only belongs to the character right before '='
                    if position == last:
                        _attach(spec, token, index, faults)

    return faults


__all__ = (
    "TokenKind",
    "Token",
    "split",
    "classify",
)
