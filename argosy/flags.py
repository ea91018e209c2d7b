r"""
Argosy flag specifications and the registry they are matched against.

Overview
- Specs
  • Flag: boolean switch with a short (-x) and a long (--name) form.
  • Option[_T]: switch that may also carry a value, attached with '=':
    -m=5 or --min=5. The value is coerced with a ValueKind or a custom parser
    and may be pre-seeded with a default.
- Registry: the set of specs known to one parse pass, indexed by form.

Configuration vs. state
- Configuration (forms, type, default) is validated once, at construction,
  and is read-only afterwards.
- Parse state (triggered, assigned value) belongs to the spec instance, which
  the calling program owns. The classifier writes it through _trigger() and
  _assign(); ArgHandler.attach_flags() clears it first with _reset().

Validation highlights
- short form: exactly '-' plus one character, not '--' and not '-='.
- long form: '--' plus at least one character, without '=' or whitespace.
- forms must be unique within a registry.

Quick example:
    >>> from argosy.flags import Flag, Option
    >>> from argosy.values import ValueKind
    >>> verbose = Flag("-v", "--verbose")
    >>> limit = Option("-l", "--limit", type=ValueKind.INT, default=10)
    >>> limit.value
    10
"""
import functools
import operator
import re

from .faults import (
    IncorrectFlagSyntaxError,
    DuplicatedFlagError,
    CannotCarryValueError,
    WrongValueTypeError,
    MissingValueError,
)
from .utils import *
from .values import ValueKind, coerce, resolve, describe


class FlagType(type):
    """
    Metaclass that gives specs stable representations and read-only fields.

    Responsibilities
    - expose every name in __introspectable__ as a read-only property backed
      by "_{name}" (see mirror()).
    - derive __typename__ from the class name for messages ("flag", "option").
    - provide __repr__/__rich_repr__ over __displayable__ (or __introspectable__).
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_forms(cls, metadata, /):
    """
    Internal: validate the short and long forms of a spec.

    Raises
    - IncorrectFlagSyntaxError: on any malformed form; the message names the
      other form so the offending declaration is easy to find.
    """
    short = metadata["short"]
    long = metadata["long"]

    if not isinstance(short, str) or not isinstance(long, str):
        raise IncorrectFlagSyntaxError(
            f"{cls.__typename__} forms must be strings",
            short=short,
            long=long,
        )

    if len(short) != 2:
        reason = "the short form of %r must be exactly 2 characters" % long
    elif short[0] != "-":
        reason = "the short form of %r must start with '-'" % long
    elif short[1] == "-":
        reason = "the short form of %r cannot be '--'" % long
    elif short[1] == "=" or short[1].isspace():
        reason = "the short form of %r cannot use %r" % (long, short[1])
    elif not long.startswith("--"):
        reason = "the long form of %r must start with '--'" % short
    elif len(long) == 2:
        reason = "the long form of %r needs a name after '--'" % short
    elif "=" in long or re.search(r"\s", long):
        reason = "the long form of %r cannot contain '=' or whitespace" % short
    else:
        return

    raise IncorrectFlagSyntaxError(
        reason,
        hint="declare forms like %s('-x', '--name')" % cls.__name__,
        short=short,
        long=long,
    )


class Switch(metaclass=FlagType):
    """
    Behaviour shared by every spec: matching by form and being triggered.
    """

    def matches(self, token, /):
        """
        True when `token` (up to its first '=') is the short or the long form.
        """
        name = token.partition("=")[0]
        return name == self._short or name == self._long

    def matches_char(self, char, /):
        return char == self._short[1]

    def _trigger(self):
        self._triggered = True


class Flag(Switch):
    """
    Boolean switch with synonymous short and long forms.

    A Flag is triggered when either form appears on the command line, alone or
    inside a short cluster (-abc). It never carries a value: attaching one
    (--help=yes) is reported as CannotCarryValueError.
    """

    __introspectable__ = (
        "short",
        "long",
        "triggered",
    )

    accepts_value = False

    def __new__(cls, short, long, /):
        metadata = {
            "short": short,
            "long": long,
        }
        _sanitize_forms(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._triggered = False
        return self

    @property
    def value(self):
        raise CannotCarryValueError(
            "flag %r cannot carry a value" % self._long,
            hint="read its state with .triggered instead",
            flag=self,
        )

    @property
    def has_value(self):
        return False

    def _assign(self, raw, /):
        raise CannotCarryValueError(
            "flag %r cannot carry a value" % self._long,
            hint="remove everything from '=' (for example: %s)" % self._long,
            flag=self,
            value=raw,
        )

    def _reset(self):
        self._triggered = False

    def __flag__(self):
        """
        Introspection hook: identify this spec as a Flag.
        """
        return self


class Option[_T](Switch):
    """
    Switch that may carry a value attached with '='.

    Parameters
    - short, long: the two synonymous forms ("-m", "--min").
    - type: ValueKind | kind name | Callable[[str], _T]
      how the attached string is converted. Defaults to ValueKind.STRING.
    - default: value reported by .value until one is attached. Stored as
      given (not coerced). Leave unset to make .value raise MissingValueError.

    An Option is also triggered by its bare forms (-m, --min); triggering and
    assignment are independent.
    """

    __introspectable__ = (
        "short",
        "long",
        "type",
        "default",
        "triggered",
    )

    accepts_value = True

    def __new__(cls, short, long, /, type=ValueKind.STRING, default=Unset):
        metadata = {
            "short": short,
            "long": long,
            "type": type,
            "default": default,
        }
        _sanitize_forms(cls, metadata)
        metadata["type"] = resolve(metadata["type"])

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._triggered = False
        self._value = Unset
        return self

    @property
    def value(self):
        """
        The attached value, else the default; MissingValueError when neither exists.
        """
        if (value := coalesce(self._value, self._default)) is Unset:
            raise MissingValueError(
                "option %r has no value and no default" % self._long,
                hint="attach one on the command line (for example: %s=<%s>)" % (self._long, describe(self._type)),
                flag=self,
                expected=self._type,
            )
        return value

    @property
    def has_value(self):
        return self._value is not Unset or self._default is not Unset

    def _assign(self, raw, /):
        try:
            self._value = coerce(raw, self._type)
        except Exception as exception:
            raise WrongValueTypeError(
                "value %r of option %r is not a valid %s" % (raw, self._long, describe(self._type)),
                hint="attach a %s (for example: %s=<%s>)" % (describe(self._type), self._long, describe(self._type)),
                flag=self,
                value=raw,
                expected=self._type,
            ) from exception

    def _reset(self):
        self._triggered = False
        self._value = Unset

    def __option__(self):
        """
        Introspection hook: identify this spec as an Option.
        """
        return self


class Registry:
    """
    Ordered set of the specs known to one parse pass.

    Lookups are by form: long("--name") and short("x") return the matching spec
    or None. The same instance may be given twice (kept once); two different
    specs sharing a form raise DuplicatedFlagError.
    """
    __slots__ = ("_specs", "_shorts", "_longs")

    def __init__(self, *specs):
        self._specs = []
        self._shorts = {}
        self._longs = {}
        for spec in specs:
            self.add(spec)

    def add(self, spec, /):
        if not isinstance(spec, Flag | Option):
            raise TypeError("registry entries must be Flag or Option instances")
        if spec in self._specs:
            return spec
        for table, form in ((self._shorts, spec.short[1]), (self._longs, spec.long)):
            if (other := table.get(form)) is not None:
                raise DuplicatedFlagError(
                    "%s %r is declared by both %r and %r" % (
                        "short form" if table is self._shorts else "long form",
                        spec.short if table is self._shorts else spec.long,
                        other,
                        spec,
                    ),
                    hint="give every flag distinct forms",
                    flag=spec,
                    other=other,
                )
        self._shorts[spec.short[1]] = spec
        self._longs[spec.long] = spec
        self._specs.append(spec)
        return spec

    def short(self, char, /):
        return self._shorts.get(char)

    def long(self, name, /):
        return self._longs.get(name)

    def __contains__(self, spec, /):
        return spec in self._specs

    def __iter__(self):
        return iter(tuple(self._specs))

    def __len__(self):
        return len(self._specs)

    def __repr__(self):
        return f"registry({", ".join(map(repr, self._specs))})"


__all__ = (
    # Classes (specifications)
    "Flag",
    "Option",

    # Matching
    "Registry",
)

# Remove the internal metaclass from the module namespace to avoid accidental
# exposure in docs, autocompletion, or star-imports. Not part of the public API.
del FlagType
