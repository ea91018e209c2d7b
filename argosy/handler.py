"""
Argosy handler: the surface a program talks to.

What this module provides
- ArgHandler: owns the raw arguments of one invocation, classifies them
  against the flags the program declares, and hands out the remaining
  positional arguments on demand.

Flow
    handler = ArgHandler(sys.argv[1:])
    handler.attach_flags(help, start, end)     # classification happens here
    if handler.is_triggered(help): ...
    first = handler.value_of(start)
    number = handler.next(ValueKind.INT)       # first positional that is an int

Retrieval
- next()            → front token, as given.
- next(kind)        → first token (in original order) that coerces to `kind`.
- next(parser)      → first token the callable accepts.
  Exactly one token is removed on success; none on failure.

Faults
- attach_flags() runs the whole pass, then surfaces warnings and raises a
  single ParseExit holding every error it found.
- retrieval raises NoRemainingArgumentsError on an empty queue and
  NoArgumentOfRequiredTypeError when no token fits.
- shell=True renders faults with rich and exits with status 1 instead.
"""
import sys

from .classifier import classify
from .faults import *
from .flags import Flag, Option, Registry
from .positionals import PositionalQueue
from .utils import *
from .values import coerce, resolve, describe


class ArgHandler:
    """
    classifier and typed retrieval over one list of raw arguments.

    parameters
    - arguments: Iterable[str], defaults to sys.argv[1:].
    - shell: bool (keyword-only)
      render faults on stderr and exit with status 1 instead of raising.
    - fancy: bool (keyword-only)
      wrap rendered faults in a rich panel.
    - colorful: bool (keyword-only)
      style rendered faults.
    """

    def __init__(self, arguments=Unset, /, *, shell=False, fancy=False, colorful=True):
        arguments = tuple(coalesce(arguments, sys.argv[1:]))
        for argument in arguments:
            if not isinstance(argument, str):
                raise TypeError("ArgHandler() arguments must be strings")

        self._arguments = arguments
        self._registry = Unset
        self._queue = PositionalQueue()
        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)

    arguments = mirror("arguments")

    @property
    def registry(self):
        return coalesce(self._registry, Registry())

    def trigger(self, fault, /, **options):
        """
        surface `fault` with this handler's presentation options.
        """
        trigger(fault, **options, shell=self.shell, fancy=self.fancy, colorful=self.colorful)

    def attach_flags(self, *flags):
        """
        declare the known flags and classify the raw arguments against them.

        behavior
        - validates the registry (DuplicatedFlagError on clashing forms).
        - clears the parse state of every spec, then runs the classifier once.
        - emits collected warnings, then raises ParseExit if any error was found.
          the specs and the positional queue are fully updated either way.

        returns
        - self, for chaining.

        notes
        - may be called only once per handler.
        """
        if self._registry is not Unset:
            raise TypeError("attach_flags() must be called only once")

        registry = Registry(*flags)
        for flag in registry:
            flag._reset()
        self._registry = registry

        errors = []
        for fault in classify(self._arguments, registry, self._queue):
            if isinstance(fault, ArgumentWarning):
                self.trigger(fault)
            else:
                errors.append(fault)

        if errors:
            self.trigger(ParseExit(errors))
        return self

    def _known(self, flag):
        if not isinstance(flag, Flag | Option):
            raise TypeError("expected a Flag or an Option")
        if flag not in self.registry:
            return self.trigger(InvalidFlagError(
                "flag %r was not attached to this handler" % flag.long,
                hint="pass it to attach_flags() first",
                name=flag.long,
                flag=flag,
            ))
        return flag

    def is_triggered(self, flag, /):
        return self._known(flag).triggered

    def value_of(self, flag, /):
        flag = self._known(flag)
        try:
            return flag.value
        except ArgumentFault as fault:
            return self.trigger(fault)

    def remaining_count(self):
        return self._queue.size()

    def has_remaining(self):
        return self.remaining_count() > 0

    def remaining(self):
        """
        snapshot of the positional queue, in order.
        """
        return tuple(self._queue)

    def next(self, target=Unset, /):
        """
        pull the next positional argument.

        parameters
        - target: Unset | ValueKind | kind name | Callable[[str], _T]
          • Unset → pop and return the front token unchanged.
          • otherwise scan from the front and remove the first token that
            coerces successfully; tokens before it stay where they are.

        raises
        - NoRemainingArgumentsError: the queue is empty.
        - NoArgumentOfRequiredTypeError: no token fits `target` (queue untouched).
        - UnknownValueTypeError: `target` is not a kind, kind name or callable.
        """
        if not self._queue:
            return self.trigger(NoRemainingArgumentsError(
                "no positional arguments remain",
                hint="pass the missing argument on the command line",
            ))

        if target is Unset:
            return self._queue.pop_front()

        try:
            target = resolve(target)
        except ArgumentFault as fault:
            return self.trigger(fault)

        for index, raw in enumerate(self._queue):
            try:
                value = coerce(raw, target)
            except Exception:
                continue
            self._queue.pop_at(index)
            return value

        return self.trigger(NoArgumentOfRequiredTypeError(
            "none of the %d remaining arguments is a %s" % (self._queue.size(), describe(target)),
            hint="pass a %s on the command line" % describe(target),
            expected=target,
            remaining=tuple(self._queue),
        ))

    def __repr__(self):
        return f"arg-handler(arguments={self._arguments!r}, remaining={tuple(self._queue)!r})"

    def __rich_repr__(self):
        yield "arguments", self._arguments
        yield "flags", tuple(self.registry)
        yield "remaining", tuple(self._queue)


__all__ = (
    "ArgHandler",
)
