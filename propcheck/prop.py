"""
Property combinators.

A property is a Generator of PropertyResult. Rejection means the trial is
discarded; a produced result with ok=False is a counterexample.
"""

from typing import Any, Callable, Union

from .arbitrary import ArbitraryRegistry, get_default_registry
from .gen import Generator, fail, value
from .models import PropertyResult

Property = Generator[PropertyResult]
Testable = Union[bool, Property]

MAX_ARITY = 4


class PropertyError(Exception):
    """Property construction errors"""
    pass


def from_bool(b: bool) -> Property:
    """A property producing {ok: b, args: ()}."""
    return value(PropertyResult(ok=bool(b)))


def as_property(testable: Testable) -> Property:
    """
    Convert a bool or a Property into a Property.

    A generator may produce either a PropertyResult or a bare bool; bools
    are converted to results without arguments.

    Raises:
        PropertyError: If testable is neither, or if the generator produces
            any other value
    """
    if isinstance(testable, Generator):
        return testable.map(_to_result)
    if isinstance(testable, bool):
        return from_bool(testable)
    raise PropertyError(
        f"expected a bool or a property, got {type(testable).__name__}"
    )


def _to_result(produced: Any) -> PropertyResult:
    if isinstance(produced, PropertyResult):
        return produced
    if isinstance(produced, bool):
        return PropertyResult(ok=produced)
    raise PropertyError(
        f"property produced {type(produced).__name__}, expected a bool or PropertyResult"
    )


def rejected() -> Property:
    """A property that always discards."""
    return fail()


def implies(condition: bool, prop: Testable) -> Property:
    """Evaluate prop only when condition holds; otherwise discard."""
    if condition:
        return as_property(prop)
    return rejected()


class guard:
    """
    Boolean precondition with an implies() method.

    guard(n > 0).implies(m % n == 0) is the same as
    implies(n > 0, m % n == 0).
    """

    __slots__ = ("condition",)

    def __init__(self, condition: bool):
        self.condition = condition

    def implies(self, prop: Testable) -> Property:
        return implies(self.condition, prop)


def for_all(generator: Generator, body: Callable[[Any], Testable]) -> Property:
    """
    Bind a generated value and evaluate body with it.

    The string form of the bound value is prepended to the args of the
    nested result, so nested for_all calls record arguments outermost
    first. Rejection of either the generator or the nested property
    rejects the whole property without recording the argument.
    """
    return generator.flat_map(
        lambda x: as_property(body(x)).map(lambda r: r.with_args(str(x)))
    )


def property(
    f: Callable[..., Testable],
    *markers: Any,
    registry: ArbitraryRegistry | None = None,
) -> Property:
    """
    Build a property from a function of 1 to 4 arguments.

    Each argument is drawn from the default generator of the corresponding
    type marker, binding left to right like nested for_all. The recorded
    args are the first argument's representation first, followed by the
    args of the base result.

    Example:
        property(lambda xs, n: len(xs) >= 0 and n >= 0, list[int], int)

    Raises:
        PropertyError: If the number of markers is not in 1..4
        RegistryError: If a marker has no default generator
    """
    if not 1 <= len(markers) <= MAX_ARITY:
        raise PropertyError(
            f"property() supports 1 to {MAX_ARITY} arguments, got {len(markers)}"
        )
    registry = registry or get_default_registry()
    generators = [registry.resolve(marker) for marker in markers]

    def bind(bound: tuple) -> Testable:
        index = len(bound)
        if index == len(generators):
            return f(*bound)
        return for_all(generators[index], lambda x: bind(bound + (x,)))

    return as_property(bind(()))
