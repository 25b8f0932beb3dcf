"""
Generator combinators for the propcheck engine.

A Generator is a function from a GenerationContext to either a value or
REJECTED. Combinators never raise for "no value"; they reject instead.
Construction-time misuse (inverted ranges, negative sizes) raises
GeneratorError.
"""

from typing import Any, Callable, Generic, Sequence, TypeVar

from .models import REJECTED, GenerationContext, Rejected
from .random_source import RandomSource, StdRandom

T = TypeVar("T")
U = TypeVar("U")


class GeneratorError(Exception):
    """Generator construction errors"""
    pass


class Generator(Generic[T]):
    """
    参数化的随机值生成器。

    Wraps a function GenerationContext -> T | REJECTED. Generators are
    immutable and can be shared between runs; all randomness comes from
    the random source held in the context.
    """

    __slots__ = ("_run",)

    def __init__(self, run: Callable[[GenerationContext], T | Rejected]):
        self._run = run

    def __call__(self, context: GenerationContext) -> T | Rejected:
        return self._run(context)

    def map(self, f: Callable[[T], U]) -> "Generator[U]":
        """Apply f to the produced value; rejection propagates unchanged."""
        def run(context: GenerationContext):
            t = self(context)
            if t is REJECTED:
                return REJECTED
            return f(t)
        return Generator(run)

    def flat_map(self, f: Callable[[T], "Generator[U]"]) -> "Generator[U]":
        """
        Sequence this generator with a generator computed from its value.

        Both steps run against the same context. If this generator rejects,
        f is never called; if the second generator rejects, so does the
        whole expression.
        """
        def run(context: GenerationContext):
            t = self(context)
            if t is REJECTED:
                return REJECTED
            return f(t)(context)
        return Generator(run)

    def filter(self, predicate: Callable[[T], bool]) -> "Generator[T]":
        """
        Reject values that do not satisfy predicate.

        The underlying generator is evaluated once; there is no retry.
        """
        def run(context: GenerationContext):
            t = self(context)
            if t is REJECTED or not predicate(t):
                return REJECTED
            return t
        return Generator(run)

    such_that = filter

    def sample(self, size: int = 100, random: RandomSource | None = None) -> T | Rejected:
        """
        Evaluate the generator once outside of a test run.

        Args:
            size: Size budget for the evaluation
            random: Random source; a fresh unseeded StdRandom if None

        Returns:
            The produced value or REJECTED
        """
        return self(GenerationContext(size, random or StdRandom()))


def value(x: T) -> Generator[T]:
    """A generator that always produces x."""
    return Generator(lambda context: x)


def fail() -> Generator[Any]:
    """A generator that never produces a value."""
    return Generator(lambda context: REJECTED)


def parameterized(f: Callable[[GenerationContext], Generator[T]]) -> Generator[T]:
    """Create a generator that can read its generation context."""
    return Generator(lambda context: f(context)(context))


def sized(f: Callable[[int], Generator[T]]) -> Generator[T]:
    """Create a generator that can read the size of its context."""
    return parameterized(lambda context: f(context.size))


def resize(new_size: int, g: Generator[T]) -> Generator[T]:
    """Evaluate g with the size replaced by new_size."""
    if new_size < 0:
        raise GeneratorError(f"size must be non-negative, got {new_size}")
    return Generator(lambda context: g(context.resize(new_size)))


def choose(low: int, high: int) -> Generator[int]:
    """
    A generator of integers uniformly distributed over [low, high].

    Raises:
        GeneratorError: If low > high
    """
    if low > high:
        raise GeneratorError(f"empty range: choose({low}, {high})")
    return parameterized(lambda context: value(context.random.choose(low, high)))


def elements(xs: Sequence[T]) -> Generator[T]:
    """Pick a random element of xs; rejects when xs is empty."""
    items = list(xs)
    if not items:
        return fail()
    return choose(0, len(items) - 1).map(lambda i: items[i])


def one_of(generators: Sequence[Generator[T]]) -> Generator[T]:
    """Pick a random generator from the sequence and evaluate it."""
    gens = list(generators)
    if not gens:
        return fail()
    return choose(0, len(gens) - 1).flat_map(lambda i: gens[i])


def empty_list() -> Generator[list]:
    """A generator that always produces an empty list."""
    return Generator(lambda context: [])


def vector_of(n: int, g: Generator[T]) -> Generator[list[T]]:
    """
    Generate a list of exactly n elements from g.

    Elements are drawn first to last; the list is rejected as soon as
    one element is rejected.
    """
    if n < 0:
        raise GeneratorError(f"vector length must be non-negative, got {n}")

    def run(context: GenerationContext):
        items = []
        for _ in range(n):
            t = g(context)
            if t is REJECTED:
                return REJECTED
            items.append(t)
        return items
    return Generator(run)


def list_of(g: Generator[T]) -> Generator[list[T]]:
    """Generate a list whose length is the current size."""
    return sized(lambda s: vector_of(s, g))


def list_of1(g: Generator[T]) -> Generator[list[T]]:
    """Generate a non-empty list: one mandatory element plus a size-driven tail."""
    return g.flat_map(lambda x: list_of(g).map(lambda xs: [x] + xs))
