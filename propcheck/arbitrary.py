"""
Registry of default ("arbitrary") generators keyed by type marker.

Plain markers such as int map to a Generator. Generic markers such as
list[int] are resolved through a factory registered for the origin type
(list), which receives the resolved generators of the type arguments.
"""

import string
import typing
from typing import Any, Callable, Optional

from .gen import Generator, choose, elements, sized, value, vector_of

GeneratorFactory = Callable[..., Generator]


class RegistryError(Exception):
    """Arbitrary registry lookup errors"""
    pass


class ArbitraryRegistry:
    """
    默认生成器注册表。

    Supports:
    - Registering a Generator for a plain type marker (int, bool, ...)
    - Registering a factory for a generic origin (list, tuple, ...)
    - Resolving markers, including nested ones like list[list[int]]
    """

    def __init__(self) -> None:
        self._generators: dict[Any, Generator] = {}
        self._factories: dict[Any, tuple[GeneratorFactory, int | None]] = {}

    def register(self, marker: Any, generator: Generator) -> None:
        """
        Register the default generator for a type marker.

        Args:
            marker: Type marker (usually the type itself)
            generator: Generator producing values of that type
        """
        self._generators[marker] = generator

    def register_factory(
        self,
        origin: Any,
        factory: GeneratorFactory,
        arity: int | None = None,
    ) -> None:
        """
        Register a factory for a generic type.

        Args:
            origin: Generic origin (e.g. list for list[int])
            factory: Called with one Generator per type argument
            arity: Required number of type arguments, None for any
        """
        self._factories[origin] = (factory, arity)

    def is_registered(self, marker: Any) -> bool:
        if marker in self._generators:
            return True
        return typing.get_origin(marker) in self._factories

    def resolve(self, marker: Any) -> Generator:
        """
        Resolve the default generator for a type marker.

        Args:
            marker: Type marker, plain or generic

        Returns:
            The registered Generator

        Raises:
            RegistryError: If the marker (or one of its arguments) has no
                default, or the argument count does not match the factory
        """
        if marker in self._generators:
            return self._generators[marker]

        origin = typing.get_origin(marker)
        if origin is None or origin not in self._factories:
            raise RegistryError(f"No arbitrary generator registered for: {marker!r}")

        factory, arity = self._factories[origin]
        type_args = typing.get_args(marker)
        if arity is not None and len(type_args) != arity:
            raise RegistryError(
                f"{origin.__name__} expects {arity} type argument(s), got {len(type_args)}"
            )
        return factory(*[self.resolve(arg) for arg in type_args])

    def copy(self) -> "ArbitraryRegistry":
        """Return an independent registry with the same entries."""
        other = ArbitraryRegistry()
        other._generators = dict(self._generators)
        other._factories = dict(self._factories)
        return other


def arbitrary_int() -> Generator[int]:
    """Integers uniform over [0, size]."""
    return sized(lambda s: choose(0, s))


def arbitrary_list(element: Generator) -> Generator[list]:
    """Lists of exactly size elements, each drawn from element."""
    return sized(lambda s: vector_of(s, element))


def arbitrary_tuple(*components: Generator) -> Generator[tuple]:
    def step(acc: Generator, component: Generator) -> Generator:
        return acc.flat_map(lambda xs: component.map(lambda x: xs + (x,)))

    result: Generator = value(())
    for component in components:
        result = step(result, component)
    return result


_ALPHABET = string.ascii_letters + string.digits


def arbitrary_str() -> Generator[str]:
    return arbitrary_list(elements(_ALPHABET)).map("".join)


def create_default_registry() -> ArbitraryRegistry:
    """Build a registry populated with the built-in defaults."""
    registry = ArbitraryRegistry()
    registry.register(int, arbitrary_int())
    registry.register(bool, elements([False, True]))
    registry.register(str, arbitrary_str())
    registry.register_factory(list, arbitrary_list, arity=1)
    registry.register_factory(tuple, arbitrary_tuple)
    return registry


# Global default registry instance
_default_registry: Optional[ArbitraryRegistry] = None


def get_default_registry() -> ArbitraryRegistry:
    """Get the global default registry instance."""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_default_registry()
    return _default_registry


def arbitrary(marker: Any, registry: ArbitraryRegistry | None = None) -> Generator:
    """Resolve the default generator for marker."""
    return (registry or get_default_registry()).resolve(marker)
