"""
propcheck - 随机属性测试引擎

Generators composed from monadic combinators, properties built on top of
them, and a test runner that grows the size budget as trials succeed.

Example usage:
    from propcheck import TestParameters, check, implies, property

    prop = property(lambda n, m: implies(n > 0, (m * n) // n == m), int, int)
    stats = check(TestParameters(100, 5000, 50), prop)
    print(stats.status)
"""

__version__ = "0.1.0"

# Core data models
from .models import (
    REJECTED,
    GenerationContext,
    OutcomeStatus,
    PropertyResult,
    Rejected,
    RunLog,
    TestOutcome,
    TestParameters,
    TestStatistics,
    ValidationError,
    is_rejected,
)

# Random sources
from .random_source import RandomSource, StdRandom

# Generator combinators
from .gen import (
    Generator,
    GeneratorError,
    choose,
    elements,
    empty_list,
    fail,
    list_of,
    list_of1,
    one_of,
    parameterized,
    resize,
    sized,
    value,
    vector_of,
)

# Default generators
from .arbitrary import ArbitraryRegistry, RegistryError, arbitrary, get_default_registry

# Properties
from .prop import (
    Property,
    PropertyError,
    as_property,
    for_all,
    from_bool,
    guard,
    implies,
    property,
    rejected,
)

# Configuration
from .config import ConfigManager, ConfigError

# Run logging
from .logger import RunLogger
from .run_logger import CheckLogger, get_logger

# Test runner (unified entry point)
from .runner import ConsoleReporter, TestRunner, check, check_and_report

__all__ = [
    # Version
    "__version__",
    # Entry points
    "check",
    "check_and_report",
    "TestRunner",
    "ConsoleReporter",
    # Data models
    "GenerationContext",
    "PropertyResult",
    "TestParameters",
    "TestStatistics",
    "TestOutcome",
    "OutcomeStatus",
    "RunLog",
    "ValidationError",
    "Rejected",
    "REJECTED",
    "is_rejected",
    # Random sources
    "RandomSource",
    "StdRandom",
    # Generators
    "Generator",
    "GeneratorError",
    "value",
    "fail",
    "choose",
    "parameterized",
    "sized",
    "resize",
    "elements",
    "one_of",
    "list_of",
    "list_of1",
    "vector_of",
    "empty_list",
    # Default generators
    "ArbitraryRegistry",
    "RegistryError",
    "arbitrary",
    "get_default_registry",
    # Properties
    "Property",
    "PropertyError",
    "as_property",
    "for_all",
    "from_bool",
    "guard",
    "implies",
    "property",
    "rejected",
    # Configuration
    "ConfigManager",
    "ConfigError",
    # Logging
    "RunLogger",
    "CheckLogger",
    "get_logger",
]
