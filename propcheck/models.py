"""
Core data models for the propcheck engine.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from .random_source import RandomSource


class ValidationError(ValueError):
    """Raised when a model is constructed with invalid values."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Validation failed: {'; '.join(errors)}")


class Rejected:
    """生成器拒绝产生值的标记"""

    _instance: Optional["Rejected"] = None

    def __new__(cls) -> "Rejected":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "REJECTED"


REJECTED = Rejected()


def is_rejected(outcome: object) -> bool:
    """Return True if a generator outcome is the rejection marker."""
    return outcome is REJECTED


@dataclass(frozen=True)
class GenerationContext:
    """生成参数：尺寸预算 + 随机源"""
    size: int
    random: RandomSource

    def __post_init__(self):
        if self.size < 0:
            raise ValidationError([f"size must be non-negative, got {self.size}"])

    def resize(self, new_size: int) -> "GenerationContext":
        """Return a copy with a different size sharing the same random source."""
        return replace(self, size=new_size)


@dataclass(frozen=True)
class PropertyResult:
    """单次属性求值结果"""
    ok: bool
    args: tuple[str, ...] = ()

    def with_args(self, *args: str) -> "PropertyResult":
        """Return a copy with the given argument representations prepended."""
        return PropertyResult(ok=self.ok, args=tuple(args) + self.args)


@dataclass(frozen=True)
class TestParameters:
    """测试参数"""
    __test__ = False

    min_successful_tests: int = 100
    max_discarded_tests: int = 50000
    max_size: int = 100

    def __post_init__(self):
        errors = self.validate()
        if errors:
            raise ValidationError(errors)

    def validate(self) -> list[str]:
        """验证测试参数，返回错误列表"""
        errors = []
        for name in ("min_successful_tests", "max_discarded_tests", "max_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                errors.append(f"{name} must be an integer, got {value!r}")
            elif value <= 0:
                errors.append(f"{name} must be positive, got {value}")
        return errors


DEFAULT_TEST_PARAMETERS = TestParameters()


class OutcomeStatus(str, Enum):
    """Terminal state of a test run."""
    PASSED = "passed"
    FAILED = "failed"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class TestOutcome:
    """
    Tagged outcome of a test run.

    Only FAILED carries a failure; use the passed()/failed()/exhausted()
    constructors rather than building instances directly.
    """
    __test__ = False

    status: OutcomeStatus
    failure: PropertyResult | None = None

    def __post_init__(self):
        if (self.status is OutcomeStatus.FAILED) != (self.failure is not None):
            raise ValidationError(["failure must be set exactly when status is FAILED"])

    @classmethod
    def passed(cls) -> "TestOutcome":
        return cls(OutcomeStatus.PASSED)

    @classmethod
    def failed(cls, failure: PropertyResult) -> "TestOutcome":
        return cls(OutcomeStatus.FAILED, failure)

    @classmethod
    def exhausted(cls) -> "TestOutcome":
        return cls(OutcomeStatus.EXHAUSTED)


@dataclass(frozen=True)
class TestStatistics:
    """测试统计"""
    __test__ = False

    result: TestOutcome
    succeeded: int
    discarded: int

    @property
    def status(self) -> OutcomeStatus:
        return self.result.status


@dataclass
class RunLog:
    """一次测试运行的日志记录"""
    property_name: str
    status: OutcomeStatus
    succeeded: int
    discarded: int
    duration_ms: float
    args: tuple[str, ...] = ()
    timestamp: datetime = field(default_factory=datetime.now)
