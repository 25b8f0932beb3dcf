"""
Test runner - repeatedly evaluates a property under a growing size budget.

The loop stops on the first counterexample, when enough trials have
succeeded, or when the discard budget is spent.
"""

import sys
import time
from typing import Callable, Optional, TextIO

from .config import ConfigManager, LoggingConfig
from .logger import RunLogger
from .models import (
    DEFAULT_TEST_PARAMETERS,
    REJECTED,
    GenerationContext,
    OutcomeStatus,
    PropertyResult,
    TestOutcome,
    TestParameters,
    TestStatistics,
)
from .prop import Testable, as_property
from .random_source import RandomSource, StdRandom
from .run_logger import CheckLogger, get_logger

TestInspector = Callable[[Optional[PropertyResult], int, int], None]


def silent_inspector(result: Optional[PropertyResult], succeeded: int, discarded: int) -> None:
    pass


def compute_size(parameters: TestParameters, succeeded: int, discarded: int) -> int:
    """
    Size for the next trial.

    Grows linearly with successes up to max_size and is nudged up by one
    for every ten discards, clamped to max_size.
    """
    size = (succeeded * parameters.max_size) // parameters.min_successful_tests + discarded // 10
    return min(size, parameters.max_size)


class TestRunner:
    """
    测试执行器 - 驱动属性的重复求值并汇总结果。

    The random source is shared by every trial of a run and must not be
    used by two runs at the same time.
    """
    __test__ = False

    def __init__(
        self,
        parameters: TestParameters | None = None,
        random: RandomSource | None = None,
        run_logger: RunLogger | None = None,
        logging_config: LoggingConfig | None = None,
    ):
        """
        Initialize TestRunner.

        Args:
            parameters: Test parameters. If None, uses the defaults (100, 50000, 100)
            random: Random source. If None, creates an unseeded StdRandom
            run_logger: Optional in-memory logger receiving one entry per run
            logging_config: JSONL logging settings. If None, each property
                uses get_logger(), driven by PROPCHECK_LOGGING
        """
        self._parameters = parameters or DEFAULT_TEST_PARAMETERS
        self._random = random or StdRandom()
        self._run_logger = run_logger
        self._logging_config = logging_config

    @classmethod
    def from_config(
        cls,
        config_manager: ConfigManager,
        run_logger: RunLogger | None = None,
    ) -> "TestRunner":
        """Create a runner from a loaded configuration."""
        config = config_manager.config
        return cls(
            parameters=config.check.parameters,
            random=config_manager.create_random_source(),
            run_logger=run_logger,
            logging_config=config.logging,
        )

    @property
    def parameters(self) -> TestParameters:
        """Get the test parameters."""
        return self._parameters

    @property
    def random(self) -> RandomSource:
        """Get the shared random source."""
        return self._random

    def run(
        self,
        prop: Testable,
        inspector: TestInspector = silent_inspector,
        name: str = "property",
    ) -> TestStatistics:
        """
        Check a property.

        Args:
            prop: Property to check
            inspector: Called after every trial with the result (None when
                the trial was discarded) and the running counts
            name: Property name used for logging

        Returns:
            TestStatistics for the run
        """
        prop = as_property(prop)
        prms = self._parameters
        started = time.perf_counter()

        succeeded = 0
        discarded = 0
        failure: PropertyResult | None = None

        while (
            failure is None
            and discarded < prms.max_discarded_tests
            and succeeded < prms.min_successful_tests
        ):
            size = compute_size(prms, succeeded, discarded)
            res = prop(GenerationContext(size, self._random))
            if res is REJECTED:
                discarded += 1
                res = None
            elif res.ok:
                succeeded += 1
            else:
                failure = res
            inspector(res, succeeded, discarded)

        if failure is not None:
            outcome = TestOutcome.failed(failure)
        elif succeeded >= prms.min_successful_tests:
            outcome = TestOutcome.passed()
        else:
            outcome = TestOutcome.exhausted()

        stats = TestStatistics(outcome, succeeded, discarded)
        self._record(name, stats, (time.perf_counter() - started) * 1000)
        return stats

    def _record(self, name: str, stats: TestStatistics, duration_ms: float) -> None:
        failure = stats.result.failure
        if self._run_logger is not None:
            self._run_logger.log(
                property_name=name,
                status=stats.status,
                succeeded=stats.succeeded,
                discarded=stats.discarded,
                duration_ms=duration_ms,
                args=failure.args if failure is not None else (),
            )
        self._check_logger(name).log_run(
            stats,
            self._parameters,
            duration_ms,
            seed=self._random.seed,
        )

    def _check_logger(self, name: str) -> CheckLogger:
        if self._logging_config is None:
            return get_logger(name)
        return CheckLogger(
            name,
            enabled=self._logging_config.enabled,
            log_dir=self._logging_config.log_dir,
        )


class ConsoleReporter:
    """Writes progress and a final summary of a run to a text stream."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def progress(self, result: Optional[PropertyResult], succeeded: int, discarded: int) -> None:
        if discarded > 0:
            self.stream.write(f"\rPassed {succeeded} tests; {discarded} discarded")
        else:
            self.stream.write(f"\rPassed {succeeded} tests")
        self.stream.flush()

    def summary(self, stats: TestStatistics) -> None:
        outcome = stats.result
        if outcome.status is OutcomeStatus.FAILED:
            self.stream.write(f"\r*** Failed, after {stats.succeeded} tests:\n")
            for i, arg in enumerate(outcome.failure.args):
                self.stream.write(f"> ARG_{i}: {arg}\n")
        elif outcome.status is OutcomeStatus.EXHAUSTED:
            self.stream.write(
                f"\r*** Gave up, after only {stats.succeeded} passed tests. "
                f"{stats.discarded} tests were discarded.\n"
            )
        elif outcome.status is OutcomeStatus.PASSED:
            self.stream.write(f"\r+++ OK, passed {stats.succeeded} tests.\n")
        else:
            raise ValueError(f"Unknown outcome status: {outcome.status}")
        self.stream.flush()


def check(
    parameters: TestParameters,
    prop: Testable,
    inspector: TestInspector = silent_inspector,
    random: RandomSource | None = None,
    name: str = "property",
) -> TestStatistics:
    """
    Check a property with the given parameters.

    Args:
        parameters: Test parameters
        prop: Property to check
        inspector: Called after every trial; silent by default
        random: Random source; an unseeded StdRandom if None
        name: Property name used for logging

    Returns:
        TestStatistics for the run
    """
    return TestRunner(parameters, random).run(prop, inspector, name)


def check_and_report(
    prop: Testable,
    parameters: TestParameters | None = None,
    random: RandomSource | None = None,
    stream: TextIO | None = None,
    name: str = "property",
) -> TestStatistics:
    """
    Check a property and print progress and a summary.

    Uses the default parameters (100, 50000, 100) unless given.
    """
    reporter = ConsoleReporter(stream)
    stats = TestRunner(parameters, random).run(prop, reporter.progress, name)
    reporter.summary(stats)
    return stats
