"""Suite assembly and execution."""

import logging
import time
import unittest
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Optional

from suiterunner.core.eligibility import CandidateFilter
from suiterunner.core.models import SuiteResult, TestOutcome, TestStatus

if TYPE_CHECKING:
    from suiterunner.report.base import Reporter

logger = logging.getLogger(__name__)

TITLE_PREFIX = "Test Suite: "


class OutcomeCollector(unittest.TestResult):
    """unittest result that records one TestOutcome per test (and failing subtest)."""

    def __init__(self) -> None:
        super().__init__()
        self.outcomes: list[TestOutcome] = []
        self._started: dict[str, float] = {}

    def startTest(self, test: unittest.TestCase) -> None:
        super().startTest(test)
        self._started[test.id()] = time.perf_counter()

    def addSuccess(self, test: unittest.TestCase) -> None:
        super().addSuccess(test)
        self._record(test, TestStatus.PASSED)

    def addFailure(self, test: unittest.TestCase, err) -> None:
        super().addFailure(test, err)
        self._record(test, TestStatus.FAILED, err)

    def addError(self, test: unittest.TestCase, err) -> None:
        super().addError(test, err)
        self._record(test, TestStatus.ERROR, err)

    def addSkip(self, test: unittest.TestCase, reason: str) -> None:
        super().addSkip(test, reason)
        self._record(test, TestStatus.SKIPPED, message=reason)

    def addExpectedFailure(self, test: unittest.TestCase, err) -> None:
        super().addExpectedFailure(test, err)
        self._record(test, TestStatus.EXPECTED_FAILURE, err)

    def addUnexpectedSuccess(self, test: unittest.TestCase) -> None:
        super().addUnexpectedSuccess(test)
        self._record(test, TestStatus.UNEXPECTED_SUCCESS, message="Unexpected success")

    def addSubTest(self, test, subtest, err) -> None:
        super().addSubTest(test, subtest, err)
        if err is not None:
            status = (
                TestStatus.FAILED
                if issubclass(err[0], test.failureException)
                else TestStatus.ERROR
            )
            self._record(
                subtest,
                status,
                err,
                started_key=test.id(),
                test_name=f"{test._testMethodName} {subtest._subDescription()}",
            )

    def _record(
        self,
        test,
        status: TestStatus,
        err=None,
        message: str = "",
        started_key: Optional[str] = None,
        test_name: Optional[str] = None,
    ) -> None:
        test_id = test.id()
        owner = getattr(test, "test_case", test)
        started = self._started.get(started_key or test_id)
        duration_ms = int((time.perf_counter() - started) * 1000) if started else 0

        traceback_text = ""
        if err is not None:
            message = message or str(err[1])
            traceback_text = self._exc_info_to_string(err, test)

        self.outcomes.append(
            TestOutcome(
                test_id=test_id,
                test_name=test_name or getattr(test, "_testMethodName", test_id),
                class_name=type(owner).__name__ if isinstance(owner, unittest.TestCase) else "",
                status=status,
                duration_ms=duration_ms,
                message=message,
                traceback=traceback_text,
            )
        )


@dataclass
class Suite:
    """A named, ordered set of test files and the eligible classes in each."""

    key: str
    files: list[Path] = field(default_factory=list)
    cases: dict[Path, list[type]] = field(default_factory=dict)

    @property
    def title(self) -> str:
        return f"{TITLE_PREFIX}{self.key}"

    def add_file(self, path: Path, test_cases: Iterable[type]) -> None:
        """Add a file and its test case classes; repeated files are ignored."""
        if path in self.cases:
            return
        self.files.append(path)
        self.cases[path] = list(test_cases)

    def build_test_suite(self, loader: Optional[unittest.TestLoader] = None) -> unittest.TestSuite:
        """Load every test of every file into one unittest suite."""
        loader = loader or unittest.TestLoader()
        test_suite = unittest.TestSuite()
        for path in self.files:
            for test_case in self.cases[path]:
                test_suite.addTests(loader.loadTestsFromTestCase(test_case))
        return test_suite

    def run(self, reporter: "Reporter") -> SuiteResult:
        """Execute the suite and hand the result to the reporter."""
        collector = OutcomeCollector()
        started_at = datetime.now()

        self.build_test_suite().run(collector)

        result = SuiteResult(
            key=self.key,
            title=self.title,
            files=[str(p) for p in self.files],
            outcomes=collector.outcomes,
            started_at=started_at,
            finished_at=datetime.now(),
        )
        logger.debug(
            "%s: %d run, %d failed, %d errors", self.title, result.total, result.failed, result.errors
        )
        reporter.render(result)
        return result


def build_suite(key: str, files: Iterable[Path], candidate_filter: CandidateFilter) -> Suite:
    """Build the suite for one bucket, keeping only files with eligible classes."""
    suite = Suite(key=key)
    for path, test_cases in candidate_filter.select(files).items():
        suite.add_file(path, test_cases)
    return suite
