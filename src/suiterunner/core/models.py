"""Data models for suite results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class TestStatus(str, Enum):
    """Status of a single test."""

    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"
    SKIPPED = "skipped"
    EXPECTED_FAILURE = "expected_failure"
    UNEXPECTED_SUCCESS = "unexpected_success"

    @property
    def is_problem(self) -> bool:
        """True for outcomes that make a suite fail."""
        return self in (TestStatus.FAILED, TestStatus.ERROR, TestStatus.UNEXPECTED_SUCCESS)


@dataclass
class TestOutcome:
    """Represents the result of a single test."""

    __test__ = False

    test_id: str
    test_name: str = ""
    class_name: str = ""
    status: TestStatus = TestStatus.PASSED
    duration_ms: int = 0
    message: str = ""
    traceback: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "test_id": self.test_id,
            "test_name": self.test_name,
            "class_name": self.class_name,
            "status": self.status.value if isinstance(self.status, TestStatus) else self.status,
            "duration_ms": self.duration_ms,
            "message": self.message,
            "traceback": self.traceback,
        }


@dataclass
class SuiteResult:
    """Represents one executed suite."""

    key: str
    title: str
    files: list[str] = field(default_factory=list)
    outcomes: list[TestOutcome] = field(default_factory=list)
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    def _count(self, *statuses: TestStatus) -> int:
        return sum(1 for o in self.outcomes if o.status in statuses)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def passed(self) -> int:
        return self._count(TestStatus.PASSED, TestStatus.EXPECTED_FAILURE)

    @property
    def failed(self) -> int:
        return self._count(TestStatus.FAILED, TestStatus.UNEXPECTED_SUCCESS)

    @property
    def errors(self) -> int:
        return self._count(TestStatus.ERROR)

    @property
    def skipped(self) -> int:
        return self._count(TestStatus.SKIPPED)

    @property
    def success(self) -> bool:
        """True when no test failed or raised."""
        return not any(o.status.is_problem for o in self.outcomes)

    @property
    def problems(self) -> list[TestOutcome]:
        """Outcomes that failed, raised, or passed unexpectedly."""
        return [o for o in self.outcomes if o.status.is_problem]

    @property
    def duration_ms(self) -> int:
        if self.started_at and self.finished_at:
            return int((self.finished_at - self.started_at).total_seconds() * 1000)
        return sum(o.duration_ms for o in self.outcomes)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "key": self.key,
            "title": self.title,
            "files": list(self.files),
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "errors": self.errors,
            "skipped": self.skipped,
            "duration_ms": self.duration_ms,
            "success": self.success,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }
