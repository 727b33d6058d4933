"""Tests for the result models."""

from datetime import datetime, timedelta

from suiterunner.core.models import SuiteResult, TestOutcome, TestStatus


def outcome(status, name="test_x"):
    return TestOutcome(test_id=f"lib.test.mod.Case.{name}", test_name=name, class_name="Case", status=status)


class TestTestStatus:
    """Tests for TestStatus enum."""

    def test_status_values(self):
        """Test that all expected statuses exist."""
        assert TestStatus.PASSED.value == "passed"
        assert TestStatus.FAILED.value == "failed"
        assert TestStatus.ERROR.value == "error"
        assert TestStatus.SKIPPED.value == "skipped"
        assert TestStatus.EXPECTED_FAILURE.value == "expected_failure"
        assert TestStatus.UNEXPECTED_SUCCESS.value == "unexpected_success"

    def test_problems(self):
        """Test which statuses fail a suite."""
        assert TestStatus.FAILED.is_problem
        assert TestStatus.ERROR.is_problem
        assert TestStatus.UNEXPECTED_SUCCESS.is_problem
        assert not TestStatus.PASSED.is_problem
        assert not TestStatus.SKIPPED.is_problem
        assert not TestStatus.EXPECTED_FAILURE.is_problem


class TestTestOutcome:
    """Tests for TestOutcome model."""

    def test_default_values(self):
        """Test default values."""
        result = TestOutcome(test_id="a.b.C.test_d")
        assert result.status == TestStatus.PASSED
        assert result.duration_ms == 0
        assert result.message == ""

    def test_to_dict(self):
        """Test converting to dictionary."""
        d = outcome(TestStatus.FAILED).to_dict()
        assert d["status"] == "failed"
        assert d["class_name"] == "Case"
        assert d["test_id"] == "lib.test.mod.Case.test_x"


class TestSuiteResult:
    """Tests for SuiteResult model."""

    def test_counts(self):
        """Test the per-status totals."""
        result = SuiteResult(
            key="lib",
            title="Test Suite: lib",
            outcomes=[
                outcome(TestStatus.PASSED, "a"),
                outcome(TestStatus.EXPECTED_FAILURE, "b"),
                outcome(TestStatus.FAILED, "c"),
                outcome(TestStatus.UNEXPECTED_SUCCESS, "d"),
                outcome(TestStatus.ERROR, "e"),
                outcome(TestStatus.SKIPPED, "f"),
            ],
        )
        assert result.total == 6
        assert result.passed == 2
        assert result.failed == 2
        assert result.errors == 1
        assert result.skipped == 1
        assert not result.success
        assert [o.test_name for o in result.problems] == ["c", "d", "e"]

    def test_empty_result_succeeds(self):
        """Test that a suite with no tests is a success."""
        result = SuiteResult(key="lib", title="Test Suite: lib")
        assert result.success
        assert result.duration_ms == 0

    def test_duration_from_timestamps(self):
        """Test that wall time is used when known."""
        now = datetime.now()
        result = SuiteResult(
            key="lib",
            title="Test Suite: lib",
            outcomes=[outcome(TestStatus.PASSED)],
            started_at=now,
            finished_at=now + timedelta(milliseconds=1500),
        )
        assert result.duration_ms == 1500

    def test_to_dict(self):
        """Test converting to dictionary."""
        now = datetime.now()
        result = SuiteResult(
            key="lib-test",
            title="Test Suite: lib-test",
            files=["/srv/lib/test/a.py"],
            outcomes=[outcome(TestStatus.SKIPPED)],
            started_at=now,
        )

        d = result.to_dict()
        assert d["key"] == "lib-test"
        assert d["files"] == ["/srv/lib/test/a.py"]
        assert d["skipped"] == 1
        assert d["started_at"] == now.isoformat()
        assert d["finished_at"] is None
        assert d["outcomes"][0]["status"] == "skipped"
