"""Test suite orchestration."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Optional, Sequence

from suiterunner.core.eligibility import CandidateFilter
from suiterunner.core.enumerator import DEFAULT_EXCLUDE_DIRS, enumerate_source_files
from suiterunner.core.grouper import group_files
from suiterunner.core.locator import SourceRoot, validate_root
from suiterunner.core.models import SuiteResult
from suiterunner.core.suite import Suite, build_suite
from suiterunner.exceptions import ResolverRegistrationError
from suiterunner.report.base import Reporter, select_reporter
from suiterunner.resolver import SymbolResolver, build_symbol_map

if TYPE_CHECKING:
    from suiterunner.config import SuiteRunnerConfig

logger = logging.getLogger(__name__)


class SuiteRunner:
    """Discovers and runs the test suites of a primary and optional secondary root."""

    def __init__(
        self,
        roots: Sequence[SourceRoot],
        reporter: Optional[Reporter] = None,
        resolver: Optional[SymbolResolver] = None,
        file_pattern: str = "*.py",
        exclude_dirs: Sequence[str] = DEFAULT_EXCLUDE_DIRS,
        key_separator: str = "-",
    ):
        """Initialize the runner.

        Args:
            roots: The primary root, optionally followed by a secondary root
            reporter: Reporter for every suite (default: chosen from the
                execution context when the first root runs)
            resolver: Symbol resolver to attach the roots' maps to
            file_pattern: Pattern test file names must match
            exclude_dirs: Directory names never searched for tests
            key_separator: Character joining suite key segments
        """
        if not roots:
            raise ValueError("A primary source root is required")
        if len(roots) > 2:
            raise ValueError("At most a primary and a secondary source root are supported")

        self.roots = list(roots)
        self.reporter = reporter
        self.resolver = resolver or SymbolResolver()
        self.candidate_filter = CandidateFilter(self.resolver)
        self.file_pattern = file_pattern
        self.exclude_dirs = tuple(exclude_dirs)
        self.key_separator = key_separator

        self.results: list[SuiteResult] = []
        self._ready = False
        self._mapped = False

    @classmethod
    def from_config(
        cls,
        config: "SuiteRunnerConfig",
        base_dir: Path | str | None = None,
        reporter: Optional[Reporter] = None,
    ) -> "SuiteRunner":
        """Create a runner from a loaded configuration."""
        return cls(
            roots=config.source_roots(base_dir),
            reporter=reporter,
            file_pattern=config.discovery.file_pattern,
            exclude_dirs=config.discovery.exclude_dirs,
            key_separator=config.discovery.key_separator,
        )

    @property
    def primary_root(self) -> SourceRoot:
        return self.roots[0]

    @property
    def secondary_root(self) -> Optional[SourceRoot]:
        return self.roots[1] if len(self.roots) > 1 else None

    def setup(self) -> None:
        """Validate every root and make its classes resolvable.

        Raises:
            MissingDirectoryError: If a root or its test directory is missing
            UnreadableDirectoryError: If a root cannot be read
            ResolverRegistrationError: If the resolver cannot be installed
        """
        if self._ready:
            return

        for root in self.roots:
            validate_root(root)

        if not self._mapped:
            for root in self.roots:
                self.resolver.add_map(build_symbol_map(root.path, f"{root.name}-map", root.name))
            self._mapped = True

        if not self.resolver.register():
            raise ResolverRegistrationError(
                "SuiteRunner could not attach the required testing resolver!"
            )

        self._ready = True

    def close(self) -> None:
        """Detach the resolver and drop the modules it loaded."""
        self.resolver.unregister()
        self._ready = False

    def __enter__(self) -> "SuiteRunner":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def run_all(self) -> None:
        """Run the primary root's suites, then the secondary root's if configured."""
        self.setup()
        for root in self.roots:
            self.results.extend(self.run_root(root))

    def run_root(self, root: SourceRoot) -> list[SuiteResult]:
        """Run every suite of one root in bucket order."""
        self.setup()
        reporter = self._get_reporter()

        results = []
        for suite in self.iter_suites(root):
            try:
                results.append(suite.run(reporter))
            except Exception:
                logger.exception("%s could not be run", suite.title)
        return results

    def discover(self, root: SourceRoot) -> list[Suite]:
        """Build the suites of one root without running them."""
        return list(self.iter_suites(root))

    def iter_suites(self, root: SourceRoot) -> Iterator[Suite]:
        """Yield the suites of one root, building each only when it is reached."""
        self.setup()
        validate_root(root)

        files = enumerate_source_files(root.test_path, self.file_pattern, self.exclude_dirs)
        buckets = group_files(root, files, self.key_separator)
        logger.debug(
            "Found %d files in %d directories under %s", len(files), len(buckets), root.test_path
        )

        for key, bucket in buckets.items():
            yield build_suite(key, bucket, self.candidate_filter)

    @property
    def success(self) -> bool:
        """True when every suite run so far passed."""
        return all(result.success for result in self.results)

    def _get_reporter(self) -> Reporter:
        if self.reporter is None:
            self.reporter = select_reporter()
        return self.reporter
