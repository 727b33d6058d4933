"""Configuration management for SuiteRunner."""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from suiterunner.core.locator import SourceRoot


class ProjectConfig(BaseModel):
    """Project identification and metadata."""

    name: str = Field(default="my-project", description="Project name for identification")
    description: str = Field(default="", description="Brief description shown in reports")


class PathsConfig(BaseModel):
    """Source tree locations."""

    lib_path: str = Field(description="Library source root (always searched for tests)")
    app_path: Optional[str] = Field(
        default=None, description="Application source root (optional second tree)"
    )

    @field_validator("lib_path")
    @classmethod
    def validate_lib_path(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Library path cannot be empty")
        return v

    @field_validator("app_path")
    @classmethod
    def validate_app_path(cls, v: Optional[str]) -> Optional[str]:
        # An empty string means the same thing as leaving the key out
        if v is not None and not v.strip():
            return None
        return v


class DiscoveryConfig(BaseModel):
    """Test discovery configuration."""

    test_directory: str = Field(default="test", description="Test directory inside each source root")
    file_pattern: str = Field(default="*.py", description="Glob matched against candidate file names")
    exclude_dirs: list[str] = Field(
        default_factory=lambda: ["__pycache__"], description="Directory names never searched"
    )
    key_separator: str = Field(default="-", description="Character joining suite key segments")

    @field_validator("key_separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("Key separator must be a single character")
        return v

    @field_validator("file_pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("File pattern cannot be empty")
        return v


class ReportConfig(BaseModel):
    """Report configuration."""

    format: str = Field(default="auto", description="Reporter to use (auto, text, html)")
    output_dir: Optional[str] = Field(
        default=None, description="Directory for HTML reports (default: write to stdout)"
    )
    title: str = Field(default="Test Results", description="HTML report heading")

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        allowed = {"auto", "text", "html"}
        if v.lower() not in allowed:
            raise ValueError(f"Report format must be one of: {allowed}")
        return v.lower()


class SuiteRunnerConfig(BaseModel):
    """Main configuration for SuiteRunner."""

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    paths: PathsConfig
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "SuiteRunnerConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            data = json.load(f)

        return cls.model_validate(data)

    @classmethod
    def find_and_load(cls, start_dir: Path | str | None = None) -> "SuiteRunnerConfig":
        """Find and load configuration file, searching up the directory tree."""
        config_path = cls.find(start_dir)
        if config_path is None:
            raise FileNotFoundError(
                "No configuration file found. Create suiterunner.json or run 'suiterunner init'"
            )
        return cls.from_file(config_path)

    @staticmethod
    def find(start_dir: Path | str | None = None) -> Optional[Path]:
        """Return the nearest configuration file at or above start_dir."""
        if start_dir is None:
            start_dir = Path.cwd()
        else:
            start_dir = Path(start_dir)

        config_names = ["suiterunner.json", ".suiterunner.json"]

        # Search up the directory tree, root included
        current = start_dir.resolve()
        for directory in [current, *current.parents]:
            for name in config_names:
                config_path = directory / name
                if config_path.exists():
                    return config_path
        return None

    def to_file(self, path: Path | str) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)

    def get_absolute_paths(self, base_dir: Path | str | None = None) -> dict[str, Path]:
        """Get absolute paths for the configured directories.

        Keys for optional settings are only present when they are set.
        """
        if base_dir is None:
            base_dir = Path.cwd()
        else:
            base_dir = Path(base_dir)

        paths = {"lib_path": (base_dir / self.paths.lib_path).resolve()}
        if self.paths.app_path:
            paths["app_path"] = (base_dir / self.paths.app_path).resolve()
        if self.report.output_dir:
            paths["report_output_dir"] = (base_dir / self.report.output_dir).resolve()
        return paths

    def source_roots(self, base_dir: Path | str | None = None) -> list[SourceRoot]:
        """Build the primary root and, when configured, the secondary root."""
        paths = self.get_absolute_paths(base_dir)
        roots = [SourceRoot("lib", paths["lib_path"], self.discovery.test_directory)]
        if "app_path" in paths:
            roots.append(SourceRoot("app", paths["app_path"], self.discovery.test_directory))
        return roots


def get_default_config() -> SuiteRunnerConfig:
    """Return a default configuration."""
    return SuiteRunnerConfig(
        project=ProjectConfig(name="my-project"),
        paths=PathsConfig(lib_path="lib", app_path=None),
    )


def create_example_config(output_path: Path | str) -> Path:
    """Create an example configuration file."""
    output_path = Path(output_path)
    config = get_default_config()
    config.project.description = "Brief description of your project"
    config.paths.app_path = "app"
    config.to_file(output_path)
    return output_path
