# errors.py
"""
Custom exception classes with improved error messages for Inkwell

All exceptions include:
- Clear error description
- Actionable suggestions
- Relevant context
"""
from pathlib import Path
from typing import Optional, Dict, Any


class InkwellError(Exception):
    """Base exception for all Inkwell errors"""

    def __init__(
        self,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        self.cause = cause
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error with all details"""
        lines = [
            "",
            "=" * 70,
            f"❌ {self.__class__.__name__}",
            "=" * 70,
            "",
            self.message,
        ]

        if self.context:
            lines.append("")
            lines.append("Context:")
            for key, value in self.context.items():
                lines.append(f"  {key}: {value}")

        if self.suggestion:
            lines.append("")
            lines.append("💡 Suggestion:")
            lines.append(f"  {self.suggestion}")

        if self.cause:
            lines.append("")
            lines.append(f"Caused by: {type(self.cause).__name__}: {self.cause}")

        lines.append("")
        lines.append("=" * 70)
        lines.append("")

        return "\n".join(lines)


class ConfigurationError(InkwellError):
    """Configuration is missing or invalid"""
    pass


class PreconditionError(InkwellError):
    """A pipeline step was run before the steps it depends on"""
    pass


class ManifestError(InkwellError):
    """A manifest could not be generated"""
    pass


class FrontmatterError(InkwellError):
    """Error parsing frontmatter"""
    pass


class InvalidNodeError(InkwellError):
    """Value handed to the AST walker is not a markdown node"""
    pass


# Specific error factory functions

def missing_manifests_error(courses_root: Path) -> PreconditionError:
    """Create error for building the site index before any course manifest exists"""
    return PreconditionError(
        message="No course manifests found.",
        suggestion=(
            "Generate the manifests first:\n"
            "  inkwell manifest writing\n"
            "  inkwell manifest courses\n\n"
            "Then build the index again:\n"
            "  inkwell index"
        ),
        context={
            "searched": str(courses_root / "*" / "manifest.json"),
        }
    )


def missing_writing_manifest_error(manifest_path: Path) -> PreconditionError:
    """Create error for a site index build without the writing manifest"""
    return PreconditionError(
        message="Writing manifest not found.",
        suggestion="Run: inkwell manifest writing",
        context={
            "expected_path": str(manifest_path),
        }
    )


def missing_readme_error(course_dir: Path) -> ManifestError:
    """Create error for a course directory without README.md"""
    return ManifestError(
        message=f"Course package '{course_dir.name}' is missing README.md.",
        suggestion=(
            "Add a README.md with the course frontmatter:\n"
            "  ---\n"
            '  title: "Course title"\n'
            '  description: "What the course covers"\n'
            "  date: 2024-01-01\n"
            "  ---"
        ),
        context={
            "course_dir": str(course_dir),
        }
    )


def invalid_frontmatter_error(file_path: Path, cause: Optional[Exception] = None) -> FrontmatterError:
    """Create error for frontmatter that is not valid YAML"""
    return FrontmatterError(
        message=f"Invalid frontmatter in {file_path.name}",
        suggestion="Check YAML syntax (indentation, quotes, colons)",
        context={
            "file": str(file_path),
        },
        cause=cause
    )
