"""
Centralized Exception Hierarchy for DocForge.

This module defines all custom exceptions used throughout DocForge.
All exceptions inherit from DocForgeError for easy catching.

Each exception includes:
- error_code: Unique identifier for documentation lookup (e.g., "DF-CFG-001")
- why_it_happened: Explanation of the root cause
- how_to_fix: Actionable steps to resolve the issue

Usage
-----
    from docforge.core.exceptions import DocForgeError, InputError

    try:
        result = PublishPipeline(config).run(doclets)
    except InputError as e:
        logger.error(f"Doclet input rejected: {e}")
    except DocForgeError as e:
        logger.error(f"DocForge error: {e}")

Exception Hierarchy
-------------------
    DocForgeError (base)
    ├── ConfigurationError
    │   └── ConfigValidationError
    ├── InputError
    │   └── DocletValidationError
    └── RegistryError

Ambiguous shortnames, unresolved links and a malformed ticket base URL are
not exceptions: they are warnings on the run's PublishLogger, or silently
ignored. Only missing or malformed required input stops a run.
"""

from typing import Any, List, Optional


def get_root_cause(exc: BaseException) -> BaseException:
    """Extract the root cause from a chain of exceptions.

    Follows nested __cause__ and __context__ attributes to find
    the original error that started the chain.

    Args:
        exc: Exception to analyze

    Returns:
        Root cause exception (may be the same as input)
    """
    seen = set()
    current = exc

    while current is not None:
        # Avoid infinite loops
        if id(current) in seen:
            break
        seen.add(id(current))

        # Prefer explicit cause over implicit context
        if current.__cause__ is not None:
            current = current.__cause__
        elif current.__context__ is not None:
            current = current.__context__
        else:
            break

    return current


class DocForgeError(Exception):
    """
    Base exception for all DocForge errors.

    All custom exceptions in DocForge inherit from this class,
    making it easy to catch any DocForge-specific error.

    Example
    -------
        try:
            pipeline.run(doclets)
        except DocForgeError as e:
            logger.error(f"Publish failed: {e}")
            print(f"Fix: {e.how_to_fix}")
    """

    # Default error info - subclasses should override
    error_code: str = "DF-ERR-000"
    why_it_happened: str = "An unexpected error occurred"
    how_to_fix: List[str] = ["Check the error message for details"]

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        """Initialize DocForgeError with helpful information.

        Args:
            message: Human-readable error message
            error_code: Unique identifier (e.g., "DF-IN-001")
            why_it_happened: Explanation of root cause
            how_to_fix: List of actionable fix suggestions
        """
        super().__init__(message)

        # Override class defaults if provided
        if error_code is not None:
            self.error_code = error_code
        if why_it_happened is not None:
            self.why_it_happened = why_it_happened
        if how_to_fix is not None:
            self.how_to_fix = how_to_fix

    @property
    def user_message(self) -> str:
        """Get the user-friendly error message."""
        return str(self)

    def get_root_cause(self) -> BaseException:
        """Get the root cause of this exception chain."""
        return get_root_cause(self)


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(DocForgeError):
    """
    Base exception for configuration problems.

    Raised when a configuration file cannot be read or parsed.
    """

    error_code = "DF-CFG-000"
    why_it_happened = "The DocForge configuration could not be loaded"
    how_to_fix = [
        "Check that the configuration file exists and is readable",
        "Validate the YAML or JSON syntax",
    ]


class ConfigValidationError(ConfigurationError):
    """
    Raised when configuration validation fails.

    Attributes
    ----------
    field : str
        The configuration field that failed validation
    value : any
        The invalid value
    """

    error_code = "DF-CFG-001"
    why_it_happened = (
        "A configuration value is invalid. "
        "The docforge.yaml or conf.json file may have incorrect settings"
    )
    how_to_fix = [
        "Check the configuration file for typos in option names",
        "Verify the value type matches what's expected",
        "link_map must map long names to URL strings",
    ]

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        super().__init__(
            message,
            error_code=error_code,
            why_it_happened=why_it_happened,
            how_to_fix=how_to_fix,
        )
        self.field = field
        self.value = value


# ============================================================================
# Input Exceptions
# ============================================================================


class InputError(DocForgeError):
    """
    Raised when required input structures are missing or unusable.

    This is the only class of problem that aborts a documentation run.
    """

    error_code = "DF-IN-000"
    why_it_happened = "The doclet collection handed to DocForge is unusable"
    how_to_fix = [
        "Regenerate the doclet dump with: jsdoc -X <sources> > doclets.json",
        "Check that the file contains a JSON array of doclet objects",
    ]


class DocletValidationError(InputError):
    """
    Raised when a doclet record does not match the expected schema.

    Attributes
    ----------
    index : int
        Position of the offending record in the input collection
    """

    error_code = "DF-IN-001"
    why_it_happened = "A doclet record has a field of the wrong type"
    how_to_fix = [
        "Check the record at the reported index in the doclet dump",
        "Make sure the dump was produced by a compatible jsdoc version",
    ]

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        super().__init__(
            message,
            error_code=error_code,
            why_it_happened=why_it_happened,
            how_to_fix=how_to_fix,
        )
        self.index = index


# ============================================================================
# Registry Exceptions
# ============================================================================


class RegistryError(DocForgeError):
    """
    Raised when a long name that must have a URL has none.

    Every doclet is registered before signatures and pages are built, so
    this signals a broken pipeline order rather than bad documentation.
    """

    error_code = "DF-REG-001"
    why_it_happened = "A doclet was used before its URL was registered"
    how_to_fix = [
        "Run the registration stage before building signatures or pages",
        "Report the long name in the message if it came from PublishPipeline",
    ]
