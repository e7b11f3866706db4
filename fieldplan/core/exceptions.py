"""fieldplan exception hierarchy.

All custom exceptions inherit from FieldPlanError.

The reconciliation and planning engine never raises for bad data:
malformed numbers, dates and rows degrade to defaults or are dropped.
These exceptions cover the edges around it (configuration, file
reading, caller mistakes).

Exception Hierarchy:
    FieldPlanError (base)
    ├── ConfigurationError
    ├── ValidationError
    └── ImportError_
"""


class FieldPlanError(Exception):
    """Base exception for all fieldplan errors.

    Allows broad exception handling at the CLI boundary.
    """

    pass


class ConfigurationError(FieldPlanError):
    """Configuration is invalid or missing.

    Raised when:
        - A numeric environment variable cannot be parsed
        - Configuration file is malformed
    """

    pass


class ValidationError(FieldPlanError):
    """Caller-supplied argument is invalid.

    Raised when:
        - max_stops is less than 1
        - An unknown record kind is requested
    """

    pass


class ImportError_(FieldPlanError):
    """Import file could not be read.

    Named with underscore to avoid shadowing builtin ImportError.

    Raised when:
        - File cannot be found or read
        - File type is unsupported
        - CSV/XLSX content cannot be parsed
    """

    pass
