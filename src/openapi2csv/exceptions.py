"""Exception hierarchy for openapi2csv.

All exceptions inherit from :class:`Openapi2CsvError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`openapi2csv.exit_codes`.
The entry point in :func:`openapi2csv.app.main` catches ``Openapi2CsvError``
and exits with the appropriate code.

Only these errors halt a conversion.  Oversized or unencodable cell values
are absorbed by :func:`~openapi2csv.serializer.safe_stringify` and never
surface here.

Subclass hierarchy::

    Openapi2CsvError (exit 1)
    +-- ConfigError      (exit 2)
    +-- SpecParseError   (exit 7)
    +-- SinkWriteError   (exit 8)
"""

from openapi2csv.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
    EXIT_WRITE_ERROR,
)


class Openapi2CsvError(Exception):
    """Base exception for all openapi2csv errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`openapi2csv.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(Openapi2CsvError):
    """Raised for invalid options, a missing input file, or an unusable output directory."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(Openapi2CsvError):
    """Raised when the OpenAPI document cannot be fetched or parsed in the declared format."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class SinkWriteError(Openapi2CsvError):
    """Raised when the CSV file cannot be created or a batch cannot be written.

    Rows from batches written before the failure stay on disk.
    """

    exit_code = EXIT_WRITE_ERROR
