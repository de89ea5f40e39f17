"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~openapi2csv.exceptions.Openapi2CsvError` subclass.
Shell wrappers can inspect the exit code to tell a bad invocation from a
broken spec file without parsing stderr.

Example::

    $ openapi2csv -i broken.yaml -f yaml
    $ echo $?
    7   # EXIT_SPEC_PARSE_ERROR -- the document is not valid YAML
"""

EXIT_SUCCESS = 0
"""The conversion completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""Invalid options: bad batch size, missing input file, unwritable output directory."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI document could not be loaded or parsed in the declared format."""

EXIT_WRITE_ERROR = 8
"""Writing the CSV file failed part-way (disk full, permission denied)."""

EXIT_INTERRUPTED = 130
"""The run was cancelled with Ctrl-C."""
