"""Allow ``python -m openapi2csv``."""

from openapi2csv.app import main

main()
