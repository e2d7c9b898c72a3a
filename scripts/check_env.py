"""Validate .env.local before starting the app.

Usage:
    uv run python -m scripts.check_env [project_dir]
project_dir defaults to the current directory. Exits 1 when any mandatory
value is missing or invalid (or the file itself is missing), 0 otherwise;
warnings about optional values never fail the check.
"""

import sys
from pathlib import Path

from rabbitforms.core.env_check import ENV_FILENAME, check_environment, format_report
from rabbitforms.domain.exceptions import ConfigurationMissingException


def main(argv: list[str] | None = None) -> int:
    """Run the check and print the report. Returns the process exit code."""
    args = sys.argv[1:] if argv is None else argv
    project_root = Path(args[0]) if args else Path.cwd()
    try:
        report = check_environment(project_root)
    except ConfigurationMissingException as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        print(f"Create it by running: cp .env.example {ENV_FILENAME}", file=sys.stderr)
        return 1
    for line in format_report(report):
        print(line)
    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
