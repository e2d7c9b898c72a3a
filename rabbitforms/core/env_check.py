"""Deployment environment check for .env.local.

Validates the configuration contract the web application needs before it
starts: four mandatory values (Supabase URL, anon key, service-role key,
ENCRYPTION_KEY) and six optional ones. Every failing value is collected
into one report; nothing stops at the first error except a missing file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from dotenv import dotenv_values

from rabbitforms.domain.exceptions import (
    ConfigurationInvalidException,
    ConfigurationMissingException,
    RabbitFormsException,
)
from rabbitforms.domain.value_objects.core import EncryptionKey

ENV_FILENAME = ".env.local"

STORAGE_URL_VAR = "NEXT_PUBLIC_SUPABASE_URL"
ENCRYPTION_KEY_VAR = "ENCRYPTION_KEY"
APP_URL_VAR = "NEXT_PUBLIC_APP_URL"

REQUIRED_VARS: tuple[str, ...] = (
    STORAGE_URL_VAR,
    "NEXT_PUBLIC_SUPABASE_ANON_KEY",
    "SUPABASE_SERVICE_ROLE_KEY",
    ENCRYPTION_KEY_VAR,
)

OPTIONAL_VARS: tuple[str, ...] = (
    APP_URL_VAR,
    "NEXT_PUBLIC_APP_NAME",
    "RESEND_API_KEY",
    "RESEND_FROM_EMAIL",
    "NEXT_PUBLIC_TURNSTILE_SITE_KEY",
    "TURNSTILE_SECRET_KEY",
)

PLACEHOLDER_MARKERS: tuple[str, ...] = ("your-", "YOUR_")


@dataclass
class EnvCheckReport:
    """Outcome of an environment check.

    errors fail the check; warnings and notes are informational only.
    """

    env_path: Path
    passed: list[str] = field(default_factory=list)
    errors: list[RabbitFormsException] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def exit_code(self) -> int:
        """0 when every mandatory check passed, 1 otherwise (warnings never fail)."""
        return 0 if self.ok else 1


def is_placeholder(value: str) -> bool:
    """Return whether value still looks like the .env.example placeholder."""
    return any(marker in value for marker in PLACEHOLDER_MARKERS)


def load_env_file(env_path: Path) -> dict[str, str]:
    """Parse a dotenv file into a dict. Keys without a value map to ''."""
    return {
        key: (value or "").strip()
        for key, value in dotenv_values(env_path).items()
        if key
    }


def _check_storage_url(value: str) -> ConfigurationInvalidException | None:
    if not value.startswith("https://") or ".supabase.co" not in value:
        return ConfigurationInvalidException(
            STORAGE_URL_VAR, "invalid format (should be https://xxxxx.supabase.co)"
        )
    return None


def _check_encryption_key(value: str) -> ConfigurationInvalidException | None:
    try:
        EncryptionKey(value)
    except ValueError as e:
        return ConfigurationInvalidException(ENCRYPTION_KEY_VAR, str(e))
    return None


def _env_file_ignored_by_git(project_root: Path) -> bool | None:
    """Return whether .gitignore covers .env files; None when there is no .gitignore."""
    gitignore = project_root / ".gitignore"
    if not gitignore.is_file():
        return None
    content = gitignore.read_text(encoding="utf-8", errors="replace")
    return ".env" in content


def check_environment(
    project_root: Path, env_filename: str = ENV_FILENAME
) -> EnvCheckReport:
    """Validate project_root/env_filename against the deployment contract.

    Args:
        project_root: Directory holding the env file (and optionally .gitignore).
        env_filename: Name of the env file, .env.local by default.

    Returns:
        Report with every failing mandatory value, optional-value warnings,
        and security notes.

    Raises:
        ConfigurationMissingException: If the env file does not exist.
    """
    env_path = project_root / env_filename
    if not env_path.is_file():
        raise ConfigurationMissingException(
            env_filename, f"{env_filename} file not found at {env_path}"
        )

    values = load_env_file(env_path)
    report = EnvCheckReport(env_path=env_path)

    for name in REQUIRED_VARS:
        value = values.get(name, "")
        if not value or is_placeholder(value):
            report.errors.append(ConfigurationMissingException(name))
            continue
        if name == STORAGE_URL_VAR:
            problem = _check_storage_url(value)
        elif name == ENCRYPTION_KEY_VAR:
            problem = _check_encryption_key(value)
        else:
            problem = None
        if problem is not None:
            report.errors.append(problem)
        elif name == STORAGE_URL_VAR:
            report.passed.append(f"{name}: {value}")
        else:
            report.passed.append(f"{name}: OK ({len(value)} chars)")

    for name in OPTIONAL_VARS:
        value = values.get(name, "")
        if not value:
            report.warnings.append(f"{name}: not set (optional)")
        elif is_placeholder(value):
            report.warnings.append(f"{name}: uses placeholder (optional)")
        else:
            report.passed.append(f"{name}: {value}")

    if _env_file_ignored_by_git(project_root) is False:
        report.warnings.append(f"{env_filename} might not be in .gitignore")

    app_url = values.get(APP_URL_VAR, "")
    if "localhost" in app_url:
        report.notes.append(f"{APP_URL_VAR} is set to localhost (OK for development)")

    return report


def format_report(report: EnvCheckReport) -> list[str]:
    """Render a report as human-readable lines, errors first."""
    lines = [f"Checking {report.env_path}", ""]
    for error in report.errors:
        lines.append(f"  [ERROR] {error.message}")
    for item in report.passed:
        lines.append(f"  [OK]    {item}")
    for warning in report.warnings:
        lines.append(f"  [WARN]  {warning}")
    for note in report.notes:
        lines.append(f"  [INFO]  {note}")
    lines.append("")
    if not report.ok:
        lines.append(
            f"Environment check FAILED: {len(report.errors)} error(s). "
            "Fix the errors above before running the app."
        )
    elif report.warnings:
        lines.append(
            f"Environment check passed with {len(report.warnings)} warning(s); "
            "some features may not work."
        )
    else:
        lines.append("All environment variables are properly configured.")
    return lines
