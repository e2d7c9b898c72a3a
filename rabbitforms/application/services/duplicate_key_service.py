"""Duplicate-check fingerprint for submissions (canonical JSON + algorithm)."""

from __future__ import annotations

import hashlib
import json
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from rabbitforms.domain.value_objects.json_document import JsonValue

# Form settings key listing the answer field ids that identify a duplicate.
DUPLICATE_CHECK_FIELDS_SETTING = "duplicate_check_fields"


class HashAlgorithm(ABC):
    """Abstract hash algorithm (OCP)."""

    @abstractmethod
    def hash(self, data: str) -> str:
        """Compute hash of input string."""
        ...


class SHA256Algorithm(HashAlgorithm):
    """SHA-256 implementation."""

    def hash(self, data: str) -> str:
        return hashlib.sha256(data.encode()).hexdigest()


def _normalize_answer(value: Any) -> Any:
    """Trim and case-fold strings so trivially different answers fingerprint equal."""
    if isinstance(value, str):
        return value.strip().casefold()
    if isinstance(value, list):
        return [_normalize_answer(v) for v in value]
    if isinstance(value, dict):
        return {k: _normalize_answer(v) for k, v in value.items()}
    return value


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}


class DuplicateKeyService:
    """Single source of truth for duplicate_check_key computation."""

    def __init__(self, algorithm: HashAlgorithm | None = None) -> None:
        self.algorithm = algorithm or SHA256Algorithm()

    @staticmethod
    def canonical_json(data: dict[str, Any]) -> str:
        """Canonical JSON for deterministic hashing."""
        return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)

    @staticmethod
    def fields_from_settings(settings: JsonValue) -> list[str]:
        """Return the field ids configured for duplicate checks on a form (may be empty)."""
        if not isinstance(settings, dict):
            return []
        fields = settings.get(DUPLICATE_CHECK_FIELDS_SETTING)
        if not isinstance(fields, list):
            return []
        return [f for f in fields if isinstance(f, str)]

    def compute_key(
        self, form_id: str, data: JsonValue, field_ids: Sequence[str]
    ) -> str | None:
        """Fingerprint the selected answers of a submission.

        Args:
            form_id: Form the submission belongs to (part of the hashed content).
            data: Submission answers (field id -> answer).
            field_ids: Answer fields that identify a duplicate.

        Returns:
            Hex digest, or None when there are no fields or every selected answer is blank.
        """
        if not field_ids or not isinstance(data, dict):
            return None
        selected = {fid: _normalize_answer(data.get(fid)) for fid in field_ids}
        if all(_is_blank(v) for v in selected.values()):
            return None
        return self.algorithm.hash(
            self.canonical_json({"form_id": form_id, "answers": selected})
        )
