from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, Tuple

import structlog

from .errors import ValidationError
from .models import TenantScope
from .sources import DataSource

logger = structlog.get_logger(__name__)

MB = 1024 * 1024


@dataclass(frozen=True)
class UploadRule:
    name: str
    max_bytes: int
    extensions: Tuple[str, ...] = ()
    content_types: Tuple[str, ...] = ()
    label: str = "file"

    def check(self, file_name: str, size: int, content_type: str = "") -> None:
        """Raise ``ValidationError`` when the file may not be uploaded."""

        if size <= 0:
            raise ValidationError(f"The selected {self.label} is empty", field=self.name)
        if size > self.max_bytes:
            raise ValidationError(
                f"{self.label.capitalize()} must be smaller than {self.max_bytes // MB}MB",
                field=self.name,
                details={"size": size, "max_bytes": self.max_bytes},
            )
        if not self.accepts_type(file_name, content_type):
            allowed = ", ".join(self.extensions)
            raise ValidationError(
                f"Invalid file type for {self.label}; expected {allowed}",
                field=self.name,
                details={"file_name": file_name, "content_type": content_type},
            )

    def accepts_type(self, file_name: str, content_type: str = "") -> bool:
        if not self.extensions and not self.content_types:
            return True
        suffix = PurePosixPath(file_name).suffix.lower()
        if suffix and suffix in self.extensions:
            return True
        return bool(content_type) and content_type.split(";")[0].strip().lower() in self.content_types


RULES: Dict[str, UploadRule] = {
    rule.name: rule
    for rule in (
        UploadRule(
            "scorm_package",
            100 * MB,
            extensions=(".zip",),
            content_types=("application/zip", "application/x-zip-compressed"),
            label="SCORM package",
        ),
        UploadRule(
            "scorm_index",
            10 * MB,
            extensions=(".html", ".htm", ".xml"),
            content_types=("text/html", "application/xml", "text/xml"),
            label="index file",
        ),
        UploadRule("training_pdf", 50 * MB, extensions=(".pdf",), content_types=("application/pdf",), label="PDF file"),
        UploadRule("vault_document", 10 * MB, label="document"),
    )
}


BUCKET_RULES: Dict[str, str] = {
    "scorm-packages": "scorm_package",
    "scorm-index": "scorm_index",
    "training-files": "training_pdf",
    "vault": "vault_document",
}


def rule_for_bucket(bucket: str) -> UploadRule | None:
    name = BUCKET_RULES.get(bucket)
    return RULES[name] if name else None


def get_rule(name: str) -> UploadRule:
    try:
        return RULES[name]
    except KeyError:
        raise ValidationError(f"Unknown upload field {name!r}", field=name) from None


def safe_object_path(path: str) -> str:
    parts = [part for part in PurePosixPath(path).parts if part not in ("", "/", ".")]
    if not parts or ".." in parts:
        raise ValidationError("Invalid storage path", field="path")
    return "/".join(parts)


class UploadGuard:
    """Validates files locally, then hands them to the storage capability."""

    def __init__(self, source: DataSource, scope: TenantScope):
        self.source = source
        self.scope = scope

    def upload(
        self,
        rule_name: str,
        bucket: str,
        path: str,
        file_name: str,
        content: bytes,
        content_type: str = "",
    ) -> str:
        rule = get_rule(rule_name)
        rule.check(file_name, len(content), content_type)
        object_path = safe_object_path(path)
        stored = self.source.upload(bucket, object_path, content, content_type, self.scope)
        logger.info("file_uploaded", rule=rule_name, bucket=bucket, path=stored, size=len(content))
        return stored
