from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Union

from core.helpers.date_time_helper import is_rfc3339
from word_dates.exceptions.errors import ValidationError
from word_dates.models.metadata_field import MetadataField


@dataclass(frozen=True)
class DocumentDates:
    """
    The date fields of one document as raw strings, exactly as stored.
    last_printed is "" when the document has no LastPrinted value.
    """
    created: str
    modified: str
    last_printed: str = ""

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class PatchRequest:
    """A single save action: target container plus the new field values."""
    path: Path
    created: str
    modified: str
    last_printed: str = ""

    @classmethod
    def create(
        cls,
        path: Union[str, Path],
        created: str,
        modified: str,
        last_printed: str = "",
    ) -> "PatchRequest":
        # Surrounding whitespace from form input is not part of the value
        return cls(
            path=Path(path),
            created=(created or "").strip(),
            modified=(modified or "").strip(),
            last_printed=(last_printed or "").strip(),
        )

    @property
    def dates(self) -> DocumentDates:
        return DocumentDates(self.created, self.modified, self.last_printed)

    def validate(self) -> None:
        """
        Raise ValidationError for the first invalid field.
        Created and Modified are mandatory; LastPrinted may be empty.
        """
        for field, value, required in (
            (MetadataField.CREATED, self.created, True),
            (MetadataField.MODIFIED, self.modified, True),
            (MetadataField.LAST_PRINTED, self.last_printed, False),
        ):
            if not value:
                if required:
                    raise ValidationError(field.name, f"'{field.label}' must not be empty.")
                continue
            if not is_rfc3339(value):
                raise ValidationError(
                    field.name,
                    f"Invalid '{field.label}' format. "
                    "Use ISO 8601 (e.g., YYYY-MM-DDTHH:MM:SSZ).",
                )
