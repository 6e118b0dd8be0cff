from __future__ import annotations

from enum import Enum

CORE_PART = "docProps/core.xml"
APP_PART = "docProps/app.xml"


class MetadataField(Enum):
    """
    The three editable date fields and where they live in the package.
    Value is (part name, qualified element name).
    """
    CREATED = (CORE_PART, "dcterms:created")
    MODIFIED = (CORE_PART, "dcterms:modified")
    LAST_PRINTED = (APP_PART, "LastPrinted")

    @property
    def part(self) -> str:
        return self.value[0]

    @property
    def element(self) -> str:
        return self.value[1]

    @property
    def label(self) -> str:
        return {
            MetadataField.CREATED: "Created Date",
            MetadataField.MODIFIED: "Modified Date",
            MetadataField.LAST_PRINTED: "Last Printed Date",
        }[self]
