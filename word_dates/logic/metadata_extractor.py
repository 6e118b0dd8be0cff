from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from word_dates.exceptions.errors import MissingFieldError
from word_dates.logic.archive_reader import Container, open_container
from word_dates.logic.xml_rewriter import EndTag, StartTag, Text, name_matches, tokenize
from word_dates.models.document_dates import DocumentDates
from word_dates.models.metadata_field import APP_PART, CORE_PART, MetadataField

logger = logging.getLogger(__name__)


def element_texts(data: bytes, names: Iterable[str], *, part: Optional[str] = None) -> Dict[str, str]:
    """
    Return the text content of the first element matching each of *names*.
    Names that do not occur are missing from the result.
    """
    wanted = list(names)
    found: Dict[str, str] = {}
    current: Optional[str] = None
    depth = 0
    chunks = []

    for ev in tokenize(data, part=part):
        if current is None:
            if isinstance(ev, StartTag):
                key = next((k for k in wanted if k not in found and name_matches(ev.name, k)), None)
                if key is not None:
                    current, depth, chunks = key, 1, []
            continue

        if isinstance(ev, StartTag):
            depth += 1
        elif isinstance(ev, EndTag):
            depth -= 1
            if depth == 0:
                found[current] = "".join(chunks).strip()
                current = None
        elif isinstance(ev, Text):
            chunks.append(ev.text)

    return found


def extract(container: Container) -> DocumentDates:
    """
    Read Created/Modified from docProps/core.xml (mandatory) and LastPrinted
    from docProps/app.xml (optional, "" when absent).
    """
    created_tag = MetadataField.CREATED.element
    modified_tag = MetadataField.MODIFIED.element
    printed_tag = MetadataField.LAST_PRINTED.element

    core = element_texts(container.read_required(CORE_PART), (created_tag, modified_tag), part=CORE_PART)
    created = core.get(created_tag, "")
    modified = core.get(modified_tag, "")
    if not created or not modified:
        raise MissingFieldError("Could not find created/modified date tags in core.xml.")

    last_printed = ""
    app_xml = container.read_optional(APP_PART)
    if app_xml is not None:
        last_printed = element_texts(app_xml, (printed_tag,), part=APP_PART).get(printed_tag, "")

    return DocumentDates(created=created, modified=modified, last_printed=last_printed)


def extract_file(path: Union[str, Path]) -> DocumentDates:
    with open_container(path) as container:
        dates = extract(container)
    logger.debug("Extracted %s from %s", dates, path)
    return dates
