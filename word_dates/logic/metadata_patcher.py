from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from word_dates.exceptions.errors import MissingFieldError
from word_dates.logic.archive_committer import commit
from word_dates.logic.archive_reader import Container, open_container
from word_dates.logic.metadata_extractor import element_texts
from word_dates.logic.part_synthesizer import default_app_xml
from word_dates.logic.xml_rewriter import Insertion, rewrite_elements
from word_dates.models.document_dates import PatchRequest
from word_dates.models.metadata_field import APP_PART, CORE_PART, MetadataField

logger = logging.getLogger(__name__)


def build_replacement_parts(container: Container, request: PatchRequest) -> Dict[str, bytes]:
    """
    Build the new docProps/core.xml and (when needed) docProps/app.xml from
    the parts currently in *container*.

    Raises MissingFieldError when core.xml lacks one of the date elements,
    so nothing is committed that load() could not read back.

    app.xml handling:
      - present: LastPrinted is replaced, inserted if missing, or removed
        when the new value is empty
      - absent, value given: a default app.xml is synthesized
      - absent, value empty: app.xml is left out (no new part)
    """
    parts: Dict[str, bytes] = {}

    core_tags = (MetadataField.CREATED.element, MetadataField.MODIFIED.element)
    core_xml = container.read_required(CORE_PART)
    present = element_texts(core_xml, core_tags, part=CORE_PART)
    if any(tag not in present for tag in core_tags):
        raise MissingFieldError("Could not find created/modified date tags in core.xml.")
    parts[CORE_PART] = rewrite_elements(
        core_xml,
        dict(zip(core_tags, (request.created, request.modified))),
        part=CORE_PART,
    )

    printed_tag = MetadataField.LAST_PRINTED.element
    app_xml = container.read_optional(APP_PART)
    if app_xml is not None:
        value: Optional[str] = request.last_printed or None
        parts[APP_PART] = rewrite_elements(
            app_xml,
            {printed_tag: value},
            insert=Insertion(printed_tag, request.last_printed),
            part=APP_PART,
        )
        logger.debug("Rewrote %s (LastPrinted=%r)", APP_PART, request.last_printed)
    elif request.last_printed:
        parts[APP_PART] = default_app_xml(request.last_printed)
        logger.debug("Synthesized %s", APP_PART)
    else:
        logger.debug("No %s in %s and no LastPrinted value; part not created", APP_PART, container.path)

    return parts


def apply(request: PatchRequest) -> None:
    """Validate *request*, then rebuild and commit the container it names."""
    request.validate()

    with open_container(request.path) as container:
        parts = build_replacement_parts(container, request)

    commit(request.path, parts)
    logger.info("Saved dates %s to %s", request.dates, request.path)


def patch(
    path: Union[str, Path],
    created: str,
    modified: str,
    last_printed: str = "",
) -> None:
    apply(PatchRequest.create(path, created, modified, last_printed))
