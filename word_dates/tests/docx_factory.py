"""Builders for small OOXML packages used across the word_dates tests."""
from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

CORE_XML = (
    b'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\r\n'
    b'<cp:coreProperties'
    b' xmlns:cp="http://schemas.openxmlformats.org/package/2006/metadata/core-properties"'
    b' xmlns:dc="http://purl.org/dc/elements/1.1/"'
    b' xmlns:dcterms="http://purl.org/dc/terms/"'
    b' xmlns:dcmitype="http://purl.org/dc/dcmitype/"'
    b' xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">'
    b'<dc:title>Quarterly Report</dc:title>'
    b'<dc:creator>J. Doe</dc:creator>'
    b'<cp:lastModifiedBy>J. Doe</cp:lastModifiedBy>'
    b'<cp:revision>3</cp:revision>'
    b'<dcterms:created xsi:type="dcterms:W3CDTF">2021-05-04T08:00:00Z</dcterms:created>'
    b'<dcterms:modified xsi:type="dcterms:W3CDTF">2021-06-01T17:30:00Z</dcterms:modified>'
    b'</cp:coreProperties>'
)

APP_XML = (
    b'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\r\n'
    b'<Properties xmlns="http://schemas.openxmlformats.org/officeDocument/2006/extended-properties"'
    b' xmlns:vt="http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes">'
    b'<Template>Normal.dotm</Template>'
    b'<TotalTime>12</TotalTime>'
    b'<Pages>1</Pages>'
    b'<Application>Microsoft Office Word</Application>'
    b'<LastPrinted>2021-05-20T10:15:00Z</LastPrinted>'
    b'</Properties>'
)

APP_XML_WITHOUT_LAST_PRINTED = APP_XML.replace(
    b"<LastPrinted>2021-05-20T10:15:00Z</LastPrinted>", b""
)

CONTENT_TYPES_XML = (
    b'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\r\n'
    b'<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    b'<Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
    b'<Default Extension="xml" ContentType="application/xml"/>'
    b'<Default Extension="png" ContentType="image/png"/>'
    b'</Types>'
)

RELS_XML = (
    b'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\r\n'
    b'<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
    b'<Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" Target="word/document.xml"/>'
    b'</Relationships>'
)

DOCUMENT_XML = (
    b'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\r\n'
    b'<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">'
    b'<w:body><w:p><w:r><w:t>Hello &amp; welcome</w:t></w:r></w:p></w:body>'
    b'</w:document>'
)

# not a real PNG, only needs to be opaque binary
IMAGE_BYTES = bytes(range(256)) * 4

_MISSING = object()


def default_entries(core=_MISSING, app=_MISSING) -> Dict[str, Tuple[bytes, int]]:
    """name -> (data, compression) in archive order."""
    entries: Dict[str, Tuple[bytes, int]] = {
        "[Content_Types].xml": (CONTENT_TYPES_XML, zipfile.ZIP_DEFLATED),
        "_rels/.rels": (RELS_XML, zipfile.ZIP_DEFLATED),
        "word/document.xml": (DOCUMENT_XML, zipfile.ZIP_DEFLATED),
        "word/media/image1.png": (IMAGE_BYTES, zipfile.ZIP_STORED),
    }
    core = CORE_XML if core is _MISSING else core
    app = APP_XML if app is _MISSING else app
    if core is not None:
        entries["docProps/core.xml"] = (core, zipfile.ZIP_DEFLATED)
    if app is not None:
        entries["docProps/app.xml"] = (app, zipfile.ZIP_STORED)
    return entries


def build_docx(
    path: Path,
    *,
    core: Optional[bytes] = _MISSING,  # type: ignore[assignment]
    app: Optional[bytes] = _MISSING,  # type: ignore[assignment]
    extra: Iterable[Tuple[str, bytes]] = (),
) -> Path:
    """
    Write a minimal package to *path*. Pass core=None / app=None to leave a
    part out, or bytes to replace its content.
    """
    entries = default_entries(core, app)
    with zipfile.ZipFile(path, "w") as zf:
        for name, (data, method) in entries.items():
            info = zipfile.ZipInfo(name, date_time=(2021, 6, 1, 17, 30, 0))
            info.compress_type = method
            zf.writestr(info, data)
        for name, data in extra:
            zf.writestr(name, data)
    return path


def read_all(path: Path) -> Dict[str, bytes]:
    with zipfile.ZipFile(path) as zf:
        return {name: zf.read(name) for name in zf.namelist()}


def compression_of(path: Path) -> Dict[str, int]:
    with zipfile.ZipFile(path) as zf:
        return {info.filename: info.compress_type for info in zf.infolist()}
