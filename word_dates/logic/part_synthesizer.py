from __future__ import annotations

from typing import Optional
from xml.sax.saxutils import escape

from core.config.config_service import config_service

# Extended properties namespace
EP_NS = "http://schemas.openxmlformats.org/officeDocument/2006/extended-properties"
VT_NS = "http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes"


def default_app_xml(last_printed: str, application: Optional[str] = None) -> bytes:
    """
    Minimal docProps/app.xml for packages that ship without one.
    LastPrinted is omitted when *last_printed* is empty.
    """
    if application is None:
        application = config_service.synthesizer.application

    children = f"<Application>{escape(application)}</Application>"
    if last_printed:
        children += f"<LastPrinted>{escape(last_printed)}</LastPrinted>"

    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\r\n'
        f'<Properties xmlns="{EP_NS}" xmlns:vt="{VT_NS}">{children}</Properties>'
    ).encode("utf-8")
