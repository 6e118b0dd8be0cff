"""
Event-level XML rewriting for small OOXML parts.

tokenize() drives expat over the raw bytes and cuts the input into a flat list
of events (StartTag, EndTag, Text, Other). Each event keeps the exact bytes it
was cut from, so ``b"".join(e.raw for e in events) == data`` always holds.
rewrite_elements() walks that list and only synthesizes bytes for the
elements it touches; everything else (declaration, namespaces, comments,
whitespace, attribute quoting) is copied through untouched.

Element names are matched as written (qualified, e.g. "dcterms:created").
A key without a prefix also matches prefixed elements with that local name.
Namespace declarations are never rewritten, so prefixes stay stable.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Tuple, Union
from xml.parsers import expat
from xml.sax.saxutils import escape

from word_dates.exceptions.errors import XmlParseError


# ------------------------ Events ---------------------------------------------
@dataclass(frozen=True)
class StartTag:
    name: str
    raw: bytes
    self_closing: bool = False


@dataclass(frozen=True)
class EndTag:
    # raw is b"" when the element was written as <name/>
    name: str
    raw: bytes


@dataclass(frozen=True)
class Text:
    raw: bytes
    text: str


@dataclass(frozen=True)
class Other:
    """Declaration, comment, processing instruction, doctype, CDATA markers."""
    raw: bytes


XmlEvent = Union[StartTag, EndTag, Text, Other]


@dataclass(frozen=True)
class Insertion:
    """Append <name>text</name> to the root element unless *name* already occurs."""
    name: str
    text: str


_START, _END, _TEXT, _OTHER = range(4)

_ENCODING_RE = re.compile(
    rb"""^(?:\xef\xbb\xbf)?\s*<\?xml[^>]*?encoding\s*=\s*["']([A-Za-z0-9._-]+)["']"""
)

# BOM or first two bytes of "<?" for the 16-bit encodings expat accepts
_UTF16_PREFIXES = (
    (b"\xff\xfe", "utf-16-le"),
    (b"\xfe\xff", "utf-16-be"),
    (b"<\x00", "utf-16-le"),
    (b"\x00<", "utf-16-be"),
)


# ------------------------ Tokenizer ------------------------------------------
def _unit_width(encoding: str) -> int:
    return 2 if encoding.startswith("utf-16") else 1


def _tag_end(data: bytes, pos: int, encoding: str = "utf-8") -> int:
    """Index just past the '>' that closes the tag starting at *pos*."""
    width = _unit_width(encoding)
    order = "big" if encoding.endswith("-be") else "little"
    quote = 0
    size = len(data)
    i = pos + width
    while i < size:
        ch = data[i] if width == 1 else int.from_bytes(data[i:i + width], order)
        if quote:
            if ch == quote:
                quote = 0
        elif ch in (0x22, 0x27):  # " '
            quote = ch
        elif ch == 0x3E:  # >
            return i + width
        i += width
    return size


def _scan(data: bytes, part: Optional[str]) -> List[Tuple[int, int, str]]:
    marks: List[Tuple[int, int, str]] = []
    parser = expat.ParserCreate()

    def mark(kind: int, payload: str = "") -> None:
        marks.append((parser.CurrentByteIndex, kind, payload))

    parser.StartElementHandler = lambda name, attrs: mark(_START, name)
    parser.EndElementHandler = lambda name: mark(_END, name)
    parser.CharacterDataHandler = lambda text: mark(_TEXT, text)
    # Everything else; also keeps expat from expanding internal entities
    parser.DefaultHandler = lambda raw: mark(_OTHER)

    try:
        parser.Parse(data, True)
    except expat.ExpatError as exc:
        raise XmlParseError(
            expat.ErrorString(exc.code), part=part, line=exc.lineno, column=exc.offset
        ) from exc
    return marks


def tokenize(data: bytes, *, part: Optional[str] = None) -> List[XmlEvent]:
    """
    Split *data* into lossless events.
    Raises XmlParseError (with line/column) if the document is not well-formed.
    """
    marks = _scan(data, part)
    if not marks:
        return [Other(data)] if data else []

    encoding = declared_encoding(data)
    slash_gt = "/>".encode(encoding)
    events: List[XmlEvent] = []
    size = len(data)
    cursor = marks[0][0]
    if cursor > 0:
        # BOM or anything expat does not report
        events.append(Other(data[:cursor]))

    for i, (offset, kind, payload) in enumerate(marks):
        nxt = marks[i + 1][0] if i + 1 < len(marks) else size
        begin = max(offset, cursor)

        if kind == _START:
            end = _tag_end(data, begin, encoding)
            raw = data[begin:end]
            events.append(StartTag(payload, raw, raw.endswith(slash_gt)))
            cursor = end
            if nxt > end:
                events.append(Other(data[end:nxt]))
                cursor = nxt
            continue

        end = max(nxt, begin)
        raw = data[begin:end]
        cursor = end
        if kind == _END:
            events.append(EndTag(payload, raw))
        elif kind == _TEXT:
            events.append(Text(raw, payload))
        else:
            events.append(Other(raw))

    return events


def declared_encoding(data: bytes) -> str:
    """
    Codec for text spliced into *data*: UTF-16 by byte order mark (or the
    byte pattern of a leading '<'), otherwise the XML declaration, else UTF-8.
    Returned UTF-16 codecs are endian-specific so no BOM is emitted.
    """
    for prefix, codec in _UTF16_PREFIXES:
        if data.startswith(prefix):
            return codec
    match = _ENCODING_RE.match(data)
    return match.group(1).decode("ascii") if match else "utf-8"


# ------------------------ Matching -------------------------------------------
def name_matches(name: str, key: str) -> bool:
    if name == key:
        return True
    return ":" not in key and name.rpartition(":")[2] == key


def _match_key(name: str, keys: Iterable[str]) -> Optional[str]:
    for key in keys:
        if name_matches(name, key):
            return key
    return None


def matching_end(events: List[XmlEvent], start: int) -> int:
    """Index of the EndTag closing the StartTag at events[start]."""
    depth = 0
    for j in range(start, len(events)):
        ev = events[j]
        if isinstance(ev, StartTag):
            depth += 1
        elif isinstance(ev, EndTag):
            depth -= 1
            if depth == 0:
                return j
    raise XmlParseError(f"unclosed element {events[start].name!r}")  # type: ignore[union-attr]


# ------------------------ Rewriting ------------------------------------------
def _open_tag(start: StartTag, encoding: str) -> bytes:
    if not start.self_closing:
        return start.raw
    # <x a="1"/> -> <x a="1">
    return (start.raw.decode(encoding)[:-2].rstrip() + ">").encode(encoding)


def _close_tag(start: StartTag, end: EndTag, encoding: str) -> bytes:
    if not start.self_closing:
        return end.raw
    # end.raw of a self-closing element holds at most trailing bytes
    return f"</{start.name}>".encode(encoding) + end.raw


def rewrite_elements(
    data: bytes,
    replacements: Mapping[str, Optional[str]],
    insert: Optional[Insertion] = None,
    *,
    part: Optional[str] = None,
) -> bytes:
    """
    Return *data* with the text content of every element named in
    *replacements* replaced by the mapped value.

    - A value of None removes the element (tags included).
    - Attributes of matched elements are kept; their former content
      (text, comments, child elements) is dropped.
    - A self-closing matched element is expanded to <x>value</x>.
    - *insert* appends a new last child to the root element if no element of
      that name occurs anywhere in the document. Empty text never inserts.

    With nothing to replace or insert the output equals the input. A changed
    document is parsed once more, so a result that is not well-formed raises
    XmlParseError instead of being returned.
    """
    events = tokenize(data, part=part)
    encoding = declared_encoding(data)
    pending = insert if insert is not None and insert.text else None

    out = bytearray()
    root: Optional[StartTag] = None
    depth = 0
    i = 0
    while i < len(events):
        ev = events[i]

        if isinstance(ev, StartTag):
            if pending is not None and name_matches(ev.name, pending.name):
                pending = None
            key = _match_key(ev.name, replacements)
            if key is not None:
                j = matching_end(events, i)
                value = replacements[key]
                if value is not None:
                    out += _open_tag(ev, encoding)
                    out += escape(value).encode(encoding)
                    out += _close_tag(ev, events[j], encoding)  # type: ignore[arg-type]
                i = j + 1
                continue
            if root is None:
                root = ev
                # <Properties/> needs an explicit end tag to receive a child
                out += _open_tag(ev, encoding) if (ev.self_closing and pending is not None) else ev.raw
            else:
                out += ev.raw
            depth += 1

        elif isinstance(ev, EndTag):
            depth -= 1
            if depth == 0 and root is not None:
                if pending is not None:
                    out += (
                        f"<{pending.name}>{escape(pending.text)}</{pending.name}>"
                    ).encode(encoding)
                    out += _close_tag(root, ev, encoding)
                    pending = None
                else:
                    out += ev.raw
            else:
                out += ev.raw

        else:
            out += ev.raw
        i += 1

    result = bytes(out)
    if result != data:
        tokenize(result, part=part)
    return result
