"""Build minimal .docx packages from WordprocessingML snippets."""

import io
import zipfile
from html import escape

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

_NUMBERING_OVERRIDE = (
    '  <Override PartName="/word/numbering.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.numbering+xml"/>\n'
)

_CONTENT_TYPES = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">
  <Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>
  <Default Extension="xml" ContentType="application/xml"/>
  <Override PartName="/word/document.xml" ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>
{numbering_override}</Types>
"""

_PACKAGE_RELS = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" Target="word/document.xml"/>
</Relationships>
"""

_DOCUMENT_RELS = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/numbering" Target="numbering.xml"/>
</Relationships>
"""

_EMPTY_RELS = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships"/>
"""


def run(text, bold=False, italic=False, underline=False):
    rpr = ""
    if bold or italic or underline:
        rpr = "<w:rPr>{}{}{}</w:rPr>".format(
            "<w:b/>" if bold else "",
            "<w:i/>" if italic else "",
            '<w:u w:val="single"/>' if underline else "",
        )
    return f'<w:r>{rpr}<w:t xml:space="preserve">{escape(text, quote=False)}</w:t></w:r>'


def para(content="", num_id=None, ilvl=None):
    """A ``w:p``; plain strings become a single unformatted run."""
    if content and not content.lstrip().startswith("<w:"):
        content = run(content)
    ppr = ""
    if num_id is not None or ilvl is not None:
        parts = ""
        if ilvl is not None:
            parts += f'<w:ilvl w:val="{ilvl}"/>'
        if num_id is not None:
            parts += f'<w:numId w:val="{num_id}"/>'
        ppr = f"<w:pPr><w:numPr>{parts}</w:numPr></w:pPr>"
    return f"<w:p>{ppr}{content}</w:p>"


def document_xml(*paragraphs):
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="{W_NS}"><w:body>{"".join(paragraphs)}</w:body></w:document>'
    )


def numbering_xml(definitions):
    """``{numId: [numFmt for level 0, level 1, ...]}`` → numbering part."""
    abstract, nums = [], []
    for i, (num_id, formats) in enumerate(definitions.items()):
        levels = "".join(
            f'<w:lvl w:ilvl="{lvl}"><w:numFmt w:val="{fmt}"/></w:lvl>'
            for lvl, fmt in enumerate(formats)
        )
        abstract.append(f'<w:abstractNum w:abstractNumId="{i}">{levels}</w:abstractNum>')
        nums.append(f'<w:num w:numId="{num_id}"><w:abstractNumId w:val="{i}"/></w:num>')
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:numbering xmlns:w="{W_NS}">{"".join(abstract)}{"".join(nums)}</w:numbering>'
    )


def build_docx(paragraphs, numbering=None, document=None):
    """Zip a minimal .docx that both lxml and python-docx can open."""
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(
            "[Content_Types].xml",
            _CONTENT_TYPES.format(
                numbering_override=_NUMBERING_OVERRIDE if numbering is not None else ""
            ),
        )
        zf.writestr("_rels/.rels", _PACKAGE_RELS)
        zf.writestr(
            "word/document.xml",
            document if document is not None else document_xml(*paragraphs),
        )
        if numbering is not None:
            zf.writestr("word/_rels/document.xml.rels", _DOCUMENT_RELS)
            zf.writestr("word/numbering.xml", numbering_xml(numbering))
        else:
            zf.writestr("word/_rels/document.xml.rels", _EMPTY_RELS)
    return buf.getvalue()


# Expected HTML for the ``list_docx`` fixture.
LIST_DOCX_HTML = (
    "<p>Intro</p>"
    "<ul><li>Apples<ul><li>Green</li></ul></li><li>Pears</li></ul>"
    "<p>Between</p>"
    "<ol><li>First</li><li>Second</li></ol>"
)


def corrupt_member(data, member):
    """Invert the compressed bytes of one archive member."""
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        info = zf.getinfo(member)
    buf = bytearray(data)
    name_len = int.from_bytes(buf[info.header_offset + 26:info.header_offset + 28], "little")
    extra_len = int.from_bytes(buf[info.header_offset + 28:info.header_offset + 30], "little")
    start = info.header_offset + 30 + name_len + extra_len
    for i in range(start, start + info.compress_size):
        buf[i] ^= 0xFF
    return bytes(buf)


def set_compression_method(data, member, method):
    """Rewrite the central directory compression method of one member."""
    buf = bytearray(data)
    name = member.encode()
    pos = buf.find(b"PK\x01\x02")
    while pos >= 0:
        name_len = int.from_bytes(buf[pos + 28:pos + 30], "little")
        if bytes(buf[pos + 46:pos + 46 + name_len]) == name:
            buf[pos + 10:pos + 12] = method.to_bytes(2, "little")
        pos = buf.find(b"PK\x01\x02", pos + 4)
    return bytes(buf)
