import sys
import zipfile
from io import BytesIO
from pathlib import Path
from typing import List, Optional
from xml.sax.saxutils import escape

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


def _paragraphs_xml(lines: List[str]) -> str:
    out = []
    for line in lines:
        if line:
            out.append(f'<w:p><w:r><w:t xml:space="preserve">{escape(line)}</w:t></w:r></w:p>')
        else:
            out.append("<w:p/>")
    return "".join(out)


def build_docx_bytes(body: List[str], header: Optional[List[str]] = None) -> bytes:
    buf = BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr("[Content_Types].xml", "<?xml version='1.0'?><Types/>")
        zf.writestr(
            "word/document.xml",
            f'<?xml version="1.0"?><w:document xmlns:w="{W_NS}"><w:body>'
            f"{_paragraphs_xml(body)}</w:body></w:document>",
        )
        if header:
            zf.writestr(
                "word/header1.xml",
                f'<?xml version="1.0"?><w:hdr xmlns:w="{W_NS}">{_paragraphs_xml(header)}</w:hdr>',
            )
    return buf.getvalue()


SAMPLE_CV_LINES = [
    "Jane Doe",
    "jane@example.com",
    "Experience",
    "Engineer at Acme",
    "",
    "Skills",
    "Go, Rust",
]


@pytest.fixture
def sample_cv_text() -> str:
    return "\n".join(SAMPLE_CV_LINES)


@pytest.fixture
def make_docx(tmp_path: Path):
    def _make(name: str, body: List[str], header: Optional[List[str]] = None) -> Path:
        path = tmp_path / name
        path.write_bytes(build_docx_bytes(body, header))
        return path

    return _make


@pytest.fixture
def docx_bytes():
    return build_docx_bytes
