import io
import sys
from pathlib import Path
from typing import Any, Callable, Sequence

import pytest
from openpyxl import Workbook

# Add src to sys.path so we can import theory_bank
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


# Real cells from the source workbook
MARKUP_NO_IMAGE = (
    '<div dir="rtl" style="text-align: right"><ul>'
    '<li><span id="correctAnswer0862">שאנו בקיאים בהפעלתו ובשימוש בו.</span></li>'
    '<li><span>שברכב בוצעו הטיפולים הדרושים לתחזוקתו השוטפת.</span></li>'
    '<li><span>שברכב נמצאים נורות ונתיכים (פיוזים) חלופיים.</span></li>'
    '<li><span>שהדלק והשמנים הם מהסוג המתאים להפעלתו התקינה של הרכב.</span></li>'
    '</ul><div style="padding-top: 4px;"><span><button type="button" '
    "onclick=\"var correctAnswer=document.getElementById('correctAnswer0862');"
    "correctAnswer.style.background='yellow'\">הצג תשובה נכונה</button></span><br/>"
    '<span style="float: left;">| «C1» | «C» | «D» | «A» | «1» | «В» | </span></div></div>'
)

IMAGE_URL = "https://www.gov.il/BlobFolder/generalpage/tq_pic_02/he/TQ_PIC_3667.jpg"

MARKUP_WITH_IMAGE = (
    '<div dir="rtl" style="text-align: right"><ul>'
    '<li><span id="correctAnswer0667">עצור לפני הצומת, אלא אם כן אינך יכול לעצור בבטחה.</span></li>'
    '<li><span>היכון לנסיעה. מיד יתחלף האור ברמזור לירוק.</span></li>'
    '<li><span>המשך בנסיעה. האור ברמזור יתחלף מיד לאור ירוק.</span></li>'
    '<li><span>מותר לנסוע ישר, ימינה ושמאלה.</span></li></ul>'
    f'<img src="{IMAGE_URL}" style="width: 100%; padding: 0pt; border: 0pt none; '
    'outline: 0pt none;" alt="yellow_traffic_light" title="yellow_traffic_light" />'
    '<div style="padding-top: 4px;"><span><button type="button" '
    "onclick=\"var correctAnswer=document.getElementById('correctAnswer0667');"
    "correctAnswer.style.background='yellow'\">הצג תשובה נכונה</button></span><br/>"
    '<span style="float: left;">| «C1» | «C» | «D» | «A» | «1» | «В» | </span></div></div>'
)


def simple_markup(answers: Sequence[str], correct: int = 0, tags: str = "| «A» | «В» |") -> str:
    """Build a minimal answer cell with the marker on answers[correct]."""
    items = []
    for i, answer in enumerate(answers):
        span_id = f' id="correctAnswer{i:04d}"' if i == correct else ""
        items.append(f"<li><span{span_id}>{answer}</span></li>")
    return f"<ul>{''.join(items)}</ul><span>{tags}</span>"


def build_workbook(header: Sequence[Any], rows: Sequence[Sequence[Any]]) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.append(list(header))
    for row in rows:
        ws.append(list(row))
    return wb


def workbook_bytes(header: Sequence[Any], rows: Sequence[Sequence[Any]]) -> bytes:
    buffer = io.BytesIO()
    build_workbook(header, rows).save(buffer)
    return buffer.getvalue()


# Common test fixtures
@pytest.fixture
def make_xlsx() -> Callable[..., bytes]:
    """Factory returning xlsx bytes for a header and data rows."""
    return workbook_bytes


@pytest.fixture
def sample_rows():
    """Two valid data rows in canonical column order (title2, description4, category)."""
    return [
        ["0862. לפני תחילת הנסיעה ברכב חדש יש לוודא:", MARKUP_NO_IMAGE, "הכרת הרכב"],
        ["0667. מה פירוש האור הצהוב ברמזור?", MARKUP_WITH_IMAGE, "חוקי התנועה"],
    ]


@pytest.fixture
def markup_no_image() -> str:
    return MARKUP_NO_IMAGE


@pytest.fixture
def markup_with_image() -> str:
    return MARKUP_WITH_IMAGE


@pytest.fixture
def image_url() -> str:
    return IMAGE_URL


@pytest.fixture
def markup_for() -> Callable[..., str]:
    """Factory building a minimal answer cell, see simple_markup()."""
    return simple_markup
