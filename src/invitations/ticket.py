from dataclasses import dataclass, field
from io import BytesIO

from reportlab.lib import colors
from reportlab.lib.pagesizes import A6
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from src.config.settings import settings
from src.invitations.answers import is_affirmative, readable_answer
from src.invitations.dtos import PLACEHOLDER_GUEST_NAME, ConfirmationSummary

TICKET_FILENAME = "invitacion-qr.pdf"

# Layout in points; vertical offsets are measured from the top edge
PAGE_W, PAGE_H = A6
MARGIN = 10 * mm
HEADER_H = 24 * mm
LOGO_SIZE = 18 * mm
CARD_TOP = 28 * mm
QR_TOP = 42 * mm
QR_SIZE = min(PAGE_W - 70 * mm, PAGE_H / 2.5)
LINE_STEP = 4.6 * mm

FONT_BODY = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
T_10 = 10
T_12 = 12
T_14 = 14

HEADER_FILL = colors.Color(252 / 255, 224 / 255, 157 / 255)
TEXT = colors.Color(133 / 255, 95 / 255, 13 / 255)
CARD_BORDER = colors.Color(211 / 255, 176 / 255, 102 / 255)


@dataclass(frozen=True)
class TicketSection:
    heading: str
    lines: list[str] = field(default_factory=list)
    underline: bool = False
    # Free text that has to be split to the card width
    wrap: bool = False


def confirmed_seats(summary: ConfirmationSummary | None, seats: int) -> int:
    if summary is None:
        return seats
    if isinstance(summary.confirmed, int) and not isinstance(summary.confirmed, bool):
        return summary.confirmed
    if summary.members:
        return sum(1 for member in summary.members if is_affirmative(member.answer))
    return seats


def build_ticket_sections(summary: ConfirmationSummary | None) -> list[TicketSection]:
    """Detail blocks printed below the QR code, in order."""
    if summary is None:
        return []

    sections = []
    if summary.members:
        sections.append(
            TicketSection(
                heading="Detalle de confirmación:",
                lines=[f"{member.name}: {readable_answer(member.answer)}" for member in summary.members],
                underline=True,
            )
        )
    if summary.extras:
        sections.append(
            TicketSection(
                heading="Acompañantes extra:",
                lines=[f"• {extra}" for extra in summary.extras],
            )
        )
    if summary.note:
        sections.append(TicketSection(heading="Mensaje:", lines=[summary.note], wrap=True))
    return sections


def _y(top_offset: float) -> float:
    return PAGE_H - top_offset


def _draw_header(pdf: canvas.Canvas, logo: bytes | None) -> None:
    pdf.setFillColor(HEADER_FILL)
    pdf.rect(0, _y(HEADER_H), PAGE_W, HEADER_H, stroke=0, fill=1)

    if logo:
        logo_height = LOGO_SIZE * 0.95
        pdf.drawImage(
            ImageReader(BytesIO(logo)),
            PAGE_W - MARGIN - LOGO_SIZE,
            _y(6 * mm + logo_height),
            width=LOGO_SIZE,
            height=logo_height,
            mask="auto",
        )

    pdf.setFillColor(TEXT)
    pdf.setFont(FONT_BOLD, T_14)
    pdf.drawString(MARGIN, _y(16 * mm), settings.event_title)


def _draw_section(pdf: canvas.Canvas, section: TicketSection, cursor: float) -> float:
    pdf.setFont(FONT_BOLD, T_10)
    pdf.drawString(MARGIN + 2 * mm, _y(cursor), section.heading)
    cursor += 5 * mm

    pdf.setFont(FONT_BODY, T_10)
    if section.underline:
        pdf.setLineWidth(0.1 * mm)
        pdf.line(MARGIN + 2 * mm, _y(cursor - 3 * mm), PAGE_W - MARGIN - 2 * mm, _y(cursor - 3 * mm))

    if section.wrap:
        width = PAGE_W - MARGIN * 2 - 4 * mm
        lines = [part for line in section.lines for part in simpleSplit(line, FONT_BODY, T_10, width)]
        step = T_10 * 1.15
    else:
        lines = section.lines
        step = LINE_STEP

    for line in lines:
        pdf.drawString(MARGIN + 4 * mm, _y(cursor), line)
        cursor += step
    return cursor


def render_ticket(
    credential_image: bytes,
    name: str | None,
    summary: ConfirmationSummary | None,
    seats: int,
    logo: bytes | None = None,
) -> bytes:
    """
    Lay out the printable A6 ticket and return the PDF bytes.

    ``credential_image`` is the QR code PNG; ``logo`` is an optional PNG shown
    in the header band.
    """
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A6)
    pdf.setTitle(settings.event_title)

    _draw_header(pdf, logo)

    pdf.setStrokeColor(CARD_BORDER)
    pdf.roundRect(MARGIN, 10 * mm, PAGE_W - MARGIN * 2, PAGE_H - CARD_TOP - 10 * mm, 8 * mm)

    pdf.drawImage(
        ImageReader(BytesIO(credential_image)),
        (PAGE_W - QR_SIZE) / 2,
        _y(QR_TOP + QR_SIZE),
        width=QR_SIZE,
        height=QR_SIZE,
    )

    cursor = QR_TOP + QR_SIZE + 12 * mm
    pdf.setFont(FONT_BOLD, T_12)
    pdf.drawCentredString(PAGE_W / 2, _y(cursor), name or PLACEHOLDER_GUEST_NAME)

    cursor += 6 * mm
    pdf.setFont(FONT_BODY, T_10)
    pdf.drawCentredString(
        PAGE_W / 2, _y(cursor), f"Lugares confirmados: {confirmed_seats(summary, seats)}"
    )
    cursor += 8 * mm

    for section in build_ticket_sections(summary):
        if not section.underline:
            cursor += 4 * mm
        cursor = _draw_section(pdf, section, cursor)

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
