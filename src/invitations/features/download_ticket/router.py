import logging
from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from src.config.settings import settings
from src.invitations.credential import encode_payload, render_credential_png
from src.invitations.dependencies import get_details_loader
from src.invitations.details import InvitationDetailsLoader
from src.invitations.ticket import TICKET_FILENAME, render_ticket
from src.invitations.urls import DOWNLOAD_TICKET_URL, GET_CREDENTIAL_URL

logger = logging.getLogger(__name__)

router = APIRouter()


def get_ticket_logo() -> bytes | None:
    """Dependency to get the logo printed on the ticket header, if configured."""
    if not settings.ticket_logo_path:
        return None
    try:
        return Path(settings.ticket_logo_path).read_bytes()
    except OSError as e:
        logger.warning(f"Could not read ticket logo {settings.ticket_logo_path}: {e}")
        return None


@router.get(GET_CREDENTIAL_URL, response_class=Response)
async def get_credential(
    token: str,
    n: str | None = None,
    loader: InvitationDetailsLoader = Depends(get_details_loader),
) -> Response:
    """
    Get the entry QR code for an invitation token as a PNG image.
    """
    details = await loader.load(token, name=n)
    png = render_credential_png(encode_payload(details.entry_payload()))
    return Response(content=png, media_type="image/png")


@router.get(DOWNLOAD_TICKET_URL, response_class=Response)
async def download_ticket(
    token: str,
    n: str | None = None,
    loader: InvitationDetailsLoader = Depends(get_details_loader),
    logo: bytes | None = Depends(get_ticket_logo),
) -> Response:
    """
    Download the printable ticket for an invitation token.
    Includes the QR code, confirmed seats, member answers, extra companions and the guest message.
    """
    details = await loader.load(token, name=n)
    credential_image = render_credential_png(encode_payload(details.entry_payload()))
    pdf = render_ticket(
        credential_image=credential_image,
        name=details.display_name,
        summary=details.summary,
        seats=details.seats,
        logo=logo,
    )
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{TICKET_FILENAME}"'},
    )
