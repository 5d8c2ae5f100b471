from fastapi import APIRouter

from .features.download_ticket.router import router as download_ticket_router
from .features.get_deadline.router import router as get_deadline_router
from .features.get_invitation_details.router import router as get_invitation_details_router

router = APIRouter()

router.include_router(get_deadline_router)
router.include_router(download_ticket_router)
router.include_router(get_invitation_details_router)
