GET_INVITATION_DETAILS_URL = "/api/v1/invitations/{token}"
GET_DEADLINE_URL = "/api/v1/invitations/{token}/deadline"
GET_CREDENTIAL_URL = "/api/v1/invitations/{token}/credential.png"
DOWNLOAD_TICKET_URL = "/api/v1/invitations/{token}/ticket.pdf"
