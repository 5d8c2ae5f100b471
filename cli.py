"""CLI commands for the wedding invitation service."""

import asyncio
import json
from pathlib import Path

import typer

from src.config.logging import setup_logging
from src.config.settings import settings
from src.invitations.credential import (
    build_entry_payload,
    decode_payload,
    encode_payload,
    render_credential_png,
)
from src.invitations.deadline import has_deadline_passed, resolve_deadline
from src.invitations.dependencies import get_details_loader, get_party_lookup, get_rsvp_status_lookup
from src.invitations.features.download_ticket.router import get_ticket_logo
from src.invitations.ticket import TICKET_FILENAME, render_ticket

app = typer.Typer(help="CLI commands for the wedding invitation service")


@app.callback()
def main():
    setup_logging()


@app.command()
def deadline(
    token: str = typer.Argument(
        ...,
        help="Invitation token",
    ),
):
    """Show which RSVP deadline applies to an invitation token."""
    config = resolve_deadline(token)

    typer.secho(f"Deadline: {config.label}", fg=typer.colors.GREEN)
    typer.secho(f"  Cutoff: {config.cutoff.isoformat()}", fg=typer.colors.BLUE)
    typer.secho(f"  Extended: {'yes' if config.extended else 'no'}", fg=typer.colors.CYAN)
    if has_deadline_passed(token):
        typer.secho("  The deadline has passed", fg=typer.colors.YELLOW)


@app.command()
def payload(
    name: str = typer.Argument(
        "",
        help="Guest or party name printed on the ticket",
    ),
    seats: int = typer.Option(
        1,
        "--seats",
        "-s",
        help="Number of seats",
    ),
    token: str = typer.Option(
        None,
        "--token",
        "-t",
        help="Invitation token",
    ),
    summary_hash: str = typer.Option(
        None,
        "--hash",
        help="Entry hash of the stored RSVP",
    ),
):
    """Encode an entry credential payload and show what a scanner would read."""
    encoded = encode_payload(build_entry_payload(name, seats, token, summary_hash))

    typer.secho("Encoded payload:", fg=typer.colors.GREEN)
    typer.echo(encoded)
    typer.echo()
    typer.secho("Decoded:", fg=typer.colors.GREEN)
    typer.secho(json.dumps(decode_payload(encoded), ensure_ascii=False, indent=2), fg=typer.colors.CYAN)


async def _render_ticket(token: str, name: str | None) -> bytes:
    """Async helper to load the invitation and render its ticket."""
    loader = get_details_loader(
        party_lookup=get_party_lookup(),
        status_lookup=get_rsvp_status_lookup(),
    )
    details = await loader.load(token, name=name)
    if details.summary is None:
        typer.secho("No stored RSVP for this token, printing seats only", fg=typer.colors.YELLOW)

    credential_image = render_credential_png(encode_payload(details.entry_payload()))
    return render_ticket(
        credential_image=credential_image,
        name=details.display_name,
        summary=details.summary,
        seats=details.seats,
        logo=get_ticket_logo(),
    )


@app.command()
def ticket(
    token: str = typer.Argument(
        ...,
        help="Invitation token",
    ),
    name: str = typer.Option(
        None,
        "--name",
        "-n",
        help="Guest name, as passed in the invitation link",
    ),
    out: Path = typer.Option(
        Path(TICKET_FILENAME),
        "--out",
        "-o",
        help="Where to write the PDF",
    ),
):
    """Fetch an invitation from the store and write its printable ticket."""
    pdf = asyncio.run(_render_ticket(token, name))
    out.write_bytes(pdf)

    typer.secho("Ticket written!", fg=typer.colors.GREEN)
    typer.secho(f"  File: {out}", fg=typer.colors.BLUE)


@app.command()
def serve():
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("src.main:app", host=settings.app_host, port=settings.app_port, reload=settings.debug)


if __name__ == "__main__":
    app()
