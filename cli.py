"""CLI commands for wedding guest management."""

import asyncio
import json
from dataclasses import asdict

import typer

from src.assistant.aggregator import aggregate_guests
from src.assistant.completion import OpenAICompletionClient
from src.assistant.orchestrator import ChatOrchestrator
from src.assistant.tools import GuestTools
from src.config.logging import setup_logging
from src.config.settings import settings
from src.guests.dtos import GuestEmailAlreadyExistsError
from src.guests.repository.read_models import SqlGuestReadModel
from src.guests.repository.write_models import SqlGuestWriteModel
from src.guests.schemas import GuestCreateRequest

app = typer.Typer(help="CLI commands for wedding guest management")


@app.command()
def create_guest(
    email: str = typer.Option("test@guest.example", help="Guest email"),
    first_name: str = typer.Option("Test", help="Guest first name"),
    last_name: str = typer.Option("Guest", help="Guest last name"),
    attending: bool = typer.Option(True, help="Whether the guest attends"),
    guest_count: int = typer.Option(1, min=1, max=10, help="Number of people"),
):
    """Create a guest as if submitted through the RSVP form."""
    request = GuestCreateRequest(
        email=email,
        first_name=first_name,
        last_name=last_name,
        is_attending=attending,
        guest_count=guest_count,
    )
    try:
        guest = asyncio.run(SqlGuestWriteModel().create_guest(request.model_dump()))
    except GuestEmailAlreadyExistsError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.secho("Guest created successfully!", fg=typer.colors.GREEN)
    typer.secho(f"ID: {guest.id}", fg=typer.colors.CYAN)
    typer.secho(f"Email: {guest.email}", fg=typer.colors.BLUE)


@app.command()
def guest_stats():
    """Print attendance statistics for all guests."""
    guests = asyncio.run(SqlGuestReadModel().list_guests())
    stats = aggregate_guests(guests)
    typer.echo(json.dumps(asdict(stats), indent=2))


@app.command()
def chat(message: str = typer.Argument(..., help="Question for the assistant")):
    """Ask the admin assistant a question about the guest list."""
    setup_logging()

    async def _converse():
        completion_client = OpenAICompletionClient(config=settings)
        orchestrator = ChatOrchestrator(
            config=settings,
            tools=GuestTools(SqlGuestReadModel()),
            completion_client=completion_client,
        )
        try:
            return await orchestrator.converse(message)
        finally:
            await completion_client.close()

    result = asyncio.run(_converse())
    typer.echo(result.reply)


if __name__ == "__main__":
    app()
