"""Command Line Interface for Clinic Records.

Runs the API server and covers the administrative tasks the HTTP surface does
not: users are pre-provisioned here, never created over HTTP.
"""

import logging
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from clinic_records.adapters.storage import MongoConnections
from clinic_records.api.logging_config import setup_logging
from clinic_records.domain.errors import StorageError
from clinic_records.infrastructure.passwords import hash_password
from clinic_records.infrastructure.settings import Settings

app = typer.Typer(
    name="clinic-records",
    help="Clinic Records: patients, clinical measurements and login over MongoDB",
    add_completion=False
)
console = Console()


def open_connections(settings: Settings) -> MongoConnections:
    try:
        return MongoConnections.from_config(settings.store)
    except ValueError as e:
        console.print(f"[red]✗[/red] Invalid store configuration: {str(e)}")
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Listen address (default: CR_API_HOST or 0.0.0.0)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Listen port (default: CR_API_PORT or 3000)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes (development)"),
) -> None:
    """Run the API server."""
    settings = Settings()
    api_config = settings.api
    setup_logging(use_json=api_config.json_logs, log_level=api_config.log_level)
    uvicorn.run(
        "clinic_records.api.main:build_app",
        factory=True,
        host=host or api_config.host,
        port=port or api_config.port,
        reload=reload,
        log_level=api_config.log_level.lower(),
        log_config=None,
    )


@app.command("create-user")
def create_user(
    email: str = typer.Argument(..., help="Login email"),
    role: str = typer.Option("staff", "--role", "-r", help="Role shown on login"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
) -> None:
    """Provision a user with a bcrypt-hashed password.

    Examples:
        clinic-records create-user nurse@example.org --role nurse
    """
    connections = open_connections(Settings())
    try:
        users = connections.user_store()
        if users.find_by_email(email) is not None:
            console.print(f"[red]✗[/red] User already exists: {email}")
            raise typer.Exit(code=1)
        try:
            password_hash = hash_password(password)
        except ValueError as e:
            console.print(f"[red]✗[/red] Password rejected: {str(e)}")
            raise typer.Exit(code=1)
        user = users.insert(email, password_hash, role)
        console.print(f"[green]✓[/green] Created user {user.email} ({user.role})")
    except StorageError as e:
        console.print(f"[red]✗[/red] Store error during {e.operation}: check logs")
        raise typer.Exit(code=1)
    finally:
        connections.close()


@app.command("list-patients")
def list_patients() -> None:
    """Print every stored patient."""
    connections = open_connections(Settings())
    try:
        patients = connections.patient_store().list_all()
    except StorageError as e:
        console.print(f"[red]✗[/red] Store error during {e.operation}: check logs")
        raise typer.Exit(code=1)
    finally:
        connections.close()

    table = Table(title=f"Patients ({len(patients)})")
    table.add_column("Key", style="dim")
    table.add_column("Patient ID", style="cyan")
    table.add_column("Name")
    table.add_column("Age", justify="right")
    table.add_column("Condition")
    for patient in patients:
        table.add_row(
            patient.id,
            patient.patient_id or "",
            patient.name or "",
            str(patient.age) if patient.age is not None else "",
            patient.condition or "",
        )
    console.print(table)


def main() -> None:
    logging.basicConfig(level=logging.WARNING)
    app()


if __name__ == "__main__":
    main()
