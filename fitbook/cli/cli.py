import typer
import uvicorn
from rich import print as rprint

from fitbook.api import api
from fitbook.cli.reminders import reminders_cli
from fitbook.cli.users import users_cli
from fitbook.database.database import init_db

cli = typer.Typer()
cli.add_typer(users_cli, name="users", help="Manage fitbook users")
cli.add_typer(
    reminders_cli, name="reminders", help="Send reminders for classes starting soon"
)


@cli.command(
    name="api",
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
    },  # Enabled to support uvicorn options
)
def serve_api(ctx: typer.Context):
    """
    Start a web server

    Actually a wrapper around uvicorn, and supports passing additional options to the underlying uvicorn.run() command.
    """
    ctx.args.insert(0, f"{api.__name__}:api")
    uvicorn.main.main(args=ctx.args)


@cli.command(name="init_db")
def init_db_cli():
    """
    Create any missing database tables
    """
    init_db()
    rprint(":heavy_check_mark: Database tables created")


@cli.callback()
def callback():
    """
    Fitness class booking with notifications
    """
