import typer
from rich import print as rprint

from fitbook.database import crud
from fitbook.database.database import SessionLocal

users_cli = typer.Typer()


@users_cli.command(name="create")
def create_user(name: str, jwt_sub: str):
    """
    Register a user ahead of their first authenticated request
    """
    with SessionLocal() as db:
        if crud.get_user_by_sub(db, jwt_sub) is not None:
            rprint(f"User with subject '{jwt_sub}' already exists")
            raise typer.Exit(1)
        db_user = crud.create_user(db, name, jwt_sub)
        rprint(f"User '{db_user.name}' created")


@users_cli.callback(
    invoke_without_command=True,
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
    },
)
def list_users(
    ctx: typer.Context,
    print_uuid: bool = typer.Option(False, "--id", help="Print UUIDs of users"),
):
    if ctx.invoked_subcommand is None:
        with SessionLocal() as db:
            for user in crud.get_users(db):
                print((f"{user.id} " if print_uuid else "") + str(user.name))
