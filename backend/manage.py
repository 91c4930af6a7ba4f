from sis import create_app
from sis.auth import signup
from sis.errors import SISError
from sis.seed import seed_data
from flask.cli import with_appcontext
from flask_migrate import upgrade, migrate, init
import click

app = create_app()

@app.cli.command("db-init")
@with_appcontext
def db_init():
    """Initializes migrations directory"""
    init()

@app.cli.command("db-migrate")
@with_appcontext
def db_migrate():
    """Creates a new migration"""
    migrate()

@app.cli.command("db-upgrade")
@with_appcontext
def db_upgrade():
    """Applies migrations"""
    upgrade()

@app.cli.command("create-teacher")
@click.argument("name")
@click.argument("email")
@click.argument("password")
@with_appcontext
def create_teacher(name, email, password):
    """Registers a teacher account"""
    try:
        user = signup(name, email, password)
    except SISError as e:
        raise click.ClickException(e.message)
    click.echo(f"Created teacher {user.email} (id={user.id})")

@app.cli.command("seed")
@click.option("--reset", is_flag=True, help="Delete existing teachers, students and attendance first.")
@with_appcontext
def seed(reset):
    """Inserts a demo teacher, roster and attendance"""
    teacher, students, created = seed_data(reset=reset)
    click.echo(f"Seeded {teacher.email}: {len(students)} students, {created} attendance records.")
