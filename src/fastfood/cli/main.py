"""fastfood CLI — run the server and manage the database.

Usage:
    fastfood serve --reload                      # Run the API with uvicorn
    fastfood init-db                             # Create tables (dev/tests; prod uses alembic)
    fastfood seed                                # Replace the catalog with demo data + admin
    fastfood create-admin boss@example.com -p s3cret
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import sys
from typing import Optional

import click
import structlog
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from fastfood import __version__
from fastfood.auth.jwt import Role
from fastfood.cli.seed_data import CATEGORIES, MENU_ITEMS, OPTIONS
from fastfood.config import settings
from fastfood.db.engine import async_session_factory, engine
from fastfood.db.models import Base, MenuCategory, MenuItem, MenuOption
from fastfood.services.user_service import EmailAlreadyRegisteredError, UserService

logger = structlog.get_logger()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous click handler.

    Offloads to a thread when a loop is already running (CliRunner
    inside an async test).
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(asyncio.run, coro).result()


async def seed_catalog(db: AsyncSession) -> dict[str, int]:
    """Wipe categories, items and options, then insert the demo catalog."""
    await db.execute(delete(MenuItem))
    await db.execute(delete(MenuCategory))
    await db.execute(delete(MenuOption))

    db.add_all(MenuCategory(**c) for c in CATEGORIES)
    db.add_all(MenuItem(**i) for i in MENU_ITEMS)
    db.add_all(MenuOption(name=n, type=t, price=p) for n, t, p in OPTIONS)
    await db.commit()

    return {
        "categories": len(CATEGORIES),
        "items": len(MENU_ITEMS),
        "options": len(OPTIONS),
    }


async def ensure_admin(
    db: AsyncSession, email: str, password: str, name: Optional[str] = None
) -> bool:
    """Create the admin account. Returns False if the email is taken."""
    try:
        await UserService(db).register(email, password, name=name, role=Role.ADMIN)
    except EmailAlreadyRegisteredError:
        return False
    return True


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="fastfood")
def cli():
    """Fast Food backend — server and database management."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: FASTFOOD_HOST)")
@click.option("--port", type=int, default=None, help="Port (default: FASTFOOD_PORT)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "fastfood.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@cli.command("init-db")
def init_db():
    """Create all tables directly from the ORM models."""

    async def _init():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        await engine.dispose()

    _run(_init())
    click.secho("Database tables created.", fg="green")


@cli.command()
@click.option("--skip-admin", is_flag=True, help="Do not create the admin account")
def seed(skip_admin: bool):
    """Replace the menu catalog with demo data and create the admin account."""

    async def _seed():
        async with async_session_factory() as db:
            counts = await seed_catalog(db)
            created = None
            if not skip_admin:
                created = await ensure_admin(
                    db,
                    settings.seed_admin_email,
                    settings.seed_admin_password,
                    name=settings.seed_admin_name,
                )
        await engine.dispose()
        return counts, created

    counts, created = _run(_seed())
    logger.info("seed.completed", **counts)
    click.secho(
        f"Seeded {counts['categories']} categories, {counts['items']} items, "
        f"{counts['options']} options.",
        fg="green",
    )
    if created is True:
        click.echo(f"Admin account created: {settings.seed_admin_email}")
    elif created is False:
        click.echo(f"Admin account already exists: {settings.seed_admin_email}")


@cli.command("create-admin")
@click.argument("email")
@click.option("--password", "-p", prompt=True, hide_input=True,
              confirmation_prompt=True, help="Admin password (min 6 chars)")
@click.option("--name", "-n", default=None, help="Display name")
def create_admin(email: str, password: str, name: Optional[str]):
    """Create an admin account."""
    if len(password) < 6:
        click.secho("Error: password must be at least 6 characters", fg="red", err=True)
        sys.exit(1)

    async def _create():
        async with async_session_factory() as db:
            created = await ensure_admin(db, email, password, name=name)
        await engine.dispose()
        return created

    if not _run(_create()):
        click.secho(f"Error: {email} is already registered", fg="red", err=True)
        sys.exit(1)
    click.secho(f"Admin account created: {email}", fg="green")


if __name__ == "__main__":
    cli()
