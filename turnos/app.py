import logging
import random
from datetime import timedelta
import click
from flask import Flask, current_app, jsonify
from flask.cli import with_appcontext
from flask_cors import CORS
from .extensions import db, migrate
from .config import Config
from .errors import StoreError
from .http import jerror
from .notifier import build_notifier
from .blueprints.turnos import bp as turnos_bp, scheduling_service

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app.config["LOG_LEVEL"])

    CORS(app)

    db.init_app(app)
    migrate.init_app(app, db)

    with app.app_context():
        from . import models

    app.extensions["turnos.notifier"] = build_notifier(app.config)

    app.register_blueprint(turnos_bp, url_prefix="/api/turnos")

    @app.get("/health")
    def health():
        return jsonify(status="ok")

    @app.errorhandler(StoreError)
    def store_unavailable(e):
        logger.error("Store failure: %s", e)
        return jerror(503, "STORE_UNAVAILABLE", "The reservation store is unavailable. Try again shortly.")

    @click.command("init-db")
    @with_appcontext
    def init_db_command():
        """Creates the turnos table and its indexes."""
        db.create_all()
        click.echo("Database initialized.")

    @click.command("seed")
    @click.option("--count", default=10, show_default=True, help="Reservations to attempt.")
    @click.option("--days", default=7, show_default=True, help="Spread reservations over this many days.")
    @with_appcontext
    def seed_command(count, days):
        """Creates sample reservations in the coming days, skipping taken slots."""
        service = scheduling_service(notify=False)
        start = service.now().date() + timedelta(days=1)
        open_h, close_h = (int(v.split(":")[0]) for v in (
            current_app.config["BUSINESS_HOURS_START"],
            current_app.config["BUSINESS_HOURS_END"],
        ))

        created = 0
        for i in range(count):
            day = start + timedelta(days=random.randint(0, max(days - 1, 0)))
            hour = random.randint(open_h, max(close_h - 1, open_h))
            minute = random.choice([0, 30])
            result = service.reserve(
                day.isoformat(),
                f"{hour:02d}:{minute:02d}",
                f"Customer {i + 1}",
                f"customer{i + 1}@example.com",
            )
            if result.success:
                created += 1
        click.echo(f"Created {created} reservations.")

    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_command)

    return app
