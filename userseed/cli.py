import click
import json
import sys

from pydantic import ValidationError

from .config_loader import load_settings
from .logging_setup import setup_logging
from .mongo_client import get_client, get_db
from .seed import DEFAULT_INDEXES, admin_seed_user
from .bootstrap.mongo_bootstrap import bootstrap_mongo, verify_bootstrap

SUCCESS_MESSAGE = "Database initialized successfully"


def _load_settings_or_fail(config):
    try:
        return load_settings(config)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise click.ClickException(
            f"invalid configuration in {config} ({fields}); "
            f"mongo.uri may also come from MONGODB_URI\n{exc}"
        ) from exc


@click.group()
def cli():
    pass


@cli.group(help="Initialize external resources.")
def bootstrap():
    """Initialize external resources."""
    pass


@bootstrap.command()
@click.option("--config", default="config.yaml", show_default=True)
@click.option(
    "--strict/--tolerant",
    default=None,
    help=(
        "Fail when the collection or the seed user already exists instead of "
        "skipping them. Defaults to bootstrap.strict from the config."
    ),
)
def mongo(config, strict):
    log = setup_logging()
    s = _load_settings_or_fail(config)
    if strict is None:
        strict = s.bootstrap.strict

    client = get_client(s)
    try:
        db = get_db(s, client)
        seed = admin_seed_user(
            name=s.seed.name, email=s.seed.email, password=s.seed.password
        )
        res = bootstrap_mongo(
            db,
            collection=s.bootstrap.collection,
            indexes=DEFAULT_INDEXES,
            seed=seed,
            strict=strict,
        )
        log.info(
            "mongo bootstrap complete",
            extra={"stage": "bootstrap.mongo", **res.model_dump()},
        )
    except Exception:
        log.warning(
            "bootstrap mongo failed",
            extra={"stage": "bootstrap.mongo", "database": s.mongo.db},
            exc_info=True,
        )
        raise
    finally:
        client.close()
    click.echo(SUCCESS_MESSAGE)


@cli.command(help="Check that the database matches the bootstrapped layout.")
@click.option("--config", default="config.yaml", show_default=True)
def check(config):
    # stdout carries only the JSON report
    log = setup_logging(stream=sys.stderr)
    s = _load_settings_or_fail(config)
    client = get_client(s)
    try:
        report = verify_bootstrap(
            get_db(s, client),
            collection=s.bootstrap.collection,
            indexes=DEFAULT_INDEXES,
            seed_email=s.seed.email,
        )
    finally:
        client.close()
    log.info("bootstrap check", extra={"stage": "check", "ok": report["ok"]})
    click.echo(json.dumps(report, indent=2))
    if not report["ok"]:
        raise SystemExit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
