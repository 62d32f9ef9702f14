import click
import json
import sys

from .config_loader import load_settings
from .logging_setup import setup_logging
from .mongo_client import get_client, get_db, list_indexes, ping


def _echo_json(payload) -> None:
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _setup_cli_logging():
    # stdout carries the JSON index list only
    return setup_logging(stream=sys.stderr)


@click.group()
def cli():
    pass


@cli.group(help="Initialize external resources.")
def bootstrap():
    """Initialize external resources."""
    pass


@bootstrap.command()
@click.option("--config", default="config.yaml", show_default=True)
@click.option("--skip-ping", is_flag=True, help="Do not check the connection first.")
def mongo(config, skip_ping):
    log = _setup_cli_logging()
    s = load_settings(config)
    client = get_client(s)
    try:
        from .bootstrap.mongo_bootstrap import bootstrap_mongo

        if not skip_ping:
            ping(client)
        res = bootstrap_mongo(s, db=get_db(s, client))
        log.info(
            "mongo bootstrap complete",
            extra={
                "stage": "bootstrap.mongo",
                "collection": res["collection"],
                "collection_created": res["collection_created"],
            },
        )
    except Exception:
        log.warning(
            "bootstrap mongo failed",
            extra={"stage": "bootstrap.mongo"},
            exc_info=True,
        )
        raise
    finally:
        client.close()
    _echo_json(res["indexes"])


@cli.command(help="List the indexes on the tasks collection.")
@click.option("--config", default="config.yaml", show_default=True)
def indexes(config):
    _setup_cli_logging()
    s = load_settings(config)
    client = get_client(s)
    try:
        found = list_indexes(get_db(s, client), s.mongo.collection)
    finally:
        client.close()
    _echo_json([i.model_dump() for i in found])


@cli.command(help="Check that the tasks collection and its indexes exist.")
@click.option("--config", default="config.yaml", show_default=True)
def verify(config):
    log = _setup_cli_logging()
    s = load_settings(config)
    from .bootstrap.mongo_bootstrap import verify_mongo

    client = get_client(s)
    try:
        res = verify_mongo(s, db=get_db(s, client))
    finally:
        client.close()
    log.info("mongo verify complete", extra={"stage": "verify", **res})
    if not res["ok"]:
        raise click.ClickException(
            f"tasks schema mismatch: missing={res['missing']} unexpected={res['unexpected']}"
        )


def main():
    cli()


if __name__ == "__main__":
    main()
