from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import typer

from mailstats.connectors.mailgun import MailgunClient
from mailstats.core.command import parse_command_text
from mailstats.core.config import ConfigError, RelayConfig, config_json, load_config
from mailstats.core.formatting import format_slack_message, render_plain
from mailstats.errors import RelayError

app = typer.Typer(help="Mailgun statistics relay for Slack slash commands")
config_app = typer.Typer(help="Inspect relay configuration")

app.add_typer(config_app, name="config")


def _load(config_path: Path | None) -> RelayConfig:
    try:
        return load_config(path=config_path)
    except ConfigError as exc:
        typer.echo(f"config error: {exc}")
        raise typer.Exit(code=1)


def _configure_logging(config: RelayConfig) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@app.command("serve")
def serve_command(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8080, "--port", help="Port to serve on"),
    config_path: Path | None = typer.Option(None, "--config", help="YAML config file"),
) -> None:
    """Serve the slash-command webhook at POST /stats."""
    import uvicorn

    from mailstats.web.app import create_app

    cfg = _load(config_path)
    _configure_logging(cfg)

    typer.echo(f"starting mailstats relay on http://{host}:{port}/stats")
    uvicorn.run(create_app(cfg), host=host, port=port, log_level=cfg.log_level)


@app.command("query")
def query_command(
    text: str = typer.Argument("", help='Slash-command text, e.g. "7d accepted,failed"'),
    config_path: Path | None = typer.Option(None, "--config", help="YAML config file"),
    as_json: bool = typer.Option(False, "--json", help="Print the Slack payload as JSON"),
) -> None:
    """Fetch Mailgun totals once and print them."""
    cfg = _load(config_path)
    _configure_logging(cfg)

    query = parse_command_text(text)
    client = MailgunClient.from_config(cfg)
    try:
        report = asyncio.run(client.fetch_stats(query))
    except RelayError as exc:
        typer.echo(f"error: {exc}")
        raise typer.Exit(code=1)

    message = format_slack_message(report)
    if as_json:
        typer.echo(json.dumps(message.model_dump(mode="json"), indent=2))
    else:
        typer.echo(render_plain(message))


@config_app.command("show")
def config_show(
    config_path: Path | None = typer.Option(None, "--config", help="YAML config file"),
) -> None:
    """Print the resolved configuration with secrets redacted."""
    cfg = _load(config_path)
    typer.echo(config_json(cfg))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
