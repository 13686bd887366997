"""Main entry point for Folio."""

import asyncio
import sys
from pathlib import Path

import typer

from folio.cli import TerminalUI, get_ui
from folio.config import Config, set_config
from folio.logging import configure_logging, log
from folio.session import Session

EXIT_COMMAND = "exit"
RESET_COMMAND = "reset"

app = typer.Typer(help="Folio - a console file management assistant")


async def run_interactive(session: Session, ui: TerminalUI) -> None:
    """Run the read-submit-print loop until `exit` or end of input."""
    ui.print_welcome()
    try:
        while True:
            line = await ui.read_line()
            if line is None:
                log.info("Input closed")
                break

            command = line.strip().lower()
            if command == EXIT_COMMAND:
                log.info("User exited")
                break
            if command == RESET_COMMAND:
                log.info("User reset")
                session.reset()
                ui.print_system("Conversation has been reset.")
                continue
            if not command:
                continue

            reply = await session.submit(line)
            ui.print_reply(reply)
    finally:
        ui.save_history()
        await session.close()


def main(
    config: str = "",
    model: str = "",
    base_url: str = "",
    verbose: bool = False,
) -> None:
    """Start an interactive Folio session."""
    cfg = Config.from_yaml(Path(config)) if config else Config.load()
    if verbose:
        cfg.logging.level = "DEBUG"
    if model:
        cfg.model.model = model
    if base_url:
        cfg.model.base_url = base_url
    set_config(cfg)
    configure_logging()

    workspace_path = cfg.resolved_workspace_path(Path.cwd())
    workspace_path.mkdir(parents=True, exist_ok=True)
    log.info("Starting Folio", model=cfg.model.model, workspace=str(workspace_path))

    ui = get_ui()
    session = Session()
    try:
        asyncio.run(run_interactive(session, ui))
    except KeyboardInterrupt:
        log.info("Shutting down...")
        sys.exit(0)


@app.command()
def run(
    config: str = typer.Option("", "-c", "--config", help="Path to config file"),
    model: str = typer.Option("", "-m", "--model", help="Override model"),
    base_url: str = typer.Option("", "--base-url", help="Override Ollama base URL"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging"),
) -> None:
    main(config, model, base_url, verbose)


@app.command()
def version() -> None:
    """Show version information."""
    from folio import __version__
    typer.echo(f"Folio v{__version__}")


if __name__ == "__main__":
    app()
