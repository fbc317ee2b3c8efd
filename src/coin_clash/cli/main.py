"""Typer CLI application."""
from __future__ import annotations

from typing import Optional

import typer

app = typer.Typer(
    name="coin-clash",
    help="A turn-based coin and dice clash arena",
    no_args_is_help=False,
)


@app.command()
def play(
    hero: str = typer.Option("striker", "--hero", "-c", help="Character you control"),
    opponent: Optional[str] = typer.Option(None, "--opponent", "-o", help="Opponent id (random if omitted)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible dice"),
    fast: bool = typer.Option(False, "--fast", help="Skip pacing delays between rounds"),
) -> None:
    """Fight a battle against an AI opponent."""
    from coin_clash.app import ArenaApp

    arena = ArenaApp(seed=seed, fast=fast)
    try:
        arena.play(hero, opponent)
    except KeyError as exc:
        arena.display.show_message(str(exc.args[0]), "red")
        raise typer.Exit(code=1)


@app.command()
def roster() -> None:
    """List every playable character."""
    from coin_clash.app import ArenaApp

    ArenaApp().show_roster()


@app.command()
def simulate(
    hero: str = typer.Option("striker", "--hero", "-c", help="Character on the player side"),
    opponent: Optional[str] = typer.Option(None, "--opponent", "-o", help="Opponent id (random if omitted)"),
    battles: int = typer.Option(100, "--battles", "-n", help="Number of battles to run"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible dice"),
) -> None:
    """Run AI-vs-AI battles and report the win counts."""
    from coin_clash.app import ArenaApp

    arena = ArenaApp(seed=seed, fast=True)
    try:
        arena.simulate(hero, opponent, battles)
    except KeyError as exc:
        arena.display.show_message(str(exc.args[0]), "red")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
