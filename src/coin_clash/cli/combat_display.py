"""Combat-specific display helpers — clash battle UI."""
from __future__ import annotations

from typing import Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from coin_clash.models.character import CharacterDef
from coin_clash.models.combat import ActionOption, BattleEnded, CombatantSnapshot
from coin_clash.models.event import LogCategory, LogEvent


CATEGORY_STYLES: dict[LogCategory, str] = {
    LogCategory.DEFAULT: "",
    LogCategory.DAMAGE: "bold red",
    LogCategory.WIN: "bold green",
    LogCategory.LOSS: "bold magenta",
    LogCategory.SPECIAL: "bold yellow",
}


def hp_bar(current: int, maximum: int, width: int = 16) -> str:
    pct = max(0.0, current / maximum) if maximum > 0 else 0.0
    filled = int(pct * width)
    if pct > 0.5:
        color = "green"
    elif pct > 0.25:
        color = "yellow"
    else:
        color = "red"
    return f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (width - filled)}[/dim]"


class CombatDisplay:
    def __init__(self, console: Console | None = None, show_rolls: bool = True) -> None:
        self.console = console or Console()
        self.show_rolls = show_rolls

    def show_combat_start(self, player: CombatantSnapshot, enemy: CombatantSnapshot) -> None:
        self.console.print(Panel(
            f"[bold red]CLASH![/bold red]\n\n{player.name} vs {enemy.name}",
            border_style="red", box=box.HEAVY,
        ))

    def show_status(self, round_number: int, player: CombatantSnapshot, enemy: CombatantSnapshot) -> None:
        content = Text()
        content.append(f"  Round {round_number}\n\n", style="bold yellow")
        for snap in (enemy, player):
            content.append_text(Text.from_markup(self._status_line(snap)))
        self.console.print(Panel(content, border_style="red", box=box.ROUNDED, width=72))

    @staticmethod
    def _status_line(snap: CombatantSnapshot) -> str:
        tags = [f"[cyan]{e.value}[/cyan]" for e in snap.effects]
        if snap.weapon_state:
            tags.append(f"[magenta]{snap.weapon_state}[/magenta]")
        tag_str = (" " + " ".join(tags)) if tags else ""
        return (
            f"  [bold]{snap.name:<12}[/bold] {hp_bar(snap.hp, snap.max_hp)} "
            f"{snap.hp}/{snap.max_hp}  DEF {snap.defense}{tag_str}\n"
            f"  [dim]{snap.passive_name}: {snap.passive_effect}[/dim]\n"
        )

    def show_action_menu(self, options: Sequence[ActionOption]) -> None:
        lines = []
        for index, option in enumerate(options, start=1):
            ability = option.ability
            stats = f"ATK {ability.base_attack} d{ability.dice} {ability.coins}c"
            if not option.enabled:
                lines.append(f"  [dim][{index}] {option.label} ({option.reason})[/dim]")
            elif option.combo_ready:
                lines.append(f"  [bold green][{index}] {option.label}[/bold green] [dim]{stats}[/dim] [green]COMBO![/green]")
            else:
                lines.append(f"  [cyan bold][{index}][/cyan bold] {option.label} [dim]{stats}[/dim]")
        lines.append("  [cyan bold]\\[p][/cyan bold] Pass/Defend   [cyan bold]\\[q][/cyan bold] Quit")
        self.console.print("\n".join(lines))

    def show_events(self, events: Sequence[LogEvent]) -> None:
        for event in events:
            if not self.show_rolls and " rolls d" in event.message:
                continue
            style = CATEGORY_STYLES.get(event.category, "")
            self.console.print(f"  {event.message}", style=style or None, markup=False)

    def show_battle_end(self, result: BattleEnded, player_won: bool) -> None:
        border = "green" if player_won else "red"
        self.console.print(Panel(
            f"The battle is over. {result.winner_name} won in Round {result.rounds}.",
            border_style=border, box=box.DOUBLE,
        ))

    def show_message(self, text: str, style: str = "yellow") -> None:
        self.console.print(f"  [{style}]{text}[/{style}]")

    def show_help(self) -> None:
        self.console.print(
            "  Pick an action by number, id or name (e.g. [cyan]1[/cyan], [cyan]brace[/cyan],"
            " [cyan]Dragon Strike[/cyan]).\n"
            "  [cyan]pass[/cyan] defends if nothing is chosen, [cyan]status[/cyan] redraws the HP panel,"
            " [cyan]quit[/cyan] leaves the battle."
        )

    def show_roster(self, roster: Sequence[CharacterDef]) -> None:
        table = Table(title="Roster", box=box.ROUNDED)
        table.add_column("ID", style="cyan")
        table.add_column("Name", style="bold")
        table.add_column("HP", justify="right")
        table.add_column("DEF", justify="right")
        table.add_column("Passive")
        table.add_column("Abilities")
        for char in roster:
            table.add_row(
                char.id,
                char.name,
                str(char.base_stats.max_hp),
                str(char.base_stats.defense),
                f"{char.passive.name}: {char.passive.effect}",
                ", ".join(a.name for a in char.abilities),
            )
        self.console.print(table)

    def show_simulation(self, player_name: str, enemy_name: str, wins: dict[str, int], avg_rounds: float, unfinished: int) -> None:
        table = Table(title=f"{player_name} vs {enemy_name}", box=box.ROUNDED)
        table.add_column("Side")
        table.add_column("Wins", justify="right")
        table.add_row(player_name, str(wins.get("player", 0)))
        table.add_row(enemy_name, str(wins.get("enemy", 0)))
        if unfinished:
            table.add_row("[dim]Unfinished[/dim]", str(unfinished))
        self.console.print(table)
        self.console.print(f"  Average rounds: [bold]{avg_rounds:.1f}[/bold]")
