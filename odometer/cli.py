"""Odometer CLI - roll numbers in the terminal."""

import asyncio
import logging
import sys
from typing import Any, Dict, Optional

import click
import yaml
from rich.console import Console
from rich.live import Live
from rich.table import Table
from rich.text import Text

from .clock import AsyncioFrameClock, ManualFrameClock
from .config import ConfigManager
from .easing import EASINGS
from .errors import OdometerError
from .matrix import RotatingColumn, build_matrix
from .normalize import normalize
from .odometer import Odometer
from .options import CURRENCY_POSITIONS, SUPPORTED_DECIMAL_MARKS, SUPPORTED_RADIX_MARKS, config_from_options
from .render import TextRenderer
from .theme import Palette, get_palette, style_for
from .value import coerce_number, parse_value

console = Console()


def _collect_options(manager: ConfigManager, **flags) -> Dict[str, Any]:
    """Options from the config file, overridden by flags that were given."""
    options = manager.get_options()
    for key, value in flags.items():
        if value is not None:
            options[key] = value
    return options


def format_options(func):
    """Attach the shared formatting flags to a command."""
    decorators = [
        click.option("--radix-mark", "-r", type=click.Choice(SUPPORTED_RADIX_MARKS), help="Grouping mark"),
        click.option("--decimal-mark", "-d", type=click.Choice(SUPPORTED_DECIMAL_MARKS), help="Decimal mark"),
        click.option("--currency", "currency_symbol", help="Currency symbol"),
        click.option("--currency-position", type=click.Choice(CURRENCY_POSITIONS), help="Currency side"),
        click.option("--min-integers", "min_integers_length", type=int, help="Zero-pad the integer part"),
        click.option("--min-decimals", "min_decimals_length", type=int, help="Zero-pad the decimal part"),
        click.option("--commafy/--no-commafy", "commafy_leading_zeros", default=None,
                     help="Group zero-padded leading digits"),
        click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file path"),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _roll_without_animation(values, options: Dict[str, Any], palette: Palette) -> TextRenderer:
    renderer = TextRenderer(palette)
    clock = ManualFrameClock()
    odo = Odometer(renderer, options, clock=clock)
    for value in values:
        odo.set(value)
        clock.run_until_idle()
    return renderer


async def _roll(values, options: Dict[str, Any], fps: float, pause: float, palette: Palette) -> TextRenderer:
    renderer = TextRenderer(palette)
    odo = Odometer(renderer, options, clock=AsyncioFrameClock(fps))
    with Live(renderer.render(), console=console, refresh_per_second=fps) as live:
        renderer.on_change = lambda: live.update(renderer.render())
        for value in values:
            transition = odo.set(value)
            if transition is not None:
                await transition.wait()
            await asyncio.sleep(pause)
    return renderer


# CLI Commands
@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log transitions to stderr")
def cli(verbose):
    """ODOMETER - rolling-reel number display.

    Roll values in the terminal, inspect symbol matrices, run the demo.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s", stream=sys.stderr)


@cli.command()
@click.argument("values", nargs=-1, required=True)
@format_options
@click.option("--from", "init_value", default="0", show_default=True, help="Starting value")
@click.option("--duration", "animation_duration_ms", type=float, help="Animation length per value (ms)")
@click.option("--easing", type=click.Choice(sorted(EASINGS)), help="Easing function")
@click.option("--fps", type=float, help="Frames per second")
@click.option("--pause", default=0.5, show_default=True, help="Seconds to hold each value")
@click.option("--no-animate", is_flag=True, help="Print the final display only")
def roll(values, config_path, init_value, fps, pause, no_animate, **flags):
    """Roll through VALUES one after another."""
    manager = ConfigManager(config_path)
    options = _collect_options(manager, init_value=init_value, **flags)
    palette = get_palette(manager.get_theme_name())
    try:
        if no_animate:
            renderer = _roll_without_animation(values, options, palette)
            console.print(renderer.render())
        else:
            asyncio.run(_roll(values, options, fps or manager.get_fps(), pause, palette))
    except OdometerError as e:
        raise click.ClickException(str(e))


@cli.command(name="format")
@click.argument("old")
@click.argument("new")
@format_options
def format_(old, new, config_path, **flags):
    """Show the isometric layout and symbol matrix for OLD -> NEW."""
    manager = ConfigManager(config_path)
    options = _collect_options(manager, **flags)
    try:
        cfg, _ = config_from_options(options)
        norm_old, norm_new = normalize(
            parse_value(coerce_number(old)), parse_value(coerce_number(new)), cfg,
        )
        matrix = build_matrix(norm_old, norm_new, cfg)
    except OdometerError as e:
        raise click.ClickException(str(e))

    console.print(Text(f"old  {norm_old.isometric_str}", style=style_for("mark")))
    console.print(Text(f"new  {norm_new.isometric_str}", style=style_for("digit")))
    console.print(Text(f"direction  {matrix.direction.value}", style=style_for("mark")))

    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("#", justify="right")
    table.add_column("role")
    table.add_column("kind")
    table.add_column("symbols")
    for idx, column in enumerate(matrix.columns):
        if isinstance(column, RotatingColumn):
            kind, symbols = f"rotating x{len(column.sequence)}", "".join(column.sequence)
        else:
            kind, symbols = "static", repr(column.symbol)
        table.add_row(str(idx), column.role.value, kind, symbols)
    console.print(table)


@cli.command()
@format_options
@click.option("--from", "init_value", default=None, help="Starting value")
@click.option("--fps", type=float, help="Frames per second")
def demo(config_path, init_value, fps, **flags):
    """Launch the interactive demo."""
    from .app import OdometerDemo

    manager = ConfigManager(config_path)
    options = {k: v for k, v in flags.items() if v is not None}
    if init_value is not None:
        options["init_value"] = init_value
    app = OdometerDemo(
        options=options,
        fps=fps or manager.get_fps(),
        palette=get_palette(manager.get_theme_name()),
    )
    try:
        app.run()
    except OdometerError as e:
        raise click.ClickException(str(e))


@cli.command(name="config")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file path")
def show_config(config_path: Optional[str]):
    """Print the effective odometer options."""
    manager = ConfigManager(config_path)
    try:
        cfg, _ = config_from_options(manager.get_options())
    except OdometerError as e:
        raise click.ClickException(str(e))
    console.print(Text(f"# {manager.config_path}", style=style_for("mark")))
    console.print(yaml.safe_dump(
        {"odometer": cfg.to_options(), "display": manager.get_display_config()},
        default_flow_style=False,
        allow_unicode=True,
    ).rstrip())


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
