from __future__ import annotations

import json
from dataclasses import asdict

import typer
from rich import print

from accordion_store.config import (
    AccordionConfig,
    get_config_path,
    get_env_overrides,
    load_config,
)

from .common import read_config_or_exit, write_config_or_exit


def config_show_cmd() -> None:
    """Print the effective configuration."""

    cfg = load_config()
    print(f"[dim]{get_config_path()}[/dim]")
    typer.echo(json.dumps(asdict(cfg), indent=2))
    overrides = get_env_overrides()
    if overrides:
        print(f"[yellow]Environment overrides: {', '.join(sorted(overrides))}[/yellow]")


def config_set_cmd(*, key: str, value: str) -> None:
    """Write a single key to the config file."""

    if key not in AccordionConfig.__dataclass_fields__:
        print(f"[red]Unknown config key: {key}[/red]")
        raise typer.Exit(code=1)
    data = read_config_or_exit()
    try:
        data[key] = json.loads(value)
    except json.JSONDecodeError:
        data[key] = value
    write_config_or_exit(data)
    print(f"[green]Set {key}[/green]")
