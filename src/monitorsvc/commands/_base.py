"""Shared Click decorators for monitorsvc commands.

``--examples`` prints usage examples for a command and exits, keeping
``--help`` concise. Examples are written as indented blocks and dedented
before printing.
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from typing import TypeVar

import click

F = TypeVar("F", bound=Callable[..., object])


def examples_option(examples: str) -> Callable[[F], F]:
    """Attach an eager ``--examples`` flag that prints *examples*."""
    text = textwrap.dedent(examples).strip("\n")

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(text)
        ctx.exit(0)

    return click.option(
        "--examples",
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show_examples,
        help="Show usage examples.",
    )
