from __future__ import annotations

import logging

import click

from glsnap import __version__
from glsnap.commands.check import check_cmd
from glsnap.commands.compare import compare_cmd
from glsnap.commands.doctor import doctor_cmd
from glsnap.commands.render import render_cmd


def _enable_verbose(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Turn on debug logging for --verbose."""
    if not value:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="glsnap")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_enable_verbose,
    help="Log debug details to stderr.",
)
def main() -> None:
    """glsnap: reference-image visual regression for off-screen renders."""


main.add_command(doctor_cmd, name="doctor")
main.add_command(render_cmd, name="render")
main.add_command(compare_cmd, name="compare")
main.add_command(check_cmd, name="check")


if __name__ == "__main__":
    main()
