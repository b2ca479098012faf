#!/usr/bin/env python3

import functools
import json
import logging
import signal
import sys
import threading
from time import sleep

import click
from netspeed import constants, glyphs
from netspeed.data import net_speed as ns
from netspeed.util import log, netdev, system
from netspeed.util.sampler import Sampler

cache_dir = system.get_cache_directory()
context_settings = dict(help_option_names=["-h", "--help"])
logfile = cache_dir / "waybar-net-speed.log"
logger = logging.getLogger("netspeed")
sampler: Sampler | None = None
shutdown = threading.Event()


def refresh_handler(_signum: int, _frame: object | None):
    logger.info("[refresh_handler] - received SIGHUP - restarting the sampler")
    if sampler is not None and sampler.running:
        sampler.restart()


def shutdown_handler(signum: int, _frame: object | None):
    logger.info(f"[shutdown_handler] - received signal {signum} - exiting")
    shutdown.set()


def generate_tooltip(speed: ns.NetSpeed) -> str:
    logger.debug(f"[generate_tooltip] - entering with success={speed.success}")
    tooltip: list[str] = []

    if speed.success:
        if speed.interfaces:
            tooltip.append(f"Interfaces : {', '.join(speed.interfaces)}")
        else:
            tooltip.append("No physical interfaces found")
    else:
        tooltip.append(f"Error : {speed.error}")

    if speed.updated:
        tooltip.append("")
        tooltip.append(f"Last updated {speed.updated}")

    return "\n".join(tooltip)


def render_output(speed: ns.NetSpeed) -> tuple[str, str, str]:
    output_class = "success" if speed.success else "error"
    return speed.label, output_class, generate_tooltip(speed=speed)


def emit(speed: ns.NetSpeed):
    text, output_class, tooltip = render_output(speed=speed)
    print(
        json.dumps(
            {
                "text": text,
                "class": output_class,
                "tooltip": tooltip,
            }
        )
    )


def build_reader(source: str, file: str | None) -> netdev.Reader:
    if source == "psutil":
        if file is not None:
            raise click.UsageError("--file only applies to --source procfs")
        return netdev.read_psutil_counters
    return functools.partial(netdev.read_counters, path=file or constants.COUNTER_FILE)


@click.command(
    help="Show the aggregate network throughput of all physical interfaces",
    context_settings=context_settings,
)
@click.option(
    "-s",
    "--source",
    type=click.Choice(["procfs", "psutil"]),
    default="procfs",
    help="Where to read the interface counters from",
)
@click.option(
    "-f",
    "--file",
    default=None,
    help=f"The counter table to read with --source procfs [default: {constants.COUNTER_FILE}]",
)
@click.option(
    "-x",
    "--exclude",
    multiple=True,
    help="An extra interface name prefix to ignore",
)
@click.option(
    "-t", "--test", default=False, is_flag=True, help="Print the output and exit"
)
@click.option("-d", "--debug", default=False, is_flag=True, help="Enable debug logging")
def main(source: str, file: str | None, exclude: tuple[str, ...], test: bool, debug: bool):
    global sampler

    _ = log.configure(debug=debug, name="netspeed", logfile=logfile)
    logger.info("[main] - entering")

    sampler = Sampler(
        reader=build_reader(source=source, file=file),
        excluded_prefixes=constants.EXCLUDED_PREFIXES + tuple(exclude),
    )

    if test:
        # The first tick only sets the baseline
        _ = sampler.tick()
        sleep(sampler.interval)
        text, output_class, tooltip = render_output(speed=sampler.tick())
        print(text)
        print(output_class)
        print(tooltip)
        return

    sys.stdout.reconfigure(line_buffering=True)  # type: ignore

    print(
        json.dumps(
            {
                "text": f"{glyphs.md_timer_outline}{glyphs.icon_spacer}---",
                "class": "loading",
                "tooltip": "Gathering network data...",
            }
        )
    )

    sampler.start(callback=emit)
    _ = signal.signal(signal.SIGHUP, refresh_handler)
    _ = signal.signal(signal.SIGINT, shutdown_handler)
    _ = signal.signal(signal.SIGTERM, shutdown_handler)
    try:
        while not shutdown.is_set():
            _ = shutdown.wait(1)
    finally:
        sampler.stop()


if __name__ == "__main__":
    main()
