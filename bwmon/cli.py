"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
import time

from bwmon import __version__
from bwmon.chart import get_renderer, renderer_names
from bwmon.config import (
    DEFAULT_HEIGHT, DEFAULT_INTERVAL, MODE_BOTH, MODE_DOWNLOAD, MODE_UPLOAD, MonitorConfig,
)
from bwmon.counters import PROVIDERS, InterfaceSnapshot, Provider, get_provider
from bwmon.errors import BwmonError, InterfaceNotFound, NoInterfacesAvailable
from bwmon.history import DEFAULT_CAPACITY
from bwmon.monitor import Monitor, start_session
from bwmon.resolver import candidates, resolve_interface

log = logging.getLogger(__name__)

LIST_HINT = "Use -l or --list to see available interfaces"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bwmon",
        description="Real-time network bandwidth monitor with terminal charts.",
    )
    parser.add_argument("-i", "--interface", default="",
                        help="Interface name or pattern; substring or wildcard (default: busiest)")
    parser.add_argument("-H", "--height", type=int, default=DEFAULT_HEIGHT,
                        help=f"Chart height in lines (default: {DEFAULT_HEIGHT})")
    parser.add_argument("-W", "--width", type=int, default=0,
                        help="Chart width in columns, 0 = fit terminal (default: 0)")
    parser.add_argument("-t", "--interval", type=float, default=DEFAULT_INTERVAL,
                        help=f"Update interval in seconds (default: {DEFAULT_INTERVAL})")
    parser.add_argument("-l", "--list", action="store_true",
                        help="List interfaces with their byte counters and exit")
    parser.add_argument("-s", "--summary", action="store_true",
                        help="Show peak/average/total statistics")
    direction = parser.add_mutually_exclusive_group()
    direction.add_argument("-d", "--download", action="store_true",
                           help="Show the download chart only")
    direction.add_argument("-u", "--upload", action="store_true",
                           help="Show the upload chart only")
    parser.add_argument("--history", type=int, default=DEFAULT_CAPACITY,
                        help=f"Number of samples kept (default: {DEFAULT_CAPACITY})")
    parser.add_argument("--renderer", default="ascii",
                        choices=renderer_names(),
                        help="Chart backend (default: ascii)")
    parser.add_argument("--source", default="psutil", choices=sorted(PROVIDERS),
                        help="Counter source (default: psutil)")
    parser.add_argument("--static", action="store_true",
                        help="Print one line per sample instead of drawing charts")
    parser.add_argument("--no-color", action="store_true",
                        help="Disable ANSI colors")
    parser.add_argument("--log-file", default=None,
                        help="Write log records to this file")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log debug details")
    parser.add_argument("-V", "--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool, log_file: str | None) -> None:
    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    if log_file:
        logging.basicConfig(filename=log_file, level=logging.DEBUG if verbose else logging.INFO,
                            format=fmt)
    else:
        logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=fmt)


def config_from_args(args: argparse.Namespace) -> MonitorConfig:
    mode = MODE_DOWNLOAD if args.download else MODE_UPLOAD if args.upload else MODE_BOTH
    return MonitorConfig(
        interface=args.interface,
        height=args.height,
        width=args.width,
        interval=args.interval,
        history=args.history,
        mode=mode,
        summary=args.summary,
        renderer=args.renderer,
        source=args.source,
        static=args.static,
        color=not args.no_color,
    )


def list_interfaces(snapshots: list[InterfaceSnapshot], pattern: str = "", out=None) -> None:
    """Print interfaces and counters; with a pattern, only the matches."""
    out = out or sys.stdout
    names = [s.name for s in snapshots]
    if pattern:
        shown = [pattern] if pattern in names else candidates(pattern, names)
    else:
        shown = names
    if not shown:
        raise InterfaceNotFound(pattern, names)
    selected = resolve_interface(pattern, snapshots) if snapshots else None

    print("Available Network Interfaces:", file=out)
    print("─" * 60, file=out)
    for idx, snap in enumerate(s for s in snapshots if s.name in shown):
        mark = "*" if snap.name == selected else " "
        print(f" {mark}{idx + 1:>3}. {snap.name}  (RX: {snap.rx_bytes} bytes, "
              f"TX: {snap.tx_bytes} bytes)", file=out)
    print("", file=out)
    print("Tip: -i accepts a partial name ('eth') or wildcards ('Wi*'); * marks the pick.",
          file=out)


def main(argv: list[str] | None = None, provider: Provider | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.log_file)

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))
    if provider is None:
        provider = get_provider(config.source)

    try:
        snapshots = provider()
        if args.list:
            if not snapshots:
                raise NoInterfacesAvailable()
            list_interfaces(snapshots, config.interface)
            return 0

        interface = resolve_interface(config.interface, snapshots)
        log.info("monitoring %s (renderer=%s, source=%s)", interface, config.renderer, config.source)
        renderer = get_renderer(config.renderer)
        session = start_session(interface, snapshots, config.history, time.monotonic())
        Monitor(config, session, provider, renderer).run()
    except (InterfaceNotFound, NoInterfacesAvailable) as e:
        print(f"Error: {e}", file=sys.stderr)
        print(LIST_HINT, file=sys.stderr)
        return 1
    except BwmonError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
