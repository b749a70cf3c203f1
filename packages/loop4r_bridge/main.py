"""
Loop4r Bridge Entry Point

Run as:
    python -m loop4r_bridge
    loop4r-bridge (after pip install)

Arguments can also be read from program files with @FILE, one or more
per line, with # comment lines. The short command words of the pedal
firmware docs (dout, ch, oin, oout, list) are accepted as well.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import shlex
import signal
import sys
from types import FrameType

from pydantic import ValidationError

from . import __version__
from .config import Settings
from .factory import create_bridge
from .output import ControlSurfaceWriter

COMMAND_WORDS = {
    "dout": "--device-out",
    "ch": "--channel",
    "channel": "--channel",
    "oin": "--osc-in",
    "oout": "--osc-out",
    "list": "--list",
}


class ProgramFileParser(argparse.ArgumentParser):
    """ArgumentParser whose @FILE lines may hold several arguments"""

    def convert_arg_line_to_args(self, arg_line: str) -> list[str]:
        if arg_line.lstrip().startswith("#"):
            return []
        return normalize_command_words(shlex.split(arg_line))


def normalize_command_words(args: list[str]) -> list[str]:
    """Translate bare command words into their long options"""
    return [COMMAND_WORDS.get(arg.lower(), arg) for arg in args]


def setup_logging(debug: bool = False) -> None:
    """Configure logging"""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = ProgramFileParser(
        prog="loop4r-bridge",
        description="Loop4r Bridge - mirror looper engine state onto pedalboard LEDs",
        fromfile_prefix_chars="@",
        epilog=(
            "The MIDI device name doesn't have to be an exact match: the first "
            "output port containing the given text, irrespective of case, is used."
        ),
    )
    parser.add_argument(
        "--device-out",
        metavar="NAME",
        default=None,
        help="Set the name of the MIDI output port",
    )
    parser.add_argument(
        "--channel",
        type=int,
        default=None,
        help="Set MIDI channel for the commands (0-16), defaults to 1",
    )
    parser.add_argument(
        "--osc-in",
        type=int,
        metavar="PORT",
        default=None,
        help="OSC receive port (default: 9001)",
    )
    parser.add_argument(
        "--osc-out",
        type=int,
        metavar="PORT",
        default=None,
        help="OSC send port (default: 9000)",
    )
    parser.add_argument(
        "--osc-host",
        default=None,
        help="Looper engine host (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Lists the MIDI ports and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s v{__version__}",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Environment settings, overridden by whatever was given on the command line"""
    overrides = {
        "device_out": args.device_out,
        "channel": args.channel,
        "osc_host": args.osc_host,
        "osc_receive_port": args.osc_in,
        "osc_send_port": args.osc_out,
    }
    return Settings(**{key: value for key, value in overrides.items() if value is not None})


def list_ports() -> None:
    print("MIDI Input devices:")
    for port in ControlSurfaceWriter.list_input_ports():
        print(port)
    print("MIDI Output devices:")
    for port in ControlSurfaceWriter.list_ports():
        print(port)


def main(argv: list[str] | None = None) -> int:
    """Main entry point"""
    parser = build_parser()
    argv = normalize_command_words(sys.argv[1:] if argv is None else list(argv))

    if not argv:
        parser.print_help()
        return 0

    args = parser.parse_args(argv)

    # List MIDI ports and exit
    if args.list:
        list_ports()
        return 0

    setup_logging(args.debug)
    logger = logging.getLogger(__name__)

    # Create bridge via factory (DI pattern)
    try:
        settings = settings_from_args(args)
    except ValidationError as e:
        parser.error(str(e))
    bridge = create_bridge(settings)

    # Handle shutdown signals
    def signal_handler(signum: int, frame: FrameType | None) -> None:
        logger.info("Shutdown signal received")
        bridge.stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info("Starting Loop4r bridge")
    logger.info(f"  MIDI out: {settings.device_out or '(none)'} (channel {settings.channel})")
    logger.info(f"  OSC: in {settings.osc_receive_port}, out {settings.osc_host}:{settings.osc_send_port}")

    try:
        bridge.start()
        asyncio.run(bridge.run())
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt")
    finally:
        bridge.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
