"""
Entry-point.  Keeps top-level script tiny.
"""
import argparse
import datetime as dt
import logging

import pygame
from turret import config, gui


def _parse_args():
    parser = argparse.ArgumentParser(description="Radar Turret console")
    parser.add_argument("--host", help="Turret base URL, e.g. http://192.168.4.1")
    parser.add_argument(
        "--log",
        default="ERROR",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default is ERROR."
    )
    parser.add_argument("--log-to-file", action="store_true", help="Save logs to txt file.")
    return parser.parse_args()


def _setup_logging(args):
    level = getattr(logging, args.log.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level: {args.log}")

    handlers = [logging.StreamHandler()]
    if args.log_to_file:
        handlers.append(logging.FileHandler(f"{dt.datetime.now():%Y-%m-%d_%H%M%S}.txt"))
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers
    )


def main():
    args = _parse_args()
    _setup_logging(args)
    pygame.init()
    cfg = config.load()
    saved_host = cfg["host"]
    if args.host:                       # one-off override, not persisted
        cfg["host"] = args.host.rstrip("/")
    app = gui.RadarGUI(cfg)
    app.run()
    config.save({**cfg, "host": saved_host})

if __name__ == "__main__":
    main()
