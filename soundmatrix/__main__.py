"""Command-line entry point: ``python -m soundmatrix``."""
from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
import traceback
from typing import List, Optional

from .config import EngineConfig
from .core.audio import ToneOutput
from .errors import ConfigError
from .logging_config import setup_logging

logger = logging.getLogger("soundmatrix")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="soundmatrix",
        description="Play a 12x3 grid of tones with mouse, touch or keyboard.",
    )
    parser.add_argument("--windowed", action="store_true", help="start in a window instead of fullscreen")
    parser.add_argument("--no-audio", action="store_true", help="do not open an audio output stream")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity (default: INFO)",
    )
    parser.add_argument("--log-file", default=None, help="also write logs to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    try:
        config = EngineConfig.from_env()
    except ConfigError as exc:
        logger.error("%s", exc)
        return 2
    if args.no_audio:
        config = dataclasses.replace(config, audio_enabled=False)

    from PySide6.QtWidgets import QApplication, QMessageBox

    from .ui.window import MainWindow

    app = QApplication.instance() or QApplication(sys.argv[:1])

    tone = None
    if config.audio_enabled:
        tone = ToneOutput(config.samplerate, config.blocksize)
        tone.start()

    try:
        window = MainWindow(config, tone)
        if args.windowed:
            window.show()
        else:
            window.showFullScreen()
        return app.exec()
    except Exception as exc:
        logger.exception("SoundMatrix failed to start")
        QMessageBox.critical(None, "SoundMatrix", f"{exc}\n\n{traceback.format_exc()}")
        return 1
    finally:
        if tone is not None:
            tone.stop()


if __name__ == "__main__":
    sys.exit(main())
