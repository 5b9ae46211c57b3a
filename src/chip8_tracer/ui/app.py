"""
アプリケーションのエントリポイント。
コマンドライン引数を解釈し、インタプリタとウィンドウを組み立ててフレームループを実行します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from chip8_tracer.core.errors import Chip8Error, RomLoadError
from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.builder import MachineBuilder
from chip8_tracer.config.models import MachineConfig
from chip8_tracer.loader.loader import RomLoader
from chip8_tracer.runtime.frame_loop import FrameLoop
from .main_window import MainWindow
from .screen import QtDisplay
from .input import QtInput, resolve_layout
from .audio import QtAudio

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_LOAD = 2

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chip8-tracer", description="CHIP-8 interpreter")
    parser.add_argument("rom", help="path to the program image")
    parser.add_argument("--config", help="machine config (YAML)")
    parser.add_argument("--scale", type=int, help="screen pixels per virtual pixel")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser

# @intent:responsibility 設定ファイルとコマンドライン引数から最終的なマシン構成を決定します。
def load_config(args: argparse.Namespace) -> MachineConfig:
    config = ConfigLoader().load_from_file(args.config) if args.config else MachineConfig()
    if args.scale is not None:
        if args.scale <= 0:
            raise ValueError(f"scale must be positive: {args.scale}")
        config.scale = args.scale
    return config

# @intent:responsibility アプリケーションを起動し、終了コードを返します。
def main(argv: Optional[List[str]] = None) -> int:
    """
    アプリケーションのメイン関数。
    正常停止で0、インタプリタの致命的エラーで1、ROM/設定の読み込み失敗で2を返します。
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args)
        image = RomLoader().read_image(args.rom)
        cpu = MachineBuilder().build_machine(config, image)
        layout = resolve_layout(config.key_layout)
    except (RomLoadError, OSError, ValueError) as e:
        logger.error("%s", e)
        return EXIT_LOAD

    app = QApplication.instance() or QApplication(sys.argv[:1])
    window = MainWindow(scale=config.scale, title=f"CHIP-8 - {args.rom}")
    window.show()
    audio = QtAudio(config.audio.tone_frequency, config.audio.volume)
    loop = FrameLoop(cpu, QtDisplay(window.screen), audio, QtInput(window, layout),
                     frame_rate=config.frame_rate)

    try:
        loop.run()
    except Chip8Error as e:
        regs = cpu.get_register_map()
        word = getattr(e, "word", None)
        if word is not None:
            logger.error("Fatal error at PC %#06x (word %04X): %s", regs["PC"], word, e)
        else:
            logger.error("Fatal error at PC %#06x: %s", regs["PC"], e)
        return EXIT_FATAL
    finally:
        audio.close()
        window.close()
        app.processEvents()
    return EXIT_OK

if __name__ == '__main__':
    sys.exit(main())
