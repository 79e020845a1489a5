# filename: huffman_cli.py

import argparse
import logging
import sys
from pathlib import Path

from huffman_bitio import BitInputStream, BitOutputStream
from huffman_errors import HuffmanError
from huffman_service import HuffmanService

logger = logging.getLogger(__name__)

SUFFIX = ".hf"


def default_output(command, path):
    if command == "compress":
        return path.with_name(path.name + SUFFIX)
    if path.suffix == SUFFIX:
        return path.with_suffix("")
    return path.with_name(path.name + ".out")


def build_parser():
    parser = argparse.ArgumentParser(prog="huffproc", description="Tree-carrying Huffman compressor")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress at INFO level")
    parser.add_argument(
        "-d", "--debug", type=int, default=0,
        help="service debug level: 1 logs a summary, 4 also logs every code",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    for name in ("compress", "decompress"):
        command = commands.add_parser(name, help=f"{name} a file")
        command.add_argument("input", type=Path)
        command.add_argument("-o", "--output", type=Path, help="output path (default derived from input)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.debug > 0:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    service = HuffmanService(debug=args.debug)
    src = args.input
    dst = args.output or default_output(args.command, src)

    try:
        with BitInputStream.from_path(src) as bit_in, open(dst, "wb") as sink:
            bit_out = BitOutputStream(sink)
            if args.command == "compress":
                service.compress_stream(bit_in, bit_out)
            else:
                service.decompress_stream(bit_in, bit_out)
    except HuffmanError as e:
        logger.error("%s: %s", src, e)
        dst.unlink(missing_ok=True)
        return 1

    logger.info("%s %s -> %s", args.command, src, dst)
    if args.command == "compress":
        orig_size = src.stat().st_size
        comp_size = dst.stat().st_size
        print(f"{src} ({orig_size}B) -> {dst} ({comp_size}B)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
