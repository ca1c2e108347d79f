import argparse
import asyncio
import logging
import sys
from pathlib import Path
import importlib.resources as pkg_resources

from vectorwire.distance import distance_expression
from vectorwire.errors import UnknownTypeError, VectorCodecError
from vectorwire.registry import CODECS, get_codec

logger = logging.getLogger(__name__)


def _print_err(msg: str) -> None:
    sys.stderr.write(msg + "\n")


def cmd_encode(type_name: str, text: str) -> int:
    codec = get_codec(type_name)
    value = codec.from_text(text)
    print(codec.encode(value).hex())
    return 0


def cmd_decode(type_name: str, hex_data: str) -> int:
    codec = get_codec(type_name)
    try:
        buf = bytes.fromhex(hex_data.strip())
    except ValueError:
        _print_err(f"Not a hex string: {hex_data!r}")
        return 1
    print(codec.decode(buf).to_text())
    return 0


def cmd_distance(name: str, column: str, type_name: str, text: str) -> int:
    value = get_codec(type_name).from_text(text)
    sql, params = distance_expression(name, column, value).to_sql()
    print(sql)
    for i, param in enumerate(params, start=1):
        print(f"${i} = {param.to_text()}")
    return 0


def copy_example() -> int:
    target = Path.cwd() / "demo.py"
    if target.exists():
        _print_err(f"{target} already exists; not overwriting.")
        return 1
    try:
        with pkg_resources.files("vectorwire.examples").joinpath("demo.py").open("rb") as src:
            target.write_bytes(src.read())
        print(f"Wrote example to {target}")
        return 0
    except FileNotFoundError:
        _print_err("Example file not found in package.")
        return 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="vectorwire", description="Encode and decode pgvector wire values")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)
    type_names = sorted(CODECS)

    encode = sub.add_parser("encode", help="Encode a text literal into hex wire bytes")
    encode.add_argument("type_name", choices=type_names)
    encode.add_argument("text", help="Text literal, e.g. '[1,2,3]', '{1:1,3:2}/5' or '101'")
    encode.set_defaults(func="encode")

    decode = sub.add_parser("decode", help="Decode hex wire bytes into a text literal")
    decode.add_argument("type_name", choices=type_names)
    decode.add_argument("hex_data")
    decode.set_defaults(func="decode")

    distance = sub.add_parser("distance", help="Render a distance expression against a column")
    distance.add_argument("name", help="l2, max_inner_product, cosine, l1, hamming or jaccard")
    distance.add_argument("column")
    distance.add_argument("type_name", choices=type_names)
    distance.add_argument("text")
    distance.set_defaults(func="distance")

    demo = sub.add_parser("demo", help="Copy demo example into the current directory")
    demo.set_defaults(func="demo")

    mcp = sub.add_parser("mcp", help="Run the MCP stdio server")
    mcp.set_defaults(func="mcp")

    return p


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.func == "mcp":
        from vectorwire.mcp_server import main as mcp_main

        asyncio.run(mcp_main())
        return

    cmd_map = {
        "encode": lambda: cmd_encode(args.type_name, args.text),
        "decode": lambda: cmd_decode(args.type_name, args.hex_data),
        "distance": lambda: cmd_distance(args.name, args.column, args.type_name, args.text),
        "demo": copy_example,
    }
    handler = cmd_map[args.func]
    try:
        rc = handler()
    except (VectorCodecError, UnknownTypeError, TypeError, ValueError) as exc:
        logger.debug("%s failed", args.func, exc_info=True)
        _print_err(f"Error: {exc}")
        rc = 1
    sys.exit(rc)


if __name__ == "__main__":
    main()
