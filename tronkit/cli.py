"""The tronctl command line: configuration, address utilities and helpers."""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Mapping
from datetime import datetime, timezone
from importlib import metadata

from tronkit.address import Address, base58_to_address, hex_to_address
from tronkit.config import (
    _config_file,
    get_config_value,
    init_config,
    save_config,
    set_config_value,
)

ADDRESS_FIELDS = frozenset({"OwnerAddress", "ReceiverAddress", "ToAddress", "ContractAddress"})


def parse_contract_human_readable(fields: Mapping) -> dict:
    """Make a decoded contract readable: drop internal fields, show addresses in base58."""
    result = {}
    for name, value in fields.items():
        if name.startswith("XXX_"):
            continue
        if name in ADDRESS_FIELDS:
            value = str(Address(value))
        result[name] = value
    if "Votes" in result:
        result["Votes"] = {
            str(Address(vote["VoteAddress"])): vote["VoteCount"] for vote in result["Votes"]
        }
    return result


def format_timestamp(milliseconds: int) -> str:
    """Format a millisecond timestamp as an RFC 3339 UTC date, dropping the milliseconds."""
    millis = int(milliseconds)
    seconds = millis // 1000 if millis >= 0 else -((-millis) // 1000)
    moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def _pretty_json(value) -> str:
    return json.dumps(value, indent=2, sort_keys=True)


def _show(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping):
        return _pretty_json(value)
    return str(value)


def _version() -> str:
    try:
        return metadata.version("tronkit")
    except metadata.PackageNotFoundError:
        return "unknown"


def _cmd_version(args) -> int:
    program = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "tronctl"
    print(f"TronCTL. {program} version {_version()}", file=sys.stderr)
    return 0


def _cmd_config_set(args) -> int:
    set_config_value(args.config, args.param, args.value)
    save_config(args.config, _config_file(args.config_dir_path))
    return 0


def _cmd_config_get(args) -> int:
    print(_show(get_config_value(args.config, args.param)))
    return 0


def _cmd_base58_to_addr(args) -> int:
    print(base58_to_address(args.address).hex())
    return 0


def _cmd_addr_to_base58(args) -> int:
    address = hex_to_address(args.address)
    print("" if address is None else str(address))
    return 0


def _cmd_nothing(args) -> int:
    return 0


def _cmd_completion(args) -> int:
    words = " ".join(sorted(args.top_commands))
    print(
        "_tronctl_complete() {\n"
        f'    COMPREPLY=( $(compgen -W "{words}" -- "${{COMP_WORDS[COMP_CWORD]}}") )\n'
        "}\n"
        "complete -F _tronctl_complete tronctl"
    )
    return 0


def _group(subparsers, name: str, help_text: str):
    parser = subparsers.add_parser(name, help=help_text)
    parser.set_defaults(help_parser=parser)
    return parser, parser.add_subparsers()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tronctl")
    parser.add_argument("--config-dir", default=None, help="directory holding the config file")
    commands = parser.add_subparsers()

    version = commands.add_parser("version", help="Show version")
    version.set_defaults(handler=_cmd_version)

    completion = commands.add_parser(
        "completion",
        help="Generates bash completion scripts",
        description="To load completion, run: . <(tronctl completion)",
    )
    completion.set_defaults(handler=_cmd_completion)

    _, config_commands = _group(commands, "config", "update default config")
    config_set = config_commands.add_parser("set", help="set default config")
    config_set.add_argument("param")
    config_set.add_argument("value")
    config_set.set_defaults(handler=_cmd_config_set)
    config_get = config_commands.add_parser("get", help="get default config")
    config_get.add_argument("param")
    config_get.set_defaults(handler=_cmd_config_get)

    _, utility = _group(commands, "utility", "common tron utilities")
    utility.add_parser("metadata", help="data includes network specific values").set_defaults(
        handler=_cmd_nothing
    )
    utility.add_parser("metrics", help="mostly in-memory fluctuating values").set_defaults(
        handler=_cmd_nothing
    )
    to_hex = utility.add_parser("base58-to-addr", help="0x Address of a base58 address")
    to_hex.add_argument("address")
    to_hex.set_defaults(handler=_cmd_base58_to_addr)
    to_base58 = utility.add_parser("addr-to-base58", help="base58 address of an 0x address")
    to_base58.add_argument("address")
    to_base58.set_defaults(handler=_cmd_addr_to_base58)

    parser.set_defaults(top_commands=tuple(commands.choices))
    return parser


def main(argv=None) -> int:
    """Run the command line and return its exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        args.config = init_config(args.config_dir)
        args.config_dir_path = (
            args.config_dir
            if args.config_dir is not None
            else os.path.join(os.environ.get("HOME", ""), ".config", "tronctl")
        )
        handler = getattr(args, "handler", None)
        if handler is None:
            getattr(args, "help_parser", parser).print_help()
            return 0
        return handler(args)
    except (ValueError, LookupError, OSError) as exc:
        message = exc.args[0] if isinstance(exc, LookupError) and exc.args else exc
        print(f"Error: {message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())