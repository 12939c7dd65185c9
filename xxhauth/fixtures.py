#!/usr/bin/env python3
"""Fixture generation and regression checks.

A fixture directory holds:

* ``data``: the message hashed by every golden constant;
* ``secret``: the variable-length key fed to the secret expander;
* ``secret_entropy``: the ``SECRET_SIZE`` pool derived from ``secret``;
* ``golden.json``: the table of named constants.

``generate`` records the constants and prints them one per line as
``NAME = 0x...``; ``verify`` recomputes everything and reports any value
that is no longer bit-identical.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import secrets
import sys
from collections.abc import Sequence
from pathlib import Path

import msgspec

from .config.logging import configure_logging
from .config.settings import RuntimeConfig, load_runtime_config
from .const import GOLDEN_FILE, SECRET_ENTROPY_FILE
from .entropy import EntropyPool
from .errors import FixtureError, PrimitiveIntegrityError
from .hmac import hmac64, hmac128
from .primitive import XXH32, XXH3_128, XXH3_64, XXH64, require_primitive_integrity
from .structures import FixedWidthHash, Hash32, Hash64, Hash128

logger = logging.getLogger(__name__)

DEFAULT_DATA_SIZE = 4096
DEFAULT_KEY_SIZE = 64


class GoldenTable(msgspec.Struct, frozen=True):
    """Recorded golden constants, keyed by name, as lower-case hex."""

    constants: dict[str, str]

    def value(self, name: str) -> int:
        try:
            return int(self.constants[name], 16)
        except KeyError:
            raise FixtureError(f"golden table has no constant {name}") from None
        except ValueError:
            raise FixtureError(f"golden constant {name} is not hexadecimal") from None


def compute_golden_values(data: bytes, seed32: int, seed64: int) -> dict[str, FixedWidthHash]:
    """Compute every golden constant for ``data``, in display order."""
    return {
        "SEED32": Hash32.from_int(seed32),
        "SEED64": Hash64.from_int(seed64),
        "XXH32_HASH": XXH32.hash(data),
        "XXH32_SEEDED": XXH32.hash_with_seed(seed32, data),
        "XXH64_HASH": XXH64.hash(data),
        "XXH64_SEEDED": XXH64.hash_with_seed(seed64, data),
        "XXH3_64_HASH": XXH3_64.hash(data),
        "XXH3_64_SEEDED": XXH3_64.hash_with_seed(seed64, data),
        "XXH3_128_HASH": XXH3_128.hash(data),
        "XXH3_128_SEEDED": XXH3_128.hash_with_seed(seed64, data),
        "XXH3_64_HMAC": hmac64(data, seed64),
        "XXH3_128_HMAC": hmac128(data, Hash128(high=seed64, low=seed64)),
    }


def format_constant(name: str, value: FixedWidthHash) -> str:
    return f"{name:<15} = 0x{value.hex()}"


def _read_fixture(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        raise FixtureError(f"missing fixture file: {path}") from None


def init_fixtures(
    config: RuntimeConfig,
    *,
    data_size: int = DEFAULT_DATA_SIZE,
    key_size: int = DEFAULT_KEY_SIZE,
    overwrite: bool = False,
) -> None:
    """Write fresh random ``data`` and ``secret`` files."""
    config.fixtures_path.mkdir(parents=True, exist_ok=True)
    for path, size in ((config.data_path, data_size), (config.key_path, key_size)):
        if path.exists() and not overwrite:
            raise FixtureError(f"refusing to overwrite existing fixture {path}")
        path.write_bytes(secrets.token_bytes(size))
        logger.info("Wrote %d random bytes to %s", size, path)


def generate_fixtures(config: RuntimeConfig) -> dict[str, FixedWidthHash]:
    """Derive ``secret_entropy`` and record ``golden.json`` from the inputs."""
    data = _read_fixture(config.data_path)
    key = _read_fixture(config.key_path)

    EntropyPool.with_key(key).write(config.fixtures_path / SECRET_ENTROPY_FILE)

    values = compute_golden_values(data, config.seed32, config.seed64)
    table = GoldenTable(constants={name: value.hex() for name, value in values.items()})
    golden_path = config.fixtures_path / GOLDEN_FILE
    golden_path.write_bytes(msgspec.json.format(msgspec.json.encode(table)) + b"\n")
    logger.info("Recorded %d golden constants in %s", len(values), golden_path)
    return values


def load_golden_table(path: Path) -> GoldenTable:
    try:
        return msgspec.json.decode(_read_fixture(path), type=GoldenTable)
    except msgspec.ValidationError as exc:
        raise FixtureError(f"malformed golden table {path}: {exc}") from exc
    except msgspec.DecodeError as exc:
        raise FixtureError(f"golden table {path} is not valid JSON: {exc}") from exc


def verify_fixtures(config: RuntimeConfig) -> list[str]:
    """Recompute the fixture directory; return one message per mismatch."""
    data = _read_fixture(config.data_path)
    key = _read_fixture(config.key_path)
    table = load_golden_table(config.fixtures_path / GOLDEN_FILE)

    mismatches: list[str] = []
    try:
        computed = compute_golden_values(data, table.value("SEED32"), table.value("SEED64"))
    except ValueError as exc:
        raise FixtureError(f"golden table seeds are out of range: {exc}") from exc
    for name, value in computed.items():
        recorded = table.value(name)
        if recorded != value.to_int():
            recorded_hex = f"0x{recorded:0{value.SIZE * 2}x}"
            logger.error(
                "Golden mismatch for %s",
                name,
                extra={"constant": name, "recorded": recorded_hex, "computed": value},
            )
            mismatches.append(f"{name}: recorded {recorded_hex}, computed 0x{value.hex()}")

    pool_path = config.fixtures_path / SECRET_ENTROPY_FILE
    try:
        recorded_pool = EntropyPool.read(pool_path)
    except FileNotFoundError:
        raise FixtureError(f"missing fixture file: {pool_path}") from None
    except ValueError as exc:
        raise FixtureError(f"malformed entropy pool {pool_path}: {exc}") from exc
    if recorded_pool != EntropyPool.with_key(key):
        logger.error("Derived secret differs", extra={"path": pool_path, "key": key})
        mismatches.append(f"{SECRET_ENTROPY_FILE}: derived secret differs from {pool_path}")
    return mismatches


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xxhauth-fixtures",
        description="Generate or verify xxhauth golden fixtures.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a TOML configuration file ([xxhauth] table)",
    )
    parser.add_argument(
        "--fixtures-dir",
        type=Path,
        default=None,
        help="Override the fixture directory",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command", required=True)
    init = commands.add_parser("init", help="Write random data and key fixtures")
    init.add_argument("--data-size", type=int, default=DEFAULT_DATA_SIZE)
    init.add_argument("--key-size", type=int, default=DEFAULT_KEY_SIZE)
    init.add_argument("--force", action="store_true", help="Overwrite existing fixtures")
    commands.add_parser("generate", help="Record golden constants")
    commands.add_parser("verify", help="Check fixtures against the golden table")
    return parser


def _resolve_config(args: argparse.Namespace) -> RuntimeConfig:
    config = load_runtime_config(args.config)
    overrides: dict[str, object] = {}
    if args.fixtures_dir is not None:
        overrides["fixtures_dir"] = str(args.fixtures_dir)
    if args.debug:
        overrides["debug_logging"] = True
    return dataclasses.replace(config, **overrides) if overrides else config


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        config = _resolve_config(args)
    except (ValueError, msgspec.ValidationError) as exc:
        print(f"xxhauth-fixtures: invalid configuration: {exc}", file=sys.stderr)
        return 1
    configure_logging(config)

    try:
        require_primitive_integrity()
        if args.command == "init":
            init_fixtures(
                config,
                data_size=args.data_size,
                key_size=args.key_size,
                overwrite=args.force,
            )
        elif args.command == "generate":
            for name, value in generate_fixtures(config).items():
                print(format_constant(name, value))
        else:
            mismatches = verify_fixtures(config)
            if mismatches:
                return 1
            logger.info("All golden constants match in %s", config.fixtures_dir)
    except (FixtureError, PrimitiveIntegrityError) as exc:
        logger.critical("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
