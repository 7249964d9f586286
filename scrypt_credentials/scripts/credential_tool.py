from __future__ import annotations

import argparse
import getpass
import json
import sys
from typing import Any, Sequence

from loguru import logger

from scrypt_credentials.core.config import ScryptPolicy, get_policy
from scrypt_credentials.core.credential_string import decode_credential
from scrypt_credentials.core.hashing import HashingError, hash_password
from scrypt_credentials.core.passwords import needs_rehash, verify_password


def _read_password(value: str | None, *, confirm: bool = False) -> str:
    if value is not None:
        return value
    if not sys.stdin.isatty():
        return sys.stdin.readline().rstrip("\r\n")
    password = getpass.getpass("Password: ")
    if confirm and getpass.getpass("Repeat password: ") != password:
        raise SystemExit("Passwords do not match.")
    return password


def _policy_from_args(args: argparse.Namespace) -> ScryptPolicy:
    base = get_policy()
    overrides = {
        key: getattr(args, key)
        for key in ("ln", "r", "p")
        if getattr(args, key, None) is not None
    }
    if not overrides:
        return base
    try:
        return ScryptPolicy(**{**base.model_dump(), **overrides})
    except ValueError as exc:
        raise SystemExit(f"Invalid scrypt parameters: {exc}") from exc


def _print_json(payload: Any, *, pretty: bool) -> None:
    if pretty:
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        print(json.dumps(payload))


def _cmd_hash(args: argparse.Namespace) -> int:
    policy = _policy_from_args(args)
    password = _read_password(args.password, confirm=True)
    if not password:
        raise SystemExit("Password cannot be empty.")
    try:
        print(hash_password(password, policy=policy))
    except HashingError as exc:
        raise SystemExit(f"Error hashing password: {exc}") from exc
    return 0


def _cmd_verify(args: argparse.Namespace) -> int:
    password = _read_password(args.password)
    ok = verify_password(password, args.credential)
    print("OK" if ok else "FAILED")
    return 0 if ok else 1


def _cmd_inspect(args: argparse.Namespace) -> int:
    params = decode_credential(args.credential)
    if params is None:
        raise SystemExit("Not a valid scrypt credential string.")
    _print_json(
        {
            "algorithm": "scrypt",
            "ln": params.ln,
            "n": params.n,
            "r": params.r,
            "p": params.p,
            "salt_bytes": len(params.salt_bytes),
            "key_bytes": len(params.hash_bytes),
        },
        pretty=args.pretty,
    )
    return 0


def _cmd_needs_rehash(args: argparse.Namespace) -> int:
    stale = needs_rehash(args.credential, _policy_from_args(args))
    print("yes" if stale else "no")
    return 1 if stale else 0


def _add_cost_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--ln", type=int, help="log2 of the scrypt cost factor N.")
    parser.add_argument("--r", type=int, help="scrypt block size.")
    parser.add_argument("--p", type=int, help="scrypt parallelization.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create, verify and inspect $scrypt$ credential strings.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    hash_cmd = sub.add_parser("hash", help="Hash a password with the current policy.")
    hash_cmd.add_argument("--password", help="Password to hash (prompted when omitted).")
    _add_cost_arguments(hash_cmd)
    hash_cmd.set_defaults(func=_cmd_hash)

    verify_cmd = sub.add_parser("verify", help="Check a password against a credential string.")
    verify_cmd.add_argument("credential")
    verify_cmd.add_argument("--password", help="Password to check (prompted when omitted).")
    verify_cmd.set_defaults(func=_cmd_verify)

    inspect_cmd = sub.add_parser("inspect", help="Show the parameters embedded in a credential.")
    inspect_cmd.add_argument("credential")
    inspect_cmd.add_argument("--pretty", action="store_true", help="Pretty-print JSON.")
    inspect_cmd.set_defaults(func=_cmd_inspect)

    rehash_cmd = sub.add_parser("needs-rehash", help="Compare a credential with the current policy.")
    rehash_cmd.add_argument("credential")
    _add_cost_arguments(rehash_cmd)
    rehash_cmd.set_defaults(func=_cmd_needs_rehash)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logger.debug(f"credential_tool command: {args.command}")
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
