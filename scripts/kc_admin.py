"""Command-line access to the Keycloak Admin API.

This module serves as a CLI wrapper around keycloak_api_manager: it opens an
admin session from KEYCLOAK_* environment variables, runs one command and
stops the session.

Examples:
    python scripts/kc_admin.py token
    python scripts/kc_admin.py --target-realm demo call users find --param username=alice
    python scripts/kc_admin.py call groups create --payload '{"name": "ops"}'
    python scripts/kc_admin.py auth --field grant_type=password --field username=alice --field password=s3cret
"""
from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from keycloak_api_manager.config import load_settings
from keycloak_api_manager.core.keycloak import HANDLER_REGISTRY, KeycloakManager
from keycloak_api_manager.core.keycloak.exceptions import KeycloakAPIError, KeycloakError


def _pairs(values: Optional[List[str]], parser: argparse.ArgumentParser, flag: str) -> Dict[str, str]:
    result: Dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            parser.error(f"{flag} expects key=value, got {item!r}")
        result[key] = value
    return result


def _print_json(value: Any) -> None:
    if isinstance(value, bytes):
        sys.stdout.buffer.write(value)
        return
    print(json.dumps(value, indent=2, sort_keys=True, default=str))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Keycloak Admin API helper")
    parser.add_argument("--kc-url", help="Overrides KEYCLOAK_URL")
    parser.add_argument("--auth-realm", help="Realm to authenticate against (overrides KEYCLOAK_REALM)")
    parser.add_argument("--client-id", help="Overrides KEYCLOAK_CLIENT_ID")
    parser.add_argument("--target-realm", help="Realm used as call context after login")
    parser.add_argument("-v", "--verbose", action="store_true")

    sub = parser.add_subparsers(dest="cmd")

    sub.add_parser("token", help="Print the admin token pair")

    sa = sub.add_parser("auth", help="Request a token from the target realm's token endpoint")
    sa.add_argument("--field", action="append", metavar="KEY=VALUE", help="Form field (repeatable)")

    sc = sub.add_parser("call", help="Run one handler operation")
    sc.add_argument("handler", choices=sorted(HANDLER_REGISTRY))
    sc.add_argument("operation")
    sc.add_argument("--param", action="append", metavar="KEY=VALUE", help="Path or query parameter (repeatable)")
    sc.add_argument("--payload", help="JSON request body")

    so = sub.add_parser("operations", help="List the declared operations of a handler")
    so.add_argument("handler", choices=sorted(HANDLER_REGISTRY))
    return parser


def main(argv: Optional[List[str]] = None, manager: Optional[KeycloakManager] = None) -> int:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if not args.cmd:
        parser.print_help()
        return 0

    if args.cmd == "operations":
        for name, endpoint in sorted(HANDLER_REGISTRY[args.handler].operations().items()):
            print(f"{name:45} {endpoint.method:6} {endpoint.path or '/'}")
        return 0

    payload = None
    if args.cmd == "call" and args.payload is not None:
        try:
            payload = json.loads(args.payload)
        except ValueError:
            parser.error("--payload must be valid JSON")
    params = _pairs(getattr(args, "param", None), parser, "--param")
    fields = _pairs(getattr(args, "field", None), parser, "--field")

    settings = load_settings()
    if args.kc_url:
        settings.keycloak_url = args.kc_url
    if args.auth_realm:
        settings.keycloak_realm = args.auth_realm
    if args.client_id:
        settings.client_id = args.client_id

    manager = manager or KeycloakManager()
    try:
        manager.configure(settings.to_credentials())
        if args.target_realm:
            manager.set_config(realm_name=args.target_realm)

        if args.cmd == "token":
            _print_json(manager.get_token()._asdict())
        elif args.cmd == "auth":
            _print_json(manager.auth(fields))
        elif args.cmd == "call":
            handler = manager.handler(args.handler)
            operation = getattr(handler, args.operation, None)
            if args.operation.startswith("_") or not callable(operation):
                parser.error(f"{args.handler} has no operation '{args.operation}'")
            if payload is None:
                result = operation(params)
            else:
                result = operation(params, payload)
            _print_json(result)
    except KeycloakAPIError as e:
        print(f"[{args.cmd}] Error: HTTP {e.status_code} {e}", file=sys.stderr)
        return 1
    except KeycloakError as e:
        print(f"[{args.cmd}] Error: {e}", file=sys.stderr)
        return 1
    finally:
        manager.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
