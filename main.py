#!/usr/bin/env python3
"""
wwtokens -- Fabricate Workware test credentials from the command line.

Prints tokens for manual debugging: open an activation or reset link in a
browser, paste an access token into an API client, or seed a refresh token.

Usage:
  python main.py activation --client ww7client --staff-member-id 9003 \\
      --email a@b.com --security-stamp 3A1B2C3D-4E5F-6A7B-8C9D-0E1F2A3B4C5D
  python main.py reset-password --client ww7client --staff-member-id 9003 \\
      --username a@b.com --security-stamp 3A1B2C3D-4E5F-6A7B-8C9D-0E1F2A3B4C5D
  python main.py access --client ww7client --staff-member-id 9100 --username u@x.com
  python main.py access ... --expiry-minutes -5
  python main.py refresh
  python main.py inspect <token>

Environment variables (or a .env file, see --env-file):
  JWT_ACTIVATION_KEY       Key for activation tokens
  JWT_RESET_PASSWORD_KEY   Key for reset-password tokens
  JWT_SECURITY_KEY         Key for access tokens
  CLIENT_URL_TEMPLATE      Client site root, default http://{client_identifier}.localhost
  TEST_ENVIRONMENT         Environment name shown in output, default Local
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from auth.entropy import RefreshTokenGenerator
from auth.issuer import TokenIssuer
from auth.tokens import read_claims, read_header
from core.config import Settings, load_settings
from core.errors import TokenHarnessError
from core.models import DEFAULT_EXPIRY_MINUTES, DEFAULT_LOCATION, TokenPurpose

logger = logging.getLogger("wwtokens.cli")

_RULE = "=" * 37


def _describe_validity(minutes: int) -> str:
    if minutes < 0:
        return f"expired {-minutes} minute(s) ago"
    if minutes >= 60 and minutes % 60 == 0:
        return f"{minutes // 60} hours"
    return f"{minutes} minutes"


def _print_link_token(title: str, staff_member_id: int, who_label: str, who: str, token: str, url: str, minutes: int):
    print(_RULE)
    print(title)
    print(_RULE)
    print()
    print(f"Staff Member ID: {staff_member_id}")
    print(f"{who_label}: {who}")
    print()
    print("Token:")
    print(token)
    print()
    print("URL:")
    print(url)
    print()
    print(f"Valid for: {_describe_validity(minutes)}")
    print(_RULE)


def _cmd_activation(args: argparse.Namespace, settings: Settings) -> None:
    minutes = _expiry(args, TokenPurpose.ACTIVATION)
    token = TokenIssuer.from_settings(settings).generate_activation_token(
        args.client, args.staff_member_id, args.email, args.security_stamp, expiry_minutes=minutes
    )
    url = f"{settings.client_url(args.client)}/activateaccount/{token}"
    _print_link_token("ACTIVATION TOKEN GENERATED", args.staff_member_id, "Email", args.email, token, url, minutes)


def _cmd_reset_password(args: argparse.Namespace, settings: Settings) -> None:
    minutes = _expiry(args, TokenPurpose.RESET_PASSWORD)
    token = TokenIssuer.from_settings(settings).generate_reset_password_token(
        args.client, args.staff_member_id, args.username, args.security_stamp, expiry_minutes=minutes
    )
    url = f"{settings.client_url(args.client)}/resetpassword/{token}"
    _print_link_token(
        "RESET PASSWORD TOKEN GENERATED", args.staff_member_id, "Username", args.username, token, url, minutes
    )


def _cmd_access(args: argparse.Namespace, settings: Settings) -> None:
    minutes = _expiry(args, TokenPurpose.ACCESS)
    token = TokenIssuer.from_settings(settings).generate_access_token(
        args.username,
        args.staff_member_id,
        args.client,
        location=args.location,
        session_validation_token=args.session_validation_token,
        expiry_minutes=minutes,
    )
    print(token)


def _cmd_refresh(args: argparse.Namespace, settings: Settings) -> None:
    # No key needed for a bare refresh token.
    print(RefreshTokenGenerator().generate())


def _cmd_inspect(args: argparse.Namespace, settings: Settings) -> None:
    print(json.dumps({"header": read_header(args.token), "claims": read_claims(args.token)}, indent=2))


def _expiry(args: argparse.Namespace, purpose: TokenPurpose) -> int:
    if args.expiry_minutes is not None:
        return args.expiry_minutes
    return DEFAULT_EXPIRY_MINUTES[purpose]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wwtokens",
        description="Fabricate Workware activation, reset-password, access and refresh tokens for testing.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py activation --client ww7client --staff-member-id 9003 --email a@b.com --security-stamp S1
  python main.py access --client ww7client --staff-member-id 9100 --username u@x.com --expiry-minutes -5
  python main.py refresh
  python main.py --env-file .env.staging reset-password --client ww7client --staff-member-id 9003 \\
      --username a@b.com --security-stamp S1
        """,
    )
    parser.add_argument(
        "--env-file",
        metavar="PATH",
        help="Read settings from this file instead of .env",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    def _add_identity(p: argparse.ArgumentParser) -> None:
        p.add_argument("--client", required=True, metavar="ID", help="Client identifier, e.g. ww7client")
        p.add_argument("--staff-member-id", required=True, type=int, metavar="N", help="Staff member ID")
        p.add_argument(
            "--expiry-minutes",
            type=int,
            default=None,
            metavar="N",
            help="Minutes until expiry; negative for an already-expired token",
        )

    p = sub.add_parser("activation", help="Account activation token and link")
    _add_identity(p)
    p.add_argument("--email", required=True, help="User's email address")
    p.add_argument("--security-stamp", required=True, metavar="STAMP", help="User's SecurityStamp from the database")
    p.set_defaults(handler=_cmd_activation)

    p = sub.add_parser("reset-password", help="Password reset token and link")
    _add_identity(p)
    p.add_argument("--username", required=True, help="User's username")
    p.add_argument("--security-stamp", required=True, metavar="STAMP", help="User's SecurityStamp from the database")
    p.set_defaults(handler=_cmd_reset_password)

    p = sub.add_parser("access", help="API access token")
    _add_identity(p)
    p.add_argument("--username", required=True, help="Username")
    p.add_argument("--location", default=DEFAULT_LOCATION, help=f"StaffMemberLocation (default: {DEFAULT_LOCATION})")
    p.add_argument(
        "--session-validation-token",
        default=None,
        metavar="VALUE",
        help="Reuse a session's SessionValidationToken (random UUID if omitted)",
    )
    p.set_defaults(handler=_cmd_access)

    p = sub.add_parser("refresh", help="Bare refresh token")
    p.set_defaults(handler=_cmd_refresh)

    p = sub.add_parser("inspect", help="Print a token's header and claims without verifying it")
    p.add_argument("token", help="Compact JWT")
    p.set_defaults(handler=_cmd_inspect)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        settings = load_settings(args.env_file)
        logger.debug("Loaded settings for environment %s", settings.test_environment)
        args.handler(args, settings)
    except TokenHarnessError as exc:
        print(f"  [!] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
