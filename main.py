#!/usr/bin/env python3
"""
Command line entry point for the bean store client

Runs storefront flows against a configured backend from the terminal:
configuration checks, catalog browsing, cart inspection and postal code
lookup.
"""

import argparse
import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from beanstore.application.dtos.cart_dtos import AddToCartRequest
from beanstore.container import Container
from beanstore.domain.entities.session_entity import AuthSession
from beanstore.infrastructure.configuration import get_config, validate_production_readiness
from beanstore.infrastructure.logging import ProductionLogger, get_performance_metrics
from beanstore.infrastructure.utilities.exceptions import ErrorReporter

ACCESS_TOKEN_ENV = "BEANSTORE_ACCESS_TOKEN"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="beanstore", description="Bean store client")
    parser.add_argument("--no-log-files", action="store_true", help="Log to the console only")
    parser.add_argument(
        "--token",
        default=os.getenv(ACCESS_TOKEN_ENV),
        help=f"Access token for signed-in commands (default: ${ACCESS_TOKEN_ENV})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check-config", help="Validate the configuration")
    check.add_argument("--connectivity", action="store_true", help="Also ping the backend")

    sub.add_parser("beans", help="List the catalog")

    bean = sub.add_parser("bean", help="Show one bean")
    bean.add_argument("bean_id", type=int)

    sub.add_parser("my-beans", help="List your registered beans")

    sub.add_parser("cart", help="Show your cart")

    add = sub.add_parser("add", help="Add a bean to your cart")
    add.add_argument("bean_id", type=int)
    add.add_argument("--quantity", type=int, default=1)

    postal = sub.add_parser("postal", help="Look up an address by postal code")
    postal.add_argument("code")

    sub.add_parser("login-link", help="Mail a sign-in link").add_argument("email")
    return parser


async def restore_session(container: Container, token: str) -> bool:
    if not token:
        print("❌ An access token is required for this command")
        return False
    session = await container.get_session_manager().initialize(AuthSession(access_token=token))
    if session is None:
        print("❌ The access token was rejected")
        return False
    return True


async def run_command(args: argparse.Namespace) -> int:
    container = Container(get_config())
    try:
        if args.command == "beans":
            response = await container.create_catalog().list_beans()
            if not response.success:
                print(f"❌ {response.error_message}")
                return 1
            for bean in response.beans:
                print(f"{bean.id:>5}  {bean.name}")
            return 0

        if args.command == "bean":
            response = await container.create_catalog().get_bean(args.bean_id)
            if not response.success:
                print(f"❌ {response.error_message}")
                return 1
            bean = response.bean
            print(f"{bean.name} ({bean.origin})")
            print(f"  ¥{bean.price:,}  {bean.process} / {bean.roast_profile}")
            return 0

        if args.command == "postal":
            profile_editor = container.create_profile_editor()
            await profile_editor.change_post_code(args.code)
            post_code = profile_editor.post_code
            print(f"{post_code.value}: {post_code.prefecture}{post_code.city or ''}")
            return 0 if post_code.prefecture else 1

        if args.command == "login-link":
            response = await container.create_login().send_login_link(args.email)
            print(("✅ " + response.message) if response.success else ("❌ " + response.error_message))
            return 0 if response.success else 1

        if not await restore_session(container, args.token):
            return 1

        if args.command == "my-beans":
            response = await container.create_catalog().list_my_beans()
            if not response.success:
                print(f"❌ {response.error_message}")
                return 1
            for bean in response.beans:
                print(f"{bean.id:>5}  {bean.name}  ¥{bean.price:,}")
            return 0

        if args.command == "add":
            catalog = container.create_catalog()
            response = await catalog.add_to_cart(
                AddToCartRequest(bean_id=args.bean_id, quantity=args.quantity)
            )
            notification = container.get_notifier().last
            if notification:
                print(f"[{notification.title}] {notification.message}")
            return 0 if response.success else 1

        if args.command == "cart":
            async with container.create_cart_store() as cart:
                if cart.error_message:
                    print(f"❌ {cart.error_message}")
                    return 1
                summary = cart.summary()
                for line in summary.items:
                    print(f"{line.name:<30} {line.quantity:>3} x ¥{line.unit_price:,} = ¥{line.line_total:,}")
                print(f"合計: ¥{summary.total:,}")
            return 0
    finally:
        await container.aclose()

    return 2


def main() -> int:
    """Main entry point"""
    args = build_parser().parse_args()
    ProductionLogger.setup_logging(log_to_files=not args.no_log_files)
    logger = logging.getLogger(__name__)

    if args.command == "check-config":
        return 0 if validate_production_readiness(check_connectivity=args.connectivity) else 1

    try:
        code = asyncio.run(run_command(args))
    except KeyboardInterrupt:
        print("\n🛑 Stopped by user")
        return 130
    except Exception as e:  # pylint: disable=broad-exception-caught
        logger.error("Command %s failed", args.command)
        ErrorReporter.report_critical_error(e)
        return 1

    logger.debug("Request metrics: %s", get_performance_metrics())
    return code


if __name__ == "__main__":
    sys.exit(main())
