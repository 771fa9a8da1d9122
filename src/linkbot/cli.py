"""Command-line interface for the link bot."""

import argparse
import asyncio
import logging
import os
import signal
import sys
from dataclasses import replace

from .bot import LinkBot
from .config import Config, load_config
from .providers import GoogleSearchProvider, YamlLinkProvider
from .transport import PubSubGateway


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Link bot - share named links in chat",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Use default config
  %(prog)s -c config.yaml           # Use specific config file
  %(prog)s -s ~/links.yaml          # Store links in a specific file
""",
    )

    parser.add_argument(
        "-c", "--config",
        metavar="FILE",
        help="Path to YAML configuration file",
    )

    parser.add_argument(
        "-s", "--store",
        metavar="FILE",
        help="YAML file holding the links",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args()


def apply_environment(config: Config) -> Config:
    """Fill search credentials from the environment when not configured."""
    return replace(
        config,
        search_api_key=config.search_api_key or os.environ.get("GOOGLE_SEARCH_API_KEY"),
        search_engine_id=config.search_engine_id or os.environ.get("GOOGLE_SEARCH_ID"),
    )


async def run(bot: LinkBot) -> None:
    """Run the bot until SIGINT or SIGTERM."""
    logger = logging.getLogger(__name__)
    loop = asyncio.get_running_loop()
    stop = asyncio.Event()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    await bot.start()
    logger.info("Bot running. Press Ctrl+C to stop.")
    try:
        await stop.wait()
        logger.info("Shutdown signal received")
    finally:
        await bot.stop()


def main() -> int:
    """Main entry point."""
    args = parse_args()
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)

    # Load configuration
    if args.config:
        try:
            config = load_config(args.config)
        except FileNotFoundError:
            logger.error(f"Config file not found: {args.config}")
            return 1
    else:
        config = Config()

    # Override config with command line arguments
    if args.store:
        config = replace(config, store_path=args.store)
    config = apply_environment(config)

    # Create components
    try:
        provider = YamlLinkProvider(config.get_store_path())
        search = None
        if config.search_enabled():
            search = GoogleSearchProvider(config.search_api_key, config.search_engine_id)
        else:
            logger.info("Search credentials not set, /google is disabled")
        bot = LinkBot(provider, PubSubGateway(), search=search, config=config)
    except Exception as e:
        logger.error(f"Failed to initialize bot: {e}")
        return 1

    logger.info(f"  Link store: {config.get_store_path()}")
    logger.info(f"  Links per page: {config.links_per_page}")

    try:
        asyncio.run(run(bot))
    except Exception as e:
        logger.error(f"Bot error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
