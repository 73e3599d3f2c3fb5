"""Application entrypoint for SmartTunnel."""

import argparse
import asyncio
import logging
from datetime import datetime

try:
    import uvloop
except ImportError:
    uvloop = None

from config import ConfigLoader
from constants import DEFAULT_STORE_FILE, __version__
from decision import DecisionEngine
from http_client import UrllibHttpClient
from json_utils import json_dumps
from logger import TunnelLogger
from probe import IntranetProbe, IPv6Probe
from redirect import BrowserNavigator, DryRunNavigator, RedirectExecutor
from state import AppState
from stats import DecisionStats
from storage import JsonFileStore, StoreError
from urls import hostname_of

INFO = "\033[92m[INFO]:\033[97m"
WARN = "\033[93m[WARN]:\033[97m"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smarttunnel",
        description="Pick the intranet or IPv6 mirror of a site depending on the current network",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--store", default=DEFAULT_STORE_FILE, help="Path to the JSON store holding the routing table")
    parser.add_argument("--domain-matching", default="loose", choices=["loose", "strict"], help="Domain matching mode")
    parser.add_argument("--log-access", required=False, help="Path to the decision log")
    parser.add_argument("--log-error", required=False, help="Path to log file for errors")
    parser.add_argument("--stats-file", required=False, help="Path to stats JSON file")
    parser.add_argument("--intranet-timeout", type=float, required=False, help="Intranet probe timeout in seconds")
    parser.add_argument("--ipv6-timeout", type=float, required=False, help="IPv6 probe timeout in seconds")
    parser.add_argument("--insecure", action="store_true", help="Do not verify TLS certificates of probe targets")
    parser.add_argument("-q", "--quiet", action="store_true", help="Remove UI output")

    sub = parser.add_subparsers(dest="command", required=True)
    route = sub.add_parser("route", help="Redirect the given page to its intranet or IPv6 site")
    route.add_argument("target", help="Host name or URL of the current page")
    route.add_argument("--dry-run", action="store_true", help="Print the target URL instead of opening it")
    sub.add_parser("detect", help="Report the network environment: intranet, ipv6 or none")
    add = sub.add_parser("add", help="Register a site in the routing table")
    add.add_argument("domain", help="Domain (or URL) of the site")
    add.add_argument("--ipv6-site", help="IPv6 site URL (default: https://ipv6.<domain>)")
    add.add_argument("--intranet-site", help="Intranet site URL (default: http://intranet.<domain>)")
    remove = sub.add_parser("remove", help="Remove every entry matching the given host")
    remove.add_argument("host", help="Host name or URL")
    sub.add_parser("list", help="Show the routing table")
    delete = sub.add_parser("delete", help="Delete an entry by its number in the list")
    delete.add_argument("index", type=int, help="1-based entry number")
    intranet = sub.add_parser("set-intranet-url", help="Configure the URL used to detect the intranet")
    intranet.add_argument("url", help="Intranet test URL")
    sub.add_parser("repair", help="Add a missing scheme to stored site URLs")
    return parser


def build_engine(config, state: AppState, logger, stats) -> DecisionEngine:
    http_client = UrllibHttpClient(verify_tls=config.verify_tls)
    return DecisionEngine(
        IntranetProbe(http_client, logger, stats),
        IPv6Probe(http_client, logger, stats),
        state.intranet_probe_config(config.intranet_timeout),
        state.ipv6_probe_config(config.ipv6_timeout),
        logger,
        stats,
    )


def report_stats(config, stats: DecisionStats, logger) -> None:
    logger.info(stats.get_stats_display())
    if not config.stats_file:
        return
    payload = stats.snapshot()
    payload["timestamp"] = datetime.now().isoformat()
    try:
        with open(config.stats_file, "w", encoding="utf-8") as f:
            f.write(json_dumps(payload))
    except OSError as e:
        logger.log_error(f"Cannot write stats file {config.stats_file}: {e}")


async def cmd_route(args, config, state: AppState, logger) -> int:
    host = hostname_of(args.target)
    stats = DecisionStats()
    logger.set_error_counter_callback(stats.increment_errors)
    engine = build_engine(config, state, logger, stats)
    result = await engine.route(state.table, host)
    navigator = DryRunNavigator() if config.dry_run else BrowserNavigator()
    if not RedirectExecutor(navigator, logger).execute(result):
        logger.info(f"{INFO} No redirect for {host}\033[0m")
    report_stats(config, stats, logger)
    return 0


async def cmd_detect(args, config, state: AppState, logger) -> int:
    stats = DecisionStats()
    logger.set_error_counter_callback(stats.increment_errors)
    environment = await build_engine(config, state, logger, stats).classify()
    print(environment)
    report_stats(config, stats, logger)
    return 0


async def cmd_add(args, config, state: AppState, logger) -> int:
    domain = hostname_of(args.domain) or args.domain
    entry = state.add_site(domain, args.ipv6_site, args.intranet_site)
    logger.info(f"{INFO} Site {entry.domain} added to the routing table\033[0m")
    logger.info(f"        IPv6: {entry.ipv6_site}")
    logger.info(f"        Intranet: {entry.intranet_site}")
    return 0


async def cmd_remove(args, config, state: AppState, logger) -> int:
    host = hostname_of(args.host) or args.host
    if state.remove_site(host):
        logger.info(f"{INFO} Site {host} removed from the routing table\033[0m")
    else:
        logger.info(f"{WARN} Site {host} is not in the routing table\033[0m")
    return 0


async def cmd_list(args, config, state: AppState, logger) -> int:
    print(f"Intranet test URL: {state.intranet_test_url}")
    if len(state.table) == 0:
        print("Routing table is empty")
        return 0
    for position, entry in enumerate(state.table, 1):
        print(f"{position}. {entry.domain}")
        print(f"   IPv6: {entry.ipv6_site}")
        print(f"   Intranet: {entry.intranet_site}")
    return 0


async def cmd_delete(args, config, state: AppState, logger) -> int:
    entry = state.delete_entry(args.index)
    logger.info(f"{INFO} Deleted {entry.domain}\033[0m")
    return 0


async def cmd_set_intranet_url(args, config, state: AppState, logger) -> int:
    url = state.set_intranet_test_url(args.url)
    logger.info(f"{INFO} Intranet test URL set to {url}\033[0m")
    return 0


async def cmd_repair(args, config, state: AppState, logger) -> int:
    fixed = state.repair_urls()
    logger.info(f"{INFO} URL repair finished, fixed {fixed} URL(s)\033[0m")
    return 0


COMMANDS = {
    "route": cmd_route,
    "detect": cmd_detect,
    "add": cmd_add,
    "remove": cmd_remove,
    "list": cmd_list,
    "delete": cmd_delete,
    "set-intranet-url": cmd_set_intranet_url,
    "repair": cmd_repair,
}


async def run(argv=None) -> int:
    logging.getLogger("asyncio").setLevel(logging.CRITICAL)
    args = build_parser().parse_args(argv)
    config = ConfigLoader.load_from_args(args)
    logger = TunnelLogger(config.log_access_file, config.log_error_file, config.quiet)
    try:
        state = AppState(JsonFileStore(config.store_file), config.domain_matching, logger).load()
        return await COMMANDS[args.command](args, config, state, logger)
    except (StoreError, IndexError, ValueError) as e:
        logger.log_error(str(e))
        logger.error(f"\033[91m[ERROR]: {e}\033[0m")
        return 1
    finally:
        logger.close()


def main() -> None:
    runner = uvloop.run if uvloop is not None else asyncio.run
    try:
        code = runner(run())
    except KeyboardInterrupt:
        code = 130
    raise SystemExit(code)
