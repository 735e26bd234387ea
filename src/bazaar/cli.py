import json
import sys

from bazaar.browser_config import BROWSER_ALIASES, BrowserConfig
from bazaar.config import HarnessConfig, WeatherApiConfig, settings
from bazaar.core.interactions import Interactions
from bazaar.errors import BazaarError, NavigationFailure
from bazaar.external.weather_api import WeatherApiClient, extract_weather, temperatures_match
from bazaar.infrastructure.browser_session import BrowserSession
from bazaar.logging_config import run_log_path, setup_logging
from bazaar.navigation import SiteNavigator
from bazaar.pages import HomePage, WeatherPage, YepyPage
from bazaar.prices import first_within_limit, is_sorted


def _build_configs(args):
    """Environment defaults overridden by global flags."""
    harness_config = HarnessConfig.from_env()
    if args.base_url:
        harness_config.base_url = args.base_url

    browser_config = BrowserConfig.from_env()
    if args.browser:
        browser_type, channel = BROWSER_ALIASES[args.browser]
        browser_config.browser_type = browser_type
        browser_config.channel = channel
        if browser_type != "chromium":
            browser_config.launch_args = []
    if args.headless:
        browser_config.headless = True

    return browser_config, harness_config


def print_json(payload: dict):
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _navigate(session: BrowserSession, harness_config: HarnessConfig) -> Interactions:
    interactions = Interactions.from_config(session.page, harness_config)
    SiteNavigator.from_config(session.page, harness_config, interactions).navigate()
    return interactions


def navigate_command(args):
    """Open the site, clear any challenge and print the navigation result."""
    browser_config, harness_config = _build_configs(args)

    try:
        with BrowserSession(browser_config, harness_config) as session:
            interactions = Interactions.from_config(session.page, harness_config)
            navigator = SiteNavigator.from_config(session.page, harness_config, interactions)
            result = navigator.navigate()
    except NavigationFailure as e:
        print(f"Error: {e}")
        if e.result is not None:
            print_json(e.result.to_dict())
        sys.exit(1)

    print_json(result.to_dict())


def resolve_sort(args) -> str:
    """
    Price order for a prices run.

    A max bound is checked against the highest price, so it implies "desc";
    a min bound implies "asc". An explicit --sort must agree with the bound.
    """
    implied = "desc" if args.max is not None else "asc"
    if args.sort is None:
        return implied
    bounded = args.max is not None or args.min is not None
    if bounded and args.sort != implied:
        flag = "--max" if args.max is not None else "--min"
        raise ValueError(f"{flag} requires --sort {implied}, got --sort {args.sort}")
    return args.sort


def prices_command(args):
    """Sort (and optionally filter) the refurbished phones listing, then verify prices."""
    try:
        sort = resolve_sort(args)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    ascending = sort == "asc"
    browser_config, harness_config = _build_configs(args)

    try:
        with BrowserSession(browser_config, harness_config) as session:
            interactions = _navigate(session, harness_config)

            home = HomePage(session.page, harness_config.base_url, interactions)
            home.click_yepy_link()
            home.wait_for_url_contains(HomePage.YEPY_PATH)

            yepy = YepyPage(session.page, interactions, currency=harness_config.currency)
            yepy.open_device_search()

            if args.max is not None:
                yepy.apply_price_filter(args.max, is_max=True)
            elif args.min is not None:
                yepy.apply_price_filter(args.min, is_max=False)

            yepy.apply_price_sorting(ascending)
            prices = yepy.get_all_prices()
            final_url = session.page.url
    except BazaarError as e:
        print(f"Error: {e}")
        sys.exit(1)

    report = {
        "url": final_url,
        "sort": sort,
        "prices": prices,
        "sorted": is_sorted(prices, ascending),
    }
    passed = report["sorted"]

    limit = args.max if args.max is not None else args.min
    if limit is not None:
        report["limit"] = limit
        report["first_within_limit"] = first_within_limit(prices, limit, args.max is not None)
        passed = passed and report["first_within_limit"]

    print_json(report)
    if not passed:
        sys.exit(1)


def weather_command(args):
    """Compare the API's current temperature with the one shown on the forecast page."""
    weather_config = WeatherApiConfig.from_env()
    if not weather_config.api_key:
        print("Error: Weather API key is required. Set WEATHER_API_KEY in .env file or environment variable")
        sys.exit(1)

    browser_config, harness_config = _build_configs(args)
    location_key = args.location or weather_config.location_key

    try:
        client = WeatherApiClient(weather_config.api_key, weather_config.base_url)
        observation = extract_weather(client.get_current_conditions(location_key))

        with BrowserSession(browser_config, harness_config) as session:
            interactions = Interactions.from_config(session.page, harness_config)
            ui_temperature = WeatherPage(session.page, interactions).open(observation.link).read_temperature()
    except BazaarError as e:
        print(f"Error: {e}")
        sys.exit(1)

    matched = ui_temperature is not None and temperatures_match(
        observation.temperature, ui_temperature, weather_config.temperature_tolerance
    )
    print_json({
        "location_key": location_key,
        "link": observation.link,
        "api_temperature": observation.temperature,
        "ui_temperature": ui_temperature,
        "tolerance": weather_config.temperature_tolerance,
        "match": matched,
    })
    if not matched:
        sys.exit(1)


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        description="Bazaar - Browser end-to-end checks for the classifieds site"
    )

    # Global flags (before subcommands)
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=settings.LOG_LEVEL.upper(),
        help="Set logging verbosity (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to file in addition to console (default: timestamped run log beside the screenshot directory)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run the browser without a window (challenges needing a human will time out)",
    )
    parser.add_argument(
        "--browser",
        choices=sorted(BROWSER_ALIASES),
        help="Browser to launch (default: BAZAAR_BROWSER or chromium)",
    )
    parser.add_argument(
        "--base-url",
        help="Site root to open (default: BAZAAR_BASE_URL)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    navigate_parser = subparsers.add_parser(
        "navigate", help="Open the site and wait out any anti-bot challenge."
    )
    navigate_parser.set_defaults(func=navigate_command)

    prices_parser = subparsers.add_parser(
        "prices", help="Verify price ordering on the refurbished phones listing."
    )
    prices_parser.add_argument(
        "--sort",
        choices=["asc", "desc"],
        help="Price order to apply and verify (default: desc with --max, otherwise asc)",
    )
    bounds = prices_parser.add_mutually_exclusive_group()
    bounds.add_argument(
        "--max",
        type=int,
        help="Apply a maximum price filter and check the first price against it",
    )
    bounds.add_argument(
        "--min",
        type=int,
        help="Apply a minimum price filter and check the first price against it",
    )
    prices_parser.set_defaults(func=prices_command)

    weather_parser = subparsers.add_parser(
        "weather", help="Compare API temperature with the forecast page."
    )
    weather_parser.add_argument(
        "--location",
        help="Location key (default: WEATHER_LOCATION_KEY or 349727)",
    )
    weather_parser.set_defaults(func=weather_command)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging based on flags
    log_file = getattr(args, 'log_file', None)
    if log_file is None and hasattr(args, "func"):
        log_file = run_log_path(HarnessConfig.from_env().screenshot_dir)
    setup_logging(
        level=args.log_level,
        log_file=log_file,
    )

    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
