import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from .client import GeminiClient
from .config import ClientConfig, TrustPolicy
from .errors import GeminiError
from .navigator import Navigator
from .redirects import RedirectResolver, Resolution

EXIT_SUCCESS = 0
EXIT_NOT_SUCCESS = 1
EXIT_ERROR = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="geminipy", description="Fetch a page over the Gemini protocol.")

    parser.add_argument("url", help="The gemini:// URL to fetch.")

    parser.add_argument("--insecure", action="store_true",
                        help="Accept any server certificate (trust-on-first-use servers are usually self-signed).")
    parser.add_argument("--ca-file", type=str, default=None, help="CA bundle used to verify server certificates.")
    parser.add_argument("--max-redirects", type=int, default=5, help="Number of redirects to follow.")
    parser.add_argument("--timeout", type=float, default=30.0, help="Seconds allowed for each request.")
    parser.add_argument("--input", type=str, default=None, dest="input_value",
                        help="Answer to send if the server asks for input.")
    parser.add_argument("--raw", action="store_true", help="Write the body bytes as received.")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity.")

    args = parser.parse_args(argv)
    try:
        build_config(args)
    except ValidationError as e:
        parser.error("; ".join(_describe_error(error) for error in e.errors()))
    return args


def _describe_error(error: dict) -> str:
    option = "--" + "-".join(str(part) for part in error["loc"]).replace("_", "-")
    return f"argument {option}: {error['msg']}"


def build_config(args: argparse.Namespace) -> ClientConfig:
    return ClientConfig(
        trust_policy=TrustPolicy.ACCEPT_ANY if args.insecure else TrustPolicy.STRICT,
        ca_file=args.ca_file,
        max_redirects=args.max_redirects,
        timeout=args.timeout,
    )


async def run(args: argparse.Namespace) -> Resolution:
    client = GeminiClient(build_config(args))
    navigator = Navigator(RedirectResolver(client))

    resolution = await navigator.navigate(args.url)
    if navigator.pending_input is not None and args.input_value:
        resolution = await navigator.submit_input(args.input_value)
    return resolution


def write_resolution(resolution: Resolution, raw: bool = False) -> int:
    response = resolution.response
    print(f"{response.status_code} {response.meta}", file=sys.stderr)

    if resolution.final_url:
        print(f"URL: {resolution.final_url}", file=sys.stderr)

    if not response.is_success:
        print(response.describe(), file=sys.stderr)
        return EXIT_NOT_SUCCESS

    if response.body is None:
        print("(empty response)", file=sys.stderr)
    elif raw or response.body_text is None:
        sys.stdout.buffer.write(response.body)
        sys.stdout.buffer.flush()
    else:
        sys.stdout.write(response.body_text)

    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        resolution = asyncio.run(run(args))
    except GeminiError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except KeyboardInterrupt:
        print("Request cancelled", file=sys.stderr)
        return EXIT_ERROR

    return write_resolution(resolution, raw=args.raw)
