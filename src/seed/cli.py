"""CLI for loading a seed data set into a running registry."""

import argparse
import asyncio
import sys
from pathlib import Path

import httpx

from src.client.registry_client import RegistryClient
from src.seed.loader import RegistrySeeder
from src.seed.schema import get_default_data_path, load_data_set


async def run_seed(args: argparse.Namespace) -> int:
    """
    Run the seeding.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    data_path = Path(args.data) if args.data else get_default_data_path()

    if not data_path.exists():
        print(f"Error: Data file not found: {data_path}")
        return 1

    data = load_data_set(data_path)

    print("Animal Registry seeder")
    print(f"   API URL: {args.url}")
    print(f"   Data file: {data_path}")
    print(f"   Owners: {len(data.owners)}, Animals: {len(data.animals)}")
    print()

    async with RegistryClient(base_url=args.url, api_prefix=args.api_prefix) as client:
        try:
            summary = await RegistrySeeder(client).seed(data)
        except httpx.HTTPStatusError as e:
            print(f"\nSeeding failed: {e.response.status_code} {e.response.text}")
            return 1
        except (httpx.HTTPError, ValueError) as e:
            print(f"\nSeeding failed with error: {e}")
            if args.debug:
                import traceback
                traceback.print_exc()
            return 1

    print("Seeding completed successfully!")
    print(f"   Owners created: {summary.owners_created}")
    print(f"   Animals created: {summary.animals_created}")
    print(f"   Owners assigned: {summary.assignments}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="Load owners and animals into an Animal Registry API instance",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Load the bundled sample data
  python -m src.seed --url http://localhost:8000

  # Load a custom data file
  python -m src.seed --url http://localhost:8000 --data my_registry.json
        """,
    )

    parser.add_argument(
        "--url",
        required=True,
        help="Base URL of the registry API (e.g., http://localhost:8000)",
    )

    parser.add_argument(
        "--data",
        help="Path to the data set JSON file (default: bundled sample_registry.json)",
    )

    parser.add_argument(
        "--api-prefix",
        default="/api/v1",
        help="Path prefix of the API routers (default: /api/v1)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with full stack traces",
    )

    return parser


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()
    return asyncio.run(run_seed(args))


if __name__ == "__main__":
    sys.exit(main())
