#!/usr/bin/env python
"""Push the local inventory cache to a remote table store.

This script:
1. Saves the remote credentials into the local store (like the settings screen)
2. Upserts every cached product and category into the remote tables

Usage:
    # Connect and sync using the default local storage file
    python scripts/sync_local_to_cloud.py --url https://xyz.supabase.co --key <anon-key>

    # Use a specific local storage file
    python scripts/sync_local_to_cloud.py --storage ./local_storage/sms_storage.json \
        --url https://xyz.supabase.co --key <anon-key>

    # Show what is cached locally without connecting
    python scripts/sync_local_to_cloud.py --dry-run
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from stock_manager.config import settings
from stock_manager.infra.local_store import LocalStore
from stock_manager.infra.logging import get_logger, setup_logging
from stock_manager.services.gateway import PersistenceGateway

setup_logging()
logger = get_logger(__name__)


async def run(storage_path: str, url: str | None, key: str | None, dry_run: bool) -> int:
    gateway = PersistenceGateway(LocalStore(storage_path))
    try:
        if dry_run:
            products = await gateway.get_products()
            categories = await gateway.get_categories()
            print(f"Local cache: {storage_path}")
            print(f"  products:   {len(products)}")
            print(f"  categories: {len(categories)}")
            print(f"  connected:  {gateway.is_connected()}")
            return 0

        if url and key:
            await gateway.save_credentials(url, key)

        if not gateway.is_connected():
            print("No remote connection. Pass --url and --key with valid credentials.")
            return 1

        result = await gateway.sync_local_to_cloud()
        print(f"Products synced:   {result.products_synced}")
        print(f"Categories synced: {result.categories_synced}")
        for error in result.errors:
            print(f"  error: {error}")
        return 0 if result.success else 2
    finally:
        await gateway.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Sync the local inventory cache to a remote store")
    parser.add_argument(
        "--storage",
        default=settings.local_storage_path,
        help=f"Local storage file (default: {settings.local_storage_path})",
    )
    parser.add_argument("--url", help="Remote project URL")
    parser.add_argument("--key", help="Remote access key")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only report the local cache contents",
    )
    args = parser.parse_args()

    if bool(args.url) != bool(args.key):
        parser.error("--url and --key must be given together")

    sys.exit(asyncio.run(run(args.storage, args.url, args.key, args.dry_run)))


if __name__ == "__main__":
    main()
