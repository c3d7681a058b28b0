#!/usr/bin/env python3
"""Fetch the League of Legends item list for the latest patch."""
import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

import structlog

from gamerstation.adapters.ddragon import DataDragonClient, DataDragonError
from gamerstation.adapters.ddragon.client import DEFAULT_BASE_URL

logger = structlog.get_logger()


async def fetch_items(client: DataDragonClient, out_path: Path) -> int:
    """Write ``{version, ...item.json}`` to out_path and return the item count."""
    version = await client.get_latest_version()
    payload = await client.get_items(version)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(
        json.dumps({"version": version, **payload}, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )

    count = len(payload.get("data") or {})
    logger.info("Saved items", path=str(out_path), version=version, items=count)
    return count


async def run(out_path: Path, base_url: str) -> int:
    async with DataDragonClient(base_url=base_url) as client:
        try:
            await fetch_items(client, out_path)
        except (DataDragonError, OSError) as e:
            logger.error("fetch-lol-items failed", error=str(e))
            return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Fetch LoL items from Data Dragon")
    parser.add_argument("--out", type=Path, default=Path("data") / "lol" / "items.json")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    args = parser.parse_args(argv)

    sys.exit(asyncio.run(run(args.out, args.base_url)))


if __name__ == "__main__":
    main()
