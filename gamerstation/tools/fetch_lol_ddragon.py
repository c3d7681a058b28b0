#!/usr/bin/env python3
"""
Fetch League of Legends champion data from Data Dragon.

Writes version.json, champions_index.json and champions_full.json into the
output directory (data/lol by default). Exits non-zero on any fetch failure.
"""
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

PROGRESS_EVERY = 10


def write_json(path: Path, payload) -> None:
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


async def fetch_champions(client: DataDragonClient, out_dir: Path) -> Path:
    """Download the champion index and every champion's details.

    Returns:
        Path of the written champions_full.json
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    version = await client.get_latest_version()
    logger.info("Using patch", version=version)

    champions = await client.get_champion_index(version)
    logger.info("Champions in index", count=len(champions))

    full = []
    for i, champion in enumerate(champions, start=1):
        if i % PROGRESS_EVERY == 0:
            logger.info("Fetching champion details", done=i, total=len(champions))
        full.append(await client.get_champion_detail(version, champion["id"]))

    write_json(out_dir / "version.json", {"version": version})
    write_json(out_dir / "champions_index.json", {"version": version, "champions": champions})
    full_path = out_dir / "champions_full.json"
    write_json(full_path, {"version": version, "champions": full})

    logger.info(
        "Saved champion data",
        out_dir=str(out_dir),
        full_size_bytes=full_path.stat().st_size,
    )
    return full_path


async def run(out_dir: Path, base_url: str) -> int:
    async with DataDragonClient(base_url=base_url) as client:
        try:
            await fetch_champions(client, out_dir)
        except (DataDragonError, OSError) as e:
            logger.error("Champion fetch failed", error=str(e))
            return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Fetch LoL champion data from Data Dragon")
    parser.add_argument("--out-dir", type=Path, default=Path("data") / "lol")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    args = parser.parse_args(argv)

    sys.exit(asyncio.run(run(args.out_dir, args.base_url)))


if __name__ == "__main__":
    main()
