#!/usr/bin/env python3
"""
Download the scenes used by the examples and tests.

Each archive is fetched into examples/src/scene_viewer/resources and
unpacked in place, overwriting whatever is already there.
"""

from __future__ import annotations

import argparse
import sys
import tarfile
import zipfile
from pathlib import Path
from urllib.parse import urlparse

import requests

from rend3_tools.shared import (
    BuildConfig,
    BuildError,
    BuildStep,
    get_logger,
    load_config,
    run_build_steps,
)

logger = get_logger("download_assets")

CHUNK_SIZE = 1024 * 1024

# Extraction filters only exist from 3.10.12, 3.11.4 and 3.12 onwards
TAR_EXTRACT_OPTIONS = {"filter": "data"} if hasattr(tarfile, "data_filter") else {}


def archive_name(url: str) -> str:
    """File name an asset URL is saved under."""
    name = Path(urlparse(url).path).name
    if not name:
        raise BuildError(f"Cannot derive a file name from {url}")
    return name


def download(url: str, destination: Path) -> Path:
    """Stream ``url`` to ``destination``.

    No retries and no timeout: a stalled transfer blocks until interrupted.
    """
    logger.info("$ curl %s -o %s", url, destination)
    try:
        with requests.get(url, stream=True) as response:
            response.raise_for_status()
            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
    except requests.RequestException as e:
        raise BuildError(f"Failed to download {url}: {e}") from e
    except OSError as e:
        raise BuildError(f"Failed to write {destination}: {e}") from e
    return destination


def extract(archive: Path, target_dir: Path) -> None:
    """Unpack a .tar or .zip archive into ``target_dir``."""
    try:
        if zipfile.is_zipfile(archive):
            logger.info("$ unzip %s -d %s", archive, target_dir)
            with zipfile.ZipFile(archive) as zf:
                zf.extractall(target_dir)
        elif tarfile.is_tarfile(archive):
            logger.info("$ tar xf %s -C %s", archive, target_dir)
            with tarfile.open(archive) as tf:
                tf.extractall(target_dir, **TAR_EXTRACT_OPTIONS)
        else:
            raise BuildError(f"Unsupported archive format: {archive}")
    except (tarfile.TarError, zipfile.BadZipFile, OSError) as e:
        raise BuildError(f"Failed to extract {archive}: {e}") from e


def fetch_asset(url: str, target_dir: Path) -> None:
    archive = download(url, target_dir / archive_name(url))
    extract(archive, target_dir)


def download_assets(config: BuildConfig) -> None:
    target_dir = config.path(config.asset_dir)
    target_dir.mkdir(parents=True, exist_ok=True)

    steps = [
        BuildStep(f"Fetch {archive_name(url)}", lambda url=url: fetch_asset(url, target_dir))
        for url in config.asset_urls
    ]
    run_build_steps(steps)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="download-assets",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.parse_args(sys.argv[1:] if argv is None else argv)
    download_assets(load_config())
