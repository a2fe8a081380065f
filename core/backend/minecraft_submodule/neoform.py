"""
NeoForm Version Lookup

Finds the newest NeoForm release for a Minecraft version from the NeoForged
maven index, caching the answer on disk.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import requests

from .config import HTTP_TIMEOUT, NEOFORM_CACHE_DIR, NEOFORM_INDEX_URL
from .errors import VersionIndexError

logger = logging.getLogger(__name__)

NEOFORM_VERSION_PATTERN = re.compile(r'^(?P<mc>[a-z0-9.\-]+)-(?P<date>\d+)\.(?P<time>\d+)$')


@dataclass(frozen=True)
class NeoFormVersion:
    minecraft: str
    date: int
    time: int
    raw: str = field(default="", compare=False)

    @classmethod
    def parse(cls, version: str) -> Optional["NeoFormVersion"]:
        match = NEOFORM_VERSION_PATTERN.match(version)
        if not match:
            return None
        return cls(match.group("mc"), int(match.group("date")), int(match.group("time")), raw=version)

    @property
    def sort_key(self):
        return self.date, self.time

    def __str__(self):
        # raw keeps the zero padding of the index entry
        return self.raw or f"{self.minecraft}-{self.date}.{self.time}"


class NeoFormIndexClient:
    """Client for the NeoForged maven version API"""

    def __init__(self, index_url: str = NEOFORM_INDEX_URL, timeout: int = HTTP_TIMEOUT):
        self.index_url = index_url
        self.timeout = timeout

    def fetch_versions(self) -> Dict[str, List[NeoFormVersion]]:
        """
        Download the index and group its versions by Minecraft version

        Returns:
            Dict of {minecraft_version: [NeoFormVersion]}

        Raises:
            requests.RequestException: The index could not be downloaded
            ValueError: The index is not the expected JSON
        """
        logger.info(f"Downloading NeoForm index: {self.index_url}")

        response = requests.get(self.index_url, timeout=self.timeout)
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict) or not isinstance(data.get("versions"), list):
            raise ValueError("NeoForm index has no 'versions' array")

        versions: Dict[str, List[NeoFormVersion]] = {}
        for entry in data["versions"]:
            version = NeoFormVersion.parse(str(entry))
            if version is None:
                logger.debug(f"Skipping unrecognized NeoForm version: {entry}")
                continue
            versions.setdefault(version.minecraft, []).append(version)

        return versions


def _read_cache(cache_file: Path) -> Optional[str]:
    try:
        if cache_file.exists():
            version = cache_file.read_text(encoding="utf-8").strip()
            if version:
                return version
    except OSError as e:
        logger.warning(f"Unable to read NeoForm cache {cache_file}: {e}")
    return None


def resolve_neoform_version(minecraft_version: str, cache_dir: Path = NEOFORM_CACHE_DIR,
                            client: Optional[NeoFormIndexClient] = None) -> str:
    """
    Get the newest NeoForm version for a Minecraft version

    Args:
        minecraft_version: Minecraft version (e.g. "1.21.1")
        cache_dir: Directory holding one "<minecraft_version>.txt" per lookup
        client: Index client (default: the public NeoForged maven)

    Returns:
        NeoForm version string (e.g. "1.21.1-20240808.144430")

    Raises:
        VersionIndexError: The index could not be read or has no entry for
            this Minecraft version
    """
    cache_file = Path(cache_dir) / f"{minecraft_version}.txt"

    cached = _read_cache(cache_file)
    if cached:
        logger.info(f"Found cached NeoForm version: {cached}")
        logger.info(f"If any error occurs, try deleting '{cache_file}'")
        return cached

    logger.info("Unable to read cached NeoForm version, downloading index...")
    client = client or NeoFormIndexClient()

    try:
        versions = client.fetch_versions()
    except (requests.RequestException, ValueError) as e:
        logger.error(f"Failed to download NeoForm index: {e}")
        raise VersionIndexError(
            f"Error getting neoform version for minecraft {minecraft_version}"
        ) from e

    candidates = versions.get(minecraft_version)
    if not candidates:
        raise VersionIndexError(
            f"NeoForm does not exist for the minecraft version '{minecraft_version}'"
        )

    latest = str(max(candidates, key=lambda v: v.sort_key))
    logger.info(f"Using re-indexed NeoForm version: {latest}")

    try:
        cache_file.parent.mkdir(parents=True, exist_ok=True)
        cache_file.write_text(latest, encoding="utf-8")
    except OSError as e:
        logger.warning(f"Unable to cache NeoForm version in {cache_file}: {e}")

    return latest
