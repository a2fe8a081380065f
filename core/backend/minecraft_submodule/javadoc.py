"""
Javadoc Links

Assembles the external javadoc links for a module and drops the ones that
cannot be reached.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

import requests

from .config import BASE_JAVADOC_LINKS, HTTP_TIMEOUT, KNEELAWK_JAVADOC
from .platforms import Platform
from .resources import expand_tokens
from .settings import BuildSettings

logger = logging.getLogger(__name__)


def javadoc_source(minecraft_version: str) -> str:
    """
    Which toolchain's decompiled javadoc exists for a Minecraft version

    Versions before 1.21.2 were published from loom, later ones from moddev.
    Point releases below .2 of any later line still come from loom.
    """
    pieces = minecraft_version.split(".")
    major = int(pieces[1]) if len(pieces) > 1 and pieces[1].isdigit() else None
    minor = int(pieces[2]) if len(pieces) > 2 and pieces[2].isdigit() else None

    if major is not None:
        if major < 21:
            return "loom"
        if major == 21 and minor is None:
            return "loom"
        if minor is not None and minor < 2:
            return "loom"

    return "moddev"


def minecraft_links(settings: BuildSettings) -> List[str]:
    minecraft_version = settings.require("minecraft_version")
    mappings_type = (settings.get("mappings_type") or "mojmap").lower()

    if mappings_type == "yarn":
        yarn_version = settings.require("yarn_version")
        return [f"https://maven.fabricmc.net/docs/yarn-{minecraft_version}+build.{yarn_version}/"]

    if mappings_type != "mojmap":
        return []

    parchment = f"parchment.{settings.require('parchment_mc_version')}-{settings.require('parchment_version')}"
    build = settings.get("javadoc_build", "1")
    source = settings.get("javadoc_source") or javadoc_source(minecraft_version)

    if source == "moddev":
        if settings.platform is Platform.NEOFORGE:
            neoforge_version = settings.require("neoforge_version")
            return [f"{KNEELAWK_JAVADOC}/javadoc-mc-mojmap-neoforge-moddev/"
                    f"{neoforge_version}+{parchment}-build.{build}/raw/"]
        return [f"{KNEELAWK_JAVADOC}/javadoc-mc-mojmap-vanilla-moddev/"
                f"{minecraft_version}+{parchment}-build.{build}/raw/"]

    return [f"{KNEELAWK_JAVADOC}/javadoc-mc-mojmap-vanilla-loom/"
            f"{minecraft_version}+{parchment}-build.{build}/raw/"]


def read_links_file(path: Path, properties: dict) -> List[str]:
    """Read one link per line, expanding ${...} tokens; a missing file yields no links"""
    if not path.exists():
        return []
    text = expand_tokens(path.read_text(encoding="utf-8"), properties)
    return [line.strip() for line in text.splitlines() if line.strip()]


def collect_javadoc_links(settings: BuildSettings, loaded_links: Iterable[str] = ()) -> List[str]:
    jb_version = settings.get("jetbrains_annotations_version", "24.0.0")
    links = list(BASE_JAVADOC_LINKS)
    links += minecraft_links(settings)
    links.append(f"https://javadoc.io/doc/org.jetbrains/annotations/{jb_version}/")
    links += [link for link in loaded_links if link]
    return links


def check_link(url: str, timeout: int = HTTP_TIMEOUT) -> bool:
    try:
        response = requests.get(url, timeout=timeout, allow_redirects=True)
        response.raise_for_status()
        return bool(response.text)
    except requests.RequestException as e:
        logger.debug(f"Link check failed for {url}: {e}")
        return False


def filter_connectable(links: Iterable[str], timeout: Optional[int] = None) -> List[str]:
    """
    Keep the links that serve an element-list or package-list

    Args:
        links: Javadoc base URLs
        timeout: Per-request timeout in seconds

    Returns:
        Reachable links, in their original order
    """
    timeout = timeout or HTTP_TIMEOUT
    reachable = []
    for link in links:
        base = link if link.endswith("/") else f"{link}/"
        if check_link(f"{base}element-list", timeout) or check_link(f"{base}package-list", timeout):
            reachable.append(link)
        else:
            logger.warning(f"Skipping ({link}) due to connection errors")
    return reachable
