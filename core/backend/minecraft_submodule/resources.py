"""
Resource Processing

Copies a module's resources into its output directory, expanding ${...}
tokens in mod metadata and mixin configs.
"""

import logging
import re
import shutil
from pathlib import Path
from typing import Iterable, List, Mapping, Optional

from .config import EXCLUDED_RESOURCE_SUFFIXES, METADATA_FILES
from .errors import ConfigurationError
from .platforms import Platform

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r'\$\{([A-Za-z_][A-Za-z0-9_.]*)\}')
MIXIN_CONFIG_SUFFIX = ".mixins.json"


def expand_tokens(text: str, properties: Mapping[str, object]) -> str:
    """
    Replace ${name} tokens with property values

    Raises:
        ConfigurationError: A token names an unknown property
    """
    def replacer(match):
        name = match.group(1)
        if name not in properties:
            raise ConfigurationError(f"Unknown property '${{{name}}}' in resource")
        return str(properties[name])

    return TOKEN_PATTERN.sub(replacer, text)


def strip_refmap_lines(text: str) -> str:
    """Blank out every line mentioning refmap; NeoForge has no refmaps"""
    return "".join(
        ("\n" if line.endswith("\n") else "") if "refmap" in line else line
        for line in text.splitlines(keepends=True)
    )


def _is_mixin_config(relative: str) -> bool:
    return "/" not in relative and relative.endswith(MIXIN_CONFIG_SUFFIX)


def process_resources(source_dirs: Iterable[Path], output_dir: Path,
                      properties: Mapping[str, object], platform: Platform,
                      refmap: Optional[str] = None,
                      extra_metadata_files: Iterable[str] = ()) -> List[str]:
    """
    Copy and filter resources for one module

    Args:
        source_dirs: Resource roots; the module's own first, then the shared
            module's. The first root providing a file wins.
        output_dir: Destination directory
        properties: Values for ${...} tokens in metadata files
        platform: Platform of the module being processed
        refmap: Refmap name substituted into mixin configs
        extra_metadata_files: Further relative paths to expand

    Returns:
        Relative paths written, sorted
    """
    metadata_files = set(METADATA_FILES) | set(extra_metadata_files)
    output_dir = Path(output_dir)
    written = {}

    for source_dir in source_dirs:
        source_dir = Path(source_dir)
        if not source_dir.is_dir():
            logger.debug(f"Resource directory {source_dir} does not exist, skipping")
            continue

        for path in sorted(p for p in source_dir.rglob("*") if p.is_file()):
            relative = path.relative_to(source_dir).as_posix()

            if path.name.endswith(EXCLUDED_RESOURCE_SUFFIXES):
                continue
            if platform is Platform.NEOFORGE and relative == "fabric.mod.json":
                continue
            if relative in written:
                logger.debug(f"{relative} already provided by {written[relative]}")
                continue

            target = output_dir / relative
            target.parent.mkdir(parents=True, exist_ok=True)

            if relative in metadata_files:
                text = path.read_text(encoding="utf-8")
                target.write_text(expand_tokens(text, properties), encoding="utf-8")
            elif _is_mixin_config(relative):
                text = path.read_text(encoding="utf-8")
                if platform is Platform.NEOFORGE:
                    text = strip_refmap_lines(text)
                elif refmap is not None:
                    text = expand_tokens(text, {"refmap": refmap})
                target.write_text(text, encoding="utf-8")
            else:
                shutil.copyfile(path, target)

            written[relative] = source_dir

    logger.info(f"Processed {len(written)} resource(s) into {output_dir}")
    return sorted(written)
