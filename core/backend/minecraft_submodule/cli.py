"""
Command-Line Interface

Entry point for the minecraft-submodule CLI tool.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from . import __version__
from .build import configure_build, module_directory, process_module_resources
from .config import JAVADOC_LINKS_FILE, LOG_DIR, NEOFORM_CACHE_DIR, OUTPUT_DIR
from .config_loader import load_config, validate_config
from .errors import SubmoduleError
from .javadoc import collect_javadoc_links, filter_connectable, read_links_file
from .module import PlatformModule
from .neoform import resolve_neoform_version

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, log_dir: Optional[Path] = LOG_DIR):
    """Configure logging for CLI"""
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"minecraft-submodule-{datetime.now().strftime('%Y%m%d%H%M%S')}.log"
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


def render_module(module: PlatformModule) -> str:
    """Render a configured module as a Gradle Kotlin DSL fragment"""
    lines = [f"// {module.path} ({module.platform.value})"]
    if module.connected_to:
        lines.append(f"// connected to {module.connected_to}")
    for mod_id, paths in module.mod_units.items():
        lines.append(f"// mod '{mod_id}': {', '.join(paths)}")
    for name, url in module.repositories:
        lines.append(f'repositories {{ maven("{url}") {{ name = "{name}" }} }}')
    return "\n".join(lines) + "\n" + module.emitter.render()


def run_configure(config: dict, output: Optional[Path], dry_run: bool,
                  resources: bool = False) -> int:
    """
    Configure every module and emit its dependency block

    Args:
        config: Validated build description
        output: Directory for the generated fragments
        dry_run: Print fragments instead of writing them
        resources: Also process each module's resources

    Returns:
        Exit code (0 = success)
    """
    logger.info("Minecraft Submodule")
    logger.info("=" * 70)
    logger.info(f"Version: {__version__}")
    logger.info(f"Mode: {'DRY RUN' if dry_run else 'LIVE'}")
    logger.info("")

    modules = configure_build(config)
    root = Path(config.get("root") or ".")
    out = output or (root / OUTPUT_DIR)

    for module in modules:
        fragment = render_module(module)
        if dry_run:
            print("=" * 60)
            print(f"{module.path}")
            print("=" * 60)
            print(fragment)
            continue

        target = out / module_directory(module.path) / "dependencies.gradle.kts"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(fragment, encoding="utf-8")
        logger.info(f"  ✓ {target}")

        if resources:
            module_config = config["modules"].get(module.path) or {}
            written = process_module_resources(
                module, root, out / module_directory(module.path) / "resources",
                module_config.get("expansions"),
            )
            logger.info(f"  ✓ {len(written)} resource(s) for {module.path}")

    logger.info(f"\n✓ Configured {len(modules)} module(s)")
    return 0


def run_neoform(minecraft_version: str, root: Path) -> int:
    version = resolve_neoform_version(minecraft_version, root / NEOFORM_CACHE_DIR)
    print(version)
    return 0


def run_check_links(config: dict, module_path: str) -> int:
    """
    Report which javadoc links of a module are reachable

    Returns:
        Exit code (0 = every link reachable)
    """
    modules = {module.path: module for module in configure_build(config)}
    module = modules.get(module_path)
    if module is None:
        logger.error(f"✗ No module named {module_path}")
        return 1

    root = Path(config.get("root") or ".")
    loaded = read_links_file(root / JAVADOC_LINKS_FILE, module.settings.properties)
    links = collect_javadoc_links(module.settings, loaded)

    logger.info(f"Checking {len(links)} javadoc link(s) for {module_path}...")
    reachable = filter_connectable(links)
    for link in reachable:
        print(link)

    unreachable = len(links) - len(reachable)
    if unreachable:
        logger.warning(f"⚠ {unreachable} link(s) unreachable")
        return 1
    logger.info("✓ All javadoc links reachable")
    return 0


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description=f"Minecraft Submodule v{__version__} - Multi-platform mod build configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show every module's dependency block without writing anything
  %(prog)s --dry-run

  # Write dependency blocks and processed resources to build/submodule
  %(prog)s --resources

  # Look up the newest NeoForm for a Minecraft version
  %(prog)s --neoform 1.21.1

  # Check the javadoc links of a module
  %(prog)s --check-links :fabric
        """
    )

    parser.add_argument("--config", type=Path, help="Path to build description (overrides default search paths)")
    parser.add_argument("--output", type=Path, help="Directory for generated files (default: build/submodule)")
    parser.add_argument("--dry-run", action="store_true", help="Print generated dependency blocks instead of writing them")
    parser.add_argument("--resources", action="store_true", help="Also process module resources")
    parser.add_argument("--neoform", metavar="MC_VERSION", help="Print the newest NeoForm version for a Minecraft version")
    parser.add_argument("--check-links", metavar="MODULE", help="Check javadoc link reachability for a module")
    parser.add_argument("--no-log-file", action="store_true", help="Log to the console only")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args(argv)

    setup_logging(args.verbose, None if args.no_log_file else LOG_DIR)

    try:
        if args.neoform:
            return run_neoform(args.neoform, Path.cwd())

        config = load_config(args.config)

        is_valid, errors = validate_config(config)
        if not is_valid:
            logger.error("\n✗ Build description validation failed:")
            for error in errors:
                logger.error(f"  - {error}")
            return 1

        if args.check_links:
            return run_check_links(config, args.check_links)

        return run_configure(config, args.output, args.dry_run, args.resources)

    except SubmoduleError as e:
        logger.error(f"\n✗ Configuration failed: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("\n\nInterrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
