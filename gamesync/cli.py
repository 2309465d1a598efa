"""Command-line interface for gamesync."""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from gamesync import __version__
from gamesync.config.loader import load_config, ConfigError, get_config_value
from gamesync.config.validator import validate_config, ValidationError
from gamesync.config.es_systems import parse_es_systems, get_systems_by_name, ESSystemsError
from gamesync.config.settings import GamelistSettings
from gamesync.gamelist.synchronizer import GamelistSynchronizer
from gamesync.system import GameSystem
from gamesync.tree.file_node import FileNode, FileTree, FileType

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog='gamesync',
        description='Reconcile EmulationStation gamelist.xml files with ROM folders',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show what every system's gamelist contains
  gamesync show

  # Rewrite the nes and snes gamelists from their loaded trees
  gamesync sync nes snes

  # Use custom config file
  gamesync --config /path/to/config.yaml sync
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--config',
        metavar='PATH',
        help='Path to config.yaml (default: ./config.yaml)'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    show = subparsers.add_parser('show', help='Load gamelists and print the resulting trees')
    show.add_argument('systems', nargs='*', metavar='SYSTEM', help='Systems to show (default: all)')

    sync = subparsers.add_parser('sync', help='Load gamelists and write them back merged')
    sync.add_argument('systems', nargs='*', metavar='SYSTEM', help='Systems to sync (default: all)')

    return parser


def _setup_logging(config: dict) -> None:
    """
    Setup logging configuration from config.

    Args:
        config: Configuration dictionary
    """
    logging_config = config.get('logging', {})

    level_str = logging_config.get('level', 'INFO').upper()
    level = getattr(logging, level_str, logging.INFO)

    handlers = []

    if logging_config.get('console', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        handlers.append(console_handler)

    log_file = logging_config.get('file')
    if log_file:
        try:
            log_path = Path(log_file).expanduser()
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_path)
            file_handler.setLevel(level)
            file_handler.setFormatter(
                logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            )
            handlers.append(file_handler)
        except OSError as e:
            print(f"Error: Could not create log file '{log_file}': {e}", file=sys.stderr)
            sys.exit(1)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True  # Override any existing configuration
    )


def _load_systems(config: dict, names: List[str]) -> List[GameSystem]:
    """Build GameSystems for the requested names from es_systems.xml."""
    es_systems = Path(get_config_value(config, 'paths.es_systems')).expanduser()
    rom_root = get_config_value(config, 'paths.roms')
    gamelists_dir = get_config_value(config, 'paths.gamelists')

    definitions = get_systems_by_name(
        parse_es_systems(es_systems),
        names or config.get('systems') or None
    )
    return [d.to_game_system(rom_root, gamelists_dir) for d in definitions]


def _render_tree(tree: FileTree, label: str) -> Tree:
    """Build a rich Tree view of a file tree."""
    view = Tree(f"[bold]{escape(label)}[/bold] [dim]{escape(str(tree.root.path))}[/dim]")

    def add(branch: Tree, node: FileNode) -> None:
        for child in tree.children(node):
            name = escape(child.metadata.get("name"))
            if child.kind == FileType.FOLDER:
                add(branch.add(f"[blue]{name}/[/blue]"), child)
            else:
                branch.add(f"{name} [dim]({escape(child.name)})[/dim]")

    add(view, tree.root)
    return view


def run_show(systems: List[GameSystem], synchronizer: GamelistSynchronizer, console: Console) -> int:
    for system in systems:
        tree = system.load(synchronizer)
        console.print(_render_tree(tree, system.fullname))
    return 0


def run_sync(systems: List[GameSystem], synchronizer: GamelistSynchronizer, console: Console) -> int:
    failures = 0
    for system in systems:
        system.load(synchronizer)
        report = synchronizer.update_gamelist(system)
        if report.ok:
            console.print(
                f"{system.name}: {report.written} written, "
                f"{report.replaced} replaced, {report.omitted} omitted"
            )
        else:
            # one system failing does not stop the others
            failures += 1
            console.print(f"[red]{escape(system.name)}: {escape(report.error)}[/red]")
    return 1 if failures else 0


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for gamesync CLI.

    Args:
        argv: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        validate_config(config)
    except (ConfigError, ValidationError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    _setup_logging(config)

    try:
        systems = _load_systems(config, args.systems)
    except (ESSystemsError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    synchronizer = GamelistSynchronizer(GamelistSettings.from_config(config))
    console = Console()

    if args.command == 'show':
        return run_show(systems, synchronizer, console)
    return run_sync(systems, synchronizer, console)


if __name__ == '__main__':
    sys.exit(main())
