"""Application entry point."""

import argparse
import shutil
import sys

from loguru import logger

from .app.app import MailstreamApp
from .app.app_config import AppConfig
from .app.viewer import open_in_viewer
from .common.app import app_dirs


def reset_all() -> None:
    """Delete the app data directory."""
    if app_dirs.app_data_dir.exists():
        shutil.rmtree(app_dirs.app_data_dir)
        print(f"App data directory deleted: {app_dirs.app_data_dir}")
    else:
        print(f"App data directory does not exist: {app_dirs.app_data_dir}")


def setup_logging(level: str) -> None:
    """Send logs to a file; the terminal belongs to the UI."""
    logger.remove()
    app_dirs.app_data_dir.mkdir(parents=True, exist_ok=True)
    logger.add(app_dirs.app_log_path, level=level.upper(), rotation="1 MB", retention=3)


def load_config() -> AppConfig:
    """Load the persisted config, or the defaults."""
    if not app_dirs.app_config_path.exists():
        return AppConfig()
    return AppConfig.model_validate_json(app_dirs.app_config_path.read_text())


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Apply command-line overrides for this invocation."""
    search_updates = {}
    if args.mu is not None:
        search_updates["executable"] = args.mu
    if args.min_length is not None:
        search_updates["min_query_length"] = args.min_length
    updates = {}
    if search_updates:
        updates["search"] = config.search.model_copy(update=search_updates)
    if args.viewer is not None:
        updates["viewer_command"] = args.viewer
    return config.model_copy(update=updates)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="mailstream - incremental mail search")
    parser.add_argument("query", nargs="?", default="", help="Initial search query")
    parser.add_argument("--mu", help="Search executable to run")
    parser.add_argument("--min-length", type=int, help="Shortest query that starts a search")
    parser.add_argument("--viewer", help="Command opening the chosen message; {id} is the message-id")
    parser.add_argument("--log-level", default="WARNING", help="Log level for the log file")
    parser.add_argument("--temp", action="store_true", help="Run in temporary mode")
    parser.add_argument("--reset", action="store_true", help="Delete all app data")

    args = parser.parse_args()

    if args.reset:
        reset_all()
        return

    if args.temp:
        app_dirs.use_temp_app_data_dir()

    setup_logging(args.log_level)
    config = load_config()

    effective = apply_overrides(config, args)
    app = MailstreamApp(effective, initial_query=args.query)
    try:
        identifier = app.run()
    finally:
        app_dirs.app_config_path.parent.mkdir(parents=True, exist_ok=True)
        app_dirs.app_config_path.write_text(config.model_dump_json(indent=2))

    if identifier:
        returncode = open_in_viewer(identifier, effective.viewer_command)
        if returncode:
            sys.exit(returncode)


if __name__ == "__main__":
    main()
