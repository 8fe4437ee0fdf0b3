import argparse
import logging
import sys
import time

from .core.config import load_config
from .core.constants import ENV_DEV, ENVIRONMENTS
from .core.errors import EntryGenError
from .core.generator import EntryGenerator
from .core.watcher import WatchController


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    # Reduce noise from third-party libraries
    logging.getLogger("watchdog").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    """Main entry point for entrygen."""
    parser = argparse.ArgumentParser(description="entrygen - generate Vue app entries")
    parser.add_argument(
        "project_dir",
        nargs="?",
        default=".",
        help="Project root containing entrygen.yaml and src/"
    )
    parser.add_argument(
        "--app",
        type=str,
        default=None,
        help="App to generate entries for (default: first app in entrygen.yaml)"
    )
    parser.add_argument(
        "--env",
        type=str,
        default=ENV_DEV,
        choices=list(ENVIRONMENTS),
        help="Environment; dev keeps watching src/ for changes"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        config = load_config(args.project_dir, app_name=args.app, env=args.env)
        errors = []
        generator = EntryGenerator(config, error_channel=errors)
        generator.generate()
    except EntryGenError as e:
        logger.error(str(e))
        return 1

    for error in errors:
        print(f"  {error}")

    if config.env != ENV_DEV:
        return 1 if errors else 0

    # Later passes report their errors through the log only
    generator.error_channel = None
    controller = WatchController(generator)
    controller.start()
    print(f"\n  Watching {config.src_dir} (Ctrl+C to stop)\n")
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        controller.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
