"""
Main entry point for the companion pet.
Runs the pet simulation headless until interrupted.
"""

from __future__ import annotations
import argparse
import asyncio
from datetime import datetime
from dotenv import load_dotenv

from config import Config
from internal.internal import Internal
from internal.state_persistence import JsonFileStore
from loggers import LogManager

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the companion pet simulation headless.")
    parser.add_argument("--state-dir", default=None,
                        help="directory for persisted pet state (default: $COMPANION_STATE_DIR or data/state)")
    parser.add_argument("--console-log", action="store_true",
                        help="also write log records to stdout")
    return parser.parse_args(argv)

async def main(argv=None) -> None:
    """Initialize and run the pet."""
    args = parse_args(argv)

    # Load environment variables
    load_dotenv()
    LogManager.setup_logging(Config.get_log_dir(), console=args.console_log)

    print(f"Companion pet v{Config.VERSION}, started at {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    store = JsonFileStore(args.state_dir or Config.get_state_dir())
    internal = Internal(store=store)
    print(f"Pet is {internal.get_status()['condition']}. Press Ctrl+C to stop.")

    try:
        await internal.start()
    finally:
        internal.stop()
        print("Goodbye!")

def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass

if __name__ == "__main__":
    run()
