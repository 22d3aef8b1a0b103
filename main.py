#!/usr/bin/env python3

import argparse
from pathlib import Path

from autobattler.core.config_loader import get_combat_config
from autobattler.core.events import EventManager
from autobattler.game.managers import CombatManager, LogManager, LogLevel
from autobattler.game.scenario_loader import ScenarioLoader

DEFAULT_BATTLE = Path(__file__).parent / "autobattler" / "assets" / "battles" / "skirmish.yaml"


def main():
    parser = argparse.ArgumentParser(description="Run an auto-battle and print its log")
    parser.add_argument("battle", nargs="?", default=str(DEFAULT_BATTLE), help="Battle YAML file")
    parser.add_argument("--debug", action="store_true", help="Include AI and debug messages")
    parser.add_argument("--save-log", action="store_true", help="Write the log to logs/")
    args = parser.parse_args()

    config = get_combat_config()
    battle = ScenarioLoader.load_from_file(args.battle)

    event_manager = EventManager(enable_debug_logging=args.debug)
    log_manager = LogManager(event_manager, max_messages=config.log_buffer_size)
    if args.debug:
        log_manager.set_log_level(LogLevel.DEBUG)

    print(f"{battle.name}: {battle.description}")
    print("\n".join(battle.board.render()))
    print()

    manager = CombatManager(battle.board, event_manager, config)
    try:
        manager.run()
    except KeyboardInterrupt:
        print("\n\nBattle interrupted by user")
    finally:
        for message in log_manager.get_messages():
            print(message.format(include_time=True))
        print()
        print("\n".join(battle.board.render()))
        if args.debug:
            stats = event_manager.get_statistics()
            print(f"\nEvents: {stats['events_processed']} delivered, "
                  f"{stats['subscriber_errors']} subscriber errors")
        if args.save_log:
            log_manager.save_log_to_file()


if __name__ == "__main__":
    main()
