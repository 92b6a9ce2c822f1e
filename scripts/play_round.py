#!/usr/bin/env python3
"""Play a word round in the terminal."""

import argparse
import logging
import threading
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).parent.parent / ".env")

from src.engine import (
    CategoryInventory, GameConfig, GameMode, MultiPlayerSetup, SessionPhase, SinglePlayerSetup,
    TeamMember, TeamModeSetup, TeamSetup, ValidationError, remaining_seconds, word_value,
)
from src.history import JsonHistoryStore
from src.runner import EngineConfig, EventType, SessionEvent, SessionManager
from src.setup import ensure_valid_setup, load_category, select_word_pools, validate_category


# ANSI colors for terminal output
class Colors:
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    GRAY = "\033[90m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


HELP = (
    "Commands: r <n> reveal letter n (1-based) | m start guess timer | e leave guess mode | "
    "g <word> guess | s skip | "
    "p pause/resume | n next participant | q quit"
)


def build_config(args, game_duration: int) -> GameConfig:
    mode = GameMode(args.mode)
    if mode == GameMode.SINGLE:
        setup = SinglePlayerSetup(player_name=args.names[0])
    elif mode == GameMode.MULTI:
        setup = MultiPlayerSetup(players=args.names)
    else:
        setup = TeamModeSetup(teams=[
            TeamSetup(
                name=name,
                emoji="*",
                color="blue",
                members=[TeamMember(name=f"{name} A", order=1), TeamMember(name=f"{name} B", order=2)],
            )
            for name in args.names
        ])
    return GameConfig(
        category_id=1,
        category_name=args.category_name,
        mode=mode,
        setup=setup,
        game_duration=game_duration,
    )


def print_event(event: SessionEvent) -> None:
    if event.event_type == EventType.WORD_RESOLVED:
        result = event.data["result"]
        color = Colors.GREEN if result == "found" else Colors.YELLOW
        print(f"{color}  Word {result} (+{event.data['points_earned']}){Colors.RESET}")
    elif event.event_type == EventType.GUESS_STARTED:
        print(f"{Colors.CYAN}  Guess timer started ({event.data['seconds']}s){Colors.RESET}")
    elif event.event_type == EventType.TURN_ENDED:
        print(f"\n{Colors.CYAN}Turn over for {event.data['name']}. Type 'n' to start the next turn.{Colors.RESET}")
    elif event.event_type == EventType.SESSION_FINISHED:
        print(f"\n{Colors.BOLD}Round finished! Winner(s): {', '.join(event.data['winners'])}{Colors.RESET}")
    elif event.event_type == EventType.HISTORY_FAILED:
        print(f"{Colors.RED}Could not save result: {event.data['error']}{Colors.RESET}")


def print_status(manager: SessionManager) -> None:
    session = manager.session
    if session is None:
        return
    participant = session.active_participant
    print(f"\n{Colors.BOLD}{participant.name}{Colors.RESET} | score {participant.score} | "
          f"{remaining_seconds(participant)}s left | {session.state.value}")
    if session.state != SessionPhase.PLAYING:
        return
    word = participant.words[participant.current_word_index]
    print(f"  {' '.join(word.masked())}  ({word.letter_count} letters, worth {word_value(word)}, "
          f"{word.remaining_guesses} guesses left)")
    print(f"{Colors.GRAY}  Hint: {word.hint}{Colors.RESET}")
    if session.is_guessing:
        print(f"{Colors.YELLOW}  Guessing: {session.guess_time_remaining}s to answer{Colors.RESET}")


def run_ticker(manager: SessionManager, stop: threading.Event) -> None:
    """Call tick() once a second until stopped."""
    while not stop.wait(1.0):
        manager.tick()


def handle_command(manager: SessionManager, line: str) -> bool:
    """Apply one command. Returns False when the user quits."""
    session = manager.session
    parts = line.strip().split(maxsplit=1)
    if not parts:
        return True
    command, arg = parts[0].lower(), (parts[1] if len(parts) > 1 else "")
    p_index = session.active_participant_index
    w_index = session.active_participant.current_word_index

    if command == "q":
        manager.end_session()
        return False
    if command in ("r", "m", "e", "g", "s") and session.state != SessionPhase.PLAYING:
        print(f"{Colors.YELLOW}  No word in play ({session.state.value}){Colors.RESET}")
        return True
    if command == "r" and arg.isdigit():
        result = manager.reveal_letter(p_index, w_index, int(arg) - 1)
    elif command == "g" and arg:
        word = session.active_participant.words[w_index]
        result = manager.submit_guess(p_index, w_index, arg.strip().upper() == word.text)
        if result.ok and not result.session.participants[p_index].words[w_index].is_resolved:
            print(f"{Colors.RED}  Wrong!{Colors.RESET}")
    elif command == "m":
        result = manager.start_guess(p_index, w_index)
    elif command == "e":
        result = manager.end_guess()
    elif command == "s":
        result = manager.skip_word(p_index, w_index)
    elif command == "p":
        result = manager.resume() if session.is_paused else manager.pause()
    elif command == "n":
        result = manager.next_participant()
    else:
        print(HELP)
        return True

    if not result.ok:
        print(f"{Colors.RED}  {result.error}{Colors.RESET}")
    return True


def main():
    parser = argparse.ArgumentParser(description="Play a word round in the terminal")
    parser.add_argument("--category", type=Path, default=Path(__file__).parent.parent / "data" / "animals.json")
    parser.add_argument("--mode", choices=[m.value for m in GameMode], default="single")
    parser.add_argument("--names", nargs="+", default=["Player"])
    parser.add_argument("--duration", type=int, default=None, help="Seconds per participant")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    try:
        engine_config = EngineConfig.from_env()
    except ValidationError as e:
        print(f"{Colors.RED}{e}{Colors.RESET}")
        return
    if args.duration:
        engine_config.game_duration = args.duration

    args.category_name, entries = load_category(args.category)
    inventory = CategoryInventory.from_words(entries)
    print(f"{Colors.BOLD}{args.category_name}{Colors.RESET}: {validate_category(inventory).message}")

    config = build_config(args, engine_config.game_duration)
    try:
        ensure_valid_setup(config, inventory)
        pools, seed = select_word_pools(entries, len(config.participant_names()), args.seed)
    except ValidationError as e:
        for error in e.errors:
            print(f"{Colors.RED}{error}{Colors.RESET}")
        return

    manager = SessionManager(
        recorder=JsonHistoryStore(engine_config.get_history_path()),
        config=engine_config,
    )
    manager.subscribe(print_event)
    result = manager.start(config, pools)
    if not result.ok:
        print(f"{Colors.RED}{result.error}{Colors.RESET}")
        return
    print(f"{Colors.GRAY}Word seed: {seed}{Colors.RESET}")
    print(HELP)

    stop = threading.Event()
    ticker = threading.Thread(target=run_ticker, args=(manager, stop), daemon=True)
    ticker.start()
    try:
        while not manager.session.is_finished:
            print_status(manager)
            try:
                line = input("> ")
            except EOFError:
                manager.end_session()
                break
            if not handle_command(manager, line):
                break
    finally:
        stop.set()

    for participant in manager.session.participants:
        print(f"  {participant.name}: {participant.score} points, "
              f"{participant.words_found} found, {participant.letters_revealed_total} letters revealed")


if __name__ == "__main__":
    main()
