import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Ensure the src directory is on sys.path when running as a script
_SRC_DIR = Path(__file__).resolve().parents[1]
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from narcolife.bootstrap import create_game_service, load_settings
from narcolife.presentation.console_presenter import ConsoleCharacterPresenter
from narcolife.presentation.main_menu import main_menu


logger = logging.getLogger("narcolife")


def _print_help_surface() -> None:
    print("\nHelp:")
    print("- Menus: type the option number and press ENTER, Q goes back.")
    print("- Saves: NARCO_STORAGE selects memory, json or sql storage.")
    print("- Startup issues: check NARCO_SAVE_PATH / NARCO_DATABASE_URL or set NARCO_STORAGE=memory.")


def main() -> int:
    load_dotenv()
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        game_service = create_game_service(settings, presenter=ConsoleCharacterPresenter())
        main_menu(game_service, default_account=settings.account)
    except KeyboardInterrupt:
        print("\nSession ended.")
    except Exception as exc:
        logger.exception("Unhandled error; closing the session")
        print("An unexpected error occurred. The game closed safely.")
        print(f"Reason: {exc}")
        _print_help_surface()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
