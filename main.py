"""
Sanuli Game Server - Main Entry Point

Loads the word lists and the stored player state, initializes the game
manager and starts the Flask application.
"""

import os

from sanuli import create_app
from sanuli.config import Config, get_word_statistics, validate_word_list_integrity
from sanuli.config.game_settings import DAILY_WORDS_FILES, load_word_list
from sanuli.errors import OutOfRange
from sanuli.models.game import WordListScope
from sanuli.services.state_store import create_state_store
from sanuli.services.word_corpus import WordCorpus
from sanuli.services.game_manager import initialize_game_manager
from sanuli.utils.game_logger import game_logger


def check_daily_lists(word_list_dir: str) -> None:
    """Reject daily lists with duplicates before the server starts."""
    for length, file_name in DAILY_WORDS_FILES.items():
        words = load_word_list(os.path.join(word_list_dir, file_name), optional=True)
        if words:
            validate_word_list_integrity(words, file_name)
            print(f"✓ {file_name}: {len(words)} daily words")


def main():
    """Main function to initialize services and start the server."""
    try:
        print("Loading word lists...")
        check_daily_lists(Config.WORD_LIST_DIR)
        corpus = WordCorpus.from_directory(Config.WORD_LIST_DIR)
        print(f"✓ Word corpus loaded: {len(corpus)} words")

        stats = get_word_statistics(corpus.words(WordListScope.FULL, 5) + corpus.words(WordListScope.FULL, 6))
        game_logger.logger.info(f"Word statistics: {stats.get('words_by_length')}")

        store = create_state_store(Config)
        print(f"✓ State store initialized ({Config.STATE_BACKEND})")

        initialize_game_manager(corpus, store)
        print("✓ Game manager initialized successfully")

        print("Creating Flask application...")
        app = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Sanuli Server Starting")

        print(f"\nStarting Sanuli Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        # Requests are handled one at a time
        app.run(host=Config.HOST, port=Config.PORT, debug=Config.DEBUG, threaded=False)

    except OutOfRange as e:
        print(f"Daily word list does not cover today: {e}")
        game_logger.logger.error(f"Configuration error, daily word list out of range: {e}")
        raise
    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Sanuli Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
