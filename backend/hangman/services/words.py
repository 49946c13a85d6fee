import json
from pathlib import Path
from typing import Dict, List, Optional

from sqlalchemy import func

from hangman.models import Word

BUNDLED_WORDS = Path(__file__).resolve().parent.parent / 'data' / 'words.json'


def load_bundled_words(path=BUNDLED_WORDS) -> Dict[str, List[str]]:
    """Read ``{category: [word, ...]}`` from a JSON file."""
    with open(path, encoding='utf-8') as fh:
        return json.load(fh)


class WordSource:
    """Random word lookup by category, backed by the ``word`` table."""

    def __init__(self, session):
        self.session = session

    def random_word(self, category: str) -> Optional[str]:
        row = (
            self.session.query(Word.word)
            .filter(Word.category == category.lower())
            .order_by(func.random())
            .first()
        )
        return row[0] if row else None

    def seed(self, words_by_category: Dict[str, List[str]]) -> int:
        """Insert words that are not stored yet. Returns how many were added."""
        added = 0
        for category, words in words_by_category.items():
            category = category.lower()
            existing = {
                w for (w,) in self.session.query(Word.word).filter(Word.category == category)
            }
            for word in words:
                if not word or word in existing:
                    continue
                self.session.add(Word(word=word, category=category))
                existing.add(word)
                added += 1
        self.session.commit()
        return added
