"""Word sources supplying ``{word, clue}`` candidates to the engine."""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Protocol, Sequence, Set

from ..core.exceptions import CatalogLoadError, WordSourceError
from ..core.models import Candidate
from ..utils.logger import get_logger
from .normalization import normalize_word

if TYPE_CHECKING:
    from ..io.gemini_client import GeminiClient


LOGGER = get_logger(__name__)


class WordSource(Protocol):
    """Protocol implemented by all candidate providers."""

    def fetch(self, limit: int = 80) -> List[Candidate]:
        ...


def make_candidate(raw_word: str, clue: Optional[str], source: str) -> Optional[Candidate]:
    """Normalize ``raw_word``; the clue falls back to the original spelling."""

    word = normalize_word(raw_word)
    if not word:
        return None
    clue = (clue or "").strip() or raw_word.strip()
    return Candidate(word=word, clue=clue, source=source)


def dedupe(candidates: Iterable[Candidate]) -> List[Candidate]:
    seen: Set[str] = set()
    unique: List[Candidate] = []
    for candidate in candidates:
        if candidate.word in seen:
            continue
        seen.add(candidate.word)
        unique.append(candidate)
    return unique


class UserWordListSource:
    """Returns a user-supplied list of ``WORD`` or ``WORD:Clue`` entries."""

    def __init__(self, raw_entries: Sequence[str]) -> None:
        self._candidates: List[Candidate] = []
        for item in raw_entries:
            item = item.strip()
            if not item:
                continue
            word, _, clue = item.partition(":")
            candidate = make_candidate(word, clue, "user")
            if candidate is not None:
                self._candidates.append(candidate)

    @classmethod
    def from_file(cls, path: Path) -> "UserWordListSource":
        """Read one entry per line. Blank lines and # comments are skipped."""
        entries = []
        for line in Path(path).read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            entries.append(line)
        return cls(entries)

    def fetch(self, limit: int = 80) -> List[Candidate]:
        return dedupe(self._candidates)[:limit]


class CatalogWordSource:
    """Reads technique and kata names from a JSON vocabulary catalog.

    Expected shape::

        {"grades": [{"id": "10-kyu",
                     "techniques": [{"name": {"romaji": "Seiken", "en": "Fore fist"}}],
                     "katas": [{"name": {"romaji": "Taikyoku Sono Ichi"}}]}]}

    The romaji name becomes the word and the English name the clue.
    """

    def __init__(self, path: Path | str, grade: Optional[str] = None) -> None:
        self.path = Path(path)
        self.grade = grade

    def fetch(self, limit: int = 80) -> List[Candidate]:
        catalog = self._load()
        grades = catalog.get("grades") or []
        if self.grade is not None:
            grades = [g for g in grades if g.get("id") == self.grade]
            if not grades:
                raise WordSourceError(f"Grade {self.grade!r} not found in {self.path}")

        candidates: List[Candidate] = []
        for grade in grades:
            for entry in list(grade.get("techniques") or []) + list(grade.get("katas") or []):
                name = entry.get("name") or {}
                romaji = name.get("romaji")
                if not isinstance(romaji, str) or not romaji.strip():
                    continue
                candidate = make_candidate(romaji, name.get("en"), "catalog")
                if candidate is not None:
                    candidates.append(candidate)
        unique = dedupe(candidates)
        LOGGER.info("Catalog %s yielded %s candidates", self.path.name, len(unique))
        return unique[:limit]

    def _load(self) -> Dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise CatalogLoadError(f"Cannot read catalog {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise CatalogLoadError(f"Catalog {self.path} must be a JSON object")
        return data


DEFAULT_TOPIC_BUCKETS: Dict[str, Dict[str, str]] = {
    "techniques": {
        "SEIKEN": "Fore fist",
        "URAKEN": "Back fist",
        "SHUTO": "Knife hand",
        "TETTSUI": "Hammer fist",
        "NUKITE": "Spear hand",
        "HAITO": "Ridge hand",
        "SHOTEI": "Palm heel",
        "MAE GERI": "Front kick",
        "YOKO GERI": "Side kick",
        "MAWASHI GERI": "Roundhouse kick",
        "USHIRO GERI": "Back kick",
        "HIZA GERI": "Knee kick",
        "JODAN UKE": "Upper block",
        "GEDAN BARAI": "Lower sweep block",
        "OI ZUKI": "Lunge punch",
        "GYAKU ZUKI": "Reverse punch",
    },
    "stances": {
        "ZENKUTSU DACHI": "Forward stance",
        "KOKUTSU DACHI": "Back stance",
        "KIBA DACHI": "Horse stance",
        "SANCHIN DACHI": "Hourglass stance",
        "FUDO DACHI": "Ready stance",
        "NEKO ASHI DACHI": "Cat stance",
        "MUSUBI DACHI": "Attention stance",
        "TSURU ASHI DACHI": "Crane stance",
    },
    "dojo": {
        "SENSEI": "Teacher",
        "SEMPAI": "Senior student",
        "KOHAI": "Junior student",
        "OSU": "Greeting of perseverance",
        "REI": "Bow",
        "SEIZA": "Formal kneeling",
        "MOKUSO": "Meditation",
        "KIAI": "Spirit shout",
        "KUMITE": "Sparring",
        "KATA": "Formal exercise",
        "OBI": "Belt",
        "DOGI": "Training uniform",
    },
}


class SampleWordSource:
    """Offline source backed by built-in vocabulary buckets."""

    def __init__(
        self,
        topic: str,
        buckets: Optional[Dict[str, Dict[str, str]]] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.topic = topic
        self.buckets = buckets or DEFAULT_TOPIC_BUCKETS
        self.rng = random.Random(seed)

    def fetch(self, limit: int = 80) -> List[Candidate]:
        bucket = self.buckets.get(self.topic.lower())
        if bucket is None:
            known = ", ".join(sorted(self.buckets))
            raise ValueError(f"Unknown topic {self.topic!r}; known topics: {known}")
        entries = list(bucket.items())
        self.rng.shuffle(entries)
        candidates = [make_candidate(word, clue, "sample") for word, clue in entries]
        return dedupe(c for c in candidates if c is not None)[:limit]


class GeminiWordSource:
    """LLM-powered vocabulary generator using the Gemini API."""

    PROMPT = (
        "You are helping a student build vocabulary. "
        "List up to {limit} unique terms for the topic '{topic}'. "
        "Each entry has a word and a clue. "
        "The word is the term itself (3-20 letters, spaces allowed between words). "
        "The clue is a short {language} translation or definition of 3-6 words."
    )

    def __init__(
        self,
        topic: str,
        language: str = "English",
        client: Optional["GeminiClient"] = None,
    ) -> None:
        self.topic = topic
        self.language = language
        self._client = client

    def fetch(self, limit: int = 80) -> List[Candidate]:
        from ..io.gemini_client import GeminiClient

        client = self._client or GeminiClient()
        self._client = client
        prompt = self.PROMPT.format(limit=limit, topic=self.topic, language=self.language)
        candidates = self._to_candidates(client.request_vocabulary(prompt))
        if not candidates:
            raise WordSourceError(f"Gemini returned no usable words for {self.topic!r}")
        return candidates[:limit]

    @staticmethod
    def _to_candidates(entries: Iterable[Dict[str, Any]]) -> List[Candidate]:
        candidates: List[Candidate] = []
        for entry in entries:
            word = entry.get("word")
            clue = entry.get("clue")
            if not isinstance(word, str) or not isinstance(clue, str):
                LOGGER.debug("Skipping malformed Gemini entry %r", entry)
                continue
            candidate = make_candidate(word, clue, "gemini")
            if candidate is not None:
                candidates.append(candidate)
        return dedupe(candidates)


def merge_word_sources(
    primary: Optional[WordSource],
    fallbacks: Sequence[WordSource],
    limit: int,
) -> List[Candidate]:
    """Attempt primary source, cascaded fallbacks, and deduplicate results."""

    collected: List[Candidate] = []
    seen: Set[str] = set()

    def extend(candidates: Iterable[Candidate]) -> None:
        for candidate in candidates:
            if candidate.word in seen:
                continue
            collected.append(candidate)
            seen.add(candidate.word)
            if len(collected) >= limit:
                break

    sources = ([primary] if primary is not None else []) + list(fallbacks)
    for source in sources:
        if len(collected) >= limit:
            break
        try:
            extend(source.fetch(limit))
        except Exception as exc:
            LOGGER.warning("Word source %s failed: %s", type(source).__name__, exc)

    return collected[:limit]
