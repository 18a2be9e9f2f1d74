"""
Word sources for dynamic grids.

A word source supplies candidate words (optionally with hints) and can look
up a hint for a single word. Sources raise WordSourceUnavailable when they
cannot deliver; ``load_candidates`` and ``safe_hint_lookup`` turn that into
an empty result so grid building falls back to the fixed grid.
"""

import logging
import random
import re
from typing import Any, Callable, ClassVar, Dict, List, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field

from ..engine.errors import WordSourceUnavailable
from ..engine.models import MAX_WORD_LENGTH, WordCandidate
from ..engine.parsing import parse_word_list
from ..engine.wordbank import bank_candidates, bank_hint
from .llm_client import LLMClient
from .models import GameConfig, LLMSourceConfig
from .prompts import WORD_SYSTEM_PROMPT, build_word_prompt

logger = logging.getLogger(__name__)

DWDS_FEED_URL = "https://www.dwds.de/api/feed/adt"
OPENTHESAURUS_URL = "https://www.openthesaurus.de/synonyme/search"

ITALIC_PATTERN = re.compile(r'<i[^>]*>(.*?)</i>', re.DOTALL | re.IGNORECASE)
TAG_PATTERN = re.compile(r'<[^>]+>')
SOURCE_WORD_PATTERN = re.compile(r'^[a-zA-ZäöüÄÖÜß]{1,%d}$' % MAX_WORD_LENGTH)


class WordSource(BaseModel):
    """Base class for candidate word providers."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: ClassVar[str] = "base"
    timeout: float = Field(default=5.0, gt=0)

    def fetch(self) -> List[WordCandidate]:
        """
        Fetch candidate words.

        Raises:
            WordSourceUnavailable: If the source cannot deliver words
        """
        raise NotImplementedError

    def hint_for(self, word: str) -> Optional[str]:
        """
        Look up a hint for a word, or None if the source has none.

        Raises:
            WordSourceUnavailable: If the lookup itself failed
        """
        return None


class StaticWordSource(WordSource):
    """The built-in word bank."""

    name: ClassVar[str] = "bank"

    def fetch(self) -> List[WordCandidate]:
        return bank_candidates()

    def hint_for(self, word: str) -> Optional[str]:
        return bank_hint(word)


def extract_feed_words(html: str) -> List[str]:
    """Extract 1-7 letter words from the <i> elements of the DWDS feed."""
    words: List[str] = []
    for fragment in ITALIC_PATTERN.findall(html):
        text = TAG_PATTERN.sub('', fragment).strip()
        for word in text.split():
            if SOURCE_WORD_PATTERN.match(word):
                words.append(word.upper())
    return words


def collect_synonyms(data: Any, word: str) -> List[str]:
    """
    Collect OpenThesaurus synonym terms that differ from the word.

    Raises:
        ValueError: If the payload is not shaped like a synonym search result
    """
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    synsets = data.get("synsets", [])
    if not isinstance(synsets, list):
        raise ValueError(f"expected a list of synsets, got {type(synsets).__name__}")

    synonyms: List[str] = []
    for synset in synsets:
        terms = synset.get("terms") if isinstance(synset, dict) else None
        for term in terms if isinstance(terms, list) else []:
            text = term.get("term") if isinstance(term, dict) else None
            if isinstance(text, str) and text and text.upper() != word.upper():
                synonyms.append(text)
    return synonyms


class DwdsWordSource(WordSource):
    """
    Words from the DWDS "Wort des Tages" feed with OpenThesaurus hints.

    Attributes:
        feed_url: DWDS feed address
        thesaurus_url: OpenThesaurus search endpoint
        seed: Optional seed for picking among synonyms
    """

    name: ClassVar[str] = "dwds"

    feed_url: str = DWDS_FEED_URL
    thesaurus_url: str = OPENTHESAURUS_URL
    seed: Optional[int] = None
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        self._rng = random.Random(self.seed)

    def fetch(self) -> List[WordCandidate]:
        logger.debug("Fetching words from %s", self.feed_url)
        try:
            response = requests.get(self.feed_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise WordSourceUnavailable(f"DWDS feed unavailable: {e}") from e

        words = extract_feed_words(response.text)
        logger.debug("Found %d valid words from DWDS", len(words))
        return [WordCandidate(word=word) for word in words]

    def hint_for(self, word: str) -> Optional[str]:
        """A random synonym, the bank hint when there is none, else the word itself."""
        try:
            response = requests.get(
                self.thesaurus_url,
                params={"q": word, "format": "application/json"},
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            synonyms = collect_synonyms(response.json(), word)
        except (requests.RequestException, ValueError) as e:
            raise WordSourceUnavailable(f"OpenThesaurus unavailable for '{word}': {e}") from e

        logger.debug("Found %d synonyms for %s", len(synonyms), word)
        if not synonyms:
            return bank_hint(word) or word
        return self._rng.choice(synonyms)


class LLMWordSource(WordSource):
    """Words and hints generated by an LLM through LiteLLM."""

    name: ClassVar[str] = "llm"

    llm_config: LLMSourceConfig = Field(default_factory=LLMSourceConfig)
    count: int = Field(default=14, ge=1)
    theme: str = ""
    llm_client: Optional[LLMClient] = None
    _hints: Dict[str, str] = None

    def model_post_init(self, __context) -> None:
        self._hints = {}
        if self.llm_client is None:
            extra = self.llm_config.__pydantic_extra__ or {}
            self.llm_client = LLMClient(
                model=self.llm_config.model,
                temperature=self.llm_config.temperature,
                max_tokens=self.llm_config.max_tokens,
                **extra
            )

    def fetch(self) -> List[WordCandidate]:
        try:
            content = self.llm_client.ask(
                WORD_SYSTEM_PROMPT,
                build_word_prompt(self.count, self.theme),
                timeout=self.timeout,
            )
        except Exception as e:
            raise WordSourceUnavailable(f"LLM word source failed: {e}") from e

        parsed = parse_word_list(content)
        candidates = [c for c in parsed if SOURCE_WORD_PATTERN.match(c.word)]
        if len(candidates) < len(parsed):
            logger.debug(
                "Dropped %d LLM words outside 1-%d letters",
                len(parsed) - len(candidates), MAX_WORD_LENGTH,
            )
        if not candidates:
            raise WordSourceUnavailable("LLM response contained no usable words")

        for candidate in candidates:
            if candidate.hint:
                self._hints[candidate.word] = candidate.hint
        return candidates

    def hint_for(self, word: str) -> Optional[str]:
        return self._hints.get(word.upper())


def create_source(config: GameConfig) -> WordSource:
    """Create the word source named in the config."""
    if config.source == "dwds":
        return DwdsWordSource(timeout=config.fetch_timeout, seed=config.seed)
    if config.source == "llm":
        return LLMWordSource(timeout=config.fetch_timeout, llm_config=config.llm)
    return StaticWordSource(timeout=config.fetch_timeout)


def load_candidates(source: Optional[WordSource]) -> List[WordCandidate]:
    """Fetch candidates, returning an empty list if the source is absent or fails."""
    if source is None:
        return []
    try:
        return source.fetch()
    except Exception as e:
        logger.warning("Word source '%s' unavailable, using fallback: %s", source.name, e)
        return []


def safe_hint_lookup(source: Optional[WordSource]) -> Callable[[str], Optional[str]]:
    """Wrap a source's hint lookup so failures yield None instead of raising."""

    def lookup(word: str) -> Optional[str]:
        if source is None:
            return None
        try:
            return source.hint_for(word)
        except Exception as e:
            logger.warning("Hint lookup failed for %s: %s", word, e)
            return None

    return lookup
