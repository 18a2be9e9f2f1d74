import random
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict


# Letters a rack can be dealt, drawn uniformly with replacement
ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZÄÖÜ"

RACK_SIZE = 5


class LetterBag(BaseModel):
    """
    Deals random letters for player racks.

    There is no finite tile pool: every letter is drawn independently
    from the alphabet, so a bag never runs out.

    Attributes:
        alphabet: Letters that can be drawn
        rack_size: Letters dealt per rack
        seed: Optional random seed for reproducibility
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    alphabet: str = Field(default=ALPHABET, min_length=1)
    rack_size: int = Field(default=RACK_SIZE, ge=1)
    seed: Optional[int] = None
    _rng: random.Random = None

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.seed)

    def draw(self, count: int) -> List[str]:
        """
        Draw letters from the bag.

        Args:
            count: Number of letters to draw

        Returns:
            List of uppercase letters
        """
        if count < 0:
            raise ValueError(f"Cannot draw {count} letters")
        return [self._rng.choice(self.alphabet) for _ in range(count)]

    def deal_rack(self) -> List[str]:
        """Draw a full rack of fresh letters."""
        return self.draw(self.rack_size)
