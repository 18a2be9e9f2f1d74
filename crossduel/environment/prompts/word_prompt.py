WORD_SYSTEM_PROMPT = """You supply words for a German crossword duel.

## Rules
1. Every word is a common German noun or verb
2. Every word has between 3 and 7 letters, letters only (Ä, Ö, Ü and ß are allowed)
3. No word appears twice
4. Every word comes with a short hint of one or two words that does not contain the word itself

## Response Format
Always answer with one word per line inside these tags:

<words>
WORD|hint
WORD|hint
</words>
"""


def build_word_prompt(count: int, theme: str = "") -> str:
    """
    Build the user prompt asking for crossword words.

    Args:
        count: Number of words wanted
        theme: Optional theme the words should follow

    Returns:
        The formatted prompt string
    """
    lines = [f"Give me {count} words with hints."]
    if theme:
        lines.append(f"Theme: {theme}")
    lines.append("Answer only with the <words> block.")
    return "\n".join(lines)
