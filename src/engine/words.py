"""Per-word reveal, guess and skip logic."""

from __future__ import annotations

from .errors import InvalidOperation
from .models import LetterStatus, POINTS_PER_LETTER, Word, WordResult


def base_value(word: Word) -> int:
    """Points a word is worth with no letters revealed."""
    return word.letter_count * POINTS_PER_LETTER


def word_value(word: Word) -> int:
    """Points a correct guess would earn right now."""
    return max(0, base_value(word) - word.letters_revealed_count * POINTS_PER_LETTER)


def _reveal_all(word: Word) -> None:
    for letter in word.letters:
        letter.status = LetterStatus.REVEALED


def reveal_letter(word: Word, index: int) -> Word:
    """
    Reveal one hidden letter as a hint.

    Revealing the last hidden letter leaves nothing to guess, so the
    word is settled as skipped with no points.

    Raises:
        InvalidOperation: word settled, guess already made, bad index,
            or letter already shown.
    """
    if word.is_resolved:
        raise InvalidOperation(f"Word {word.id} is already {word.result.value}")
    if word.has_made_guess:
        raise InvalidOperation(f"Cannot reveal letters of word {word.id} after a guess")
    if index < 0 or index >= len(word.letters):
        raise InvalidOperation(
            f"Letter index {index} out of range for word {word.id} "
            f"({len(word.letters)} letters)"
        )
    if word.letters[index].status == LetterStatus.REVEALED:
        raise InvalidOperation(f"Letter {index} of word {word.id} is already revealed")

    new_word = word.model_copy(deep=True)
    new_word.letters[index].status = LetterStatus.REVEALED
    new_word.letters_revealed_count += 1

    if all(letter.status == LetterStatus.REVEALED for letter in new_word.letters):
        new_word.result = WordResult.SKIPPED
        new_word.points_earned = 0

    return new_word


def submit_guess(word: Word, is_correct: bool) -> tuple[Word, int]:
    """
    Record a guess on a word.

    Returns:
        (new_word, score_delta) - delta is the points earned, 0 unless
        the guess was correct.
    """
    if word.is_resolved:
        raise InvalidOperation(f"Word {word.id} is already {word.result.value}")
    if word.remaining_guesses <= 0:
        raise InvalidOperation(f"No guesses left for word {word.id}")

    new_word = word.model_copy(deep=True)
    new_word.has_made_guess = True
    new_word.remaining_guesses -= 1

    if is_correct:
        # Penalty counts reveals only; earlier wrong attempts cost nothing
        points = word_value(new_word)
        _reveal_all(new_word)
        new_word.result = WordResult.FOUND
        new_word.points_earned = points
        return new_word, points

    if new_word.remaining_guesses == 0:
        new_word.result = WordResult.SKIPPED
        new_word.points_earned = 0

    return new_word, 0


def skip_word(word: Word) -> Word:
    """Give up on a word. Allowed whether or not a guess was made."""
    if word.is_resolved:
        raise InvalidOperation(f"Word {word.id} is already {word.result.value}")

    new_word = word.model_copy(deep=True)
    new_word.result = WordResult.SKIPPED
    new_word.points_earned = 0
    return new_word


def time_out_word(word: Word) -> Word:
    """Settle an open word as timed out. Settled words come back as they are."""
    if word.is_resolved:
        return word

    new_word = word.model_copy(deep=True)
    new_word.result = WordResult.TIMEOUT
    new_word.points_earned = 0
    return new_word
