"""Word pool selection for a round."""

from __future__ import annotations

import json
import random
from pathlib import Path

from src.engine import ValidationError, WordEntry, WORD_LENGTHS, WORDS_PER_LENGTH


def load_category(path: Path) -> tuple[str, list[WordEntry]]:
    """
    Load a category file.

    Format: {"name": "...", "words": [{"word": "...", "hint": "..."}, ...]}.
    Ids are assigned in file order starting at 1.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    entries = [
        WordEntry(id=index, text=item["word"], hint=item.get("hint", ""))
        for index, item in enumerate(data.get("words", []), start=1)
    ]
    return data.get("name", path.stem), entries


def select_word_pools(
    words: list[WordEntry],
    participant_count: int,
    seed: int | None = None,
) -> tuple[list[list[WordEntry]], int]:
    """
    Pick one pool per participant: 2 words of each length 4-10.

    No word is given to more than one participant. Each pool is ordered
    by length ascending (4, 4, 5, 5, ... 10, 10).

    Returns:
        Tuple of (pools, seed_used) for reproducibility.
    """
    if seed is None:
        seed = random.randint(0, 2**31 - 1)
    rng = random.Random(seed)

    by_length: dict[int, list[WordEntry]] = {length: [] for length in WORD_LENGTHS}
    for entry in words:
        if entry.letter_count in by_length:
            by_length[entry.letter_count].append(entry)

    needed = participant_count * WORDS_PER_LENGTH
    for length, bucket in by_length.items():
        if len(bucket) < needed:
            raise ValidationError(
                f"Not enough {length}-letter words: {needed} required, {len(bucket)} found"
            )

    picked = {length: rng.sample(bucket, needed) for length, bucket in by_length.items()}

    pools: list[list[WordEntry]] = []
    for index in range(participant_count):
        start = index * WORDS_PER_LENGTH
        pool: list[WordEntry] = []
        for length in WORD_LENGTHS:
            pool.extend(picked[length][start:start + WORDS_PER_LENGTH])
        pools.append(pool)

    return pools, seed
