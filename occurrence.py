from collections import Counter

from models import CharacterOccurrence


def count_characters(title: str) -> list[CharacterOccurrence]:
    """Count each character of a title, ignoring spaces and case.

    Entries follow the order in which characters first appear.
    """
    counts = Counter(title.replace(" ", "").lower())
    return [CharacterOccurrence(character=char, count=count) for char, count in counts.items()]
