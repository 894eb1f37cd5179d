import re
from dataclasses import dataclass, replace
from typing import Optional


_REFERENCE_RE = re.compile(r"^(.*\D)\s*(\d+):(\d+)$")


@dataclass(frozen=True)
class ReferenceAddress:
    """A book/chapter/verse triple such as ``John 3:16``."""

    book: str
    chapter: int
    verse: int

    @classmethod
    def parse(cls, raw: str) -> Optional["ReferenceAddress"]:
        """Return the parsed address, or None when ``raw`` is not a reference."""
        if not raw:
            return None
        match = _REFERENCE_RE.match(raw.strip())
        if not match:
            return None
        book = match.group(1).strip()
        chapter = int(match.group(2))
        verse = int(match.group(3))
        if not book or chapter < 1 or verse < 1:
            return None
        return cls(book=book, chapter=chapter, verse=verse)

    def format(self) -> str:
        return f"{self.book} {self.chapter}:{self.verse}"

    def next(self) -> "ReferenceAddress":
        # Whether the verse exists is for the text source to decide.
        return replace(self, verse=self.verse + 1)

    def __str__(self) -> str:
        return self.format()


def image_filename(reference: ReferenceAddress) -> str:
    return re.sub(r"[: ]", "_", reference.format()).lower() + ".jpg"
