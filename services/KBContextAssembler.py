# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-06
# Description: KBContextAssembler.py
# -----------------------------------------------------------------------------
from typing import List, Sequence

from config.KBPrompts import NO_CONTEXT_PLACEHOLDER
from source.KBSearchMatch import KBSearchMatch


class KBContextAssembler:
    """
    Turn ranked matches into the reference-context block of a prompt.
    Full source content is always included (no truncation).
    """

    delimiter: str = "---"

    def assemble(self, matches: Sequence[KBSearchMatch]) -> str:
        if not matches:
            return NO_CONTEXT_PLACEHOLDER

        blocks: List[str] = []
        for i, m in enumerate(matches, start=1):
            blocks.append(
                f"[Source {i}] (similarity: {m.similarity * 100:.1f}%)\n"
                f"Title: {m.title}\n"
                f"Content:\n"
                f"{m.content}\n"
                f"{self.delimiter}"
            )
        return "\n\n".join(blocks)
