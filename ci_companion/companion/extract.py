from __future__ import annotations

import dataclasses
import typing


if typing.TYPE_CHECKING:
    import re


@dataclasses.dataclass(frozen=True)
class ExtractionRule:
    pattern: re.Pattern[str]
    priority: int


def extract(body: str, rules: typing.Iterable[ExtractionRule]) -> str | None:
    """Return the capture of the last match of the highest priority rule that matches.

    Rules are tried in ascending priority. As soon as a rule matches, lower
    priority rules are not consulted, even if they match later in the text.
    """
    for rule in sorted(rules, key=lambda r: r.priority):
        matches = list(rule.pattern.finditer(body))
        if matches:
            return matches[-1].group(1)
    return None
