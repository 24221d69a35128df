"""Reformulation templates.

A template is an expression describing a reformulation of a question plus a
score used downstream to rank results that follow from it. The expression may
contain:

* group identifiers ``[n]``, replaced by group ``n`` captured when the
  corresponding question pattern was applied to the question;
* one combined group identifier ``[n1]<[n2]``, resolved by placing group
  ``n2`` between each two words of group ``n1``. One reformulation is created
  for each possible position;
* arbitrary literal text.

Example:
    >>> import re
    >>> m = re.fullmatch(r"who (\\w+) (.+)", "who invented the telephone")
    >>> ReformulationTemplate("[2] was [1] by", 2.0).expand(m)
    ['"the telephone was invented by"']
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

GROUP_RE = re.compile(r"\[(\d*)\]", re.ASCII)
COMBINED_RE = re.compile(r"\[(\d*)\]<\[(\d*)\]", re.ASCII)

CapturedGroups = Union["re.Match[str]", Sequence[Optional[str]]]


class TemplateSyntaxError(ValueError):
    """Raised when a template expression cannot be parsed."""


class InvalidGroupError(LookupError):
    """Raised when an expression references a group that was not captured."""

    def __init__(self, group: int, expression: str):
        super().__init__(f"Group [{group}] referenced by '{expression}' was not captured")
        self.group = group
        self.expression = expression


def combine_strings(s1: str, s2: str) -> List[str]:
    """
    Insert ``s2`` in between each two tokens of ``s1``.

    If ``s1`` consists of n whitespace-delimited tokens, n-1 strings are
    returned, the i-th one having ``s2`` right after token i.
    """
    tokens = s1.split()
    return [" ".join(tokens[:i + 1] + [s2] + tokens[i + 1:])
            for i in range(len(tokens) - 1)]


@dataclass(frozen=True)
class ReformulationTemplate:
    expression: str
    score: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "score", float(self.score))
        for m in GROUP_RE.finditer(self.expression):
            if not m.group(1):
                raise TemplateSyntaxError(
                    f"Empty group identifier '[]' at position {m.start()} in '{self.expression}'"
                )

    def _group(self, groups: CapturedGroups, index: int) -> str:
        try:
            if isinstance(groups, re.Match):
                value = groups.group(index)
            else:
                value = groups[index]
        except (IndexError, KeyError):
            raise InvalidGroupError(index, self.expression) from None
        # Optional groups that did not participate in the match
        if value is None:
            raise InvalidGroupError(index, self.expression)
        return value

    def _eval_groups(self, query: str, groups: CapturedGroups) -> str:
        return GROUP_RE.sub(lambda m: self._group(groups, int(m.group(1))), query)

    def _eval_combined_groups(self, groups: CapturedGroups) -> List[str]:
        m = COMBINED_RE.search(self.expression)
        if m is None:
            return [self._eval_groups(self.expression, groups)]
        s1 = self._group(groups, int(m.group(1)))
        s2 = self._group(groups, int(m.group(2)))
        # Resolve the text around the combined identifier only, so captured
        # text spliced in is never scanned for group identifiers
        parts = [self._eval_groups(p, groups)
                 for p in self.expression.split(m.group(0))]
        return [combined.join(parts) for combined in combine_strings(s1, s2)]

    def group_ids(self) -> List[int]:
        """Group indices referenced by the expression, in order of first use."""
        seen: List[int] = []
        for m in GROUP_RE.finditer(self.expression):
            idx = int(m.group(1))
            if idx not in seen:
                seen.append(idx)
        return seen

    def expand(self, groups: CapturedGroups) -> List[str]:
        """
        Return the reformulations of the question as quoted query strings.

        Args:
            groups: Match object of the question pattern applied to the
                question, or a sequence indexed the same way (0 = whole match)

        Returns:
            Query strings in template order. Empty if a combined group
            identifier refers to a single-word group.

        Raises:
            InvalidGroupError: The expression references a missing group
        """
        return ['"' + q + '"' for q in self._eval_combined_groups(groups)]

    def get_score(self) -> float:
        return self.score
