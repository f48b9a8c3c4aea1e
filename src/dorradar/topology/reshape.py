"""Reshape rules: display names, attributes and sizes for raw probe labels.

A rule is looked up by the raw label it was written for. The three resolvers
below are independent on purpose: node identity follows the shaped name,
while attributes and size follow the raw label that created the node.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..core.exceptions import ConfigError

DEFAULT_SIZE = 15


@dataclass(frozen=True)
class ReshapeRule:
    """Display mapping for one raw endpoint label."""

    source: str
    to: str | None = None
    attrs: tuple[str, ...] = ()
    size: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReshapeRule":
        if not isinstance(data, dict) or "from" not in data:
            raise ConfigError("Reshape rule requires a 'from' label", repr(data))
        size = data.get("size")
        if size is not None:
            try:
                size = int(size)
            except (TypeError, ValueError) as e:
                raise ConfigError(f"Invalid size for rule {data['from']!r}", str(e)) from e
        return cls(
            source=str(data["from"]),
            to=str(data["to"]) if data.get("to") is not None else None,
            attrs=tuple(str(a) for a in data.get("attrs") or ()),
            size=size,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"from": self.source}
        if self.to is not None:
            data["to"] = self.to
        if self.attrs:
            data["attrs"] = list(self.attrs)
        if self.size is not None:
            data["size"] = self.size
        return data


def find_rule(rules: Sequence[ReshapeRule], label: str) -> ReshapeRule | None:
    """Return the first rule written for ``label``."""
    for rule in rules:
        if rule.source == label:
            return rule
    return None


def shape_for(rules: Sequence[ReshapeRule], label: str) -> str:
    """Display name for a raw label (the label itself when unmatched)."""
    rule = find_rule(rules, label)
    if rule is None or rule.to is None:
        return label
    return rule.to


def attrs_for(rules: Sequence[ReshapeRule], label: str) -> list[str]:
    rule = find_rule(rules, label)
    if rule is None:
        return []
    return list(rule.attrs)


def size_for(rules: Sequence[ReshapeRule], label: str) -> int:
    rule = find_rule(rules, label)
    if rule is None or rule.size is None:
        return DEFAULT_SIZE
    return rule.size
