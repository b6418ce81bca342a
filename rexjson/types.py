from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FieldValue:
    """Values captured for one field, in the order they were accepted.

    A single value is emitted as a scalar; two or more become an array.
    """
    values: list[str] = field(default_factory=list)

    @property
    def is_scalar(self) -> bool:
        return len(self.values) == 1

    def merge(self, value: str, unique: bool = False) -> None:
        """Accept 'value' unless uniqueness is on and it was already seen."""
        if unique and value in self.values:
            return
        self.values.append(value)

    def to_json(self) -> str | list[str]:
        if self.is_scalar:
            return self.values[0]
        return list(self.values)


@dataclass
class ResultRecord:
    """Fields merged from every pattern that matched a single line.

    Field order follows first appearance across patterns.
    """
    fields: dict[str, FieldValue] = field(default_factory=dict)

    def merge(self, name: str, value: str, unique: bool = False) -> None:
        existing = self.fields.get(name)
        if existing is None:
            self.fields[name] = FieldValue([value])
        else:
            existing.merge(value, unique)

    def __len__(self) -> int:
        return len(self.fields)

    def as_mapping(self) -> dict[str, str | list[str]]:
        """Return a JSON-ready mapping of field name to scalar or array."""
        return {name: value.to_json() for name, value in self.fields.items()}
