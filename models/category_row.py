"""
CategoryRow: one line of an interview's score sheet.
Not persisted; it carries a Category together with the value given for it.
"""
from dataclasses import dataclass
from models.category import Category


@dataclass
class CategoryRow:
    category: Category
    value: float = 0.0

    @property
    def name(self) -> str:
        return self.category.name

    def is_scored(self) -> bool:
        # 0.0 means "no score given"
        return self.value != 0
