from dataclasses import dataclass
from typing import Dict, Optional

from ...services.history.capacity import UNBOUNDED, validate_capacity


@dataclass
class AppSettings:
    """Application settings model."""

    # Theme name (see views.styles.THEMES)
    theme: str = "light"

    # Maximum undo entries per tracked value; None means unbounded
    history_capacity: Optional[int] = None

    def to_dict(self) -> Dict:
        """Convert to a dictionary."""
        return {
            'theme': self.theme,
            'history_capacity': self.history_capacity,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'AppSettings':
        """Create from a dictionary. Raises ValueError on an invalid capacity."""
        capacity = validate_capacity(data.get('history_capacity', cls.history_capacity))
        if capacity == UNBOUNDED:
            capacity = None
        return cls(
            theme=data.get('theme', cls.theme),
            history_capacity=capacity,
        )
