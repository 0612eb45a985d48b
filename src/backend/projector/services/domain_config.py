"""Domain list configuration stored as JSON."""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_DOMAINS = [
    "Accounting",
    "Advertising",
    "Aerospace",
    "Agriculture",
    "AI Research",
    "Automotive",
    "Banking",
    "Biotechnology",
    "Cloud Computing",
    "Construction",
    "Consulting",
    "Customer Support",
    "Cybersecurity",
    "Data Analysis",
    "E-commerce",
    "E-learning",
    "Energy",
    "Entertainment",
    "Financial Services",
    "Gaming",
    "Government",
    "Healthcare",
    "Hospitality",
    "Human Resources",
    "Information Technology",
    "Insurance",
    "Journalism",
    "Legal",
    "Logistics",
    "Manufacturing",
    "Marketing",
    "Media",
    "Mental Health",
    "Natural Language Processing",
    "Non-profit",
    "Pharmaceuticals",
    "Public Health",
    "Real Estate",
    "Retail",
    "Robotics",
    "Sales",
    "Software Development",
    "Supply Chain",
    "Telecommunications",
    "Tourism",
    "Transportation",
    "Urban Planning",
]


class DomainConfig(BaseModel):
    """Domains offered to the user when describing a project."""

    domains: list[str] = Field(default_factory=lambda: list(DEFAULT_DOMAINS))

    @staticmethod
    def default_path() -> Path:
        return Path.home() / ".config" / "projector" / "config.json"

    @classmethod
    def load_from_file(cls, path: str | Path) -> "DomainConfig":
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                return cls.model_validate(json.load(f))
        except OSError as e:
            raise ValueError(f"Failed to open config file: {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse config file: {path}: {e}") from e

    @classmethod
    def load_default(cls, path: str | Path | None = None) -> "DomainConfig":
        """Load from `path` (or the default path); defaults if the file is absent."""
        config_path = Path(path) if path else cls.default_path()
        if not config_path.exists():
            logger.debug("No domain config at %s, using defaults", config_path)
            return cls()
        return cls.load_from_file(config_path)

    def save_to_file(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))
