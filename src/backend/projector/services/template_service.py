"""Template repository - loads project templates from YAML files."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from projector.models.template import Template
from projector.services.domain_config import DomainConfig

logger = logging.getLogger(__name__)

# Built-in templates shipped with the package
BUILTIN_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"


def load_template_file(path: Path) -> Template:
    """Load and validate a single template YAML file."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Template file {path} must contain a mapping")
    return Template.model_validate(data)


class TemplateRepository:
    """Collection of templates, keyed by name."""

    def __init__(
        self,
        templates: list[Template] | None = None,
        domain_config: DomainConfig | None = None,
    ) -> None:
        self._templates: dict[str, Template] = {}
        self.domain_config = domain_config or DomainConfig()
        for template in templates or []:
            self.add_template(template)

    @classmethod
    def load(
        cls,
        templates_dir: str | Path | None = None,
        domain_config: DomainConfig | None = None,
        include_builtin: bool = True,
    ) -> "TemplateRepository":
        """Build a repository from the built-in templates plus an optional directory.

        Templates in `templates_dir` replace built-ins with the same name.
        Files that fail to parse are skipped with a warning.
        """
        repo = cls(domain_config=domain_config)
        directories = []
        if include_builtin:
            directories.append(BUILTIN_TEMPLATES_DIR)
        if templates_dir:
            directories.append(Path(templates_dir))

        for directory in directories:
            if not directory.is_dir():
                logger.warning("Template directory not found: %s", directory)
                continue
            for path in sorted(directory.glob("*.y*ml")):
                try:
                    repo.add_template(load_template_file(path))
                except (OSError, ValueError, yaml.YAMLError, ValidationError) as e:
                    logger.warning("Skipping invalid template %s: %s", path.name, e)

        logger.debug("Loaded %d templates", len(repo._templates))
        return repo

    def add_template(self, template: Template) -> None:
        if template.name in self._templates:
            logger.info("Template %r replaced", template.name)
        self._templates[template.name] = template

    def get_template(self, name: str) -> Template | None:
        """Get a template by name (exact match first, then case-insensitive)."""
        if name in self._templates:
            return self._templates[name]
        wanted = name.strip().lower()
        for template in self._templates.values():
            if template.name.lower() == wanted:
                return template
        return None

    def all_templates(self) -> list[Template]:
        return list(self._templates.values())

    def templates_by_domain(self, domain: str) -> list[Template]:
        return [t for t in self._templates.values() if t.domain == domain]

    def all_domains(self) -> list[str]:
        return list(self.domain_config.domains)
