from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List

from filmcalc.domain.models import ProjectDocument

logger = logging.getLogger(__name__)


def _slugify(name: str) -> str:
    safe = "".join(c if c.isalnum() or c in ("-", "_") else "-" for c in name.strip())
    safe = "-".join(filter(None, safe.split("-")))
    return safe.lower() or "preset"


def _dump(project: ProjectDocument) -> dict[str, Any]:
    data = project.model_dump(mode="json")
    data["schema_version"] = project.version
    return data


def _load(data: dict[str, Any]) -> ProjectDocument:
    # Future: migrate by data['schema_version'] if needed
    data = dict(data)
    data.pop("schema_version", None)
    return ProjectDocument.model_validate(data)


def project_to_json(project: ProjectDocument) -> str:
    """Serialize stack + range settings as a JSON document."""
    return json.dumps(_dump(project), indent=2)


def project_from_json(text: str) -> ProjectDocument:
    return _load(json.loads(text))


class LocalPresetStore:
    """Filesystem-based project storage (JSON), schema-version aware.

    Projects are stored in ``<base_dir>/<slug>.json``.
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = Path(base_dir or Path.cwd() / "presets").resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def list(self) -> List[str]:
        return sorted(p.stem for p in self.base_dir.glob("*.json"))

    def path_for(self, name: str) -> Path:
        return self.base_dir / f"{_slugify(name)}.json"

    def save(self, name: str, project: ProjectDocument) -> Path:
        path = self.path_for(name)
        with path.open("w", encoding="utf-8") as f:
            json.dump(_dump(project), f, indent=2)
        logger.info("Saved project '%s' to %s", name, path)
        return path

    def load(self, name: str) -> ProjectDocument:
        path = self.path_for(name)
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return _load(data)

    def remove(self, name: str) -> None:
        path = self.path_for(name)
        if path.exists():
            path.unlink()
            logger.info("Removed project '%s' (%s)", name, path)
