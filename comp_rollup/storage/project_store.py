# comp_rollup/storage/project_store.py
"""
Local project storage: a named roster and its budget settings, saved as JSON
under a directory and addressed by project name plus a shared access key.

The storage key is "{project_name}-{access_key}"; files are named by a hash of
that key so the key never appears on disk. Listing returns names and
timestamps only.
"""

import hashlib
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from comp_rollup.config.models import BudgetSettings
from comp_rollup.exceptions import (
    MissingProjectFieldsError,
    ProjectNotFoundError,
    ProjectStoreError,
)
from comp_rollup.state.roster import Roster

logger = logging.getLogger(__name__)


@dataclass
class Project:
    project_name: str
    access_key: str
    roster: Roster = field(default_factory=Roster)
    budget_settings: BudgetSettings = field(default_factory=BudgetSettings)
    last_saved: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        return {
            "projectName": self.project_name,
            "accessKey": self.access_key,
            "employees": self.roster.to_records(),
            "budgetSettings": self.budget_settings.to_record(),
            "lastModified": self.last_saved,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Project":
        return cls(
            project_name=record.get("projectName", ""),
            access_key=record.get("accessKey", ""),
            roster=Roster.from_records(record.get("employees") or []),
            budget_settings=BudgetSettings.model_validate(record.get("budgetSettings") or {}),
            last_saved=record.get("lastModified"),
        )


def storage_key(project_name: str, access_key: str) -> str:
    if not project_name or not access_key:
        raise MissingProjectFieldsError("Missing project name or access key")
    return f"{project_name}-{access_key}"


class ProjectStore:
    """Save, load, delete and list projects under a base directory."""

    def __init__(self, base_dir: Union[Path, str]):
        self.base_dir = Path(base_dir)

    def _path_for(self, project_name: str, access_key: str) -> Path:
        key = storage_key(project_name, access_key)
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.base_dir / f"{digest}.json"

    def save(self, project: Project) -> Project:
        """Write a project, stamping it with the current UTC time."""
        path = self._path_for(project.project_name, project.access_key)
        project.last_saved = datetime.now(timezone.utc).isoformat()
        record = project.to_record()
        logger.info(
            f"[STORE] Saving project '{project.project_name}' "
            f"({len(project.roster)} employees) to {path.name}"
        )
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(".tmp")
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(record, f, indent=2)
            tmp_path.replace(path)
        except OSError as e:
            logger.error(f"[STORE] Failed to save project '{project.project_name}': {e}")
            raise ProjectStoreError(f"Failed to save project '{project.project_name}'") from e
        return project

    def load(self, project_name: str, access_key: str) -> Project:
        path = self._path_for(project_name, access_key)
        if not path.is_file():
            raise ProjectNotFoundError(f"Project not found: {project_name}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                record = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"[STORE] Failed to load project '{project_name}': {e}")
            raise ProjectStoreError(f"Failed to load project '{project_name}'") from e
        try:
            project = Project.from_record(record)
        except ValidationError as e:
            raise ProjectStoreError(f"Invalid budget settings in project '{project_name}'") from e
        logger.info(
            f"[STORE] Loaded project '{project_name}' with {len(project.roster)} employees"
        )
        return project

    def exists(self, project_name: str, access_key: str) -> bool:
        return self._path_for(project_name, access_key).is_file()

    def delete(self, project_name: str, access_key: str) -> None:
        path = self._path_for(project_name, access_key)
        if not path.is_file():
            raise ProjectNotFoundError(f"Project not found: {project_name}")
        path.unlink()
        logger.info(f"[STORE] Deleted project '{project_name}'")

    def list_projects(self) -> List[Dict[str, Any]]:
        """Name, last-modified time and file size of every stored project."""
        if not self.base_dir.is_dir():
            return []
        projects = []
        for path in sorted(self.base_dir.glob("*.json")):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    record = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"[STORE] Skipping unreadable project file {path.name}: {e}")
                continue
            projects.append(
                {
                    "name": record.get("projectName"),
                    "lastModified": record.get("lastModified"),
                    "size": path.stat().st_size,
                    "employeeCount": len(record.get("employees") or []),
                }
            )
        return projects
