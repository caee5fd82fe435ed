from .project_store import Project, ProjectStore, storage_key

__all__ = ["Project", "ProjectStore", "storage_key"]
